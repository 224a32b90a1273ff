# -*- coding: utf-8 -*-
"""The format parsers. Each turns one line of text into a
:class:`~textparser.common.ParseResult`, and shares the time
extraction and caching behavior of :class:`GenericParser`.

Parsers can be used directly, configured with keyword arguments:

>>> parser = TSVParser(keys='host,time,path', time_parse=False)
>>> parser.parse('example.com\\t-\\t/index.html')
(None, {'host': 'example.com', 'time': '-', 'path': '/index.html'})

Usually they are built by name through a
:class:`~textparser.registry.TemplateRegistry` and driven by a
:class:`~textparser.dispatcher.TextParser`.
"""

import re
import csv
import json
import time

from textparser.logger import Logger
from textparser.common import (ConfigError, ParseResult, NO_MATCH,
                               DECODE_FAILURE, FALLBACK)
from textparser.config import Configurable, ConfigParam, to_bool, to_list
from textparser.patterns import APACHE_RE, ACCESS_LOG_TIME_FORMAT
from textparser.timeparse import TimeCache, extract_time


FALLBACK_TIME_FORMAT = '%Y-%m-%d %H:%M:%S %z'

_LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')


def _to_int(text):
    "Lenient integer conversion; text without leading digits is 0."
    match = _LEADING_INT_RE.match(text or '')
    return int(match.group(1)) if match else 0


def _none_if_dash(text):
    return None if text == '-' else text


class GenericParser(Configurable):
    config_params = (ConfigParam('time_key', default='time'),
                     ConfigParam('time_format'),
                     ConfigParam('time_parse', to_bool, default=True),
                     ConfigParam('suppress_parse_error_log', to_bool,
                                 default=False))

    def __init__(self, **kwargs):
        super(GenericParser, self).__init__()
        self.time_cache = TimeCache()
        self.log = Logger(self.__class__.__name__)
        if kwargs:
            self.configure(kwargs)

    def configure(self, conf):
        super(GenericParser, self).configure(conf)
        # cached epochs depend on time_format
        self.time_cache.clear()
        return self

    def parse_time(self, record):
        return extract_time(record, self.time_key,
                            time_format=self.time_format,
                            enabled=self.time_parse,
                            cache=self.time_cache,
                            log=self.log)

    def warn_parse_error(self, name, message, *a, **kw):
        if not self.suppress_parse_error_log:
            self.log.warn(name, message, *a, **kw)

    def parse_result(self, text):
        raise NotImplementedError()

    def parse(self, text):
        "Returns ``(time, record)``, where ``(None, None)`` is a failure."
        return self.parse_result(text).as_tuple()

    __call__ = parse

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s time_key=%r time_format=%r>' % (cn, self.time_key,
                                                    self.time_format)


class RegexpParser(GenericParser):
    """Builds records from the named groups of *regexp*. Groups which
    did not participate in the match, or matched the empty string, are
    left out of the record.

    With ``emit_parse_failures`` enabled, unmatched lines produce a
    fallback record with the current time and the raw line as
    ``message``, instead of ``(None, None)``.
    """
    config_params = (ConfigParam('emit_parse_failures', to_bool,
                                 default=False),)

    def __init__(self, regexp, **kwargs):
        self.regexp = regexp
        super(RegexpParser, self).__init__(**kwargs)

    def parse_result(self, text):
        match = self.regexp.search(text)
        if match is None:
            self.warn_parse_error('pattern_not_match',
                                  'pattern not match: {line!r}', line=text)
            if not self.emit_parse_failures:
                return ParseResult(NO_MATCH)
            # always keyed 'time', whatever time_key is
            record = {'time': time.strftime(FALLBACK_TIME_FORMAT),
                      'message': text}
            result = self.parse_time(record)
            result.status = FALLBACK
            return result

        record = dict([(name, value) for name, value
                       in match.groupdict().items() if value])
        return self.parse_time(record)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s regexp=%r time_format=%r>' % (cn, self.regexp.pattern,
                                                  self.time_format)


class ApacheParser(GenericParser):
    "A fixed-schema parser for the apache combined access log."

    def __init__(self, **kwargs):
        super(ApacheParser, self).__init__()
        self.time_key = 'time'
        self.time_format = ACCESS_LOG_TIME_FORMAT
        if kwargs:
            self.configure(kwargs)

    def parse_result(self, text):
        match = APACHE_RE.search(text)
        if match is None:
            self.warn_parse_error('pattern_not_match',
                                  'pattern not match: {line!r}', line=text)
            return ParseResult(NO_MATCH)

        code = _to_int(match.group('code')) or None
        size = match.group('size')
        size = None if size == '-' else _to_int(size)

        record = {'time': match.group('time'),
                  'host': _none_if_dash(match.group('host')),
                  'user': _none_if_dash(match.group('user')),
                  'method': match.group('method'),
                  'path': match.group('path'),
                  'code': code,
                  'size': size,
                  'referer': _none_if_dash(match.group('referer')),
                  'agent': _none_if_dash(match.group('agent'))}
        return self.parse_time(record)


class JSONParser(GenericParser):
    "Parses lines holding a single JSON object."

    def parse_result(self, text):
        try:
            record = json.loads(text)
        except (ValueError, RecursionError) as ve:
            self.warn_parse_error('json_decode',
                                  'pattern not match(json): {line!r}: {error}',
                                  line=text, error=ve)
            return ParseResult(DECODE_FAILURE)
        if not isinstance(record, dict):
            self.warn_parse_error('json_decode',
                                  'pattern not match(json): {line!r}:'
                                  ' expected object', line=text)
            return ParseResult(DECODE_FAILURE)
        return self.parse_time(record)


class LabeledTSVParser(GenericParser):
    """Parses tab-separated ``label:value`` fields. Only the first colon
    separates, and a field without one maps its label to ``None``.
    """
    def parse_result(self, text):
        record = {}
        for field in text.split('\t'):
            if not field:
                continue
            label, sep, value = field.partition(':')
            record[label] = value if sep else None
        return self.parse_time(record)


class ValuesParser(GenericParser):
    """Base for positional formats. Values pair up with ``keys`` by
    position: extra values are dropped, and keys past the last value
    are set to ``None``.
    """
    config_params = (ConfigParam('keys', to_list, required=True),)

    def values_map(self, values):
        values = list(values)
        ret = {}
        for i, key in enumerate(self.keys):
            ret[key] = values[i] if i < len(values) else None
        return ret


class TSVParser(ValuesParser):
    "Trailing empty fields are dropped before values pair up with keys."
    config_params = (ConfigParam('delimiter', default='\t'),)

    def configure(self, conf):
        super(TSVParser, self).configure(conf)
        if not self.delimiter:
            raise ConfigError("'delimiter' parameter must not be empty")
        return self

    def parse_result(self, text):
        values = text.split(self.delimiter)
        while values and not values[-1]:
            values.pop()
        return self.parse_time(self.values_map(values))


class CSVParser(ValuesParser):
    def parse_result(self, text):
        try:
            values = next(csv.reader([text], strict=True), [])
        except csv.Error as ce:
            self.warn_parse_error('csv_decode',
                                  'pattern not match(csv): {line!r}: {error}',
                                  line=text, error=ce)
            return ParseResult(DECODE_FAILURE)
        return self.parse_time(self.values_map(values))
