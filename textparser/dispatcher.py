# -*- coding: utf-8 -*-
"""The :class:`TextParser` is the ingestion pipeline's entrypoint. It
is configured once from a flat option mapping, then called once per
line:

>>> tp = TextParser()
>>> tp.configure({'format': '/^(?<a>\\w+) (?<b>\\w+)$/'})
True
>>> tp.parse('foo bar')
(None, {'a': 'foo', 'b': 'bar'})

The ``format`` option is either an inline ``/pattern/`` with named
groups, or the name of a template in the parser's
:class:`~textparser.registry.TemplateRegistry`.

TextParsers keep a small time cache and are not safe to share across
threads. Use one per worker.
"""

import re

from textparser.common import ConfigError
from textparser.logger import Logger
from textparser.sinks import EmitterSink
from textparser.emitters import StreamEmitter
from textparser.parsers import RegexpParser
from textparser.patterns import compile_pattern
from textparser.registry import TemplateRegistry


DEFAULT_LOGGER_NAME = 'textparser'


def get_stderr_logger(name=DEFAULT_LOGGER_NAME):
    return Logger(name, [EmitterSink(StreamEmitter('stderr'))])


class TextParser(object):
    """
    Args:
        logger: A :class:`~textparser.logger.Logger` for parse
            warnings. Defaults to one writing to stderr.
        registry: The :class:`~textparser.registry.TemplateRegistry`
            used to look up named formats. Defaults to a new registry
            with the built-in formats.
    """
    def __init__(self, logger=None, registry=None):
        self.log = logger if logger is not None else get_stderr_logger()
        self.registry = registry if registry is not None else TemplateRegistry()
        self.parser = None

    def configure(self, conf, required=True):
        """Build the parser selected by ``conf['format']`` and apply
        the rest of *conf* to it. Returns ``True``, or ``None`` if
        there is no format and *required* is false. Raises
        :exc:`~textparser.common.ConfigError` on bad options.
        """
        fmt = conf.get('format')
        if fmt is None:
            if required:
                raise ConfigError("'format' parameter is required")
            return None
        if not isinstance(fmt, str):
            raise ConfigError("expected string 'format', not: %r" % (fmt,))

        if len(fmt) > 1 and fmt[0] == '/' and fmt[-1] == '/':
            pattern_str = fmt[1:-1]
            try:
                regexp = compile_pattern(pattern_str)
            except re.error as re_err:
                raise ConfigError('Invalid regexp %r: %s'
                                  % (pattern_str, re_err))
            if not regexp.groupindex:
                raise ConfigError('Invalid regexp %r: no named captures'
                                  % pattern_str)
            parser = RegexpParser(regexp)
        else:
            factory = self.registry.resolve(fmt)
            if factory is None:
                raise ConfigError('Unknown format template %r' % fmt)
            parser = factory()

        parser.log = self.log
        parser.configure(conf)
        self.parser = parser
        return True

    def parse_result(self, text):
        if self.parser is None:
            raise RuntimeError('%s.configure() must be called before'
                               ' parsing' % self.__class__.__name__)
        return self.parser.parse_result(text)

    def parse(self, text):
        "Returns ``(time, record)``, where ``(None, None)`` is a failure."
        return self.parse_result(text).as_tuple()

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s parser=%r>' % (cn, self.parser)
