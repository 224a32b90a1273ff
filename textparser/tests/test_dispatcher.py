# -*- coding: utf-8 -*-

import re

import pytest

from textparser import TextParser, TemplateRegistry, ConfigError
from textparser.common import NO_MATCH
from textparser.logger import Logger
from textparser.parsers import RegexpParser, TSVParser, ApacheParser
from textparser.sinks import AggregateSink, CounterSink


APACHE_LINE = ('10.0.0.1 - - [10/Oct/2020:13:55:36 +0000]'
               ' "GET /x HTTP/1.1" 200 512 "-" "-"')


def _get_text_parser(registry=None):
    logger = Logger('test_dispatcher', [AggregateSink()])
    return TextParser(logger, registry=registry)


def test_inline_pattern():
    tp = _get_text_parser()
    assert tp.configure({'format': r'/^(?<a>\w+) (?<b>\w+)$/'}) is True
    assert isinstance(tp.parser, RegexpParser)
    assert tp.parse('foo bar') == (None, {'a': 'foo', 'b': 'bar'})
    assert tp.parse('foo') == (None, None)


def test_inline_pattern_python_groups():
    tp = _get_text_parser()
    tp.configure({'format': r'/^(?P<a>\w+)(?<=o) (?P<b>\w+)$/'})
    assert tp.parse('foo bar') == (None, {'a': 'foo', 'b': 'bar'})
    assert tp.parse('fab bar') == (None, None)


def test_inline_pattern_without_named_groups():
    tp = _get_text_parser()
    with pytest.raises(ConfigError) as exc_info:
        tp.configure({'format': r'/^(\w+) (\w+)$/'})
    assert 'no named captures' in str(exc_info.value)
    assert tp.parser is None


def test_inline_pattern_invalid():
    tp = _get_text_parser()
    with pytest.raises(ConfigError):
        tp.configure({'format': '/^(?<a>\\w+/'})


def test_missing_format():
    tp = _get_text_parser()
    with pytest.raises(ConfigError):
        tp.configure({'time_key': 'ts'})
    assert tp.configure({'time_key': 'ts'}, required=False) is None


def test_unknown_format():
    tp = _get_text_parser()
    try:
        tp.configure({'format': 'yaml'})
    except ConfigError as ce:
        assert 'yaml' in str(ce)
    else:
        assert False, 'should have raised ConfigError'


def test_non_string_format():
    with pytest.raises(ConfigError):
        _get_text_parser().configure({'format': 42})


def test_parse_before_configure():
    with pytest.raises(RuntimeError):
        _get_text_parser().parse('anything')


def test_apache2():
    tp = _get_text_parser()
    tp.configure({'format': 'apache2'})
    tstamp, record = tp.parse(APACHE_LINE)
    assert tstamp == 1602338136
    assert record['host'] == '10.0.0.1'
    assert record['user'] is None
    assert record['code'] == 200
    assert record['size'] == 512
    assert record['referer'] is None
    assert record['agent'] is None


def test_options_reach_parser():
    tp = _get_text_parser()
    tp.configure({'format': 'tsv', 'keys': 'a,b,c', 'delimiter': ','})
    assert isinstance(tp.parser, TSVParser)
    assert tp.parse('1,2,3') == (None, {'a': '1', 'b': '2', 'c': '3'})

    tp.configure({'format': 'tsv', 'keys': 'a,b,c'})
    assert tp.parse('1\t2\t3') == (None, {'a': '1', 'b': '2', 'c': '3'})


def test_tsv_requires_keys():
    tp = _get_text_parser()
    with pytest.raises(ConfigError):
        tp.configure({'format': 'csv'})


def test_template_time_format_survives():
    tp = _get_text_parser()
    tp.configure({'format': 'apache', 'time_key': 'time'})
    assert tp.parser.time_format == '%d/%b/%Y:%H:%M:%S %z'
    assert tp.parse(APACHE_LINE)[0] == 1602338136

    tp.configure({'format': 'apache', 'time_parse': 'false'})
    tstamp, record = tp.parse(APACHE_LINE)
    assert tstamp is None
    assert record['time'] == '10/Oct/2020:13:55:36 +0000'


def test_bad_option_value():
    tp = _get_text_parser()
    with pytest.raises(ConfigError):
        tp.configure({'format': 'json', 'time_parse': 'maybe'})


def test_logger_is_wired():
    csink = CounterSink()
    tp = TextParser(Logger('wired', [csink]))
    tp.configure({'format': 'json'})
    assert tp.parser.log is tp.log

    tp.parse('{nope')
    tp.parse('{"time": "never"}')
    tp.parse('{"time": "never"}')
    assert csink.to_dict() == {'wired': {'json_decode': 1,
                                         'time_parse': 2,
                                         '__all__': 3}}


def test_suppressed_log_via_options():
    tp = _get_text_parser()
    tp.configure({'format': 'apache2', 'suppress_parse_error_log': 'true'})
    result = tp.parse_result('not an access log line')
    assert result.status == NO_MATCH
    assert len(tp.log.sinks[0].warn_events) == 0


def test_emit_parse_failures_via_options():
    tp = _get_text_parser()
    tp.configure({'format': r'/^(?<a>\d+)$/', 'emit_parse_failures': 'yes'})
    tstamp, record = tp.parse('abc')
    assert tstamp is not None
    assert record == {'message': 'abc'}


def test_registered_template_matches_factory():
    registry = TemplateRegistry()
    regexp = re.compile(r'^(?P<time>\S+) \[(?P<level>\w+)\] (?P<msg>.*)$')
    registry.register('bracketed', regexp, '%Y-%m-%dT%H:%M:%SZ')

    tp = _get_text_parser(registry=registry)
    tp.configure({'format': 'bracketed'})
    direct = registry.resolve('bracketed')()

    for line in ('2020-10-10T13:55:36Z [INFO] up',
                 '2020-10-10T13:55:36Z [WARN] disk 91% full',
                 'not-a-time [INFO] up',
                 'no brackets here'):
        assert tp.parse(line) == direct.parse(line)


def test_separate_registries():
    custom = TemplateRegistry(builtins=False)
    custom.register('apache2', ApacheParser)
    tp = _get_text_parser(registry=custom)
    with pytest.raises(ConfigError):
        tp.configure({'format': 'json'})
    assert 'custom' not in TemplateRegistry()
