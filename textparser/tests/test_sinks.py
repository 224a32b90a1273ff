# -*- coding: utf-8 -*-

import io
import json

from textparser.logger import Logger, WarnEvent
from textparser.sinks import AggregateSink, CounterSink, EmitterSink
from textparser.emitters import StreamEmitter, AggregateEmitter


def test_logger_warn():
    acc = AggregateSink()
    log = Logger('test_logger', [acc])
    event = log.warn('pattern_not_match', 'pattern not match: {line!r}',
                     line='x y')
    assert isinstance(event, WarnEvent)
    assert acc.warn_events[-1] is event
    assert event.message == "pattern not match: 'x y'"
    assert event['line'] == 'x y'
    assert event.logger is log
    assert 'warns=1' in repr(acc)
    assert '<Logger' in repr(log)


def test_message_formatting_fallbacks():
    log = Logger('test_logger')
    assert log.warn('plain', 'no templating').message == 'no templating'
    assert log.warn('pos', 'got {} and {}', 1, 2).message == 'got 1 and 2'
    assert log.warn('missing', 'needs {absent}').message == 'needs {absent}'
    assert log.warn('none', None).message == ''


def test_dup_sink():
    log = Logger('test_logger')
    agg_sink = AggregateSink()

    log.add_sink(agg_sink)
    log.add_sink(agg_sink)
    assert len(log.sinks) == 1

    log.clear_sinks()
    assert log.sinks == []


def test_bad_sink():
    log = Logger('test_logger')
    try:
        log.add_sink(object())
    except TypeError:
        assert True
    else:
        assert False, 'expected TypeError for sink without on_warn'


def test_aggregate_limit():
    acc = AggregateSink(limit=3)
    log = Logger('test_logger', [acc])
    for i in range(10):
        log.warn('w', 'warning {i}', i=i)
    assert [e.message for e in acc.warn_events] == ['warning 7',
                                                    'warning 8',
                                                    'warning 9']
    acc.clear()
    assert not acc.warn_events


def test_counter_sink():
    csink = CounterSink()
    log = Logger('ctr_log', [csink])
    log.warn('time_parse', 'failed to parse time')

    for i in range(1000):
        log.warn('pattern_not_match', 'pattern not match')

    assert csink.counter_map[log]['pattern_not_match'] == 1000
    assert csink.counter_map[log].get('time_parse') == 0

    cdict = csink.to_dict()
    assert cdict == {'ctr_log': {'pattern_not_match': 1000,
                                 '__all__': 1001,
                                 '__missing__': 1}}


def test_counter_sink_getter():
    csink = CounterSink(getter=lambda ev: ev.data_map.get('key'))
    log = Logger('ctr_log', [csink])
    log.warn('time_parse', 'failed', key='time')
    log.warn('time_parse', 'failed', key='ts')
    log.warn('time_parse', 'failed', key='ts')
    assert csink.to_dict()['ctr_log']['ts'] == 2


def test_emitter_sink_aggregate():
    aggr_emtr = AggregateEmitter()
    sink = EmitterSink(aggr_emtr, fmt='{event_name}: {message} {data_map}')
    log = Logger('test_emit', [sink])
    log.warn('time_parse', 'failed to parse time', key='time', value='x')

    assert aggr_emtr.get_entry(-1) == ('time_parse: failed to parse time'
                                      ' {"key": "time", "value": "x"}')
    assert 'entry_count=1' in repr(aggr_emtr)
    aggr_emtr.clear()
    assert not aggr_emtr.get_entries()


def test_emitter_sink_default_format():
    aggr_emtr = AggregateEmitter()
    log = Logger('test_emit', [EmitterSink(aggr_emtr)])
    log.warn('json_decode', 'bad json', line=b'\xff')
    entry = aggr_emtr.get_entry(0)
    assert ' - test_emit - json_decode - bad json - ' in entry
    assert entry[:4].isdigit() and 'T' in entry.split(' ')[0]


def test_stream_emitter():
    stream = io.BytesIO()
    emitter = StreamEmitter(stream, encoding='utf8', sep='\n')
    log = Logger('test_stream', [EmitterSink(emitter, fmt='{data_map}')])
    for i in range(201):
        log.warn('w', 'warning', word=u'yäy%s' % i)

    lines = stream.getvalue().decode('utf8').splitlines()
    assert len(lines) == 201
    assert json.loads(lines[0]) == {'word': u'yäy0'}
    assert json.loads(lines[-1]) == {'word': u'yäy200'}


def test_stream_emitter_errors():
    for kwargs in ({'encoding': 'nope'}, {'errors': 'badvalue'}):
        try:
            StreamEmitter('stderr', **kwargs)
        except LookupError:
            assert True
        else:
            assert False

    try:
        StreamEmitter(io.StringIO())
    except TypeError:
        assert True
    else:
        assert False


def test_emitter_sink_requires_emitter():
    try:
        EmitterSink(object())
    except TypeError:
        assert True
    else:
        assert False
