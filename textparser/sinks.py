# -*- coding: utf-8 -*-

import json
import datetime
from collections import deque

from boltons.timeutils import UTC, LocalTZ
from boltons.cacheutils import ThresholdCounter as TCounter


DEFAULT_FORMAT = ('{iso_time} - {logger_name} - {event_name}'
                  ' - {message} - {data_map}')


def timestamp2iso8601(timestamp, local=False, tformat=None):
    tformat = tformat or '%Y-%m-%dT%H:%M:%S.%f%z'
    if local:
        dt = datetime.datetime.fromtimestamp(timestamp, tz=LocalTZ)
    else:
        dt = datetime.datetime.fromtimestamp(timestamp, tz=UTC)
    return dt.strftime(tformat)


def _get_field_map(event):
    return {'iso_time': timestamp2iso8601(event.etime),
            'iso_time_local': timestamp2iso8601(event.etime, local=True),
            'logger_name': event.logger.name,
            'event_name': event.name,
            'message': event.message,
            'data_map': json.dumps(event.data_map, sort_keys=True,
                                   default=repr)}


class AggregateSink(object):
    "A simple sink that just aggregates the warnings."
    def __init__(self, limit=None):
        self._limit = limit
        self.warn_events = deque(maxlen=limit)

    def on_warn(self, warn_event):
        self.warn_events.append(warn_event)

    def clear(self):
        self.warn_events.clear()

    def __repr__(self):
        cn = self.__class__.__name__
        args = (cn, self._limit, len(self.warn_events))
        return '<%s limit=%r warns=%r>' % args


class CounterSink(object):
    """Counts warnings per logger, keyed by event name by default. Rare
    keys are tracked approximately, see
    :class:`boltons.cacheutils.ThresholdCounter`.
    """
    def __init__(self, getter=None, threshold=0.001):
        if getter is None:
            getter = lambda warn_event: warn_event.name
        if not callable(getter):
            raise TypeError('expected callable getter, not %r' % (getter,))

        self.getter = getter
        self.threshold = threshold
        self.counter_map = {}

    def on_warn(self, warn_event):
        ev, ctr_map = warn_event, self.counter_map
        try:
            counter = ctr_map[ev.logger]
        except KeyError:
            counter = ctr_map[ev.logger] = TCounter(self.threshold)

        counter.add(self.getter(ev))
        return

    def to_dict(self):
        ret = {}
        for logger, counter in self.counter_map.items():
            ret[logger.name] = cur = dict(counter)
            uncommon_count = counter.get_uncommon_count()
            if uncommon_count:
                cur['__missing__'] = uncommon_count
            cur['__all__'] = sum(cur.values())
        return ret

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s threshold=%r loggers=%r>' % (cn, self.threshold,
                                                  len(self.counter_map))


class EmitterSink(object):
    """Renders each warning with a ``str.format`` template and hands the
    text to an emitter. Available fields are ``iso_time``,
    ``iso_time_local``, ``logger_name``, ``event_name``, ``message``,
    and ``data_map`` (JSON).
    """
    def __init__(self, emitter, fmt=DEFAULT_FORMAT):
        if not callable(getattr(emitter, 'on_warn', None)):
            raise TypeError('expected emitter with callable on_warn(),'
                            ' not %r' % (emitter,))
        self.emitter = emitter
        self.fmt = fmt

    def format(self, warn_event):
        return self.fmt.format(**_get_field_map(warn_event))

    def on_warn(self, warn_event):
        entry = self.format(warn_event)
        return self.emitter.on_warn(warn_event, entry)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s fmt=%r emitter=%r>' % (cn, self.fmt, self.emitter)
