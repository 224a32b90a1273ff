# -*- coding: utf-8 -*-
"""Turning a record's raw time value into integer epoch seconds.

Consecutive log lines very often share the exact same time string, so
each parser keeps a :class:`TimeCache` of the last two conversions and
skips ``strptime``/``dateutil`` work on repeats.
"""

import re
import datetime
from collections import deque

from boltons.timeutils import LocalTZ, dt_to_timestamp
from dateutil import parser as dateutil_parser

from textparser.common import ParseResult, SUCCESS, TIME_FAILURE


DEFAULT_CACHE_SIZE = 2
_YEAR_DIRECTIVES = ('%Y', '%y', '%G')

# what strptime, dateutil, and datetime arithmetic raise on bad input
TIME_ERRORS = (ValueError, TypeError, OverflowError, re.error)


class TimeCache(object):
    """A fixed-capacity map of raw time values to epoch seconds.

    Lookups never reorder entries. When full, adding evicts the least
    recently inserted entry. With the default capacity of two,
    :attr:`slot_a` is the older entry and :attr:`slot_b` the newer.
    """
    def __init__(self, max_size=DEFAULT_CACHE_SIZE):
        if max_size < 1:
            raise ValueError('expected max_size >= 1, not %r' % max_size)
        self._entries = deque(maxlen=max_size)
        self.hit_count = self.miss_count = 0

    @property
    def max_size(self):
        return self._entries.maxlen

    @property
    def slot_a(self):
        "The least recently inserted (key, value) pair, or None."
        if len(self._entries) < self.max_size:
            return None
        return self._entries[0]

    @property
    def slot_b(self):
        "The most recently inserted (key, value) pair, or None."
        return self._entries[-1] if self._entries else None

    def get(self, key, default=None):
        for entry_key, value in self._entries:
            if entry_key == key:
                self.hit_count += 1
                return value
        self.miss_count += 1
        return default

    def add(self, key, value):
        self._entries.append((key, value))

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return any(entry_key == key for entry_key, _ in self._entries)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s max_size=%r entries=%r hits=%r misses=%r>'
                % (cn, self.max_size, list(self._entries),
                   self.hit_count, self.miss_count))


def _strptime(value, time_format):
    if not any(d in time_format for d in _YEAR_DIRECTIVES):
        # formats like syslog's "%b %d %H:%M:%S" imply the current year
        year = datetime.datetime.now().year
        try:
            return datetime.datetime.strptime('%04d %s' % (year, value),
                                              '%Y ' + time_format)
        except re.error:
            pass  # year implied by another directive, e.g. %c
    return datetime.datetime.strptime(value, time_format)


def to_timestamp(value, time_format=None):
    """Convert the time string *value* to integer epoch seconds, with
    ``strptime`` when *time_format* is set, or free-form with
    :func:`dateutil.parser.parse` otherwise. Times without an offset
    are taken to be local. Raises one of :data:`TIME_ERRORS` on
    failure.
    """
    if not isinstance(value, str):
        raise TypeError('expected time string, not %r' % (value,))
    if time_format:
        dt = _strptime(value, time_format)
    else:
        dt = dateutil_parser.parse(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=LocalTZ)
    return int(dt_to_timestamp(dt))


def extract_time(record, time_key, time_format=None, enabled=True,
                 cache=None, log=None):
    """Pop *time_key* out of *record* and convert it, returning a
    :class:`~textparser.common.ParseResult` with status ``success`` or
    ``time_failure``.

    On failure the raw value is put back into the record, so the line
    is never silently lost, and a ``time_parse`` warning is published
    to *log*. A missing *time_key* is not a failure; the result simply
    has no time.
    """
    if not enabled or time_key not in record:
        return ParseResult(SUCCESS, None, record)

    value = record.pop(time_key)
    if value is None:
        return ParseResult(SUCCESS, None, record)

    if cache is not None:
        cached = cache.get(value)
        if cached is not None:
            return ParseResult(SUCCESS, cached, record)

    try:
        timestamp = to_timestamp(value, time_format)
    except TIME_ERRORS:
        if log is not None:
            log.warn('time_parse', 'failed to parse time',
                     key=time_key, value=value)
        record[time_key] = value
        return ParseResult(TIME_FAILURE, None, record)

    if cache is not None:
        cache.add(value, timestamp)
    return ParseResult(SUCCESS, timestamp, record)
