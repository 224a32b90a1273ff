# -*- coding: utf-8 -*-
"""Types shared by every format parser: the per-line
:class:`ParseResult` and the setup-time :class:`ConfigError`.
"""


SUCCESS = 'success'
NO_MATCH = 'no_match'
DECODE_FAILURE = 'decode_failure'
TIME_FAILURE = 'time_failure'
FALLBACK = 'fallback'
STATUSES = (SUCCESS, NO_MATCH, DECODE_FAILURE, TIME_FAILURE, FALLBACK)


class ConfigError(ValueError):
    "Raised while configuring a parser, never while parsing a line."


class ParseResult(object):
    """The outcome of parsing a single line.

    Args:
        status (str): One of ``success``, ``no_match``,
            ``decode_failure``, ``time_failure``, or ``fallback``.
        time (int): Epoch seconds extracted from the record, or
            ``None``.
        record (dict): The structured fields, or ``None`` when the
            line could not be structured at all.

    A ``time_failure`` result still carries a usable record, with the
    raw time value left in place. :meth:`as_tuple` gives the
    ``(time, record)`` pair handed back to ingestion pipelines, where
    ``(None, None)`` means the line should be dropped.
    """
    __slots__ = ('status', 'time', 'record')

    def __init__(self, status, time=None, record=None):
        if status not in STATUSES:
            raise ValueError('expected status in %r, not %r'
                             % (STATUSES, status))
        self.status = status
        self.time = time
        self.record = record

    @property
    def ok(self):
        return self.record is not None

    def as_tuple(self):
        return (self.time, self.record)

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return ((self.status, self.time, self.record)
                == (other.status, other.time, other.record))

    def __ne__(self, other):
        ret = self.__eq__(other)
        if ret is NotImplemented:
            return ret
        return not ret

    __hash__ = None

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s %s time=%r record=%r>' % (cn, self.status,
                                               self.time, self.record)
