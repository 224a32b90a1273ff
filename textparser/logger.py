# -*- coding: utf-8 -*-
"""The :class:`Logger` receives diagnostic warnings from parsers and
publishes them to :term:`sinks <sink>`. Parsing itself never raises on
bad input, so these warnings are the only record of lines that failed
to match, decode, or yield a timestamp.

Sinks are duck-typed: any object with an ``on_warn(event)`` method can
be added.
"""

import time
import itertools


_LOG_ID_ITER = itertools.count()
_EVENT_ID_ITER = itertools.count()


class WarnEvent(object):
    """A single diagnostic warning.

    Args:
        logger: The Logger which published the event.
        name (str): A short, stable label for the kind of warning,
            e.g., ``pattern_not_match``. Useful for counting.
        etime (float): Creation time, as from :func:`time.time`.
        raw_message (str): Message template, formatted lazily with
            ``str.format`` using *fargs* and *data*.
        fargs (tuple): Positional format arguments.
        data (dict): Structured data attached to the warning, also
            available as keyword format arguments.
    """
    _message = None

    def __init__(self, logger, name, etime, raw_message, fargs=(), data=None):
        self.event_id = next(_EVENT_ID_ITER)
        self.logger = logger
        self.name = name
        self.etime = etime
        self.raw_message = raw_message
        self.fargs = fargs
        self.data_map = data or {}

    @property
    def message(self):
        if self._message is not None:
            return self._message
        raw_message = self.raw_message
        if raw_message is None:
            self._message = ''
        elif '{' not in raw_message:  # no templating, bypass
            self._message = raw_message
        else:
            try:
                self._message = raw_message.format(*self.fargs,
                                                   **self.data_map)
            except Exception:
                self._message = raw_message
        return self._message

    def __getitem__(self, key):
        return self.data_map[key]

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s %s %r %r>' % (cn, self.event_id, self.name,
                                  self.raw_message)


class Logger(object):
    """Publishes :class:`WarnEvent` instances to sinks.

    Args:
        name (str): Name of this Logger.
        sinks (list): Sink objects to attach. Defaults to ``[]``.
            Sinks can be added later with :meth:`Logger.add_sink`.

    A Logger with no sinks silently discards warnings.
    """

    event_type = WarnEvent
    "Override *event_type* in subtypes for custom event behavior."

    def __init__(self, name, sinks=None):
        self.logger_id = next(_LOG_ID_ITER)
        self.name = name
        self.set_sinks(sinks)

    @property
    def sinks(self):
        """A copy of all sinks set on this Logger.
        Set sinks with :meth:`Logger.set_sinks`.
        """
        return list(self._all_sinks)

    def set_sinks(self, sinks):
        "Replace this Logger's sinks with *sinks*."
        sinks = sinks or []
        self._all_sinks = []
        self._warn_hooks = []
        for s in sinks:
            self.add_sink(s)

    def clear_sinks(self):
        "Clear this Logger's sinks."
        self.set_sinks([])

    def add_sink(self, sink):
        """Add *sink* to this Logger's sinks. Does nothing if *sink* is
        already in this Logger's sinks.
        """
        if sink in self._all_sinks:
            return
        warn_hook = getattr(sink, 'on_warn', None)
        if not callable(warn_hook):
            raise TypeError('expected sink with callable on_warn(),'
                            ' not %r' % (sink,))
        self._warn_hooks.append(warn_hook)
        self._all_sinks.append(sink)

    def warn(self, name, message, *a, **kw):
        """Create a :class:`WarnEvent` named *name* and publish it to
        all sinks. Keyword arguments become the event's ``data_map``.
        """
        event = self.event_type(self, name, time.time(), message, a, kw)
        for warn_hook in self._warn_hooks:
            warn_hook(event)
        return event

    def __repr__(self):
        cn = self.__class__.__name__
        try:
            return '<%s name=%r sinks=%r>' % (cn, self.name, self.sinks)
        except Exception:
            return object.__repr__(self)
