# -*- coding: utf-8 -*-
"""Emitters take a warning already rendered to *text-form* and write
it somewhere, such as stderr or an in-memory buffer.
"""

import io
import os
import sys
import codecs
from collections import deque


stream_types = (io.BytesIO, io.BufferedWriter, io.RawIOBase)


def check_encoding_settings(encoding, errors):
    "Raises LookupError for unknown codecs or error handlers."
    codecs.lookup(encoding)
    codecs.lookup_error(errors)


class AggregateEmitter(object):
    def __init__(self, limit=None):
        self._limit = limit
        self.items = deque(maxlen=limit)

    def get_entries(self):
        return [entry for event, entry in self.items]

    def get_entry(self, idx):
        return self.items[idx][1]

    def clear(self):
        self.items.clear()

    def emit_entry(self, event, entry):
        self.items.append((event, entry))

    on_warn = emit_entry

    def __repr__(self):
        cn = self.__class__.__name__
        args = (cn, self._limit, len(self.items))
        return '<%s limit=%r entry_count=%r>' % args


class StreamEmitter(object):
    '''Writes encoded entries to a binary stream, or to the console
    with the shortcut values ``"stdout"`` and ``"stderr"``.
    '''
    def __init__(self, stream, encoding=None, **kwargs):
        if encoding is None:
            encoding = getattr(stream, 'encoding', None) or 'UTF-8'
        errors = kwargs.pop('errors', 'backslashreplace')

        check_encoding_settings(encoding, errors)  # raises on error

        if stream in ('stdout', 'stderr'):
            stream = getattr(sys, stream).buffer

        if not isinstance(stream, stream_types):
            st_names = ', '.join([st.__name__ for st in stream_types])
            raise TypeError('%s expected instance of %s, or shortcut'
                            ' values "stderr" or "stdout", not: %r'
                            % (self.__class__.__name__, st_names, stream))
        _mode = getattr(stream, 'mode', None)
        if _mode and 'b' not in _mode:
            raise ValueError('expected stream opened in binary mode,'
                             ' not: %r (mode %s)' % (stream, _mode))
        self.stream = stream

        self.sep = kwargs.pop('sep', None)
        if self.sep is None:
            self.sep = os.linesep
        if isinstance(self.sep, str):
            self.sep = self.sep.encode(encoding)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs))
        self.errors = errors
        self.encoding = encoding

    def emit_entry(self, event, entry):
        entry = entry.encode(self.encoding, self.errors)
        self.stream.write(entry + self.sep if self.sep else entry)
        self.flush()

    on_warn = emit_entry

    def flush(self):
        stream_flush = getattr(self.stream, 'flush', None)
        if callable(stream_flush):
            stream_flush()

    def __repr__(self):
        return '<%s stream=%r>' % (self.__class__.__name__, self.stream)
