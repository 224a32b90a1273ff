# -*- coding: utf-8 -*-
"""The :class:`TemplateRegistry` maps format names to parser
factories. Each :class:`~textparser.dispatcher.TextParser` resolves its
``format`` option against a registry, so applications can add their
own formats next to the built-ins:

>>> registry = TemplateRegistry()
>>> registry.register('kv', re.compile(r'^(?P<key>\\w+)=(?P<value>.*)$'))
>>> registry.build('kv').parse('user=alice')
(None, {'key': 'user', 'value': 'alice'})
"""

import re

from textparser.parsers import (RegexpParser, ApacheParser, JSONParser,
                                CSVParser, TSVParser, LabeledTSVParser)
from textparser.patterns import (APACHE_RE, NGINX_RE, SYSLOG_RE,
                                 ACCESS_LOG_TIME_FORMAT, SYSLOG_TIME_FORMAT)


Pattern = type(re.compile(''))


def _get_regexp_factory(regexp, time_format):
    def build_regexp_parser():
        return RegexpParser(regexp, time_format=time_format)
    return build_regexp_parser


class TemplateRegistry(object):
    """Registered formats are zero-argument factories, each call
    returning a new parser with its own time cache.

    Args:
        templates (dict): Additional name to pattern-or-factory
            entries, registered after the built-ins.
        builtins (bool): Whether to pre-register ``apache``,
            ``apache2``, ``nginx``, ``syslog``, ``json``, ``csv``,
            ``tsv``, and ``ltsv``. Defaults to ``True``.
    """
    def __init__(self, templates=None, builtins=True):
        self._factory_map = {}
        if builtins:
            self.register('apache', APACHE_RE, ACCESS_LOG_TIME_FORMAT)
            self.register('apache2', ApacheParser)
            self.register('nginx', NGINX_RE, ACCESS_LOG_TIME_FORMAT)
            self.register('syslog', SYSLOG_RE, SYSLOG_TIME_FORMAT)
            self.register('json', JSONParser)
            self.register('csv', CSVParser)
            self.register('tsv', TSVParser)
            self.register('ltsv', LabeledTSVParser)
        for name, pattern_or_factory in (templates or {}).items():
            self.register(name, pattern_or_factory)

    def register(self, name, pattern_or_factory, time_format=None):
        """Add or overwrite the format *name*. A compiled pattern is
        wrapped to build a :class:`~textparser.parsers.RegexpParser`
        using *time_format*. Any other callable is stored as the
        factory itself.
        """
        if not name or not isinstance(name, str):
            raise TypeError('expected non-empty string name, not %r'
                            % (name,))
        if isinstance(pattern_or_factory, Pattern):
            if not pattern_or_factory.groupindex:
                raise ValueError('expected pattern with named groups,'
                                 ' not %r' % pattern_or_factory.pattern)
            factory = _get_regexp_factory(pattern_or_factory, time_format)
        elif callable(pattern_or_factory):
            factory = pattern_or_factory
        else:
            raise TypeError('expected compiled pattern or callable factory,'
                            ' not %r' % (pattern_or_factory,))
        self._factory_map[name] = factory

    def resolve(self, name):
        "Returns the factory registered as *name*, or ``None``."
        return self._factory_map.get(name)

    def build(self, name):
        factory = self._factory_map[name]
        return factory()

    def names(self):
        return sorted(self._factory_map)

    def __contains__(self, name):
        return name in self._factory_map

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s names=%r>' % (cn, self.names())
