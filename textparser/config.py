# -*- coding: utf-8 -*-
"""Declarative parameters for parser configuration.

Parsers list their options as :class:`ConfigParam` instances in a
``config_params`` tuple. Options arrive as a flat mapping, usually of
strings from a config file, and are coerced on the way in. Only keys
present in the mapping are applied, so a template's preset values
(e.g., a ``time_format``) survive unless explicitly overridden.
"""

from textparser.common import ConfigError


_TRUE_STRS = ('', 'true', 'yes', 'on', '1')
_FALSE_STRS = ('false', 'no', 'off', '0')


def to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRS:
            return True
        elif lowered in _FALSE_STRS:
            return False
    raise ConfigError('expected boolean value, not: %r' % (value,))


def to_str(value):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError('expected string value, not: %r' % (value,))
    return value


def to_list(value):
    "Comma-separated strings are split, blank entries are dropped."
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(',')
    elif not isinstance(value, (list, tuple)):
        raise ConfigError('expected comma-separated string or list,'
                          ' not: %r' % (value,))
    ret = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError('expected string list items, not: %r'
                              % (item,))
        item = item.strip()
        if item:
            ret.append(item)
    return ret


class ConfigParam(object):
    def __init__(self, name, coerce=to_str, default=None, required=False):
        if not callable(coerce):
            raise TypeError('expected callable coerce, not %r' % (coerce,))
        self.name = name
        self.coerce = coerce
        self.default = default
        self.required = required

    def __repr__(self):
        cn = self.__class__.__name__
        return ('%s(%r, default=%r, required=%r)'
                % (cn, self.name, self.default, self.required))


class Configurable(object):
    config_params = ()

    def __init__(self):
        for param in self.get_config_params():
            setattr(self, param.name, param.default)

    @classmethod
    def get_config_params(cls):
        """All params declared along the MRO. Subclasses override
        params of the same name.
        """
        param_map = {}
        for klass in reversed(cls.__mro__):
            for param in klass.__dict__.get('config_params', ()):
                param_map[param.name] = param
        return list(param_map.values())

    def configure(self, conf):
        conf = conf or {}
        for param in self.get_config_params():
            if param.name in conf:
                value = param.coerce(conf[param.name])
                setattr(self, param.name, value)
            if param.required and getattr(self, param.name) is None:
                raise ConfigError("'%s' parameter is required" % param.name)
        return self
