# This file is part of the gpkgtiles project.
# Copyright (C) 2026 The gpkgtiles authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Store configuration.
"""
import copy

from gpkgtiles.util.yaml import load_yaml_file


class Options(dict):
    """
    Dictionary with attribute style access.

    >>> o = Options(bar='foo')
    >>> o.bar
    'foo'
    """
    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, dict.__repr__(self))

    def __getattr__(self, name):
        if name in self:
            return self[name]
        else:
            raise AttributeError(name)

    __setattr__ = dict.__setitem__

    def __delattr__(self, name):
        if name in self:
            del self[name]
        else:
            raise AttributeError(name)

    def update(self, other=None, **kw):
        if other is not None:
            if hasattr(other, 'items'):
                it = other.items()
            else:
                it = iter(other)
        else:
            it = kw.items()
        for key, value in it:
            if key in self and isinstance(self[key], Options):
                self[key].update(value)
            else:
                self[key] = value

    def __deepcopy__(self, memo):
        return self.__class__(copy.deepcopy(list(self.items()), memo))


def _to_options_map(mapping):
    if isinstance(mapping, dict):
        opt = Options()
        for key, value in mapping.items():
            opt[key] = _to_options_map(value)
        return opt
    elif isinstance(mapping, list):
        return [_to_options_map(m) for m in mapping]
    else:
        return mapping


def load_default_config():
    """
    Return the built-in defaults as `Options`.

    >>> load_default_config().metadata.name
    'tiles'
    """
    from gpkgtiles.config import defaults
    config_dict = {}
    for k, v in defaults.__dict__.items():
        if k.startswith('_'):
            continue
        config_dict[k] = copy.deepcopy(v)
    return _to_options_map(config_dict)


def load_config(config_file=None, config_dict=None):
    """
    Merge the YAML `config_file` or the `config_dict` over the defaults.
    """
    config = load_default_config()
    if config_dict is None:
        if config_file is None:
            return config
        config_dict = load_yaml_file(config_file)

    for key, value in _to_options_map(config_dict).items():
        if key in config and hasattr(config[key], 'update'):
            config[key].update(value)
        else:
            config[key] = value
    return config
