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
Create tile stores from configuration files.
"""

import logging

from gpkgtiles.config.config import load_config
from gpkgtiles.config.validator import validate
from gpkgtiles.store import TileStore
from gpkgtiles.util.yaml import load_yaml_file, YAMLError

log = logging.getLogger('gpkgtiles.config')


class ConfigurationError(Exception):
    pass


def load_configuration(config_file=None, config_dict=None):
    """
    Load, validate and merge the configuration with the defaults.

    :raises ConfigurationError: for invalid YAML or invalid options
    """
    if config_dict is None and config_file is not None:
        try:
            config_dict = load_yaml_file(config_file)
        except (YAMLError, OSError) as ex:
            log.error('error loading configuration %s: %s', config_file, ex)
            raise ConfigurationError('unable to load configuration %s: %s' % (config_file, ex))

    if config_dict is None:
        config_dict = {}

    errors = validate(config_dict)
    if errors:
        for msg in errors:
            log.error(msg)
        raise ConfigurationError('invalid configuration: ' + '; '.join(errors))

    return load_config(config_dict=config_dict)


def store_from_config(uri, conf=None):
    """
    Create a `TileStore` for `uri` with the ``store`` options of `conf`.
    """
    if conf is None:
        conf = load_configuration()
    store_conf = conf.store
    return TileStore(
        uri,
        timeout=store_conf.timeout,
        wal=store_conf.wal,
        unique_tiles=store_conf.unique_tiles,
        strict=store_conf.strict,
        directory_permissions=store_conf.directory_permissions,
    )
