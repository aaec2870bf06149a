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

import os
import tempfile

import pytest

from gpkgtiles.config.config import Options, load_config, load_default_config
from gpkgtiles.config.loader import load_configuration, store_from_config, ConfigurationError
from gpkgtiles.config.validator import validate


class TestOptions(object):

    def test_attribute_access(self):
        o = Options(foo='bar')
        assert o.foo == 'bar'
        o.baz = 1
        assert o['baz'] == 1
        del o.baz
        assert 'baz' not in o
        with pytest.raises(AttributeError):
            o.missing

    def test_nested_update(self):
        o = Options(a=Options(b=1, c=2))
        o.update({'a': {'c': 3}})
        assert o.a == {'b': 1, 'c': 3}


class TestLoadConfig(object):

    def setup_method(self):
        self.tmp_files = []

    def teardown_method(self):
        for f in self.tmp_files:
            os.unlink(f)

    def yaml_file(self, content):
        fd, fname = tempfile.mkstemp(suffix='.yaml')
        with os.fdopen(fd, "w") as f:
            f.write(content)
        self.tmp_files.append(fname)
        return fname

    def test_defaults(self):
        conf = load_default_config()
        assert conf.store.timeout == 30
        assert conf.store.wal == False
        assert conf.store.unique_tiles == False
        assert conf.store.strict == False
        assert conf.metadata.name == 'tiles'
        assert conf.metadata.description == 'OGC GeoPackage'
        assert conf.metadata.bounds == [-180, -85, 180, 85]
        assert conf.metadata.minzoom == 0
        assert conf.metadata.maxzoom == 19

    def test_defaults_are_copies(self):
        conf = load_default_config()
        conf.metadata.bounds.append(1)
        assert load_default_config().metadata.bounds == [-180, -85, 180, 85]

    def test_merge_file(self):
        fname = self.yaml_file("store:\n  wal: true\nmetadata:\n  name: osm\n  maxzoom: 12\n")
        conf = load_config(fname)
        assert conf.store.wal == True
        assert conf.store.timeout == 30
        assert conf.metadata.name == 'osm'
        assert conf.metadata.maxzoom == 12
        assert conf.metadata.minzoom == 0

    def test_merge_dict(self):
        conf = load_config(config_dict={'metadata': {'bounds': [0, 0, 10, 10]}})
        assert conf.metadata.bounds == [0, 0, 10, 10]
        assert conf.metadata.name == 'tiles'

    def test_load_configuration(self):
        fname = self.yaml_file("store:\n  unique_tiles: true\n")
        conf = load_configuration(fname)
        assert conf.store.unique_tiles == True

    def test_load_configuration_empty_file(self):
        fname = self.yaml_file("")
        conf = load_configuration(fname)
        assert conf.metadata.name == 'tiles'

    def test_load_configuration_invalid(self):
        fname = self.yaml_file("store:\n  timeout: soon\nmetadata:\n  minzoom: 4\n  maxzoom: 2\n")
        with pytest.raises(ConfigurationError) as excinfo:
            load_configuration(fname)
        assert 'store.timeout' in str(excinfo.value)
        assert 'minzoom 4 larger than maxzoom 2' in str(excinfo.value)

    @pytest.mark.parametrize('conf_dict,path', [
        ({'metadata': 'world'}, "'metadata'"),
        ({'metadata': [1, 2]}, "'metadata'"),
        ({'store': 'fast'}, "'store'"),
    ])
    def test_load_configuration_section_not_a_mapping(self, conf_dict, path):
        with pytest.raises(ConfigurationError) as excinfo:
            load_configuration(config_dict=conf_dict)
        assert path in str(excinfo.value)

    def test_load_configuration_invalid_yaml(self):
        fname = self.yaml_file("store: [\n")
        with pytest.raises(ConfigurationError):
            load_configuration(fname)

    def test_load_configuration_missing_file(self):
        with pytest.raises(ConfigurationError):
            load_configuration('/does/not/exist.yaml')


class TestValidate(object):

    def test_valid(self):
        assert validate({}) == []
        assert validate({
            'store': {'timeout': 5, 'wal': True, 'unique_tiles': False, 'strict': True},
            'metadata': {'name': 'osm-tiles', 'description': 'foo', 'bounds': [-10, -10, 10, 10.5],
                         'minzoom': 2, 'maxzoom': 2},
        }) == []

    def test_unknown_option(self):
        errors = validate({'store': {'tiemout': 5}})
        assert len(errors) == 1
        assert "'store'" in errors[0]
        assert 'tiemout' in errors[0]

    def test_invalid_directory_permissions(self):
        errors = validate({'store': {'directory_permissions': 'rwx'}})
        assert len(errors) == 1
        assert errors[0].startswith("'store.directory_permissions'")

    def test_unknown_section(self):
        assert len(validate({'cache': {}})) == 1

    def test_invalid_name(self):
        errors = validate({'metadata': {'name': 'foo bar'}})
        assert len(errors) == 1
        assert errors[0].startswith("'metadata.name'")

    def test_invalid_bounds(self):
        assert len(validate({'metadata': {'bounds': [0, 0, 10]}})) == 1
        assert validate({'metadata': {'bounds': [10, 0, 0, 10]}}) == [
            "'metadata.bounds': minx/miny larger than maxx/maxy"]


class TestStoreFromConfig(object):

    def test_options(self):
        conf = load_configuration(config_dict={
            'store': {'timeout': 5, 'wal': True, 'unique_tiles': True, 'strict': True,
                      'directory_permissions': '750'}})
        store = store_from_config('/tmp/foo.gpkg', conf)
        assert store.uri == '/tmp/foo.gpkg'
        assert store.timeout == 5
        assert store.wal == True
        assert store.unique_tiles == True
        assert store.strict == True
        assert store.directory_permissions == '750'

    def test_defaults(self):
        store = store_from_config('foo.gpkg')
        assert store.timeout == 30
        assert store.wal == False
        assert store.unique_tiles == False
        assert store.strict == False
        assert store.directory_permissions is None
