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

import datetime
import os
import shutil
import tempfile

from gpkgtiles.util.fs import ensure_directory
from gpkgtiles.util.sqlite3 import isoformat_utc, utcnow_iso


class TestEnsureDirectory(object):

    def setup_method(self):
        self.tmp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        shutil.rmtree(self.tmp_dir)

    def test_creates_parents(self):
        file_name = os.path.join(self.tmp_dir, 'a', 'b', 'c.gpkg')
        ensure_directory(file_name)
        assert os.path.isdir(os.path.join(self.tmp_dir, 'a', 'b'))
        assert not os.path.exists(file_name)

    def test_existing(self):
        ensure_directory(os.path.join(self.tmp_dir, 'c.gpkg'))
        assert os.listdir(self.tmp_dir) == []

    def test_relative_file(self):
        # no directory component
        ensure_directory('c.gpkg')

    def test_permissions(self):
        file_name = os.path.join(self.tmp_dir, 'a', 'c.gpkg')
        ensure_directory(file_name, directory_permissions='750')
        assert os.stat(os.path.join(self.tmp_dir, 'a')).st_mode & 0o777 == 0o750


class TestTimestamps(object):

    def test_isoformat_utc(self):
        dt = datetime.datetime(2017, 5, 1, 14, 30, 5, 120000,
                               tzinfo=datetime.timezone(datetime.timedelta(hours=2)))
        assert isoformat_utc(dt) == '2017-05-01T12:30:05.120Z'

    def test_utcnow_iso(self):
        now = utcnow_iso()
        assert now.endswith('Z')
        parsed = datetime.datetime.strptime(now, '%Y-%m-%dT%H:%M:%S.%fZ')
        utcnow = datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
        assert abs((utcnow - parsed).total_seconds()) < 60
