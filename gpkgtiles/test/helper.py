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
import sqlite3
import tempfile

from io import BytesIO

from PIL import Image


class TempFiles(object):
    """
    This class is a context manager for temporary files.

    >>> with TempFiles(n=2, suffix='.png') as tmp:
    ...     for f in tmp:
    ...         assert os.path.exists(f)
    >>> for f in tmp:
    ...     assert not os.path.exists(f)
    """
    def __init__(self, n=1, suffix='', no_create=False):
        self.n = n
        self.suffix = suffix
        self.no_create = no_create
        self.tmp_files = []

    def __enter__(self):
        for _ in range(self.n):
            fd, tmp_file = tempfile.mkstemp(suffix=self.suffix)
            os.close(fd)
            self.tmp_files.append(tmp_file)
            if self.no_create:
                os.remove(tmp_file)
        return self.tmp_files

    def __exit__(self, exc_type, exc_val, exc_tb):
        for tmp_file in self.tmp_files:
            if os.path.exists(tmp_file):
                os.remove(tmp_file)
        self.tmp_files = []


class TempFile(TempFiles):
    def __init__(self, suffix='', no_create=False):
        TempFiles.__init__(self, suffix=suffix, no_create=no_create)

    def __enter__(self):
        return TempFiles.__enter__(self)[0]


class LogMock(object):
    log_methods = ('info', 'debug', 'warning', 'error')

    def __init__(self, module, log_name='log'):
        self.module = module
        self.log_name = log_name
        self.orig_logger = None
        self.logged_msgs = []

    def __enter__(self):
        self.orig_logger = getattr(self.module, self.log_name)
        setattr(self.module, self.log_name, self)
        return self

    def __getattr__(self, name):
        if name in self.log_methods:
            def _log(msg, *args):
                if args:
                    msg = msg % args
                self.logged_msgs.append((name, msg))
            return _log
        raise AttributeError("'%s' object has no attribute '%s'" %
                             (self.__class__.__name__, name))

    def messages(self, type):
        return [msg for log_type, msg in self.logged_msgs if log_type == type]

    def assert_log(self, type, msg):
        msgs = self.messages(type)
        assert msgs, 'expected %s log message, but got %r' % (type, self.logged_msgs)
        assert any(msg in m.lower() for m in msgs), \
            "expected string '%s' in %s log messages %r" % (msg, type, msgs)

    def __exit__(self, exc_type, exc_val, exc_tb):
        setattr(self.module, self.log_name, self.orig_logger)


def create_tmp_image_buf(size, format='png', color=None, mode='RGB'):
    if color is not None:
        img = Image.new(mode, size, color=color)
    else:
        img = Image.new(mode, size)
    data = BytesIO()
    img.save(data, format)
    data.seek(0)
    return data


def create_image_data(size=(256, 256), format='png', color='blue'):
    return create_tmp_image_buf(size, format=format, color=color).getvalue()


def is_png(data):
    return data[:8] == b"\211PNG\r\n\032\n"


def query(gpkg_file, stmt, args=()):
    """
    Return all rows of `stmt` from an independent connection.
    """
    db = sqlite3.connect(gpkg_file)
    try:
        return db.execute(stmt, args).fetchall()
    finally:
        db.close()


def execute(gpkg_file, *stmts):
    db = sqlite3.connect(gpkg_file)
    try:
        for stmt in stmts:
            db.execute(stmt)
        db.commit()
    finally:
        db.close()
