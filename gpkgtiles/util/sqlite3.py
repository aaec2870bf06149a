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
sqlite3 module and GeoPackage timestamp helpers.

GeoPackage stores ``last_change`` as ISO 8601 text with a ``Z`` suffix.
"""

import datetime
import sqlite3

__all__ = ['sqlite3', 'isoformat_utc', 'utcnow_iso']


def isoformat_utc(val):
    """
    Format a datetime as GeoPackage timestamp (``%Y-%m-%dT%H:%M:%fZ``).

    >>> isoformat_utc(datetime.datetime(2017, 5, 1, 12, 30, 5, 120000,
    ...     tzinfo=datetime.timezone.utc))
    '2017-05-01T12:30:05.120Z'
    >>> isoformat_utc(datetime.datetime(2017, 5, 1))
    '2017-05-01T00:00:00.000Z'
    """
    if val.tzinfo is not None:
        val = val.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return val.isoformat(timespec='milliseconds') + 'Z'


def utcnow_iso():
    return isoformat_utc(datetime.datetime.now(datetime.timezone.utc))

