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
GeoPackage tile store.

.. code-block:: python

    store = TileStore('example.gpkg')
    store.set_metadata(name='tiles', maxzoom=3)
    store.save_tile(0, 0, 0, png_data)
    store.find_tile(0, 0, 0)
"""

import logging
import re
import threading
from collections import namedtuple

from gpkgtiles import mercator
from gpkgtiles.config.config import Options
from gpkgtiles.config import defaults
from gpkgtiles.projections import spatial_ref_sys_rows, WEB_MERCATOR_SRS_ID
from gpkgtiles.schema import (
    TABLES,
    TILES_TABLE,
    GPKG_APPLICATION_ID,
    create_tiles_index_statement,
    insert_contents_statement,
    insert_spatial_ref_sys_statement,
    insert_tile_matrix_set_statement,
    insert_tile_matrix_statement,
)
from gpkgtiles.util.fs import ensure_directory
from gpkgtiles.util.sqlite3 import sqlite3, utcnow_iso

log = logging.getLogger(__name__)

__all__ = ['TileStore', 'Metadata', 'StoreError', 'StoreOpenError', 'StatementError']


class StoreError(Exception):
    """
    Statement or connection failure of a `TileStore`.
    """
    def __init__(self, message, statement=None):
        Exception.__init__(self, message)
        self.statement = statement


class StoreOpenError(StoreError):
    pass


StatementError = namedtuple('StatementError', ['statement', 'exception'])


class Metadata(Options):
    """
    Tile set metadata as written to the GeoPackage.

    Keys: ``name``, ``description``, ``bounds``, ``bounds_meters``,
    ``last_change``, ``minzoom`` and ``maxzoom``.
    """


def check_table_name(table_name):
    """
    >>> check_table_name("test")
    'test'
    >>> check_table_name("test-2")
    'test-2'
    >>> check_table_name("test3;")
    Traceback (most recent call last):
    ...
    ValueError: The table_name test3; contains unsupported characters.
    """
    if isinstance(table_name, str) and re.match('^[a-zA-Z0-9_-]+$', table_name):
        return table_name
    raise ValueError("The table_name {0} contains unsupported characters.".format(table_name))


def check_zoom_range(minzoom, maxzoom):
    for zoom in (minzoom, maxzoom):
        if isinstance(zoom, bool) or not isinstance(zoom, int):
            raise ValueError('zoom level %r is not an integer' % (zoom, ))
        if zoom < 0:
            raise ValueError('zoom level %d is negative' % zoom)
    if minzoom > maxzoom:
        raise ValueError('minzoom %d larger than maxzoom %d' % (minzoom, maxzoom))
    return minzoom, maxzoom


class TileStore(object):
    """
    Tiles and tile set metadata of a single GeoPackage file.

    The connection is opened on first use and kept until `cleanup`.
    Statement errors are logged and recorded in `errors` (``ok`` turns
    ``False``); with ``strict=True`` they raise `StoreError` instead.
    """

    def __init__(self, uri, timeout=30, wal=False, unique_tiles=False, strict=False,
                 directory_permissions=None):
        self.uri = str(uri)
        self.timeout = timeout
        self.wal = wal
        self.unique_tiles = unique_tiles
        self.strict = strict
        self.directory_permissions = directory_permissions
        self.schema_ready = False
        self.errors = []
        self.ok = True
        self._db = None
        self._lock = threading.RLock()

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.uri)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

    @property
    def db(self):
        if self._db is None:
            try:
                ensure_directory(self.uri, self.directory_permissions)
                db = sqlite3.connect(self.uri, timeout=self.timeout, check_same_thread=False)
                # fails for files that are not SQLite databases
                db.execute('SELECT count(*) FROM sqlite_master').fetchone()
            except (OSError, sqlite3.Error) as ex:
                raise StoreOpenError('unable to open GeoPackage %s: %s' % (self.uri, ex)) from ex
            self._db = db
        return self._db

    def cleanup(self):
        """
        Close the open connection.
        """
        with self._lock:
            if self._db is not None:
                self._db.close()
            self._db = None

    def reset_errors(self):
        self.errors = []
        self.ok = True

    def _statement_failed(self, statement, ex):
        msg = ' '.join(statement.split())
        log.warning('statement failed on %s: %s (%s)', self.uri, ex, msg)
        self.errors.append(StatementError(msg, ex))
        self.ok = False
        if self.strict:
            raise StoreError('statement failed on %s: %s' % (self.uri, ex), statement=msg) from ex

    def _execute(self, statement, args=(), commit=True):
        """
        Execute (and commit) a single statement. Returns the cursor or
        ``None`` on errors.
        """
        db = self.db
        try:
            cur = db.execute(statement, args)
            if commit:
                db.commit()
        except sqlite3.Error as ex:
            self._statement_failed(statement, ex)
            return None
        return cur

    def ensure_schema(self):
        """
        Create the GeoPackage tables if they do not exist.

        Runs once per instance. Failing statements are logged and do not
        stop the remaining ones.
        """
        with self._lock:
            if self.schema_ready:
                return True

            log.info('initializing GeoPackage tables in %s', self.uri)
            for table, statement in TABLES:
                log.debug('creating table %s', table)
                self._execute(statement)

            self._execute('PRAGMA application_id = %d' % GPKG_APPLICATION_ID)
            if self.wal:
                self._execute('PRAGMA journal_mode=wal')
            if self.unique_tiles:
                self._execute(create_tiles_index_statement)

            self.schema_ready = True
            return True

    def set_metadata(self, metadata=None, **options):
        """
        Replace the tile set metadata.

        Rewrites ``gpkg_spatial_ref_sys``, ``gpkg_contents``,
        ``gpkg_tile_matrix`` and ``gpkg_tile_matrix_set`` in one transaction.
        Stored tiles are not touched.

        :param metadata: dict with ``name``, ``description``, ``bounds``
            (``[west, south, east, north]`` in degrees), ``minzoom`` and
            ``maxzoom``. Keyword options override the dict values.
        :returns: the resolved `Metadata`
        """
        md = dict(metadata or {})
        md.update(options)
        unknown = set(md) - set(defaults.metadata)
        if unknown:
            log.warning('ignoring unknown metadata option(s): %s', ', '.join(sorted(unknown)))
        for key, default in defaults.metadata.items():
            if md.get(key) is None:
                md[key] = default

        name = check_table_name(md['name'])
        description = str(md['description'])
        bounds = mercator.check_bbox(md['bounds'])
        minzoom, maxzoom = check_zoom_range(md['minzoom'], md['maxzoom'])

        bounds_meters = mercator.bbox_to_meters(bounds)
        last_change = utcnow_iso()

        tile_matrix_rows = []
        for zoom in mercator.zoom_range(minzoom, maxzoom):
            matrix = mercator.matrix_size(zoom)
            res = mercator.resolution(zoom)
            tile_matrix_rows.append((name, zoom, matrix, matrix,
                                     mercator.TILE_SIZE, mercator.TILE_SIZE, res, res))

        with self._lock:
            self.ensure_schema()
            db = self.db
            statement = None
            try:
                with db:
                    statement = 'DELETE FROM gpkg_spatial_ref_sys'
                    db.execute(statement)
                    statement = insert_spatial_ref_sys_statement
                    db.executemany(statement, spatial_ref_sys_rows)

                    statement = 'DELETE FROM gpkg_contents'
                    db.execute(statement)
                    statement = insert_contents_statement
                    db.execute(statement, (name, 'tiles', name, description, last_change)
                               + bounds_meters + (WEB_MERCATOR_SRS_ID, ))

                    statement = 'DELETE FROM gpkg_tile_matrix'
                    db.execute(statement)
                    statement = insert_tile_matrix_statement
                    db.executemany(statement, tile_matrix_rows)

                    statement = 'DELETE FROM gpkg_tile_matrix_set'
                    db.execute(statement)
                    statement = insert_tile_matrix_set_statement
                    db.execute(statement, (name, WEB_MERCATOR_SRS_ID) + bounds_meters)
            except sqlite3.Error as ex:
                # the with block rolled back the transaction
                self._statement_failed(statement, ex)
            else:
                log.info('updated metadata of %s (%s, zoom %d-%d)', self.uri, name, minzoom, maxzoom)

        return Metadata(
            name=name,
            description=description,
            bounds=bounds,
            bounds_meters=bounds_meters,
            last_change=last_change,
            minzoom=minzoom,
            maxzoom=maxzoom,
        )

    def get_metadata(self):
        """
        Read the tile set metadata back from the GeoPackage.

        Returns ``None`` if no tile set is registered.
        """
        with self._lock:
            self.ensure_schema()
            cur = self._execute("""
                SELECT table_name, description, last_change, min_x, min_y, max_x, max_y
                FROM gpkg_contents WHERE data_type = 'tiles' LIMIT 1
            """, commit=False)
            row = cur.fetchone() if cur else None
            if not row:
                return None
            name, description, last_change = row[:3]
            bounds_meters = tuple(row[3:7])

            cur = self._execute("""
                SELECT min(zoom_level), max(zoom_level) FROM gpkg_tile_matrix WHERE table_name = ?
            """, (name, ), commit=False)
            minzoom, maxzoom = cur.fetchone() if cur else (None, None)

        if None in bounds_meters:
            bounds = None
        else:
            bounds = mercator.meters_to_bbox(bounds_meters)

        return Metadata(
            name=name,
            description=description,
            bounds=bounds,
            bounds_meters=bounds_meters,
            last_change=last_change,
            minzoom=minzoom,
            maxzoom=maxzoom,
        )

    def save_tile(self, x, y, z, image):
        """
        Store the `image` data of tile `x`, `y`, `z`.

        Existing tiles with the same coordinate are kept unless the store
        uses ``unique_tiles``.
        """
        if self.unique_tiles:
            stmt = "INSERT OR REPLACE INTO {0} (tile_column, tile_row, zoom_level, tile_data) VALUES (?,?,?,?)"
        else:
            stmt = "INSERT INTO {0} (tile_column, tile_row, zoom_level, tile_data) VALUES (?,?,?,?)"
        with self._lock:
            self.ensure_schema()
            cur = self._execute(stmt.format(TILES_TABLE), (x, y, z, sqlite3.Binary(image)))
        return cur is not None

    def delete_tile(self, x, y, z):
        """
        Remove all tiles with coordinate `x`, `y`, `z`.

        Removing a tile that does not exist is not an error.
        """
        with self._lock:
            self.ensure_schema()
            cur = self._execute(
                "DELETE FROM {0} WHERE tile_column = ? AND tile_row = ? AND zoom_level = ?".format(TILES_TABLE),
                (x, y, z))
        if cur is None:
            return False
        log.debug('removed %d tile(s) at %s', cur.rowcount, (x, y, z))
        return True

    def find_tile(self, x, y, z):
        """
        Return the image data of tile `x`, `y`, `z` or ``None``.
        """
        with self._lock:
            self.ensure_schema()
            cur = self._execute(
                "SELECT tile_data FROM {0} WHERE tile_column = ? AND tile_row = ? AND zoom_level = ?".format(
                    TILES_TABLE),
                (x, y, z), commit=False)
            row = cur.fetchone() if cur else None
        if row is None:
            return None
        return bytes(row[0])

    def tile_count(self, z=None):
        with self._lock:
            self.ensure_schema()
            if z is None:
                cur = self._execute("SELECT count(*) FROM {0}".format(TILES_TABLE), commit=False)
            else:
                cur = self._execute("SELECT count(*) FROM {0} WHERE zoom_level = ?".format(TILES_TABLE),
                                    (z, ), commit=False)
            return cur.fetchone()[0] if cur else 0
