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
Web Mercator tile grid helpers (bbox transformation, resolutions, zoom levels).
"""
import math
import logging

from pyproj import CRS, Transformer

log_proj = logging.getLogger('gpkgtiles.proj')

TILE_SIZE = 256
EARTH_RADIUS = 6378137
ORIGIN_SHIFT = 2 * math.pi * EARTH_RADIUS / 2.0  # 20037508.342789244
INITIAL_RESOLUTION = 2 * math.pi * EARTH_RADIUS / TILE_SIZE

# 3857 is only defined within 85.0511 N/S, latitudes beyond are clamped
MAX_LATITUDE = 85.0511287798066

_transformers = {}


def _transformer(src_epsg, dst_epsg):
    key = (src_epsg, dst_epsg)
    if key not in _transformers:
        _transformers[key] = Transformer.from_crs(
            CRS.from_epsg(src_epsg), CRS.from_epsg(dst_epsg), always_xy=True)
    return _transformers[key]


def check_bbox(bbox):
    """
    Return `bbox` as tuple of four floats or raise ``ValueError``.

    >>> check_bbox([-180, -85, 180, 85])
    (-180.0, -85.0, 180.0, 85.0)
    >>> check_bbox((10, 5, 0, 7))
    Traceback (most recent call last):
    ...
    ValueError: invalid bbox (10, 5, 0, 7): minx/miny larger than maxx/maxy
    """
    try:
        if isinstance(bbox, str):
            raise TypeError
        values = tuple(float(v) for v in bbox)
    except (TypeError, ValueError):
        raise ValueError('invalid bbox %r: expected [west, south, east, north]' % (bbox, ))
    if len(values) != 4:
        raise ValueError('invalid bbox %r: expected four values' % (bbox, ))
    if values[0] >= values[2] or values[1] >= values[3]:
        raise ValueError('invalid bbox %r: minx/miny larger than maxx/maxy' % (bbox, ))
    return values


def clamp_latitude(lat):
    return max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))


def bbox_to_meters(bbox):
    """
    Transform a geographic bbox (degrees) to Web Mercator meters.

    >>> ['%.3f' % x for x in bbox_to_meters((-180.0, -90.0, 180.0, 90.0))]
    ['-20037508.343', '-20037508.343', '20037508.343', '20037508.343']
    >>> ['%.5f' % x for x in bbox_to_meters((8.2, 53.1, 8.3, 53.2))]
    ['912819.82450', '7001516.67745', '923951.77358', '7020078.53264']
    """
    minx, miny, maxx, maxy = check_bbox(bbox)
    minx = max(minx, -180.0)
    maxx = min(maxx, 180.0)
    miny = clamp_latitude(miny)
    maxy = clamp_latitude(maxy)
    if minx >= maxx or miny >= maxy:
        raise ValueError('invalid bbox %r: outside of the Web Mercator extent' % (bbox, ))
    xs, ys = _transformer(4326, 3857).transform([minx, maxx], [miny, maxy])
    result = (xs[0], ys[0], xs[1], ys[1])
    log_proj.debug('transformed from EPSG:4326 to EPSG:3857 (%s -> %s)', bbox, result)
    return result


def meters_to_bbox(bbox_meters):
    """
    Transform a Web Mercator bbox (meters) to degrees.

    >>> ['%.6f' % x for x in meters_to_bbox((-20037508.342789244, 0, 20037508.342789244, 20037508.342789244))]
    ['-180.000000', '0.000000', '180.000000', '85.051129']
    """
    minx, miny, maxx, maxy = bbox_meters
    xs, ys = _transformer(3857, 4326).transform([minx, maxx], [miny, maxy])
    result = (xs[0], ys[0], xs[1], ys[1])
    log_proj.debug('transformed from EPSG:3857 to EPSG:4326 (%s -> %s)', bbox_meters, result)
    return result


def resolution(zoom, tile_size=TILE_SIZE):
    """
    Resolution (meters/pixel) of the global Web Mercator grid at `zoom`.

    >>> resolution(0)
    156543.03392804097
    >>> resolution(1) == resolution(0) / 2
    True
    """
    return 2 * ORIGIN_SHIFT / tile_size / 2 ** zoom


def matrix_size(zoom):
    """
    Number of tiles along one side of the grid at `zoom`.

    >>> [matrix_size(z) for z in range(4)]
    [1, 2, 4, 8]
    """
    return 2 ** zoom


def zoom_range(minzoom, maxzoom):
    """
    All zoom levels from `minzoom` to `maxzoom` (inclusive).

    >>> list(zoom_range(0, 2))
    [0, 1, 2]
    >>> list(zoom_range(3, 3))
    [3]
    """
    return range(minzoom, maxzoom + 1)
