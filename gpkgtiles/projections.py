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
Spatial reference systems known to every GeoPackage container.
"""

WGS84_SRS_ID = 1
WEB_MERCATOR_SRS_ID = 2

wgs84 = (
    'GEOGCS["WGS 84",DATUM["WGS_1984",SPHEROID["WGS 84",6378137,298.257223563,AUTHORITY["EPSG","7030"]],'
    'AUTHORITY["EPSG","6326"]],PRIMEM["Greenwich",0,AUTHORITY["EPSG","8901"]],'
    'UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],AUTHORITY["EPSG","4326"]]'
)

web_mercator = (
    'PROJCS["WGS 84 / Pseudo-Mercator",GEOGCS["WGS 84",DATUM["WGS_1984",SPHEROID["WGS 84",6378137,'
    '298.257223563,AUTHORITY["EPSG","7030"]],AUTHORITY["EPSG","6326"]],PRIMEM["Greenwich",0,'
    'AUTHORITY["EPSG","8901"]],UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],'
    'AUTHORITY["EPSG","4326"]],PROJECTION["Mercator_1SP"],PARAMETER["central_meridian",0],'
    'PARAMETER["scale_factor",1],PARAMETER["false_easting",0],PARAMETER["false_northing",0],'
    'UNIT["metre",1,AUTHORITY["EPSG","9001"]],AXIS["X",EAST],AXIS["Y",NORTH],AUTHORITY["EPSG","3857"]]'
)

# (srs_name, srs_id, organization, organization_coordsys_id, definition, description)
spatial_ref_sys_rows = [
    ('Undefined Cartesian Coordinate Reference System', -1, 'NONE', -1, 'undefined',
     'Undefined Cartesian coordinate reference system'),
    ('Undefined Geographic Coordinate Reference System', 0, 'NONE', -1, 'undefined',
     'Undefined geographic coordinate reference system'),
    ('World Geodetic System (WGS) 1984', WGS84_SRS_ID, 'EPSG', 4326, wgs84,
     'World Geodetic System 1984'),
    ('Web Mercator', WEB_MERCATOR_SRS_ID, 'EPSG', 3857, web_mercator,
     'Pseudo Web Mercator'),
]
