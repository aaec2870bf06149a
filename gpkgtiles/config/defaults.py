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

store = dict(
    timeout = 30,
    wal = False,
    unique_tiles = False,
    strict = False,
    directory_permissions = None,
)

metadata = dict(
    name = 'tiles',
    description = 'OGC GeoPackage',
    bounds = [-180, -85, 180, 85],
    minzoom = 0,
    maxzoom = 19,
)
