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

import json
import os.path
from typing import Iterable

from jsonschema.exceptions import ValidationError
from jsonschema.validators import Draft202012Validator

import logging
log = logging.getLogger('gpkgtiles.config')


with open(os.path.join(os.path.dirname(__file__), 'config-schema.json')) as schema_file:
    schema = json.load(schema_file)


def get_error_messages(errors: Iterable[ValidationError]) -> list[str]:
    msgs = []
    for error in errors:
        path = '.'.join(str(p) for p in error.absolute_path)
        if path:
            msgs.append("'%s': %s" % (path, error.message))
        else:
            msgs.append(error.message)
    return msgs


def validate(conf_dict) -> list[str]:
    """
    Validate `conf_dict` and return a list with all errors.

    >>> validate({'metadata': {'minzoom': 0, 'maxzoom': 5}})
    []
    >>> validate({'metadata': {'maxzoom': -1}})
    ["'metadata.maxzoom': -1 is less than the minimum of 0"]
    >>> validate({'metadata': 'world'})
    ["'metadata': 'world' is not of type 'object'"]
    """
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(conf_dict), key=lambda e: [str(p) for p in e.absolute_path])
    msgs = get_error_messages(errors)

    if not isinstance(conf_dict, dict):
        return msgs

    metadata = conf_dict.get('metadata') or {}
    if not isinstance(metadata, dict):
        return msgs
    minzoom, maxzoom = metadata.get('minzoom'), metadata.get('maxzoom')
    if isinstance(minzoom, int) and isinstance(maxzoom, int) and minzoom > maxzoom:
        msgs.append("'metadata': minzoom %d larger than maxzoom %d" % (minzoom, maxzoom))

    bounds = metadata.get('bounds')
    if isinstance(bounds, list) and len(bounds) == 4 and all(isinstance(b, (int, float)) for b in bounds):
        if bounds[0] >= bounds[2] or bounds[1] >= bounds[3]:
            msgs.append("'metadata.bounds': minx/miny larger than maxx/maxy")
    return msgs
