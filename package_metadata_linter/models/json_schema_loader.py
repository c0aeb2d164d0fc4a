# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema loader for package metadata validation."""

import copy
import json
from pathlib import Path
from typing import Dict, Union


# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[Path, dict] = {}

HOMEPAGE_REQUIRED = ["homepage"]


def load_schema(schema_path: Union[str, Path]) -> dict:
    """Load the base JSON Schema document.

    The returned dict is shared through the cache and must be treated as
    read-only; use effective_schema() to get a copy that may be changed.

    Args:
        schema_path: Path to the schema file

    Returns:
        Schema dictionary

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    path = Path(schema_path).resolve()
    if path in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[path]

    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e

    _SCHEMA_CACHE[path] = schema
    return schema


def effective_schema(base_schema: dict, requires_homepage: bool) -> dict:
    """Derive the schema a single metadata record is checked against.

    Private packages only have to provide a homepage, so their ``required``
    list is replaced (not extended) by ``["homepage"]``. Public packages use
    the base schema as-is.
    """
    schema = copy.deepcopy(base_schema)
    if requires_homepage:
        schema["required"] = list(HOMEPAGE_REQUIRED)
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
