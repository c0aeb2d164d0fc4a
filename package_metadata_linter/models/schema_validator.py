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

"""Schema validation of a single language record."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from jsonschema.validators import validator_for

from .json_schema_loader import effective_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    property_path: str = ""  # dotted, e.g. "support.issues" or "keywords[0]"
    yaml_path: str = ""  # JSON pointer relative to the record


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def format_property_path(path: Iterable[Any]) -> str:
    """Render a jsonschema error path the way users read it: ``a.b[0].c``."""
    rendered = ""
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = str(part)
    return rendered


def format_yaml_path(path: Iterable[Any]) -> str:
    return "".join(f"/{_jp_escape(str(part))}" for part in path)


def _normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, bool):
        return json.dumps(key)
    return str(key)


def normalize_record(record: Any) -> Any:
    """Convert parsed YAML into plain JSON types.

    YAML happily produces dates and other scalars that JSON Schema has no type
    for, both as values and as mapping keys; those are validated as their
    string form.
    """
    if isinstance(record, dict):
        return {_normalize_key(k): normalize_record(v) for k, v in record.items()}
    if isinstance(record, (list, tuple, set, frozenset)):
        return [normalize_record(item) for item in record]
    if record is None or isinstance(record, (str, bool, int, float)):
        return record
    return str(record)


def _path_sort_key(error) -> List[Tuple[bool, Any]]:
    # Indexes compare as numbers, keys as text; the flag keeps the two apart.
    return [(isinstance(part, int), part) for part in error.absolute_path]


class SchemaValidator:
    """Validate metadata records against the base schema or its homepage variant.

    Raises:
        jsonschema.exceptions.SchemaError: If the base schema is not a valid
            JSON Schema; checked on construction so a bad schema fails before
            any file is linted
    """

    def __init__(self, base_schema: Dict[str, Any]):
        validator_for(base_schema).check_schema(base_schema)
        self._base_schema = base_schema
        self._validators: Dict[bool, Any] = {}

    def effective_schema(self, requires_homepage: bool) -> Dict[str, Any]:
        return effective_schema(self._base_schema, requires_homepage)

    def _validator(self, requires_homepage: bool):
        # Only two schema variants exist per run, so build each validator once.
        validator = self._validators.get(requires_homepage)
        if validator is None:
            schema = self.effective_schema(requires_homepage)
            cls = validator_for(schema)
            validator = cls(schema, format_checker=cls.FORMAT_CHECKER)
            self._validators[requires_homepage] = validator
        return validator

    def validate(self, record: Any, requires_homepage: bool) -> Tuple[bool, List[SchemaIssue]]:
        """Validate a record and collect every violation.

        Args:
            record: The mapping found under the language key
            requires_homepage: Whether the owning package is private

        Returns:
            (is_valid, issues) where issues are sorted by their position in
            the record
        """
        data = normalize_record(record)
        validator = self._validator(requires_homepage)

        errors = sorted(validator.iter_errors(data), key=_path_sort_key)
        issues = [
            SchemaIssue(
                message=error.message,
                property_path=format_property_path(error.absolute_path),
                yaml_path=format_yaml_path(error.absolute_path),
            )
            for error in errors
        ]
        is_valid = validator.is_valid(data)
        logger.debug(f"Schema validation finished: valid={is_valid}, issues={len(issues)}")
        return is_valid, issues
