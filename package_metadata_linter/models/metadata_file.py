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

"""Identity of a metadata file within the metadata tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

METADATA_EXTENSIONS = ('.yaml', '.yml')


def language_from_file_name(file_name: str) -> str:
    """``de.yaml`` -> ``de``; anything else is returned unchanged."""
    for ext in METADATA_EXTENSIONS:
        if file_name.endswith(ext):
            return file_name[:-len(ext)]
    return file_name


def package_from_path(file_path: Path) -> str:
    """Derive ``vendor/name`` from the two directories above the file."""
    return f"{file_path.parent.parent.name}/{file_path.parent.name}"


@dataclass(frozen=True)
class MetadataFile:
    """One language of one package: ``<vendor>/<name>/<language>.yaml``."""
    path: Path
    package: str
    language: str

    @classmethod
    def from_path(cls, file_path: Path) -> 'MetadataFile':
        file_path = Path(file_path)
        return cls(
            path=file_path,
            package=package_from_path(file_path),
            language=language_from_file_name(file_path.name),
        )
