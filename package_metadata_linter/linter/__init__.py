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

"""Linter package for localized package metadata files."""

from pathlib import Path
from typing import Iterable, Optional

from ..config import LinterConfig
from ..models.json_schema_loader import load_schema
from ..models.schema_validator import SchemaValidator
from ..registry.packagist import RegistryLookupCache
from ..spelling.spell_checker import SpellChecker
from .report import FailureReason, LintResult
from .file_linter import FileLinter
from .runner import LintRunner, RunOutcome

__all__ = [
    'build_file_linter',
    'lint_files',
    'FailureReason',
    'FileLinter',
    'LintResult',
    'LintRunner',
    'RunOutcome',
]


def build_file_linter(config: LinterConfig) -> FileLinter:
    """Create a file linter with fresh per-run state.

    Args:
        config: Paths and registry settings for this run

    Returns:
        FileLinter owning its own registry cache
    """
    return FileLinter(
        schema_validator=SchemaValidator(load_schema(config.schema_path)),
        spell_checker=SpellChecker(config.whitelist_dir),
        registry=RegistryLookupCache(config.registry_url, timeout=config.request_timeout),
    )


def lint_files(file_paths: Iterable[Path], config: Optional[LinterConfig] = None) -> RunOutcome:
    """Lint metadata files, stopping at the first failure.

    Args:
        file_paths: Metadata files in the order they should be checked
        config: Run configuration; read from the environment if omitted

    Returns:
        RunOutcome with the checked results and the failure, if any
    """
    if config is None:
        config = LinterConfig.from_env()
    return LintRunner(build_file_linter(config)).run(file_paths)
