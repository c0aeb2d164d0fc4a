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

"""Configuration management for the package metadata linter."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .utils.logging_utils import configure_lint_logging

PACKAGE_DIR = Path(__file__).resolve().parent
ENV_PREFIX = 'PACKAGE_METADATA_LINTER_'


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + name, default)


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == '':
        return None
    return float(value)


@dataclass
class LinterConfig:
    """Configuration class for a metadata lint run."""
    log_level: str = "INFO"
    print_level: str = "WARNING"

    # paths
    meta_dir: str = "meta"
    schema_path: str = str(PACKAGE_DIR / "schema" / "metadata.json")
    whitelist_dir: str = str(PACKAGE_DIR / "whitelists")

    # registry
    registry_url: str = "https://repo.packagist.org"
    request_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> 'LinterConfig':
        """Create configuration from environment variables."""
        defaults = cls()
        return cls(
            log_level=_env('LOG_LEVEL', defaults.log_level),
            print_level=_env('PRINT_LEVEL', defaults.print_level),
            meta_dir=_env('META_DIR', defaults.meta_dir),
            schema_path=_env('SCHEMA_PATH', defaults.schema_path),
            whitelist_dir=_env('WHITELIST_DIR', defaults.whitelist_dir),
            registry_url=_env('REGISTRY_URL', defaults.registry_url).rstrip('/'),
            request_timeout=_optional_float(_env('REQUEST_TIMEOUT')),
        )

    def set_logging(self, workflow_commands: bool = False) -> logging.Logger:
        """Setup logging based on configuration.

        Args:
            workflow_commands: Emit stderr records as GitHub Actions annotations
        """
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        return configure_lint_logging(
            level=level,
            stderr_level=stderr_level,
            workflow_commands=workflow_commands,
        )
