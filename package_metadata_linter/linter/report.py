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

"""Lint verdicts for metadata files."""

from enum import Enum
from pathlib import Path
from typing import List, Dict, Any, Optional


class FailureReason(str, Enum):
    """Why a metadata file was rejected."""
    BAD_LINE_ENDING = "bad_line_ending"
    PARSE_ERROR = "parse_error"
    LANGUAGE_KEY_MISMATCH = "language_key_mismatch"
    SCHEMA_VIOLATION = "schema_violation"
    SPELLCHECK_FAILURE = "spellcheck_failure"


def format_label(package: str, language: str, message: str) -> str:
    return f"[Package: {package}; Language: {language}]: {message}"


class LintResult:
    """Verdict for a single metadata file.

    A result passes until fail() is called. Diagnostics are informational
    messages (schema violations, parser details) collected along the way;
    they are reported whether or not the file ends up failing.
    """

    def __init__(self, file_path: Path, package: str, language: str):
        """Initialize lint result.

        Args:
            file_path: Path to the file being linted
            package: Package identifier (vendor/name)
            language: Language code taken from the file name
        """
        self.file_path = file_path
        self.package = package
        self.language = language
        self.reason: Optional[FailureReason] = None
        self.message: Optional[str] = None
        self.diagnostics: List[Dict[str, Any]] = []

    @property
    def passed(self) -> bool:
        return self.reason is None

    def fail(self, reason: FailureReason, message: str):
        self.reason = reason
        self.message = message

    def add_diagnostic(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ):
        """Add a diagnostic message.

        Args:
            message: Diagnostic message
            line: Optional line number where the problem occurred
        """
        diagnostic = {'message': message}
        if line is not None:
            diagnostic['line'] = line
        if column is not None:
            diagnostic['column'] = column
        if yaml_path is not None:
            diagnostic['yaml_path'] = yaml_path
        self.diagnostics.append(diagnostic)

    def label(self) -> str:
        """The user-facing failure line; only meaningful for failed results."""
        return format_label(self.package, self.language, self.message or "")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'package': self.package,
            'language': self.language,
            'passed': self.passed,
            'reason': self.reason.value if self.reason else None,
            'message': self.message,
            'diagnostics': self.diagnostics,
        }
