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

"""Fail-fast lint run over a sequence of metadata files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .file_linter import FileLinter
from .report import LintResult

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    results: List[LintResult] = field(default_factory=list)
    failure: Optional[LintResult] = None

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


class LintRunner:
    """Lint files in order and stop at the first one that fails.

    Only one failure is ever reported per run; files after it are not read.
    """

    def __init__(self, file_linter: FileLinter):
        self.file_linter = file_linter

    def run(self, file_paths: Iterable[Path]) -> RunOutcome:
        outcome = RunOutcome()
        for file_path in file_paths:
            result = self.file_linter.lint(Path(file_path))
            outcome.results.append(result)
            if not result.passed:
                logger.debug(f"Stopping after first failure: {result.file_path}")
                outcome.failure = result
                break
        return outcome
