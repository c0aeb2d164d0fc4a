#!/usr/bin/env python3
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

"""CLI entry point for linting package metadata files."""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from jsonschema.exceptions import SchemaError

from ..config import LinterConfig
from ..exceptions import LinterConfigurationError
from ..file_io.source_location import SourceLocation, format_source
from ..models.metadata_file import METADATA_EXTENSIONS
from ..utils.github_actions import format_command
from . import build_file_linter
from .report import LintResult
from .runner import LintRunner, RunOutcome

logger = logging.getLogger(__name__)

TITLE = "Package metadata linter"
SUCCESS_MESSAGE = "All checks successful!"


def find_metadata_files(meta_dir: Path) -> List[Path]:
    """Find all ``<vendor>/<name>/<language>.yaml`` files below meta_dir.

    Files at any other depth are ignored.
    """
    if not meta_dir.is_dir():
        raise LinterConfigurationError(f"Metadata directory does not exist: {meta_dir}")

    metadata_files: List[Path] = []
    for ext in METADATA_EXTENSIONS:
        metadata_files.extend(p for p in meta_dir.glob(f"*/*/*{ext}") if p.is_file())

    return sorted(set(metadata_files))


def _print_title(text: str) -> None:
    print()
    print(text)
    print("=" * len(text))
    print()


def _report_human(outcome: RunOutcome) -> None:
    _print_title(TITLE)
    for result in outcome.results:
        for diagnostic in result.diagnostics:
            loc = SourceLocation(
                file_path=result.file_path,
                line=diagnostic.get('line'),
                column=diagnostic.get('column'),
            )
            print(f" [ERROR] {diagnostic['message']} ({format_source(loc)})")

    if outcome.failure is not None:
        print(f" [ERROR] {outcome.failure.label()}")
    else:
        print(f" [OK] {SUCCESS_MESSAGE}")


def _report_github_actions(outcome: RunOutcome) -> None:
    for result in outcome.results:
        for diagnostic in result.diagnostics:
            print(format_command(
                'error',
                diagnostic['message'],
                file=str(result.file_path),
                line=diagnostic.get('line', 1),
                column=diagnostic.get('column'),
            ))

    if outcome.failure is not None:
        print(format_command('error', outcome.failure.label(), file=str(outcome.failure.file_path)))
    else:
        print(SUCCESS_MESSAGE)


def _report_json(outcome: RunOutcome) -> None:
    failure: Optional[LintResult] = outcome.failure
    output = {
        'success': outcome.success,
        'files_checked': len(outcome.results),
        'failure': failure.to_dict() if failure is not None else None,
        'diagnostics': [
            dict(d, file=str(r.file_path))
            for r in outcome.results
            for d in r.diagnostics
        ],
    }
    print(json.dumps(output, indent=2))


REPORTERS = {
    'human': _report_human,
    'github-actions': _report_github_actions,
    'json': _report_json,
}


def build_config(args: argparse.Namespace) -> LinterConfig:
    """Environment configuration with command line overrides applied."""
    config = LinterConfig.from_env()
    overrides = {}
    if args.meta_dir:
        overrides['meta_dir'] = args.meta_dir
    if args.schema:
        overrides['schema_path'] = args.schema
    if args.whitelists:
        overrides['whitelist_dir'] = args.whitelists
    if args.registry_url:
        overrides['registry_url'] = args.registry_url.rstrip('/')
    if args.verbose:
        overrides['log_level'] = 'DEBUG'
    return dataclasses.replace(config, **overrides)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Lint all the package metadata.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'meta_dir',
        nargs='?',
        default=None,
        help='Metadata root containing <vendor>/<name>/<language>.yaml files (default: meta)',
    )
    parser.add_argument('--schema', default=None, help='JSON Schema for a single language record')
    parser.add_argument('--whitelists', default=None, help='Directory with spellcheck whitelists')
    parser.add_argument('--registry-url', default=None, help='Base URL of the package registry')
    parser.add_argument(
        '--format',
        choices=sorted(REPORTERS),
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the linter CLI."""
    args = build_parser().parse_args(argv)
    config = build_config(args)
    config.set_logging(workflow_commands=args.format == 'github-actions')

    try:
        metadata_files = find_metadata_files(Path(config.meta_dir))
        file_linter = build_file_linter(config)
    except (LinterConfigurationError, FileNotFoundError, json.JSONDecodeError, SchemaError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not metadata_files:
        print(f"No metadata files found in {config.meta_dir}.", file=sys.stderr)
        sys.exit(1)

    logger.debug(f"Linting {len(metadata_files)} metadata files")

    # Registry failures propagate: the policy for the package cannot be decided.
    outcome = LintRunner(file_linter).run(metadata_files)

    REPORTERS[args.format](outcome)
    sys.exit(outcome.exit_code)


if __name__ == '__main__':
    main()
