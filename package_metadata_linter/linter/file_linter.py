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

"""Per-file validation of package metadata."""

import logging
from pathlib import Path
from typing import Any, Optional

from ..exceptions import MetadataParseError
from ..file_io.source_location import lookup_source
from ..models.metadata_file import MetadataFile
from ..models.schema_validator import SchemaValidator
from ..parsers.yaml_parser import YamlParser, SourceMap, yaml_parser
from ..registry.packagist import RegistryLookupCache
from ..spelling.spell_checker import SpellChecker
from .report import FailureReason, LintResult

logger = logging.getLogger(__name__)

SPELLCHECKED_PROPERTIES = ('title', 'description')

BAD_LINE_ENDING_MESSAGE = "All files must end by a single new line."
PARSE_ERROR_MESSAGE = "The YAML file is invalid"
LANGUAGE_KEY_MESSAGE = "The language key in the YAML file does not match the specified language file name."
INVALID_DATA_MESSAGE = "The YAML file contains invalid data."
SPELLCHECK_MESSAGE = (
    'Property "{key}" does not pass the spell checker. '
    'Either update the whitelist or fix the spelling :) Errors: {errors}'
)


def has_single_trailing_newline(content: str) -> bool:
    return content.endswith("\n") and not content.endswith("\n\n")


class FileLinter:
    """Validate one metadata file, stopping at the first failing check.

    Checks run in order: line ending, YAML syntax, language key, then the
    content of the language record (schema and spelling). Whether the
    package is private decides if the schema demands a homepage.
    """

    def __init__(
        self,
        schema_validator: SchemaValidator,
        spell_checker: SpellChecker,
        registry: RegistryLookupCache,
        parser: Optional[YamlParser] = None,
    ):
        self.schema_validator = schema_validator
        self.spell_checker = spell_checker
        self.registry = registry
        self.parser = parser or yaml_parser

    def lint(self, file_path: Path) -> LintResult:
        """Lint a metadata file read from disk."""
        metadata_file = MetadataFile.from_path(file_path)
        try:
            content = self.parser.read_text(metadata_file.path)
        except UnicodeDecodeError as e:
            result = LintResult(metadata_file.path, metadata_file.package, metadata_file.language)
            result.add_diagnostic(f"File is not valid UTF-8: {e}")
            result.fail(FailureReason.PARSE_ERROR, PARSE_ERROR_MESSAGE)
            return result
        return self.lint_content(metadata_file, content)

    def lint_content(self, metadata_file: MetadataFile, content: str) -> LintResult:
        """Lint already-loaded content of a metadata file.

        Registry lookup failures are not caught here; they are not a defect
        of the file and abort the run.
        """
        result = LintResult(metadata_file.path, metadata_file.package, metadata_file.language)

        if not has_single_trailing_newline(content):
            result.fail(FailureReason.BAD_LINE_ENDING, BAD_LINE_ENDING_MESSAGE)
            return result

        try:
            document, source_map = self.parser.parse_with_source(content)
        except MetadataParseError as e:
            result.add_diagnostic(str(e))
            result.fail(FailureReason.PARSE_ERROR, PARSE_ERROR_MESSAGE)
            return result

        language = metadata_file.language
        if not isinstance(document, dict) or language not in document:
            result.fail(FailureReason.LANGUAGE_KEY_MISMATCH, LANGUAGE_KEY_MESSAGE)
            return result

        requires_homepage = self.registry.is_private(metadata_file.package)
        logger.debug(f"{metadata_file.package}: homepage required = {requires_homepage}")

        self._validate_content(result, document[language], requires_homepage, source_map)
        return result

    def _validate_content(
        self,
        result: LintResult,
        record: Any,
        requires_homepage: bool,
        source_map: SourceMap,
    ):
        is_valid, issues = self.schema_validator.validate(record, requires_homepage)

        prefix = "/" + result.language.replace("~", "~0").replace("/", "~1")
        for issue in issues:
            message = issue.message
            if issue.property_path:
                message = f"{message} [{issue.property_path}]"
            loc = lookup_source(source_map, prefix + issue.yaml_path)
            result.add_diagnostic(message, line=loc.line, column=loc.column, yaml_path=loc.yaml_path)

        if isinstance(record, dict):
            for key in SPELLCHECKED_PROPERTIES:
                value = record.get(key)
                # Non-string values are a schema problem, not a spelling one.
                if not isinstance(value, str):
                    continue

                errors = self.spell_checker.spell_check(value, result.language)
                if errors:
                    result.fail(
                        FailureReason.SPELLCHECK_FAILURE,
                        SPELLCHECK_MESSAGE.format(key=key, errors=", ".join(errors)),
                    )
                    return

        if not is_valid:
            result.fail(FailureReason.SCHEMA_VIOLATION, INVALID_DATA_MESSAGE)
