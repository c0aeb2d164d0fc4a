"""Tests for validating a single metadata file."""

from unittest.mock import Mock

import pytest

from package_metadata_linter.exceptions import RegistryLookupError
from package_metadata_linter.linter import FailureReason, FileLinter
from package_metadata_linter.linter.file_linter import has_single_trailing_newline
from package_metadata_linter.models.metadata_file import MetadataFile

VALID_EN = "en:\n  title: News module\n  description: A simple news module for Contao.\n"


class TestLineEnding:
    @pytest.mark.parametrize(
        "content,expected",
        [
            ("a: b\n", True),
            ("a: b", False),
            ("a: b\n\n", False),
            ("a: b\n\n\n", False),
            ("", False),
            ("\n", True),
            ("a: b\r\n", True),
        ],
    )
    def test_single_trailing_newline(self, content, expected):
        assert has_single_trailing_newline(content) is expected

    @pytest.mark.parametrize("content", [VALID_EN.rstrip("\n"), VALID_EN + "\n"])
    def test_bad_line_ending_fails_first(self, file_linter, registry, write_file, content):
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.BAD_LINE_ENDING
        assert result.message == "All files must end by a single new line."
        assert registry.calls == []


class TestStructure:
    def test_valid_file_passes(self, file_linter, write_file):
        result = file_linter.lint(write_file("vendor/news", "en.yaml", VALID_EN))
        assert result.passed
        assert result.package == "vendor/news"
        assert result.language == "en"
        assert result.diagnostics == []

    def test_yml_extension(self, file_linter, write_file):
        result = file_linter.lint(write_file("vendor/news", "en.yml", VALID_EN))
        assert result.passed
        assert result.language == "en"

    @pytest.mark.parametrize(
        "content",
        ["en:\n  title: [unclosed\n", "en:\n\ttitle: tab\n", "en: {a: b\n"],
    )
    def test_malformed_yaml_is_parse_error(self, file_linter, write_file, content):
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.PARSE_ERROR
        assert result.message == "The YAML file is invalid"
        assert result.diagnostics

    def test_invalid_utf8_is_parse_error(self, file_linter, meta_dir):
        path = meta_dir / "vendor" / "news" / "en.yaml"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"en:\n  title: \xff\xfe\n")
        assert file_linter.lint(path).reason is FailureReason.PARSE_ERROR

    def test_language_key_mismatch(self, file_linter, registry, write_file):
        result = file_linter.lint(write_file("vendor/news", "de.yaml", "en:\n  title: Foo\n"))
        assert result.reason is FailureReason.LANGUAGE_KEY_MISMATCH
        assert registry.calls == []

    @pytest.mark.parametrize("content", ["\n", "- en\n", "just text\n"])
    def test_non_mapping_document_is_language_mismatch(self, file_linter, write_file, content):
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.LANGUAGE_KEY_MISMATCH

    def test_label_format(self, file_linter, write_file):
        result = file_linter.lint(write_file("vendor/news", "de.yaml", "en:\n  title: Foo\n"))
        assert result.label() == (
            "[Package: vendor/news; Language: de]: "
            "The language key in the YAML file does not match the specified language file name."
        )


class TestContent:
    def test_private_package_requires_homepage(self, file_linter, registry, write_file):
        registry.private["vendor/secret"] = True
        result = file_linter.lint(write_file("vendor/secret", "en.yaml", VALID_EN))
        assert result.reason is FailureReason.SCHEMA_VIOLATION
        assert result.message == "The YAML file contains invalid data."
        assert [d["message"] for d in result.diagnostics] == ["'homepage' is a required property"]

    def test_private_package_with_homepage_passes(self, file_linter, registry, write_file):
        registry.private["vendor/secret"] = True
        content = VALID_EN + "  homepage: https://example.org\n"
        assert file_linter.lint(write_file("vendor/secret", "en.yaml", content)).passed

    def test_schema_violations_are_reported_with_location(self, file_linter, write_file):
        content = "en:\n  title: News module\n  support:\n    issues: nope\n"
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.SCHEMA_VIOLATION
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic["message"].endswith("[support.issues]")
        assert diagnostic["line"] == 4
        assert diagnostic["yaml_path"] == "/en/support/issues"

    def test_spellcheck_failure_on_title(self, file_linter, write_file):
        content = "en:\n  title: Nwes modle\n  description: Nwes\n"
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.SPELLCHECK_FAILURE
        assert result.message == (
            'Property "title" does not pass the spell checker. '
            "Either update the whitelist or fix the spelling :) Errors: Nwes, modle"
        )

    def test_spellcheck_stops_at_first_failing_property(self, file_linter, write_file):
        spell_checker = Mock()
        spell_checker.spell_check.return_value = ["Nwes"]
        linter = FileLinter(file_linter.schema_validator, spell_checker, file_linter.registry)
        content = "en:\n  title: Nwes\n  description: Nwes\n"
        linter.lint(write_file("vendor/news", "en.yaml", content))
        spell_checker.spell_check.assert_called_once_with("Nwes", "en")

    def test_description_is_checked_in_file_language(self, file_linter, write_file):
        content = "de:\n  title: Bilder\n  description: Ein Inhaltselement für Bilder\n"
        assert file_linter.lint(write_file("vendor/gallery", "de.yaml", content)).passed

    def test_spellcheck_failure_keeps_schema_diagnostics(self, file_linter, write_file):
        content = "en:\n  title: Nwes\n  extra: 1\n"
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.SPELLCHECK_FAILURE
        assert len(result.diagnostics) == 1

    def test_non_string_title_is_left_to_schema(self, file_linter, write_file):
        result = file_linter.lint(write_file("vendor/news", "en.yaml", "en:\n  title: 42\n"))
        assert result.reason is FailureReason.SCHEMA_VIOLATION
        assert result.diagnostics[0]["message"].endswith("[title]")

    def test_registry_errors_propagate(self, schema_validator, spell_checker, write_file):
        registry = Mock()
        registry.is_private.side_effect = RegistryLookupError("boom")
        linter = FileLinter(schema_validator, spell_checker, registry)
        with pytest.raises(RegistryLookupError):
            linter.lint(write_file("vendor/news", "en.yaml", VALID_EN))


class TestMetadataFile:
    def test_identity_from_path(self, tmp_path):
        metadata_file = MetadataFile.from_path(tmp_path / "meta" / "acme" / "news-bundle" / "fr.yml")
        assert metadata_file.package == "acme/news-bundle"
        assert metadata_file.language == "fr"


class TestYamlScalars:
    @pytest.mark.parametrize(
        "content",
        [
            "en:\n  title: News module\n  2024-01-01: x\n",
            "en:\n  title: News module\n  suggest:\n    2024-01-01: x\n",
        ],
    )
    def test_date_keys_fail_the_schema(self, file_linter, write_file, content):
        result = file_linter.lint(write_file("vendor/news", "en.yaml", content))
        assert result.reason is FailureReason.SCHEMA_VIOLATION
        assert result.diagnostics
