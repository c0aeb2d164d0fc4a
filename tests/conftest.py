"""Shared fixtures for the metadata linter tests."""

from pathlib import Path
from typing import Dict, List

import pytest

from package_metadata_linter.config import LinterConfig
from package_metadata_linter.linter.file_linter import FileLinter
from package_metadata_linter.models.json_schema_loader import clear_cache, load_schema
from package_metadata_linter.models.schema_validator import SchemaValidator
from package_metadata_linter.spelling.spell_checker import SpellChecker

DICTIONARY = frozenset(
    {
        "a", "an", "and", "for", "the", "of", "with", "your", "to",
        "simple", "news", "module", "extension", "gallery", "image", "images", "shows",
        "ein", "eine", "für", "und", "modul", "erweiterung", "bilder",
    }
)


def stub_dictionary(language: str):
    return DICTIONARY


class FakeRegistry:
    """Stands in for RegistryLookupCache without network access."""

    def __init__(self, private: Dict[str, bool] = None):
        self.private = private or {}
        self.calls: List[str] = []

    def is_private(self, package: str) -> bool:
        self.calls.append(package)
        return self.private.get(package, False)


@pytest.fixture(autouse=True)
def _clear_schema_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def schema_path() -> Path:
    return Path(LinterConfig().schema_path)


@pytest.fixture
def schema_validator(schema_path: Path) -> SchemaValidator:
    return SchemaValidator(load_schema(schema_path))


@pytest.fixture
def whitelist_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "whitelists"
    directory.mkdir()
    (directory / "global.txt").write_text("# shared\nContao\nSEO\n", encoding="utf-8")
    (directory / "de.txt").write_text("Backend\n\nInhaltselement\n", encoding="utf-8")
    return directory


@pytest.fixture
def spell_checker(whitelist_dir: Path) -> SpellChecker:
    return SpellChecker(whitelist_dir, dictionary_factory=stub_dictionary)


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def file_linter(schema_validator, spell_checker, registry) -> FileLinter:
    return FileLinter(schema_validator, spell_checker, registry)


@pytest.fixture
def meta_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "meta"
    directory.mkdir()
    return directory


def write_metadata(meta_dir: Path, package: str, file_name: str, content: str) -> Path:
    path = meta_dir / package / file_name
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the exact line endings under test
    with open(path, "w", encoding="utf-8", newline="") as stream:
        stream.write(content)
    return path


@pytest.fixture
def write_file(meta_dir: Path):
    def _write(package: str, file_name: str, content: str) -> Path:
        return write_metadata(meta_dir, package, file_name, content)
    return _write
