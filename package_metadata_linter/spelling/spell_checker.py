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

"""Whitelist-aware spellchecking of metadata texts."""

import logging
import re
from pathlib import Path
from typing import Callable, Collection, Dict, FrozenSet, List, Union

from spellchecker import SpellChecker as _Dictionary

logger = logging.getLogger(__name__)

GLOBAL_WHITELIST = "global"
WHITELIST_SUFFIX = ".txt"

# A word is a run of letters; digits, underscores and punctuation separate words.
WORD_PATTERN = re.compile(r"[^\W\d_]+")

DictionaryFactory = Callable[[str], Collection[str]]


def normalize_word(word: str) -> str:
    return word.casefold()


def default_dictionary(language: str) -> Collection[str]:
    """Return the pyspellchecker word list bundled for the language.

    Languages without a bundled dictionary get an empty one; their texts are
    checked against the whitelists only.
    """
    try:
        dictionary = _Dictionary(language=language, case_sensitive=False)
    except ValueError:
        logger.debug(f"No built-in dictionary for language '{language}', using whitelists only")
        return frozenset()
    logger.debug(f"Loaded built-in dictionary for language '{language}'")
    return dictionary


def read_whitelist(path: Path) -> FrozenSet[str]:
    words = set()
    with open(path, "r", encoding="utf-8") as stream:
        for line in stream:
            word = line.split("#", 1)[0].strip()
            if word:
                words.add(normalize_word(word))
    return frozenset(words)


class SpellChecker:
    """Report words missing from the dictionary and the whitelists.

    Whitelists live in one directory: ``global.txt`` applies to every
    language, ``<language>.txt`` only to that language. Both are read once
    when the checker is created.
    """

    def __init__(
        self,
        whitelist_dir: Union[str, Path],
        dictionary_factory: DictionaryFactory = default_dictionary,
    ):
        self.whitelist_dir = Path(whitelist_dir)
        self._dictionary_factory = dictionary_factory
        self._dictionaries: Dict[str, Collection[str]] = {}
        self._whitelists: Dict[str, FrozenSet[str]] = self._load_whitelists()

    def _load_whitelists(self) -> Dict[str, FrozenSet[str]]:
        if not self.whitelist_dir.is_dir():
            logger.warning(f"Whitelist directory not found: {self.whitelist_dir}")
            return {}

        whitelists = {}
        for path in sorted(self.whitelist_dir.glob(f"*{WHITELIST_SUFFIX}")):
            whitelists[path.stem] = read_whitelist(path)
            logger.debug(f"Loaded {len(whitelists[path.stem])} whitelisted words from {path}")
        return whitelists

    def whitelist(self, language: str) -> FrozenSet[str]:
        """Words accepted for a language: its own list plus the global one."""
        return self._whitelists.get(language, frozenset()) | self._whitelists.get(GLOBAL_WHITELIST, frozenset())

    def _dictionary(self, language: str) -> Collection[str]:
        if language not in self._dictionaries:
            self._dictionaries[language] = self._dictionary_factory(language)
        return self._dictionaries[language]

    def spell_check(self, text: str, language: str) -> List[str]:
        """Return the unknown words of ``text``.

        Each word is reported once, spelled as on its first occurrence, in
        the order it first appears. An empty list means the text passed.
        """
        whitelist = self.whitelist(language)
        dictionary = self._dictionary(language)

        unknown: List[str] = []
        seen = set()
        for match in WORD_PATTERN.finditer(text):
            word = match.group(0)
            normalized = normalize_word(word)
            if normalized in seen:
                continue
            seen.add(normalized)
            if normalized in whitelist:
                continue
            # casefold() and lower() disagree on a few letters (German sharp s)
            if normalized in dictionary or word.lower() in dictionary:
                continue
            unknown.append(word)
        return unknown
