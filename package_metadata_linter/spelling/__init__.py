"""Spellchecking with per-language and global whitelists."""

from .spell_checker import SpellChecker, default_dictionary

__all__ = ["SpellChecker", "default_dictionary"]
