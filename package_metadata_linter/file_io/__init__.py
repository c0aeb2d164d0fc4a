"""File I/O related utilities.

This package groups small modules that deal with locating things inside
metadata files for diagnostics.
"""

from .source_location import SourceLocation, lookup_source, format_source

__all__ = [
    "SourceLocation",
    "lookup_source",
    "format_source",
]
