"""Flat ``key: value`` text format parsing."""

from .parser import Diagnostic, FlatFileParser, ParseResult, load_record
from .resolver import TypeNameResolver, class_name_for_key


__all__ = [
    "Diagnostic",
    "FlatFileParser",
    "ParseResult",
    "TypeNameResolver",
    "class_name_for_key",
    "load_record",
]
