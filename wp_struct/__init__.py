"""wp-struct - record/struct marshalling and flat-file drafts for a blogging API"""

from ._version import version as __version__
from .errors import (
    CoercionError,
    InvalidFormatError,
    PopulateError,
    SourceReadError,
    TypeResolutionError,
    WPStructError,
)
from .flatfile import FlatFileParser, ParseResult, TypeNameResolver, load_record
from .mapping import RecordPatch, StructMapper, populate, serialize
from .records import Post
from .registry import RECORD_TYPES, RecordRegistry
from .struct import Struct


__all__ = [
    "RECORD_TYPES",
    "CoercionError",
    "FlatFileParser",
    "InvalidFormatError",
    "ParseResult",
    "PopulateError",
    "Post",
    "RecordPatch",
    "RecordRegistry",
    "SourceReadError",
    "Struct",
    "StructMapper",
    "TypeNameResolver",
    "TypeResolutionError",
    "WPStructError",
    "__version__",
    "load_record",
    "populate",
    "serialize",
]
