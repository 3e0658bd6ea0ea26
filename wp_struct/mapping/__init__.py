"""Record <-> struct marshalling."""

from .fields import FieldKind, FieldSpec, field_table
from .mapper import StructMapper, populate, serialize
from .patch import RecordPatch, renamed_key


__all__ = [
    "FieldKind",
    "FieldSpec",
    "RecordPatch",
    "StructMapper",
    "field_table",
    "populate",
    "renamed_key",
    "serialize",
]
