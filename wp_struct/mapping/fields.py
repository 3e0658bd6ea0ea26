"""Per-type field tables derived from record dataclasses."""

from __future__ import annotations

import dataclasses
import enum
import functools
import types
import typing
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from .patch import RecordPatch


class FieldKind(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    RECORD = "record"
    LIST = "list"


_SCALAR_KINDS: dict[type, FieldKind] = {
    str: FieldKind.STRING,
    int: FieldKind.INTEGER,
    bool: FieldKind.BOOLEAN,
    datetime: FieldKind.DATETIME,
}


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One row of a record's field table.

    ``item_kind`` and ``record_type`` describe list elements for LIST
    fields and the nested type for RECORD fields.
    """

    name: str
    key: str
    kind: FieldKind
    item_kind: FieldKind | None = None
    record_type: type | None = None


def _strip_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _scalar_or_record(annotation: Any) -> tuple[FieldKind, type | None] | None:
    if annotation in _SCALAR_KINDS:
        return _SCALAR_KINDS[annotation], None
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return FieldKind.RECORD, annotation
    return None


def _spec_for(cls: type, name: str, annotation: Any) -> FieldSpec:
    annotation = _strip_optional(annotation)
    resolved = _scalar_or_record(annotation)
    if resolved is not None:
        kind, record_type = resolved
        return FieldSpec(name=name, key=name, kind=kind, record_type=record_type)

    if typing.get_origin(annotation) is list:
        (item_annotation,) = typing.get_args(annotation) or (None,)
        item = _scalar_or_record(item_annotation)
        if item is not None:
            item_kind, record_type = item
            return FieldSpec(name=name, key=name, kind=FieldKind.LIST, item_kind=item_kind, record_type=record_type)

    msg = f"unsupported field type for {cls.__name__}.{name}: {annotation!r}"
    raise TypeError(msg)


@functools.cache
def field_table(cls: type) -> tuple[FieldSpec, ...]:
    """Return the field table for a record dataclass, built once per type.

    Fields owned by the type's ``__struct_patch__`` are excluded; the patch
    handles them after the generic stage.
    """
    if not dataclasses.is_dataclass(cls):
        msg = f"not a record dataclass: {cls!r}"
        raise TypeError(msg)

    hints = typing.get_type_hints(cls)
    patch = record_patch(cls)
    owned = patch.fields if patch is not None else frozenset()
    return tuple(
        _spec_for(cls, field.name, hints[field.name])
        for field in dataclasses.fields(cls)
        if field.name not in owned
    )


def record_patch(cls: type) -> RecordPatch | None:
    """Return the per-type patch declared by a record class, if any."""
    return getattr(cls, "__struct_patch__", None)
