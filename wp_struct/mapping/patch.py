"""Per-type patch stage applied after the generic field-table codec."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wp_struct.errors import CoercionError

from .coercion import to_string


if TYPE_CHECKING:
    from wp_struct.struct import Struct


PopulatePatch = Callable[["Struct", Any], "list[CoercionError] | None"]
SerializePatch = Callable[[Any, "Struct"], None]


@dataclass(frozen=True, slots=True)
class RecordPatch:
    """Override for a record type's struct projection.

    ``fields`` names the record fields the patch owns; the generic stage
    skips them. ``populate`` runs after generic population and may return
    coercion errors. ``serialize`` runs after generic serialization and may
    add or overwrite keys of the struct being built.
    """

    fields: frozenset[str]
    populate: PopulatePatch
    serialize: SerializePatch


def renamed_key(field_name: str, key: str) -> RecordPatch:
    """Patch projecting a string field to and from a different struct key."""

    def populate(struct: Struct, target: Any) -> list[CoercionError] | None:
        value = struct.get(key)
        if value is None:
            return None
        try:
            setattr(target, field_name, to_string(value, path=key))
        except CoercionError as exc:
            return [exc]
        return None

    def serialize(record: Any, struct: Struct) -> None:
        value = getattr(record, field_name)
        if value is not None:
            struct[key] = value

    return RecordPatch(fields=frozenset({field_name}), populate=populate, serialize=serialize)
