"""Generic record <-> struct marshaller."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, TypeVar

from wp_struct.errors import CoercionError, PopulateError
from wp_struct.log import get_logger
from wp_struct.struct import Struct

from .coercion import SCALAR_COERCIONS
from .fields import FieldKind, FieldSpec, field_table, record_patch


logger = get_logger(__name__)

_T = TypeVar("_T")


class StructMapper:
    """Convert between record dataclasses and structs.

    Both directions run the generic field-table codec first and the record
    type's ``__struct_patch__`` (if any) second.
    """

    def populate(self, struct: Mapping[str, Any], target: _T, *, strict: bool = False) -> list[CoercionError]:
        """Populate ``target`` in place from ``struct``.

        Keys absent from the struct (or mapped to None, as plain JSON
        objects may be) leave the matching field untouched.
        A value that cannot be coerced leaves its field unset and is
        reported in the returned list; the other fields still populate,
        so the target may end up partially populated. With ``strict``, a
        PopulateError carrying all field errors is raised instead, after
        every other field has been populated.

        Record instances already present in ``struct`` are deep-copied, so
        the target never shares them with the input.
        """
        errors = self._populate(struct, target)
        for error in errors:
            logger.warning("field not populated", record=type(target).__name__, path=error.path, error=str(error))
        if strict and errors:
            raise PopulateError(errors)
        return errors

    def serialize(self, record: Any) -> Struct:
        """Return a new struct with one entry per non-None field of ``record``."""
        result = Struct()
        for spec in field_table(type(record)):
            value = getattr(record, spec.name)
            if value is None:
                continue
            result[spec.key] = self._serialize_value(spec, value)

        patch = record_patch(type(record))
        if patch is not None:
            patch.serialize(record, result)
        return result

    def _populate(self, struct: Mapping[str, Any], target: Any) -> list[CoercionError]:
        errors: list[CoercionError] = []
        for spec in field_table(type(target)):
            raw_value = struct.get(spec.key)
            if raw_value is None:
                continue
            try:
                value = self._coerce(spec, raw_value, errors)
            except CoercionError as exc:
                errors.append(exc)
                continue
            setattr(target, spec.name, value)

        patch = record_patch(type(target))
        if patch is not None:
            errors.extend(patch.populate(struct, target) or ())
        return errors

    def _coerce(self, spec: FieldSpec, value: Any, errors: list[CoercionError]) -> Any:
        if spec.kind is FieldKind.RECORD:
            return self._nested(spec.record_type, value, spec.key, errors)

        if spec.kind is FieldKind.LIST:
            if not isinstance(value, (list, tuple)):
                raise CoercionError(spec.key, value, "list")
            items: list[Any] = []
            for index, item in enumerate(value):
                path = f"{spec.key}[{index}]"
                if spec.item_kind is FieldKind.RECORD:
                    items.append(self._nested(spec.record_type, item, path, errors))
                else:
                    items.append(SCALAR_COERCIONS[spec.item_kind](item, path))
            return items

        return SCALAR_COERCIONS[spec.kind](value, spec.key)

    def _nested(self, record_type: type | None, value: Any, path: str, errors: list[CoercionError]) -> Any:
        if record_type is None:
            msg = f"field table entry {path} has no record type"
            raise TypeError(msg)
        if isinstance(value, record_type):
            return copy.deepcopy(value)
        if not isinstance(value, Mapping):
            raise CoercionError(path, value, record_type.__name__)
        nested = record_type()
        errors.extend(error.at(path) for error in self._populate(value, nested))
        return nested

    def _serialize_value(self, spec: FieldSpec, value: Any) -> Any:
        if spec.kind is FieldKind.RECORD:
            return self.serialize(value)
        if spec.kind is FieldKind.LIST:
            if spec.item_kind is FieldKind.RECORD:
                return [self.serialize(item) for item in value if item is not None]
            return [item for item in value if item is not None]
        return value


_DEFAULT_MAPPER = StructMapper()


def populate(struct: Mapping[str, Any], target: _T, *, strict: bool = False) -> list[CoercionError]:
    """Populate ``target`` from ``struct`` with the default mapper."""
    return _DEFAULT_MAPPER.populate(struct, target, strict=strict)


def serialize(record: Any) -> Struct:
    """Serialize ``record`` to a struct with the default mapper."""
    return _DEFAULT_MAPPER.serialize(record)
