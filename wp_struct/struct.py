"""Ordered untyped key/value structure exchanged with the remote API."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from datetime import datetime
from typing import Any, Union, override


Value = Union[str, int, bool, datetime, "Struct", list[Any]]


def _normalize(value: Any) -> Any:
    if isinstance(value, Struct):
        return value
    if isinstance(value, (str, int, datetime)):
        return value
    if isinstance(value, Mapping):
        return Struct.from_mapping(value)
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    msg = f"unsupported struct value type: {type(value).__name__}"
    raise TypeError(msg)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Struct):
        return value.to_plain_dict()
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


class Struct(MutableMapping[str, Any]):
    """Ordered mapping of string keys to protocol values.

    Values are limited to strings, integers, booleans, datetimes, nested
    structs and lists of those. Plain dicts and tuples are normalized on
    insertion; ``None`` is rejected since absence is expressed by omission.
    Re-inserting an existing key overwrites its value in place.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._data: dict[str, Any] = {}
        if data is not None:
            self.update(data)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Struct:
        """Build a struct from any mapping, normalizing nested values."""
        return cls(mapping)

    @override
    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    @override
    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str) or not key:
            msg = "struct keys must be non-empty strings"
            raise TypeError(msg)
        self._data[key] = _normalize(value)

    @override
    def __delitem__(self, key: str) -> None:
        del self._data[key]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    @override
    def __len__(self) -> int:
        return len(self._data)

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Struct):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self.to_plain_dict() == {key: _to_plain(value) for key, value in other.items()}
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_plain_dict(self) -> dict[str, Any]:
        """Return a detached plain dict/list tree of the struct contents."""
        return {key: _to_plain(value) for key, value in self._data.items()}

    @override
    def __repr__(self) -> str:
        return f"Struct({self.to_plain_dict()!r})"
