"""Process-wide namespace of record types, keyed by class name."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from typing import TypeVar


_R = TypeVar("_R", bound=type)


class RecordRegistry:
    """Map record class names to record classes."""

    def __init__(self) -> None:
        super().__init__()
        self._types: dict[str, type] = {}

    def register(self, cls: _R) -> _R:
        """Register a dataclass record under its class name; usable as a decorator."""
        if not dataclasses.is_dataclass(cls):
            msg = f"record types must be dataclasses: {cls.__name__}"
            raise TypeError(msg)
        name = cls.__name__
        if name in self._types and self._types[name] is not cls:
            msg = f"record type already registered: {name}"
            raise ValueError(msg)
        self._types[name] = cls
        return cls

    def get(self, name: str) -> type | None:
        """Return the record class registered under name, or None."""
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._types))

    def __len__(self) -> int:
        return len(self._types)


RECORD_TYPES = RecordRegistry()
