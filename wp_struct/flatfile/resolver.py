"""Resolve list keys such as ``custom_fields`` to record types."""

from __future__ import annotations

import re

from wp_struct.errors import TypeResolutionError
from wp_struct.registry import RECORD_TYPES, RecordRegistry


_UNDERSCORE_RE = re.compile(r"_(.)")


def class_name_for_key(key: str) -> str:
    """Derive a record class name from a plural snake_case key.

    ``terms`` -> ``Term``, ``custom_fields`` -> ``CustomField``. The
    singularization only strips one trailing ``s``, so irregular plurals
    and singular nouns ending in ``s`` do not resolve to the intended name.
    """
    if not key:
        msg = "key must not be empty"
        raise ValueError(msg)
    name = _UNDERSCORE_RE.sub(lambda match: match.group(1).upper(), key)
    name = name.removesuffix("s")
    return name[:1].upper() + name[1:]


class TypeNameResolver:
    """Look up the record type for a list key in a record registry."""

    def __init__(self, registry: RecordRegistry = RECORD_TYPES) -> None:
        super().__init__()
        self.registry = registry

    def resolve(self, key: str) -> type:
        """Return the record class for ``key`` or raise TypeResolutionError."""
        class_name = class_name_for_key(key)
        cls = self.registry.get(class_name)
        if cls is None:
            raise TypeResolutionError(key, class_name)
        return cls
