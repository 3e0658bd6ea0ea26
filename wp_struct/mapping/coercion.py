"""Scalar coercions from untyped struct values to declared field types."""

from __future__ import annotations

import re
import xmlrpc.client
from datetime import datetime
from typing import TYPE_CHECKING, Any

from wp_struct.errors import CoercionError

from .fields import FieldKind


if TYPE_CHECKING:
    from collections.abc import Callable


_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})
# XML-RPC dateTime.iso8601 compact form, e.g. 20240115T09:30:00
_XMLRPC_DATE_FORMATS = ("%Y%m%dT%H:%M:%S", "%Y%m%dT%H%M%S")


def to_string(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise CoercionError(path, value, FieldKind.STRING.value)


def to_integer(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise CoercionError(path, value, FieldKind.INTEGER.value)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.match(value.strip()):
        return int(value.strip())
    raise CoercionError(path, value, FieldKind.INTEGER.value)


def to_boolean(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise CoercionError(path, value, FieldKind.BOOLEAN.value)


def parse_datetime(text: str) -> datetime:
    """Parse ISO 8601 or XML-RPC compact date strings.

    Raises ValueError when neither form matches.
    """
    text = text.strip()
    compact = text.removesuffix("Z")
    for fmt in _XMLRPC_DATE_FORMATS:
        try:
            return datetime.strptime(compact, fmt)  # noqa: DTZ007
        except ValueError:
            continue
    return datetime.fromisoformat(text)


def to_datetime(value: Any, path: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, xmlrpc.client.DateTime):
        value = value.value
    if isinstance(value, str):
        try:
            return parse_datetime(value)
        except ValueError as exc:
            raise CoercionError(path, value, FieldKind.DATETIME.value, str(exc)) from exc
    raise CoercionError(path, value, FieldKind.DATETIME.value)


SCALAR_COERCIONS: dict[FieldKind, Callable[[Any, str], Any]] = {
    FieldKind.STRING: to_string,
    FieldKind.INTEGER: to_integer,
    FieldKind.BOOLEAN: to_boolean,
    FieldKind.DATETIME: to_datetime,
}
