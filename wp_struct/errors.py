"""wp-struct error hierarchy.

All project exceptions inherit from WPStructError. Each also derives from
the builtin a caller would otherwise expect, so ``except ValueError`` and
``except LookupError`` keep working at existing call sites.

Hierarchy:
    WPStructError
    ├── CoercionError          (ValueError)
    ├── PopulateError          (ValueError)
    ├── TypeResolutionError    (LookupError)
    └── FlatFileError
        ├── InvalidFormatError (ValueError)
        └── SourceReadError    (OSError)
"""

from __future__ import annotations

from typing import Any


class WPStructError(Exception):
    """Base class for all wp-struct errors."""


class CoercionError(WPStructError, ValueError):
    """A struct value could not be converted to a field's declared type."""

    def __init__(self, path: str, value: Any, expected: str, reason: str | None = None) -> None:
        self.path = path
        self.value = value
        self.expected = expected
        self.reason = reason
        msg = f"cannot coerce {path}: expected {expected}, got {type(value).__name__} {value!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)

    def at(self, prefix: str) -> CoercionError:
        """Return a copy of this error with its path nested under ``prefix``."""
        path = f"{prefix}{self.path}" if self.path.startswith("[") else f"{prefix}.{self.path}"
        return CoercionError(path, self.value, self.expected, self.reason)


class PopulateError(WPStructError, ValueError):
    """One or more fields failed to populate in strict mode."""

    def __init__(self, errors: list[CoercionError]) -> None:
        self.errors = errors
        paths = ", ".join(error.path for error in errors)
        msg = f"{len(errors)} field(s) failed to populate: {paths}"
        super().__init__(msg)


class TypeResolutionError(WPStructError, LookupError):
    """A list key did not resolve to a registered record type."""

    def __init__(self, key: str, class_name: str) -> None:
        self.key = key
        self.class_name = class_name
        msg = f"no record type {class_name!r} for key {key!r}"
        super().__init__(msg)


class FlatFileError(WPStructError):
    """Base class for fatal flat-file parse errors."""


class InvalidFormatError(FlatFileError, ValueError):
    """The flat file does not follow the ``key: value`` line grammar."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        msg = f"line {line_number}: continuation line before any key: {line!r}"
        super().__init__(msg)


class SourceReadError(FlatFileError, OSError):
    """The flat-file source could not be opened or read."""
