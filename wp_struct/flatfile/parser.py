"""Parser for the line-oriented ``key: value`` flat text format.

Example::

    # comment
    post_title: Hello
      World
    tags: ["a", "b"]
    custom_fields: [{"key": "k", "value": "v"}]
    ping_status: null

Lines starting with ``#`` and blank lines are skipped. A line matching
``^[A-Za-z0-9_]+:`` starts a key; any other line continues the value of
the previous key. Values equal to ``null`` are dropped, values starting
with ``[`` are JSON arrays, anything else is kept as a string.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from wp_struct.errors import InvalidFormatError, SourceReadError, TypeResolutionError, WPStructError
from wp_struct.log import get_logger
from wp_struct.mapping import StructMapper
from wp_struct.struct import Struct

from .resolver import TypeNameResolver


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from os import PathLike
    from typing import TextIO


logger = get_logger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_]+:")

_T = TypeVar("_T")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A non-fatal problem that caused a key to be skipped."""

    key: str
    line: int
    message: str


@dataclass
class ParseResult:
    """Best-effort struct plus the diagnostics collected while parsing."""

    struct: Struct = field(default_factory=Struct)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_for_diagnostics(self) -> None:
        """Raise WPStructError when any key was skipped."""
        if self.diagnostics:
            details = "; ".join(f"{d.key} (line {d.line}): {d.message}" for d in self.diagnostics)
            msg = f"{len(self.diagnostics)} key(s) skipped: {details}"
            raise WPStructError(msg)


class _SkipKey(Exception):
    """Raised internally to drop the key currently being flushed."""


class FlatFileParser:
    """Parse flat text into a struct, resolving lists of records by key name."""

    def __init__(
        self,
        resolver: TypeNameResolver | None = None,
        mapper: StructMapper | None = None,
        json_decoder: Callable[[str], Any] = json.loads,
        encoding: str = "utf-8",
    ) -> None:
        super().__init__()
        self.resolver = resolver if resolver is not None else TypeNameResolver()
        self.mapper = mapper if mapper is not None else StructMapper()
        self.json_decoder = json_decoder
        self.encoding = encoding

    def parse_file(self, path: str | PathLike[str]) -> ParseResult:
        """Parse the flat file at ``path``."""
        try:
            with Path(path).open(encoding=self.encoding) as stream:
                return self.parse_stream(stream)
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"cannot read {path}: {exc}"
            raise SourceReadError(msg) from exc

    def parse_stream(self, stream: TextIO) -> ParseResult:
        """Parse an open text stream; the caller owns the stream."""
        return self.parse_lines(stream)

    def parse_string(self, text: str) -> ParseResult:
        """Parse flat text held in memory."""
        return self.parse_lines(text.splitlines())

    def parse_lines(self, lines: Iterable[str]) -> ParseResult:
        """Parse physical lines into a struct.

        Raises InvalidFormatError when a continuation line appears before
        any key; no partial result is returned in that case.
        """
        result = ParseResult()
        key: str | None = None
        value = ""
        key_line = 0

        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line.rstrip("\r\n")
            if not line.strip() or line.startswith("#"):
                continue
            if _KEY_RE.match(line):
                if key is not None:
                    self._flush(result, key, value, key_line)
                key, value = line.split(":", 1)
                key_line = line_number
            elif key is None:
                raise InvalidFormatError(line_number, line)
            else:
                value += line.lstrip()

        if key is not None:
            self._flush(result, key, value, key_line)
        return result

    def _flush(self, result: ParseResult, key: str, raw_value: str, line: int) -> None:
        value = raw_value.strip()
        if value.lower() == "null":
            return
        if not value.startswith("["):
            result.struct[key] = value
            return

        try:
            items = self._parse_array(key, value)
        except _SkipKey as exc:
            message = str(exc)
            logger.warning("key skipped", key=key, line=line, reason=message)
            result.diagnostics.append(Diagnostic(key=key, line=line, message=message))
            return
        if items:
            result.struct[key] = items

    def _parse_array(self, key: str, value: str) -> list[Any]:
        try:
            decoded = self.json_decoder(value)
        except (ValueError, RecursionError) as exc:
            msg = f"invalid JSON array: {exc}"
            raise _SkipKey(msg) from exc
        if not isinstance(decoded, list):
            msg = f"expected a JSON array, got {type(decoded).__name__}"
            raise _SkipKey(msg)
        if not decoded:
            return []
        if all(isinstance(item, str) for item in decoded):
            return decoded

        try:
            record_type = self.resolver.resolve(key)
        except TypeResolutionError as exc:
            raise _SkipKey(str(exc)) from exc
        return [self._record_struct(record_type, index, item) for index, item in enumerate(decoded)]

    def _record_struct(self, record_type: type, index: int, item: Any) -> Struct:
        if not isinstance(item, dict):
            msg = f"element {index} is {type(item).__name__}, expected an object"
            raise _SkipKey(msg)
        try:
            record = record_type()
            errors = self.mapper.populate(item, record)
        except TypeError as exc:
            msg = f"cannot build {record_type.__name__} for element {index}: {exc}"
            raise _SkipKey(msg) from exc
        if errors:
            msg = f"element {index}: {errors[0]}"
            raise _SkipKey(msg)
        return self.mapper.serialize(record)


def load_record(path: str | PathLike[str], record_type: type[_T], parser: FlatFileParser | None = None) -> _T:
    """Parse the flat file at ``path`` and populate a new ``record_type``."""
    parser = parser if parser is not None else FlatFileParser()
    result = parser.parse_file(path)
    record = record_type()
    _ = parser.mapper.populate(result.struct, record)
    return record
