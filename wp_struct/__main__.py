"""Interface for ``python -m wp_struct``."""

from __future__ import annotations

import json
import sys
from argparse import ArgumentParser
from datetime import datetime
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Sequence

from ._version import version
from .errors import FlatFileError
from .flatfile import FlatFileParser
from .log import configure_logging, get_logger
from .registry import RECORD_TYPES


__all__ = ["main"]

logger = get_logger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def main(args: Sequence[str] | None = None) -> int:
    """Parse a flat file and print its struct as JSON."""
    parser = ArgumentParser(prog="wp_struct")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("path", help="flat key: value file to parse")
    _ = parser.add_argument("--type", dest="record_type", choices=list(RECORD_TYPES), help="populate this record type")
    _ = parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    _ = parser.add_argument("--json-logs", action="store_true", help="emit logs as JSON")
    options = parser.parse_args(args)

    configure_logging(verbose=options.verbose, json_logs=options.json_logs)

    flat_parser = FlatFileParser()
    try:
        result = flat_parser.parse_file(options.path)
    except FlatFileError as exc:
        logger.error("cannot parse file", path=options.path, error=str(exc))
        return 1

    struct = result.struct
    if options.record_type is not None:
        record = RECORD_TYPES.get(options.record_type)()
        _ = flat_parser.mapper.populate(struct, record)
        struct = flat_parser.mapper.serialize(record)

    print(json.dumps(struct.to_plain_dict(), default=_json_default, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
