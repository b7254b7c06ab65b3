"""Command-line entrypoint: convert a local SQLite file and print the envelope.

Run with: python -m app.cli path/to/file.db [--pretty]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from app.logging_setup import configure_logging
from app.services.converter import convert_sqlite


def main(argv: list[str] | None = None) -> int:
    """Convert one file; exit status is 0 on success, 1 on a classified error."""
    parser = argparse.ArgumentParser(description="Convert a SQLite database to JSON.")
    parser.add_argument("path", type=Path, help="SQLite database file")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    args = parser.parse_args(argv)

    configure_logging(stream=sys.stderr)

    content = args.path.read_bytes() if args.path.is_file() else None
    response = convert_sqlite(content, args.path.name)

    print(response.model_dump_json(by_alias=True, indent=2 if args.pretty else None))
    return 0 if response.success else 1


if __name__ == "__main__":
    sys.exit(main())
