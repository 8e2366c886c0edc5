#!/usr/bin/env python3
"""Convert between qyaml and JSON."""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from qyaml.codec import Coder, defaults
from qyaml.errors import QyamlError
from qyaml.values import ABSENT


def log(line: str) -> None:
    """Log a timestamped message to stderr (stdout carries the converted data).

    Args:
        line: Log message
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    print(f"[{timestamp}] {line}", file=sys.stderr)


def _read(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _json_default(value: Any) -> Any:
    if value is ABSENT:
        return None
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def run(coder: Coder, command: str, source: str) -> str:
    """Convert the contents of ``source`` and return the output text."""
    text = _read(source)
    if command == "decode":
        decoded = coder.decode(text)
        return json.dumps(decoded, default=_json_default, ensure_ascii=False, indent=2) + "\n"
    return coder.encode(json.loads(text))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="qyaml", description=__doc__)
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Spaces per nesting level when encoding (default: $QYAML_INDENT or 2)",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    decode_cmd = commands.add_parser("decode", help="Read qyaml, print JSON")
    decode_cmd.add_argument("file", nargs="?", default="-", help="Input file, - for stdin")
    encode_cmd = commands.add_parser("encode", help="Read JSON, print qyaml")
    encode_cmd.add_argument("file", nargs="?", default="-", help="Input file, - for stdin")
    args = parser.parse_args(argv)

    overrides = {} if args.indent is None else {"indent": args.indent}
    try:
        coder = defaults(**overrides)
    except ValidationError as exc:
        parser.error(f"invalid options: {exc.errors()[0]['msg']}")

    try:
        output = run(coder, args.command, args.file)
    except QyamlError as exc:
        log(f"{args.file}: {exc}")
        return 1
    except (OSError, json.JSONDecodeError) as exc:
        log(f"{args.file}: cannot read input: {exc}")
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
