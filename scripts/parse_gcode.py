#!/usr/bin/env python3
"""Parse a G-code file and print one record per line.

Usage
-----
::

    python scripts/parse_gcode.py program.nc
    python scripts/parse_gcode.py program.nc --line-mode compact --flatten
    cat program.gcode | python scripts/parse_gcode.py - --format text
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure package is importable when running from the scripts/ directory
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

from gcodestream.api import parse_file, parse_file_sync, parse_stream
from gcodestream.config import LINE_MODES, ParserConfig
from gcodestream.errors import GCodeSourceError
from gcodestream.gcode.parser import LineRecord


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="parse_gcode",
        description="Parse G-code into words, comments and commands",
    )
    p.add_argument("source", help="G-code file to parse, or '-' for stdin")
    p.add_argument(
        "--line-mode", "-m",
        choices=LINE_MODES,
        default=LINE_MODES[0],
        help="Rendering of each record's line (default: original)",
    )
    p.add_argument(
        "--flatten",
        action="store_true",
        help="Emit words as 'X10.5' strings instead of [letter, value] pairs",
    )
    p.add_argument(
        "--batch-size",
        type=int,
        default=1000,
        metavar="N",
        help="Lines parsed per scheduling turn in streaming mode",
    )
    p.add_argument(
        "--sync",
        action="store_true",
        help="Read the whole file at once instead of streaming it in chunks",
    )
    p.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json, one object per line)",
    )
    p.add_argument(
        "--fail-on-checksum",
        action="store_true",
        help="Exit with status 2 if any line fails its checksum",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def _format_text(record: LineRecord) -> str:
    parts = [record.line]
    if record.words:
        parts.append("words: " + " ".join(
            w if isinstance(w, str) else f"{w[0]}={w[1]}" for w in record.words
        ))
    if record.cmds:
        parts.append("cmds: " + " | ".join(record.cmds))
    if record.comments:
        parts.append("comments: " + " | ".join(record.comments))
    if record.line_number is not None:
        parts.append(f"N={record.line_number}")
    if record.checksum is not None:
        status = "FAILED" if record.checksum_failed else "ok"
        parts.append(f"checksum={record.checksum} ({status})")
    return "  ".join(parts)


def _load(args: argparse.Namespace, config: ParserConfig) -> list[LineRecord]:
    if args.source == "-":
        return asyncio.run(parse_stream(sys.stdin.buffer, config))
    if args.sync:
        return parse_file_sync(args.source, config)
    return asyncio.run(parse_file(args.source, config))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = ParserConfig(
            line_mode=args.line_mode,
            flatten=args.flatten,
            batch_size=args.batch_size,
        )
    except ValueError as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    try:
        records = _load(args, config)
    except (OSError, GCodeSourceError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    for record in records:
        if args.format == "text":
            print(_format_text(record))
        else:
            print(json.dumps(record.to_dict()))

    failed = sum(1 for r in records if r.checksum_failed)
    if failed:
        print(f"WARNING: {failed} line(s) failed checksum", file=sys.stderr)
        if args.fail_on_checksum:
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
