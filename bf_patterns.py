#!/usr/bin/env python3
"""Detect instruction idioms with symbolic addresses in a program."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from bfpatterns import (
    PatternLibrary,
    PatternTemplate,
    decode_instructions,
    default_library,
    find_all,
    parse_pattern,
)
from bfpatterns.report import render_scan, serialize_scan


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("file", type=Path, nargs="?", help="Program to search in")
    parser.add_argument(
        "-p",
        "--pattern",
        action="append",
        dest="patterns",
        default=[],
        help="Pattern to search for, e.g. 'a[-b!+a]'. May be repeated.",
    )
    parser.add_argument(
        "-i",
        "--idiom",
        action="append",
        dest="idioms",
        default=[],
        help="Name of a library idiom to search for. May be repeated.",
    )
    parser.add_argument(
        "--library",
        type=Path,
        default=None,
        help="JSON file with additional named idioms",
    )
    parser.add_argument(
        "--list-idioms",
        action="store_true",
        help="Print the available idioms and exit",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_library(args: argparse.Namespace) -> PatternLibrary:
    if args.library is None:
        return default_library()
    return PatternLibrary.load(args.library)


def resolve_templates(
    args: argparse.Namespace, library: PatternLibrary
) -> List[Tuple[str, PatternTemplate]]:
    templates: List[Tuple[str, PatternTemplate]] = []
    for text in args.patterns:
        templates.append((text, parse_pattern(text)))
    for name in args.idioms:
        if name not in library:
            raise SystemExit(f"error: unknown idiom: {name}")
        templates.append((name, library.compile(name)))
    if not templates:
        raise SystemExit("error: expected at least one --pattern or --idiom")
    return templates


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        library = load_library(args)
        if args.list_idioms:
            for idiom in library:
                print(idiom.describe())
            return
        if args.file is None:
            raise SystemExit("error: missing input file")
        templates = resolve_templates(args, library)
        instructions = decode_instructions(args.file.read_bytes())
    except (ValueError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    payload = []
    for label, template in templates:
        results = find_all(instructions, template)
        if args.json:
            entry = serialize_scan(results, template)
            entry["label"] = label
            payload.append(entry)
        else:
            sys.stdout.write(render_scan(results, template))

    if args.json:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
