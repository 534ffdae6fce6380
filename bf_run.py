#!/usr/bin/env python3
"""Run a program on a wrap-around byte tape."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence, Tuple

from bfpatterns import Program, TapeMachine, decode_instructions
from bfpatterns.tape import DEFAULT_CELLS, highlight

STDIN_LABEL = "<stdin>"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Program file; '-' or nothing reads the program from stdin",
    )
    parser.add_argument(
        "-c",
        "--cells",
        type=int,
        default=DEFAULT_CELLS,
        help="Amount of tape cells to use",
    )
    parser.add_argument(
        "--highlight",
        action="store_true",
        help="Only print the highlighted program, don't run it",
    )
    parser.add_argument(
        "-s",
        "--show-tape",
        action="store_true",
        help="Print the final tape to stderr",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def read_source(name: str) -> Tuple[bytes, str]:
    """Return the program bytes and the label used when reporting on them."""

    if name == "-":
        print("[-][Reading from stdin]", file=sys.stderr)
        return sys.stdin.buffer.read(), STDIN_LABEL
    with open(name, "rb") as handle:
        return handle.read(), name


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        source, label = read_source(args.input)
        program = Program.from_instructions(decode_instructions(source))
        machine = TapeMachine(args.cells)
    except (ValueError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    if args.highlight:
        print(highlight(program) + "\x1b[0m")
        return

    start_time = time.perf_counter()
    tape = machine.run(program, sys.stdin.buffer, sys.stdout.buffer)
    elapsed = time.perf_counter() - start_time
    print(f"program {label} executed in {elapsed * 1e6:.0f}us", file=sys.stderr)
    if args.show_tape:
        print(f"result tape: {list(tape)}", file=sys.stderr)


if __name__ == "__main__":
    main()
