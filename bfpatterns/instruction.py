"""The eight-symbol instruction alphabet and the program decoder."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from .errors import DecodeError, Position

logger = logging.getLogger(__name__)


class Instruction(Enum):
    """A single instruction; the value is its canonical character."""

    MOVE_LEFT = "<"
    MOVE_RIGHT = ">"
    INCREMENT = "+"
    DECREMENT = "-"
    LOOP_BEGIN = "["
    LOOP_END = "]"
    OUTPUT = "."
    INPUT = ","

    @classmethod
    def from_char(cls, char: str) -> Optional["Instruction"]:
        return _BY_CHAR.get(char)

    @classmethod
    def from_byte(cls, byte: int) -> Optional["Instruction"]:
        if byte > 0x7F:
            return None
        return _BY_CHAR.get(chr(byte))

    @property
    def byte(self) -> int:
        return ord(self.value)

    def is_move(self) -> bool:
        return self is Instruction.MOVE_LEFT or self is Instruction.MOVE_RIGHT

    def direction(self) -> int:
        """Return ``-1``/``+1`` for pointer moves and ``0`` otherwise."""

        if self is Instruction.MOVE_LEFT:
            return -1
        if self is Instruction.MOVE_RIGHT:
            return 1
        return 0

    def __str__(self) -> str:
        return self.value


_BY_CHAR = {member.value: member for member in Instruction}


def decode_instructions(data: Union[bytes, str]) -> Tuple[Instruction, ...]:
    """Decode ``data`` into instructions, skipping every unknown byte.

    Loop delimiters are checked for balance while decoding.  A closing
    delimiter without an opener fails at its own position; an opener left
    dangling at the end of the input fails at the end position and the
    message names where that opener was found.
    """

    if isinstance(data, str):
        data = data.encode("utf-8")

    position = Position()
    open_loops: List[Position] = []
    instructions: List[Instruction] = []
    skipped = 0
    for byte in data:
        instruction = Instruction.from_byte(byte)
        if instruction is Instruction.LOOP_BEGIN:
            open_loops.append(position)
        elif instruction is Instruction.LOOP_END:
            if not open_loops:
                raise DecodeError("unmatched loop closing", position)
            open_loops.pop()

        position = position.advance(chr(byte) if byte <= 0x7F else "\x00")
        if instruction is None:
            skipped += 1
        else:
            instructions.append(instruction)

    if open_loops:
        raise DecodeError(
            f"unclosed loop: last opening was found at {open_loops[-1]}", position
        )

    logger.debug("decoded %d instructions (%d bytes skipped)", len(instructions), skipped)
    return tuple(instructions)


def render_instructions(instructions: Iterable[Instruction]) -> str:
    return "".join(instruction.value for instruction in instructions)
