"""Companion executor running decoded programs on a wrap-around byte tape."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Sequence, Tuple

from .instruction import Instruction

DEFAULT_CELLS = 30000


@dataclass(frozen=True)
class Program:
    """Decoded instructions plus the loop jump table."""

    instructions: Tuple[Instruction, ...]
    jumps: Dict[int, int] = field(default_factory=dict, compare=False)

    @classmethod
    def from_instructions(cls, instructions: Sequence[Instruction]) -> "Program":
        jumps: Dict[int, int] = {}
        pending: List[int] = []
        for index, instruction in enumerate(instructions):
            if instruction is Instruction.LOOP_BEGIN:
                pending.append(index)
            elif instruction is Instruction.LOOP_END:
                if not pending:
                    raise ValueError(f"unmatched loop closing at instruction {index}")
                opener = pending.pop()
                jumps[opener] = index
                jumps[index] = opener
        if pending:
            raise ValueError(f"unclosed loop at instruction {pending[-1]}")
        return cls(tuple(instructions), jumps)

    def __len__(self) -> int:
        return len(self.instructions)


class TapeMachine:
    """Interpret a :class:`Program` over ``cells`` wrap-around byte cells."""

    def __init__(self, cells: int = DEFAULT_CELLS) -> None:
        if cells <= 0:
            raise ValueError("tape must have at least one cell")
        self.cells = cells

    def run(self, program: Program, stdin: BinaryIO, stdout: BinaryIO) -> bytearray:
        """Execute ``program`` and return the final tape.

        Reading past the end of ``stdin`` stores 255 in the current cell.
        """

        tape = bytearray(self.cells)
        pointer = 0
        index = 0
        instructions = program.instructions
        jumps = program.jumps
        while index < len(instructions):
            instruction = instructions[index]
            if instruction is Instruction.INCREMENT:
                tape[pointer] = (tape[pointer] + 1) & 0xFF
            elif instruction is Instruction.DECREMENT:
                tape[pointer] = (tape[pointer] - 1) & 0xFF
            elif instruction is Instruction.MOVE_RIGHT:
                pointer = (pointer + 1) % self.cells
            elif instruction is Instruction.MOVE_LEFT:
                pointer = (pointer - 1) % self.cells
            elif instruction is Instruction.LOOP_BEGIN:
                if tape[pointer] == 0:
                    index = jumps[index]
            elif instruction is Instruction.LOOP_END:
                if tape[pointer] != 0:
                    index = jumps[index]
            elif instruction is Instruction.OUTPUT:
                stdout.write(bytes((tape[pointer],)))
                stdout.flush()
            elif instruction is Instruction.INPUT:
                data = stdin.read(1)
                tape[pointer] = data[0] if data else 0xFF
            index += 1
        return tape


def highlight(program: Program) -> str:
    """Return the program text coloured by loop nesting depth."""

    color = 6
    parts: List[str] = []
    for instruction in program.instructions:
        if instruction is Instruction.LOOP_BEGIN:
            color -= 1
            parts.append(f"\x1b[38;5;{color}m{instruction}")
        elif instruction is Instruction.LOOP_END:
            color += 1
            parts.append(f"{instruction}\x1b[38;5;{color}m")
        else:
            parts.append(instruction.value)
    return "".join(parts)
