"""Error types raised by the decoder, the pattern parser and the idiom loader."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A 1-based line/column location inside a source text."""

    line: int = 1
    column: int = 1

    def advance(self, char: str) -> "Position":
        if char == "\n":
            return Position(self.line + 1, 1)
        return Position(self.line, self.column + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class PositionedError(ValueError):
    """Base class for fatal errors that point at a location in the input."""

    def __init__(self, message: str, position: Position) -> None:
        super().__init__(f"{position}: {message}")
        self.message = message
        self.position = position


class DecodeError(PositionedError):
    """Raised when a program cannot be decoded into instructions."""


class PatternSyntaxError(PositionedError):
    """Raised when a pattern string contains an invalid character."""
