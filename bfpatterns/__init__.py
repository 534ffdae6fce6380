"""Public package exports for the instruction idiom matcher."""

from .errors import DecodeError, PatternSyntaxError, Position, PositionedError
from .instruction import Instruction, decode_instructions, render_instructions
from .library import IdiomPattern, PatternLibrary, default_library
from .matcher import MatchResult, OffsetRegistry, match_at
from .scanner import find_all, iter_matches
from .tape import Program, TapeMachine
from .template import Binding, Literal, PatternTemplate, parse_pattern

__all__ = [
    "Binding",
    "DecodeError",
    "IdiomPattern",
    "Instruction",
    "Literal",
    "MatchResult",
    "OffsetRegistry",
    "PatternLibrary",
    "PatternSyntaxError",
    "PatternTemplate",
    "Position",
    "PositionedError",
    "Program",
    "TapeMachine",
    "decode_instructions",
    "default_library",
    "find_all",
    "iter_matches",
    "match_at",
    "parse_pattern",
    "render_instructions",
]
