"""Pattern templates and the textual pattern parser.

A template is an ordered list of *pattern items*.  Each item is either a
:class:`Literal` that must equal the instruction under the cursor, or a
:class:`Binding` that resolves a symbolic address from the run of pointer
moves found at the cursor.  Binding names are interned in first-occurrence
order so the matcher only ever deals with small integer indices::

    template = parse_pattern("a[-b!+a]")
    template.names        # ("a", "b")
    template.items[3]     # Binding(index=1, strict=True)

An identifier immediately followed by ``!`` is a *strict* binding which is
only allowed to resolve to a non-zero movement offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .errors import PatternSyntaxError, Position
from .instruction import Instruction


@dataclass(frozen=True)
class Literal:
    """Match exactly one instruction."""

    instruction: Instruction

    def render(self, names: Tuple[str, ...]) -> str:
        return self.instruction.value


@dataclass(frozen=True)
class Binding:
    """Resolve a symbolic address from the movement run at the cursor."""

    index: int
    strict: bool = False

    def render(self, names: Tuple[str, ...]) -> str:
        return names[self.index] + ("!" if self.strict else "")


PatternItem = Union[Literal, Binding]


@dataclass(frozen=True)
class PatternTemplate:
    """Ordered pattern items plus the binding index/name table."""

    items: Tuple[PatternItem, ...]
    names: Tuple[str, ...] = ()

    @property
    def binding_count(self) -> int:
        return len(self.names)

    def name_of(self, index: int) -> str:
        return self.names[index]

    def index_of(self, name: str) -> Optional[int]:
        try:
            return self.names.index(name)
        except ValueError:
            return None

    def literal_count(self) -> int:
        return sum(1 for item in self.items if isinstance(item, Literal))

    def render(self) -> str:
        """Return canonical pattern text that parses back to this template."""

        parts: List[str] = []
        previous: Optional[PatternItem] = None
        for item in self.items:
            if isinstance(item, Binding) and isinstance(previous, Binding):
                parts.append(" ")
            parts.append(item.render(self.names))
            previous = item
        return "".join(parts)

    def __str__(self) -> str:
        return self.render()


def parse_pattern(text: str) -> PatternTemplate:
    """Parse ``text`` into a :class:`PatternTemplate`.

    Instruction characters become literals, identifiers become bindings and
    whitespace separates tokens.  Anything else is rejected with a
    :class:`PatternSyntaxError` carrying the offending position.
    """

    items: List[PatternItem] = []
    indices: Dict[str, int] = {}
    names: List[str] = []
    position = Position()
    index = 0
    while index < len(text):
        char = text[index]
        instruction = Instruction.from_char(char)
        if instruction is not None:
            items.append(Literal(instruction))
            position = position.advance(char)
            index += 1
            continue

        if char.isalpha():
            start = index
            while index < len(text) and text[index].isalnum():
                position = position.advance(text[index])
                index += 1
            name = text[start:index]
            strict = index < len(text) and text[index] == "!"
            if strict:
                position = position.advance("!")
                index += 1
            if name not in indices:
                indices[name] = len(names)
                names.append(name)
            items.append(Binding(indices[name], strict))
            continue

        if not char.isspace():
            raise PatternSyntaxError(f"unknown character in pattern: {char!r}", position)
        position = position.advance(char)
        index += 1

    if not items:
        raise PatternSyntaxError("pattern is empty", position)
    return PatternTemplate(tuple(items), tuple(names))
