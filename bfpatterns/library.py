"""Named idiom patterns and the JSON idiom library loader."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from .errors import PatternSyntaxError
from .template import PatternTemplate, parse_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdiomPattern:
    """A pattern string registered under a human readable name."""

    name: str
    text: str
    description: str = ""

    def compile(self) -> PatternTemplate:
        return parse_pattern(self.text)

    def describe(self) -> str:
        suffix = f" - {self.description}" if self.description else ""
        return f"{self.name}: {self.text}{suffix}"

    @classmethod
    def from_json(cls, name: str, entry: Any) -> "IdiomPattern":
        """Create an idiom from a string or ``{"pattern": ...}`` entry."""

        if isinstance(entry, str):
            return cls(name=name, text=entry)
        if isinstance(entry, Mapping):
            text = entry.get("pattern")
            if not isinstance(text, str):
                raise ValueError(f"idiom {name!r} must define a 'pattern' string")
            description = entry.get("description") or ""
            if not isinstance(description, str):
                raise ValueError(f"idiom {name!r} description must be a string")
            return cls(name=name, text=text, description=description)
        raise ValueError(f"idiom {name!r} must be a string or an object")


class PatternLibrary:
    """Ordered container of idiom patterns, looked up by name."""

    def __init__(self, idioms: Optional[Iterable[IdiomPattern]] = None) -> None:
        self._idioms: Dict[str, IdiomPattern] = {}
        self.extend(idioms or [])

    def add(self, idiom: IdiomPattern) -> None:
        self._idioms[idiom.name] = idiom

    def extend(self, idioms: Iterable[IdiomPattern]) -> None:
        for idiom in idioms:
            self.add(idiom)

    def get(self, name: str) -> Optional[IdiomPattern]:
        return self._idioms.get(name)

    def names(self) -> List[str]:
        return list(self._idioms)

    def compile(self, name: str) -> PatternTemplate:
        idiom = self._idioms.get(name)
        if idiom is None:
            raise KeyError(f"unknown idiom: {name}")
        return idiom.compile()

    def __contains__(self, name: object) -> bool:
        return name in self._idioms

    def __iter__(self) -> Iterator[IdiomPattern]:
        return iter(self._idioms.values())

    def __len__(self) -> int:
        return len(self._idioms)

    @classmethod
    def load(cls, path: Path, *, include_defaults: bool = True) -> "PatternLibrary":
        """Load idioms from ``path`` on top of the built-in ones.

        The file holds a JSON object mapping idiom names to pattern strings
        or to objects with ``pattern`` and ``description`` keys.  Every
        pattern is parsed up front so broken entries fail at load time.
        """

        library = default_library() if include_defaults else cls()
        if not path.exists():
            logger.warning("idiom library %s does not exist, using defaults", path)
            return library

        data = json.loads(path.read_text("utf-8"))
        if not isinstance(data, dict):
            raise ValueError("idiom library must contain a JSON object")

        for name, entry in data.items():
            idiom = IdiomPattern.from_json(str(name), entry)
            try:
                idiom.compile()
            except PatternSyntaxError as exc:
                raise ValueError(f"idiom {idiom.name!r}: {exc}") from exc
            library.add(idiom)
        return library


def default_library() -> PatternLibrary:
    """Return a :class:`PatternLibrary` with the built-in idioms."""

    return PatternLibrary(
        [
            IdiomPattern("clear", "[-]", "zero the current cell"),
            IdiomPattern("scan_left", "[<]", "move left to the first zero cell"),
            IdiomPattern("scan_right", "[>]", "move right to the first zero cell"),
            IdiomPattern("move", "a[-b!+a]", "add the current cell onto another cell"),
            IdiomPattern("copy", "a[-b!+c!+a]", "add the current cell onto two cells"),
        ]
    )
