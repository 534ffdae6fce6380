"""Left-to-right scanning for non-overlapping template matches."""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from .instruction import Instruction
from .matcher import MatchResult, match_at
from .template import PatternTemplate

logger = logging.getLogger(__name__)


def iter_matches(
    instructions: Sequence[Instruction], template: PatternTemplate
) -> Iterator[MatchResult]:
    """Yield every match of ``template`` in ``instructions``.

    A successful match moves the scan past the consumed instructions, a
    failed attempt moves it by one.  A match that consumed nothing still
    moves the scan by one so the loop always terminates.
    """

    position = 0
    while position < len(instructions):
        result = match_at(instructions, template, position)
        if result is None:
            position += 1
            continue
        logger.debug(
            "match for %s at %d (length %d)", template, result.start, result.length
        )
        yield result
        position += max(1, result.length)


def find_all(
    instructions: Sequence[Instruction], template: PatternTemplate
) -> List[MatchResult]:
    """Return all matches of ``template`` in ``instructions`` as a list."""

    return list(iter_matches(instructions, template))
