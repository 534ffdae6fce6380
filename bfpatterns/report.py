"""Text and JSON rendering of scan results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .instruction import render_instructions
from .matcher import MatchResult
from .template import PatternTemplate


@dataclass(frozen=True)
class ScanSummary:
    matches: int
    consumed: int
    longest: int

    def describe(self) -> str:
        return f"{self.matches} matches, {self.consumed} instructions (longest {self.longest})"


def summarise_scan(results: Sequence[MatchResult]) -> ScanSummary:
    return ScanSummary(
        matches=len(results),
        consumed=sum(result.length for result in results),
        longest=max((result.length for result in results), default=0),
    )


def render_match(result: MatchResult, template: PatternTemplate) -> str:
    """Render ``result`` with binding names resolved through ``template``."""

    lines = [f"result @{result.start}: `{render_instructions(result.instructions)}`"]
    for name, offsets in result.named_offsets(template).items():
        lines.append(f"offsets for `{name}`")
        for other, value in offsets.items():
            if other == name:
                continue
            lines.append(f"\t`{other}` -> {value}")
    return "\n".join(lines)


def render_scan(results: Sequence[MatchResult], template: PatternTemplate) -> str:
    blocks = [render_match(result, template) for result in results]
    blocks.append(f"pattern `{template}`: {summarise_scan(results).describe()}")
    return "\n".join(blocks) + "\n"


def serialize_match(result: MatchResult, template: PatternTemplate) -> Dict[str, Any]:
    """Convert ``result`` into a JSON-serialisable mapping."""

    return {
        "start": result.start,
        "length": result.length,
        "instructions": render_instructions(result.instructions),
        "offsets": result.named_offsets(template),
    }


def serialize_scan(
    results: Sequence[MatchResult], template: PatternTemplate
) -> Dict[str, Any]:
    summary = summarise_scan(results)
    matches: List[Dict[str, Any]] = [serialize_match(result, template) for result in results]
    return {
        "pattern": template.render(),
        "bindings": list(template.names),
        "matches": matches,
        "summary": {
            "matches": summary.matches,
            "consumed": summary.consumed,
            "longest": summary.longest,
        },
    }
