"""Single match attempts and the relative offset registry.

Matching a template at a cursor walks the pattern items left to right.  Every
item is first *evaluated* against the current state, which is a pure
computation producing either ``None`` (the attempt fails) or a pending
action describing the state change.  Only after the evaluation succeeded is
the action committed through :meth:`MatchState.apply`.  A binding step is
therefore atomic even though it consumes a movement run, records an offset
and updates the last resolved binding.

The registry keeps, for every binding seen during the attempt, its signed
distance to every other binding: ``offsets[a][b]`` is the position of ``a``
minus the position of ``b``.  The table is kept symmetric
(``offsets[a][b] == -offsets[b][a]``) and fully connected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .instruction import Instruction
from .template import Binding, Literal, PatternItem, PatternTemplate


OffsetTable = Dict[int, Dict[int, int]]


@dataclass(frozen=True)
class AdvanceInput:
    """Move the cursor forward by ``amount`` instructions."""

    amount: int


@dataclass(frozen=True)
class NewBinding:
    """Register a first sighting of ``binding``.

    ``anchor`` is the last resolved binding at the time the action was
    computed and ``offset_from_last`` the distance from it.  Without an
    anchor the binding is only related to itself.
    """

    offset_from_last: int
    binding: int
    anchor: Optional[int]


@dataclass(frozen=True)
class SetLastBinding:
    binding: int


@dataclass(frozen=True)
class ActionChain:
    """Sequential composite of actions; an empty chain is a no-op."""

    actions: Tuple["Action", ...] = ()

    def __iter__(self) -> Iterator["Action"]:
        return iter(self.actions)


Action = Union[AdvanceInput, NewBinding, SetLastBinding, ActionChain]

NO_ACTION = ActionChain()


def chain(*actions: Optional[Action]) -> Action:
    """Compose ``actions`` in order, flattening nested chains."""

    flat: List[Action] = []
    for action in actions:
        if action is None:
            continue
        if isinstance(action, ActionChain):
            flat.extend(action.actions)
        else:
            flat.append(action)
    if len(flat) == 1:
        return flat[0]
    return ActionChain(tuple(flat))


class OffsetRegistry:
    """Binding-to-binding offsets for a single match attempt."""

    def __init__(self) -> None:
        self._table: OffsetTable = {}
        self.last: Optional[int] = None

    def __contains__(self, binding: int) -> bool:
        return binding in self._table

    def __len__(self) -> int:
        return len(self._table)

    def bindings(self) -> Tuple[int, ...]:
        return tuple(self._table)

    def offset(self, binding: int, other: int) -> int:
        return self._table[binding][other]

    def register(self, binding: int, offset_from_last: int, anchor: Optional[int]) -> None:
        if anchor is None:
            # nothing to relate to yet, the offset is meaningless
            self._table[binding] = {binding: 0}
            return

        anchor_offsets = self._table[anchor]
        offsets = {
            other: anchor_offsets[other] + offset_from_last for other in self._table
        }
        offsets[binding] = 0
        for other, other_offsets in self._table.items():
            other_offsets[binding] = -offsets[other]
        self._table[binding] = offsets

    def table(self) -> OffsetTable:
        return self._table

    def snapshot(self) -> OffsetTable:
        return {binding: dict(offsets) for binding, offsets in self._table.items()}


@dataclass(frozen=True)
class MatchResult:
    """A successful match of a template.

    ``start`` and ``length`` locate the consumed instructions inside
    ``source``; the instructions themselves are only sliced out on demand.
    """

    start: int
    length: int
    offsets: OffsetTable
    source: Sequence[Instruction] = field(default=(), repr=False, compare=False)

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def instructions(self) -> Sequence[Instruction]:
        return self.source[self.start : self.end]

    def bindings(self) -> Tuple[int, ...]:
        return tuple(sorted(self.offsets))

    def offset(self, binding: int, other: int) -> int:
        return self.offsets[binding][other]

    def named_offsets(self, template: PatternTemplate) -> Dict[str, Dict[str, int]]:
        """Return the offset table keyed by binding names."""

        return {
            template.name_of(binding): {
                template.name_of(other): value
                for other, value in sorted(self.offsets[binding].items())
            }
            for binding in self.bindings()
        }


class MatchState:
    """Cursor and registry for one attempt starting at ``start``."""

    def __init__(self, instructions: Sequence[Instruction], start: int = 0) -> None:
        self.instructions = instructions
        self.start = start
        self.cursor = start
        self.registry = OffsetRegistry()

    @property
    def consumed(self) -> int:
        return self.cursor - self.start

    # ------------------------------------------------------------------
    # committing
    # ------------------------------------------------------------------
    def apply(self, action: Action) -> None:
        if isinstance(action, AdvanceInput):
            self.cursor += action.amount
        elif isinstance(action, SetLastBinding):
            self.registry.last = action.binding
        elif isinstance(action, NewBinding):
            self.registry.register(action.binding, action.offset_from_last, action.anchor)
        elif isinstance(action, ActionChain):
            for inner in action:
                self.apply(inner)
        else:  # pragma: no cover - exhaustive over Action
            raise TypeError(f"unsupported action: {action!r}")

    # ------------------------------------------------------------------
    # evaluation; nothing below mutates the state
    # ------------------------------------------------------------------
    def evaluate(self, item: PatternItem) -> Optional[Action]:
        """Return the pending action for ``item`` or ``None`` on mismatch."""

        if isinstance(item, Literal):
            return self.match_literal(item.instruction)
        return self.match_binding(item)

    def match_literal(self, instruction: Instruction) -> Optional[Action]:
        if self.cursor < len(self.instructions) and self.instructions[self.cursor] is instruction:
            return AdvanceInput(1)
        return None

    def match_binding(self, item: Binding) -> Optional[Action]:
        offset, advance = self.movement_run()
        if item.strict and offset == 0:
            return None
        recorded = self.check_offset(item.index, offset)
        if recorded is None:
            return None
        return chain(advance, recorded, SetLastBinding(item.index))

    def check_offset(self, binding: int, offset_from_last: int) -> Optional[Action]:
        """Check ``offset_from_last`` against earlier sightings of ``binding``."""

        last = self.registry.last
        if last is None or binding not in self.registry:
            return NewBinding(offset_from_last, binding, last)
        if self.registry.offset(binding, last) == offset_from_last:
            return NO_ACTION
        return None

    def movement_run(self) -> Tuple[int, Optional[AdvanceInput]]:
        """Return the signed length of the move run at the cursor.

        The first pointer move fixes the direction; the run extends over the
        following moves in the same direction only.  Without a move under the
        cursor the offset is zero and nothing is consumed.
        """

        instructions = self.instructions
        cursor = self.cursor
        if cursor >= len(instructions) or not instructions[cursor].is_move():
            return 0, None

        direction = instructions[cursor]
        end = cursor + 1
        while end < len(instructions) and instructions[end] is direction:
            end += 1
        length = end - cursor
        return length * direction.direction(), AdvanceInput(length)


def match_at(
    instructions: Sequence[Instruction],
    template: PatternTemplate,
    start: int = 0,
) -> Optional[MatchResult]:
    """Try to match ``template`` against ``instructions`` at ``start``.

    The attempt stops at the first failing item; a failed attempt consumes
    nothing.  No state survives the call besides the returned result.
    """

    state = MatchState(instructions, start)
    for item in template.items:
        action = state.evaluate(item)
        if action is None:
            return None
        state.apply(action)
    return MatchResult(
        start=start,
        length=state.consumed,
        offsets=state.registry.table(),
        source=instructions,
    )
