"""Tests for :mod:`bfpatterns.scanner`."""

from bfpatterns import decode_instructions, find_all, iter_matches, parse_pattern


def _scan(pattern: str, program: str):
    return find_all(decode_instructions(program), parse_pattern(pattern))


def test_single_match_consumes_whole_program() -> None:
    results = _scan("a+b-a", "+>>-<<")
    assert len(results) == 1
    assert results[0].length == 6


def test_no_match_anywhere_yields_empty_list() -> None:
    assert _scan("a+b-a", "+>>-<") == []


def test_strict_binding_never_matches_in_place() -> None:
    assert _scan("a!", "+") == []
    results = _scan("a!", ">+")
    assert [(r.start, r.length) for r in results] == [(0, 1)]


def test_empty_program_has_no_matches() -> None:
    assert _scan("a", "") == []
    assert _scan("[-]", "") == []


def test_zero_length_match_still_advances() -> None:
    results = _scan("a", "+")
    assert [(r.start, r.length) for r in results] == [(0, 0)]
    results = _scan("a", ">>+")
    assert [(r.start, r.length) for r in results] == [(0, 2), (2, 0)]


def test_matches_are_greedy_and_do_not_overlap() -> None:
    program = "[-]+[-][-]>[->+<]"
    results = _scan("[-]", program)
    assert [r.start for r in results] == [0, 4, 7]
    results = _scan("a[-b!+a]", "+++[->+<].[->>+<<]")
    assert [(r.start, r.length) for r in results] == [(3, 6), (10, 8)]
    for first, second in zip(results, results[1:]):
        assert second.start >= first.start + first.length


def test_scan_is_deterministic() -> None:
    instructions = decode_instructions("[->+<]>>[-<+>]<<[->+>+<<]")
    template = parse_pattern("a[-b!+a]")
    assert find_all(instructions, template) == find_all(instructions, template)
    assert list(iter_matches(instructions, template)) == find_all(instructions, template)


def test_each_match_has_its_own_offsets() -> None:
    results = _scan("a[-b!+a]", "[->+<][-<<+>>]")
    assert [r.offset(1, 0) for r in results] == [1, -2]
    for result in results:
        for a, row in result.offsets.items():
            for b, value in row.items():
                assert result.offsets[b][a] == -value
