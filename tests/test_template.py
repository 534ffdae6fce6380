import pytest

from bfpatterns import Binding, Instruction, Literal, PatternSyntaxError, Position, parse_pattern


def test_bindings_are_interned_by_first_occurrence() -> None:
    template = parse_pattern("a+b-a")
    assert template.names == ("a", "b")
    assert template.items == (
        Binding(0),
        Literal(Instruction.INCREMENT),
        Binding(1),
        Literal(Instruction.DECREMENT),
        Binding(0),
    )
    assert template.index_of("b") == 1
    assert template.index_of("zz") is None
    assert template.name_of(0) == "a"
    assert template.binding_count == 2
    assert template.literal_count() == 2


def test_exclamation_marks_strict_bindings() -> None:
    template = parse_pattern("a[-b!+a]")
    assert template.items[3] == Binding(1, strict=True)
    assert template.items[0] == Binding(0, strict=False)


def test_identifiers_continue_with_alphanumerics() -> None:
    template = parse_pattern("src1 dst2! src1")
    assert template.names == ("src1", "dst2")
    assert template.items == (Binding(0), Binding(1, True), Binding(0))


def test_whitespace_is_ignored() -> None:
    template = parse_pattern(" [ -\n] ")
    assert [item.instruction for item in template.items] == [
        Instruction.LOOP_BEGIN,
        Instruction.DECREMENT,
        Instruction.LOOP_END,
    ]


def test_unknown_character_reports_position() -> None:
    with pytest.raises(PatternSyntaxError) as excinfo:
        parse_pattern("a+?")
    assert excinfo.value.position == Position(1, 3)
    assert "'?'" in str(excinfo.value)


def test_identifier_must_start_with_a_letter() -> None:
    with pytest.raises(PatternSyntaxError) as excinfo:
        parse_pattern("1a")
    assert excinfo.value.position == Position(1, 1)


def test_error_position_tracks_lines() -> None:
    with pytest.raises(PatternSyntaxError) as excinfo:
        parse_pattern("a\n  #")
    assert excinfo.value.position == Position(2, 3)


def test_empty_pattern_is_rejected() -> None:
    with pytest.raises(PatternSyntaxError):
        parse_pattern("   ")


def test_render_gives_back_parseable_text() -> None:
    for text in ("a[-b!+a]", "a b", "[-]", "x! y x"):
        template = parse_pattern(text)
        assert parse_pattern(template.render()) == template
    assert parse_pattern("a  [ - b! + a ]").render() == "a[-b!+a]"
