import json
import logging
from pathlib import Path

import pytest

from bfpatterns import IdiomPattern, PatternLibrary, decode_instructions, default_library, find_all


def test_default_library_contains_common_idioms() -> None:
    library = default_library()
    assert library.names() == ["clear", "scan_left", "scan_right", "move", "copy"]
    assert "move" in library
    assert library.get("missing") is None
    assert len(library) == 5


def test_move_idiom_finds_transfer_loops() -> None:
    template = default_library().compile("move")
    instructions = decode_instructions("+++[->+<] [->>+<<] [->+<<]")
    results = find_all(instructions, template)
    assert [r.start for r in results] == [3, 9]


def test_compile_unknown_idiom_raises() -> None:
    with pytest.raises(KeyError):
        default_library().compile("nope")


def test_describe_includes_description() -> None:
    idiom = IdiomPattern("clear", "[-]", "zero the current cell")
    assert idiom.describe() == "clear: [-] - zero the current cell"
    assert IdiomPattern("x", "a").describe() == "x: a"


def test_load_merges_entries_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "idioms.json"
    payload = {
        "clear": {"pattern": "[+]", "description": "wrap upwards"},
        "swap_pair": "a!b!",
    }
    path.write_text(json.dumps(payload), "utf-8")

    library = PatternLibrary.load(path)
    assert library.get("clear").text == "[+]"
    assert library.get("clear").description == "wrap upwards"
    assert library.compile("swap_pair").names == ("a", "b")
    assert "move" in library


def test_load_without_defaults(tmp_path: Path) -> None:
    path = tmp_path / "idioms.json"
    path.write_text(json.dumps({"only": "[-]"}), "utf-8")
    library = PatternLibrary.load(path, include_defaults=False)
    assert library.names() == ["only"]


def test_missing_library_falls_back_to_defaults(tmp_path: Path, caplog) -> None:
    missing = tmp_path / "absent.json"
    with caplog.at_level(logging.WARNING, logger="bfpatterns.library"):
        library = PatternLibrary.load(missing)
    assert library.names() == default_library().names()
    warnings = [
        record
        for record in caplog.records
        if record.name == "bfpatterns.library" and record.levelno == logging.WARNING
    ]
    assert len(warnings) == 1
    assert str(missing) in warnings[0].getMessage()


def test_null_description_loads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "idioms.json"
    path.write_text(json.dumps({"z": {"pattern": "[-]", "description": None}}), "utf-8")
    idiom = PatternLibrary.load(path).get("z")
    assert idiom.description == ""
    assert idiom.describe() == "z: [-]"


def test_non_string_description_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "idioms.json"
    path.write_text(json.dumps({"z": {"pattern": "[-]", "description": 3}}), "utf-8")
    with pytest.raises(ValueError, match="description"):
        PatternLibrary.load(path)


def test_invalid_entries_are_rejected(tmp_path: Path) -> None:
    path = tmp_path / "idioms.json"
    path.write_text(json.dumps({"bad": "a?"}), "utf-8")
    with pytest.raises(ValueError, match="bad"):
        PatternLibrary.load(path)

    path.write_text(json.dumps({"bad": {"description": "no pattern"}}), "utf-8")
    with pytest.raises(ValueError):
        PatternLibrary.load(path)

    path.write_text(json.dumps(["[-]"]), "utf-8")
    with pytest.raises(ValueError):
        PatternLibrary.load(path)
