import json

import pytest

from hanzi_backend.dictionary_manager.exceptions import ParseError, SourceReadError, ValidationError
from hanzi_backend.dictionary_manager.processors.reference_table import load_reference_table
from hanzi_backend.dictionary_manager.record_types import ReferenceEntry


def test_load_reference_table(reference_path):
    table = load_reference_table(reference_path)
    assert len(table) == 5
    assert table["好"] == ReferenceEntry(level=1, script="both", strokes=6, decomp="⿰女子", variant=None)
    assert table.get("木") is None


def test_reference_table_is_read_only(reference_path):
    table = load_reference_table(reference_path)
    with pytest.raises(TypeError):
        table["木"] = ReferenceEntry(level=1)


def test_partial_entries_default_to_none(make_reference):
    table = load_reference_table(make_reference({"丁": {"level": 6}, "乙": {}}))
    assert table["丁"] == ReferenceEntry(level=6)
    assert table["乙"] == ReferenceEntry()


def test_unknown_keys_ignored(make_reference):
    table = load_reference_table(make_reference({"丁": {"level": 6, "frequency": 1200}}))
    assert table["丁"].level == 6


def test_missing_reference_table(tmp_path):
    with pytest.raises(SourceReadError):
        load_reference_table(str(tmp_path / "missing.json"))


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"一": {"level": 1}', encoding="utf-8")
    with pytest.raises(ParseError):
        load_reference_table(str(path))


def test_top_level_must_be_an_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([{"level": 1}]), encoding="utf-8")
    with pytest.raises(ParseError):
        load_reference_table(str(path))


@pytest.mark.parametrize("entry", [
    "level one",
    {"level": "one"},
    {"level": -1},
    {"strokes": 0},
    {"decomp": 5},
])
def test_invalid_entry(make_reference, entry):
    with pytest.raises(ValidationError) as exc_info:
        load_reference_table(make_reference({"一": entry}))
    assert "一" in exc_info.value.messages
