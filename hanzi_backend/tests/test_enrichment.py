import pytest

from hanzi_backend.dictionary_manager.processors.dictionary_processor import (
    merge_reference,
    normalize_definition,
    normalize_record,
)
from hanzi_backend.dictionary_manager.record_types import DictionaryEntry, ReferenceEntry
from hanzi_backend.dictionary_manager.text_helpers import normalize_pinyin

REFERENCE = {
    "好": ReferenceEntry(level=1, script="both", strokes=6, decomp="⿰女子", variant=None),
    "后": ReferenceEntry(level=1, script="simplified", strokes=6, decomp="⿸⺁口", variant="後"),
}


def test_reference_fields_override_source():
    entry = DictionaryEntry(character="后", definition="behind", pinyin=["hòu"], radical="口",
                            hsk=5, variants="后")
    merged = merge_reference(entry, REFERENCE)
    assert merged["hsk_level"] == 1
    assert merged["script_type"] == "simplified"
    assert merged["stroke_count"] == 6
    assert merged["decomposition"] == "⿸⺁口"
    assert merged["variants"] == "後"


def test_source_fields_kept_from_dictionary_line():
    entry = DictionaryEntry(character="好", definition="good", pinyin=["hǎo"], radical="女",
                            radical_variants="⼥")
    merged = merge_reference(entry, REFERENCE)
    assert merged["definition"] == "good"
    assert merged["pinyin"] == ["hǎo"]
    assert merged["radical"] == "女"
    assert merged["radical_variants"] == "⼥"


def test_no_reference_entry_leaves_reference_fields_null():
    entry = DictionaryEntry(character="木", definition="tree", pinyin=["mù"], radical="木",
                            hsk=2, variants="朩")
    merged = merge_reference(entry, REFERENCE)
    assert merged["hsk_level"] is None
    assert merged["script_type"] is None
    assert merged["stroke_count"] is None
    assert merged["decomposition"] is None
    assert merged["variants"] is None


def test_merge_does_not_touch_reference_table():
    before = dict(REFERENCE)
    merge_reference(DictionaryEntry(character="好"), REFERENCE)
    assert REFERENCE == before


@pytest.mark.parametrize("pinyin, expected", [
    (["yī"], "yī"),
    (["yī", "yì"], "yī, yì"),
    ([], ""),
    (None, ""),
    ("yī", ""),
    ([" yī ", "", None, 3, "yì"], "yī, yì"),
])
def test_normalize_pinyin(pinyin, expected):
    assert normalize_pinyin(pinyin) == expected


@pytest.mark.parametrize("definition, expected", [
    ("one", "one"),
    (None, ""),
    ("", ""),
    (["good", "", "excellent"], "good; excellent"),
])
def test_normalize_definition(definition, expected):
    assert normalize_definition(definition) == expected


def _enriched(**overrides):
    record = {
        "character": "一",
        "definition": None,
        "pinyin": ["yī"],
        "radical": "一",
        "radical_variants": None,
        "hsk_level": None,
        "script_type": None,
        "stroke_count": None,
        "decomposition": None,
        "variants": None,
    }
    record.update(overrides)
    return record


def test_normalize_record_shapes_fields():
    row = normalize_record(_enriched(hsk_level=1, stroke_count=1))
    assert row == {
        "character": "一",
        "definition": "",
        "pinyin": "yī",
        "radical": "一",
        "hsk_level": 1,
        "is_radical": True,
        "script_type": None,
        "stroke_count": 1,
        "decomposition": None,
        "variants": None,
        "radical_variants": None,
    }


@pytest.mark.parametrize("character, radical, expected", [
    ("一", "一", True),
    ("好", "女", False),
    ("好", None, False),
])
def test_is_radical_is_derived(character, radical, expected):
    assert normalize_record(_enriched(character=character, radical=radical))["is_radical"] is expected
