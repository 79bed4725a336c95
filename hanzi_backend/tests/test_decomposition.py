import pytest

from hanzi_backend.database import session_scope
from hanzi_backend.dictionary_manager.decomposition import resolve_components, resolve_decomposition
from hanzi_backend.dictionary_manager.enums import StructureCategory, StructureOperator
from hanzi_backend.dictionary_manager.record_types import UnresolvedComponent
from hanzi_backend.dictionary_manager.text_helpers import get_top_level_operator, parse_decomposition
from hanzi_backend.models import Character


@pytest.mark.parametrize("descriptor, expected", [
    ("⿰女子", ["女", "子"]),
    ("⿱⿰木木心", ["木", "木", "心"]),
    ("⿰彳 亍", ["彳", "亍"]),
    ("一", ["一"]),
    ("⿰氵？", ["氵", "？"]),
    ("⿻㇯口一", ["口", "一"]),
    ("", []),
    (None, []),
])
def test_parse_decomposition(descriptor, expected):
    assert parse_decomposition(descriptor) == expected


def test_variation_selector_stays_with_its_glyph():
    assert parse_decomposition("⿰言\ufe00寺") == ["言\ufe00", "寺"]
    assert parse_decomposition("⿱\U000e0100艹日") == ["艹", "日"]


def test_top_level_operator():
    operator = get_top_level_operator("⿰女子")
    assert operator is StructureOperator.LEFT_TO_RIGHT
    assert operator.category is StructureCategory.HORIZONTAL
    assert operator.arity == 2
    assert get_top_level_operator("一") is None
    assert get_top_level_operator(None) is None


def test_all_description_characters_are_operators():
    for code_point in range(0x2FF0, 0x3000):
        assert StructureOperator.is_operator(chr(code_point))
    assert StructureOperator.is_operator("㇯")
    assert not StructureOperator.is_operator("木")


def test_resolves_in_structural_order(loaded_engine):
    with session_scope(loaded_engine) as session:
        components = resolve_decomposition(session, "⿰女子")
    assert [c.character for c in components] == ["女", "子"]
    assert all(isinstance(c, Character) for c in components)
    assert components[0].definition == "woman, girl"


def test_missing_components_are_flagged_in_place(loaded_engine):
    with session_scope(loaded_engine) as session:
        components = resolve_decomposition(session, "⿰亻木")
    assert components[0] == UnresolvedComponent("亻")
    assert isinstance(components[1], Character)
    assert components[1].character == "木"


def test_unknown_placeholder_never_resolves(loaded_engine):
    with session_scope(loaded_engine) as session:
        components = resolve_decomposition(session, "⿰木？")
    assert components[1] == UnresolvedComponent("？")


def test_repeated_components_repeat_the_record(loaded_engine):
    with session_scope(loaded_engine) as session:
        components = resolve_decomposition(session, "⿰木木")
    assert len(components) == 2
    assert components[0].id == components[1].id


@pytest.mark.parametrize("descriptor", [None, ""])
def test_empty_descriptor(loaded_engine, descriptor):
    with session_scope(loaded_engine) as session:
        assert resolve_decomposition(session, descriptor) == []


def test_resolution_is_single_level(loaded_engine):
    with session_scope(loaded_engine) as session:
        components = resolve_decomposition(session, "⿰林休")
    assert [c.character for c in components] == ["林", "休"]
    assert components[0].decomposition == "⿰木木"


def test_resolve_components_of_character(loaded_engine):
    with session_scope(loaded_engine) as session:
        assert [c.character for c in resolve_components(session, "好")] == ["女", "子"]
        assert resolve_components(session, "木") == []
        assert resolve_components(session, "龘") is None


def test_unresolved_component_to_dict():
    assert UnresolvedComponent("亻").to_dict() == {"character": "亻", "resolved": False}
