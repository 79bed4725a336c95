import json

import pytest

from hanzi_backend.database import dispose_engines, get_engine

SAMPLE_DICTIONARY = [
    {"character": "一", "definition": "one", "pinyin": ["yī"], "radical": "一"},
    {"character": "人", "definition": "man; person", "pinyin": ["rén"], "radical": "人", "hsk": 4},
    {"character": "木", "definition": "tree; wood", "pinyin": ["mù"], "radical": "木"},
    {"character": "子", "definition": "son, child", "pinyin": ["zǐ", "zi"], "radical": "子"},
    {"character": "女", "definition": "woman, girl", "pinyin": ["nǚ"], "radical": "女"},
    {"character": "好", "definition": "good, excellent", "pinyin": ["hǎo", "hào"], "radical": "女"},
    {"character": "林", "definition": "forest", "pinyin": ["lín"], "radical": "木"},
    {"character": "休", "definition": "rest", "pinyin": ["xiū"], "radical": "亻"},
]

SAMPLE_REFERENCE = {
    "一": {"level": 1, "script": "both", "strokes": 1, "decomp": "一", "variant": None},
    "人": {"level": 1, "script": "both", "strokes": 2, "decomp": None, "variant": None},
    "好": {"level": 1, "script": "both", "strokes": 6, "decomp": "⿰女子", "variant": None},
    "林": {"level": 3, "script": "both", "strokes": 8, "decomp": "⿰木木", "variant": None},
    "休": {"level": 2, "script": "both", "strokes": 6, "decomp": "⿰亻木", "variant": None},
}


def write_dictionary(path, records):
    """Write records one JSON object per line, strings are written verbatim."""
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            line = record if isinstance(record, str) else json.dumps(record, ensure_ascii=False)
            f.write(line + "\n")
    return str(path)


def write_reference(path, table):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(table, f, ensure_ascii=False)
    return str(path)


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'hanzi.db'}"
    yield url
    dispose_engines()


@pytest.fixture
def engine(database_url):
    return get_engine(database_url)


@pytest.fixture
def dictionary_path(tmp_path):
    return write_dictionary(tmp_path / "dictionary.txt", SAMPLE_DICTIONARY)


@pytest.fixture
def reference_path(tmp_path):
    return write_reference(tmp_path / "hsk_metadata.json", SAMPLE_REFERENCE)


@pytest.fixture
def loaded_engine(engine, dictionary_path, reference_path):
    """Engine for a database holding the sample import."""
    from hanzi_backend.dictionary_manager.processors.dictionary_processor import process_dictionary

    process_dictionary(engine, dictionary_path, reference_path)
    return engine


@pytest.fixture
def make_dictionary(tmp_path):
    def _make(records, name="dictionary.txt"):
        return write_dictionary(tmp_path / name, records)
    return _make


@pytest.fixture
def make_reference(tmp_path):
    def _make(table, name="hsk_metadata.json"):
        return write_reference(tmp_path / name, table)
    return _make
