#!/usr/bin/env python3
"""
Processor for the line-delimited JSON character dictionary (makemeahanzi
dictionary.txt format), enriched with the level/structure reference table.

Pipeline: read line -> validate -> merge reference entry -> normalize ->
buffer -> one transactional load.
"""

import json
import logging
import time
from collections import Counter
from typing import Any, Dict, Iterator, List, Optional, Tuple

from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.engine import Engine
from tqdm import tqdm

from hanzi_backend.dictionary_manager.db_helpers import load_characters
from hanzi_backend.dictionary_manager.exceptions import ParseError, SourceReadError, ValidationError
from hanzi_backend.dictionary_manager.processors.reference_table import ReferenceTable, load_reference_table
from hanzi_backend.dictionary_manager.record_types import CharacterRow, DictionaryEntry, EnrichedRecord
from hanzi_backend.dictionary_manager.schemas import DictionaryEntrySchema
from hanzi_backend.dictionary_manager.text_helpers import normalize_pinyin

logger = logging.getLogger(__name__)

DEFINITION_SEPARATOR = "; "

_entry_schema = DictionaryEntrySchema()


def iter_dictionary_records(filename: str) -> Iterator[Tuple[int, Dict[str, Any]]]:
    """
    Lazily yield (line_number, record) for each line of the dictionary source.

    The file is read one line at a time. The first line that is not a JSON
    object, blank lines included, raises ParseError and ends the iteration;
    nothing after it is read.
    """
    try:
        f = open(filename, "r", encoding="utf-8-sig")
    except FileNotFoundError as e:
        logger.error(f"File not found: {filename}")
        raise SourceReadError(f"Dictionary source not found: {filename}", path=filename) from e
    except OSError as e:
        logger.error(f"Could not open {filename}: {e}")
        raise SourceReadError(f"Could not open dictionary source {filename}: {e}", path=filename) from e

    with f:
        try:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    raise ParseError(
                        f"Line {line_number} of {filename} is blank, expected a JSON object",
                        path=filename,
                        line_number=line_number,
                    )
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.error(f"{filename}:{line_number}: invalid JSON: {e}")
                    raise ParseError(
                        f"Line {line_number} of {filename} is not valid JSON: {e}",
                        path=filename,
                        line_number=line_number,
                    ) from e
                if not isinstance(record, dict):
                    raise ParseError(
                        f"Line {line_number} of {filename} is a JSON {type(record).__name__}, expected an object",
                        path=filename,
                        line_number=line_number,
                    )
                yield line_number, record
        except UnicodeDecodeError as e:
            raise SourceReadError(f"Dictionary source is not valid UTF-8: {filename}: {e}", path=filename) from e


def validate_dictionary_record(record: Dict[str, Any], line_number: Optional[int] = None) -> DictionaryEntry:
    """Decode one raw line into a DictionaryEntry, rejecting it if `character` is missing."""
    try:
        return _entry_schema.load(record)
    except MarshmallowValidationError as e:
        where = f"line {line_number}" if line_number is not None else "record"
        logger.error(f"Rejected {where}: {e.messages}")
        raise ValidationError(
            f"Invalid dictionary record at {where}: {e.messages}",
            line_number=line_number,
            messages=e.messages,
        ) from e


def merge_reference(entry: DictionaryEntry, reference_table: ReferenceTable) -> EnrichedRecord:
    """
    Combine a dictionary entry with the reference table entry for its character.

    Level, script, strokes, decomposition and variants come only from the
    reference table: without an entry they are None whatever the dictionary
    line says. Definition, pinyin, radical and radical variants come only
    from the dictionary line.
    """
    reference = reference_table.get(entry.character)
    return {
        'character': entry.character,
        'definition': entry.definition,
        'pinyin': entry.pinyin,
        'radical': entry.radical,
        'radical_variants': entry.radical_variants,
        'hsk_level': reference.level if reference else None,
        'script_type': reference.script if reference else None,
        'stroke_count': reference.strokes if reference else None,
        'decomposition': reference.decomp if reference else None,
        'variants': reference.variant if reference else None,
    }


def normalize_definition(definition: Any) -> str:
    if definition is None:
        return ""
    if isinstance(definition, list):
        return DEFINITION_SEPARATOR.join(str(sense) for sense in definition if sense)
    return str(definition)


def normalize_record(record: EnrichedRecord) -> CharacterRow:
    """Produce the final row shape: display pinyin, non-null definition, derived is_radical."""
    return {
        'character': record['character'],
        'definition': normalize_definition(record['definition']),
        'pinyin': normalize_pinyin(record['pinyin']),
        'radical': record['radical'],
        'hsk_level': record['hsk_level'],
        'is_radical': record['character'] == record['radical'],
        'script_type': record['script_type'],
        'stroke_count': record['stroke_count'],
        'decomposition': record['decomposition'],
        'variants': record['variants'],
        'radical_variants': record['radical_variants'],
    }


def build_character_rows(
    filename: str,
    reference_table: ReferenceTable,
    show_progress: bool = False,
) -> List[CharacterRow]:
    """Read, validate, enrich and normalize every line of the source."""
    rows: List[CharacterRow] = []
    stats = Counter()

    records = iter_dictionary_records(filename)
    if show_progress:
        records = tqdm(records, desc="Parsing dictionary", unit=" lines")

    for line_number, raw in records:
        entry = validate_dictionary_record(raw, line_number)
        enriched = merge_reference(entry, reference_table)
        if enriched['hsk_level'] is not None:
            stats["enriched"] += 1
        if entry.hsk is not None and entry.hsk != enriched['hsk_level']:
            stats["hsk_overridden"] += 1
        row = normalize_record(enriched)
        if row['is_radical']:
            stats["radicals"] += 1
        rows.append(row)

    logger.info(
        f"Parsed {len(rows)} characters from {filename} "
        f"({stats['enriched']} with reference levels, {stats['radicals']} radicals, "
        f"{stats['hsk_overridden']} source HSK values superseded)"
    )
    return rows


def process_dictionary(
    engine: Engine,
    dictionary_path: str,
    reference_table_path: str,
    show_progress: bool = False,
) -> int:
    """
    Run a full import: the characters table is replaced by the contents of
    `dictionary_path` enriched with `reference_table_path`.

    Raises:
        SourceReadError, ParseError, ValidationError, LoadError. On any of
        them nothing is committed and the previous table is untouched.

    Returns:
        Number of characters committed.
    """
    started = time.monotonic()
    logger.info(f"Importing dictionary {dictionary_path} with reference table {reference_table_path}")

    reference_table = load_reference_table(reference_table_path)
    rows = build_character_rows(dictionary_path, reference_table, show_progress=show_progress)

    logger.info(f"Inserting {len(rows)} characters...")
    committed = load_characters(engine, rows)

    logger.info(f"Import complete: {committed} characters in {time.monotonic() - started:.2f}s")
    return committed
