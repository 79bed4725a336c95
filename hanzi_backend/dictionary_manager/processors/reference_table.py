#!/usr/bin/env python3
"""
Loader for the level/structure reference table (a JSON object keyed by character).
"""

import json
import logging
from types import MappingProxyType
from typing import Mapping

from marshmallow import ValidationError as MarshmallowValidationError

from hanzi_backend.dictionary_manager.exceptions import ParseError, SourceReadError, ValidationError
from hanzi_backend.dictionary_manager.record_types import ReferenceEntry
from hanzi_backend.dictionary_manager.schemas import ReferenceEntrySchema

logger = logging.getLogger(__name__)

ReferenceTable = Mapping[str, ReferenceEntry]


def load_reference_table(filename: str) -> ReferenceTable:
    """
    Load the whole reference table into a read-only mapping.

    Args:
        filename: Path to a JSON file of the form
            {"好": {"level": 1, "script": "simplified", "strokes": 6,
                    "decomp": "⿰女子", "variant": null}, ...}

    Returns:
        character -> ReferenceEntry; `.get(char)` returns None for absent characters.
    """
    logger.info(f"Loading reference table: {filename}")
    try:
        with open(filename, "r", encoding="utf-8") as f:
            raw_table = json.load(f)
    except FileNotFoundError as e:
        logger.error(f"Reference table not found: {filename}")
        raise SourceReadError(f"Reference table not found: {filename}", path=filename) from e
    except UnicodeDecodeError as e:
        raise SourceReadError(f"Reference table is not valid UTF-8: {filename}", path=filename) from e
    except OSError as e:
        raise SourceReadError(f"Could not read reference table {filename}: {e}", path=filename) from e
    except json.JSONDecodeError as e:
        logger.error(f"Reference table {filename} is not valid JSON: {e}")
        raise ParseError(f"Invalid JSON in reference table {filename}: {e}", path=filename, line_number=e.lineno) from e

    if not isinstance(raw_table, dict):
        raise ParseError(
            f"Reference table {filename} must be a JSON object keyed by character, got {type(raw_table).__name__}",
            path=filename,
        )

    schema = ReferenceEntrySchema()
    entries = {}
    for character, raw_entry in raw_table.items():
        if not isinstance(raw_entry, dict):
            raise ValidationError(
                f"Reference entry for {character!r} must be an object",
                messages={character: ["Not an object."]},
            )
        try:
            entries[character] = schema.load(raw_entry)
        except MarshmallowValidationError as e:
            raise ValidationError(
                f"Invalid reference entry for {character!r}: {e.messages}",
                messages={character: e.messages},
            ) from e

    logger.info(f"Loaded {len(entries)} reference entries")
    return MappingProxyType(entries)
