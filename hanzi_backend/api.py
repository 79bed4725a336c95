"""
Query surface for callers of the knowledge base (a presentation layer, the CLI).

Every function takes an optional `database_url`; the configured DATABASE_URL
is used when it is omitted. Lookups never raise for absent characters, and
never create anything: before the first import they answer as for an empty
knowledge base.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from hanzi_backend.config import get_import_config
from hanzi_backend.database import get_engine, session_scope
from hanzi_backend.dictionary_manager import db_helpers
from hanzi_backend.dictionary_manager.decomposition import (
    ResolvedComponent,
    get_character_components as _get_character_components,
    resolve_components as _resolve_components,
    resolve_decomposition as _resolve_decomposition,
)
from hanzi_backend.dictionary_manager.processors.dictionary_processor import process_dictionary
from hanzi_backend.dictionary_manager.record_types import UnresolvedComponent
from hanzi_backend.dictionary_manager.text_helpers import parse_decomposition
from hanzi_backend.models import Character

logger = logging.getLogger(__name__)


def _reader_engine(database_url: Optional[str]):
    """The engine to read from, or None when nothing has been imported yet."""
    engine = get_engine(database_url)
    if not db_helpers.characters_table_exists(engine):
        logger.debug(f"No characters table at {engine.url}")
        return None
    return engine


def lookup(character: str, database_url: Optional[str] = None) -> Optional[Character]:
    """Return the record for `character`, or None when it is not in the knowledge base."""
    engine = _reader_engine(database_url)
    if engine is None:
        return None
    with session_scope(engine) as session:
        return db_helpers.get_character(session, character)


def resolve_decomposition(
    decomposition: Optional[str],
    database_url: Optional[str] = None,
) -> List[ResolvedComponent]:
    """Resolve each constituent of a descriptor; see dictionary_manager.decomposition."""
    engine = _reader_engine(database_url)
    if engine is None:
        return [UnresolvedComponent(c) for c in parse_decomposition(decomposition)]
    with session_scope(engine) as session:
        return _resolve_decomposition(session, decomposition)


def get_character_components(
    character: str,
    database_url: Optional[str] = None,
) -> Optional[Tuple[Character, List[ResolvedComponent]]]:
    """
    Look up a character and resolve its stored decomposition in one session.

    Returns (record, components), or None when the character is absent.
    """
    engine = _reader_engine(database_url)
    if engine is None:
        return None
    with session_scope(engine) as session:
        return _get_character_components(session, character)


def resolve_components(
    character: str,
    database_url: Optional[str] = None,
) -> Optional[List[ResolvedComponent]]:
    """Resolve the stored decomposition of a character, None if the character is absent."""
    engine = _reader_engine(database_url)
    if engine is None:
        return None
    with session_scope(engine) as session:
        return _resolve_components(session, character)


def run_import(
    source_path: Optional[str] = None,
    reference_table_path: Optional[str] = None,
    database_url: Optional[str] = None,
    show_progress: Optional[bool] = None,
) -> int:
    """
    Replace the knowledge base with a fresh import. Returns the number of
    rows committed; raises an ImportFailure subclass when nothing was.
    """
    config = get_import_config()
    return process_dictionary(
        get_engine(database_url),
        source_path or config['dictionary_path'],
        reference_table_path or config['reference_table_path'],
        show_progress=config['show_progress'] if show_progress is None else show_progress,
    )


def get_dictionary_stats(database_url: Optional[str] = None) -> Dict[str, Any]:
    engine = _reader_engine(database_url)
    if engine is None:
        return {
            'total': 0,
            'radicals': 0,
            'with_decomposition': 0,
            'by_hsk_level': {},
            'by_script_type': {},
        }
    with session_scope(engine) as session:
        return db_helpers.get_dictionary_stats(session)


def backup_database(destination: Union[str, Path], database_url: Optional[str] = None) -> Path:
    """Snapshot the knowledge base to `destination`."""
    return db_helpers.backup_database(get_engine(database_url), destination)
