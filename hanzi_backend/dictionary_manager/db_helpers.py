#!/usr/bin/env python3
"""
Db helpers for dictionary manager: schema reset, the all-or-nothing batch
load, and the read queries used by the query surface.
"""
import logging
import os
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hanzi_backend.dictionary_manager.exceptions import DatabaseError, LoadError
from hanzi_backend.dictionary_manager.record_types import CharacterRow
from hanzi_backend.models import Character

logger = logging.getLogger(__name__)


# --- Schema ---

def characters_table_exists(engine: Engine) -> bool:
    """Check for the characters table without creating anything, the SQLite file included."""
    if engine.dialect.name == "sqlite":
        database = engine.url.database
        if database and database != ":memory:" and not os.path.exists(database):
            return False
    return inspect(engine).has_table(Character.__tablename__)


def reset_schema(connection: Connection) -> None:
    """
    Drop and recreate the characters table.

    Must run on a connection that is inside a transaction: the reset only
    becomes visible together with the rows loaded after it.
    """
    table = Character.__table__
    table.drop(connection, checkfirst=True)
    table.create(connection)
    logger.debug("Characters table recreated")


# --- Batch load ---

def load_characters(engine: Engine, rows: Iterable[CharacterRow]) -> int:
    """
    Replace the contents of the characters table with `rows` in one transaction.

    Either every row is committed or, on any constraint violation or engine
    error, nothing is and the previous table is left as it was.

    Returns:
        The number of rows committed.
    """
    rows = list(rows)
    table = Character.__table__
    try:
        with engine.begin() as connection:
            reset_schema(connection)
            if rows:
                connection.execute(table.insert(), rows)
            committed = connection.execute(select(func.count()).select_from(table)).scalar_one()
    except IntegrityError as e:
        logger.error(f"Constraint violated while loading {len(rows)} characters: {e.orig}")
        raise LoadError(f"Constraint violated, nothing was committed: {e.orig}") from e
    except SQLAlchemyError as e:
        logger.error(f"Database error while loading characters: {e}", exc_info=True)
        raise LoadError(f"Database error, nothing was committed: {e}") from e

    logger.info(f"Committed {committed} characters")
    return committed


# --- Queries ---

def get_character(session: Session, character: str) -> Optional[Character]:
    """Look up a single character, None when it has no record."""
    stmt = select(Character).where(Character.character == character)
    return session.execute(stmt).scalar_one_or_none()


def get_characters(session: Session, characters: Iterable[str]) -> Dict[str, Character]:
    """Fetch the records for several characters at once, keyed by character."""
    wanted = set(characters)
    if not wanted:
        return {}
    stmt = select(Character).where(Character.character.in_(wanted))
    return {row.character: row for row in session.execute(stmt).scalars()}


def get_dictionary_stats(session: Session) -> Dict[str, Any]:
    """Collect row counts for the stats display."""
    total = session.execute(select(func.count(Character.id))).scalar_one()
    radicals = session.execute(
        select(func.count(Character.id)).where(Character.is_radical.is_(True))
    ).scalar_one()
    with_decomposition = session.execute(
        select(func.count(Character.id)).where(Character.decomposition.is_not(None))
    ).scalar_one()

    by_level: List[tuple] = session.execute(
        select(Character.hsk_level, func.count(Character.id))
        .group_by(Character.hsk_level)
        .order_by(Character.hsk_level)
    ).all()
    by_script: List[tuple] = session.execute(
        select(Character.script_type, func.count(Character.id))
        .group_by(Character.script_type)
        .order_by(Character.script_type)
    ).all()

    return {
        'total': total,
        'radicals': radicals,
        'with_decomposition': with_decomposition,
        'by_hsk_level': {level: count for level, count in by_level},
        'by_script_type': {script: count for script, count in by_script},
    }


# --- Backup ---

def backup_database(engine: Engine, destination: Union[str, Path]) -> Path:
    """Copy the SQLite knowledge base to `destination` using the online backup API."""
    if engine.dialect.name != "sqlite":
        raise DatabaseError(f"Backups are only supported for SQLite, not {engine.dialect.name}")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    raw_conn = engine.raw_connection()
    target = None
    try:
        target = sqlite3.connect(str(destination))
        raw_conn.driver_connection.backup(target)
    except sqlite3.Error as e:
        logger.error(f"Backup to {destination} failed: {e}")
        raise DatabaseError(f"Backup failed: {e}") from e
    finally:
        if target is not None:
            target.close()
        raw_conn.close()

    logger.info(f"Database backed up to {destination}")
    return destination
