"""
Database utilities: declarative base, engine creation and session handling.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from hanzi_backend.config import get_db_config
from hanzi_backend.dictionary_manager.exceptions import DatabaseError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_transactional_ddl(engine: Engine) -> None:
    """
    Let pysqlite run DROP/CREATE TABLE inside the same transaction as the
    inserts that follow them. The driver otherwise only opens a transaction
    before DML statements.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create a new engine for the knowledge base."""
    config = get_db_config()
    url = database_url or config['database_url']
    try:
        engine = create_engine(url, echo=config['echo'] if echo is None else echo)
    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Could not create engine for {url}: {e}")
        raise DatabaseError(f"Could not create database engine: {e}") from e
    if engine.dialect.name == "sqlite":
        _enable_sqlite_transactional_ddl(engine)
    logger.debug(f"Engine created for {engine.url}")
    return engine


_engines: Dict[str, Engine] = {}


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Get the shared engine for a database URL (the configured one by default)."""
    url = database_url or get_db_config()['database_url']
    if url not in _engines:
        _engines[url] = create_db_engine(url)
    return _engines[url]


def dispose_engines() -> None:
    """Dispose every shared engine, closing pooled connections."""
    while _engines:
        _, engine = _engines.popitem()
        engine.dispose()


def get_session_factory(engine: Optional[Engine] = None) -> sessionmaker:
    # Rows handed to callers stay readable after the session is closed.
    return sessionmaker(bind=engine or get_engine(), expire_on_commit=False)


@contextmanager
def session_scope(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""
    session = get_session_factory(engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.debug("Session rolled back due to exception in session_scope.")
        raise
    finally:
        session.close()
