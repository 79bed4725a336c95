"""
Configuration for the Hanzi knowledge base, read from environment variables.

A `.env` file in the working directory is loaded once when this module is
imported. Command line flags take precedence over anything defined here.
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///hanzi.db"
DEFAULT_DICTIONARY_PATH = os.path.join("data", "dictionary.txt")
DEFAULT_REFERENCE_TABLE_PATH = os.path.join("data", "hsk_metadata.json")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_db_config() -> Dict[str, Any]:
    """Get database configuration from environment variables."""
    return {
        'database_url': os.getenv('DATABASE_URL', DEFAULT_DATABASE_URL),
        'echo': _env_flag('DB_ECHO', False),
    }


def get_import_config() -> Dict[str, Any]:
    """Get default source locations for an import run."""
    return {
        'dictionary_path': os.getenv('DICTIONARY_PATH', DEFAULT_DICTIONARY_PATH),
        'reference_table_path': os.getenv('REFERENCE_TABLE_PATH', DEFAULT_REFERENCE_TABLE_PATH),
        'show_progress': _env_flag('IMPORT_SHOW_PROGRESS', True),
    }


def get_logging_config() -> Dict[str, Any]:
    return {
        'log_dir': os.getenv('LOG_DIR', 'logs'),
        'level': os.getenv('LOG_LEVEL', 'INFO').upper(),
    }
