"""Storage layer for the vocabulary quiz.

Provides repository interfaces plus SQLite and flat JSON file
implementations for persisting vocabulary entries and completed
learning sessions.
"""

from pathlib import Path

from .base import LearningSessionRepository, WordRepository
from .connection import DEFAULT_DB_PATH, get_connection, init_schema
from .json_file import (
    DEFAULT_JSON_PATH,
    JsonFileLearningSessionRepository,
    JsonFileWordRepository,
)
from .sqlite import SQLiteLearningSessionRepository, SQLiteWordRepository

__all__ = [
    # Abstract interfaces
    "WordRepository",
    "LearningSessionRepository",
    # SQLite implementations
    "SQLiteWordRepository",
    "SQLiteLearningSessionRepository",
    # JSON file implementations
    "JsonFileWordRepository",
    "JsonFileLearningSessionRepository",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    "DEFAULT_JSON_PATH",
    # Factory functions
    "get_word_repo",
    "get_session_repo",
]


def get_word_repo(db_path: Path = DEFAULT_DB_PATH) -> WordRepository:
    """Get a WordRepository backed by SQLite, creating the schema if needed."""
    init_schema(db_path)
    return SQLiteWordRepository(db_path)


def get_session_repo(db_path: Path = DEFAULT_DB_PATH) -> LearningSessionRepository:
    """Get a LearningSessionRepository backed by SQLite."""
    init_schema(db_path)
    return SQLiteLearningSessionRepository(db_path)
