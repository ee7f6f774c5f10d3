"""Database connection management and schema initialization."""

import sqlite3
from pathlib import Path

from config import settings

DEFAULT_DB_PATH = Path(settings.DATA_DIR) / settings.DB_FILE

SCHEMA_SQL = """
-- Vocabulary entries, one row per (user, normalized word)
CREATE TABLE IF NOT EXISTS vocabulary_entries (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    word TEXT NOT NULL,
    normalized_word TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'unknown'
        CHECK (status IN ('unknown', 'learning', 'known')),
    definition TEXT,
    example_sentence TEXT,
    language_code TEXT NOT NULL DEFAULT 'en',
    review_count INTEGER NOT NULL DEFAULT 0,
    correct_count INTEGER NOT NULL DEFAULT 0,
    last_reviewed_at TEXT,
    created_at TEXT NOT NULL,
    -- FSRS scheduling state
    stability REAL,
    difficulty REAL,
    due TEXT,
    last_review TEXT,
    state INTEGER,
    step INTEGER,
    UNIQUE (user_id, normalized_word),
    CHECK (correct_count <= review_count)
);

CREATE INDEX IF NOT EXISTS idx_vocabulary_entries_user ON vocabulary_entries(user_id);
CREATE INDEX IF NOT EXISTS idx_vocabulary_entries_due ON vocabulary_entries(due);

-- Completed quiz sessions
CREATE TABLE IF NOT EXISTS learning_sessions (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    session_type TEXT NOT NULL DEFAULT 'quiz',
    started_at TEXT NOT NULL,
    completed_at TEXT NOT NULL,
    total_questions INTEGER NOT NULL,
    correct_answers INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_learning_sessions_user ON learning_sessions(user_id);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    # Ensure the parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
