"""SQLite implementations of repository interfaces."""

import sqlite3
from datetime import datetime
from pathlib import Path

from .base import LearningSessionRepository, WordRepository
from .connection import DEFAULT_DB_PATH, get_connection
from models import FSRSState, LearningSessionRecord, VocabularyEntry, WordStatus
from textproc import normalize_word

_ENTRY_COLUMNS = (
    "id",
    "user_id",
    "word",
    "normalized_word",
    "status",
    "definition",
    "example_sentence",
    "language_code",
    "review_count",
    "correct_count",
    "last_reviewed_at",
    "created_at",
    "stability",
    "difficulty",
    "due",
    "last_review",
    "state",
    "step",
)


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class SQLiteWordRepository(WordRepository):
    """SQLite implementation of WordRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def get_entries_for_user(self, user_id: str) -> list[VocabularyEntry]:
        """Load all vocabulary entries owned by a user."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM vocabulary_entries WHERE user_id = ? "
                "ORDER BY created_at, rowid",
                (user_id,),
            )
            return [self._row_to_model(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_entry_by_id(self, entry_id: str) -> VocabularyEntry | None:
        """Load a single entry by ID."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM vocabulary_entries WHERE id = ?", (entry_id,)
            )
            row = cursor.fetchone()
            return self._row_to_model(row) if row else None
        finally:
            conn.close()

    def get_entry_by_word(self, user_id: str, word: str) -> VocabularyEntry | None:
        """Find a user's entry by normalized word."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM vocabulary_entries "
                "WHERE user_id = ? AND normalized_word = ?",
                (user_id, normalize_word(word)),
            )
            row = cursor.fetchone()
            return self._row_to_model(row) if row else None
        finally:
            conn.close()

    def save_entry(self, entry: VocabularyEntry) -> VocabularyEntry:
        """Insert or update an entry by ID."""
        placeholders = ", ".join("?" for _ in _ENTRY_COLUMNS)
        updates = ", ".join(
            f"{col} = excluded.{col}" for col in _ENTRY_COLUMNS if col != "id"
        )
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                f"""INSERT INTO vocabulary_entries ({", ".join(_ENTRY_COLUMNS)})
                VALUES ({placeholders})
                ON CONFLICT(id) DO UPDATE SET {updates}""",
                self._model_to_params(entry),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            raise ValueError(
                f"Cannot save entry '{entry.word}' for user {entry.user_id}: {e}"
            ) from e
        finally:
            conn.close()
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "DELETE FROM vocabulary_entries WHERE id = ?", (entry_id,)
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def _row_to_model(self, row) -> VocabularyEntry:
        """Convert a database row to a VocabularyEntry model."""
        fsrs_state = None
        # Only create FSRSState if the entry has been reviewed
        if row["state"] is not None:
            fsrs_state = FSRSState(
                stability=row["stability"],
                difficulty=row["difficulty"],
                due=_parse_datetime(row["due"]),
                last_review=_parse_datetime(row["last_review"]),
                state=row["state"],
                step=row["step"],
            )
        return VocabularyEntry(
            id=row["id"],
            user_id=row["user_id"],
            word=row["word"],
            normalized_word=row["normalized_word"],
            status=WordStatus(row["status"]),
            definition=row["definition"],
            example_sentence=row["example_sentence"],
            language_code=row["language_code"],
            review_count=row["review_count"],
            correct_count=row["correct_count"],
            last_reviewed_at=_parse_datetime(row["last_reviewed_at"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            fsrs_state=fsrs_state,
        )

    def _model_to_params(self, entry: VocabularyEntry) -> tuple:
        """Flatten a VocabularyEntry into column values."""
        fsrs = entry.fsrs_state
        return (
            entry.id,
            entry.user_id,
            entry.word,
            entry.normalized_word,
            entry.status.value,
            entry.definition,
            entry.example_sentence,
            entry.language_code,
            entry.review_count,
            entry.correct_count,
            _format_datetime(entry.last_reviewed_at),
            entry.created_at.isoformat(),
            fsrs.stability if fsrs else None,
            fsrs.difficulty if fsrs else None,
            _format_datetime(fsrs.due) if fsrs else None,
            _format_datetime(fsrs.last_review) if fsrs else None,
            fsrs.state if fsrs else None,
            fsrs.step if fsrs else None,
        )


class SQLiteLearningSessionRepository(LearningSessionRepository):
    """SQLite implementation of LearningSessionRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def save_session(self, record: LearningSessionRecord) -> None:
        """Save a completed session summary."""
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """INSERT OR REPLACE INTO learning_sessions
                (id, user_id, session_type, started_at, completed_at,
                 total_questions, correct_answers)
                VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    record.id,
                    record.user_id,
                    record.session_type,
                    record.started_at.isoformat(),
                    record.completed_at.isoformat(),
                    record.total_questions,
                    record.correct_answers,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_sessions_for_user(self, user_id: str) -> list[LearningSessionRecord]:
        """Load a user's completed sessions, most recent first."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM learning_sessions WHERE user_id = ? "
                "ORDER BY completed_at DESC",
                (user_id,),
            )
            return [
                LearningSessionRecord(
                    id=row["id"],
                    user_id=row["user_id"],
                    session_type=row["session_type"],
                    started_at=datetime.fromisoformat(row["started_at"]),
                    completed_at=datetime.fromisoformat(row["completed_at"]),
                    total_questions=row["total_questions"],
                    correct_answers=row["correct_answers"],
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()
