"""Shared pytest fixtures for the vocabulary quiz test suite."""

import random
import pytest
from datetime import datetime, timedelta, timezone

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import FSRSState, VocabularyEntry, WordStatus
from quiz import QuizSessionManager
from storage import (
    SQLiteLearningSessionRepository,
    SQLiteWordRepository,
    init_schema,
)

USER_ID = "user-1"


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def cat_entry() -> VocabularyEntry:
    """A word with both a definition and an example sentence."""
    return VocabularyEntry(
        id="w-cat",
        user_id=USER_ID,
        word="猫",
        definition="cat, feline",
        example_sentence="猫が好きです",
        language_code="ja",
    )


@pytest.fixture
def dog_entry() -> VocabularyEntry:
    """A word without a definition or example sentence."""
    return VocabularyEntry(
        id="w-dog",
        user_id=USER_ID,
        word="犬",
        language_code="ja",
    )


@pytest.fixture
def known_entry() -> VocabularyEntry:
    return VocabularyEntry(
        id="w-known",
        user_id=USER_ID,
        word="serendipity",
        definition="a happy accident",
        status=WordStatus.KNOWN,
        review_count=5,
        correct_count=5,
    )


@pytest.fixture
def reviewed_entry() -> VocabularyEntry:
    """A learning word with FSRS state, due tomorrow."""
    now = datetime.now()
    return VocabularyEntry(
        id="w-reviewed",
        user_id=USER_ID,
        word="ephemeral",
        definition="lasting a very short time",
        example_sentence="Fame is ephemeral.",
        status=WordStatus.LEARNING,
        review_count=2,
        correct_count=1,
        last_reviewed_at=now,
        fsrs_state=FSRSState(
            stability=3.0,
            difficulty=5.0,
            due=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=1),
            last_review=datetime.now(timezone.utc).replace(tzinfo=None),
            state=2,  # Review state
            step=None,
        ),
    )


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database path for testing."""
    db_path = tmp_path / "test_quiz.db"
    init_schema(db_path)
    return db_path


@pytest.fixture
def word_repo(test_db_path) -> SQLiteWordRepository:
    return SQLiteWordRepository(test_db_path)


@pytest.fixture
def session_repo(test_db_path) -> SQLiteLearningSessionRepository:
    return SQLiteLearningSessionRepository(test_db_path)


@pytest.fixture
def populated_word_repo(word_repo, cat_entry, dog_entry, known_entry):
    """A repository holding two quizzable words and one known word."""
    for entry in (cat_entry, dog_entry, known_entry):
        word_repo.save_entry(entry)
    return word_repo


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def manager(populated_word_repo, session_repo, rng) -> QuizSessionManager:
    return QuizSessionManager(
        populated_word_repo, rng=rng, session_repo=session_repo
    )
