"""Tests for the data model invariants."""

import pytest
from datetime import datetime, timedelta

from pydantic import ValidationError

from models import (
    FSRSState,
    LearningSessionRecord,
    QuestionType,
    QuizAnswer,
    QuizQuestion,
    QuizSession,
    VocabularyEntry,
    WordStatus,
)


def make_question(entry: VocabularyEntry, qid: str) -> QuizQuestion:
    return QuizQuestion(
        id=qid,
        entry=entry,
        question_type=QuestionType.USAGE,
        text="___",
        correct_answer=entry.word,
    )


class TestVocabularyEntry:
    """Tests for VocabularyEntry validation."""

    def test_defaults(self):
        entry = VocabularyEntry(user_id="u", word="Café")

        assert entry.status == WordStatus.UNKNOWN
        assert entry.review_count == 0
        assert entry.correct_count == 0
        assert entry.fsrs_state is None
        assert entry.normalized_word == "cafe"
        assert entry.id

    def test_rejects_correct_count_above_review_count(self):
        with pytest.raises(ValidationError):
            VocabularyEntry(user_id="u", word="x", review_count=1, correct_count=2)

    def test_rejects_negative_counts(self):
        with pytest.raises(ValidationError):
            VocabularyEntry(user_id="u", word="x", review_count=-1)

    def test_rejects_empty_word(self):
        with pytest.raises(ValidationError):
            VocabularyEntry(user_id="u", word="")

    def test_quiz_eligibility(self, cat_entry, known_entry):
        assert cat_entry.is_quiz_eligible
        assert not known_entry.is_quiz_eligible

    def test_accuracy(self):
        entry = VocabularyEntry(user_id="u", word="w", review_count=4, correct_count=3)
        assert entry.accuracy == 0.75
        assert VocabularyEntry(user_id="u", word="w").accuracy == 0.0


class TestFSRSState:
    """Tests for FSRS card conversion."""

    def test_roundtrip_conversion(self):
        """Converting state to card and back should preserve key data."""
        original = FSRSState(
            stability=10.0,
            difficulty=5.0,
            due=datetime.now(),
            last_review=datetime.now() - timedelta(days=1),
            state=2,
            step=None,
        )

        result = FSRSState.from_fsrs_card(original.to_card())

        assert abs(result.stability - original.stability) < 0.01
        assert abs(result.difficulty - original.difficulty) < 0.01
        assert result.state == original.state
        assert result.due == original.due


class TestQuizSession:
    """Tests for QuizSession bookkeeping."""

    def test_position_tracks_answers(self, cat_entry, dog_entry):
        session = QuizSession(
            user_id="u",
            questions=[make_question(cat_entry, "q1"), make_question(dog_entry, "q2")],
        )
        assert session.current_question.id == "q1"
        assert not session.is_complete

        session.record(QuizAnswer(question_id="q1", answer_text="猫", is_correct=True))

        assert session.position == len(session.answers) == 1
        assert session.current_question.id == "q2"

        session.record(QuizAnswer(question_id="q2", answer_text="", is_correct=False))

        assert session.is_complete
        assert session.current_question is None

        results = session.results()
        assert results.total_questions == 2
        assert results.correct_answers == 1
        assert results.accuracy == 0.5

    def test_questions_are_immutable(self, cat_entry):
        question = make_question(cat_entry, "q1")
        with pytest.raises(ValidationError):
            question.text = "changed"

    def test_learning_session_record(self, cat_entry):
        session = QuizSession(user_id="u", questions=[make_question(cat_entry, "q1")])
        session.record(QuizAnswer(question_id="q1", answer_text="猫", is_correct=True))
        session.completed_at = datetime.now()

        record = LearningSessionRecord.from_session(session)

        assert record.id == session.session_id
        assert record.session_type == "quiz"
        assert record.total_questions == 1
        assert record.correct_answers == 1
