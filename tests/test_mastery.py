"""Tests for word mastery updates."""

import time
import pytest
from datetime import datetime, timedelta, timezone

from models import VocabularyEntry, WordStatus
from quiz import MasteryUpdater, apply_answer, next_status
from review_scheduler import is_due


class FailingWordRepository:
    """Loads entries from a real repository but refuses to save them."""

    def __init__(self, inner):
        self.inner = inner

    def get_entry_by_id(self, entry_id):
        return self.inner.get_entry_by_id(entry_id)

    def save_entry(self, entry):
        raise RuntimeError("disk full")


class TestNextStatus:
    """Tests for the status transition rule."""

    def test_first_correct_answer_is_learning(self):
        assert next_status(True, 1, 1) == WordStatus.LEARNING

    def test_incorrect_answer_is_learning(self):
        assert next_status(False, 5, 4) == WordStatus.LEARNING

    def test_known_after_three_reviews_two_correct(self):
        assert next_status(True, 3, 2) == WordStatus.KNOWN

    def test_not_known_with_too_few_reviews(self):
        assert next_status(True, 2, 2) == WordStatus.LEARNING

    def test_not_known_with_too_few_correct(self):
        assert next_status(True, 3, 1) == WordStatus.LEARNING


class TestApplyAnswer:
    """Tests for apply_answer."""

    def test_increments_counters(self, cat_entry):
        now = datetime(2025, 3, 1, 9, 30)
        updated = apply_answer(cat_entry, True, 2_000, now)

        assert updated.review_count == 1
        assert updated.correct_count == 1
        assert updated.status == WordStatus.LEARNING
        assert updated.last_reviewed_at == now
        assert updated.fsrs_state is not None

    def test_does_not_mutate_input(self, cat_entry):
        apply_answer(cat_entry, True)

        assert cat_entry.review_count == 0
        assert cat_entry.fsrs_state is None

    def test_incorrect_leaves_correct_count(self, cat_entry):
        updated = apply_answer(cat_entry, False)

        assert updated.review_count == 1
        assert updated.correct_count == 0

    def test_progression_to_known(self, cat_entry):
        entry = cat_entry
        for is_correct in (True, False, True):
            entry = apply_answer(entry, is_correct)

        assert entry.review_count == 3
        assert entry.correct_count == 2
        assert entry.status == WordStatus.KNOWN

    @pytest.mark.parametrize(
        "is_correct, expected",
        [
            (True, (3, 2, WordStatus.KNOWN)),
            (False, (3, 1, WordStatus.LEARNING)),
        ],
    )
    def test_third_review(self, is_correct, expected):
        entry = VocabularyEntry(
            user_id="u",
            word="run",
            status=WordStatus.LEARNING,
            review_count=2,
            correct_count=1,
        )

        updated = apply_answer(entry, is_correct)

        assert (updated.review_count, updated.correct_count, updated.status) == expected

    def test_known_word_demoted_by_wrong_answer(self, known_entry):
        updated = apply_answer(known_entry, False)
        assert updated.status == WordStatus.LEARNING


class TestMasteryUpdater:
    """Tests for MasteryUpdater persistence."""

    def test_saves_updated_entry(self, populated_word_repo, cat_entry):
        updater = MasteryUpdater(populated_word_repo)

        warning = updater.record_answer(cat_entry.id, True, 1_500)

        assert warning is None
        stored = populated_word_repo.get_entry_by_id(cat_entry.id)
        assert stored.review_count == 1
        assert stored.correct_count == 1
        assert stored.status == WordStatus.LEARNING
        assert stored.fsrs_state is not None

    def test_missing_entry_returns_warning(self, word_repo):
        updater = MasteryUpdater(word_repo)

        warning = updater.record_answer("missing", True)

        assert warning is not None
        assert "missing" in warning

    def test_storage_failure_returns_warning(self, populated_word_repo, cat_entry):
        updater = MasteryUpdater(FailingWordRepository(populated_word_repo))

        warning = updater.record_answer(cat_entry.id, True)

        assert "disk full" in warning
        assert populated_word_repo.get_entry_by_id(cat_entry.id).review_count == 0

    def test_storage_failure_invokes_callback(self, populated_word_repo, cat_entry):
        failures = []
        updater = MasteryUpdater(
            FailingWordRepository(populated_word_repo),
            on_persist_error=lambda entry_id, error: failures.append((entry_id, error)),
        )

        updater.record_answer(cat_entry.id, False)

        assert len(failures) == 1
        assert failures[0][0] == cat_entry.id
        assert isinstance(failures[0][1], RuntimeError)

    def test_raising_callback_propagates(self, populated_word_repo, cat_entry):
        def strict(entry_id, error):
            raise error

        updater = MasteryUpdater(
            FailingWordRepository(populated_word_repo), on_persist_error=strict
        )

        with pytest.raises(RuntimeError, match="disk full"):
            updater.record_answer(cat_entry.id, True)

    def test_entries_without_state_gain_schedule(self, word_repo):
        entry = VocabularyEntry(user_id="u", word="novel")
        word_repo.save_entry(entry)

        MasteryUpdater(word_repo).record_answer(entry.id, True, 10_000)

        assert word_repo.get_entry_by_id(entry.id).fsrs_state.due is not None


@pytest.fixture
def pacific_time(monkeypatch):
    """Run with a local clock seven or eight hours behind UTC."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestLocalTimezone:
    """The review schedule must not depend on the machine's timezone."""

    def test_fresh_correct_answer_is_not_due(self, pacific_time, cat_entry):
        updated = apply_answer(cat_entry, True, 1_500)

        assert not is_due(updated)

    def test_review_recorded_at_utc_now(self, pacific_time, cat_entry):
        before = datetime.now(timezone.utc).replace(tzinfo=None)

        updated = apply_answer(cat_entry, True, 1_500)

        last_review = updated.fsrs_state.last_review
        assert before <= last_review <= before + timedelta(minutes=1)
