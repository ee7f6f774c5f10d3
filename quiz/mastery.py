"""Word mastery updates after each quiz answer."""

import logging
from datetime import datetime, timezone
from typing import Callable

from models import VocabularyEntry, WordStatus
from review_scheduler import process_review
from storage.base import WordRepository

logger = logging.getLogger(__name__)

# An answer promotes a word to "known" once both thresholds are reached
KNOWN_MIN_REVIEWS = 3
KNOWN_MIN_CORRECT = 2

PersistErrorCallback = Callable[[str, Exception], None]


def next_status(is_correct: bool, review_count: int, correct_count: int) -> WordStatus:
    """Status after an answer, evaluated on the already incremented counters.

    Any answer that does not reach the "known" thresholds leaves the word
    in "learning", including a word that was previously known.
    """
    if (
        is_correct
        and review_count >= KNOWN_MIN_REVIEWS
        and correct_count >= KNOWN_MIN_CORRECT
    ):
        return WordStatus.KNOWN
    if review_count > 0:
        return WordStatus.LEARNING
    return WordStatus.UNKNOWN


def apply_answer(
    entry: VocabularyEntry,
    is_correct: bool,
    response_time_ms: int | None = None,
    now: datetime | None = None,
) -> VocabularyEntry:
    """Return a copy of entry with counters, status and schedule updated."""
    now = now or datetime.now(timezone.utc)
    updated = entry.model_copy(deep=True)

    updated.review_count += 1
    if is_correct:
        updated.correct_count += 1
    updated.status = next_status(
        is_correct, updated.review_count, updated.correct_count
    )
    updated.last_reviewed_at = now

    process_review(updated, is_correct, response_time_ms, now)
    return updated


class MasteryUpdater:
    """Applies answers to stored entries on a best-effort basis.

    Storage failures never propagate: they are logged and returned as a
    warning. Pass ``on_persist_error`` to observe them; a callback that
    raises turns the failure back into an exception.
    """

    def __init__(
        self,
        word_repo: WordRepository,
        on_persist_error: PersistErrorCallback | None = None,
    ):
        self.word_repo = word_repo
        self.on_persist_error = on_persist_error

    def record_answer(
        self,
        entry_id: str,
        is_correct: bool,
        response_time_ms: int | None = None,
    ) -> str | None:
        """Update and save the entry for one answer.

        Returns:
            None on success, otherwise a warning describing what was lost.
        """
        try:
            entry = self.word_repo.get_entry_by_id(entry_id)
            if entry is None:
                warning = f"Word {entry_id} no longer exists; mastery not updated"
                logger.warning(warning)
                return warning

            updated = apply_answer(entry, is_correct, response_time_ms)
            self.word_repo.save_entry(updated)
        except Exception as e:
            logger.error("Failed to update word stats for %s: %s", entry_id, e)
            if self.on_persist_error is not None:
                self.on_persist_error(entry_id, e)
            return f"Progress for word {entry_id} was not saved: {e}"

        logger.info(
            "Updated word stats for %r: reviews=%d correct=%d status=%s",
            updated.word,
            updated.review_count,
            updated.correct_count,
            updated.status.value,
        )
        return None
