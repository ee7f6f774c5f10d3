"""
FSRS integration module for long-term retention scheduling.

This module provides functions to:
1. Map a quiz answer (correctness and response time) to an FSRS rating
2. Process reviews and update a vocabulary entry's FSRS state
3. Calculate due dates and retrievability
4. Select the words that are due for review
"""

from datetime import datetime, timezone

from fsrs import Card, Rating, Scheduler

from config import SchedulerConfig
from models import FSRSState, VocabularyEntry, WordStatus

_config = SchedulerConfig()

# Global FSRS scheduler with default parameters
# desired_retention=0.9 means we aim for 90% recall probability
_scheduler = Scheduler(desired_retention=_config.desired_retention)


def get_scheduler() -> Scheduler:
    """Get the global FSRS scheduler instance."""
    return _scheduler


def as_utc(value: datetime) -> datetime:
    """Naive values are stored UTC; aware values are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def rating_for_answer(
    is_correct: bool,
    response_time_ms: int | None = None,
    config: SchedulerConfig = _config,
) -> Rating:
    """
    Map a quiz answer to an FSRS rating.

    - Incorrect: Rating.Again
    - Correct, no timing: Rating.Good
    - Correct and fast: Rating.Easy
    - Correct and slow: Rating.Hard
    """
    if not is_correct:
        return Rating.Again
    if response_time_ms is None:
        return Rating.Good
    if response_time_ms < config.fast_response_ms:
        return Rating.Easy
    if response_time_ms < config.normal_response_ms:
        return Rating.Good
    return Rating.Hard


def process_review(
    entry: VocabularyEntry,
    is_correct: bool,
    response_time_ms: int | None = None,
    now: datetime | None = None,
) -> None:
    """
    Process a review for a vocabulary entry.

    Entries without FSRS state start from a fresh card.
    """
    review_time = as_utc(now) if now else datetime.now(timezone.utc)
    card = entry.fsrs_state.to_card() if entry.fsrs_state else Card()
    rating = rating_for_answer(is_correct, response_time_ms)

    card, _ = get_scheduler().review_card(card, rating, review_datetime=review_time)

    entry.fsrs_state = FSRSState.from_fsrs_card(card)


def get_due_date(entry: VocabularyEntry) -> datetime | None:
    """
    Get the due date (UTC) for an entry.
    Returns None if the entry has never been reviewed.
    """
    if entry.fsrs_state is None or entry.fsrs_state.due is None:
        return None
    return as_utc(entry.fsrs_state.due)


def get_retrievability(
    entry: VocabularyEntry, now: datetime | None = None
) -> float | None:
    """
    Get current retrievability (probability of recall) for an entry.
    Returns None if the entry has never been reviewed.
    """
    if entry.fsrs_state is None:
        return None

    card = entry.fsrs_state.to_card()
    current = as_utc(now) if now else datetime.now(timezone.utc)
    return get_scheduler().get_card_retrievability(card, current_datetime=current)


def is_due(entry: VocabularyEntry, now: datetime | None = None) -> bool:
    """Check if an entry is due for review. New entries are always due."""
    due = get_due_date(entry)
    if due is None:
        return True
    current = as_utc(now) if now else datetime.now(timezone.utc)
    return current >= due


def get_words_for_review(
    entries: list[VocabularyEntry], now: datetime | None = None
) -> list[VocabularyEntry]:
    """Return the non-known entries that are due, least recently reviewed first."""
    due_entries = [
        entry
        for entry in entries
        if entry.status != WordStatus.KNOWN and is_due(entry, now)
    ]
    return sorted(
        due_entries,
        key=lambda e: e.last_reviewed_at.timestamp() if e.last_reviewed_at else 0.0,
    )
