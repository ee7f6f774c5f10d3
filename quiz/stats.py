"""Learning statistics over a user's vocabulary."""

from datetime import datetime, timedelta, timezone

from models import LearningStats, ReviewSchedule, VocabularyEntry, WordStatus
from review_scheduler import as_utc, get_due_date, get_words_for_review
from storage.base import WordRepository


def build_review_schedule(
    entries: list[VocabularyEntry], now: datetime | None = None
) -> ReviewSchedule:
    """Bucket non-known entries by when they next fall due.

    Entries that were never reviewed are due today. Entries due more than
    two weeks out are not counted.
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end_of_today = today + timedelta(days=1)
    end_of_tomorrow = today + timedelta(days=2)
    end_of_week = today + timedelta(days=7)
    end_of_next_week = today + timedelta(days=14)

    schedule = ReviewSchedule()
    for entry in entries:
        if entry.status == WordStatus.KNOWN:
            continue

        due = get_due_date(entry) or today
        if due < end_of_today:
            schedule.today += 1
        elif due < end_of_tomorrow:
            schedule.tomorrow += 1
        elif due < end_of_week:
            schedule.this_week += 1
        elif due < end_of_next_week:
            schedule.next_week += 1
    return schedule


def compute_learning_stats(
    entries: list[VocabularyEntry], now: datetime | None = None
) -> LearningStats:
    total_reviews = sum(entry.review_count for entry in entries)
    total_correct = sum(entry.correct_count for entry in entries)

    return LearningStats(
        total_words=len(entries),
        unknown_words=sum(1 for e in entries if e.status == WordStatus.UNKNOWN),
        learning_words=sum(1 for e in entries if e.status == WordStatus.LEARNING),
        known_words=sum(1 for e in entries if e.status == WordStatus.KNOWN),
        total_reviews=total_reviews,
        average_accuracy=total_correct / total_reviews if total_reviews > 0 else 0.0,
        words_for_review=len(get_words_for_review(entries, now)),
        review_schedule=build_review_schedule(entries, now),
    )


def get_learning_stats(
    word_repo: WordRepository, user_id: str, now: datetime | None = None
) -> LearningStats:
    """Load a user's entries and summarize their progress."""
    return compute_learning_stats(word_repo.get_entries_for_user(user_id), now)
