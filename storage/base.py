"""Abstract repository interfaces for the storage layer."""

from abc import ABC, abstractmethod
from typing import Any

from models import LearningSessionRecord, VocabularyEntry


class WordRepository(ABC):
    """Abstract interface for vocabulary entry storage."""

    @abstractmethod
    def get_entries_for_user(self, user_id: str) -> list[VocabularyEntry]:
        """Load all vocabulary entries owned by a user.

        Args:
            user_id: The owning user's ID.

        Returns:
            List of the user's entries, oldest first.
        """
        pass

    @abstractmethod
    def get_entry_by_id(self, entry_id: str) -> VocabularyEntry | None:
        """Load a single entry by ID.

        Args:
            entry_id: The entry ID.

        Returns:
            The entry, or None if not found.
        """
        pass

    @abstractmethod
    def get_entry_by_word(self, user_id: str, word: str) -> VocabularyEntry | None:
        """Find a user's entry by word, compared in normalized form.

        Args:
            user_id: The owning user's ID.
            word: The word as typed; it is normalized before lookup.

        Returns:
            The entry, or None if the user is not tracking that word.
        """
        pass

    @abstractmethod
    def save_entry(self, entry: VocabularyEntry) -> VocabularyEntry:
        """Insert or replace an entry (upsert by ID).

        Args:
            entry: The entry to save.

        Returns:
            The stored entry.

        Raises:
            ValueError: If another entry of the same user already has the
                same normalized word.
        """
        pass

    @abstractmethod
    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry.

        Args:
            entry_id: The entry ID.

        Returns:
            True if an entry was deleted.
        """
        pass

    def update_entry(
        self, entry_id: str, changes: dict[str, Any]
    ) -> VocabularyEntry | None:
        """Merge partial fields into an existing entry and save it.

        Args:
            entry_id: The entry ID.
            changes: Field name -> new value.

        Returns:
            The updated entry, or None if not found.

        Raises:
            pydantic.ValidationError: If the merged entry is invalid.
        """
        existing = self.get_entry_by_id(entry_id)
        if existing is None:
            return None
        merged = existing.model_dump()
        merged.update(changes)
        merged["id"] = entry_id
        if "word" in changes and "normalized_word" not in changes:
            merged["normalized_word"] = ""
        return self.save_entry(VocabularyEntry.model_validate(merged))


class LearningSessionRepository(ABC):
    """Abstract interface for completed learning session history."""

    @abstractmethod
    def save_session(self, record: LearningSessionRecord) -> None:
        """Save a completed session summary.

        Args:
            record: The session record to save.
        """
        pass

    @abstractmethod
    def get_sessions_for_user(self, user_id: str) -> list[LearningSessionRecord]:
        """Load a user's completed sessions, most recent first.

        Args:
            user_id: The user's ID.

        Returns:
            List of session records.
        """
        pass
