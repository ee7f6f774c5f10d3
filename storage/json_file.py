"""Flat JSON file implementations of repository interfaces.

All data lives in a single ``app_data.json`` document::

    {"version": "1.0", "words": [...], "learning_sessions": [...]}

Every operation reads and rewrites the whole file (last write wins).
"""

import json
import os
from datetime import datetime

from .base import LearningSessionRepository, WordRepository
from config import settings
from models import LearningSessionRecord, VocabularyEntry
from textproc import normalize_word

DATA_VERSION = "1.0"
DEFAULT_JSON_PATH = os.path.join(settings.DATA_DIR, "app_data.json")


class JsonAppDataFile:
    """Reads and writes the shared app data document."""

    def __init__(self, path: str = DEFAULT_JSON_PATH):
        self.path = path

    def read(self) -> dict:
        if not os.path.exists(self.path):
            return self._empty()
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("words", [])
        data.setdefault("learning_sessions", [])
        return data

    def write(self, data: dict) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        data["version"] = DATA_VERSION
        data["updated_at"] = datetime.now().isoformat()
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _empty() -> dict:
        return {
            "version": DATA_VERSION,
            "words": [],
            "learning_sessions": [],
            "created_at": datetime.now().isoformat(),
        }


class JsonFileWordRepository(WordRepository):
    """JSON file implementation of WordRepository."""

    def __init__(self, path: str = DEFAULT_JSON_PATH):
        self.data_file = JsonAppDataFile(path)

    def get_entries_for_user(self, user_id: str) -> list[VocabularyEntry]:
        return [
            VocabularyEntry.model_validate(item)
            for item in self.data_file.read()["words"]
            if item.get("user_id") == user_id
        ]

    def get_entry_by_id(self, entry_id: str) -> VocabularyEntry | None:
        for item in self.data_file.read()["words"]:
            if item.get("id") == entry_id:
                return VocabularyEntry.model_validate(item)
        return None

    def get_entry_by_word(self, user_id: str, word: str) -> VocabularyEntry | None:
        normalized = normalize_word(word)
        for item in self.data_file.read()["words"]:
            if (
                item.get("user_id") == user_id
                and item.get("normalized_word") == normalized
            ):
                return VocabularyEntry.model_validate(item)
        return None

    def save_entry(self, entry: VocabularyEntry) -> VocabularyEntry:
        data = self.data_file.read()
        words = data["words"]

        for item in words:
            if (
                item.get("id") != entry.id
                and item.get("user_id") == entry.user_id
                and item.get("normalized_word") == entry.normalized_word
            ):
                raise ValueError(
                    f"User {entry.user_id} already tracks '{entry.normalized_word}'"
                )

        serialized = entry.model_dump(mode="json")
        for index, item in enumerate(words):
            if item.get("id") == entry.id:
                words[index] = serialized
                break
        else:
            words.append(serialized)

        self.data_file.write(data)
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        data = self.data_file.read()
        remaining = [item for item in data["words"] if item.get("id") != entry_id]
        if len(remaining) == len(data["words"]):
            return False
        data["words"] = remaining
        self.data_file.write(data)
        return True


class JsonFileLearningSessionRepository(LearningSessionRepository):
    """JSON file implementation of LearningSessionRepository."""

    def __init__(self, path: str = DEFAULT_JSON_PATH):
        self.data_file = JsonAppDataFile(path)

    def save_session(self, record: LearningSessionRecord) -> None:
        data = self.data_file.read()
        sessions = [s for s in data["learning_sessions"] if s.get("id") != record.id]
        sessions.append(record.model_dump(mode="json"))
        data["learning_sessions"] = sessions
        self.data_file.write(data)

    def get_sessions_for_user(self, user_id: str) -> list[LearningSessionRecord]:
        records = [
            LearningSessionRecord.model_validate(item)
            for item in self.data_file.read()["learning_sessions"]
            if item.get("user_id") == user_id
        ]
        return sorted(records, key=lambda r: r.completed_at, reverse=True)
