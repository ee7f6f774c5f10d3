"""Text processing utilities for extracting and normalizing vocabulary."""

import re
import unicodedata

from pydantic import BaseModel

_WORD_RE = re.compile(r"\b\w+\b")
_NON_WORD_RE = re.compile(r"[^\w]")
# Combining dakuten and handakuten
_KANA_VOICING_MARKS = frozenset({"\u3099", "\u309a"})

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
        "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us",
        "them", "my", "your", "his", "its", "our", "their", "this", "that",
        "these", "those",
    }
)


class ProcessedWord(BaseModel):
    """A word found in a piece of text, with its character span."""

    text: str
    start_index: int
    end_index: int


def strip_diacritics(text: str) -> str:
    """Remove combining marks, e.g. 'café' -> 'cafe'.

    Kana voicing marks are kept so that 'が' stays distinct from 'か'.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(
        ch
        for ch in decomposed
        if not unicodedata.combining(ch) or ch in _KANA_VOICING_MARKS
    )
    return unicodedata.normalize("NFC", stripped)


def normalize_word(word: str) -> str:
    """Clean and normalize a word for storage and comparison.

    Lowercases, trims, strips diacritics and drops every non-word
    character. Non-Latin scripts are preserved.
    """
    return _NON_WORD_RE.sub("", strip_diacritics(word.strip().lower()))


def extract_words(text: str) -> list[ProcessedWord]:
    """Split text into lowercased words with their positions."""
    return [
        ProcessedWord(
            text=match.group(0).lower(),
            start_index=match.start(),
            end_index=match.end(),
        )
        for match in _WORD_RE.finditer(text)
    ]


def is_valid_word(word: str) -> bool:
    """Check if a string is likely to be a meaningful word.

    Filters out very short words, numbers and common stop words.
    """
    normalized = normalize_word(word)
    if len(normalized) < 2:
        return False
    if normalized.isdigit():
        return False
    return normalized not in STOP_WORDS


def extract_meaningful_words(text: str) -> list[str]:
    """Extract unique meaningful words from text, in order of appearance."""
    seen: set[str] = set()
    result = []
    for processed in extract_words(text):
        word = processed.text
        if word in seen or not is_valid_word(word):
            continue
        seen.add(word)
        result.append(word)
    return result
