"""Quiz question generation.

Turns one vocabulary entry into one question: either a meaning-recall
prompt or a fill-in-the-blank built from the entry's example sentence.
"""

import random
import re
import uuid

from models import QuestionType, QuizQuestion, VocabularyEntry

BLANK = "___"
NO_DEFINITION = "No definition available"

QUESTION_TYPES = (QuestionType.MEANING, QuestionType.USAGE)


def blank_out(sentence: str, word: str) -> str:
    """Replace every case-insensitive occurrence of word with the blank marker."""
    return re.sub(re.escape(word), BLANK, sentence, flags=re.IGNORECASE)


class QuestionGenerator:
    """Builds quiz questions with an injectable random source."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def generate_question(self, entry: VocabularyEntry) -> QuizQuestion:
        """Generate a question of a randomly chosen type.

        Args:
            entry: The vocabulary entry to quiz on. Definition and example
                sentence may be absent.

        Returns:
            A new question holding its own copy of the entry.

        Raises:
            ValueError: If the entry's word is blank.
        """
        if not entry.word.strip():
            raise ValueError(f"Cannot generate a question for blank word (id={entry.id})")

        question_type = self.rng.choice(QUESTION_TYPES)
        if question_type == QuestionType.USAGE:
            return self._usage_question(entry)
        return self._meaning_question(entry)

    def _meaning_question(self, entry: VocabularyEntry) -> QuizQuestion:
        definition = (entry.definition or "").strip()
        return QuizQuestion(
            id=str(uuid.uuid4()),
            entry=entry.model_copy(deep=True),
            question_type=QuestionType.MEANING,
            text=f'What does "{entry.word}" mean?',
            correct_answer=definition or NO_DEFINITION,
        )

    def _usage_question(self, entry: VocabularyEntry) -> QuizQuestion:
        if entry.example_sentence and entry.example_sentence.strip():
            text = blank_out(entry.example_sentence, entry.word)
        else:
            text = f'Please use "{entry.word}" in a sentence.'
        return QuizQuestion(
            id=str(uuid.uuid4()),
            entry=entry.model_copy(deep=True),
            question_type=QuestionType.USAGE,
            text=text,
            correct_answer=entry.word,
        )
