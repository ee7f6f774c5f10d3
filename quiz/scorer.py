"""Answer scoring.

Meaning questions use lenient token-overlap matching so that partial or
paraphrased answers pass. Usage questions need the exact word.
"""

import logging
import re

from models import QuestionType, QuizQuestion

logger = logging.getLogger(__name__)

# Commas, the Japanese ideographic comma and whitespace
_TOKEN_SPLIT_RE = re.compile(r"[、,\s]+")
_TRAILING_PUNCTUATION_RE = re.compile(r"[!?.,]$")


def tokenize(text: str) -> list[str]:
    """Split an answer into lowercased tokens, dropping empty ones."""
    return [token for token in _TOKEN_SPLIT_RE.split(text.strip().lower()) if token]


def normalize_target_word(word: str) -> str:
    """Trim, lowercase and drop one trailing punctuation mark."""
    return _TRAILING_PUNCTUATION_RE.sub("", word.strip().lower())


def check_usage_answer(target_word: str, answer_text: str) -> bool:
    """Exact match against the target word, case-insensitive."""
    return answer_text.strip().lower() == normalize_target_word(target_word)


def check_meaning_answer(correct_answer: str, answer_text: str) -> bool:
    """Any-overlap match between canonical and submitted tokens.

    A canonical answer with no tokens is treated as automatically correct.
    """
    correct_tokens = tokenize(correct_answer)
    user_tokens = tokenize(answer_text)

    if not correct_tokens:
        return True

    for correct_token in correct_tokens:
        for user_token in user_tokens:
            if user_token in correct_token or correct_token in user_token:
                logger.debug("Match found: %r ~ %r", correct_token, user_token)
                return True
    return False


def score_answer(question: QuizQuestion, answer_text: str) -> bool:
    """Judge one submitted answer. Blank answers are always incorrect."""
    if not answer_text or not answer_text.strip():
        return False

    if question.question_type == QuestionType.USAGE:
        is_correct = check_usage_answer(question.correct_answer, answer_text)
    else:
        is_correct = check_meaning_answer(question.correct_answer, answer_text)

    logger.debug(
        "Scored %s answer %r against %r: %s",
        question.question_type.value,
        answer_text,
        question.correct_answer,
        is_correct,
    )
    return is_correct


def get_answer_explanation(question: QuizQuestion, is_correct: bool) -> str:
    """Feedback text shown after an answer."""
    explanation = f"Correct answer: {question.correct_answer}"
    if is_correct:
        return f"Correct! Well done.\n{explanation}"
    return explanation
