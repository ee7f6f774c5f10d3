"""Vocabulary quiz engine.

Architecture:
- QuestionGenerator turns a vocabulary entry into a meaning or usage question
- score_answer judges a free-text answer against a question
- MasteryUpdater evolves a word's counters, status and review schedule
- QuizSessionManager owns sessions from start to completion

Errors:
- NoWordsAvailableError: nothing left to quiz the user on
- SessionNotFoundError: unknown, finished or never-started session
- NoCurrentQuestionError: answer submitted to an exhausted session
"""

from quiz.errors import (
    NoCurrentQuestionError,
    NoWordsAvailableError,
    QuizError,
    SessionNotFoundError,
)
from quiz.generator import BLANK, NO_DEFINITION, QuestionGenerator, blank_out
from quiz.mastery import MasteryUpdater, apply_answer, next_status
from quiz.scorer import (
    check_meaning_answer,
    check_usage_answer,
    get_answer_explanation,
    score_answer,
    tokenize,
)
from quiz.session import QuizSessionManager, SessionStore
from quiz.stats import build_review_schedule, compute_learning_stats, get_learning_stats

__all__ = [
    # Errors
    "QuizError",
    "NoWordsAvailableError",
    "SessionNotFoundError",
    "NoCurrentQuestionError",
    # Generation
    "QuestionGenerator",
    "blank_out",
    "BLANK",
    "NO_DEFINITION",
    # Scoring
    "score_answer",
    "check_meaning_answer",
    "check_usage_answer",
    "get_answer_explanation",
    "tokenize",
    # Mastery
    "MasteryUpdater",
    "apply_answer",
    "next_status",
    # Sessions
    "QuizSessionManager",
    "SessionStore",
    # Statistics
    "get_learning_stats",
    "compute_learning_stats",
    "build_review_schedule",
]
