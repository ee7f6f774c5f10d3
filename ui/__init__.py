"""Vocabulary Quiz UI Module - Terminal interface for quizzing and word management."""

from ui.app import QuizUI
from ui.components import (
    QuestionPanel,
    FeedbackPanel,
    WordTable,
    StatsPanel,
    HistoryTable,
    WelcomeScreen,
    SessionSummary,
)
from ui.styles import (
    SKY_BLUE,
    SUN_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "QuizUI",
    "QuestionPanel",
    "FeedbackPanel",
    "WordTable",
    "StatsPanel",
    "HistoryTable",
    "WelcomeScreen",
    "SessionSummary",
    "SKY_BLUE",
    "SUN_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
