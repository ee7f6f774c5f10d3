"""Application settings, tunable quiz configuration and logging setup."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import BaseModel, Field
from rich.logging import RichHandler

PROJECT_ROOT = Path(__file__).parent


class Settings:
    PROJECT_NAME: str = "langquiz"
    DEBUG: bool = os.environ.get("LANGQUIZ_DEBUG", "") in ("1", "true", "yes")
    LOG_DIR: str = os.environ.get("LANGQUIZ_LOG_DIR", str(PROJECT_ROOT / "log"))
    LOG_FILE: str = "langquiz.log"
    DATA_DIR: str = os.environ.get("LANGQUIZ_DATA_DIR", str(PROJECT_ROOT / "data"))
    DB_FILE: str = "langquiz.db"
    DEFAULT_USER: str = os.environ.get("LANGQUIZ_USER", "default_user")


settings = Settings()


class QuizConfig(BaseModel):
    """Configuration for quiz session building."""

    default_question_count: int = Field(default=5, ge=1, le=50)
    # Completed sessions whose results stay queryable after eviction
    finished_results_limit: int = Field(default=100, ge=0)
    # Fill leftover slots with known words (at most 2, at most 25% of the quiz)
    reinject_known_words: bool = False


class SchedulerConfig(BaseModel):
    """Configuration for FSRS review scheduling."""

    desired_retention: float = Field(default=0.9, gt=0.0, lt=1.0)
    fast_response_ms: int = Field(default=3000, ge=0)
    normal_response_ms: int = Field(default=8000, ge=0)


def setup_logging(debug: bool = settings.DEBUG) -> None:
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not os.path.exists(settings.LOG_DIR):
        os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    # Console output only for warnings so the quiz screen stays clean
    console_handler = RichHandler(show_path=False, markup=False)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.addHandler(console_handler)
