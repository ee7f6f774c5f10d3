"""Tests for configuration models and logging setup."""

import logging
import pytest
from logging.handlers import RotatingFileHandler

from pydantic import ValidationError
from rich.logging import RichHandler

from config import QuizConfig, SchedulerConfig, settings, setup_logging


class TestQuizConfig:
    """Tests for QuizConfig bounds."""

    def test_defaults(self):
        config = QuizConfig()

        assert config.default_question_count == 5
        assert config.finished_results_limit == 100
        assert config.reinject_known_words is False

    @pytest.mark.parametrize("count", [0, 51])
    def test_question_count_bounds(self, count):
        with pytest.raises(ValidationError):
            QuizConfig(default_question_count=count)

    def test_retention_must_be_a_probability(self):
        with pytest.raises(ValidationError):
            SchedulerConfig(desired_retention=1.0)


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture
    def root_logger(self):
        logger = logging.getLogger()
        handlers = list(logger.handlers)
        level = logger.level
        yield logger
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers = handlers
        logger.setLevel(level)

    def test_writes_to_rotating_log_file(self, root_logger, tmp_path, monkeypatch):
        log_dir = tmp_path / "logs"
        monkeypatch.setattr(settings, "LOG_DIR", str(log_dir))

        setup_logging(debug=False)
        logging.getLogger("quiz.session").info("hello from the quiz")
        for handler in root_logger.handlers:
            handler.flush()

        log_file = log_dir / settings.LOG_FILE
        assert log_file.exists()
        assert "INFO - hello from the quiz" in log_file.read_text()

    def test_console_only_shows_warnings(self, root_logger, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path))

        setup_logging(debug=False)

        assert root_logger.level == logging.INFO
        file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
        rich_handlers = [h for h in root_logger.handlers if isinstance(h, RichHandler)]
        assert file_handlers
        assert rich_handlers[-1].level == logging.WARNING

    def test_debug_mode(self, root_logger, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path))

        setup_logging(debug=True)

        assert root_logger.level == logging.DEBUG
