"""
Tests for configuration loading and logging setup.
"""

import logging
import os

import pytest

from adaptive_interview import InterviewEngine
from adaptive_interview.config import (
    LOG_FILE,
    LOG_LEVEL,
    QUESTION_COUNT,
    QUESTIONS_FILE,
    Config,
    get_config,
)
from adaptive_interview.utils import setup_logging


class TestGetConfig:
    """Environment variables override the module defaults."""

    def test_defaults(self):
        config = get_config()
        assert config.questions_file == QUESTIONS_FILE
        assert config.question_count == QUESTION_COUNT
        assert config.log_file == LOG_FILE
        assert config.log_level == LOG_LEVEL

    def test_bundled_bank_exists(self):
        assert os.path.isfile(QUESTIONS_FILE)

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("INTERVIEW_QUESTIONS_FILE", str(tmp_path / "bank.json"))
        monkeypatch.setenv("INTERVIEW_LOG_FILE", str(tmp_path / "engine.log"))
        monkeypatch.setenv("INTERVIEW_LOG_LEVEL", "debug")
        monkeypatch.setenv("INTERVIEW_QUESTION_COUNT", "3")

        config = get_config()
        assert config.questions_file == str(tmp_path / "bank.json")
        assert config.log_file == str(tmp_path / "engine.log")
        assert config.log_level == "DEBUG"
        assert config.question_count == 3

    @pytest.mark.parametrize("value", ["three", "0", "-2", "1.5"])
    def test_invalid_question_count(self, monkeypatch, value):
        monkeypatch.setenv("INTERVIEW_QUESTION_COUNT", value)
        with pytest.raises(ValueError):
            get_config()


class TestSetupLogging:
    """File logging with a quiet console."""

    @pytest.fixture
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_writes_to_file(self, tmp_path, restore_root_logger):
        log_path = tmp_path / "logs" / "engine.log"
        assert setup_logging(str(log_path), level="INFO") == str(log_path)

        logging.getLogger("decision_engine").info("routing works")
        logging.getLogger("decision_engine").debug("hidden detail")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        assert "INFO decision_engine - routing works" in content
        assert "hidden detail" not in content

    def test_console_only_shows_errors(self, tmp_path, restore_root_logger):
        setup_logging(str(tmp_path / "engine.log"))
        console = [
            handler for handler in logging.getLogger().handlers
            if not isinstance(handler, logging.FileHandler)
        ]
        assert len(console) == 1
        assert console[0].level == logging.ERROR

    def test_engine_can_configure_logging(self, tmp_path, restore_root_logger):
        log_path = tmp_path / "engine.log"
        engine = InterviewEngine.from_config(
            Config(log_file=str(log_path), log_level="DEBUG"), configure_logging=True
        )
        engine.start_interview("backend", "beginner")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "interview_started" in log_path.read_text(encoding="utf-8")
