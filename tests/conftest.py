"""Shared fixtures and utilities for tests."""

import json
import pytest

from adaptive_interview.interview.decision_engine import RoutingResolver
from adaptive_interview.interview.events import InterviewEventBus
from adaptive_interview.interview.orchestrator import InterviewEngine
from adaptive_interview.interview.testing import (
    create_test_question_bank,
    create_test_store,
)


@pytest.fixture(autouse=True)
def clear_engine_env(monkeypatch):
    """Keep developer environment variables from leaking into config tests."""
    for name in (
        "INTERVIEW_QUESTIONS_FILE",
        "INTERVIEW_LOG_FILE",
        "INTERVIEW_LOG_LEVEL",
        "INTERVIEW_QUESTION_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def question_bank():
    """Raw sample question bank."""
    return create_test_question_bank()


@pytest.fixture
def store(question_bank):
    """Graph store over the sample bank."""
    return create_test_store(question_bank)


@pytest.fixture
def resolver(store):
    return RoutingResolver(store)


@pytest.fixture
def event_bus():
    return InterviewEventBus()


@pytest.fixture
def engine(store, event_bus):
    return InterviewEngine(store, event_bus)


@pytest.fixture
def bank_file(tmp_path, question_bank):
    """Sample bank written to a JSON file."""
    path = tmp_path / "interview-questions.json"
    path.write_text(json.dumps(question_bank), encoding="utf-8")
    return path
