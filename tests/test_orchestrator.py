"""
End-to-end tests for the interview engine facade.
"""

import random

import pytest

from adaptive_interview import InterviewEngine, QuestionSetSourceError
from adaptive_interview.config import Config
from adaptive_interview.interview.decision_engine import RoutingReason
from adaptive_interview.interview.events import EventType
from adaptive_interview.interview.models import DefaultNextKind
from adaptive_interview.interview.testing import ReportValidator


class TestFullInterview:
    """Drive a whole interview through the engine."""

    def test_backend_beginner_run(self, engine):
        opening = engine.start_interview("backend", "beginner", user_name="Alex")
        assert opening.first_question.id == 1
        assert opening.greeting == (
            "Hello Alex! Welcome to your technical interview practice session for the backend "
            "position at beginner level. I'll be asking you some questions today. Let's begin!"
        )

        first = engine.submit_answer("backend", "beginner", 1,
                                     "An API is an interface that lets programs communicate")
        assert first.evaluation.score == 58
        assert first.evaluation.keywords_matched == ("API", "interface")
        assert first.evaluation.feedback == (
            "Your answer is on the right track, but could be more detailed. You mentioned: API, interface."
        )
        assert first.next_question.id == 3
        assert not first.is_finished

        second = engine.submit_answer("backend", "beginner", first.next_question.id, "")
        assert second.evaluation.score == 0
        assert second.evaluation.feedback == "No answer provided."
        assert second.is_finished
        assert second.decision.reason == RoutingReason.EXHAUSTED

        report = engine.build_report([first.evaluation, second.evaluation], role="Backend Developer")
        assert report.questions_answered == 2
        assert report.average_score == 29
        assert report.overall_rating == "Poor"
        ReportValidator.assert_valid_report(report)

        assert engine.metrics.get_metrics() == {
            "interviews_started": 1,
            "answers_evaluated": 2,
            "profanity_detections": 0,
            "low_knowledge_detections": 0,
            "off_topic_detections": 0,
            "keyword_routes": 1,
            "interviews_completed": 1,
            "reports_generated": 1,
        }

    def test_low_knowledge_turn(self, engine):
        outcome = engine.submit_answer("backend", "intermediate", 1, "I don't know")
        assert outcome.signals.is_low_knowledge is True
        assert outcome.evaluation.is_low_knowledge is True
        assert outcome.decision.is_low_knowledge is True
        assert outcome.decision.low_knowledge_reply == "No problem, let's move on to something else."
        assert outcome.next_question.id == 2
        assert engine.metrics.low_knowledge_detections == 1

    def test_profane_answer_still_routes(self, engine):
        outcome = engine.submit_answer("backend", "beginner", 1, "Damn, an API is just an interface")
        assert outcome.evaluation.has_profanity is True
        assert outcome.next_question.id == 3
        assert engine.metrics.profanity_detections == 1

    def test_unknown_question(self, engine, event_bus):
        seen = []
        event_bus.subscribe_all(seen.append)
        outcome = engine.submit_answer("backend", "beginner", 99, "anything")
        assert outcome.evaluation is None
        assert outcome.decision.reason == RoutingReason.NOT_FOUND
        assert outcome.is_finished
        assert seen == []

    def test_unknown_domain_opening(self, engine):
        opening = engine.start_interview("mobile", "beginner")
        assert opening.first_question is None
        assert opening.greeting.startswith("Hello! Welcome to your technical interview practice session")

    def test_engine_keeps_no_interview_state(self, engine):
        first = engine.submit_answer("backend", "beginner", 1, "An API")
        engine.submit_answer("backend", "beginner", 2, "something else entirely")
        again = engine.submit_answer("backend", "beginner", 1, "An API")
        assert first.evaluation == again.evaluation
        assert first.decision == again.decision


class TestEngineEvents:
    """The engine reports what it does on the event bus."""

    def test_turn_events_in_order(self, engine, event_bus):
        seen = []
        event_bus.subscribe_all(seen.append)
        engine.submit_answer("backend", "intermediate", 5, "No idea", conversation_id="c-1")

        assert [event.event_type for event in seen] == [
            EventType.SIGNAL_DETECTED,
            EventType.ANSWER_EVALUATED,
            EventType.QUESTION_ROUTED,
            EventType.INTERVIEW_COMPLETED,
        ]
        assert all(event.conversation_id == "c-1" for event in seen)
        assert seen[2].data == {
            "from_question_id": 5,
            "to_question_id": None,
            "reason": "end_interview",
            "matched_trigger": None,
        }

    def test_clean_answer_has_no_signal_event(self, engine, event_bus):
        seen = []
        event_bus.subscribe(EventType.SIGNAL_DETECTED, seen.append)
        engine.submit_answer("backend", "beginner", 1, "An API is an interface")
        assert seen == []

    def test_routed_event_records_trigger(self, engine, event_bus):
        seen = []
        event_bus.subscribe(EventType.QUESTION_ROUTED, seen.append)
        engine.submit_answer("backend", "intermediate", 1, "We use redis")
        assert seen[0].data["to_question_id"] == 4
        assert seen[0].data["matched_trigger"] == "redis"


class TestEngineConfiguration:
    """Engines built from configuration read the configured bank."""

    def test_bundled_question_bank(self):
        engine = InterviewEngine.from_config(Config())
        opening = engine.start_interview("backend", "beginner")
        assert opening.first_question.prompt == "What is an API and how does it work?"

    def test_custom_bank_file(self, bank_file):
        engine = InterviewEngine.from_config(Config(questions_file=str(bank_file)))
        assert engine.store.domains() == ["backend", "frontend"]

    def test_missing_bank_file(self, tmp_path):
        engine = InterviewEngine.from_config(Config(questions_file=str(tmp_path / "missing.json")))
        with pytest.raises(QuestionSetSourceError):
            engine.start_interview("backend", "beginner")

    def test_select_questions(self, engine):
        drawn = engine.select_questions("backend", "intermediate", 2)
        assert len(drawn) == 2
        assert len({question.id for question in drawn}) == 2

    def test_select_questions_uses_configured_count(self, bank_file):
        engine = InterviewEngine.from_config(Config(questions_file=str(bank_file), question_count=3))
        assert len(engine.select_questions("backend", "intermediate")) == 3
        assert len(engine.select_questions("backend", "beginner")) == 3


class TestBundledBank:
    """Every edge in the bundled bank points at a real question."""

    @pytest.fixture
    def bundled(self):
        return InterviewEngine.from_config(Config()).store

    def test_all_edges_resolve(self, bundled):
        for domain in bundled.domains():
            for level in bundled.levels(domain):
                questions = bundled.load(domain, level)
                assert questions, f"{domain}/{level} is empty"
                ids = {question.id for question in questions}
                for question in questions:
                    for _, target in question.routing:
                        assert target in ids
                    if question.default_next.kind == DefaultNextKind.GOTO:
                        assert question.default_next.target_id in ids

    def test_random_walk_terminates(self, bundled):
        engine = InterviewEngine(bundled)
        answers = ["", "I don't know", "REST and a database", "redis invalidation", "react"]
        rng = random.Random(5)
        for level in bundled.levels("backend"):
            question = engine.start_interview("backend", level).first_question
            steps = 0
            while question is not None and steps < 20:
                question = engine.submit_answer("backend", level, question.id, rng.choice(answers)).next_question
                steps += 1
            assert question is None
