"""
Tests for interview report aggregation.
"""

import json

import pytest

from adaptive_interview.interview.analysis import (
    ReportAggregator,
    aggregate,
    answer_keyword_accuracy,
    extract_topic,
    rate_interview,
)
from adaptive_interview.interview.models import AnswerEvaluation
from adaptive_interview.interview.testing import ReportValidator, make_evaluation


SQL_QUESTION = "Explain the difference between SQL and NoSQL databases."
HTTP_QUESTION = "What are HTTP status codes used for?"


class TestEmptyReport:
    """Aggregating nothing still gives a well-formed report."""

    @pytest.mark.parametrize("evaluations", [[], (), None, [None]])
    def test_empty(self, evaluations):
        report = aggregate(evaluations)
        assert report.total_questions == 0
        assert report.questions_answered == 0
        assert report.average_score == 0
        assert report.keyword_accuracy == 0
        assert report.overall_rating == "Poor"
        assert report.topics_to_cover == ("General technical concepts",)
        assert report.detailed_analysis == ()

    def test_empty_recommendations(self):
        report = aggregate([])
        assert report.recommendations == (
            "Your answers lacked relevant keywords (keyword accuracy 0%). "
            "Try to include technical terms and concepts related to the questions.",
            "Your average score was 0%. Focus on providing more detailed and accurate answers.",
        )


class TestStatistics:
    """Averages, counts and keyword accuracy."""

    def test_full_run_scenario(self):
        report = aggregate([
            make_evaluation(question_id=1, score=58, keywords_matched=["API", "interface"]),
            make_evaluation(question_id=3, score=0, question_text=HTTP_QUESTION, answer_text=""),
        ])
        assert report.questions_answered == 2
        assert report.total_questions == 2
        assert report.average_score == 29
        assert report.keyword_accuracy == 50
        assert report.overall_rating == "Poor"
        ReportValidator.assert_valid_report(report)

    def test_average_rounds_half_up(self):
        report = aggregate([make_evaluation(score=50), make_evaluation(score=51)])
        assert report.average_score == 51

    def test_signal_counts(self):
        report = aggregate([
            make_evaluation(is_off_topic=True, has_profanity=True),
            make_evaluation(is_low_knowledge=True),
            make_evaluation(is_low_knowledge=True, has_profanity=True),
            make_evaluation(),
        ])
        assert report.off_topic_count == 1
        assert report.low_knowledge_count == 2
        assert report.profanity_count == 2

    @pytest.mark.parametrize("flags,expected", [
        ([{}, {"keywords_matched": []}, {"keywords_matched": []}], 33),
        ([{}, {}, {"keywords_matched": []}], 67),
        ([{}, {"is_off_topic": True}, {"is_low_knowledge": True}], 33),
        ([{}, {}, {}], 100),
    ])
    def test_keyword_accuracy(self, flags, expected):
        evaluations = [
            make_evaluation(**dict({"keywords_matched": ["api"]}, **overrides)) for overrides in flags
        ]
        assert aggregate(evaluations).keyword_accuracy == expected


class TestRating:
    """The rating table is evaluated top to bottom."""

    @pytest.mark.parametrize("average,accuracy,off_topic,expected", [
        (80, 80, 0, "Excellent"),
        (95, 100, 1, "Good"),
        (80, 79, 0, "Good"),
        (60, 60, 1, "Good"),
        (70, 90, 2, "Fair"),
        (59, 100, 0, "Fair"),
        (40, 40, 5, "Fair"),
        (39, 100, 0, "Poor"),
        (100, 39, 0, "Poor"),
        (0, 0, 0, "Poor"),
    ])
    def test_rate_interview(self, average, accuracy, off_topic, expected):
        assert rate_interview(average, accuracy, off_topic) == expected

    def test_off_topic_answers_cap_rating(self):
        evaluations = [make_evaluation(score=90, keywords_matched=["api"]) for _ in range(3)]
        evaluations += [
            make_evaluation(score=90, keywords_matched=["api"], is_off_topic=True) for _ in range(2)
        ]
        report = aggregate(evaluations)
        assert report.keyword_accuracy == 60
        assert report.overall_rating == "Fair"

    def test_single_off_topic_answer_allows_good(self):
        scores = [80, 80, 70, 70, 70]
        evaluations = [make_evaluation(score=score, keywords_matched=["api"]) for score in scores[:4]]
        evaluations.append(make_evaluation(score=70, keywords_matched=["api"], is_off_topic=True))
        report = aggregate(evaluations)
        assert report.average_score == 74
        assert report.keyword_accuracy == 80
        assert report.overall_rating == "Good"


class TestRecommendations:
    """Recommendations follow a fixed order and embed their numbers."""

    def test_order(self):
        report = aggregate([
            make_evaluation(score=10, is_off_topic=True, has_profanity=True),
            make_evaluation(score=20, is_low_knowledge=True),
        ])
        assert report.recommendations == (
            "You went off-topic 1 time(s). Focus on answering the specific question "
            "asked and include relevant keywords.",
            "You indicated low knowledge on 1 question(s). Consider reviewing the fundamentals of this domain.",
            "Please maintain a professional tone during interviews. Inappropriate language was detected 1 time(s).",
            "Your answers lacked relevant keywords (keyword accuracy 0%). "
            "Try to include technical terms and concepts related to the questions.",
            "Your average score was 15%. Focus on providing more detailed and accurate answers.",
        )

    def test_high_score_closing_remark(self):
        report = aggregate([make_evaluation(score=90, keywords_matched=["api"])])
        assert report.recommendations == ("Great job! You scored 90% on average. Keep up the good work!",)

    def test_middle_scores_have_no_closing_remark(self):
        report = aggregate([make_evaluation(score=70, keywords_matched=["api"])])
        assert report.recommendations == ()


class TestTopics:
    """Topics come from low-scoring, on-topic answers."""

    @pytest.mark.parametrize("question,expected", [
        (SQL_QUESTION, "Explain"),
        (HTTP_QUESTION, "Status"),
        ("How would you design caching for a read-heavy service?", "Would"),
        ("Define caching?", "Caching"),
        ("What is an API and how does it work?", None),
        ("", None),
    ])
    def test_extract_topic(self, question, expected):
        assert extract_topic(question) == expected

    def test_low_scores_give_topics_in_order(self):
        report = aggregate([
            make_evaluation(score=30, question_text=HTTP_QUESTION),
            make_evaluation(score=90, question_text="Describe database indexing"),
            make_evaluation(score=10, question_text=SQL_QUESTION),
            make_evaluation(score=20, question_text=HTTP_QUESTION),
        ])
        assert report.topics_to_cover == ("Status", "Explain")

    def test_off_topic_answers_are_skipped(self):
        report = aggregate([
            make_evaluation(score=10, question_text=SQL_QUESTION, is_off_topic=True),
            make_evaluation(score=90, question_text=HTTP_QUESTION),
        ], role="Backend Developer")
        assert "Explain" not in report.topics_to_cover

    def test_role_fallback(self):
        report = aggregate([make_evaluation(score=40)], role="Backend Developer")
        assert report.topics_to_cover == ("Backend Developer",)

    def test_generic_fallback(self):
        assert aggregate([make_evaluation(score=40)]).topics_to_cover == ("General technical concepts",)

    def test_no_fallback_for_good_average(self):
        report = aggregate([make_evaluation(score=75, keywords_matched=["api"])], role="Backend")
        assert report.topics_to_cover == ()


class TestDetailedAnalysis:
    """Each answer keeps its own keyword accuracy."""

    @pytest.mark.parametrize("matched,expected_keywords,accuracy", [
        (["a"], ["a", "b", "c"], 33),
        (["a", "b"], ["a", "b", "c"], 67),
        ([], ["a", "b"], 0),
        (["a"], [], 100),
        ([], [], 0),
    ])
    def test_answer_keyword_accuracy(self, matched, expected_keywords, accuracy):
        evaluation = make_evaluation(keywords_matched=matched, expected_keywords=expected_keywords)
        assert answer_keyword_accuracy(evaluation) == accuracy

    def test_detailed_analysis_follows_input_order(self):
        evaluations = [make_evaluation(question_id=i, score=i * 10) for i in (3, 1, 2)]
        report = aggregate(evaluations)
        assert [item.evaluation.question_id for item in report.detailed_analysis] == [3, 1, 2]


class TestAggregateProperties:
    """Aggregation is pure and tolerant of stored data."""

    def test_idempotent(self):
        evaluations = [
            make_evaluation(score=58, keywords_matched=["API"], expected_keywords=["API", "request"]),
            make_evaluation(score=12, question_text=SQL_QUESTION, is_low_knowledge=True),
        ]
        snapshot = list(evaluations)
        aggregator = ReportAggregator()
        first = aggregator.aggregate(evaluations, role="Backend")
        second = aggregator.aggregate(evaluations, role="Backend")
        assert first == second
        assert first.to_dict() == second.to_dict()
        assert evaluations == snapshot

    def test_rebuilt_records(self):
        records = [
            {"questionId": "1", "questionText": HTTP_QUESTION, "score": "45.0",
             "keywordsMatched": ["status"], "isOffTopic": False},
            {"question_id": 2, "score": None, "keywords_matched": None},
            {},
        ]
        report = aggregate([AnswerEvaluation.from_record(record) for record in records])
        assert report.total_questions == 3
        assert report.average_score == 15
        assert report.keyword_accuracy == 33
        assert report.topics_to_cover == ("Status",)
        ReportValidator.assert_valid_report(report)

    def test_from_record_defaults(self):
        evaluation = AnswerEvaluation.from_record({})
        assert evaluation.question_id == 0
        assert evaluation.score == 0
        assert evaluation.keywords_matched == ()
        assert evaluation.feedback == ""

    def test_non_finite_stored_scores(self):
        records = json.loads(
            '[{"question_id": 1, "score": Infinity}, {"questionId": 2, "score": -Infinity},'
            ' {"question_id": 3, "score": NaN}, {"question_id": 4, "score": 1e999}]'
        )
        evaluations = [AnswerEvaluation.from_record(record) for record in records]
        assert [evaluation.score for evaluation in evaluations] == [0, 0, 0, 0]

        report = aggregate(evaluations)
        assert report.total_questions == 4
        assert report.average_score == 0
        ReportValidator.assert_valid_report(report)

    def test_non_finite_scores_count_as_zero(self):
        report = aggregate([
            make_evaluation(score=float("nan")),
            make_evaluation(score=float("inf")),
            make_evaluation(score=60),
        ])
        assert report.average_score == 20
