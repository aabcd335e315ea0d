import json

import pytest

from interviewcoach.errors import ExternalServiceError, QuotaExceededError
from interviewcoach.interview.ai_evaluator import SKIPPED_MARKER, normalize_report
from interviewcoach.models import AIFailureReason, Answer, ReportSource

from conftest import FALLBACKS, PRIMARY, FakeJudgeClient, make_ai_response


@pytest.fixture
def answers():
    return [
        Answer(question_index=0, transcript="An API is an interface between a client and a server."),
        Answer(question_index=1, transcript="(skipped)"),
    ]


def test_missing_client_reports_missing_credential(make_ai_evaluator, questions, answers):
    evaluator = make_ai_evaluator(None)
    outcome = evaluator.evaluate(questions, answers, "technical", "easy")

    assert not evaluator.enabled
    assert not outcome.succeeded
    assert outcome.failure == AIFailureReason.MISSING_CREDENTIAL


def test_primary_success(make_ai_evaluator, questions, answers, sleep_recorder):
    client = FakeJudgeClient([make_ai_response(3, score=7)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.succeeded
    assert outcome.model == PRIMARY
    assert client.models_called == [PRIMARY]
    assert sleep_recorder.delays == []

    report = outcome.report
    assert report.source == ReportSource.AI
    assert report.model == PRIMARY
    assert report.overall_score == 7
    assert [qs.question_index for qs in report.question_scores] == [0, 1, 2]
    assert report.strengths == ["Clear structure", "Relevant examples"]
    assert report.suggestions[0].priority == "high"
    assert report.overall_feedback == f"Evaluated by the AI interviewer ({PRIMARY}). Solid interview overall."
    assert report.total_answered == 2
    assert report.total_questions == 3


def test_quota_error_falls_through_to_next_model(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([QuotaExceededError("429"), make_ai_response(3)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.succeeded
    assert outcome.model == FALLBACKS[0]
    assert client.models_called == [PRIMARY, FALLBACKS[0]]


def test_all_models_exhausted_then_delayed_retry_succeeds(make_ai_evaluator, questions, answers, sleep_recorder):
    client = FakeJudgeClient([
        QuotaExceededError("primary"),
        QuotaExceededError("small"),
        QuotaExceededError("large"),
        make_ai_response(3),
    ])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.succeeded
    assert outcome.model == PRIMARY
    assert client.models_called == [PRIMARY, FALLBACKS[0], FALLBACKS[1], PRIMARY]
    assert sleep_recorder.delays == [5]


def test_quota_exhausted_everywhere(make_ai_evaluator, questions, answers, sleep_recorder):
    client = FakeJudgeClient([QuotaExceededError("quota")] * 4)
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert not outcome.succeeded
    assert outcome.failure == AIFailureReason.QUOTA_EXHAUSTED
    assert len(client.calls) == 4
    assert sleep_recorder.delays == [5]


def test_raw_rate_limit_exception_counts_as_quota(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([RuntimeError("Error code: 429 - rate limit reached"), make_ai_response(3)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.succeeded
    assert client.models_called == [PRIMARY, FALLBACKS[0]]


def test_non_quota_error_stops_the_chain(make_ai_evaluator, questions, answers, sleep_recorder):
    client = FakeJudgeClient([ExternalServiceError("connection reset"), make_ai_response(3)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.failure == AIFailureReason.API_ERROR
    assert client.models_called == [PRIMARY]
    assert sleep_recorder.delays == []


def test_unexpected_exception_is_api_error(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([KeyError("choices")])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.failure == AIFailureReason.API_ERROR


def test_error_on_fallback_model_ends_with_api_error(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([QuotaExceededError("quota"), ExternalServiceError("502 bad gateway")])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.failure == AIFailureReason.API_ERROR
    assert outcome.model == FALLBACKS[0]
    assert len(client.calls) == 2


def test_malformed_response_is_not_retried(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient(["I cannot grade this interview.", make_ai_response(3)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.failure == AIFailureReason.INVALID_RESPONSE
    assert client.models_called == [PRIMARY]


def test_wrong_question_score_count_is_invalid(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([make_ai_response(2)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.failure == AIFailureReason.INVALID_RESPONSE


def test_prompt_lists_every_question_and_marks_skips(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([make_ai_response(3)])
    make_ai_evaluator(client).evaluate(questions, answers, "technical", "hard")
    prompt = client.calls[0][0]

    assert "INTERVIEW CATEGORY: technical" in prompt
    assert "DIFFICULTY: hard" in prompt
    assert "exactly 3 entries" in prompt
    for question in questions:
        assert question.text in prompt
    assert "A1: An API is an interface between a client and a server." in prompt
    # one explicit skip and one unanswered question
    assert prompt.count(SKIPPED_MARKER) == 2


def test_normalize_clamps_scores_and_fills_defaults(questions):
    raw = json.dumps({
        "overallScore": 14,
        "communicationScore": "0",
        "confidenceScore": 6.26,
        "technicalScore": -3,
        "strengths": [],
        "questionScores": [{"score": 11}, 0, {"score": "5", "feedback": " ok "}],
        "suggestions": [{"title": "T", "description": "D", "priority": "urgent"}, "bogus"],
    })
    report = normalize_report(raw, questions, [], "m")

    assert report.overall_score == 10
    assert report.communication_score == 1
    assert report.confidence_score == 6.3
    assert report.technical_score == 1
    assert [qs.score for qs in report.question_scores] == [10, 1, 5]
    assert report.question_scores[2].feedback == "ok"
    assert report.strengths == ["Completed the interview session"]
    assert report.improvements == ["Continue practicing with more interview questions"]
    assert len(report.suggestions) == 1
    assert report.suggestions[0].priority == "medium"
    assert report.overall_feedback == "Evaluated by the AI interviewer (m)."


def test_normalize_caps_list_lengths(questions):
    raw = make_ai_response(3, strengths=[f"Strength {i}" for i in range(8)])
    report = normalize_report(raw, questions, [], "m")

    assert report.strengths == [f"Strength {i}" for i in range(5)]


@pytest.mark.parametrize("raw", [
    "",
    "{not json}",
    json.dumps({"overallScore": 5}),
    json.dumps({"overallScore": True, "communicationScore": 5, "confidenceScore": 5,
                "technicalScore": 5, "questionScores": [5, 5, 5]}),
    json.dumps({"overallScore": 5, "communicationScore": 5, "confidenceScore": 5,
                "technicalScore": 5, "questionScores": [5, "high", 5]}),
])
def test_normalize_rejects_unusable_payloads(questions, raw):
    assert normalize_report(raw, questions, [], "m") is None


@pytest.mark.parametrize("overrides", [
    {"strengths": "Clear structure and good examples"},
    {"improvements": "Add depth"},
    {"strengths": ["Clear structure", 7]},
    {"overallFeedback": {"summary": "nested"}},
])
def test_normalize_rejects_non_text_feedback_fields(questions, overrides):
    assert normalize_report(make_ai_response(3, **overrides), questions, [], "m") is None


def test_string_strengths_end_the_chain_as_invalid(make_ai_evaluator, questions, answers):
    client = FakeJudgeClient([make_ai_response(3, strengths="Clear structure"), make_ai_response(3)])
    outcome = make_ai_evaluator(client).evaluate(questions, answers, "technical", "easy")

    assert outcome.failure == AIFailureReason.INVALID_RESPONSE
    assert client.models_called == [PRIMARY]


def test_null_feedback_lists_fall_back_to_defaults(questions):
    report = normalize_report(make_ai_response(3, strengths=None, improvements=None), questions, [], "m")

    assert report.strengths == ["Completed the interview session"]
    assert report.improvements == ["Continue practicing with more interview questions"]
