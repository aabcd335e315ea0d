import pytest

from interviewcoach.interview import ReportGenerator
from interviewcoach.models import AIFailureReason, Answer, ReportSource

from conftest import FakeJudgeClient, make_ai_response

STRONG_API_ANSWER = (
    "An API is an interface that lets one program talk to another. The client sends a request to "
    "an endpoint over HTTP, and the server returns a response, usually as JSON. In my last role I "
    "designed a public API for our billing service and implemented versioning, authentication with "
    "tokens, pagination and consistent error codes so that partner teams could integrate quickly."
)


def _skipped(n):
    return [Answer(question_index=i, transcript="(skipped)") for i in range(n)]


def test_all_skipped_report_is_minimal(local_report_generator, questions):
    report = local_report_generator.generate_report(questions, _skipped(3), "technical", "easy")

    assert report.source == ReportSource.LOCAL
    assert report.model is None
    assert report.fallback_reason == AIFailureReason.MISSING_CREDENTIAL
    assert report.overall_score == 1
    assert report.communication_score == 1
    assert report.confidence_score == 1
    assert report.technical_score == 1
    assert [qs.score for qs in report.question_scores] == [1, 1, 1]
    assert "Answer every question - do not skip questions" in report.improvements
    assert report.improvements.count("Answer every question - do not skip questions") == 1
    assert report.strengths == ["Completed the interview session"]
    assert report.overall_feedback.startswith(
        "This report was generated with local evaluation because no AI API key is configured."
    )


def test_unanswered_questions_count_as_skipped(local_report_generator, questions):
    answers = [Answer(question_index=0, transcript=STRONG_API_ANSWER)]
    report = local_report_generator.generate_report(questions, answers, "technical", "easy")

    assert report.total_answered == 1
    assert report.total_questions == 3
    assert len(report.question_scores) == 3
    assert report.question_scores[0].score >= 8
    assert report.question_scores[1].score == 1
    assert report.question_scores[2].score == 1


def test_local_axes_are_means_of_answer_scores(local_report_generator, questions):
    answers = [Answer(question_index=0, transcript=STRONG_API_ANSWER)] + _skipped(3)[1:]
    report = local_report_generator.generate_report(questions, answers, "technical", "easy")

    # strong answer: overall 8.3, communication 8, confidence 7, keywords 10
    assert report.overall_score == pytest.approx(3.4)
    assert report.communication_score == pytest.approx(3.3)
    assert report.confidence_score == pytest.approx(3.0)
    assert report.technical_score == pytest.approx(3.3)


def test_local_strengths_and_improvements(local_report_generator, questions):
    answers = [Answer(question_index=0, transcript=STRONG_API_ANSWER)] + _skipped(3)[1:]
    report = local_report_generator.generate_report(questions, answers, "technical", "easy")

    assert 'Strong answer on: "Explain what an API is and how it works."' in report.strengths
    assert "Good use of technical terminology (interface, request, response, endpoint)" in report.strengths
    assert "Clear and articulate communication" in report.strengths
    assert 'Review concepts related to: "What is version control and why is it important?"' in report.improvements
    assert len(report.improvements) <= 5
    assert len(report.suggestions) == 4


def test_long_question_text_is_truncated_in_improvements(local_report_generator, questions):
    questions[2].text = "Explain the concept of responsive web design and how media queries fit into it."
    report = local_report_generator.generate_report(questions, _skipped(3), "technical", "easy")

    assert f'Review concepts related to: "{questions[2].text[:50]}..."' in report.improvements


def test_brief_answer_asks_for_more_detail(local_report_generator, questions):
    answers = [Answer(question_index=i, transcript="I would use a REST API.") for i in range(3)]
    report = local_report_generator.generate_report(questions, answers, "technical", "easy")

    assert report.overall_score == 2
    assert "Provide more detailed and comprehensive answers" in report.improvements
    assert "Answer every question - do not skip questions" not in report.improvements


def test_ai_report_is_used_verbatim(make_ai_evaluator, questions):
    client = FakeJudgeClient([make_ai_response(3, score=8)])
    generator = ReportGenerator(ai_evaluator=make_ai_evaluator(client))
    report = generator.generate_report(questions, _skipped(3), "technical", "easy")

    assert report.source == ReportSource.AI
    assert report.fallback_reason is None
    assert report.overall_score == 8
    assert report.overall_feedback.startswith("Evaluated by the AI interviewer")


@pytest.mark.parametrize("response, reason, text", [
    ("no json here", AIFailureReason.INVALID_RESPONSE, "could not be read"),
    (RuntimeError("boom"), AIFailureReason.API_ERROR, "returned an error"),
])
def test_ai_failure_falls_back_with_reason(make_ai_evaluator, questions, response, reason, text):
    generator = ReportGenerator(ai_evaluator=make_ai_evaluator(FakeJudgeClient([response])))
    report = generator.generate_report(questions, _skipped(3), "technical", "easy")

    assert report.source == ReportSource.LOCAL
    assert report.fallback_reason == reason
    assert text in report.overall_feedback


def test_quota_exhaustion_is_explained(make_ai_evaluator, questions):
    client = FakeJudgeClient([RuntimeError("429 Too Many Requests")] * 4)
    report = ReportGenerator(ai_evaluator=make_ai_evaluator(client)).generate_report(
        questions, _skipped(3), "technical", "easy"
    )

    assert report.fallback_reason == AIFailureReason.QUOTA_EXHAUSTED
    assert "quota was exhausted on every available model" in report.overall_feedback
