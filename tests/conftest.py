import json
import random

import pytest

from interviewcoach.interview import (
    AIEvaluator,
    HeuristicAnswerEvaluator,
    InMemorySessionStore,
    InterviewSessionManager,
    QuestionGenerator,
    ReportGenerator
)
from interviewcoach.models import Question

PRIMARY = "primary-model"
FALLBACKS = ["fallback-small", "fallback-large"]


class FakeJudgeClient:
    """Replays scripted responses; an Exception entry is raised instead of returned."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def complete(self, prompt, model_name):
        self.calls.append((prompt, model_name))
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def models_called(self):
        return [model for _, model in self.calls]


class SleepRecorder:
    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


def make_ai_response(num_questions, score=6, **overrides):
    payload = {
        "overallScore": score,
        "communicationScore": score,
        "confidenceScore": score,
        "technicalScore": score,
        "strengths": ["Clear structure", "Clear structure", "Relevant examples"],
        "improvements": ["Add more depth"],
        "questionScores": [
            {"questionIndex": i, "score": score, "feedback": f"Feedback {i}"}
            for i in range(num_questions)
        ],
        "suggestions": [
            {"title": "Go deeper", "description": "Explain trade-offs.", "priority": "HIGH", "category": "technical"}
        ],
        "overallFeedback": "Solid interview overall."
    }
    payload.update(overrides)
    return "Here is my evaluation:\n```json\n" + json.dumps(payload) + "\n```"


@pytest.fixture
def questions():
    return [
        Question(text="Explain what an API is and how it works.", order=0, category="technical",
                 expected_keywords=["interface", "request", "response", "endpoint"]),
        Question(text="What is version control and why is it important?", order=1, category="technical",
                 expected_keywords=["git", "track", "changes", "branch"]),
        Question(text="Explain the concept of responsive web design.", order=2, category="technical",
                 expected_keywords=["media queries", "viewport", "mobile", "layout"]),
    ]


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def make_ai_evaluator(sleep_recorder):
    def _make(client):
        return AIEvaluator(
            client=client,
            primary_model=PRIMARY,
            fallback_models=FALLBACKS,
            retry_delay_seconds=5,
            sleep=sleep_recorder
        )
    return _make


@pytest.fixture
def local_report_generator():
    return ReportGenerator(ai_evaluator=AIEvaluator(client=None), local_evaluator=HeuristicAnswerEvaluator())


@pytest.fixture
def manager(local_report_generator):
    return InterviewSessionManager(
        store=InMemorySessionStore(),
        question_generator=QuestionGenerator(rng=random.Random(42)),
        report_generator=local_report_generator
    )
