"""
AI Evaluator for the Interview Coach engine.

Submits a whole session transcript to a generative judge and parses its
JSON verdict into a Report. The call runs through an ordered chain of
model attempts:

1. the primary (cheap) model
2. each fallback model, only after a quota/rate-limit failure
3. one delayed retry against the primary model, only if every fallback
   also hit its quota

Malformed output and non-quota provider errors end the chain at once.
The evaluator never raises: every outcome is an AIEvaluationOutcome whose
report is None on failure, together with the failure reason.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .answer_evaluator import clamp, is_skipped
from ..errors import ExternalServiceError, QuotaExceededError
from ..llm.groq_service import is_quota_error
from ..models import (
    AIFailureReason,
    Answer,
    ImprovementSuggestion,
    Question,
    QuestionScore,
    Report,
    ReportSource
)
from ..utils.config import (
    AI_RETRY_DELAY_SECONDS,
    DEFAULT_IMPROVEMENT,
    DEFAULT_STRENGTH,
    GROQ_FALLBACK_MODELS,
    GROQ_PRIMARY_MODEL,
    MAX_REPORT_ITEMS
)
from ..utils.logger import setup_logger
from ..utils.text_utils import extract_json_object, unique_items

logger = setup_logger("ai_evaluator")

SKIPPED_MARKER = "[SKIPPED - no answer provided]"
SCORE_FIELDS = {
    "overall_score": "overallScore",
    "communication_score": "communicationScore",
    "confidence_score": "confidenceScore",
    "technical_score": "technicalScore",
}
PRIORITIES = ("high", "medium", "low")

EVALUATION_PROMPT = PromptTemplate(
    input_variables=["category", "difficulty", "num_questions", "qa_pairs"],
    template=(
        "You are a strict, experienced interviewer grading a complete mock interview.\n\n"
        "INTERVIEW CATEGORY: {category}\n"
        "DIFFICULTY: {difficulty}\n"
        "NUMBER OF QUESTIONS: {num_questions}\n\n"
        "QUESTIONS AND CANDIDATE ANSWERS:\n{qa_pairs}\n\n"
        "SCORING RUBRIC (1-10 scale, do NOT inflate scores):\n"
        "- Skipped or no answer: 1\n"
        "- Very short answer (fewer than 15 words): 2-3\n"
        "- Vague or partially correct answer: 4-5\n"
        "- Good answer with depth: 6-7\n"
        "- Excellent answer with specific examples and clear structure: 8-9\n"
        "- Perfect answer: 10 (this should be rare)\n\n"
        "Score every question individually, then score the whole interview on:\n"
        "- communicationScore: clarity, structure and delivery\n"
        "- confidenceScore: assertiveness and absence of hedging\n"
        "- technicalScore: accuracy and depth of the content\n"
        "- overallScore: overall interview performance\n\n"
        "Respond with ONLY one JSON object in exactly this format:\n"
        "{{\n"
        '  "overallScore": 6,\n'
        '  "communicationScore": 6,\n'
        '  "confidenceScore": 6,\n'
        '  "technicalScore": 6,\n'
        '  "strengths": ["specific strength"],\n'
        '  "improvements": ["specific improvement"],\n'
        '  "questionScores": [\n'
        '    {{"questionIndex": 0, "score": 6, "feedback": "feedback for this answer"}}\n'
        "  ],\n"
        '  "suggestions": [\n'
        '    {{"title": "short title", "description": "actionable advice", '
        '"priority": "high|medium|low", "category": "communication|technical|confidence|general"}}\n'
        "  ],\n"
        '  "overallFeedback": "2-3 sentence summary of the performance"\n'
        "}}\n\n"
        "questionScores must contain exactly {num_questions} entries, one per question, in question order."
    )
)


class JudgeVerdictText(BaseModel):
    """Free-text parts of the judge verdict. Lists must be lists of strings."""
    model_config = ConfigDict(extra="ignore")

    strengths: Optional[List[str]] = None
    improvements: Optional[List[str]] = None
    overall_feedback: Optional[str] = Field(None, alias="overallFeedback")


class JudgeClient(Protocol):
    """Text-completion service used as the AI judge."""

    def complete(self, prompt: str, model_name: str) -> str:
        ...


class AttemptStatus(str, Enum):
    OK = "ok"
    QUOTA = "quota"
    ERROR = "error"
    INVALID = "invalid"


@dataclass
class AttemptResult:
    status: AttemptStatus
    model: str
    report: Optional[Report] = None
    detail: str = ""


@dataclass
class AIEvaluationOutcome:
    """Optional report from the AI tier. report is None exactly when failure is set."""
    report: Optional[Report] = None
    model: Optional[str] = None
    failure: Optional[AIFailureReason] = None

    @property
    def succeeded(self) -> bool:
        return self.report is not None


def _to_score(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return round(clamp(float(value)), 1)
    if isinstance(value, str):
        try:
            return round(clamp(float(value.strip())), 1)
        except ValueError:
            return None
    return None


def _parse_suggestions(raw: Any) -> List[ImprovementSuggestion]:
    suggestions = []
    if not isinstance(raw, list):
        return suggestions
    for item in raw:
        if not isinstance(item, dict):
            continue
        title = item.get("title")
        description = item.get("description")
        if not isinstance(title, str) or not isinstance(description, str):
            continue
        priority = str(item.get("priority", "medium")).lower()
        suggestions.append(ImprovementSuggestion(
            title=title.strip(),
            description=description.strip(),
            priority=priority if priority in PRIORITIES else "medium",
            category=str(item.get("category") or "general")
        ))
    return suggestions


def normalize_report(
    raw_text: str,
    questions: List[Question],
    answers: List[Answer],
    model: str
) -> Optional[Report]:
    """
    Turn the judge's raw text into a validated Report.

    Extracts the first balanced JSON object, checks the required fields,
    clamps every score into [1, 10], requires exactly one question score
    per question and requires strengths/improvements to be lists of strings. Returns None when any of this fails.
    """
    data = extract_json_object(raw_text)
    if data is None:
        logger.warning(f"No JSON object found in response from {model}")
        return None

    scores = {}
    for attr, key in SCORE_FIELDS.items():
        score = _to_score(data.get(key))
        if score is None:
            logger.warning(f"Response from {model} is missing a valid '{key}'")
            return None
        scores[attr] = score

    raw_question_scores = data.get("questionScores")
    if not isinstance(raw_question_scores, list) or len(raw_question_scores) != len(questions):
        logger.warning(
            f"Response from {model} has "
            f"{len(raw_question_scores) if isinstance(raw_question_scores, list) else 'no'} "
            f"question scores, expected {len(questions)}"
        )
        return None

    question_scores = []
    for i, item in enumerate(raw_question_scores):
        if isinstance(item, dict):
            score = _to_score(item.get("score"))
            feedback = item.get("feedback") if isinstance(item.get("feedback"), str) else ""
        else:
            score = _to_score(item)
            feedback = ""
        if score is None:
            logger.warning(f"Response from {model} has an invalid score for question {i}")
            return None
        question_scores.append(QuestionScore(question_index=i, score=score, feedback=feedback.strip()))

    try:
        text = JudgeVerdictText.model_validate(data)
    except PydanticValidationError as e:
        logger.warning(f"Response from {model} has malformed text fields: {e.error_count()} errors")
        return None

    strengths = unique_items(text.strengths or [], MAX_REPORT_ITEMS) or [DEFAULT_STRENGTH]
    improvements = unique_items(text.improvements or [], MAX_REPORT_ITEMS) or [DEFAULT_IMPROVEMENT]

    summary = (text.overall_feedback or "").strip()
    feedback = f"Evaluated by the AI interviewer ({model})."
    if summary:
        feedback = f"{feedback} {summary}"

    return Report(
        **scores,
        strengths=strengths,
        improvements=improvements,
        question_scores=question_scores,
        suggestions=_parse_suggestions(data.get("suggestions")),
        overall_feedback=feedback,
        source=ReportSource.AI,
        model=model,
        total_answered=len(answers),
        total_questions=len(questions)
    )


class ModelAttempt:
    """One call to one model, optionally after a fixed delay."""

    def __init__(self, model_name: str, delay_seconds: float = 0, sleep: Callable[[float], None] = time.sleep):
        self.model_name = model_name
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    def run(
        self,
        client: JudgeClient,
        prompt: str,
        questions: List[Question],
        answers: List[Answer]
    ) -> AttemptResult:
        if self.delay_seconds > 0:
            logger.info(f"Waiting {self.delay_seconds}s before retrying {self.model_name}")
            self.sleep(self.delay_seconds)

        try:
            raw_text = client.complete(prompt, self.model_name)
        except QuotaExceededError as e:
            return AttemptResult(AttemptStatus.QUOTA, self.model_name, detail=str(e))
        except ExternalServiceError as e:
            return AttemptResult(AttemptStatus.ERROR, self.model_name, detail=str(e))
        except Exception as e:
            # Clients other than GroqJudgeClient may leak raw SDK errors
            status = AttemptStatus.QUOTA if is_quota_error(e) else AttemptStatus.ERROR
            return AttemptResult(status, self.model_name, detail=f"{type(e).__name__}: {e}")

        report = normalize_report(raw_text, questions, answers, self.model_name)
        if report is None:
            return AttemptResult(AttemptStatus.INVALID, self.model_name, detail="unparseable response")
        return AttemptResult(AttemptStatus.OK, self.model_name, report=report)


class AIEvaluator:
    """
    Evaluates a complete interview with a generative judge.

    The judge client is constructed by the caller and passed in; None means
    no credential is configured and every evaluation degrades immediately.
    """

    def __init__(
        self,
        client: Optional[JudgeClient],
        primary_model: str = GROQ_PRIMARY_MODEL,
        fallback_models: Optional[List[str]] = None,
        retry_delay_seconds: float = AI_RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            client: Judge client, or None when no API key is configured
            primary_model: Model tried first
            fallback_models: Increasingly capable models tried after quota errors
            retry_delay_seconds: Fixed backoff before the final retry on the primary model
            sleep: Sleep function (injectable for tests)
        """
        self.client = client
        self.primary_model = primary_model
        self.fallback_models = list(fallback_models) if fallback_models is not None else list(GROQ_FALLBACK_MODELS)
        self.retry_delay_seconds = retry_delay_seconds
        self.sleep = sleep

        logger.info(
            f"AIEvaluator initialized (enabled={client is not None}, primary={primary_model}, "
            f"fallbacks={self.fallback_models})"
        )

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def build_attempts(self) -> List[ModelAttempt]:
        attempts = [ModelAttempt(self.primary_model)]
        attempts.extend(ModelAttempt(model) for model in self.fallback_models)
        attempts.append(ModelAttempt(self.primary_model, self.retry_delay_seconds, self.sleep))
        return attempts

    def build_prompt(
        self,
        questions: List[Question],
        answers: List[Answer],
        category: str,
        difficulty: str
    ) -> str:
        answers_by_index = {answer.question_index: answer for answer in answers}
        pairs = []
        for i, question in enumerate(questions):
            answer = answers_by_index.get(question.order)
            if answer is None or is_skipped(answer.transcript):
                transcript = SKIPPED_MARKER
            else:
                transcript = answer.transcript.strip()
            pairs.append(f"Q{i + 1} [{question.category}]: {question.text}\nA{i + 1}: {transcript}")

        return EVALUATION_PROMPT.format(
            category=category,
            difficulty=difficulty,
            num_questions=len(questions),
            qa_pairs="\n\n".join(pairs)
        )

    def evaluate(
        self,
        questions: List[Question],
        answers: List[Answer],
        category: str,
        difficulty: str
    ) -> AIEvaluationOutcome:
        """
        Evaluate a whole session.

        Returns:
            AIEvaluationOutcome with a clamped, validated Report on success,
            or report=None plus the failure reason
        """
        if self.client is None:
            logger.info("AI evaluation skipped: no API key configured")
            return AIEvaluationOutcome(failure=AIFailureReason.MISSING_CREDENTIAL)

        prompt = self.build_prompt(questions, answers, category, difficulty)

        for attempt in self.build_attempts():
            logger.info(f"AI evaluation attempt with {attempt.model_name}")
            result = attempt.run(self.client, prompt, questions, answers)

            if result.status == AttemptStatus.OK:
                logger.info(f"✅ AI evaluation succeeded with {result.model}")
                return AIEvaluationOutcome(report=result.report, model=result.model)
            if result.status == AttemptStatus.QUOTA:
                logger.warning(f"Quota exhausted on {result.model}: {result.detail}")
                continue
            if result.status == AttemptStatus.INVALID:
                logger.error(f"❌ Invalid AI response from {result.model}, not retrying")
                return AIEvaluationOutcome(model=result.model, failure=AIFailureReason.INVALID_RESPONSE)

            logger.error(f"❌ AI service error on {result.model}: {result.detail}")
            return AIEvaluationOutcome(model=result.model, failure=AIFailureReason.API_ERROR)

        logger.error("❌ AI quota exhausted on every model, including the delayed retry")
        return AIEvaluationOutcome(failure=AIFailureReason.QUOTA_EXHAUSTED)
