"""
Report Generator for the Interview Coach engine.

Merges per-answer evaluations into one session report:
- AI judge first; its report is used verbatim when available
- Otherwise every question is scored by the local heuristic evaluator and
  the axis scores are averaged

A locally generated report always states that it used local evaluation and
why the AI judge was not used.
"""

from typing import List, Optional

from .ai_evaluator import AIEvaluationOutcome, AIEvaluator
from .answer_evaluator import AnswerEvaluation, HeuristicAnswerEvaluator, clamp
from ..models import (
    AIFailureReason,
    Answer,
    ImprovementSuggestion,
    Question,
    QuestionScore,
    Report,
    ReportSource
)
from ..utils.config import DEFAULT_IMPROVEMENT, DEFAULT_STRENGTH, MAX_REPORT_ITEMS, SKIPPED_TRANSCRIPT
from ..utils.logger import setup_logger
from ..utils.text_utils import truncate, unique_items

logger = setup_logger("report_generator")

FALLBACK_REASONS = {
    AIFailureReason.MISSING_CREDENTIAL: "no AI API key is configured",
    AIFailureReason.QUOTA_EXHAUSTED: "the AI service quota was exhausted on every available model",
    AIFailureReason.API_ERROR: "the AI service returned an error",
    AIFailureReason.INVALID_RESPONSE: "the AI service returned a response that could not be read",
}

GENERIC_SUGGESTIONS = [
    ImprovementSuggestion(
        title="Use the STAR method",
        description="Structure answers as Situation, Task, Action and Result so every answer has a clear arc and a concrete outcome.",
        priority="high",
        category="communication"
    ),
    ImprovementSuggestion(
        title="Back claims with specifics",
        description="Mention concrete technologies, numbers and examples from your own work instead of general statements.",
        priority="high",
        category="technical"
    ),
    ImprovementSuggestion(
        title="Reduce filler and hedging words",
        description="Pause instead of saying 'um' or 'like', and replace 'I think' or 'maybe' with direct statements.",
        priority="medium",
        category="confidence"
    ),
    ImprovementSuggestion(
        title="Practice under time limits",
        description="Rehearse answers aloud with a timer, aiming for one to two minutes of focused content per question.",
        priority="low",
        category="general"
    ),
]


def _mean(values: List[float]) -> float:
    return round(sum(values) / len(values), 1) if values else 1.0


def _performance_summary(overall: float) -> str:
    if overall >= 8:
        return "Outstanding performance across the interview."
    if overall >= 6:
        return "Solid performance with room to add more depth."
    if overall >= 4:
        return "A fair attempt; focus on more specific, structured answers."
    return "This interview needs significant improvement; review the fundamentals and answer every question fully."


class ReportGenerator:
    """
    Builds the final report for a session.

    Tries the AI evaluator first and falls back to the heuristic evaluator.
    AI failures never propagate out of generate_report.
    """

    def __init__(
        self,
        ai_evaluator: Optional[AIEvaluator] = None,
        local_evaluator: Optional[HeuristicAnswerEvaluator] = None
    ):
        self.ai_evaluator = ai_evaluator if ai_evaluator is not None else AIEvaluator(client=None)
        self.local_evaluator = local_evaluator if local_evaluator is not None else HeuristicAnswerEvaluator()

    def generate_report(
        self,
        questions: List[Question],
        answers: List[Answer],
        category: str,
        difficulty: str
    ) -> Report:
        """
        Generate the session report.

        Args:
            questions: All session questions, in order
            answers: Answers collected so far (unanswered questions count as skipped)
            category: Session category
            difficulty: Session difficulty

        Returns:
            Report from the AI judge, or a locally computed Report with a
            provenance note
        """
        outcome = self.ai_evaluator.evaluate(questions, answers, category, difficulty)
        if outcome.succeeded:
            logger.info(f"Report generated by AI judge ({outcome.model})")
            return outcome.report

        logger.info(f"Falling back to local evaluation: {outcome.failure.value}")
        return self.generate_local_report(questions, answers, outcome)

    def generate_local_report(
        self,
        questions: List[Question],
        answers: List[Answer],
        outcome: AIEvaluationOutcome
    ) -> Report:
        answers_by_index = {answer.question_index: answer for answer in answers}

        evaluations: List[AnswerEvaluation] = []
        question_scores: List[QuestionScore] = []
        strengths: List[str] = []
        improvements: List[str] = []

        for i, question in enumerate(questions):
            answer = answers_by_index.get(question.order)
            transcript = answer.transcript if answer is not None else SKIPPED_TRANSCRIPT
            evaluation = self.local_evaluator.evaluate(transcript, question.expected_keywords)
            evaluations.append(evaluation)

            question_scores.append(QuestionScore(
                question_index=i,
                score=evaluation.overall,
                feedback=evaluation.feedback
            ))
            strengths.extend(self._strengths_for(question, evaluation))
            improvements.extend(self._improvements_for(question, evaluation))

        overall = clamp(_mean([e.overall for e in evaluations]))
        communication = clamp(_mean([e.communication_score for e in evaluations]))
        confidence = clamp(_mean([e.confidence_score for e in evaluations]))
        technical = clamp(_mean([e.keyword_score for e in evaluations]))

        reason = FALLBACK_REASONS.get(outcome.failure, FALLBACK_REASONS[AIFailureReason.API_ERROR])
        feedback = (
            f"This report was generated with local evaluation because {reason}. "
            f"{_performance_summary(overall)}"
        )

        return Report(
            overall_score=overall,
            communication_score=communication,
            confidence_score=confidence,
            technical_score=technical,
            strengths=unique_items(strengths, MAX_REPORT_ITEMS) or [DEFAULT_STRENGTH],
            improvements=unique_items(improvements, MAX_REPORT_ITEMS) or [DEFAULT_IMPROVEMENT],
            question_scores=question_scores,
            suggestions=[s.model_copy() for s in GENERIC_SUGGESTIONS],
            overall_feedback=feedback,
            source=ReportSource.LOCAL,
            model=None,
            fallback_reason=outcome.failure,
            total_answered=len(answers),
            total_questions=len(questions)
        )

    def _strengths_for(self, question: Question, evaluation: AnswerEvaluation) -> List[str]:
        strengths = []
        if evaluation.overall >= 7:
            strengths.append(f'Strong answer on: "{truncate(question.text, 50)}"')
        if len(evaluation.matched_keywords) >= 3:
            strengths.append(f"Good use of technical terminology ({', '.join(evaluation.matched_keywords)})")
        if evaluation.communication_score >= 8:
            strengths.append("Clear and articulate communication")
        if evaluation.confidence_score >= 8:
            strengths.append("Confident and assertive delivery")
        return strengths

    def _improvements_for(self, question: Question, evaluation: AnswerEvaluation) -> List[str]:
        improvements = []
        if evaluation.overall < 3:
            improvements.append(f'Review concepts related to: "{truncate(question.text, 50)}"')
        if evaluation.word_count == 0:
            improvements.append("Answer every question - do not skip questions")
        elif evaluation.word_count < 15:
            improvements.append("Provide more detailed and comprehensive answers")
        return improvements
