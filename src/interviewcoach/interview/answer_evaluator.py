"""
Heuristic Answer Evaluator for the Interview Coach engine.

Scores a single answer deterministically from lexical signals:
- Keyword coverage against the question's expected keywords
- Sentiment (positive vs. weak/hedging words), used only as a weighting input
- Filler-word density
- Answer length

All scores are on a 1-10 scale, except the keyword score of a missing
answer which is 0.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..utils.config import (
    BRIEF_ANSWER_WORDS,
    COMMUNICATION_LENGTH_THRESHOLDS,
    CONFIDENCE_LENGTH_THRESHOLDS,
    FILLER_WORDS,
    LOCAL_SCORE_WEIGHTS,
    MIN_ANSWER_CHARS,
    POSITIVE_WORDS,
    SKIP_SENTINELS,
    WEAK_WORDS
)
from ..utils.logger import setup_logger
from ..utils.text_utils import count_term_occurrences, find_keywords, normalize_text, tokenize

logger = setup_logger("answer_evaluator")

NO_ANSWER_FEEDBACK = "No answer was provided for this question."
BRIEF_ANSWER_FEEDBACK = "This answer is too brief to evaluate. Aim for a few complete sentences with specific details."


def clamp(value: float, low: float = 1, high: float = 10) -> float:
    return max(low, min(high, value))


@dataclass
class AnswerEvaluation:
    """Result of evaluating one answer."""
    overall: float
    keyword_score: float
    communication_score: float
    confidence_score: float
    feedback: str
    matched_keywords: List[str] = field(default_factory=list)
    word_count: int = 0


def is_skipped(transcript: Optional[str]) -> bool:
    """True when the transcript is empty, too short, or a skip sentinel."""
    text = normalize_text(transcript)
    return len(text) < MIN_ANSWER_CHARS or text in SKIP_SENTINELS


class HeuristicAnswerEvaluator:
    """
    Local, deterministic answer evaluator.
    
    Used whenever the AI judge is unavailable. It is a fixed lexical
    heuristic, not a trained model.
    """
    
    def __init__(
        self,
        positive_words: Optional[List[str]] = None,
        weak_words: Optional[List[str]] = None,
        filler_words: Optional[List[str]] = None
    ):
        self.positive_words = positive_words if positive_words is not None else POSITIVE_WORDS
        self.weak_words = weak_words if weak_words is not None else WEAK_WORDS
        self.filler_words = filler_words if filler_words is not None else FILLER_WORDS
    
    def evaluate(self, answer_text: Optional[str], expected_keywords: Optional[List[str]] = None) -> AnswerEvaluation:
        """
        Evaluate a candidate's answer.
        
        Args:
            answer_text: Transcript of the answer (may be a skip sentinel)
            expected_keywords: Terms to look for (case-insensitive substring match)
        
        Returns:
            AnswerEvaluation with overall, keyword, communication and confidence
            scores, feedback text, matched keywords and word count
        """
        expected_keywords = expected_keywords or []
        text = normalize_text(answer_text)
        
        # Must run before tokenizing: word count is a divisor below
        if is_skipped(text):
            return AnswerEvaluation(
                overall=1,
                keyword_score=0,
                communication_score=1,
                confidence_score=1,
                feedback=NO_ANSWER_FEEDBACK,
                matched_keywords=[],
                word_count=0
            )
        
        words = tokenize(text)
        word_count = len(words)
        
        if word_count < BRIEF_ANSWER_WORDS:
            return AnswerEvaluation(
                overall=2,
                keyword_score=1,
                communication_score=2,
                confidence_score=2,
                feedback=BRIEF_ANSWER_FEEDBACK,
                matched_keywords=[],
                word_count=word_count
            )
        
        matched_keywords = find_keywords(text, expected_keywords)
        if expected_keywords:
            keyword_score = 10 * len(matched_keywords) / len(expected_keywords)
        else:
            keyword_score = 5
        
        positive_count = count_term_occurrences(text, self.positive_words)
        weak_count = count_term_occurrences(text, self.weak_words)
        sentiment = clamp(5 + positive_count - 2 * weak_count)
        
        filler_count = count_term_occurrences(text, self.filler_words)
        filler_ratio = filler_count / word_count
        
        communication_score = self._communication_score(word_count, filler_ratio)
        confidence_score = self._confidence_score(word_count, positive_count, weak_count)
        
        overall = round(
            keyword_score * LOCAL_SCORE_WEIGHTS["keyword"]
            + sentiment * LOCAL_SCORE_WEIGHTS["sentiment"]
            + communication_score * LOCAL_SCORE_WEIGHTS["communication"]
            + confidence_score * LOCAL_SCORE_WEIGHTS["confidence"],
            1
        )
        overall = clamp(overall)
        
        feedback = self._feedback(overall, matched_keywords, filler_count, word_count)
        
        logger.debug(
            f"Local evaluation: overall={overall}, keywords={len(matched_keywords)}/{len(expected_keywords)}, "
            f"words={word_count}, fillers={filler_count}, weak={weak_count}, positive={positive_count}"
        )
        
        return AnswerEvaluation(
            overall=overall,
            keyword_score=round(keyword_score, 1),
            communication_score=communication_score,
            confidence_score=confidence_score,
            feedback=feedback,
            matched_keywords=matched_keywords,
            word_count=word_count
        )
    
    def _communication_score(self, word_count: int, filler_ratio: float) -> float:
        score = 3
        score += sum(1 for threshold in COMMUNICATION_LENGTH_THRESHOLDS if word_count >= threshold)
        if filler_ratio < 0.05:
            score += 1
        if filler_ratio < 0.02:
            score += 1
        score -= int(filler_ratio * 20)
        return clamp(score)
    
    def _confidence_score(self, word_count: int, positive_count: int, weak_count: int) -> float:
        score = 3
        if weak_count == 0:
            score += 2
        elif weak_count <= 1:
            score += 1
        else:
            score -= weak_count
        if positive_count >= 2:
            score += 1
        if positive_count >= 4:
            score += 1
        score += sum(1 for threshold in CONFIDENCE_LENGTH_THRESHOLDS if word_count >= threshold)
        return clamp(score)
    
    def _feedback(self, overall: float, matched_keywords: List[str], filler_count: int, word_count: int) -> str:
        if overall >= 8:
            feedback = "Excellent answer! You demonstrated strong knowledge and communicated clearly."
        elif overall >= 6:
            feedback = "Good answer. You covered key points but could elaborate more on some areas."
        elif overall >= 4:
            feedback = "Decent attempt. Try to include more specific details and relevant terminology."
        else:
            feedback = "This answer needs improvement. Focus on addressing the core question with specific examples."
        
        if matched_keywords:
            feedback += f" Good use of: {', '.join(matched_keywords)}."
        if filler_count > 2:
            feedback += " Try to reduce filler words for more polished delivery."
        if word_count < 30:
            feedback += " Consider providing more detailed responses."
        return feedback
