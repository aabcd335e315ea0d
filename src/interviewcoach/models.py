"""
Domain models for interview sessions and reports.

All scores on a Report are on a 1-10 scale.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ReportSource(str, Enum):
    AI = "ai"
    LOCAL = "local"


class AIFailureReason(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    QUOTA_EXHAUSTED = "quota_exhausted"
    API_ERROR = "api_error"
    INVALID_RESPONSE = "invalid_response"


class Question(BaseModel):
    """A single interview question within a session."""
    text: str = Field(..., description="Question text")
    order: int = Field(..., ge=0, description="Position in the session (0-based)")
    category: str = Field(..., description="Category label")
    expected_keywords: List[str] = Field(default_factory=list, description="Case-insensitive match terms")


class Answer(BaseModel):
    """A candidate answer. question_index matches Question.order."""
    question_index: int = Field(..., ge=0)
    transcript: str = Field("", description="Answer transcript (may be a skip sentinel)")
    duration: float = Field(0, ge=0, description="Answer duration in seconds")
    submitted_at: datetime = Field(default_factory=datetime.now)


class QuestionScore(BaseModel):
    question_index: int
    score: float
    feedback: str = ""


class ImprovementSuggestion(BaseModel):
    title: str
    description: str
    priority: str = Field("medium", description="high, medium or low")
    category: str = "general"


class Report(BaseModel):
    """Session performance report. Computed once, when the session completes."""
    overall_score: float
    communication_score: float
    confidence_score: float
    technical_score: float
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    question_scores: List[QuestionScore] = Field(default_factory=list)
    suggestions: List[ImprovementSuggestion] = Field(default_factory=list)
    overall_feedback: str = ""
    source: ReportSource = ReportSource.LOCAL
    model: Optional[str] = None
    fallback_reason: Optional[AIFailureReason] = None
    total_answered: int = 0
    total_questions: int = 0


class Session(BaseModel):
    """
    One interview attempt.
    
    Invariants: len(answers) == current_question_index; completed implies a
    report is present; a completed session is never mutated again.
    """
    session_id: str
    user_id: Optional[str] = None
    category: str
    difficulty: str
    questions: List[Question]
    answers: List[Answer] = Field(default_factory=list)
    current_question_index: int = 0
    completed: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    report: Optional[Report] = None

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def status(self) -> str:
        if self.completed:
            return "completed"
        if self.answers:
            return "in_progress"
        return "created"

    def current_question(self) -> Optional[Question]:
        if self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None
