"""
FastAPI request and response models.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import Answer, Question, Report
from ..utils.config import DEFAULT_DIFFICULTY, DEFAULT_QUESTIONS, MIXED_CATEGORY


class StartInterviewRequest(BaseModel):
    """Request model for starting an interview."""
    category: str = Field(MIXED_CATEGORY, description="technical, behavioral, system-design, general or mixed")
    difficulty: str = Field(DEFAULT_DIFFICULTY, description="easy, medium or hard")
    total_questions: int = Field(DEFAULT_QUESTIONS, description="Number of questions (clamped to 3-10)")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "category": "technical",
            "difficulty": "easy",
            "total_questions": 5
        }
    })


class QuestionResponse(BaseModel):
    """Question as shown to the candidate (no expected keywords)."""
    text: str = Field(..., description="Question text")
    category: str = Field(..., description="Question category")
    order: int = Field(..., description="Position in the session")

    @classmethod
    def from_question(cls, question: Question) -> "QuestionResponse":
        return cls(text=question.text, category=question.category, order=question.order)


class StartInterviewResponse(BaseModel):
    """Response model for starting an interview."""
    session_id: str = Field(..., description="Interview session ID")
    total_questions: int = Field(..., description="Number of questions in the session")
    current_question: int = Field(0, description="Index of the current question")
    question: QuestionResponse = Field(..., description="First question")


class SubmitAnswerRequest(BaseModel):
    """Request model for submitting an answer."""
    session_id: str = Field(..., description="Interview session ID")
    transcript: str = Field(..., min_length=1, description="Answer transcript, or '(skipped)'")
    duration: float = Field(0, ge=0, description="Answer duration in seconds")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "session_id": "3f2b6c1e-8d0a-4a57-9d0e-2b7f1c9a4e11",
            "transcript": "An API is an interface that lets a client send a request to a server endpoint...",
            "duration": 42.5
        }
    })


class SubmitAnswerResponse(BaseModel):
    """Next question, or the final report when the session finished."""
    session_id: str = Field(..., description="Interview session ID")
    finished: bool = Field(..., description="Whether the session is completed")
    current_question: int = Field(..., description="Index of the current question")
    total_questions: int = Field(..., description="Number of questions in the session")
    next_question: Optional[QuestionResponse] = Field(None, description="Next question (if not finished)")
    report: Optional[Report] = Field(None, description="Final report (if finished)")


class CompleteInterviewRequest(BaseModel):
    """Request model for force-completing an interview."""
    session_id: str = Field(..., description="Interview session ID")


class CompleteInterviewResponse(BaseModel):
    session_id: str = Field(..., description="Interview session ID")
    report: Report = Field(..., description="Final report")


class InterviewReportResponse(BaseModel):
    """Response model for a completed session's report."""
    session_id: str = Field(..., description="Session ID")
    category: str = Field(..., description="Session category")
    difficulty: str = Field(..., description="Session difficulty")
    total_questions: int = Field(..., description="Total questions")
    total_answered: int = Field(..., description="Number of answered questions")
    created_at: datetime = Field(..., description="Session creation time")
    completed_at: Optional[datetime] = Field(None, description="Session completion time")
    report: Report = Field(..., description="Performance report")
    questions: List[QuestionResponse] = Field(..., description="All questions (no expected keywords)")
    answers: List[Answer] = Field(..., description="All answers")


class HistoryItem(BaseModel):
    session_id: str
    category: str
    difficulty: str
    status: str
    total_questions: int
    total_answered: int
    completed: bool
    overall_score: Optional[float] = None
    created_at: datetime
    completed_at: Optional[datetime] = None


class StatsResponse(BaseModel):
    """Aggregate stats for the current user."""
    total_sessions: int = Field(..., description="All sessions")
    completed_sessions: int = Field(..., description="Completed sessions")
    average_scores: Dict[str, float] = Field(..., description="Average overall/communication/confidence/technical scores")


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Service status")
    ai_enabled: bool = Field(..., description="Whether the AI judge is configured")
    store: Optional[str] = Field(None, description="Session store implementation")
    details: Optional[Dict[str, Any]] = Field(None, description="Model configuration")
