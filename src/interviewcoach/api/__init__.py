"""
FastAPI API modules.
"""
from .models import (
    StartInterviewRequest,
    StartInterviewResponse,
    QuestionResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
    CompleteInterviewRequest,
    CompleteInterviewResponse,
    InterviewReportResponse,
    HistoryItem,
    StatsResponse,
    HealthResponse
)
from .service import InterviewService, get_service

__all__ = [
    'StartInterviewRequest',
    'StartInterviewResponse',
    'QuestionResponse',
    'SubmitAnswerRequest',
    'SubmitAnswerResponse',
    'CompleteInterviewRequest',
    'CompleteInterviewResponse',
    'InterviewReportResponse',
    'HistoryItem',
    'StatsResponse',
    'HealthResponse',
    'InterviewService',
    'get_service'
]
