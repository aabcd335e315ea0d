"""
FastAPI application for the Interview Coach engine.

Endpoints:
- POST /interview/start - Start a session and get the first question
- POST /interview/answer - Submit the current answer, get the next question or the report
- POST /interview/complete - Finish a session early
- GET /interview/report/{session_id} - Report of a completed session
- GET /interview/history - Recent sessions of the current user
- GET /interview/stats - Aggregate scores of the current user
- GET /health - Health check

Authentication is handled upstream; the caller identity arrives in the
X-User-Id header.
"""
from typing import List

from fastapi import FastAPI, Header, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from interviewcoach.api import (
    CompleteInterviewRequest,
    CompleteInterviewResponse,
    HealthResponse,
    HistoryItem,
    InterviewReportResponse,
    QuestionResponse,
    StartInterviewRequest,
    StartInterviewResponse,
    StatsResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
    get_service
)
from interviewcoach.errors import (
    AlreadyCompletedError,
    InterviewError,
    NotFoundError,
    PersistenceError,
    SessionNotCompletedError,
    ValidationError
)
from interviewcoach.models import Session
from interviewcoach.utils.config import GROQ_FALLBACK_MODELS, GROQ_PRIMARY_MODEL, MAX_QUESTIONS, MIN_QUESTIONS
from interviewcoach.utils.logger import setup_logger

logger = setup_logger("fastapi_app")

ERROR_STATUS = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyCompletedError, status.HTTP_409_CONFLICT),
    (SessionNotCompletedError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]

# Create FastAPI app
app = FastAPI(
    title="Interview Coach API",
    description="Mock interview sessions with AI-judged and heuristic scoring",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize service on startup."""
    logger.info("🚀 Starting Interview Coach API...")
    service = get_service()
    if service.is_ready():
        return
    if not service.initialize():
        logger.error("⚠️ Service initialization failed - interview endpoints will not work")


def _require_manager():
    service = get_service()
    if not service.is_ready():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized. Please check /health endpoint."
        )
    return service.manager


def _to_http_error(error: InterviewError) -> HTTPException:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


def _owned_session(manager, session_id: str, user_id: str) -> Session:
    """Load a session, hiding sessions that belong to another user."""
    session = manager.get_session(session_id)
    if session.user_id != user_id:
        raise NotFoundError(session_id)
    return session


@app.get("/", tags=["General"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Interview Coach API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["General"])
async def health_check():
    """Health check endpoint."""
    service = get_service()

    return HealthResponse(
        status="healthy" if service.is_ready() else "not ready",
        ai_enabled=service.ai_enabled,
        store=type(service.manager.store).__name__ if service.manager else None,
        details={
            "primary_model": GROQ_PRIMARY_MODEL,
            "fallback_models": GROQ_FALLBACK_MODELS
        }
    )


@app.post(
    "/interview/start",
    response_model=StartInterviewResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Interview"]
)
def start_interview(request: StartInterviewRequest, x_user_id: str = Header("anonymous")):
    """
    Start a new interview session.

    The question count is clamped to the supported range before the session
    is created.
    """
    manager = _require_manager()
    count = min(max(request.total_questions, MIN_QUESTIONS), MAX_QUESTIONS)

    try:
        result = manager.start(request.category, request.difficulty, count, user_id=x_user_id)
    except InterviewError as e:
        logger.error(f"Error starting interview: {e}")
        raise _to_http_error(e)

    return StartInterviewResponse(
        session_id=result.session_id,
        total_questions=result.total_questions,
        current_question=0,
        question=QuestionResponse.from_question(result.first_question)
    )


@app.post("/interview/answer", response_model=SubmitAnswerResponse, tags=["Interview"])
def submit_answer(request: SubmitAnswerRequest, x_user_id: str = Header("anonymous")):
    """
    Submit the answer to the current question.

    Returns the next question, or the final report after the last answer.
    """
    manager = _require_manager()

    try:
        _owned_session(manager, request.session_id, x_user_id)
        result = manager.submit_answer(request.session_id, request.transcript, request.duration)
    except InterviewError as e:
        logger.error(f"Error submitting answer: {e}")
        raise _to_http_error(e)

    return SubmitAnswerResponse(
        session_id=result.session_id,
        finished=result.finished,
        current_question=result.current_question_index,
        total_questions=result.total_questions,
        next_question=QuestionResponse.from_question(result.next_question) if result.next_question else None,
        report=result.report
    )


@app.post("/interview/complete", response_model=CompleteInterviewResponse, tags=["Interview"])
def complete_interview(request: CompleteInterviewRequest, x_user_id: str = Header("anonymous")):
    """Force-complete an interview; returns the cached report if already completed."""
    manager = _require_manager()

    try:
        _owned_session(manager, request.session_id, x_user_id)
        report = manager.force_complete(request.session_id)
    except InterviewError as e:
        logger.error(f"Error completing interview: {e}")
        raise _to_http_error(e)

    return CompleteInterviewResponse(session_id=request.session_id, report=report)


@app.get("/interview/report/{session_id}", response_model=InterviewReportResponse, tags=["Interview"])
def get_report(session_id: str, x_user_id: str = Header("anonymous")):
    """Get the performance report of a completed session."""
    manager = _require_manager()

    try:
        session = _owned_session(manager, session_id, x_user_id)
        report = manager.get_report(session_id)
    except InterviewError as e:
        raise _to_http_error(e)

    return InterviewReportResponse(
        session_id=session.session_id,
        category=session.category,
        difficulty=session.difficulty,
        total_questions=session.total_questions,
        total_answered=len(session.answers),
        created_at=session.created_at,
        completed_at=session.completed_at,
        report=report,
        questions=[QuestionResponse.from_question(q) for q in session.questions],
        answers=session.answers
    )


@app.get("/interview/history", response_model=List[HistoryItem], tags=["Interview"])
def get_history(x_user_id: str = Header("anonymous")):
    """Recent sessions of the current user, newest first."""
    manager = _require_manager()

    try:
        return [HistoryItem(**item) for item in manager.history(x_user_id)]
    except InterviewError as e:
        raise _to_http_error(e)


@app.get("/interview/stats", response_model=StatsResponse, tags=["Interview"])
def get_stats(x_user_id: str = Header("anonymous")):
    """Aggregate scores of the current user's completed sessions."""
    manager = _require_manager()

    try:
        return StatsResponse(**manager.stats(x_user_id))
    except InterviewError as e:
        raise _to_http_error(e)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
