"""
Exception hierarchy for the interview session engine.
"""


class InterviewError(Exception):
    """Base class for all engine errors."""


class ValidationError(InterviewError):
    """Malformed or missing session parameters."""


class NotFoundError(InterviewError):
    """Unknown session id."""

    def __init__(self, session_id: str):
        super().__init__(f"Interview session not found: {session_id}")
        self.session_id = session_id


class AlreadyCompletedError(InterviewError):
    """Attempt to mutate a finished session."""

    def __init__(self, session_id: str):
        super().__init__(f"Interview session is already completed: {session_id}")
        self.session_id = session_id


class SessionNotCompletedError(InterviewError):
    """Report requested for a session that has not been finalized yet."""

    def __init__(self, session_id: str):
        super().__init__(f"Interview session is not yet completed: {session_id}")
        self.session_id = session_id


class ExternalServiceError(InterviewError):
    """AI transport failure. Absorbed by the AI evaluator, never surfaced raw."""


class QuotaExceededError(ExternalServiceError):
    """Provider-side rate limit or usage quota exhaustion."""


class PersistenceError(InterviewError):
    """Session store unavailable or unable to write."""
