"""
Interview Session Manager.

Owns the session lifecycle:
- Create sessions and their question lists
- Record answers in order
- Finalize the session and attach its report, exactly once
- Read back reports, history and aggregate stats

States: created -> in_progress -> completed (terminal). Mutations of one
session are serialized with a per-session lock; finalization calls the AI
judge while holding that lock, so the last answer of a session waits for
the judge.
"""

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from .question_generator import QuestionGenerator
from .report_generator import ReportGenerator
from .session_store import InMemorySessionStore, SessionStore
from ..errors import AlreadyCompletedError, NotFoundError, SessionNotCompletedError, ValidationError
from ..models import Answer, Question, Report, Session
from ..utils.config import DIFFICULTIES, HISTORY_LIMIT, MIXED_CATEGORY
from ..utils.logger import setup_logger

logger = setup_logger("session_manager")


@dataclass
class _SessionLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


@dataclass
class StartResult:
    session_id: str
    total_questions: int
    first_question: Question
    session: Session


@dataclass
class SubmitResult:
    """Either the next question (finished=False) or the final report (finished=True)."""
    session_id: str
    finished: bool
    current_question_index: int
    total_questions: int
    next_question: Optional[Question] = None
    report: Optional[Report] = None


class InterviewSessionManager:
    """
    Manages interview sessions.

    A single writer per session is enforced in-process with one lock per
    session id. A lock lives only while some call holds or waits for it.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        question_generator: Optional[QuestionGenerator] = None,
        report_generator: Optional[ReportGenerator] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize session manager.

        Args:
            store: Session store. Default: InMemorySessionStore
            question_generator: Question selector. Default: QuestionGenerator over the built-in bank
            report_generator: Report aggregator. Default: local-only ReportGenerator
            clock: Time source for timestamps
        """
        self.store = store if store is not None else InMemorySessionStore()
        self.question_generator = question_generator if question_generator is not None else QuestionGenerator()
        self.report_generator = report_generator if report_generator is not None else ReportGenerator()
        self.clock = clock

        self._locks: Dict[str, _SessionLock] = {}
        self._locks_guard = threading.Lock()

        logger.info(f"InterviewSessionManager initialized, store: {type(self.store).__name__}")

    @contextmanager
    def _session_lock(self, session_id: str) -> Iterator[None]:
        """Hold the session's lock; the table entry is dropped when its last user leaves."""
        with self._locks_guard:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = self._locks[session_id] = _SessionLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[session_id]

    def _load(self, session_id: str) -> Session:
        session = self.store.get(session_id)
        if session is None:
            raise NotFoundError(session_id)
        return session

    def start(
        self,
        category: str,
        difficulty: str,
        count: int,
        user_id: Optional[str] = None
    ) -> StartResult:
        """
        Create a new interview session.

        Args:
            category: A question bank category or "mixed"
            difficulty: "easy", "medium" or "hard"
            count: Number of questions (>= 1; UI bounds are the caller's concern)
            user_id: Owning user reference

        Returns:
            StartResult with the session id, question count and first question
        """
        if category != MIXED_CATEGORY and category not in self.question_generator.categories:
            raise ValidationError(f"Unknown category: {category!r}")
        if difficulty not in DIFFICULTIES:
            raise ValidationError(f"Unknown difficulty: {difficulty!r}")

        questions = self.question_generator.generate_questions(category, difficulty, count)
        if not questions:
            raise ValidationError(f"No questions available for {category}/{difficulty}")

        now = self.clock()
        session = Session(
            session_id=str(uuid.uuid4()),
            user_id=user_id,
            category=category,
            difficulty=difficulty,
            questions=questions,
            created_at=now,
            updated_at=now
        )
        self.store.create(session)
        logger.info(
            f"Created interview session: {session.session_id} "
            f"({category}/{difficulty}, {len(questions)} questions)"
        )

        return StartResult(
            session_id=session.session_id,
            total_questions=len(questions),
            first_question=questions[0],
            session=session
        )

    def submit_answer(self, session_id: str, transcript: str, duration: float = 0) -> SubmitResult:
        """
        Record the answer to the current question.

        The last answer finalizes the session and returns its report.

        Raises:
            NotFoundError: Unknown session id
            AlreadyCompletedError: The session is already completed
            ValidationError: Transcript is not text or duration is negative
        """
        if not isinstance(transcript, str):
            raise ValidationError("Transcript must be a string")
        if isinstance(duration, bool) or not isinstance(duration, (int, float)) or duration < 0:
            raise ValidationError(f"Duration must be a non-negative number of seconds, got {duration!r}")

        with self._session_lock(session_id):
            session = self._load(session_id)
            if session.completed:
                raise AlreadyCompletedError(session_id)

            now = self.clock()
            session.answers.append(Answer(
                question_index=session.current_question_index,
                transcript=transcript,
                duration=duration,
                submitted_at=now
            ))
            session.current_question_index += 1
            session.updated_at = now

            if session.current_question_index >= len(session.questions):
                report = self._finalize(session)
                return SubmitResult(
                    session_id=session_id,
                    finished=True,
                    current_question_index=session.current_question_index,
                    total_questions=len(session.questions),
                    report=report
                )

            self.store.save(session)
            logger.info(
                f"Answer recorded for session {session_id}: "
                f"{session.current_question_index}/{len(session.questions)}"
            )
            return SubmitResult(
                session_id=session_id,
                finished=False,
                current_question_index=session.current_question_index,
                total_questions=len(session.questions),
                next_question=session.current_question()
            )

    def force_complete(self, session_id: str) -> Report:
        """
        Finalize a session with the answers collected so far.

        Idempotent: a completed session returns its cached report unchanged.
        """
        with self._session_lock(session_id):
            session = self._load(session_id)
            if session.completed:
                return session.report
            return self._finalize(session)

    def _finalize(self, session: Session) -> Report:
        """Compute the report once and mark the session completed."""
        report = self.report_generator.generate_report(
            session.questions,
            session.answers,
            session.category,
            session.difficulty
        )
        now = self.clock()
        session.report = report
        session.completed = True
        session.completed_at = now
        session.updated_at = now
        self.store.save(session)

        logger.info(
            f"Completed interview session: {session.session_id} "
            f"(overall={report.overall_score}, source={report.source.value})"
        )
        return report

    def get_session(self, session_id: str) -> Session:
        return self._load(session_id)

    def get_report(self, session_id: str) -> Report:
        """
        Get the report of a completed session.

        Raises:
            NotFoundError: Unknown session id
            SessionNotCompletedError: The session has not been finalized yet
        """
        session = self._load(session_id)
        if not session.completed:
            raise SessionNotCompletedError(session_id)
        return session.report

    def history(self, user_id: Optional[str], limit: int = HISTORY_LIMIT) -> List[Dict[str, Any]]:
        """Summaries of a user's sessions, newest first."""
        return [self.get_session_summary(s) for s in self.store.list_for_user(user_id, limit=limit)]

    def get_session_summary(self, session: Session) -> Dict[str, Any]:
        return {
            "session_id": session.session_id,
            "category": session.category,
            "difficulty": session.difficulty,
            "status": session.status,
            "total_questions": session.total_questions,
            "total_answered": len(session.answers),
            "completed": session.completed,
            "overall_score": session.report.overall_score if session.report else None,
            "created_at": session.created_at,
            "completed_at": session.completed_at
        }

    def stats(self, user_id: Optional[str]) -> Dict[str, Any]:
        """
        Aggregate stats over a user's sessions.

        Returns:
            Dictionary with:
            - total_sessions: All sessions of the user
            - completed_sessions: Sessions with a report
            - average_scores: Mean overall/communication/confidence/technical
              score over completed sessions (0 when there are none)
        """
        sessions = self.store.list_for_user(user_id)
        reports = [s.report for s in sessions if s.completed and s.report is not None]

        def average(attr: str) -> float:
            if not reports:
                return 0.0
            return round(sum(getattr(r, attr) for r in reports) / len(reports), 1)

        return {
            "total_sessions": len(sessions),
            "completed_sessions": len(reports),
            "average_scores": {
                "overall": average("overall_score"),
                "communication": average("communication_score"),
                "confidence": average("confidence_score"),
                "technical": average("technical_score")
            }
        }
