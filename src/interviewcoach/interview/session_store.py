"""
Session stores for the Interview Coach engine.

Two implementations of the same interface:
- InMemorySessionStore: process-local dictionary
- JsonSessionStore: one JSON file per session (can be upgraded to a database later)

Stores do not check ownership; callers compare Session.user_id themselves.
"""

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..errors import PersistenceError
from ..models import Session
from ..utils.config import SESSION_STORAGE_DIR
from ..utils.logger import setup_logger

logger = setup_logger("session_store")


class SessionStore(ABC):
    """Session persistence keyed by session id."""

    @abstractmethod
    def create(self, session: Session) -> None:
        ...

    @abstractmethod
    def get(self, session_id: str) -> Optional[Session]:
        ...

    @abstractmethod
    def save(self, session: Session) -> None:
        ...

    @abstractmethod
    def list_for_user(self, user_id: Optional[str], limit: Optional[int] = None) -> List[Session]:
        """Sessions owned by user_id, newest first."""
        ...


def _newest_first(sessions: List[Session], limit: Optional[int]) -> List[Session]:
    sessions = sorted(sessions, key=lambda s: s.created_at, reverse=True)
    return sessions[:limit] if limit is not None else sessions


class InMemorySessionStore(SessionStore):
    """Keeps sessions in memory. Returned objects are copies."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, session: Session) -> None:
        with self._lock:
            if session.session_id in self._sessions:
                raise PersistenceError(f"Session already exists: {session.session_id}")
            self._sessions[session.session_id] = session.model_copy(deep=True)

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session is not None else None

    def save(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.session_id] = session.model_copy(deep=True)

    def list_for_user(self, user_id: Optional[str], limit: Optional[int] = None) -> List[Session]:
        with self._lock:
            owned = [s.model_copy(deep=True) for s in self._sessions.values() if s.user_id == user_id]
        return _newest_first(owned, limit)


class JsonSessionStore(SessionStore):
    """
    Stores sessions in JSON files.

    Each session lives in <storage_dir>/<session_id>.json.
    """

    def __init__(self, storage_dir: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            storage_dir: Directory to store session files. Default: SESSION_STORAGE_DIR
        """
        if storage_dir is None:
            storage_dir = SESSION_STORAGE_DIR

        self.storage_dir = Path(storage_dir)
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create session storage {self.storage_dir}: {e}") from e

        logger.info(f"JsonSessionStore initialized, storage: {self.storage_dir}")

    def _path(self, session_id: str) -> Path:
        # Session ids are generated uuids; reject anything that could escape the directory
        if not session_id or "/" in session_id or "\\" in session_id or session_id.startswith("."):
            raise PersistenceError(f"Invalid session id: {session_id!r}")
        return self.storage_dir / f"{session_id}.json"

    def create(self, session: Session) -> None:
        if self._path(session.session_id).exists():
            raise PersistenceError(f"Session already exists: {session.session_id}")
        self.save(session)

    def get(self, session_id: str) -> Optional[Session]:
        try:
            session_file = self._path(session_id)
        except PersistenceError:
            return None
        if not session_file.exists():
            return None

        try:
            with open(session_file, 'r', encoding='utf-8') as f:
                return Session.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error(f"Error loading session {session_id}: {e}")
            raise PersistenceError(f"Cannot load session {session_id}: {e}") from e

    def save(self, session: Session) -> None:
        session_file = self._path(session.session_id)
        tmp_file = session_file.with_suffix(".json.tmp")
        try:
            with open(tmp_file, 'w', encoding='utf-8') as f:
                f.write(session.model_dump_json(indent=2))
            tmp_file.replace(session_file)
        except OSError as e:
            logger.error(f"Error saving session {session.session_id}: {e}")
            raise PersistenceError(f"Cannot save session {session.session_id}: {e}") from e

    def list_for_user(self, user_id: Optional[str], limit: Optional[int] = None) -> List[Session]:
        sessions = []
        for session_file in self.storage_dir.glob("*.json"):
            session = self.get(session_file.stem)
            if session is not None and session.user_id == user_id:
                sessions.append(session)
        return _newest_first(sessions, limit)
