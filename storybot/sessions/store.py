from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from storybot.models.core import Session

log = logging.getLogger(__name__)


class SessionStore(ABC):
    @abstractmethod
    def get(self, user_id: str) -> Session | None:
        raise NotImplementedError

    @abstractmethod
    def reset(self, user_id: str, entry_scene_id: str) -> Session:
        raise NotImplementedError

    @abstractmethod
    def lock(self, user_id: str):
        """Context manager that serializes work on one user's session."""
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Process-local sessions. Nothing is ever evicted."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def get(self, user_id: str) -> Session | None:
        return self._sessions.get(user_id)

    def reset(self, user_id: str, entry_scene_id: str) -> Session:
        session = Session(user_id=user_id, current_scene_id=entry_scene_id)
        self._sessions[user_id] = session
        log.info("session_reset user=%s scene=%s", user_id, entry_scene_id)
        return session

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            user_lock = self._locks.get(user_id)
            if user_lock is None:
                user_lock = threading.Lock()
                self._locks[user_id] = user_lock
            return user_lock

    @contextmanager
    def lock(self, user_id: str) -> Iterator[None]:
        user_lock = self._lock_for(user_id)
        with user_lock:
            yield

    def __len__(self) -> int:
        return len(self._sessions)
