"""
In-memory store: dictionaries keyed by session id.

Used by tests and by ``STORE_BACKEND=memory`` for throwaway practice runs.
Nothing survives a restart.
"""
import asyncio
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from ..application.interview_session import (
    Exchange,
    Feedback,
    InterviewSession,
    SessionStatus,
)
from ..core.exceptions import SessionNotFound, StoreError
from ..core.interfaces import InterviewStore


class InMemoryInterviewStore(InterviewStore):
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._sessions: Dict[str, InterviewSession] = {}
        self._exchanges: Dict[str, List[Exchange]] = {}
        self._feedback: Dict[str, Feedback] = {}

    async def insert_session(self, session: InterviewSession) -> str:
        async with self._lock:
            if session.id in self._sessions:
                raise StoreError(f"Duplicate session id {session.id!r}")
            self._sessions[session.id] = replace(session)
            return session.id

    async def get_session(self, session_id: str) -> Optional[InterviewSession]:
        async with self._lock:
            session = self._sessions.get(session_id)
            return replace(session) if session else None

    async def update_session(self,
                             session_id: str,
                             status: SessionStatus,
                             completed_at: Optional[datetime]) -> None:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFound(session_id)
            session.status = status
            session.completed_at = completed_at

    async def insert_exchange(self, exchange: Exchange) -> str:
        async with self._lock:
            if exchange.session_id not in self._sessions:
                raise SessionNotFound(exchange.session_id)
            self._exchanges.setdefault(exchange.session_id, []).append(exchange)
            return exchange.id

    async def list_exchanges(self, session_id: str) -> List[Exchange]:
        async with self._lock:
            exchanges = self._exchanges.get(session_id, [])
            return sorted(exchanges, key=lambda exchange: exchange.sequence_number)

    async def insert_feedback(self, feedback: Feedback) -> str:
        async with self._lock:
            if feedback.session_id not in self._sessions:
                raise SessionNotFound(feedback.session_id)
            if feedback.session_id in self._feedback:
                raise StoreError(f"Feedback for session {feedback.session_id!r} already stored")
            self._feedback[feedback.session_id] = feedback
            return feedback.id

    async def get_feedback(self, session_id: str) -> Optional[Feedback]:
        async with self._lock:
            return self._feedback.get(session_id)
