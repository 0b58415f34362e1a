from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..application.interview_session import (
    Exchange,
    Feedback,
    InterviewSession,
    SessionStatus,
)


class InterviewStore(ABC):
    """Persistence for sessions, exchanges and feedback.

    Every failure surfaces as ``StoreError``.
    """

    @abstractmethod
    async def insert_session(self, session: InterviewSession) -> str:
        """Persist a new session and return its id."""
        pass

    @abstractmethod
    async def get_session(self, session_id: str) -> Optional[InterviewSession]:
        """Return the session, or None when no such id exists."""
        pass

    @abstractmethod
    async def update_session(self,
                             session_id: str,
                             status: SessionStatus,
                             completed_at: Optional[datetime]) -> None:
        """Update status and completion time; raises SessionNotFound when missing."""
        pass

    @abstractmethod
    async def insert_exchange(self, exchange: Exchange) -> str:
        """Persist one question/answer turn and return its id."""
        pass

    @abstractmethod
    async def list_exchanges(self, session_id: str) -> List[Exchange]:
        """Return a session's exchanges ordered by ascending sequence number."""
        pass

    @abstractmethod
    async def insert_feedback(self, feedback: Feedback) -> str:
        """Persist the feedback for a session and return its id."""
        pass

    @abstractmethod
    async def get_feedback(self, session_id: str) -> Optional[Feedback]:
        """Return the session's feedback, or None when not generated yet."""
        pass

    async def close(self) -> None:
        """Release any resources held by the store."""
        pass


class VoicePlatform(ABC):
    """Text-to-speech and speech-to-text provided by the client platform."""

    @abstractmethod
    def is_supported(self) -> bool:
        pass

    @abstractmethod
    async def speak(self, text: str) -> None:
        """Play ``text`` and return once playback has finished."""
        pass

    @abstractmethod
    async def listen(self) -> str:
        """Capture one utterance and return the recognized text."""
        pass

    @abstractmethod
    def stop_listening(self) -> None:
        pass

    @abstractmethod
    def stop_speaking(self) -> None:
        pass
