from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class InterviewSession:
    id: str
    role: str
    status: SessionStatus = SessionStatus.IN_PROGRESS
    started_at: datetime = field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Exchange:
    session_id: str
    question: str
    response: str
    sequence_number: int
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class FeedbackResult:
    """Analyzer output before it is attached to a session."""
    overall_score: int
    communication_score: int
    technical_score: int
    strengths: Tuple[str, ...]
    areas_for_improvement: Tuple[str, ...]
    detailed_feedback: str


@dataclass(frozen=True)
class Feedback:
    session_id: str
    overall_score: int
    communication_score: int
    technical_score: int
    strengths: Tuple[str, ...]
    areas_for_improvement: Tuple[str, ...]
    detailed_feedback: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_result(cls, session_id: str, result: FeedbackResult) -> "Feedback":
        return cls(
            session_id=session_id,
            overall_score=result.overall_score,
            communication_score=result.communication_score,
            technical_score=result.technical_score,
            strengths=tuple(result.strengths),
            areas_for_improvement=tuple(result.areas_for_improvement),
            detailed_feedback=result.detailed_feedback,
        )

    def joined_strengths(self, delimiter: str = "; ") -> str:
        return delimiter.join(self.strengths)

    def joined_improvements(self, delimiter: str = "; ") -> str:
        return delimiter.join(self.areas_for_improvement)


@dataclass(frozen=True)
class Turn:
    question: str
    answer: str


@dataclass(frozen=True)
class InterviewState:
    """Where an interview stands between two requests.

    ``turn_index`` counts answered questions, so it is also the sequence
    number the next exchange is stored under. ``current_question`` is the
    question waiting for an answer, or the closing message once
    ``finished`` is set.
    """
    session_id: str
    role: str
    current_question: str
    turn_index: int = 0
    history: Tuple[Turn, ...] = ()
    finished: bool = False

    def advance(self, answer: str, next_question: str, finished: bool = False) -> "InterviewState":
        return replace(
            self,
            turn_index=self.turn_index + 1,
            history=self.history + (Turn(self.current_question, answer),),
            current_question=next_question,
            finished=finished,
        )
