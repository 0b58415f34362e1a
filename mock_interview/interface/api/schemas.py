from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ...application.interview_session import Feedback, InterviewState
from ...core.roles import Role


class RoleOut(BaseModel):
    id: str
    name: str
    description: str
    focus_areas: List[str]

    @classmethod
    def from_role(cls, role: Role) -> "RoleOut":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            focus_areas=list(role.focus_areas),
        )


class StartInterviewRequest(BaseModel):
    role: str = Field(min_length=1)


class AnswerRequest(BaseModel):
    answer: str


class TurnOut(BaseModel):
    question: str
    answer: str


class InterviewStateOut(BaseModel):
    session_id: str
    role: str
    turn_index: int
    max_turns: int
    current_question: str
    finished: bool
    history: List[TurnOut]

    @classmethod
    def from_state(cls, state: InterviewState, max_turns: int) -> "InterviewStateOut":
        return cls(
            session_id=state.session_id,
            role=state.role,
            turn_index=state.turn_index,
            max_turns=max_turns,
            current_question=state.current_question,
            finished=state.finished,
            history=[TurnOut(question=turn.question, answer=turn.answer) for turn in state.history],
        )


class FeedbackOut(BaseModel):
    id: str
    session_id: str
    overall_score: int = Field(ge=1, le=10)
    communication_score: int = Field(ge=1, le=10)
    technical_score: int = Field(ge=1, le=10)
    strengths: List[str]
    areas_for_improvement: List[str]
    strengths_text: str
    areas_for_improvement_text: str
    detailed_feedback: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_feedback(cls, feedback: Feedback, delimiter: str) -> "FeedbackOut":
        return cls(
            id=feedback.id,
            session_id=feedback.session_id,
            overall_score=feedback.overall_score,
            communication_score=feedback.communication_score,
            technical_score=feedback.technical_score,
            strengths=list(feedback.strengths),
            areas_for_improvement=list(feedback.areas_for_improvement),
            strengths_text=feedback.joined_strengths(delimiter),
            areas_for_improvement_text=feedback.joined_improvements(delimiter),
            detailed_feedback=feedback.detailed_feedback,
            created_at=feedback.created_at,
        )
