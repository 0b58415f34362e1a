from typing import List

from fastapi import APIRouter, Depends, status

from mock_interview.config import Settings
from mock_interview.core.roles import RoleCatalog
from mock_interview.interface.api.dependencies import get_app_settings, get_catalog, get_manager
from mock_interview.interface.api.schemas import (
    AnswerRequest,
    FeedbackOut,
    InterviewStateOut,
    RoleOut,
    StartInterviewRequest,
)
from mock_interview.managers.session import SessionLifecycleManager

router = APIRouter(tags=["interview"])


@router.get("/roles", response_model=List[RoleOut])
async def list_roles(catalog: RoleCatalog = Depends(get_catalog)):
    return [RoleOut.from_role(role) for role in catalog.list()]


@router.post("/sessions", response_model=InterviewStateOut, status_code=status.HTTP_201_CREATED)
async def start_interview(body: StartInterviewRequest,
                          manager: SessionLifecycleManager = Depends(get_manager)):
    """Open a session for the chosen role and return the first question."""
    state = await manager.start_interview(body.role)
    return InterviewStateOut.from_state(state, manager.max_turns)


@router.get("/sessions/{session_id}", response_model=InterviewStateOut)
async def get_interview(session_id: str,
                        manager: SessionLifecycleManager = Depends(get_manager)):
    state = await manager.load_state(session_id)
    return InterviewStateOut.from_state(state, manager.max_turns)


@router.post("/sessions/{session_id}/answers", response_model=InterviewStateOut)
async def submit_answer(session_id: str,
                        body: AnswerRequest,
                        manager: SessionLifecycleManager = Depends(get_manager)):
    """Record the answer to the current question and move to the next one."""
    state = await manager.load_state(session_id)
    state = await manager.submit_answer(state, body.answer)
    return InterviewStateOut.from_state(state, manager.max_turns)


@router.post("/sessions/{session_id}/complete", response_model=FeedbackOut)
async def complete_interview(session_id: str,
                             manager: SessionLifecycleManager = Depends(get_manager),
                             settings: Settings = Depends(get_app_settings)):
    """Close the session and score it. Repeated calls return the stored feedback."""
    feedback = await manager.store.get_feedback(session_id)
    if feedback is None:
        state = await manager.load_state(session_id)
        feedback = await manager.finish_interview(state)
    return FeedbackOut.from_feedback(feedback, settings.FEEDBACK_DELIMITER)


@router.get("/sessions/{session_id}/feedback", response_model=FeedbackOut)
async def get_feedback(session_id: str,
                       manager: SessionLifecycleManager = Depends(get_manager),
                       settings: Settings = Depends(get_app_settings)):
    feedback = await manager.get_feedback(session_id)
    return FeedbackOut.from_feedback(feedback, settings.FEEDBACK_DELIMITER)
