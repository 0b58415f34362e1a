from typing import Optional

import structlog

from ..application.interview_session import (
    Exchange,
    Feedback,
    InterviewSession,
    InterviewState,
    SessionStatus,
    Turn,
    new_id,
    utcnow,
)
from ..core.exceptions import (
    FeedbackAlreadyExists,
    FeedbackNotFound,
    InterviewFinished,
    InvalidAnswer,
    SessionNotFound,
)
from ..core.interfaces import InterviewStore
from ..core.roles import RoleCatalog
from .feedback import analyze
from .sequencer import next_question

logger = structlog.get_logger(__name__)

FINAL_MESSAGE = (
    "Thank you for completing the interview! "
    "I'm now analyzing your responses to provide feedback..."
)


class SessionLifecycleManager:
    """Drives an interview from role selection to stored feedback.

    Store failures are not caught here; they reach the caller as StoreError.
    """

    def __init__(self, store: InterviewStore, catalog: RoleCatalog, max_turns: int = 8):
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        self.store = store
        self.catalog = catalog
        self.max_turns = max_turns

    async def create_session(self, role_id: str) -> str:
        self.catalog.get(role_id)
        session = InterviewSession(id=new_id(), role=role_id)
        session_id = await self.store.insert_session(session)
        logger.info("session_created", session_id=session_id, role=role_id)
        return session_id

    async def save_exchange(self,
                            session_id: str,
                            question: str,
                            answer: str,
                            sequence_number: int) -> Exchange:
        exchange = Exchange(
            session_id=session_id,
            question=question,
            response=answer,
            sequence_number=sequence_number,
        )
        await self.store.insert_exchange(exchange)
        logger.debug("exchange_saved", session_id=session_id, sequence_number=sequence_number)
        return exchange

    async def complete_session(self, session_id: str) -> InterviewSession:
        session = await self.store.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.status == SessionStatus.COMPLETED:
            logger.info("session_already_completed", session_id=session_id)
            return session

        completed_at = utcnow()
        await self.store.update_session(session_id, SessionStatus.COMPLETED, completed_at)
        session.status = SessionStatus.COMPLETED
        session.completed_at = completed_at
        logger.info("session_completed", session_id=session_id)
        return session

    async def generate_and_store_feedback(self, session_id: str, role_id: str) -> Feedback:
        role = self.catalog.get(role_id)
        if await self.store.get_feedback(session_id) is not None:
            raise FeedbackAlreadyExists(session_id)

        exchanges = await self.store.list_exchanges(session_id)
        feedback = Feedback.from_result(session_id, analyze(role, exchanges))
        await self.store.insert_feedback(feedback)
        logger.info(
            "feedback_stored",
            session_id=session_id,
            exchanges=len(exchanges),
            overall_score=feedback.overall_score,
        )
        return feedback

    async def get_feedback(self, session_id: str) -> Feedback:
        feedback = await self.store.get_feedback(session_id)
        if feedback is None:
            raise FeedbackNotFound(session_id)
        return feedback

    async def start_interview(self, role_id: str) -> InterviewState:
        role = self.catalog.get(role_id)
        session_id = await self.create_session(role_id)
        return InterviewState(
            session_id=session_id,
            role=role_id,
            current_question=next_question(role, "", "", 0),
        )

    async def submit_answer(self, state: InterviewState, answer: str) -> InterviewState:
        if state.finished:
            raise InterviewFinished(state.session_id)
        answer = answer.strip()
        if not answer:
            raise InvalidAnswer("Answer must not be empty")

        await self.save_exchange(state.session_id, state.current_question, answer, state.turn_index)

        turn_index = state.turn_index + 1
        if turn_index >= self.max_turns:
            logger.info("turn_cap_reached", session_id=state.session_id, turns=turn_index)
            return state.advance(answer, FINAL_MESSAGE, finished=True)

        role = self.catalog.get(state.role)
        question = next_question(role, state.current_question, answer, turn_index)
        logger.debug("next_question", session_id=state.session_id, turn=turn_index)
        return state.advance(answer, question)

    async def finish_interview(self, state: InterviewState) -> Feedback:
        await self.complete_session(state.session_id)
        return await self.generate_and_store_feedback(state.session_id, state.role)

    async def load_state(self, session_id: str) -> InterviewState:
        """Rebuild the interview state from what the store has recorded."""
        session = await self.store.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        role = self.catalog.get(session.role)
        exchanges = await self.store.list_exchanges(session_id)

        history = tuple(Turn(exchange.question, exchange.response) for exchange in exchanges)
        turn_index = len(history)
        finished = session.status == SessionStatus.COMPLETED or turn_index >= self.max_turns

        last: Optional[Turn] = history[-1] if history else None
        if finished:
            question = FINAL_MESSAGE
        elif last is None:
            question = next_question(role, "", "", 0)
        else:
            question = next_question(role, last.question, last.answer, turn_index)

        return InterviewState(
            session_id=session_id,
            role=session.role,
            current_question=question,
            turn_index=turn_index,
            history=history,
            finished=finished,
        )
