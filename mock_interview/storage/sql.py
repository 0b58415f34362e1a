"""
SQLAlchemy-backed store for the three interview tables.

Blocking ORM work runs in a worker thread so the API event loop stays free.
Any SQLAlchemyError is re-raised as StoreError.
"""
import asyncio
from datetime import datetime, timezone
from typing import Callable, List, Optional, TypeVar

import structlog
from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from ..application.interview_session import (
    Exchange,
    Feedback,
    InterviewSession,
    SessionStatus,
)
from ..core.exceptions import SessionNotFound, StoreError
from ..core.interfaces import InterviewStore

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Base(DeclarativeBase):
    pass


class SessionRow(Base):
    __tablename__ = "interview_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    role: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class ExchangeRow(Base):
    __tablename__ = "interview_exchanges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    session_id: Mapped[str] = mapped_column(ForeignKey("interview_sessions.id"), index=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    sequence_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class FeedbackRow(Base):
    __tablename__ = "interview_feedback"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    session_id: Mapped[str] = mapped_column(ForeignKey("interview_sessions.id"), unique=True)
    overall_score: Mapped[int] = mapped_column(Integer, nullable=False)
    communication_score: Mapped[int] = mapped_column(Integer, nullable=False)
    technical_score: Mapped[int] = mapped_column(Integer, nullable=False)
    strengths: Mapped[list] = mapped_column(JSON, nullable=False)
    areas_for_improvement: Mapped[list] = mapped_column(JSON, nullable=False)
    detailed_feedback: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_session(row: SessionRow) -> InterviewSession:
    return InterviewSession(
        id=row.id,
        role=row.role,
        status=SessionStatus(row.status),
        started_at=_aware(row.started_at),
        completed_at=_aware(row.completed_at),
        created_at=_aware(row.created_at),
    )


def _to_exchange(row: ExchangeRow) -> Exchange:
    return Exchange(
        id=row.id,
        session_id=row.session_id,
        question=row.question,
        response=row.response,
        sequence_number=row.sequence_number,
        created_at=_aware(row.created_at),
    )


def _to_feedback(row: FeedbackRow) -> Feedback:
    return Feedback(
        id=row.id,
        session_id=row.session_id,
        overall_score=row.overall_score,
        communication_score=row.communication_score,
        technical_score=row.technical_score,
        strengths=tuple(row.strengths),
        areas_for_improvement=tuple(row.areas_for_improvement),
        detailed_feedback=row.detailed_feedback,
        created_at=_aware(row.created_at),
    )


def make_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every thread sees an empty db
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


class SQLInterviewStore(InterviewStore):
    def __init__(self, database_url: str):
        self.engine = make_engine(database_url)
        self._sessionmaker = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)
        logger.info("sql_store_ready", url=self.engine.url.render_as_string(hide_password=True))

    async def _run(self, operation: str, fn: Callable[[Session], T]) -> T:
        def work() -> T:
            with self._sessionmaker() as db:
                try:
                    result = fn(db)
                    db.commit()
                    return result
                except SQLAlchemyError:
                    db.rollback()
                    raise

        try:
            return await asyncio.to_thread(work)
        except SQLAlchemyError as e:
            logger.error("store_call_failed", operation=operation, error=str(e))
            raise StoreError(f"{operation} failed: {e}") from e

    async def insert_session(self, session: InterviewSession) -> str:
        def fn(db: Session) -> str:
            db.add(SessionRow(
                id=session.id,
                role=session.role,
                status=session.status.value,
                started_at=session.started_at,
                completed_at=session.completed_at,
                created_at=session.created_at,
            ))
            return session.id

        return await self._run("insert_session", fn)

    async def get_session(self, session_id: str) -> Optional[InterviewSession]:
        def fn(db: Session) -> Optional[InterviewSession]:
            row = db.get(SessionRow, session_id)
            return _to_session(row) if row else None

        return await self._run("get_session", fn)

    async def update_session(self,
                             session_id: str,
                             status: SessionStatus,
                             completed_at: Optional[datetime]) -> None:
        def fn(db: Session) -> bool:
            row = db.get(SessionRow, session_id)
            if row is None:
                return False
            row.status = status.value
            row.completed_at = completed_at
            return True

        if not await self._run("update_session", fn):
            raise SessionNotFound(session_id)

    async def insert_exchange(self, exchange: Exchange) -> str:
        def fn(db: Session) -> bool:
            if db.get(SessionRow, exchange.session_id) is None:
                return False
            db.add(ExchangeRow(
                id=exchange.id,
                session_id=exchange.session_id,
                question=exchange.question,
                response=exchange.response,
                sequence_number=exchange.sequence_number,
                created_at=exchange.created_at,
            ))
            return True

        if not await self._run("insert_exchange", fn):
            raise SessionNotFound(exchange.session_id)
        return exchange.id

    async def list_exchanges(self, session_id: str) -> List[Exchange]:
        def fn(db: Session) -> List[Exchange]:
            rows = db.scalars(
                select(ExchangeRow)
                .where(ExchangeRow.session_id == session_id)
                .order_by(ExchangeRow.sequence_number.asc())
            )
            return [_to_exchange(row) for row in rows]

        return await self._run("list_exchanges", fn)

    async def insert_feedback(self, feedback: Feedback) -> str:
        def fn(db: Session) -> bool:
            if db.get(SessionRow, feedback.session_id) is None:
                return False
            db.add(FeedbackRow(
                id=feedback.id,
                session_id=feedback.session_id,
                overall_score=feedback.overall_score,
                communication_score=feedback.communication_score,
                technical_score=feedback.technical_score,
                strengths=list(feedback.strengths),
                areas_for_improvement=list(feedback.areas_for_improvement),
                detailed_feedback=feedback.detailed_feedback,
                created_at=feedback.created_at,
            ))
            return True

        if not await self._run("insert_feedback", fn):
            raise SessionNotFound(feedback.session_id)
        return feedback.id

    async def get_feedback(self, session_id: str) -> Optional[Feedback]:
        def fn(db: Session) -> Optional[Feedback]:
            row = db.scalars(
                select(FeedbackRow).where(FeedbackRow.session_id == session_id)
            ).one_or_none()
            return _to_feedback(row) if row else None

        return await self._run("get_feedback", fn)

    async def close(self) -> None:
        self.engine.dispose()
