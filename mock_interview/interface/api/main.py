from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mock_interview.config import Settings, get_settings
from mock_interview.core.exceptions import (
    FeedbackNotFound,
    InterviewStateError,
    InvalidAnswer,
    NotFound,
    SessionNotFound,
    StoreError,
)
from mock_interview.core.interfaces import InterviewStore
from mock_interview.core.logging import setup_logging
from mock_interview.core.roles import RoleCatalog, default_catalog
from mock_interview.managers.session import SessionLifecycleManager
from mock_interview.storage import build_store

logger = structlog.get_logger(__name__)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FeedbackNotFound)
    async def feedback_not_found(request: Request, exc: FeedbackNotFound):
        return _error(status.HTTP_404_NOT_FOUND, "No feedback available")

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(SessionNotFound)
    async def session_not_found(request: Request, exc: SessionNotFound):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(InvalidAnswer)
    async def invalid_answer(request: Request, exc: InvalidAnswer):
        return _error(status.HTTP_422_UNPROCESSABLE_CONTENT, str(exc))

    @app.exception_handler(InterviewStateError)
    async def state_conflict(request: Request, exc: InterviewStateError):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        logger.error("store_error", path=request.url.path, error=str(exc))
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Interview storage is unavailable")


def create_app(settings: Optional[Settings] = None,
               store: Optional[InterviewStore] = None,
               catalog: Optional[RoleCatalog] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    store = store or build_store(settings)
    catalog = catalog or default_catalog()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app_started", environment=settings.ENVIRONMENT.value, roles=len(catalog))
        yield
        await store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.catalog = catalog
    app.state.manager = SessionLifecycleManager(store, catalog, max_turns=settings.MAX_TURNS)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, replace with actual origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from .routers import interview, health
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(interview.router, prefix=settings.API_PREFIX)

    return app
