"""Store backends for interview sessions, exchanges and feedback."""
from ..config import Settings, StoreBackend
from ..core.interfaces import InterviewStore
from .memory import InMemoryInterviewStore
from .sql import SQLInterviewStore


def build_store(settings: Settings) -> InterviewStore:
    if settings.STORE_BACKEND == StoreBackend.MEMORY:
        return InMemoryInterviewStore()
    return SQLInterviewStore(settings.DATABASE_URL)


__all__ = ["InterviewStore", "InMemoryInterviewStore", "SQLInterviewStore", "build_store"]
