# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
import os

from mock_interview.config import Settings, StoreBackend, get_settings
from mock_interview.core.roles import default_catalog
from mock_interview.managers.session import SessionLifecycleManager
from mock_interview.storage.memory import InMemoryInterviewStore

ENV_VARS = {
    "ENVIRONMENT": "testing",
    "DEBUG": "true",
    "APP_NAME": "Mock Interview Test",
    "STORE_BACKEND": "memory",
}

@pytest.fixture
def test_env_vars():
    """Set up test environment variables."""
    get_settings.cache_clear()
    os.environ.update(ENV_VARS)
    yield
    # Clean up
    for name in ENV_VARS:
        os.environ.pop(name, None)
    get_settings.cache_clear()

@pytest.fixture
def settings(test_env_vars):
    """Get test settings."""
    return get_settings()

@pytest.fixture
def catalog():
    return default_catalog()

@pytest.fixture
def engineer(catalog):
    return catalog.get("engineer")

@pytest.fixture
def store():
    return InMemoryInterviewStore()

@pytest.fixture
def manager(store, catalog):
    return SessionLifecycleManager(store, catalog, max_turns=8)

@pytest.fixture
def app(settings, store):
    """Create test app instance."""
    from mock_interview.interface.api.main import create_app
    return create_app(settings=settings, store=store)

@pytest.fixture
def client(app):
    """Create test client."""
    with TestClient(app) as client:
        yield client

@pytest.fixture
def sql_settings(tmp_path):
    return Settings(
        ENVIRONMENT="testing",
        STORE_BACKEND=StoreBackend.SQL,
        DATABASE_URL=f"sqlite:///{tmp_path / 'interviews.db'}",
    )
