"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite session store, fake model client, in-memory store
double, service fixtures
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import pytest

from chat_backend.application.adapters.session_store_adapter import SessionStoreAdapter
from chat_backend.application.services.chat_service import ChatService
from chat_backend.application.services.chat_workflow import ChatWorkflow
from chat_backend.application.services.session_service import SessionService
from chat_backend.boundary.db import create_tables, get_async_engine, get_async_session_factory
from chat_backend.configs.database import DatabaseSettings
from chat_backend.core.session_locks import SessionLockRegistry
from tests.fakes import TEST_SYSTEM_PROMPT, FakeInferenceClient, InMemorySessionStore


@pytest.fixture
def session_id() -> str:
    """Provide a sample client-chosen session key."""
    return "session_abc123"


@pytest.fixture
async def db_engine():
    """
    Create in-memory SQLite async engine with the session tables.

    Yields:
        AsyncEngine: Engine shared by every session of the test
    """
    engine = get_async_engine(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    """Provide an async session factory bound to the test engine."""
    return get_async_session_factory(db_engine)


@pytest.fixture
def sql_store(db_session_factory) -> SessionStoreAdapter:
    """Provide a SQLAlchemy-backed session store."""
    return SessionStoreAdapter(db_session_factory, system_prompt=TEST_SYSTEM_PROMPT)


@pytest.fixture
def memory_store() -> InMemorySessionStore:
    """Provide the dict-backed session store double."""
    return InMemorySessionStore()


@pytest.fixture
def locks() -> SessionLockRegistry:
    """Provide a fresh per-session lock registry."""
    return SessionLockRegistry()


@pytest.fixture
def fake_inference() -> FakeInferenceClient:
    """Provide a model client that always answers "hello!"."""
    return FakeInferenceClient()


@pytest.fixture
def chat_service(memory_store, fake_inference, locks) -> ChatService:
    """Provide a ChatService over the in-memory store and fake model."""
    return ChatService(store=memory_store, inference=fake_inference, locks=locks)


@pytest.fixture
def session_service(memory_store, locks) -> SessionService:
    """Provide a SessionService over the in-memory store."""
    return SessionService(store=memory_store, locks=locks)


@pytest.fixture
def chat_workflow(chat_service, session_service) -> ChatWorkflow:
    """Provide a ChatWorkflow over the in-memory services."""
    return ChatWorkflow(chat_service=chat_service, session_service=session_service)
