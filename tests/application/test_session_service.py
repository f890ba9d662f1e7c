"""
Test suite for SessionService.

Covers init idempotency, history lookup policy, clearing and inactivity
eviction.

System role: Verification of session lifecycle orchestration
"""

import asyncio
from datetime import timedelta

import pytest

from chat_backend.application.services.session_service import SessionService
from chat_backend.core.exceptions import InvalidInputError, SessionNotFoundError
from chat_backend.core.session_locks import SessionLockRegistry
from chat_backend.models.session import MessageRole, UserPreferences, utc_now
from tests.fakes import InMemorySessionStore


class TestInitSession:
    """Test suite for SessionService.init_session."""

    @pytest.mark.asyncio
    async def test_init_should_seed_system_message(
        self,
        session_service: SessionService,
        session_id: str,
    ) -> None:
        """Test a new session starts with exactly the system message."""
        # Act
        count = await session_service.init_session(session_id)

        # Assert
        assert count == 1
        state = await session_service.get_history(session_id)
        assert state.messages[0].role == MessageRole.SYSTEM

    @pytest.mark.asyncio
    async def test_init_should_be_idempotent(
        self,
        session_service: SessionService,
        session_id: str,
    ) -> None:
        """Test repeated init never adds messages."""
        # Act
        first = await session_service.init_session(session_id)
        second = await session_service.init_session(session_id)

        # Assert
        assert first == second == 1

    @pytest.mark.asyncio
    async def test_init_should_store_preferences(
        self,
        session_service: SessionService,
        session_id: str,
    ) -> None:
        """Test user preferences are kept as metadata."""
        # Act
        await session_service.init_session(
            session_id, user_preferences=UserPreferences(name="Ada")
        )

        # Assert
        state = await session_service.get_history(session_id)
        assert state.user_preferences.name == "Ada"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sid", [None, "", "   "])
    async def test_init_should_reject_missing_session_id(
        self,
        session_service: SessionService,
        sid,
    ) -> None:
        """Test a blank key is rejected."""
        with pytest.raises(InvalidInputError, match="sessionId is required"):
            await session_service.init_session(sid)


class TestGetHistory:
    """Test suite for SessionService.get_history."""

    @pytest.mark.asyncio
    async def test_unknown_session_should_return_empty_view(
        self,
        session_service: SessionService,
        memory_store: InMemorySessionStore,
    ) -> None:
        """Test an unknown key yields no messages and is not created."""
        # Act
        state = await session_service.get_history("never-seen")

        # Assert
        assert state.messages == []
        assert state.created_at is None
        assert state.exists is False
        assert "never-seen" not in memory_store.sessions

    @pytest.mark.asyncio
    async def test_unknown_session_should_raise_in_strict_mode(
        self,
        memory_store: InMemorySessionStore,
        locks: SessionLockRegistry,
    ) -> None:
        """Test strict history lookup reports unknown sessions."""
        # Arrange
        service = SessionService(store=memory_store, locks=locks, strict_history=True)

        # Act / Assert
        with pytest.raises(SessionNotFoundError):
            await service.get_history("never-seen")


class TestClearHistory:
    """Test suite for SessionService.clear_history."""

    @pytest.mark.asyncio
    async def test_clear_should_keep_only_system_message(
        self,
        session_service: SessionService,
        chat_service,
        session_id: str,
    ) -> None:
        """Test clearing leaves just the system message."""
        # Arrange
        await session_service.init_session(session_id)
        await chat_service.process_chat(session_id, "hi")
        await chat_service.process_chat(session_id, "again")

        # Act
        state = await session_service.clear_history(session_id)

        # Assert
        assert [m.role for m in state.messages] == [MessageRole.SYSTEM]
        history = await session_service.get_history(session_id)
        assert history.message_count == 1

    @pytest.mark.asyncio
    async def test_clear_should_seed_unknown_session(
        self,
        session_service: SessionService,
    ) -> None:
        """Test clearing a never-seen key leaves a seeded session behind."""
        state = await session_service.clear_history("brand-new")

        assert state.message_count == 1


class TestEvictInactive:
    """Test suite for inactivity eviction."""

    @pytest.mark.asyncio
    async def test_evict_should_remove_only_idle_sessions(
        self,
        session_service: SessionService,
        memory_store: InMemorySessionStore,
    ) -> None:
        """Test sessions idle past the window are removed and active ones kept."""
        # Arrange
        await session_service.init_session("old")
        await asyncio.sleep(0.01)
        boundary = utc_now()
        await asyncio.sleep(0.01)
        await session_service.init_session("fresh")

        # Act
        evicted = await session_service.evict_inactive(now=boundary, max_age=timedelta(0))

        # Assert
        assert evicted == 1
        assert set(memory_store.sessions) == {"fresh"}

    @pytest.mark.asyncio
    async def test_evict_should_use_configured_ttl(
        self,
        session_service: SessionService,
        memory_store: InMemorySessionStore,
    ) -> None:
        """Test the default window is one hour of inactivity."""
        # Arrange
        await session_service.init_session("s1")

        # Act
        kept = await session_service.evict_inactive(now=utc_now() + timedelta(minutes=59))
        removed = await session_service.evict_inactive(now=utc_now() + timedelta(minutes=61))

        # Assert
        assert kept == 0
        assert removed == 1
        assert memory_store.sessions == {}

    @pytest.mark.asyncio
    async def test_evict_should_skip_sessions_in_use(
        self,
        session_service: SessionService,
        memory_store: InMemorySessionStore,
        locks: SessionLockRegistry,
    ) -> None:
        """Test a session with an operation in flight survives the sweep."""
        # Arrange
        await session_service.init_session("busy")

        # Act
        async with locks.hold("busy"):
            evicted = await session_service.evict_inactive(
                now=utc_now() + timedelta(hours=2)
            )

        # Assert
        assert evicted == 0
        assert "busy" in memory_store.sessions

    @pytest.mark.asyncio
    async def test_history_after_eviction_should_be_empty(
        self,
        session_service: SessionService,
    ) -> None:
        """Test an evicted key behaves like one never seen."""
        # Arrange
        await session_service.init_session("gone")
        await session_service.evict_inactive(now=utc_now() + timedelta(hours=2))

        # Act
        state = await session_service.get_history("gone")

        # Assert
        assert state.exists is False
        assert state.message_count == 0


class FlakyStore(InMemorySessionStore):
    """Store whose first sweep query fails with a driver-level error."""

    def __init__(self) -> None:
        super().__init__()
        self.sweeps = 0

    async def get_inactive_session_ids(self, cutoff):
        self.sweeps += 1
        if self.sweeps == 1:
            raise ConnectionRefusedError("database restarting")
        return await super().get_inactive_session_ids(cutoff)


class TestEvictionLoop:
    """Test suite for the background sweeper loop."""

    @pytest.mark.asyncio
    async def test_loop_should_keep_sweeping_after_failed_tick(
        self,
        locks: SessionLockRegistry,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test an unexpected error is logged and the next tick still runs."""
        # Arrange
        store = FlakyStore()
        service = SessionService(store=store, locks=locks)

        # Act
        task = asyncio.create_task(service.run_eviction_loop(0.01))
        await asyncio.sleep(0.1)

        # Assert
        assert store.sweeps >= 2
        assert task.done() is False
        assert "sweep failed" in caplog.text

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
