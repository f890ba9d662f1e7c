"""
Session service orchestrator.

Coordinates session lifecycle operations: init, history, clear and
inactivity eviction. Every operation on a key runs under that key's lock.

Dependencies: chat_backend.application.interfaces, chat_backend.core
System role: Session use case orchestration
"""

import asyncio
import logging
from datetime import datetime, timedelta

from chat_backend.application.adapters.session_store_adapter import SessionStoreAdapter
from chat_backend.core.constants import SESSION_TTL_SECONDS
from chat_backend.core.exceptions import InvalidInputError, SessionNotFoundError
from chat_backend.core.session_locks import SessionLockRegistry
from chat_backend.models.session import ChatSessionState, UserPreferences, utc_now

logger = logging.getLogger(__name__)


def require_session_id(session_id: str | None) -> str:
    """
    Validate a session key.

    Raises:
        InvalidInputError: If the key is missing or blank
    """
    if not session_id or not session_id.strip():
        raise InvalidInputError("sessionId is required", field="sessionId")
    return session_id


class SessionService:
    """Session service orchestrator."""

    def __init__(
        self,
        store: SessionStoreAdapter,
        locks: SessionLockRegistry,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        strict_history: bool = False,
    ) -> None:
        """
        Initialize session service.

        Args:
            store: Session store
            locks: Per-session lock registry shared with ChatService
            ttl_seconds: Sliding inactivity window for eviction
            strict_history: Raise SessionNotFoundError for unknown history lookups
        """
        self.store = store
        self.locks = locks
        self.ttl = timedelta(seconds=ttl_seconds)
        self.strict_history = strict_history

    async def init_session(
        self,
        session_id: str | None,
        user_preferences: UserPreferences | None = None,
    ) -> int:
        """
        Create the session if needed and refresh its activity time.

        Args:
            session_id: Session key
            user_preferences: Optional metadata

        Returns:
            int: Message count after init

        Raises:
            InvalidInputError: If session_id is empty
        """
        session_id = require_session_id(session_id)
        async with self.locks.hold(session_id):
            return await self.store.init_session(session_id, user_preferences)

    async def get_history(self, session_id: str | None) -> ChatSessionState:
        """
        Get the full conversation for a session.

        Unknown keys yield an empty default view unless strict_history is set.

        Raises:
            InvalidInputError: If session_id is empty
            SessionNotFoundError: If strict_history is set and the session is unknown
        """
        session_id = require_session_id(session_id)
        async with self.locks.hold(session_id):
            state = await self.store.get_history(session_id)

        if not state.exists:
            if self.strict_history:
                raise SessionNotFoundError(session_id)
            logger.warning(
                "History requested for unknown session, returning empty view",
                extra={"session_id": session_id},
            )
        return state

    async def clear_history(self, session_id: str | None) -> ChatSessionState:
        """
        Drop all user/assistant messages of a session.

        Raises:
            InvalidInputError: If session_id is empty
        """
        session_id = require_session_id(session_id)
        async with self.locks.hold(session_id):
            state = await self.store.clear_history(session_id)
        logger.info("Session history cleared", extra={"session_id": session_id})
        return state

    async def evict_inactive(
        self,
        now: datetime | None = None,
        max_age: timedelta | None = None,
    ) -> int:
        """
        Remove sessions idle for longer than max_age.

        Sessions with an operation in flight are skipped and picked up by a
        later sweep.

        Args:
            now: Reference time (defaults to current UTC time)
            max_age: Inactivity window (defaults to the configured TTL)

        Returns:
            int: Number of sessions removed
        """
        cutoff = (now or utc_now()) - (self.ttl if max_age is None else max_age)
        candidates = await self.store.get_inactive_session_ids(cutoff)

        evicted = 0
        for session_id in candidates:
            if self.locks.is_locked(session_id):
                continue
            async with self.locks.hold(session_id):
                if await self.store.evict(session_id, cutoff):
                    evicted += 1

        if evicted:
            logger.info(
                "Evicted inactive sessions",
                extra={"evicted": evicted, "cutoff": cutoff.isoformat()},
            )
        return evicted

    async def run_eviction_loop(self, interval_seconds: float) -> None:
        """
        Sweep inactive sessions every interval until cancelled.

        A failed sweep is logged and retried on the next tick.
        """
        logger.info("Session sweeper started", extra={"interval_seconds": interval_seconds})
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.evict_inactive()
            except Exception:
                logger.exception(f"{__name__}:run_eviction_loop - sweep failed")
