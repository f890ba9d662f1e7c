"""
Per-session lock registry.

Serializes every operation on one session key while letting different keys
proceed independently. Locks are held in a WeakValueDictionary, so a key's
lock disappears once no coroutine holds or waits on it.

Dependencies: asyncio, weakref
System role: Single logical owner per session
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator


class SessionLockRegistry:
    """Hands out one asyncio.Lock per session key."""

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def get_lock(self, session_id: str) -> asyncio.Lock:
        """
        Return the lock for a session key, creating it on first use.

        Args:
            session_id: Session key

        Returns:
            asyncio.Lock: Lock shared by all callers for this key
        """
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def is_locked(self, session_id: str) -> bool:
        """Whether an operation on this key is currently in flight."""
        lock = self._locks.get(session_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, session_id: str) -> AsyncIterator[None]:
        """
        Hold the session's lock for the duration of the block.

        Usage:
            async with locks.hold(session_id):
                ...
        """
        lock = self.get_lock(session_id)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
