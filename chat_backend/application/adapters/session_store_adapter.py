"""
Session store adapter.

Write-through conversation store implementing the SessionStore capability.
Live sessions are cached in-process by key; every mutation builds a new
state, commits it to the chat_sessions table, and only then replaces the
cached copy. A cache miss falls back to the database, so sessions survive
restarts.

The adapter does no locking of its own; callers serialize per key through
SessionLockRegistry.

Dependencies: sqlalchemy, chat_backend.boundary.db
System role: Session-scoped conversation state with durable persistence
"""

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from chat_backend.boundary.db.CRUD.chat_session_crud import chat_session_crud
from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel
from chat_backend.core.constants import SYSTEM_PROMPT
from chat_backend.core.exceptions import SessionStoreError
from chat_backend.models.session import (
    ChatMessage,
    ChatSessionState,
    MessageRole,
    UserPreferences,
    from_epoch_ms,
    to_epoch_ms,
    utc_now,
)

logger = logging.getLogger(__name__)


def serialize_message(message: ChatMessage) -> dict:
    return {
        "role": message.role.value,
        "content": message.content,
        "timestamp": to_epoch_ms(message.timestamp),
    }


def deserialize_message(data: dict) -> ChatMessage:
    return ChatMessage(
        role=MessageRole(data["role"]),
        content=data["content"],
        timestamp=from_epoch_ms(data["timestamp"]),
    )


class SessionStoreAdapter:
    """
    Cached, write-through SessionStore over SQLAlchemy.

    Attributes:
        system_prompt: Priming text seeded into new sessions
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Async session factory for the session database
            system_prompt: Text of the system message seeded into new sessions
        """
        self._session_factory = session_factory
        self.system_prompt = system_prompt
        self._cache: dict[str, ChatSessionState] = {}

    async def init_session(
        self,
        session_id: str,
        user_preferences: UserPreferences | None = None,
    ) -> int:
        """
        Ensure a session exists, seeding it with the system message when new.

        Calling again on an existing session only refreshes last_activity
        (and replaces preferences when given).

        Args:
            session_id: Session key
            user_preferences: Optional metadata to store

        Returns:
            int: Current message count
        """
        state = await self._load(session_id)
        if state is None:
            state = self._new_state(session_id, user_preferences)
            logger.info("Session created", extra={"session_id": session_id})
        else:
            update: dict = {"last_activity": utc_now()}
            if user_preferences is not None:
                update["user_preferences"] = user_preferences
            state = state.model_copy(update=update)

        await self._save(state)
        return state.message_count

    async def append_message(
        self,
        session_id: str,
        role: MessageRole,
        content: str,
    ) -> ChatMessage:
        """
        Append a message stamped with the current time.

        A session that does not exist yet is seeded first.

        Args:
            session_id: Session key
            role: Message role
            content: Message text

        Returns:
            ChatMessage: The appended message
        """
        state = await self._load(session_id)
        if state is None:
            state = self._new_state(session_id)
            logger.info("Session created on first message", extra={"session_id": session_id})

        message = ChatMessage(role=role, content=content)
        state = state.model_copy(
            update={
                "messages": [*state.messages, message],
                "last_activity": message.timestamp,
            }
        )
        await self._save(state)
        return message

    async def append_user_message(self, session_id: str, content: str) -> ChatMessage:
        return await self.append_message(session_id, MessageRole.USER, content)

    async def append_assistant_message(self, session_id: str, content: str) -> ChatMessage:
        return await self.append_message(session_id, MessageRole.ASSISTANT, content)

    async def get_history(self, session_id: str) -> ChatSessionState:
        """
        Return the full conversation for a session.

        Never fails for an unknown key: a default, non-persisted view
        (no messages, no timestamps) is returned instead.

        Args:
            session_id: Session key

        Returns:
            ChatSessionState: Copy of the session state
        """
        state = await self._load(session_id)
        if state is None:
            return ChatSessionState(session_id=session_id)
        return state.model_copy(update={"messages": list(state.messages)})

    async def clear_history(self, session_id: str) -> ChatSessionState:
        """
        Remove every user/assistant message, keeping system messages.

        Args:
            session_id: Session key

        Returns:
            ChatSessionState: State after clearing
        """
        state = await self._load(session_id)
        if state is None:
            state = self._new_state(session_id)

        kept = [m for m in state.messages if m.role == MessageRole.SYSTEM]
        state = state.model_copy(update={"messages": kept, "last_activity": utc_now()})
        await self._save(state)
        return state.model_copy(update={"messages": list(kept)})

    async def get_inactive_session_ids(self, cutoff: datetime) -> list[str]:
        """
        List sessions whose last activity is older than cutoff.

        Args:
            cutoff: Inactivity boundary (aware UTC datetime)

        Returns:
            list[str]: Session keys, oldest first
        """
        async with self._session_factory() as db:
            try:
                return await chat_session_crud.get_inactive_keys(db, cutoff)
            except SQLAlchemyError as e:
                raise SessionStoreError(
                    "Failed to list inactive sessions",
                    operation="sweep",
                ) from e

    async def evict(self, session_id: str, cutoff: datetime) -> bool:
        """
        Delete a session if it is still inactive at cutoff.

        Args:
            session_id: Session key
            cutoff: Inactivity boundary

        Returns:
            bool: True if the session was removed
        """
        state = await self._load(session_id)
        if state is None:
            return False
        if state.last_activity is not None and state.last_activity >= cutoff:
            return False

        async with self._session_factory() as db:
            try:
                await chat_session_crud.delete_by_id(db, session_id)
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise SessionStoreError(
                    "Failed to delete session",
                    operation="delete",
                    session_id=session_id,
                ) from e

        self._cache.pop(session_id, None)
        return True

    def _new_state(
        self,
        session_id: str,
        user_preferences: UserPreferences | None = None,
    ) -> ChatSessionState:
        now = utc_now()
        return ChatSessionState(
            session_id=session_id,
            messages=[
                ChatMessage(role=MessageRole.SYSTEM, content=self.system_prompt, timestamp=now)
            ],
            created_at=now,
            last_activity=now,
            user_preferences=user_preferences,
        )

    async def _load(self, session_id: str) -> ChatSessionState | None:
        cached = self._cache.get(session_id)
        if cached is not None:
            return cached

        async with self._session_factory() as db:
            try:
                row = await chat_session_crud.get_by_id(db, session_id)
            except SQLAlchemyError as e:
                raise SessionStoreError(
                    "Failed to load session",
                    operation="load",
                    session_id=session_id,
                ) from e

        if row is None:
            return None

        state = self._to_state(row)
        self._cache[session_id] = state
        return state

    async def _save(self, state: ChatSessionState) -> None:
        async with self._session_factory() as db:
            try:
                await chat_session_crud.save(
                    db,
                    session_key=state.session_id,
                    messages=[serialize_message(m) for m in state.messages],
                    created_at=state.created_at,
                    last_activity=state.last_activity,
                    user_preferences=(
                        state.user_preferences.model_dump()
                        if state.user_preferences
                        else None
                    ),
                )
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise SessionStoreError(
                    "Failed to persist session",
                    operation="save",
                    session_id=state.session_id,
                ) from e

        self._cache[state.session_id] = state

    @staticmethod
    def _to_state(row: ChatSessionModel) -> ChatSessionState:
        return ChatSessionState(
            session_id=row.session_key,
            messages=[deserialize_message(m) for m in row.messages or []],
            created_at=row.created_at,
            last_activity=row.last_activity,
            user_preferences=(
                UserPreferences(**row.user_preferences) if row.user_preferences else None
            ),
        )
