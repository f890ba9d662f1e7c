"""
Chat session CRUD operations.

Full-row upserts of conversation state and inactivity queries for eviction.

Dependencies: sqlalchemy, chat_backend.boundary.db.models
System role: Chat session persistence
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chat_backend.boundary.db.CRUD.base_crud import BaseCRUD
from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    """CRUD operations for ChatSessionModel, keyed by session_key."""

    def __init__(self) -> None:
        super().__init__(ChatSessionModel, key_field="session_key")

    async def save(
        self,
        session: AsyncSession,
        session_key: str,
        messages: list[dict],
        created_at: datetime,
        last_activity: datetime,
        user_preferences: dict | None = None,
    ) -> ChatSessionModel:
        """
        Insert or overwrite the full session row.

        Args:
            session: Async database session
            session_key: Session identifier
            messages: Serialized messages in conversation order
            created_at: Session creation time
            last_activity: Last activity time
            user_preferences: Optional metadata

        Returns:
            ChatSessionModel: Persistent instance (not yet committed)
        """
        instance = await session.merge(
            ChatSessionModel(
                session_key=session_key,
                messages=messages,
                created_at=created_at,
                last_activity=last_activity,
                user_preferences=user_preferences,
            )
        )
        await session.flush()
        return instance

    async def get_inactive_keys(
        self,
        session: AsyncSession,
        cutoff: datetime,
    ) -> list[str]:
        """
        List keys of sessions whose last activity is older than cutoff.

        Args:
            session: Async database session
            cutoff: Sessions with last_activity before this are inactive

        Returns:
            list[str]: Inactive session keys, oldest first
        """
        stmt = (
            select(ChatSessionModel.session_key)
            .where(ChatSessionModel.last_activity < cutoff)
            .order_by(ChatSessionModel.last_activity)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


chat_session_crud = ChatSessionCRUD()
