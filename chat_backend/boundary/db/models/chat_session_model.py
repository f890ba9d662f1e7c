"""
Chat session ORM model.

One row per session key holding the whole conversation as a JSON list.
The row is rewritten in full on every mutation.

Dependencies: sqlalchemy, chat_backend.boundary.db.base
System role: Durable storage for conversation state
"""

from datetime import datetime

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from chat_backend.boundary.db.base import Base, TimestampMixin, UTCDateTime


class ChatSessionModel(Base, TimestampMixin):
    """
    Chat session ORM model.

    Attributes:
        session_key: Client-chosen session identifier (primary key)
        last_activity: Time of the last init/append/clear (UTC), indexed for sweeps
        messages: Ordered list of {"role", "content", "timestamp"} dicts,
            timestamp in epoch milliseconds
        user_preferences: Optional metadata dict
        created_at: Session creation timestamp (UTC)
        updated_at: Last row write (UTC)
    """

    __tablename__ = "chat_sessions"

    session_key: Mapped[str] = mapped_column(String(255), primary_key=True)

    last_activity: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        index=True,
    )

    messages: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Conversation messages in order",
    )

    user_preferences: Mapped[dict | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        doc="Optional session metadata (name, language, personality)",
    )
