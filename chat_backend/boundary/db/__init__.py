"""
Database boundary layer: ORM model, CRUD operations, and connection management.

Exports:
  - Base, TimestampMixin, UTCDateTime: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - ChatSessionModel: Conversation state row
  - chat_session_crud: CRUD singleton

Dependencies: sqlalchemy, chat_backend.configs
System role: Durable storage for chat sessions
"""

from chat_backend.boundary.db.base import Base, TimestampMixin, UTCDateTime
from chat_backend.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from chat_backend.boundary.db.models.chat_session_model import ChatSessionModel
from chat_backend.boundary.db.CRUD import BaseCRUD, ChatSessionCRUD, chat_session_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "ChatSessionModel",
    "BaseCRUD",
    "ChatSessionCRUD",
    "chat_session_crud",
]
