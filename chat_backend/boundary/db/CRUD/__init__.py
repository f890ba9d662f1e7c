"""CRUD operations for the session database."""

from .base_crud import BaseCRUD
from .chat_session_crud import ChatSessionCRUD, chat_session_crud

__all__ = ["BaseCRUD", "ChatSessionCRUD", "chat_session_crud"]
