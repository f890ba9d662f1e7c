"""ORM models."""

from .chat_session_model import ChatSessionModel

__all__ = ["ChatSessionModel"]
