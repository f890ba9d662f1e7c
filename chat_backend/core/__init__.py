"""Conversation domain: constants, exceptions and per-session locking."""

from .exceptions import (
    ChatAssistantException,
    InferenceError,
    InvalidInputError,
    SessionNotFoundError,
    SessionStoreError,
)
from .session_locks import SessionLockRegistry

__all__ = [
    "ChatAssistantException",
    "InferenceError",
    "InvalidInputError",
    "SessionLockRegistry",
    "SessionNotFoundError",
    "SessionStoreError",
]
