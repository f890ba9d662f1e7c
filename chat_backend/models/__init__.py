"""Domain state and HTTP schemas."""

from .chat import ChatRequest, ChatResponse
from .common import ErrorResponse, HealthResponse
from .session import (
    ChatMessage,
    ChatSessionState,
    ClearSessionResponse,
    InitSessionRequest,
    InitSessionResponse,
    MessageResponse,
    MessageRole,
    SessionHistoryResponse,
    SessionRequest,
    UserPreferences,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatSessionState",
    "ClearSessionResponse",
    "ErrorResponse",
    "HealthResponse",
    "InitSessionRequest",
    "InitSessionResponse",
    "MessageResponse",
    "MessageRole",
    "SessionHistoryResponse",
    "SessionRequest",
    "UserPreferences",
]
