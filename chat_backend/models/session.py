"""
Session domain models and schemas.

Conversation state held by the session store plus the request/response
schemas for the session endpoints. Wire schemas use camelCase aliases and
epoch-millisecond timestamps.

Dependencies: pydantic
System role: Session state and session API contracts
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_epoch_ms(value: datetime | None) -> int | None:
    """Convert a datetime to epoch milliseconds (naive values are taken as UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class MessageRole(str, Enum):
    """Conversation message roles."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single conversation message. Immutable once appended."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=utc_now)


class UserPreferences(BaseModel):
    """Optional per-session metadata. Never used for decisions."""

    name: str | None = None
    language: str | None = None
    personality: str | None = None


class ChatSessionState(BaseModel):
    """
    Conversation state for one session key.

    A session that has never been created is represented with
    created_at=None and no messages.
    """

    session_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime | None = None
    last_activity: datetime | None = None
    user_preferences: UserPreferences | None = None

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @property
    def exists(self) -> bool:
        """Whether the session has been created (as opposed to a default view)."""
        return self.created_at is not None


class CamelModel(BaseModel):
    """Base for wire schemas: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionRequest(CamelModel):
    """Request schema for endpoints keyed by session id."""

    session_id: str | None = Field(default=None, description="Client-chosen session key")


class InitSessionRequest(SessionRequest):
    """Request schema for session initialization."""

    user_preferences: UserPreferences | None = Field(
        default=None,
        description="Optional metadata stored with the session",
    )


class InitSessionResponse(CamelModel):
    """Response schema for session initialization."""

    success: bool = True
    session_id: str
    message_count: int


class MessageResponse(CamelModel):
    """Single message in a history response."""

    role: MessageRole
    content: str
    timestamp: int = Field(description="Epoch milliseconds")

    @classmethod
    def from_message(cls, message: ChatMessage) -> "MessageResponse":
        return cls(
            role=message.role,
            content=message.content,
            timestamp=to_epoch_ms(message.timestamp),
        )


class SessionHistoryResponse(CamelModel):
    """Response schema for session history."""

    session_id: str
    messages: list[MessageResponse]
    created_at: int | None = Field(default=None, description="Epoch milliseconds")
    last_activity: int | None = Field(default=None, description="Epoch milliseconds")
    message_count: int
    user_preferences: UserPreferences | None = None

    @classmethod
    def from_state(cls, state: ChatSessionState) -> "SessionHistoryResponse":
        return cls(
            session_id=state.session_id,
            messages=[MessageResponse.from_message(m) for m in state.messages],
            created_at=to_epoch_ms(state.created_at),
            last_activity=to_epoch_ms(state.last_activity),
            message_count=state.message_count,
            user_preferences=state.user_preferences,
        )


class ClearSessionResponse(CamelModel):
    """Response schema for clearing history."""

    success: bool = True
    message: str
    session_id: str
