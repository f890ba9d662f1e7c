"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import Field

from chat_backend.models.session import CamelModel, SessionRequest


class ChatRequest(SessionRequest):
    """Request schema for chat messages."""

    message: str | None = Field(default=None, description="User message text")


class ChatResponse(CamelModel):
    """Response schema for chat messages."""

    response: str
    session_id: str
    timestamp: int = Field(description="Epoch milliseconds")
    processing_time: int = Field(description="Workflow processing time in milliseconds")
    success: bool = True
    error: str | None = None
