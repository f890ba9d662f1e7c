"""
Common response models.

Error schema and health payload shared by all routers.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(description="Error message")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str = Field(description="ISO-8601 timestamp")
