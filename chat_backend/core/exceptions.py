"""
Exception hierarchy for the chat assistant.

Every error carries a human-readable message plus a `details` dict of
context (field, session, model, operation) for logging. Routers map the
subclasses to HTTP statuses; the chat turn absorbs InferenceError.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ChatAssistantException(Exception):
    """
    Root of the service's error hierarchy.

    Keyword context with a non-None value is merged into `details`.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.details = dict(details or {})
        self.details.update({key: value for key, value in context.items() if value is not None})
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class InvalidInputError(ChatAssistantException):
    """A required request field is missing or blank (400)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, field=field)


class SessionNotFoundError(ChatAssistantException):
    """History was requested in strict mode for a key that was never created (404)."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Session not found: {session_id}", details, session_id=session_id)


class InferenceError(ChatAssistantException):
    """The model call failed or produced no usable text."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, model=model)


class SessionStoreError(ChatAssistantException):
    """
    Reading or writing durable session state failed.

    Args:
        message: Error message
        operation: One of load, save, delete, sweep
        session_id: Session key involved, if any
        details: Additional context
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, operation=operation, session_id=session_id)
