"""FastAPI dependency providers."""

from .dependencies import (
    ServiceCache,
    get_chat_workflow,
    get_service_cache,
    get_session_service,
)

__all__ = [
    "ServiceCache",
    "get_chat_workflow",
    "get_service_cache",
    "get_session_service",
]
