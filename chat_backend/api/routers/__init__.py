"""API routers."""

from .chat import router as chat_router
from .health import router as health_router
from .pages import router as pages_router
from .sessions import router as sessions_router

__all__ = [
    "chat_router",
    "health_router",
    "pages_router",
    "sessions_router",
]
