"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, chat_backend.api, chat_backend.observability, chat_backend.configs
System role: Application initialization and configuration
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_backend.configs import get_settings
from chat_backend.api import api_router
from chat_backend.api.deps import get_service_cache
from chat_backend.api.errors import register_exception_handlers
from chat_backend.api.routers import pages_router
from chat_backend.observability.logger import configure_logging
from chat_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: configure logging, create session tables, start the session
    sweeper. Shutdown: stop the sweeper and dispose the engine.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    try:
        await cache.startup()
    except Exception as e:
        logger.exception(
            "Failed to initialize session storage",
            extra={"error": str(e)},
        )
        raise
    logger.info("Session storage ready")

    sweeper: asyncio.Task | None = None
    interval = settings.session.eviction_interval_seconds
    if interval > 0:
        sweeper = asyncio.create_task(
            cache.session_service().run_eviction_loop(interval),
            name="session-sweeper",
        )

    yield

    # Shutdown
    try:
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper
    except Exception:
        logger.exception("Session sweeper stopped with an error")
    finally:
        await cache.shutdown()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Chat Assistant API",
        description="Session-scoped chat assistant backed by a hosted language model",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(pages_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chat_backend.main:app",
        host="localhost",
        port=8787,
        reload=get_settings().debug,
    )
