"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(engine, session store, lock registry, model client) are built once and
cached; services are thin wrappers over them.

Dependencies: chat_backend.configs, chat_backend.application, chat_backend.boundary
System role: DI container for service injection
"""

from chat_backend.configs import Settings, get_settings
from chat_backend.application.adapters.session_store_adapter import SessionStoreAdapter
from chat_backend.application.services import (
    ChatService,
    ChatWorkflow,
    SessionService,
)
from chat_backend.boundary.db import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from chat_backend.core.session_locks import SessionLockRegistry


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._engine = None
        self._session_factory = None
        self._session_store = None
        self._locks = None
        self._inference_client = None

    @property
    def settings(self) -> Settings:
        """Get settings (global settings unless injected)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self):
        """Get cached async engine."""
        if self._engine is None:
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self):
        """Get cached async session factory."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def session_store(self) -> SessionStoreAdapter:
        """Get cached session store."""
        if self._session_store is None:
            self._session_store = SessionStoreAdapter(
                session_factory=self.session_factory,
                system_prompt=self.settings.session.system_prompt,
            )
        return self._session_store

    @property
    def locks(self) -> SessionLockRegistry:
        """Get the shared per-session lock registry."""
        if self._locks is None:
            self._locks = SessionLockRegistry()
        return self._locks

    @property
    def inference_client(self):
        """Get cached model inference client."""
        if self._inference_client is None:
            # Lazy import to avoid loading provider packages at startup
            from chat_backend.boundary.llm import LangChainInferenceClient

            llm = self.settings.llm
            self._inference_client = LangChainInferenceClient(
                model=llm.model,
                provider=llm.provider,
                api_key=llm.api_key,
                timeout=llm.timeout_seconds,
            )
        return self._inference_client

    def session_service(self) -> SessionService:
        """Build a session service over the cached store."""
        session = self.settings.session
        return SessionService(
            store=self.session_store,
            locks=self.locks,
            ttl_seconds=session.ttl_seconds,
            strict_history=session.strict_history,
        )

    def chat_service(self) -> ChatService:
        """Build a chat service over the cached store and model client."""
        llm = self.settings.llm
        return ChatService(
            store=self.session_store,
            inference=self.inference_client,
            locks=self.locks,
            context_window_size=llm.context_window_size,
            max_output_tokens=llm.max_output_tokens,
            temperature=llm.temperature,
        )

    async def startup(self) -> None:
        """Create database tables."""
        await create_tables(self.engine)

    async def shutdown(self) -> None:
        """Dispose the engine and clear all cached instances."""
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._session_store = None
        self._locks = None
        self._inference_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_session_service() -> SessionService:
    """
    Get session service instance.

    Returns:
        SessionService: Session lifecycle service
    """
    return get_service_cache().session_service()


def get_chat_workflow() -> ChatWorkflow:
    """
    Get chat workflow instance.

    Returns:
        ChatWorkflow: Workflow over the chat and session services
    """
    cache = get_service_cache()
    return ChatWorkflow(
        chat_service=cache.chat_service(),
        session_service=cache.session_service(),
    )
