"""
Database configuration settings.

Connection URL for the async SQLAlchemy engine that persists chat sessions.
Defaults to a local SQLite file; any async driver URL works
(e.g. postgresql+asyncpg://...).

Dependencies: pydantic, pydantic_settings
System role: Session storage connection configuration
"""

from pydantic import Field

from chat_backend.configs.base import BaseSettings, env_config


class DatabaseSettings(BaseSettings):
    """Session database configuration."""

    model_config = env_config("DATABASE_")

    url: str = Field(
        default="sqlite+aiosqlite:///./chat_sessions.db",
        description="Async SQLAlchemy database URL",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL targets SQLite."""
        return self.url.startswith("sqlite")
