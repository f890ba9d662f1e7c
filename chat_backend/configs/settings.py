"""
Unified application settings.

One Settings object holds the process-wide fields plus one section per
concern (database, llm, session). Sections are built when Settings is, so
environment changes made before the first get_settings() call are seen.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from chat_backend.configs.base import BaseSettings
from chat_backend.configs.database import DatabaseSettings
from chat_backend.configs.llm import LLMSettings
from chat_backend.configs.session import SessionSettings


class Settings(BaseSettings):
    """Application settings: CORS policy plus the per-concern sections."""

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins (wildcard for the public demo)",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment on first use.

    Usage:
        from chat_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
