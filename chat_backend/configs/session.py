"""
Session lifecycle configuration settings.

Dependencies: pydantic_settings
System role: Session expiry and history lookup policy
"""

from pydantic import Field

from chat_backend.configs.base import BaseSettings, env_config
from chat_backend.core.constants import SESSION_TTL_SECONDS, SYSTEM_PROMPT


class SessionSettings(BaseSettings):
    """Session store policy."""

    model_config = env_config("SESSION_")

    ttl_seconds: int = Field(
        default=SESSION_TTL_SECONDS,
        gt=0,
        description="Sliding inactivity window after which a session is evicted",
    )
    eviction_interval_seconds: int = Field(
        default=300,
        ge=0,
        description="Seconds between background sweeps (0 disables the sweeper)",
    )
    strict_history: bool = Field(
        default=False,
        description="Return 404 for history of unknown sessions instead of an empty view",
    )
    system_prompt: str = Field(
        default=SYSTEM_PROMPT,
        description="Priming text seeded as the first message of every session",
    )
