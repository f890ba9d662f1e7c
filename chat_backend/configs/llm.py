"""
Model inference configuration settings.

Provider, model name and sampling parameters for the hosted chat model.
Sampling defaults come from chat_backend.core.constants so the fixed
values stay in one place.

Dependencies: pydantic_settings
System role: Inference client configuration
"""

from pydantic import Field

from chat_backend.configs.base import BaseSettings, env_config
from chat_backend.core.constants import (
    CONTEXT_WINDOW_SIZE,
    MAX_OUTPUT_TOKENS,
    TEMPERATURE,
)


class LLMSettings(BaseSettings):
    """Chat model configuration."""

    model_config = env_config("LLM_")

    provider: str = Field(
        default="google_genai",
        description="LangChain model provider passed to init_chat_model",
    )
    model: str = Field(default="gemini-2.0-flash", description="Model identifier")
    api_key: str | None = Field(
        default=None,
        description="Provider API key (falls back to the provider's own env var)",
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="Transport timeout handed to the provider client",
    )
    max_output_tokens: int = Field(default=MAX_OUTPUT_TOKENS, gt=0)
    temperature: float = Field(default=TEMPERATURE, ge=0.0, le=2.0)
    context_window_size: int = Field(default=CONTEXT_WINDOW_SIZE, gt=0)
