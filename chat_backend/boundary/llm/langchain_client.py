"""
LangChain chat model client.

Implements the InferenceClient capability on top of a LangChain chat model
built with init_chat_model. Role/content dicts are converted to LangChain
messages, and the reply is flattened to plain text.

Dependencies: langchain, langchain_core
System role: Hosted model inference boundary
"""

import logging
from collections.abc import Callable
from typing import Any

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from chat_backend.core.exceptions import InferenceError

logger = logging.getLogger(__name__)

ChatModelFactory = Callable[..., BaseChatModel]


def to_lc_messages(messages: list[dict[str, str]]) -> list[BaseMessage]:
    """
    Convert role/content dicts to LangChain messages.

    "assistant" becomes AIMessage; every other role becomes HumanMessage.
    """
    converted: list[BaseMessage] = []
    for item in messages:
        content = item.get("content") or ""
        if item.get("role") == "assistant":
            converted.append(AIMessage(content=content))
        else:
            converted.append(HumanMessage(content=content))
    return converted


def extract_text(message: Any) -> str:
    """
    Flatten a chat model reply to plain text.

    Providers return either a string or a list of content blocks
    (strings or {"type": "text", "text": ...} dicts).
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text") or "")
        return "".join(parts).strip()
    return ""


class LangChainInferenceClient:
    """
    Chat completion client backed by a LangChain chat model.

    One model instance is built per (max_tokens, temperature) pair and
    reused across calls.
    """

    def __init__(
        self,
        model: str,
        provider: str = "google_genai",
        api_key: str | None = None,
        timeout: float | None = None,
        chat_model_factory: ChatModelFactory | None = None,
    ) -> None:
        """
        Initialize inference client.

        Args:
            model: Model identifier (e.g. "gemini-2.0-flash")
            provider: LangChain provider name for init_chat_model
            api_key: Optional API key; provider env var is used when omitted
            timeout: Optional transport timeout in seconds
            chat_model_factory: Override for model construction (tests)
        """
        self.model = model
        self.provider = provider
        self._api_key = api_key
        self._timeout = timeout
        self._factory = chat_model_factory or init_chat_model
        self._models: dict[tuple[int, float], BaseChatModel] = {}

    def _get_model(self, max_tokens: int, temperature: float) -> BaseChatModel:
        key = (max_tokens, temperature)
        chat_model = self._models.get(key)
        if chat_model is None:
            kwargs: dict[str, Any] = {
                "model_provider": self.provider,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            if self._api_key:
                kwargs["api_key"] = self._api_key
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            chat_model = self._factory(self.model, **kwargs)
            self._models[key] = chat_model
        return chat_model

    async def complete(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Generate a reply for the given conversation.

        Args:
            messages: Ordered role/content dicts, oldest first
            max_tokens: Maximum output tokens
            temperature: Sampling temperature

        Returns:
            str: Reply text

        Raises:
            InferenceError: If the model call fails or the reply is empty
        """
        try:
            chat_model = self._get_model(max_tokens, temperature)
            result = await chat_model.ainvoke(to_lc_messages(messages))
        except Exception as e:
            raise InferenceError(
                f"Model call failed: {type(e).__name__}: {e}",
                model=self.model,
            ) from e

        text = extract_text(result)
        if not text:
            raise InferenceError("Model returned an empty response", model=self.model)

        logger.debug(
            "Model reply received",
            extra={"model": self.model, "response_length": len(text)},
        )
        return text
