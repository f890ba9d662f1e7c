"""
Capability interfaces for the chat services.

The services depend on these protocols, not on concrete storage or model
clients, so tests can pass simple fakes.

- SessionStore: init_session / append_message (+ user/assistant variants) /
  get_history / clear_history
- InferenceClient: complete(messages, max_tokens, temperature) -> str
"""

from __future__ import annotations

from typing import Protocol

from chat_backend.models.session import (
    ChatMessage,
    ChatSessionState,
    MessageRole,
    UserPreferences,
)


class SessionStore(Protocol):
    async def init_session(
        self,
        session_id: str,
        user_preferences: UserPreferences | None = None,
    ) -> int: ...

    async def append_message(
        self,
        session_id: str,
        role: MessageRole,
        content: str,
    ) -> ChatMessage: ...

    async def append_user_message(self, session_id: str, content: str) -> ChatMessage: ...

    async def append_assistant_message(self, session_id: str, content: str) -> ChatMessage: ...

    async def get_history(self, session_id: str) -> ChatSessionState: ...

    async def clear_history(self, session_id: str) -> ChatSessionState: ...


class InferenceClient(Protocol):
    async def complete(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float,
    ) -> str: ...
