"""
Chat service for conversational replies.

Orchestrates one chat turn: validate, store the user message, build the
bounded model context, call the model, store and return the reply. A model
failure is replaced by a fixed apology, so every turn appends exactly two
messages.

Dependencies: chat_backend.application.interfaces, chat_backend.core
System role: Chat orchestration layer
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from chat_backend.application.interfaces import InferenceClient, SessionStore
from chat_backend.core.constants import (
    CONTEXT_WINDOW_SIZE,
    FALLBACK_RESPONSE,
    MAX_OUTPUT_TOKENS,
    TEMPERATURE,
)
from chat_backend.core.exceptions import InferenceError, InvalidInputError
from chat_backend.core.session_locks import SessionLockRegistry
from chat_backend.models.session import ChatMessage, MessageRole
from chat_backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Caller details kept for logging only."""

    user_agent: str | None = None
    origin: str | None = None


@dataclass(frozen=True)
class ChatReply:
    """Outcome of one chat turn."""

    session_id: str
    response: str
    timestamp: datetime
    inference_failed: bool = False
    error: str | None = field(default=None)


def build_model_context(
    messages: list[ChatMessage],
    window_size: int = CONTEXT_WINDOW_SIZE,
) -> list[dict[str, str]]:
    """
    Build the message list sent to the model.

    Takes the last window_size messages, oldest first. "assistant" keeps its
    role and every other role (system included) is sent as "user".

    Args:
        messages: Full session history in order
        window_size: Number of trailing messages to keep

    Returns:
        list[dict]: Role/content dicts
    """
    recent = messages[-window_size:] if window_size > 0 else []
    return [
        {
            "role": "assistant" if msg.role == MessageRole.ASSISTANT else "user",
            "content": msg.content,
        }
        for msg in recent
    ]


class ChatService:
    """
    Chat service for one-turn conversation processing.

    Holds the session's lock across the whole turn so the context always ends
    with the user message appended by the same turn.
    """

    def __init__(
        self,
        store: SessionStore,
        inference: InferenceClient,
        locks: SessionLockRegistry,
        context_window_size: int = CONTEXT_WINDOW_SIZE,
        max_output_tokens: int = MAX_OUTPUT_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> None:
        """
        Initialize chat service.

        Args:
            store: Session store capability
            inference: Model inference capability
            locks: Per-session lock registry
            context_window_size: Trailing messages forwarded to the model
            max_output_tokens: Output token limit per reply
            temperature: Sampling temperature
        """
        self.store = store
        self.inference = inference
        self.locks = locks
        self.context_window_size = context_window_size
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature

    async def process_chat(
        self,
        session_id: str | None,
        message: str | None,
        context: RequestContext | None = None,
    ) -> ChatReply:
        """
        Process a chat message through the full turn.

        Flow:
        1. Validate session_id and message (nothing is stored on failure)
        2. Append user message
        3. Build context from the last N messages
        4. Invoke the model once (no retries)
        5. Append and return the reply, or the fallback text on model failure

        Args:
            session_id: Session key
            message: User message text
            context: Optional caller details for logging

        Returns:
            ChatReply: Reply text and metadata

        Raises:
            InvalidInputError: If session_id or message is empty
            SessionStoreError: If persistence fails
        """
        if not session_id or not session_id.strip():
            raise InvalidInputError("Message and sessionId are required", field="sessionId")
        if not message or not message.strip():
            raise InvalidInputError("Message and sessionId are required", field="message")

        context = context or RequestContext()
        logger.info(
            "Chat turn started",
            extra={
                "session_id": session_id,
                "message_length": len(message),
                "user_agent": context.user_agent,
                "origin": context.origin,
            },
        )

        async with self.locks.hold(session_id):
            await self.store.append_user_message(session_id, message)

            history = await self.store.get_history(session_id)
            model_messages = build_model_context(history.messages, self.context_window_size)

            inference_failed = False
            error = None
            try:
                response = await self.inference.complete(
                    model_messages,
                    max_tokens=self.max_output_tokens,
                    temperature=self.temperature,
                )
                if not response or not response.strip():
                    raise InferenceError("Model returned an empty response")
            except Exception as e:
                log_exception_with_context(
                    logger,
                    "Inference failed, using fallback response",
                    e,
                    session_id=session_id,
                    context_size=len(model_messages),
                )
                response = FALLBACK_RESPONSE
                inference_failed = True
                error = "AI generation failed"

            reply = await self.store.append_assistant_message(session_id, response)

        return ChatReply(
            session_id=session_id,
            response=reply.content,
            timestamp=reply.timestamp,
            inference_failed=inference_failed,
            error=error,
        )
