"""
Chat workflow.

Wraps ChatService for the HTTP chat path: times the turn, logs an analytics
record and converts unexpected failures into a success=False result carrying
the apology text. Also provides a best-effort batch runner and the session
cleanup entry point.

Dependencies: chat_backend.application.services
System role: Chat pipeline coordination
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from chat_backend.application.services.chat_service import ChatService, RequestContext
from chat_backend.application.services.session_service import SessionService
from chat_backend.core.constants import BATCH_FAILURE_RESPONSE, FALLBACK_RESPONSE
from chat_backend.core.exceptions import InvalidInputError
from chat_backend.models.session import utc_now
from chat_backend.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


@dataclass
class ChatWorkflowInput:
    """Input for one chat workflow run."""

    session_id: str | None
    message: str | None
    timestamp: datetime = field(default_factory=utc_now)
    context: RequestContext = field(default_factory=RequestContext)


@dataclass
class ChatWorkflowOutput:
    """Result of one chat workflow run."""

    success: bool
    response: str
    session_id: str | None
    processing_time_ms: int
    timestamp: datetime = field(default_factory=utc_now)
    error: str | None = None


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class ChatWorkflow:
    """Coordinates chat processing across the chat and session services."""

    def __init__(self, chat_service: ChatService, session_service: SessionService) -> None:
        self.chat_service = chat_service
        self.session_service = session_service

    async def run(self, workflow_input: ChatWorkflowInput) -> ChatWorkflowOutput:
        """
        Run one chat turn.

        Args:
            workflow_input: Session, message and caller context

        Returns:
            ChatWorkflowOutput: success=True with the reply, or success=False
            with the apology text when something beneath failed

        Raises:
            InvalidInputError: If session_id or message is empty
        """
        start = time.perf_counter()

        if not workflow_input.session_id or not workflow_input.message:
            raise InvalidInputError("Message and sessionId are required")

        try:
            reply = await self.chat_service.process_chat(
                session_id=workflow_input.session_id,
                message=workflow_input.message,
                context=workflow_input.context,
            )
        except InvalidInputError:
            raise
        except Exception as e:
            log_exception_with_context(
                logger,
                "Chat workflow failed",
                e,
                session_id=workflow_input.session_id,
            )
            return ChatWorkflowOutput(
                success=False,
                response=FALLBACK_RESPONSE,
                session_id=workflow_input.session_id,
                processing_time_ms=_elapsed_ms(start),
                error=str(e) or type(e).__name__,
            )

        processing_time_ms = _elapsed_ms(start)
        self._log_chat_analytics(
            session_id=reply.session_id,
            message_length=len(workflow_input.message),
            response_length=len(reply.response),
            processing_time_ms=processing_time_ms,
            request_timestamp=workflow_input.timestamp,
            inference_failed=reply.inference_failed,
        )

        return ChatWorkflowOutput(
            success=True,
            response=reply.response,
            session_id=reply.session_id,
            processing_time_ms=processing_time_ms,
            timestamp=reply.timestamp,
        )

    async def run_batch(
        self,
        inputs: list[ChatWorkflowInput],
    ) -> list[ChatWorkflowOutput]:
        """
        Run independent chat turns concurrently.

        Best effort: output[i] always corresponds to inputs[i]; an item that
        raised gets a failure placeholder instead of aborting the batch.

        Args:
            inputs: Workflow inputs

        Returns:
            list[ChatWorkflowOutput]: One result per input, same order
        """
        results = await asyncio.gather(
            *(self.run(item) for item in inputs),
            return_exceptions=True,
        )

        outputs: list[ChatWorkflowOutput] = []
        for item, result in zip(inputs, results):
            if isinstance(result, BaseException):
                outputs.append(
                    ChatWorkflowOutput(
                        success=False,
                        response=BATCH_FAILURE_RESPONSE,
                        session_id=item.session_id,
                        processing_time_ms=0,
                        error=str(result) or type(result).__name__,
                    )
                )
            else:
                outputs.append(result)
        return outputs

    async def cleanup_inactive_sessions(self, max_age: timedelta | None = None) -> int:
        """
        Evict sessions idle for longer than max_age (default: configured TTL).

        Returns:
            int: Number of sessions removed
        """
        logger.info(
            "Starting inactive session cleanup",
            extra={"max_age_seconds": max_age.total_seconds() if max_age else None},
        )
        return await self.session_service.evict_inactive(max_age=max_age)

    @staticmethod
    def _log_chat_analytics(**data) -> None:
        log_with_context(
            logger,
            logging.INFO,
            "Chat analytics",
            type="chat_interaction",
            **data,
        )
