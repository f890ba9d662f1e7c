"""Chat API endpoint.

Routes:
- POST /chat - Send a message and receive the assistant's reply

Dependencies: chat_backend.application.services.chat_workflow
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from chat_backend.api.deps import get_chat_workflow
from chat_backend.application.services.chat_service import RequestContext
from chat_backend.application.services.chat_workflow import ChatWorkflow, ChatWorkflowInput
from chat_backend.core.exceptions import InvalidInputError
from chat_backend.models.chat import ChatRequest, ChatResponse
from chat_backend.models.session import to_epoch_ms

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    payload: ChatRequest,
    request: Request,
    workflow: ChatWorkflow = Depends(get_chat_workflow),
) -> ChatResponse:
    """Send a chat message to a session.

    A model failure still answers 200: the response carries the apology text
    that was stored as the assistant message. success=False marks a failure
    elsewhere in the workflow.

    Args:
        payload: ChatRequest with message and sessionId
        request: Incoming request (user agent and origin are logged only)
        workflow: Injected ChatWorkflow

    Returns:
        ChatResponse: Reply text, session id, timestamp and timing

    Raises:
        HTTPException(400): Missing message or sessionId
        HTTPException(500): Processing error
    """
    if not payload.message or not payload.session_id:
        raise HTTPException(status_code=400, detail="Message and sessionId are required")

    workflow_input = ChatWorkflowInput(
        session_id=payload.session_id,
        message=payload.message,
        context=RequestContext(
            user_agent=request.headers.get("user-agent"),
            origin=request.headers.get("origin"),
        ),
    )

    try:
        result = await workflow.run(workflow_input)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception(f"{__name__}:chat - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Failed to process chat request")

    return ChatResponse(
        response=result.response,
        session_id=result.session_id,
        timestamp=to_epoch_ms(result.timestamp),
        processing_time=result.processing_time_ms,
        success=result.success,
        error=result.error,
    )
