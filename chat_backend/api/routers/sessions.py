"""
Session API endpoints.

Routes:
- POST /session/init - Create or refresh a session
- GET /session/history?sessionId=... - Get the full conversation
- POST /session/clear - Drop user/assistant messages

Dependencies: chat_backend.application.services.session_service, chat_backend.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from chat_backend.api.deps import get_session_service
from chat_backend.application.services.session_service import SessionService
from chat_backend.core.constants import CLEAR_CONFIRMATION
from chat_backend.core.exceptions import InvalidInputError, SessionNotFoundError
from chat_backend.models.session import (
    ClearSessionResponse,
    InitSessionRequest,
    InitSessionResponse,
    SessionHistoryResponse,
    SessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["sessions"])


@router.post("/init", response_model=InitSessionResponse)
async def init_session(
    payload: InitSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> InitSessionResponse:
    """
    Create the session on first call; refresh its activity time afterwards.

    Args:
        payload: InitSessionRequest with sessionId and optional preferences
        session_service: Injected SessionService

    Returns:
        InitSessionResponse: Session id and current message count

    Raises:
        HTTPException(400): Missing sessionId
        HTTPException(500): Initialization failed
    """
    try:
        message_count = await session_service.init_session(
            payload.session_id,
            user_preferences=payload.user_preferences,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception(f"{__name__}:init_session - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return InitSessionResponse(
        session_id=payload.session_id,
        message_count=message_count,
    )


@router.get("/history", response_model=SessionHistoryResponse)
async def get_history(
    session_id: str | None = Query(default=None, alias="sessionId"),
    session_service: SessionService = Depends(get_session_service),
) -> SessionHistoryResponse:
    """
    Get the full ordered conversation of a session.

    Unknown sessions return an empty view unless strict history lookup is
    configured.

    Args:
        session_id: Session key from the sessionId query parameter
        session_service: Injected SessionService

    Returns:
        SessionHistoryResponse: Messages and timestamps

    Raises:
        HTTPException(400): Missing sessionId
        HTTPException(404): Unknown session (strict mode only)
        HTTPException(500): Retrieval failed
    """
    try:
        state = await session_service.get_history(session_id)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.exception(f"{__name__}:get_history - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return SessionHistoryResponse.from_state(state)


@router.post("/clear", response_model=ClearSessionResponse)
async def clear_history(
    payload: SessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> ClearSessionResponse:
    """
    Remove all user/assistant messages, keeping the system message.

    Args:
        payload: SessionRequest with sessionId
        session_service: Injected SessionService

    Returns:
        ClearSessionResponse: Confirmation

    Raises:
        HTTPException(400): Missing sessionId
        HTTPException(500): Clearing failed
    """
    try:
        await session_service.clear_history(payload.session_id)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception(f"{__name__}:clear_history - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return ClearSessionResponse(
        message=CLEAR_CONFIRMATION,
        session_id=payload.session_id,
    )
