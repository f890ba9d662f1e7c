"""
Structured logging helpers.

Context passed as `extra` fields is rendered to short strings first, so a
log call never fails on an odd value and never dumps a whole conversation.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    Collections are reduced to their size, enums to their value, datetimes
    to ISO-8601, and anything longer than max_length is cut.
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, Enum):
            text = str(value.value)
        elif isinstance(value, datetime):
            text = value.isoformat()
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _render(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log message at level with every context item attached as an extra field."""
    logger.log(level, message, extra=_render(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log a handled exception with its traceback.

    Adds error_type and error_msg to the rendered context.

    Args:
        logger: Logger instance
        message: Log message
        exc: The exception being handled
        **context: Additional key-value pairs (session_id, sizes, ...)
    """
    extra = _render(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
