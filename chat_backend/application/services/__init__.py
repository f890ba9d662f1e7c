"""Application services."""

from .chat_service import ChatReply, ChatService, RequestContext, build_model_context
from .chat_workflow import ChatWorkflow, ChatWorkflowInput, ChatWorkflowOutput
from .session_service import SessionService

__all__ = [
    "ChatReply",
    "ChatService",
    "ChatWorkflow",
    "ChatWorkflowInput",
    "ChatWorkflowOutput",
    "RequestContext",
    "SessionService",
    "build_model_context",
]
