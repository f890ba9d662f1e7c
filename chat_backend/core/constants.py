"""
Conversation constants.

Fixed prompt text, fallback text and the bounded-context parameters used
when forwarding a conversation to the model.

Dependencies: None (pure domain layer)
System role: Single source for conversation defaults
"""

SYSTEM_PROMPT = (
    "You are a helpful AI assistant. You should be friendly, informative, and "
    "helpful. You have access to the conversation history and can remember "
    "context from previous messages. Keep responses concise but comprehensive."
)

FALLBACK_RESPONSE = (
    "I apologize, but I encountered an error processing your request. "
    "Please try again."
)

BATCH_FAILURE_RESPONSE = "Failed to process message"

CLEAR_CONFIRMATION = "Chat history cleared"

# Bounded model context
CONTEXT_WINDOW_SIZE = 10
MAX_OUTPUT_TOKENS = 512
TEMPERATURE = 0.7

# One hour of inactivity
SESSION_TTL_SECONDS = 60 * 60
