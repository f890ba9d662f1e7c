"""
Test suite for the exception hierarchy.

System role: Verification of error context carried by domain exceptions
"""

from chat_backend.core.exceptions import (
    ChatAssistantException,
    InferenceError,
    InvalidInputError,
    SessionNotFoundError,
    SessionStoreError,
)


def test_invalid_input_error_should_record_field():
    err = InvalidInputError("sessionId is required", field="sessionId")

    assert err.message == "sessionId is required"
    assert err.details == {"field": "sessionId"}
    assert "field" in str(err)


def test_session_not_found_error_should_name_session():
    err = SessionNotFoundError("s1")

    assert err.message == "Session not found: s1"
    assert err.details["session_id"] == "s1"


def test_session_store_error_should_record_operation():
    err = SessionStoreError("Failed to persist session", operation="save", session_id="s1")

    assert err.details == {"operation": "save", "session_id": "s1"}


def test_all_errors_should_share_base_class():
    for err in (
        InvalidInputError("x"),
        SessionNotFoundError("s1"),
        InferenceError("x", model="m"),
        SessionStoreError("x"),
    ):
        assert isinstance(err, ChatAssistantException)


def test_str_should_be_plain_message_without_details():
    assert str(ChatAssistantException("boom")) == "boom"
