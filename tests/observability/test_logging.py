"""
Test suite for logging helpers.

Covers value sanitizing, structured extras and correlation ID stamping.

System role: Verification of observability utilities
"""

import logging

import pytest

from chat_backend.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from chat_backend.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


class TestSafeLogValue:
    """Test suite for safe_log_value."""

    def test_should_summarize_collections(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"

    def test_should_truncate_long_strings(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)

        assert result.startswith("xxxxx...")
        assert "20 total" in result

    def test_should_render_none(self) -> None:
        assert safe_log_value(None) == "None"


class TestStructuredLogging:
    """Test suite for log_with_context and log_exception_with_context."""

    def test_log_with_context_should_attach_extras(self, caplog) -> None:
        """Test context keys become record attributes."""
        logger = logging.getLogger("tests.structured")

        with caplog.at_level(logging.INFO, logger="tests.structured"):
            log_with_context(logger, logging.INFO, "Chat analytics", session_id="s1", size=3)

        record = caplog.records[-1]
        assert record.getMessage() == "Chat analytics"
        assert record.session_id == "s1"
        assert record.size == "3"

    def test_log_exception_with_context_should_include_error_type(self, caplog) -> None:
        """Test exception logs carry type, message and traceback."""
        logger = logging.getLogger("tests.structured")
        error = ValueError("bad value")

        with caplog.at_level(logging.ERROR, logger="tests.structured"):
            log_exception_with_context(logger, "Inference failed", error, session_id="s1")

        record = caplog.records[-1]
        assert record.error_type == "ValueError"
        assert record.error_msg == "bad value"
        assert record.exc_info[1] is error


class TestCorrelationId:
    """Test suite for correlation ID propagation."""

    @pytest.fixture(autouse=True)
    def reset(self):
        yield
        clear_correlation_id()

    def test_set_should_generate_id_when_missing(self) -> None:
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value

    def test_filter_should_stamp_records(self) -> None:
        set_correlation_id("req-1")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "req-1"

    def test_filter_should_use_placeholder_outside_requests(self) -> None:
        clear_correlation_id()
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"
