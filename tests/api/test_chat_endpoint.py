"""
Test suite for chat API endpoint.

Tests POST /api/chat with FastAPI TestClient and a mocked ChatWorkflow.
Covers successful replies, wire format, validation and error handling.

System role: Verification of chat HTTP API endpoint
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from chat_backend.api.deps import get_chat_workflow
from chat_backend.application.services.chat_workflow import ChatWorkflowOutput
from chat_backend.core.constants import FALLBACK_RESPONSE
from chat_backend.core.exceptions import InvalidInputError
from chat_backend.main import create_app

REPLY_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_workflow() -> AsyncMock:
    """Provide a ChatWorkflow mock returning a successful turn."""
    workflow = AsyncMock()
    workflow.run.return_value = ChatWorkflowOutput(
        success=True,
        response="hello!",
        session_id="s1",
        processing_time_ms=42,
        timestamp=REPLY_TIME,
    )
    return workflow


@pytest.fixture
def app(mock_workflow: AsyncMock) -> FastAPI:
    """Create the application with the chat workflow overridden."""
    app = create_app()
    app.dependency_overrides[get_chat_workflow] = lambda: mock_workflow
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app, raise_server_exceptions=False)


class TestChatEndpointSuccessful:
    """Test suite for successful chat endpoint requests."""

    def test_chat_should_return_reply_in_wire_format(
        self,
        client: TestClient,
    ) -> None:
        """Test response carries camelCase fields and epoch-ms timestamp."""
        # Act
        response = client.post("/api/chat", json={"message": "hi", "sessionId": "s1"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "response": "hello!",
            "sessionId": "s1",
            "timestamp": int(REPLY_TIME.timestamp() * 1000),
            "processingTime": 42,
            "success": True,
        }

    def test_chat_should_pass_request_context_to_workflow(
        self,
        client: TestClient,
        mock_workflow: AsyncMock,
    ) -> None:
        """Test session, message, user agent and origin reach the workflow."""
        # Act
        client.post(
            "/api/chat",
            json={"message": "hi", "sessionId": "s1"},
            headers={"User-Agent": "pytest-agent", "Origin": "http://example.com"},
        )

        # Assert
        workflow_input = mock_workflow.run.await_args.args[0]
        assert workflow_input.session_id == "s1"
        assert workflow_input.message == "hi"
        assert workflow_input.context.user_agent == "pytest-agent"
        assert workflow_input.context.origin == "http://example.com"

    def test_chat_should_include_error_when_workflow_failed(
        self,
        client: TestClient,
        mock_workflow: AsyncMock,
    ) -> None:
        """Test a failed workflow still answers 200 with success=false."""
        # Arrange
        mock_workflow.run.return_value = ChatWorkflowOutput(
            success=False,
            response=FALLBACK_RESPONSE,
            session_id="s1",
            processing_time_ms=3,
            error="Failed to persist session",
        )

        # Act
        response = client.post("/api/chat", json={"message": "hi", "sessionId": "s1"})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["response"] == FALLBACK_RESPONSE
        assert data["error"] == "Failed to persist session"


class TestChatEndpointErrors:
    """Test suite for chat endpoint error handling."""

    @pytest.mark.parametrize(
        "body",
        [
            {"sessionId": "s1"},
            {"message": "hi"},
            {"message": "", "sessionId": "s1"},
            {"message": "hi", "sessionId": ""},
            {},
        ],
    )
    def test_chat_should_reject_missing_fields(
        self,
        client: TestClient,
        mock_workflow: AsyncMock,
        body: dict,
    ) -> None:
        """Test missing message or sessionId answers 400 without running the workflow."""
        # Act
        response = client.post("/api/chat", json=body)

        # Assert
        assert response.status_code == 400
        assert response.json() == {"error": "Message and sessionId are required"}
        mock_workflow.run.assert_not_awaited()

    def test_chat_should_map_invalid_input_to_400(
        self,
        client: TestClient,
        mock_workflow: AsyncMock,
    ) -> None:
        """Test validation raised beneath the router becomes 400."""
        # Arrange
        mock_workflow.run.side_effect = InvalidInputError(
            "Message and sessionId are required", field="message"
        )

        # Act
        response = client.post("/api/chat", json={"message": "   ", "sessionId": "s1"})

        # Assert
        assert response.status_code == 400
        assert response.json() == {"error": "Message and sessionId are required"}

    def test_chat_should_return_500_on_unexpected_error(
        self,
        client: TestClient,
        mock_workflow: AsyncMock,
    ) -> None:
        """Test unexpected failures answer 500 with a generic message."""
        # Arrange
        mock_workflow.run.side_effect = RuntimeError("boom")

        # Act
        response = client.post("/api/chat", json={"message": "hi", "sessionId": "s1"})

        # Assert
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process chat request"}

    def test_chat_should_reject_malformed_json(self, client: TestClient) -> None:
        """Test an unparseable body answers 400 with an error object."""
        # Act
        response = client.post(
            "/api/chat",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        # Assert
        assert response.status_code == 400
        assert "error" in response.json()

    def test_chat_should_reject_get(self, client: TestClient) -> None:
        """Test the chat route only accepts POST."""
        response = client.get("/api/chat")

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}
