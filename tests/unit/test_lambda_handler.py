"""Unit tests for AWS Lambda handler."""

from unittest.mock import MagicMock, Mock, patch

import pytest

from src.lambda_handler import is_api_gateway_event, lambda_handler


@pytest.fixture
def lambda_context() -> MagicMock:
    """Fixture providing a Lambda context with a request id."""
    context = MagicMock()
    context.aws_request_id = "test-request-id"
    return context


@pytest.mark.unit
class TestIsApiGatewayEvent:
    """Tests for is_api_gateway_event function."""

    def test_returns_true_for_api_gateway_http_event(self) -> None:
        """Test that API Gateway HTTP API events are identified."""
        event = {
            "version": "2.0",
            "requestContext": {
                "http": {"method": "GET", "path": "/menus"},
                "requestId": "request-id",
            },
            "rawPath": "/menus",
        }

        assert is_api_gateway_event(event) is True

    def test_returns_true_for_api_gateway_rest_event(self) -> None:
        """Test that API Gateway REST events are identified."""
        event = {
            "requestContext": {"requestId": "request-id", "apiId": "api-id"},
            "path": "/menus",
            "httpMethod": "GET",
        }

        assert is_api_gateway_event(event) is True

    def test_returns_false_for_eventbridge_event(self) -> None:
        """Test that scheduled or bus events are rejected."""
        event = {
            "version": "0",
            "source": "aws.events",
            "detail-type": "Scheduled Event",
            "detail": {},
        }

        assert is_api_gateway_event(event) is False

    def test_returns_false_for_malformed_event(self) -> None:
        """Test that malformed events return False."""
        assert is_api_gateway_event({"random": "data"}) is False


@pytest.mark.unit
class TestLambdaHandler:
    """Tests for lambda_handler function."""

    @patch("src.lambda_handler.mangum_handler")
    def test_routes_api_gateway_events_to_mangum(
        self, mock_mangum_handler: Mock, lambda_context: MagicMock
    ) -> None:
        """Test that API Gateway events are passed through Mangum."""
        mock_mangum_handler.return_value = {"statusCode": 200, "body": "[]"}
        event = {
            "requestContext": {"requestId": "request-id"},
            "httpMethod": "GET",
            "path": "/menus",
        }

        result = lambda_handler(event, lambda_context)

        mock_mangum_handler.assert_called_once_with(event, lambda_context)
        assert result == {"statusCode": 200, "body": "[]"}

    @patch("src.lambda_handler.mangum_handler")
    def test_rejects_unsupported_events(
        self, mock_mangum_handler: Mock, lambda_context: MagicMock
    ) -> None:
        """Test that non API Gateway events get a 400 without reaching the app."""
        result = lambda_handler({"source": "aws.events"}, lambda_context)

        assert result["statusCode"] == 400
        mock_mangum_handler.assert_not_called()

    @patch("src.lambda_handler.mangum_handler")
    def test_handles_unhandled_exceptions(
        self, mock_mangum_handler: Mock, lambda_context: MagicMock
    ) -> None:
        """Test that unexpected failures become a 500 response."""
        mock_mangum_handler.side_effect = RuntimeError("boom")
        event = {"requestContext": {}, "rawPath": "/menus"}

        result = lambda_handler(event, lambda_context)

        assert result == {"statusCode": 500, "body": "Internal server error"}
