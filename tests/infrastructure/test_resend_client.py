"""Tests for the Resend email sender using a mocked HTTP transport."""

import json

import httpx
import pytest

from app.rate_monitor.application.interfaces.email_sender import EmailMessage
from app.rate_monitor.infrastructure.email.resend_client import ResendEmailSender


@pytest.fixture
def message() -> EmailMessage:
    return EmailMessage(
        subject="Rate alert: EUR/CNY above upper threshold",
        html_body="<p>EUR/CNY 8.6000</p>",
        text_body="EUR/CNY 8.6000",
    )


def make_sender(handler) -> ResendEmailSender:
    return ResendEmailSender(
        api_key="re_test",
        from_email="alerts@example.com",
        to_email="me@example.com",
        transport=httpx.MockTransport(handler),
    )


class TestResendEmailSender:
    """Tests for ResendEmailSender.send."""

    @pytest.mark.asyncio
    async def test_send_posts_message(self, message: EmailMessage) -> None:
        """Test the request shape sent to Resend."""
        # Arrange
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"id": "49a3999c-0ce1-4ea6-ab68-afcd6dc2e794"})

        sender = make_sender(handler)

        # Act
        result = await sender.send(message)
        await sender.close()

        # Assert
        assert result is True
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.resend.com/emails"
        assert request.headers["Authorization"] == "Bearer re_test"
        assert json.loads(request.content) == {
            "from": "alerts@example.com",
            "to": ["me@example.com"],
            "subject": "Rate alert: EUR/CNY above upper threshold",
            "html": "<p>EUR/CNY 8.6000</p>",
            "text": "EUR/CNY 8.6000",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 422, 429, 500])
    async def test_error_status_returns_false(
        self, message: EmailMessage, status_code: int
    ) -> None:
        sender = make_sender(
            lambda request: httpx.Response(status_code, json={"message": "rejected"})
        )

        assert await sender.send(message) is False
        await sender.close()

    @pytest.mark.asyncio
    async def test_timeout_returns_false(self, message: EmailMessage) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.WriteTimeout("timed out", request=request)

        sender = make_sender(handler)

        assert await sender.send(message) is False
        await sender.close()

    @pytest.mark.asyncio
    async def test_connection_error_returns_false(self, message: EmailMessage) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sender = make_sender(handler)

        assert await sender.send(message) is False
        await sender.close()
