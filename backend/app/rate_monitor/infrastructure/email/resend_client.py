"""Resend REST API client for delivering alert emails.

Resend API documentation: https://resend.com/docs/api-reference/emails/send-email
"""

import logging
from typing import Optional

import httpx

from app.rate_monitor.application.interfaces.email_sender import EmailMessage, EmailSender

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com"

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0


class ResendEmailSender(EmailSender):
    """Resend client implementing the EmailSender interface.

    Provider and transport errors are logged and reported as False; the
    caller decides whether to retry.

    Attributes:
        _client: httpx AsyncClient authenticated with the Resend API key.
        _from_email: Sender address (must belong to a verified domain).
        _to_email: Alert recipient.
    """

    def __init__(
        self,
        api_key: str,
        from_email: str,
        to_email: str,
        base_url: str = RESEND_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the Resend client.

        Args:
            api_key: Resend API key.
            from_email: Sender address.
            to_email: Recipient address.
            base_url: Resend API base URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._from_email = from_email
        self._to_email = to_email
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            transport=transport,
        )

    async def send(self, message: EmailMessage) -> bool:
        """Send a message to the configured recipient.

        Returns:
            True if Resend accepted the message.
        """
        try:
            response = await self._client.post(
                "/emails",
                json={
                    "from": self._from_email,
                    "to": [self._to_email],
                    "subject": message.subject,
                    "html": message.html_body,
                    "text": message.text_body,
                },
            )

            if not response.is_success:
                logger.error(f"Resend error: {response.status_code} - {response.text[:200]}")
                return False

            logger.info(f"Email sent to {self._to_email}: {message.subject}")
            return True

        except httpx.TimeoutException:
            logger.error(f"Timeout sending email to {self._to_email}")
            return False
        except httpx.RequestError as e:
            logger.error(f"Resend request error: {e}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
