"""
Resend Email Client

Resend exposes a small REST API (POST /emails), so we call it with requests
instead of pulling in an SDK.

If no API key is configured the message is only logged (local development),
mirroring how the service behaves without SMTP credentials.
"""

import logging
from typing import Optional

import requests

from upiconnect.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


class EmailSendError(Exception):
    """Raised when the provider rejects the message or cannot be reached."""


class ResendClient:
    """
    Thin wrapper around the Resend /emails endpoint.
    """

    def __init__(self, api_key: str, base_url: str, sender: str, timeout: float):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.sender = sender
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def send(self, to: str, subject: str, text: str, html: Optional[str] = None) -> str:
        """
        Send one email. Returns the provider message id.
        """
        if not self.configured:
            logger.warning("RESEND_API_KEY not set; email to %s not sent. Subject: %s", to, subject)
            logger.info("Email body (not sent):\n%s", text)
            return ""

        payload = {"from": self.sender, "to": [to], "subject": subject, "text": text}
        if html:
            payload["html"] = html

        try:
            response = requests.post(
                f"{self.base_url}/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise EmailSendError(f"Resend request failed: {exc}") from exc

        if response.status_code >= 400:
            raise EmailSendError(f"Resend returned {response.status_code}: {response.text}")

        return response.json().get("id", "")


_client: ResendClient = None


def get_email_client() -> ResendClient:
    """Get or create the email client (singleton pattern)"""
    global _client
    if _client is None:
        _client = ResendClient(
            api_key=settings.resend_api_key,
            base_url=settings.resend_base_url,
            sender=settings.email_from,
            timeout=settings.email_timeout_seconds,
        )
    return _client
