# ==============================================================================
# EMAIL SENDER - Transactional Email HTTP API
# ==============================================================================
# Delivers rendered messages through a Resend-style JSON API
# ==============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

import httpx

from roastery.core.exceptions import NotificationError
from roastery.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    text: str


@runtime_checkable
class EmailSender(Protocol):
    async def send(self, message: EmailMessage) -> bool:
        """
        Deliver one message.

        Returns:
            True if the provider accepted it, False if delivery is disabled

        Raises:
            NotificationError: If the provider rejected or could not be reached
        """
        ...


class HttpEmailSender:
    """
    ``EmailSender`` posting JSON to the configured email API.

    With ``EMAIL_ENABLED`` off, messages are logged and reported as not
    sent instead of being delivered.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        enabled: Optional[bool] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._api_url = api_url or settings.EMAIL_API_URL
        self._api_key = api_key or settings.EMAIL_API_KEY
        self._sender = sender or settings.EMAIL_FROM
        self._enabled = settings.EMAIL_ENABLED if enabled is None else enabled
        self._timeout = timeout or settings.EMAIL_TIMEOUT_SECONDS

    async def send(self, message: EmailMessage) -> bool:
        if not self._enabled:
            logger.info(
                f"Email delivery disabled; not sending '{message.subject}' to {message.to}"
            )
            return False

        if not self._api_key:
            raise NotificationError(message="Email API key is not configured")

        payload = {
            "from": self._sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                message="Email provider rejected the message",
                details={"status_code": e.response.status_code},
            )
        except httpx.HTTPError as e:
            raise NotificationError(message=f"Email provider unreachable: {e}")

        logger.info(f"Sent '{message.subject}' to {message.to}")
        return True
