import logging
from typing import Optional

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from effitrack.core.config import settings
from effitrack.core.exceptions import ConfigurationError, MailDeliveryError

logger = logging.getLogger(__name__)

# Transient network failures only; a 4xx from the provider will not get better on retry
_RETRYABLE = (requests.exceptions.Timeout, requests.exceptions.ConnectionError)


class MailTransport:
    """Outbound email capability: send one HTML message or raise MailDeliveryError."""

    def send_email(self, to: Optional[str], subject: str, html: str) -> None:
        raise NotImplementedError


class ResendMailTransport(MailTransport):
    """Sends mail through the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        sender: str = settings.mail.sender,
        api_url: str = settings.mail.api_url,
        timeout: float = settings.mail.timeout_seconds,
        max_attempts: int = settings.mail.max_attempts,
    ):
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)

    @classmethod
    def from_settings(cls) -> "ResendMailTransport":
        """
        Build the transport from configuration.

        Raises:
            ConfigurationError: If RESEND_API_KEY is not configured.
        """
        api_key = settings.mail.resend_api_key
        if not api_key:
            raise ConfigurationError("RESEND_API_KEY not configured")
        return cls(
            api_key=api_key,
            sender=settings.mail.sender,
            api_url=settings.mail.api_url,
            timeout=settings.mail.timeout_seconds,
            max_attempts=settings.mail.max_attempts,
        )

    def _post(self, to: str, subject: str, html: str) -> None:
        response = requests.post(
            self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "from": self.sender,
                "to": [to],
                "subject": subject,
                "html": html,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

    def send_email(self, to: Optional[str], subject: str, html: str) -> None:
        if not to:
            raise MailDeliveryError("Recipient has no email address on file", recipient=to)

        retryer = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type(_RETRYABLE),
            reraise=True,
        )
        try:
            retryer(self._post, to, subject, html)
        except requests.exceptions.Timeout:
            logger.error(f"Mail provider timeout for {to}")
            raise MailDeliveryError("Mail provider timed out", recipient=to)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"Mail provider returned HTTP {status} for {to}")
            raise MailDeliveryError(f"Mail provider returned error: {status}", recipient=to)
        except requests.exceptions.RequestException as e:
            logger.error(f"Mail request to provider failed for {to}: {e}")
            raise MailDeliveryError(f"Mail request failed: {e}", recipient=to)


def get_mail_transport() -> MailTransport:
    """FastAPI dependency; tests override it with an in-memory transport."""
    return ResendMailTransport.from_settings()
