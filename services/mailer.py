"""
Outbound mail.

Two Django email backends talk to HTTP mail APIs: Resend (primary) and the
Gmail API through an OAuth2 refresh token (fallback). ``send_mail`` picks the
configured ones and retries once through the fallback when the primary fails.
"""
import base64
import logging
import uuid
from typing import List, Optional

import requests
from django.conf import settings
from django.core.mail import EmailMessage
from django.core.mail.backends.base import BaseEmailBackend

logger = logging.getLogger(__name__)


class MailError(Exception):
    """A mail provider rejected or failed to accept a message."""


class MailConfigurationError(MailError):
    """No usable mail provider settings."""


def _response_detail(response: requests.Response) -> str:
    return f"{response.status_code} {response.text[:300]}".strip()


class HttpEmailBackend(BaseEmailBackend):
    """Base for backends that deliver one message per HTTP call"""

    name = "http"

    def __init__(self, timeout: Optional[float] = None, fail_silently: bool = False, **kwargs):
        super().__init__(fail_silently=fail_silently, **kwargs)
        self.timeout = timeout if timeout is not None else settings.OUTBOUND_TIMEOUT

    def default_from(self) -> str:
        return settings.DEFAULT_FROM_EMAIL

    def send_messages(self, email_messages) -> int:
        sent = 0
        for message in email_messages:
            try:
                self.deliver(message)
            except MailError:
                if not self.fail_silently:
                    raise
                logger.warning("%s backend failed silently for %s", self.name, message.to)
            except Exception as e:
                if not self.fail_silently:
                    raise MailError(f"{self.name} send failed: {e}") from e
                logger.warning("%s backend failed silently for %s", self.name, message.to, exc_info=True)
            else:
                sent += 1
        return sent

    def deliver(self, message: EmailMessage) -> None:
        raise NotImplementedError

    def _post(self, url: str, what: str, **kwargs) -> requests.Response:
        try:
            response = requests.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise MailError(f"{what} failed: {exc}") from exc
        if not response.ok:
            raise MailError(f"{what} failed: {_response_detail(response)}")
        return response


class ResendEmailBackend(HttpEmailBackend):
    """Transactional mail through the Resend HTTP API"""

    name = "resend"

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key or settings.RESEND_API_KEY

    @staticmethod
    def is_configured() -> bool:
        return bool(settings.RESEND_API_KEY)

    def default_from(self) -> str:
        if not settings.MAIL_FROM:
            raise MailConfigurationError("Missing MAIL_FROM")
        return settings.MAIL_FROM

    def deliver(self, message: EmailMessage) -> None:
        self._post(
            settings.RESEND_API_URL,
            "Resend send",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "from": message.from_email,
                "to": list(message.to),
                "subject": message.subject,
                "text": message.body,
            },
        )


class GmailOAuthEmailBackend(HttpEmailBackend):
    """
    Mail through the Gmail API.

    A fresh access token is requested from the refresh token for every
    message; tokens are not cached.
    """

    name = "gmail"

    @staticmethod
    def is_configured() -> bool:
        return all([
            settings.GMAIL_OAUTH_CLIENT_ID,
            settings.GMAIL_OAUTH_CLIENT_SECRET,
            settings.GMAIL_OAUTH_REFRESH_TOKEN,
        ])

    def default_from(self) -> str:
        sender = settings.MAIL_FROM or settings.GMAIL_OAUTH_USER
        if not sender:
            raise MailConfigurationError("Missing MAIL_FROM or GMAIL_OAUTH_USER")
        return sender

    def fetch_access_token(self) -> str:
        response = self._post(
            settings.GMAIL_TOKEN_URL,
            "Google token exchange",
            data={
                "client_id": settings.GMAIL_OAUTH_CLIENT_ID,
                "client_secret": settings.GMAIL_OAUTH_CLIENT_SECRET,
                "refresh_token": settings.GMAIL_OAUTH_REFRESH_TOKEN,
                "grant_type": "refresh_token",
            },
        )
        try:
            access_token = response.json().get("access_token")
        except ValueError:
            access_token = None
        if not access_token:
            raise MailError("Google token exchange returned empty access_token")
        return access_token

    def deliver(self, message: EmailMessage) -> None:
        access_token = self.fetch_access_token()
        raw = base64.urlsafe_b64encode(message.message().as_bytes()).decode("ascii").rstrip("=")
        self._post(
            settings.GMAIL_SEND_URL,
            "Gmail API send",
            headers={"Authorization": f"Bearer {access_token}"},
            json={"raw": raw},
        )


def configured_backends() -> List[HttpEmailBackend]:
    """Configured backends in preference order: primary first, fallback second."""
    backends = []
    if ResendEmailBackend.is_configured():
        backends.append(ResendEmailBackend())
    if GmailOAuthEmailBackend.is_configured():
        backends.append(GmailOAuthEmailBackend())
    return backends


def mail_configured() -> bool:
    return ResendEmailBackend.is_configured() or GmailOAuthEmailBackend.is_configured()


def _send_with(backend: HttpEmailBackend, to_email: str, subject: str, text: str) -> None:
    email = EmailMessage(
        subject=subject,
        body=text,
        from_email=backend.default_from(),
        to=[to_email],
        connection=backend,
    )
    email.extra_headers['Message-ID'] = f"<{uuid.uuid4()}@property-inquiry.local>"
    email.send(fail_silently=False)


def send_mail(to_email: str, subject: str, text: str) -> str:
    """
    Send a plain-text mail.

    Returns the name of the backend that delivered it. Raises
    MailConfigurationError when nothing is configured and MailError when
    delivery failed (after the one fallback attempt, if available).
    """
    backends = configured_backends()
    if not backends:
        raise MailConfigurationError(
            "Missing mail provider configuration (RESEND_API_KEY or GMAIL_OAUTH_*)"
        )

    primary = backends[0]
    fallback = backends[1] if len(backends) > 1 else None
    try:
        _send_with(primary, to_email, subject, text)
        logger.info("Mail to %s sent via %s", to_email, primary.name)
        return primary.name
    except MailError as e:
        if fallback is None:
            logger.error(f"Mail to {to_email} via {primary.name} failed: {e}")
            raise
        logger.warning(f"Mail to {to_email} via {primary.name} failed, retrying via {fallback.name}: {e}")

    _send_with(fallback, to_email, subject, text)
    logger.info("Mail to %s sent via %s", to_email, fallback.name)
    return fallback.name
