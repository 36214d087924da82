import logging
import re
from typing import Optional
from urllib.parse import urlparse

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class ChatWebhookError(Exception):
    """Raised when the chat webhook cannot be reached or rejects a message."""


def is_valid_webhook_url(url: Optional[str]) -> bool:
    """Basic shape check: HTTPS and a known incoming-webhook host."""
    if not url:
        return False
    parsed = urlparse(url.strip())
    if parsed.scheme != "https" or not parsed.hostname:
        return False
    host = parsed.hostname.lower()
    return any(re.match(pattern, host) for pattern in settings.CHAT_WEBHOOK_HOST_PATTERNS)


def post_chat_message(url: str, text: str, timeout: Optional[float] = None) -> None:
    """Post ``{"text": text}`` to an incoming webhook."""
    timeout = timeout if timeout is not None else settings.OUTBOUND_TIMEOUT
    try:
        response = requests.post(url, json={"text": text}, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Chat webhook request failed: %s", exc)
        raise ChatWebhookError(f"Chat webhook request failed: {exc}") from exc

    if not response.ok:
        raise ChatWebhookError(
            f"Chat webhook returned {response.status_code}: {response.text[:200]}"
        )
    logger.debug("Chat webhook accepted message (%s)", response.status_code)
