"""
Best-effort relay of a saved inquiry to chat, the manager and the customer.

The three channels are independent: every one is attempted regardless of
how the others went, and failures are collected instead of raised.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from django.conf import settings

from inquiries.models import Inquiry
from properties.models import Property
from services.chat_webhook import ChatWebhookError, is_valid_webhook_url, post_chat_message
from services.inquiry_messages import build_customer_message, build_internal_message
from services.mailer import MailError, send_mail

logger = logging.getLogger(__name__)

CHAT = "chat"
MANAGER_MAIL = "manager_mail"
CUSTOMER_MAIL = "customer_mail"

CHANNEL_LABELS = {
    CHAT: "Chat",
    MANAGER_MAIL: "manager mail",
    CUSTOMER_MAIL: "customer mail",
}


@dataclass
class NotificationReport:
    results: Dict[str, bool] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    def succeeded(self, channel: str) -> None:
        self.results[channel] = True

    def failed(self, channel: str, reason: str) -> None:
        self.results[channel] = False
        self.errors[channel] = reason

    @property
    def warning(self) -> Optional[str]:
        failed = [CHANNEL_LABELS[c] for c, ok in self.results.items() if not ok]
        if not failed:
            return None
        return f"Inquiry saved, but notification failed: {' / '.join(failed)}"


def notify_chat(report: NotificationReport, text: str) -> None:
    url = settings.CHAT_WEBHOOK_URL
    if not url:
        report.failed(CHAT, "chat webhook URL is not configured")
        return
    if not is_valid_webhook_url(url):
        report.failed(CHAT, "chat webhook URL is invalid")
        return
    try:
        post_chat_message(url, text)
    except ChatWebhookError as e:
        report.failed(CHAT, str(e))
    except Exception as e:
        logger.exception("Unexpected chat webhook error")
        report.failed(CHAT, f"Unexpected error: {e}")
    else:
        report.succeeded(CHAT)


def notify_mail(report: NotificationReport, channel: str, to_email: str, subject: str, text: str) -> None:
    try:
        send_mail(to_email, subject, text)
    except MailError as e:
        report.failed(channel, str(e))
    except Exception as e:
        logger.exception("Unexpected error sending %s", channel)
        report.failed(channel, f"Unexpected error: {e}")
    else:
        report.succeeded(channel)


def notify_inquiry(prop: Property, inquiry: Inquiry) -> NotificationReport:
    """Send every notification for a saved inquiry and report per channel."""
    report = NotificationReport()
    internal = build_internal_message(prop, inquiry)
    confirmation = build_customer_message(prop, inquiry)

    notify_chat(report, internal.text)

    if prop.manager_email:
        notify_mail(report, MANAGER_MAIL, prop.manager_email, internal.subject, internal.text)
    else:
        report.failed(MANAGER_MAIL, "manager email is empty")

    notify_mail(report, CUSTOMER_MAIL, inquiry.person_gmail, confirmation.subject, confirmation.text)

    for channel, reason in report.errors.items():
        logger.warning("Inquiry %s: %s notification failed: %s", inquiry.id, channel, reason)
    return report
