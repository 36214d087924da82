"""
Tests for the notification relay and the send_test_notification command
"""
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from services.mailer import MailError
from services.notifications import NotificationReport, notify_inquiry


class TestNotificationReport:
    """Per-channel outcome bookkeeping"""

    def test_all_succeeded(self):
        report = NotificationReport()
        report.succeeded('chat')
        report.succeeded('customer_mail')

        assert report.warning is None
        assert report.errors == {}

    def test_warning_lists_failed_channels(self):
        report = NotificationReport()
        report.failed('chat', 'down')
        report.succeeded('manager_mail')
        report.failed('customer_mail', 'bounced')

        assert report.warning == 'Inquiry saved, but notification failed: Chat / customer mail'
        assert report.errors == {'chat': 'down', 'customer_mail': 'bounced'}


@pytest.mark.django_db
class TestNotifyInquiry:
    """notify_inquiry attempts every channel"""

    def test_manager_and_customer_receive_different_messages(self, make_property, make_inquiry, mock_outbound):
        prop = make_property()
        inquiry = make_inquiry(prop)

        report = notify_inquiry(prop, inquiry)

        assert report.results == {'chat': True, 'manager_mail': True, 'customer_mail': True}
        manager_call, customer_call = mock_outbound['mail'].call_args_list
        assert manager_call.args[1].startswith('【Inquiry】')
        assert customer_call.args[1].startswith('受付完了：')
        chat_text = mock_outbound['chat'].call_args.args[1]
        assert chat_text == manager_call.args[2]

    def test_manager_failure_does_not_skip_customer(self, make_property, make_inquiry):
        prop = make_property()
        inquiry = make_inquiry(prop)

        def fake_send(to_email, subject, text):
            if to_email == 'manager@example.com':
                raise MailError('mailbox full')
            return 'resend'

        with patch('services.notifications.post_chat_message'), \
                patch('services.notifications.send_mail', side_effect=fake_send) as send:
            report = notify_inquiry(prop, inquiry)

        assert send.call_count == 2
        assert report.results['manager_mail'] is False
        assert report.errors['manager_mail'] == 'mailbox full'
        assert report.results['customer_mail'] is True

    def test_unexpected_error_is_reported(self, make_property, make_inquiry):
        prop = make_property()
        inquiry = make_inquiry(prop)

        with patch('services.notifications.post_chat_message', side_effect=RuntimeError('boom')), \
                patch('services.notifications.send_mail', return_value='resend'):
            report = notify_inquiry(prop, inquiry)

        assert report.results['chat'] is False
        assert 'boom' in report.errors['chat']


class TestSendTestNotificationCommand:
    """manage.py send_test_notification"""

    def test_sends_mail_and_chat(self, settings):
        with patch('services.management.commands.send_test_notification.send_mail',
                   return_value='resend') as send, \
                patch('services.management.commands.send_test_notification.post_chat_message') as chat:
            call_command('send_test_notification', to='ops@example.com')

        send.assert_called_once()
        assert send.call_args.args[0] == 'ops@example.com'
        assert chat.call_args.args[0] == settings.CHAT_WEBHOOK_URL

    def test_failure_raises_command_error(self, settings):
        settings.CHAT_WEBHOOK_URL = ''

        with pytest.raises(CommandError):
            call_command('send_test_notification')

    def test_skip_chat(self):
        with patch('services.management.commands.send_test_notification.post_chat_message') as chat:
            call_command('send_test_notification', skip_chat=True)

        chat.assert_not_called()
