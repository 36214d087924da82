"""
Tests for the public inquiry endpoint
"""
from unittest.mock import patch

import pytest
import requests

from inquiries.models import Inquiry
from services.chat_webhook import ChatWebhookError
from services.mailer import MailError


def post_inquiry(client, body):
    return client.post('/api/inquiry', body, content_type='application/json')


@pytest.mark.django_db
class TestSubmitInquiry:
    """POST /api/inquiry"""

    def test_viewing_inquiry_end_to_end(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop))

        assert response.status_code == 201
        data = response.json()
        assert data['ok'] is True
        assert data['notify'] == {'chat': True, 'manager_mail': True, 'customer_mail': True}
        assert data['notify_errors'] == {}
        assert data['warning'] is None

        inquiry = Inquiry.objects.get(pk=data['inquiry_id'])
        assert inquiry.property_id == prop.id
        assert inquiry.status_at_submit == 'available'
        assert inquiry.visit_datetime is not None
        assert inquiry.via == 'qrcode'

        recipients = [c.args[0] for c in mock_outbound['mail'].call_args_list]
        assert recipients == ['manager@example.com', 'yamada@gmail.com']
        mock_outbound['chat'].assert_called_once()

    def test_status_snapshot_is_taken_at_submit(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property(status='pending')

        response = post_inquiry(client, inquiry_payload(prop))

        inquiry = Inquiry.objects.get(pk=response.json()['inquiry_id'])
        assert inquiry.status_at_submit == 'pending'

    def test_viewing_requires_visit_datetime(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop, visit_datetime=''))

        assert response.status_code == 400
        assert 'visit_datetime required' in response.json()['error']
        assert not Inquiry.objects.exists()
        mock_outbound['mail'].assert_not_called()

    def test_viewing_outside_slot_window(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        for value in ('2030-04-01T18:00:00+09:00', '2030-04-01T09:30:00+09:00', '2030-04-01T10:15:00+09:00'):
            response = post_inquiry(client, inquiry_payload(prop, visit_datetime=value))
            assert response.status_code == 400, value

        assert not Inquiry.objects.exists()

    def test_naive_visit_time_is_local(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop, visit_datetime='2030-04-01T17:30:00'))

        assert response.status_code == 201

    def test_purchase_requires_file(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()
        body = inquiry_payload(prop, inquiry_type='purchase', visit_datetime='', purchase_file_url='')

        response = post_inquiry(client, body)

        assert response.status_code == 400
        assert 'purchase file required' in response.json()['error']
        assert not Inquiry.objects.exists()

    def test_purchase_ignores_visit_datetime(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()
        body = inquiry_payload(
            prop,
            inquiry_type='purchase',
            purchase_file_url='https://files.example.com/doc.pdf',
        )

        response = post_inquiry(client, body)

        assert response.status_code == 201
        inquiry = Inquiry.objects.get(pk=response.json()['inquiry_id'])
        assert inquiry.visit_datetime is None
        assert inquiry.purchase_file_url == 'https://files.example.com/doc.pdf'

    def test_other_inquiry(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()
        body = inquiry_payload(prop, inquiry_type='other', visit_datetime='', other_text='駐車場はありますか')

        response = post_inquiry(client, body)

        assert response.status_code == 201

    def test_invalid_email_has_its_own_code(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop, person_gmail='not-an-email'))

        assert response.status_code == 400
        data = response.json()
        assert data['code'] == 'invalid_email'
        assert 'Invalid email' in data['error']
        assert not Inquiry.objects.exists()

    def test_missing_field_is_invalid_input(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()
        body = inquiry_payload(prop)
        del body['company_name']

        response = post_inquiry(client, body)

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_input'

    def test_business_card_required(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop, business_card_url=''))

        assert response.status_code == 400
        assert 'business card' in response.json()['error']

    def test_unknown_inquiry_type(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop, inquiry_type='rental'))

        assert response.status_code == 400

    def test_unknown_property(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property()
        body = inquiry_payload(prop, property_id='00000000-0000-0000-0000-000000000000')

        response = post_inquiry(client, body)

        assert response.status_code == 404
        assert not Inquiry.objects.exists()

    def test_no_mail_provider_configured(self, client, settings, make_property, inquiry_payload, mock_outbound):
        settings.RESEND_API_KEY = ''
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop))

        assert response.status_code == 500
        assert not Inquiry.objects.exists()
        mock_outbound['chat'].assert_not_called()


@pytest.mark.django_db
class TestInquiryNotifications:
    """Notification failures never undo a saved inquiry"""

    def test_missing_manager_email(self, client, make_property, inquiry_payload, mock_outbound):
        prop = make_property(manager_email='')

        response = post_inquiry(client, inquiry_payload(prop))

        assert response.status_code == 201
        data = response.json()
        assert data['notify']['manager_mail'] is False
        assert data['notify_errors']['manager_mail'] == 'manager email is empty'
        assert data['notify']['customer_mail'] is True
        assert data['warning'] == 'Inquiry saved, but notification failed: manager mail'
        mock_outbound['mail'].assert_called_once()
        assert mock_outbound['mail'].call_args.args[0] == 'yamada@gmail.com'

    def test_unreachable_webhook(self, client, make_property, inquiry_payload):
        prop = make_property()

        with patch('services.chat_webhook.requests.post', side_effect=requests.ConnectionError('refused')), \
                patch('services.notifications.send_mail', return_value='resend'):
            response = post_inquiry(client, inquiry_payload(prop))

        assert response.status_code == 201
        data = response.json()
        assert data['notify'] == {'chat': False, 'manager_mail': True, 'customer_mail': True}
        assert 'refused' in data['notify_errors']['chat']
        assert data['warning'] == 'Inquiry saved, but notification failed: Chat'
        assert Inquiry.objects.filter(pk=data['inquiry_id']).exists()

    def test_unconfigured_webhook(self, client, settings, make_property, inquiry_payload, mock_outbound):
        settings.CHAT_WEBHOOK_URL = ''
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop))

        assert response.json()['notify_errors']['chat'] == 'chat webhook URL is not configured'
        mock_outbound['chat'].assert_not_called()

    def test_invalid_webhook_host(self, client, settings, make_property, inquiry_payload, mock_outbound):
        settings.CHAT_WEBHOOK_URL = 'https://example.com/hook'
        prop = make_property()

        response = post_inquiry(client, inquiry_payload(prop))

        assert response.json()['notify_errors']['chat'] == 'chat webhook URL is invalid'

    def test_every_channel_failing(self, client, make_property, inquiry_payload):
        prop = make_property()

        with patch('services.notifications.post_chat_message', side_effect=ChatWebhookError('down')), \
                patch('services.notifications.send_mail', side_effect=MailError('rejected')):
            response = post_inquiry(client, inquiry_payload(prop))

        assert response.status_code == 201
        data = response.json()
        assert data['notify'] == {'chat': False, 'manager_mail': False, 'customer_mail': False}
        assert data['warning'] == 'Inquiry saved, but notification failed: Chat / manager mail / customer mail'
        assert Inquiry.objects.count() == 1
