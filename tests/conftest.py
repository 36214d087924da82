"""
Pytest configuration and fixtures
"""
import pytest
from unittest.mock import patch
from django.test import Client
from django.utils import timezone

from authentication.admin_auth import create_admin_token
from inquiries.models import Inquiry
from properties.models import Property

ADMIN_USER = 'admin'
ADMIN_PASS = 'correct-horse'
SITE_URL = 'https://inquiry.example.com'
WEBHOOK_URL = 'https://contoso.webhook.office.com/webhookb2/abc'
VALID_SLOT = '2030-04-01T10:30:00+09:00'


@pytest.fixture(autouse=True)
def app_settings(settings, tmp_path):
    """Deterministic configuration for every test"""
    settings.DEBUG = False
    settings.ADMIN_USER = ADMIN_USER
    settings.ADMIN_PASS = ADMIN_PASS
    settings.JWT_SECRET_KEY = 'test-jwt-secret'
    settings.SITE_URL = SITE_URL
    settings.RESEND_API_KEY = 're_test_key'
    settings.MAIL_FROM = 'Property <no-reply@example.com>'
    settings.GMAIL_OAUTH_CLIENT_ID = ''
    settings.GMAIL_OAUTH_CLIENT_SECRET = ''
    settings.GMAIL_OAUTH_REFRESH_TOKEN = ''
    settings.GMAIL_OAUTH_USER = ''
    settings.CHAT_WEBHOOK_URL = WEBHOOK_URL
    settings.MEDIA_ROOT = tmp_path
    settings.MEDIA_URL = '/media/'
    return settings


@pytest.fixture
def admin_client(app_settings):
    """Django test client carrying a valid admin cookie"""
    client = Client()
    client.cookies[app_settings.ADMIN_COOKIE_NAME] = create_admin_token(ADMIN_USER)
    return client


@pytest.fixture
def make_property(db):
    """Factory for stored properties"""
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        data = {
            'property_code': f"P{counter['n']:04d}",
            'building_name': 'Sakura Residence',
            'address': '東京都港区1-2-3',
            'view_method': '現地集合',
            'status': 'available',
            'manager_name': 'Tanaka',
            'manager_email': 'manager@example.com',
        }
        data.update(overrides)
        prop = Property.objects.create(**data)
        if 'form_url' not in overrides:
            prop.form_url = f"{SITE_URL}/inquiry?property_id={prop.id}&via=qrcode"
            prop.save(update_fields=['form_url'])
        return prop

    return _make


@pytest.fixture
def make_inquiry(db):
    """Factory for stored inquiries"""

    def _make(prop, **overrides):
        data = {
            'property': prop,
            'inquiry_type': 'other',
            'via': 'qrcode',
            'company_name': 'Acme KK',
            'company_phone': '03-0000-0000',
            'person_name': 'Yamada',
            'person_mobile': '090-0000-0000',
            'person_gmail': 'yamada@gmail.com',
            'business_card_url': 'https://files.example.com/card.png',
            'status_at_submit': prop.status,
            'created_at': timezone.now(),
        }
        data.update(overrides)
        return Inquiry.objects.create(**data)

    return _make


@pytest.fixture
def inquiry_payload():
    """Valid viewing inquiry body for a given property"""

    def _payload(prop, **overrides):
        data = {
            'property_id': str(prop.id),
            'via': 'qrcode',
            'inquiry_type': 'viewing',
            'company_name': 'Acme KK',
            'company_phone': '03-0000-0000',
            'person_name': 'Yamada',
            'person_mobile': '090-0000-0000',
            'person_gmail': 'yamada@gmail.com',
            'visit_datetime': VALID_SLOT,
            'business_card_url': 'https://files.example.com/card.png',
            'purchase_file_url': '',
            'other_text': '',
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def mock_outbound():
    """Patch the chat webhook and mail senders used by notifications"""
    with patch('services.notifications.post_chat_message') as chat, \
            patch('services.notifications.send_mail', return_value='resend') as mail:
        yield {'chat': chat, 'mail': mail}
