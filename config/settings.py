"""
Django settings for the property inquiry project.

Every deployment-specific value is read from the environment.
"""
from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'insecure-secret-key')
DEBUG = os.environ.get('DJANGO_DEBUG', 'False').lower() == 'true'
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
    'authentication',
    'properties',
    'inquiries',
    'uploads',
    'services',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'config.middleware.AdminGateMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': False,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

DB_ENGINE = os.environ.get('DB_ENGINE', 'django.db.backends.sqlite3')
if DB_ENGINE.endswith('sqlite3'):
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': os.environ.get('DB_NAME', str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': os.environ.get('DB_NAME', 'property_inquiry'),
            'USER': os.environ.get('DB_USER', 'app_user'),
            'PASSWORD': os.environ.get('DB_PASSWORD', 'app_password'),
            'HOST': os.environ.get('DB_HOST', 'localhost'),
            'PORT': os.environ.get('DB_PORT', '5432'),
        }
    }

LANGUAGE_CODE = 'ja'
TIME_ZONE = os.environ.get('TZ', 'Asia/Tokyo')
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = os.environ.get('MEDIA_URL', '/media/')
MEDIA_ROOT = Path(os.environ.get('MEDIA_ROOT', str(BASE_DIR / 'media')))

STORAGES = {
    'default': {
        'BACKEND': os.environ.get('STORAGE_BACKEND', 'django.core.files.storage.FileSystemStorage'),
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Public origin used for inquiry form links. Falls back to forwarded headers.
SITE_URL = os.environ.get('SITE_URL', '').strip()

# Admin console credentials. ADMIN_PASS may be a bcrypt hash.
ADMIN_USER = os.environ.get('ADMIN_USER', '')
ADMIN_PASS = os.environ.get('ADMIN_PASS', '')
ADMIN_COOKIE_NAME = 'admin_auth'
ADMIN_SESSION_DAYS = int(os.environ.get('ADMIN_SESSION_DAYS', '7'))
ADMIN_LOGIN_URL = '/admin/login/'
ADMIN_PROTECTED_PREFIXES = ['/admin', '/api/admin']
ADMIN_EXEMPT_PREFIXES = ['/admin/login', '/api/admin/login']

JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', SECRET_KEY)
JWT_ALGORITHM = os.environ.get('JWT_ALGORITHM', 'HS256')

# Mail: Resend is the primary backend, the Gmail API is the fallback.
RESEND_API_KEY = os.environ.get('RESEND_API_KEY', '').strip()
RESEND_API_URL = 'https://api.resend.com/emails'
GMAIL_OAUTH_CLIENT_ID = os.environ.get('GMAIL_OAUTH_CLIENT_ID', '').strip()
GMAIL_OAUTH_CLIENT_SECRET = os.environ.get('GMAIL_OAUTH_CLIENT_SECRET', '').strip()
GMAIL_OAUTH_REFRESH_TOKEN = os.environ.get('GMAIL_OAUTH_REFRESH_TOKEN', '').strip()
GMAIL_OAUTH_USER = os.environ.get('GMAIL_OAUTH_USER', '').strip()
GMAIL_TOKEN_URL = 'https://oauth2.googleapis.com/token'
GMAIL_SEND_URL = 'https://gmail.googleapis.com/gmail/v1/users/me/messages/send'
MAIL_FROM = os.environ.get('MAIL_FROM', '').strip()
DEFAULT_FROM_EMAIL = MAIL_FROM or 'Property <no-reply@example.com>'

CHAT_WEBHOOK_URL = os.environ.get('CHAT_WEBHOOK_URL', os.environ.get('TEAMS_WEBHOOK_URL', '')).strip()
CHAT_WEBHOOK_HOST_PATTERNS = [
    r'^[\w-]+\.webhook\.office\.com$',
    r'^outlook\.office(365)?\.com$',
    r'^[\w.-]+\.logic\.azure\.com$',
    r'^hooks\.slack\.com$',
]

# Seconds allowed for every outbound mail/webhook call.
OUTBOUND_TIMEOUT = float(os.environ.get('OUTBOUND_TIMEOUT', '10'))

UPLOAD_MAX_BYTES = 10 * 1024 * 1024
UPLOAD_CLIENT_MAX_MB = 4
UPLOAD_ALLOWED_CONTENT_TYPES = ['application/pdf', 'image/jpeg', 'image/png']
UPLOAD_DIRECTORY = 'uploads'

VIEWING_START_HOUR = 10
VIEWING_END_HOUR = 18
VIEWING_SLOT_MINUTES = 30

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
