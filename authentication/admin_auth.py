import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from django.conf import settings
from django.http import HttpRequest


logger = logging.getLogger(__name__)


class AdminConfigurationError(Exception):
    """Raised when ADMIN_USER / ADMIN_PASS are not configured on the server."""


def admin_credentials_configured() -> bool:
    return bool(settings.ADMIN_USER) and bool(settings.ADMIN_PASS)


def require_admin_credentials() -> None:
    if not admin_credentials_configured():
        raise AdminConfigurationError("Missing ADMIN_USER / ADMIN_PASS")


def verify_password(password: str, expected: str) -> bool:
    """
    Check a submitted password against the configured one.

    A configured value that looks like a bcrypt hash is verified with bcrypt,
    anything else is compared in constant time.
    """
    if expected.startswith(("$2a$", "$2b$", "$2y$")):
        try:
            return bcrypt.checkpw(password.encode('utf-8'), expected.encode('utf-8'))
        except ValueError:
            logger.error("ADMIN_PASS looks like a bcrypt hash but could not be parsed")
            return False
    return hmac.compare_digest(password.encode('utf-8'), expected.encode('utf-8'))


def verify_admin_credentials(username: str, password: str) -> bool:
    """Verify login form input. Raises AdminConfigurationError if unconfigured."""
    require_admin_credentials()
    user_ok = hmac.compare_digest(username.encode('utf-8'), settings.ADMIN_USER.encode('utf-8'))
    password_ok = verify_password(password, settings.ADMIN_PASS)
    return user_ok and password_ok


def create_admin_token(username: str) -> str:
    """Create the signed token stored in the admin cookie"""
    now = datetime.now(timezone.utc)
    payload = {
        'sub': username,
        'type': 'admin_session',
        'exp': now + timedelta(days=settings.ADMIN_SESSION_DAYS),
        'iat': now,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_admin_token(token: Optional[str]) -> Optional[str]:
    """Return the admin username for a valid token, None otherwise."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    if payload.get('type') != 'admin_session':
        return None
    # Renaming ADMIN_USER invalidates every issued cookie.
    if payload.get('sub') != settings.ADMIN_USER:
        return None
    return payload['sub']


def is_admin_request(request: HttpRequest) -> bool:
    token = request.COOKIES.get(settings.ADMIN_COOKIE_NAME)
    return decode_admin_token(token) is not None
