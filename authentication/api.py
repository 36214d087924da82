import logging

from django.conf import settings
from django.http import HttpResponse
from ninja import Router, Schema

from .admin_auth import (
    AdminConfigurationError,
    create_admin_token,
    verify_admin_credentials,
)

logger = logging.getLogger(__name__)

router = Router()


class LoginSchema(Schema):
    username: str
    password: str


class OkResponse(Schema):
    ok: bool = True


class ErrorResponse(Schema):
    ok: bool = False
    error: str


@router.post("/login", response={200: OkResponse, 401: ErrorResponse, 500: ErrorResponse}, auth=None)
def login(request, data: LoginSchema, response: HttpResponse):
    """Check admin credentials and set the admin cookie"""
    try:
        valid = verify_admin_credentials(data.username, data.password)
    except AdminConfigurationError as e:
        logger.error("Admin login attempted without configured credentials")
        return 500, {"ok": False, "error": str(e)}

    if not valid:
        logger.warning("Failed admin login for %r", data.username)
        return 401, {"ok": False, "error": "Invalid username or password"}

    response.set_cookie(
        settings.ADMIN_COOKIE_NAME,
        create_admin_token(settings.ADMIN_USER),
        max_age=60 * 60 * 24 * settings.ADMIN_SESSION_DAYS,
        path="/",
        httponly=True,
        secure=not settings.DEBUG,
        samesite="Lax",
    )
    logger.info("Admin %s logged in", data.username)
    return {"ok": True}


@router.post("/logout", response={200: OkResponse})
def logout(request, response: HttpResponse):
    """Drop the admin cookie"""
    response.delete_cookie(settings.ADMIN_COOKIE_NAME, path="/", samesite="Lax")
    return {"ok": True}
