"""Project-level middleware."""

import logging
from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect, JsonResponse

from authentication.admin_auth import admin_credentials_configured, is_admin_request

logger = logging.getLogger(__name__)


class AdminGateMiddleware:
    """Require the signed admin cookie on every admin page and admin API path."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.protected_prefixes = tuple(getattr(settings, 'ADMIN_PROTECTED_PREFIXES', ['/admin', '/api/admin']))
        self.exempt_prefixes = tuple(getattr(settings, 'ADMIN_EXEMPT_PREFIXES', ['/admin/login', '/api/admin/login']))
        self.login_url = getattr(settings, 'ADMIN_LOGIN_URL', '/admin/login/')

    def __call__(self, request: HttpRequest) -> HttpResponse:
        path = request.path_info or '/'
        if not self._is_protected(path) or path.startswith(self.exempt_prefixes):
            return self.get_response(request)

        if not admin_credentials_configured():
            logger.error("Admin path %s requested but ADMIN_USER / ADMIN_PASS are not set", path)
            return self._error(request, 'Missing ADMIN_USER / ADMIN_PASS', status=500)

        if is_admin_request(request):
            return self.get_response(request)
        return self._unauthorized_response(request)

    def _is_protected(self, path: str) -> bool:
        return any(path == prefix or path.startswith(f'{prefix}/') for prefix in self.protected_prefixes)

    def _unauthorized_response(self, request: HttpRequest) -> HttpResponse:
        if request.path_info.startswith('/api/'):
            return self._error(request, 'Authentication required', status=401)
        query = urlencode({'next': request.get_full_path()})
        return HttpResponseRedirect(f'{self.login_url}?{query}')

    def _error(self, request: HttpRequest, message: str, status: int) -> HttpResponse:
        if request.path_info.startswith('/api/'):
            return JsonResponse({'ok': False, 'error': message}, status=status)
        return HttpResponse(message, status=status, content_type='text/plain; charset=utf-8')
