from django.conf import settings
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme

from .admin_auth import is_admin_request


def safe_next_url(request, default: str = '/admin/') -> str:
    """Return ?next= when it points back into this site, else the default."""
    next_url = request.GET.get('next', '')
    if next_url and url_has_allowed_host_and_scheme(
        next_url,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return next_url
    return default


def admin_login_view(request):
    """Admin login page"""
    next_url = safe_next_url(request)
    if is_admin_request(request):
        return redirect(next_url)
    context = {
        'next_url': next_url,
        'credentials_configured': bool(settings.ADMIN_USER and settings.ADMIN_PASS),
    }
    return render(request, 'admin/login.html', context)
