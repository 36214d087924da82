"""
URL configuration for config project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.shortcuts import render
from django.urls import path
from ninja import NinjaAPI
from ninja.errors import ValidationError

from authentication.api import router as auth_router
from authentication.views import admin_login_view
from inquiries.api import admin_router as inquiries_admin_router
from inquiries.api import public_router as inquiries_router
from inquiries.views import inquiry_form_view
from properties.api import admin_router as properties_admin_router
from properties.api import public_router as properties_router
from properties.views import admin_console_view
from services.validation import summarize_errors
from uploads.api import router as uploads_router

# Create NinjaAPI instance
api = NinjaAPI(
    title="Property Inquiry API",
    description="Property registration, QR inquiry links and inquiry relay",
    version="1.0.0",
    urls_namespace="api",
)

# Register API routers. Everything under /api/admin/ is gated by AdminGateMiddleware.
api.add_router("/admin", auth_router, tags=["Authentication"])
api.add_router("/admin", properties_admin_router, tags=["Admin: properties"])
api.add_router("/admin", inquiries_admin_router, tags=["Admin: inquiries"])
api.add_router("/", properties_router, tags=["Properties"])
api.add_router("/", inquiries_router, tags=["Inquiries"])
api.add_router("/", uploads_router, tags=["Uploads"])


@api.exception_handler(ValidationError)
def validation_error_handler(request, exc):
    """Report schema errors as 400 with the same body as hand-validated endpoints"""
    result = summarize_errors(exc.errors)
    return api.create_response(request, result.as_error_body(), status=400)


def index_view(request):
    """Landing page"""
    return render(request, 'index.html')


urlpatterns = [
    path('api/', api.urls),
    path('', index_view, name='index'),
    path('admin/', admin_console_view, name='admin_console'),
    path('admin/login/', admin_login_view, name='admin_login'),
    path('inquiry', inquiry_form_view),
    path('inquiry/', inquiry_form_view, name='inquiry_form'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
