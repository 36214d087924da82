from django.conf import settings
from django.shortcuts import render


def inquiry_form_view(request):
    """Public inquiry form reached from a property's QR code"""
    context = {
        'property_id': request.GET.get('property_id', ''),
        'via': request.GET.get('via', ''),
        'max_upload_mb': settings.UPLOAD_CLIENT_MAX_MB,
        'viewing_start_hour': settings.VIEWING_START_HOUR,
        'viewing_end_hour': settings.VIEWING_END_HOUR,
        'viewing_slot_minutes': settings.VIEWING_SLOT_MINUTES,
    }
    return render(request, 'inquiry/form.html', context)
