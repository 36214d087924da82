from django.shortcuts import render
from django.views.decorators.cache import never_cache

from inquiries.models import InquiryType
from properties.models import PropertyStatus


@never_cache
def admin_console_view(request):
    """Admin console page (properties, QR links, inquiry history)"""
    context = {
        'statuses': PropertyStatus.choices,
        'inquiry_types': InquiryType.choices,
    }
    return render(request, 'admin/console.html', context)
