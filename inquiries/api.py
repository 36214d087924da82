import logging

from django.db import DatabaseError
from django.http import HttpResponse
from django.utils import timezone
from django.utils.cache import add_never_cache_headers
from ninja import Router

from inquiries.models import Inquiry
from inquiries.schemas import (
    InquiryHistoryResponseSchema,
    InquiryHistorySchema,
    InquirySubmitResponseSchema,
    ViewingInquiry,
    validate_inquiry,
)
from properties.models import Property
from services.mailer import mail_configured
from services.notifications import notify_inquiry
from services.validation import parse_uuid


logger = logging.getLogger(__name__)

public_router = Router()
admin_router = Router()


@public_router.post(
    "/inquiry",
    response={201: InquirySubmitResponseSchema, 400: dict, 404: dict, 500: dict, 502: dict},
)
def submit_inquiry(request):
    """
    Save a prospect's inquiry and relay it

    Steps:
    1. Validate the body (type-specific required fields)
    2. Load the property
    3. Save the inquiry with a snapshot of the property's status
    4. Notify chat, the manager and the customer; failures there only
       produce a warning, the inquiry stays saved
    """
    if not mail_configured():
        logger.error("Inquiry rejected: no mail provider configured")
        return 500, {
            "ok": False,
            "error": "Missing mail provider configuration (RESEND_API_KEY or GMAIL_OAUTH_*)",
        }

    result = validate_inquiry(request.body)
    if not result.ok:
        return 400, result.as_error_body()
    data = result.value

    prop = Property.objects.filter(pk=data.property_id).first()
    if prop is None:
        return 404, {"ok": False, "error": "Property not found"}

    try:
        inquiry = Inquiry.objects.create(
            property=prop,
            inquiry_type=data.inquiry_type,
            via=data.via,
            company_name=data.company_name,
            company_phone=data.company_phone,
            person_name=data.person_name,
            person_mobile=data.person_mobile,
            person_gmail=data.person_gmail,
            visit_datetime=data.visit_datetime if isinstance(data, ViewingInquiry) else None,
            purchase_file_url=data.purchase_file_url,
            business_card_url=data.business_card_url,
            other_text=data.other_text,
            status_at_submit=prop.status,
            created_at=timezone.now(),
        )
    except DatabaseError as e:
        logger.error(f"Error saving inquiry for {prop.property_code}: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    logger.info("Saved %s inquiry %s for %s", inquiry.inquiry_type, inquiry.id, prop.property_code)

    report = notify_inquiry(prop, inquiry)
    return 201, {
        "ok": True,
        "inquiry_id": inquiry.id,
        "notify": report.results,
        "notify_errors": report.errors,
        "warning": report.warning,
    }


@admin_router.get(
    "/inquiries",
    response={200: InquiryHistoryResponseSchema, 400: dict, 502: dict},
)
def list_property_inquiries(request, response: HttpResponse, property_id: str = None):
    """Inquiry history of one property, newest first"""
    add_never_cache_headers(response)
    pid = parse_uuid(property_id)
    if pid is None:
        return 400, {"ok": False, "error": "property_id required"}

    try:
        inquiries = list(Inquiry.objects.filter(property_id=pid).order_by("-created_at"))
    except DatabaseError as e:
        logger.error(f"Error loading inquiries: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    return {
        "ok": True,
        "inquiries": [InquiryHistorySchema.from_orm(i) for i in inquiries],
    }
