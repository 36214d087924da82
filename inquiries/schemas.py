from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from uuid import UUID

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from ninja import Schema
from pydantic import BeforeValidator, Field, TypeAdapter

from services.validation import EmailAddress, ValidationResult, required_text, validate_json_body


VISIT_REQUIRED = "visit_datetime required for viewing"
PURCHASE_FILE_REQUIRED = "purchase file required for purchase"


def slot_error_message() -> str:
    return (
        f"visit_datetime must be on a {settings.VIEWING_SLOT_MINUTES}-minute slot between "
        f"{settings.VIEWING_START_HOUR:02d}:00 and {settings.VIEWING_END_HOUR:02d}:00"
    )


def is_viewing_slot(value: datetime) -> bool:
    """True when a local time starts one of the bookable viewing slots."""
    local = timezone.localtime(value) if timezone.is_aware(value) else value
    if local.second or local.microsecond:
        return False
    if local.minute % settings.VIEWING_SLOT_MINUTES:
        return False
    return settings.VIEWING_START_HOUR <= local.hour < settings.VIEWING_END_HOUR


def parse_visit_datetime(value):
    """Parse an ISO-8601 visit time into an aware datetime on a viewing slot."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(VISIT_REQUIRED)

    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_datetime(str(value).strip())
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValueError("visit_datetime is not a valid date-time")

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    if not is_viewing_slot(parsed):
        raise ValueError(slot_error_message())
    return parsed


VisitSlot = Annotated[datetime, BeforeValidator(parse_visit_datetime)]
RequiredText = Annotated[str, required_text("value is required")]


class InquiryBase(Schema):
    """Fields shared by every inquiry type"""
    property_id: UUID
    via: str = ""

    company_name: RequiredText
    company_phone: RequiredText
    person_name: RequiredText
    person_mobile: RequiredText
    person_gmail: EmailAddress

    business_card_url: Annotated[str, required_text("business card file required")]
    purchase_file_url: str = ""
    other_text: str = ""
    visit_datetime: Optional[str] = None


class ViewingInquiry(InquiryBase):
    inquiry_type: Literal["viewing"]
    visit_datetime: VisitSlot = Field(default=None, validate_default=True)


class PurchaseInquiry(InquiryBase):
    inquiry_type: Literal["purchase"]
    purchase_file_url: Annotated[str, required_text(PURCHASE_FILE_REQUIRED)] = Field(default="", validate_default=True)


class OtherInquiry(InquiryBase):
    inquiry_type: Literal["other"]


InquiryPayload = Annotated[
    Union[ViewingInquiry, PurchaseInquiry, OtherInquiry],
    Field(discriminator="inquiry_type"),
]

inquiry_adapter = TypeAdapter(InquiryPayload)


def validate_inquiry(body: bytes) -> ValidationResult:
    return validate_json_body(inquiry_adapter, body)


class InquiryHistorySchema(Schema):
    """Row of a property's inquiry history in the admin console"""
    id: UUID
    inquiry_type: str
    company_name: str
    person_name: str
    person_mobile: str
    person_gmail: str
    visit_datetime: Optional[datetime] = None
    status_at_submit: str
    created_at: datetime


class InquiryHistoryResponseSchema(Schema):
    ok: bool = True
    inquiries: List[InquiryHistorySchema]


class NotifyStatusSchema(Schema):
    chat: bool
    manager_mail: bool
    customer_mail: bool


class InquirySubmitResponseSchema(Schema):
    ok: bool = True
    inquiry_id: UUID
    notify: NotifyStatusSchema
    notify_errors: dict = {}
    warning: Optional[str] = None
