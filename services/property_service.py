"""
Property registration helpers: code assignment, form links, bulk delete.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.http import HttpRequest

from inquiries.models import Inquiry
from properties.models import Property
from properties.schemas import PropertyCreateSchema


logger = logging.getLogger(__name__)

CODE_PREFIX = "P"
CODE_DIGITS = 4
CODE_ASSIGN_ATTEMPTS = 3

_DIGIT_RUN = re.compile(r"\d+")


def code_number(code: str) -> Optional[int]:
    """Return the last run of digits in a property code, if any."""
    runs = _DIGIT_RUN.findall(code or "")
    return int(runs[-1]) if runs else None


def next_property_code(existing_codes: Iterable[str]) -> str:
    """
    Next sequential property code.

    Only the highest numeric suffix currently present counts, so gaps left by
    deleted properties are never refilled below the maximum.
    """
    highest = 0
    for code in existing_codes:
        number = code_number(code)
        if number is not None and number > highest:
            highest = number
    return f"{CODE_PREFIX}{highest + 1:0{CODE_DIGITS}d}"


def site_origin(request: HttpRequest) -> str:
    """
    Public origin for inquiry links.

    SITE_URL wins; otherwise use the proxy's forwarded host, then the request.
    """
    configured = (getattr(settings, "SITE_URL", "") or "").strip()
    if configured:
        return configured.rstrip("/")

    forwarded_host = request.headers.get("X-Forwarded-Host", "").split(",")[0].strip()
    if forwarded_host:
        forwarded_proto = request.headers.get("X-Forwarded-Proto", "").split(",")[0].strip()
        return f"{forwarded_proto or 'https'}://{forwarded_host}"

    return f"{request.scheme}://{request.get_host()}"


def build_form_url(origin: str, property_id) -> str:
    query = urlencode({"property_id": str(property_id), "via": "qrcode"})
    return f"{origin.rstrip('/')}/inquiry?{query}"


@dataclass
class CreateOutcome:
    prop: Property
    form_url: str
    warning: Optional[str] = None

    @property
    def partial(self) -> bool:
        return self.warning is not None


def _insert_property(data: PropertyCreateSchema) -> Property:
    last_error = None
    for _ in range(CODE_ASSIGN_ATTEMPTS):
        code = next_property_code(Property.objects.values_list("property_code", flat=True))
        try:
            with transaction.atomic():
                return Property.objects.create(
                    property_code=code,
                    building_name=data.building_name,
                    address=data.address,
                    view_method=data.view_method,
                    status=data.status.value,
                    manager_name=data.manager_name,
                    manager_email=data.manager_email,
                )
        except IntegrityError as exc:
            # Another request took the same code between read and insert.
            logger.warning("Property code %s already taken, retrying", code)
            last_error = exc
    raise last_error


def save_form_url(prop: Property, form_url: str) -> None:
    Property.objects.filter(pk=prop.pk).update(form_url=form_url)
    prop.form_url = form_url


def create_property(data: PropertyCreateSchema, origin: str) -> CreateOutcome:
    """
    Insert a property, then store its inquiry form link in a second write.

    Raises DatabaseError if the insert fails. A failure of the second write is
    reported through ``CreateOutcome.warning`` and leaves ``form_url`` empty.
    """
    prop = _insert_property(data)
    form_url = build_form_url(origin, prop.id)
    try:
        with transaction.atomic():
            save_form_url(prop, form_url)
    except DatabaseError as e:
        logger.error(f"Property {prop.property_code} created but form_url not saved: {e}")
        prop.form_url = None
        return CreateOutcome(
            prop=prop,
            form_url=form_url,
            warning=f"Created but failed to save form_url: {e}",
        )

    logger.info("Created property %s (%s)", prop.property_code, prop.id)
    return CreateOutcome(prop=prop, form_url=form_url)


def update_status(property_id, status: str) -> Optional[Property]:
    """Set a property's status. The stored form_url is left untouched."""
    updated = Property.objects.filter(pk=property_id).update(status=status)
    if not updated:
        return None
    return Property.objects.get(pk=property_id)


def delete_properties(property_ids) -> Tuple[int, int]:
    """Delete properties and their inquiries, inquiries first. Returns both counts."""
    ids = list(property_ids)
    with transaction.atomic():
        inquiries_deleted, _ = Inquiry.objects.filter(property_id__in=ids).delete()
        properties_deleted, _ = Property.objects.filter(pk__in=ids).delete()
    logger.info("Deleted %s properties and %s inquiries", properties_deleted, inquiries_deleted)
    return inquiries_deleted, properties_deleted
