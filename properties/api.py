import logging

from django.db import DatabaseError
from django.http import HttpResponse
from django.utils.cache import add_never_cache_headers
from ninja import Router

from properties.models import Property
from properties.schemas import (
    BulkDeleteResponseSchema,
    BulkDeleteSchema,
    PropertyCreateResponseSchema,
    PropertyDetailResponseSchema,
    PropertyListResponseSchema,
    PropertyResponseSchema,
    PublicPropertyResponseSchema,
    PublicPropertySchema,
    StatusUpdateSchema,
    validate_property_create,
)
from services.property_service import (
    create_property,
    delete_properties,
    site_origin,
    update_status,
)
from services.qr_codes import render_qr_png
from services.validation import parse_uuid


logger = logging.getLogger(__name__)

# Mounted under /api/admin and gated by AdminGateMiddleware.
admin_router = Router()
# Mounted under /api; open to prospects.
public_router = Router()


@admin_router.post(
    "/property",
    response={201: PropertyCreateResponseSchema, 400: dict, 502: dict},
)
def create_property_view(request):
    """
    Register a property and generate its inquiry form link

    The property code is assigned from the highest existing code. The form
    link is written in a second step; if that step fails the property still
    exists and the response carries ``partial`` and a ``warning``.
    """
    result = validate_property_create(request.body)
    if not result.ok:
        return 400, result.as_error_body()

    try:
        outcome = create_property(result.value, site_origin(request))
    except DatabaseError as e:
        logger.error(f"Error creating property: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    return 201, {
        "ok": True,
        "property": PropertyResponseSchema.from_orm(outcome.prop),
        "formUrl": outcome.form_url,
        "partial": outcome.partial,
        "warning": outcome.warning,
    }


@admin_router.get("/properties", response={200: PropertyListResponseSchema, 502: dict})
def list_properties(request, response: HttpResponse):
    """List every property, newest first"""
    add_never_cache_headers(response)
    try:
        properties = list(Property.objects.order_by("-created_at"))
    except DatabaseError as e:
        logger.error(f"Error listing properties: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    return {
        "ok": True,
        "properties": [PropertyResponseSchema.from_orm(p) for p in properties],
    }


@admin_router.delete("/properties", response={200: BulkDeleteResponseSchema, 400: dict, 502: dict})
def delete_properties_view(request, data: BulkDeleteSchema):
    """Delete the selected properties together with their inquiries"""
    if not data.property_ids:
        return 400, {"ok": False, "error": "property_ids required"}

    try:
        inquiries_deleted, properties_deleted = delete_properties(data.property_ids)
    except DatabaseError as e:
        logger.error(f"Error deleting properties: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    return {
        "ok": True,
        "deleted": {"inquiries": inquiries_deleted, "properties": properties_deleted},
    }


@admin_router.post("/status", response={200: PropertyDetailResponseSchema, 404: dict, 502: dict})
def update_status_view(request, data: StatusUpdateSchema):
    """Change a property's status; unknown status values are rejected with 400"""
    try:
        prop = update_status(data.property_id, data.status.value)
    except DatabaseError as e:
        logger.error(f"Error updating status: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    if prop is None:
        return 404, {"ok": False, "error": "Property not found"}

    logger.info("Property %s status -> %s", prop.property_code, prop.status)
    return {"ok": True, "property": PropertyResponseSchema.from_orm(prop)}


@admin_router.get("/qrcode", response={400: dict, 404: dict})
def property_qrcode(request, property_id: str = None):
    """PNG QR code of a property's stored inquiry form link"""
    pid = parse_uuid(property_id)
    if pid is None:
        return 400, {"ok": False, "error": "property_id required"}

    prop = Property.objects.filter(pk=pid).first()
    if prop is None:
        return 404, {"ok": False, "error": "Property not found"}
    if not prop.form_url:
        return 404, {"ok": False, "error": "Form URL has not been saved for this property"}

    response = HttpResponse(render_qr_png(prop.form_url), content_type="image/png")
    response["Content-Disposition"] = f'inline; filename="{prop.property_code}.png"'
    return response


@public_router.get("/property", response={200: PublicPropertyResponseSchema, 400: dict, 404: dict})
def get_public_property(request, property_id: str = None):
    """Public lookup used by the inquiry form. Manager details are not exposed."""
    pid = parse_uuid(property_id)
    if pid is None:
        return 400, {"ok": False, "error": "property_id required"}

    prop = Property.objects.filter(pk=pid).first()
    if prop is None:
        return 404, {"ok": False, "error": "Property not found"}

    return {"ok": True, "property": PublicPropertySchema.from_orm(prop)}
