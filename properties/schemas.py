from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from ninja import Schema
from pydantic import StringConstraints, TypeAdapter

from properties.models import PropertyStatus
from services.validation import OptionalEmailAddress, ValidationResult, validate_json_body


NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class PropertyCreateSchema(Schema):
    """Schema for registering a property. The code is assigned server-side."""
    building_name: NonBlankStr
    address: NonBlankStr
    view_method: NonBlankStr
    status: PropertyStatus = PropertyStatus.AVAILABLE
    manager_name: Annotated[str, StringConstraints(strip_whitespace=True)] = ""
    manager_email: OptionalEmailAddress = ""


property_create_adapter = TypeAdapter(PropertyCreateSchema)


def validate_property_create(body: bytes) -> ValidationResult:
    return validate_json_body(property_create_adapter, body)


class PropertyResponseSchema(Schema):
    """Schema for property response"""
    id: UUID
    property_code: str
    building_name: str
    address: str
    view_method: str
    status: str
    manager_name: str
    manager_email: str
    form_url: Optional[str] = None
    created_at: datetime


class PublicPropertySchema(Schema):
    """Fields shown on the public inquiry form"""
    id: UUID
    property_code: str
    building_name: str
    address: str
    view_method: str
    status: str


class PropertyCreateResponseSchema(Schema):
    ok: bool = True
    property: PropertyResponseSchema
    formUrl: str
    partial: bool = False
    warning: Optional[str] = None


class PropertyListResponseSchema(Schema):
    ok: bool = True
    properties: List[PropertyResponseSchema]


class PropertyDetailResponseSchema(Schema):
    ok: bool = True
    property: PropertyResponseSchema


class PublicPropertyResponseSchema(Schema):
    ok: bool = True
    property: PublicPropertySchema


class StatusUpdateSchema(Schema):
    property_id: UUID
    status: PropertyStatus


class BulkDeleteSchema(Schema):
    property_ids: List[UUID]


class DeletedCountsSchema(Schema):
    inquiries: int
    properties: int


class BulkDeleteResponseSchema(Schema):
    ok: bool = True
    deleted: DeletedCountsSchema
