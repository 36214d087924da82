import uuid

from django.db import models
from django.utils import timezone


class PropertyStatus(models.TextChoices):
    AVAILABLE = "available", "募集中"
    PENDING = "pending", "申込有り"
    SOLD = "sold", "成約"
    RENTED = "rented", "賃貸中"


class Property(models.Model):
    """A rental/sale listing managed from the admin console."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property_code = models.CharField(max_length=20, unique=True)
    building_name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    view_method = models.CharField(max_length=255)
    status = models.CharField(
        max_length=16,
        choices=PropertyStatus.choices,
        default=PropertyStatus.AVAILABLE,
    )
    manager_name = models.CharField(max_length=255, blank=True, default="")
    manager_email = models.EmailField(blank=True, default="")
    form_url = models.URLField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "properties"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.property_code} - {self.building_name}"
