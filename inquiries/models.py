import uuid

from django.db import models
from django.utils import timezone

from properties.models import Property


class InquiryType(models.TextChoices):
    VIEWING = "viewing", "内見予約"
    PURCHASE = "purchase", "購入相談"
    OTHER = "other", "その他"


class Inquiry(models.Model):
    """A prospect's inquiry about one property. Written once, never updated."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="inquiries")
    inquiry_type = models.CharField(max_length=16, choices=InquiryType.choices)
    via = models.CharField(max_length=64, blank=True, default="")

    company_name = models.CharField(max_length=255)
    company_phone = models.CharField(max_length=64)
    person_name = models.CharField(max_length=255)
    person_mobile = models.CharField(max_length=64)
    person_gmail = models.EmailField()

    visit_datetime = models.DateTimeField(null=True, blank=True)
    purchase_file_url = models.URLField(max_length=1000, blank=True, default="")
    business_card_url = models.URLField(max_length=1000)
    other_text = models.TextField(blank=True, default="")

    status_at_submit = models.CharField(max_length=16, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "inquiries"
        ordering = ["-created_at"]
        verbose_name_plural = "inquiries"

    def __str__(self) -> str:
        return f"{self.property_id} - {self.inquiry_type} - {self.person_name}"
