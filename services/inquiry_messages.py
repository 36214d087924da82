"""
Plain-text renderings of a saved inquiry.

The internal message goes to the chat webhook and the property's manager;
the confirmation goes to the person who submitted the inquiry and leaves out
internal manager details.
"""
from dataclasses import dataclass
from typing import Optional

from django.utils import timezone

from inquiries.models import Inquiry, InquiryType
from properties.models import Property, PropertyStatus


@dataclass
class RenderedMessage:
    subject: str
    text: str


def format_visit_datetime(value) -> str:
    if not value:
        return "-"
    return timezone.localtime(value).strftime("%Y/%m/%d %H:%M")


def _label(choices, value: Optional[str]) -> str:
    if not value:
        return "-"
    try:
        return f"{choices(value).label} ({value})"
    except ValueError:
        return value


def _or_dash(value: Optional[str]) -> str:
    return value if value else "-"


def build_internal_message(prop: Property, inquiry: Inquiry) -> RenderedMessage:
    lines = [
        "【物件お問い合わせ】",
        f"物件: {prop.property_code} / {prop.building_name}",
        f"住所: {prop.address}",
        f"ステータス: {_label(PropertyStatus, inquiry.status_at_submit)}",
        "",
        f"種別: {_label(InquiryType, inquiry.inquiry_type)}",
    ]
    if inquiry.inquiry_type == InquiryType.VIEWING:
        lines.append(f"内見方法: {_or_dash(prop.view_method)}")
        lines.append(f"内見日時: {format_visit_datetime(inquiry.visit_datetime)}")
    if inquiry.inquiry_type == InquiryType.PURCHASE:
        lines.append(f"購入資料: {_or_dash(inquiry.purchase_file_url)}")
    lines += [
        f"名刺: {_or_dash(inquiry.business_card_url)}",
        f"その他: {_or_dash(inquiry.other_text)}",
        "",
        f"会社名: {inquiry.company_name}",
        f"会社TEL: {inquiry.company_phone}",
        f"担当者名: {inquiry.person_name}",
        f"携帯: {inquiry.person_mobile}",
        f"Gmail: {inquiry.person_gmail}",
        "",
        f"物件担当: {_or_dash(prop.manager_name)} <{prop.manager_email or '担当者メール未登録'}>",
    ]
    if inquiry.via:
        lines.append(f"経由: {inquiry.via}")

    status = inquiry.status_at_submit or "-"
    subject = f"【Inquiry】{prop.property_code} {prop.building_name} ({status})"
    return RenderedMessage(subject=subject, text="\n".join(lines) + "\n")


def build_customer_message(prop: Property, inquiry: Inquiry) -> RenderedMessage:
    lines = [
        f"{inquiry.person_name} 様",
        "",
        "お問い合わせありがとうございます。以下の内容で受付が完了しました。",
        "",
        f"物件: {prop.property_code} {prop.building_name}",
        f"住所: {prop.address}",
        f"種別: {_label(InquiryType, inquiry.inquiry_type)}",
    ]
    if inquiry.inquiry_type == InquiryType.VIEWING:
        lines.append(f"内見日時: {format_visit_datetime(inquiry.visit_datetime)}")
        lines.append(f"内見方法: {_or_dash(prop.view_method)}")
    if inquiry.inquiry_type == InquiryType.PURCHASE:
        lines.append(f"購入資料: {_or_dash(inquiry.purchase_file_url)}")
    if inquiry.other_text:
        lines.append(f"その他: {inquiry.other_text}")
    lines += [
        "",
        "担当者より追ってご連絡いたします。",
    ]

    subject = f"受付完了：{prop.property_code} {prop.building_name}"
    return RenderedMessage(subject=subject, text="\n".join(lines) + "\n")
