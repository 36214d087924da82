"""
Shared validation helpers.

Request payloads are checked with pydantic type adapters and the outcome is
returned as a ValidationResult instead of an exception, so API handlers only
branch on ``result.ok``.
"""
import json
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Iterable, List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from pydantic import AfterValidator, BeforeValidator, TypeAdapter, ValidationError


INVALID_EMAIL = "invalid_email"
INVALID_INPUT = "invalid_input"

EMAIL_FIELDS = {"person_gmail", "manager_email"}


@dataclass
class ValidationResult:
    ok: bool
    value: Any = None
    kind: Optional[str] = None
    message: str = ""
    errors: List[Dict[str, str]] = field(default_factory=list)

    def as_error_body(self) -> Dict[str, Any]:
        return {
            "ok": False,
            "code": self.kind,
            "error": self.message,
            "errors": self.errors,
        }


def _check_email(value: str) -> str:
    try:
        validate_email(value)
    except DjangoValidationError:
        raise ValueError("Invalid email")
    return value


def _check_optional_email(value: str) -> str:
    return _check_email(value) if value else value


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def required_text(message: str) -> BeforeValidator:
    """Non-blank string whose absence is reported with a fixed message."""

    def check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(message)
        return _strip(value)

    return BeforeValidator(check)


EmailAddress = Annotated[str, BeforeValidator(_strip), AfterValidator(_check_email)]
OptionalEmailAddress = Annotated[str, BeforeValidator(_strip), AfterValidator(_check_optional_email)]


def _error_field(error: Dict[str, Any]) -> str:
    names = [part for part in error.get("loc", ()) if isinstance(part, str)]
    if names:
        return names[-1]
    if error.get("type", "").startswith("union_tag"):
        return "inquiry_type"
    return "body"


def _error_message(error: Dict[str, Any], field_name: str) -> str:
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        message = str(ctx["error"])
    else:
        message = error.get("msg", "Invalid value")
    if field_name in message:
        return message
    return f"{field_name}: {message}"


def summarize_errors(raw_errors: Iterable[Dict[str, Any]]) -> ValidationResult:
    """Turn pydantic/ninja error dicts into a failed ValidationResult."""
    errors = []
    kind = INVALID_INPUT
    for error in raw_errors:
        field_name = _error_field(error)
        if field_name in EMAIL_FIELDS and error.get("type") == "value_error":
            kind = INVALID_EMAIL
            message = f"Invalid email format ({field_name})"
        else:
            message = _error_message(error, field_name)
        errors.append({"field": field_name, "message": message})

    if kind == INVALID_EMAIL:
        headline = next(e["message"] for e in errors if e["field"] in EMAIL_FIELDS)
    elif errors:
        headline = errors[0]["message"]
    else:
        headline = "Invalid input"
    return ValidationResult(ok=False, kind=kind, message=headline, errors=errors)


def validate_payload(adapter: TypeAdapter, payload: Any) -> ValidationResult:
    try:
        value = adapter.validate_python(payload)
    except ValidationError as exc:
        return summarize_errors(exc.errors())
    return ValidationResult(ok=True, value=value)


def validate_json_body(adapter: TypeAdapter, body: bytes) -> ValidationResult:
    """Decode a raw request body and validate it."""
    try:
        payload = json.loads(body or b"null")
    except (ValueError, UnicodeDecodeError):
        payload = None
    if not isinstance(payload, dict):
        return ValidationResult(
            ok=False,
            kind=INVALID_INPUT,
            message="Request body must be a JSON object",
            errors=[{"field": "body", "message": "Request body must be a JSON object"}],
        )
    return validate_payload(adapter, payload)


def parse_uuid(raw: Optional[str]) -> Optional[UUID]:
    """Parse an identifier from a query string; None when absent or malformed."""
    if not raw:
        return None
    try:
        return UUID(str(raw).strip())
    except ValueError:
        return None
