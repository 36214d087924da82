import logging
import re
import time

from django.conf import settings
from django.core.files.storage import default_storage
from ninja import Router, Schema


logger = logging.getLogger(__name__)

router = Router()

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.\-]+")


class UploadResponse(Schema):
    ok: bool = True
    url: str
    path: str


def safe_file_name(name: str) -> str:
    """Replace every run of characters outside [A-Za-z0-9_.-] with '_'."""
    return _UNSAFE_NAME_CHARS.sub("_", name or "file")


def upload_path(name: str) -> str:
    return f"{settings.UPLOAD_DIRECTORY}/{int(time.time() * 1000)}_{safe_file_name(name)}"


def validate_upload(file):
    """Return an error message for a rejected upload, None when acceptable."""
    if file is None:
        return "file required"
    if file.content_type not in settings.UPLOAD_ALLOWED_CONTENT_TYPES:
        return "Only PDF/JPG/PNG"
    if file.size > settings.UPLOAD_MAX_BYTES:
        max_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        return f"File too large (max {max_mb}MB)"
    return None


@router.post("/upload", response={201: UploadResponse, 400: dict, 502: dict})
def upload_file(request):
    """
    Store a business card or purchase document and return its public URL

    Accepts multipart field ``file``: PDF, JPEG or PNG up to 10MB.
    """
    file = request.FILES.get("file")
    error = validate_upload(file)
    if error:
        logger.info("Upload rejected: %s", error)
        return 400, {"ok": False, "error": error}

    try:
        stored_path = default_storage.save(upload_path(file.name), file)
        url = default_storage.url(stored_path)
    except Exception as e:
        logger.error(f"Error storing upload {file.name}: {e}", exc_info=True)
        return 502, {"ok": False, "error": str(e)}

    if url.startswith("/"):
        url = request.build_absolute_uri(url)

    logger.info("Stored upload %s (%s bytes)", stored_path, file.size)
    return 201, {"ok": True, "url": url, "path": stored_path}
