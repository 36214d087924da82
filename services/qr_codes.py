import logging
from io import BytesIO

import qrcode


logger = logging.getLogger(__name__)


def render_qr_png(data: str, box_size: int = 8, border: int = 4) -> bytes:
    """
    Render ``data`` as a PNG QR code.

    Args:
        data: Text to encode, normally a property's inquiry form URL
        box_size: Pixel size of each module
        border: Quiet-zone width in modules

    Returns:
        PNG image bytes
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    img_io = BytesIO()
    img.save(img_io, "PNG")
    logger.debug("Generated QR code for %s", data)
    return img_io.getvalue()
