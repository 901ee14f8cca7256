from __future__ import annotations

from io import BytesIO

import qrcode
from PIL import Image


def generate_payment_qr(url: str, *, size: int = 400, border: int = 2) -> bytes:
    """Render a payment redirect URL as a square PNG QR code.

    - Only absolute http(s) URLs are accepted.
    - Output is scaled (nearest) to exactly `size` x `size` pixels.
    """
    if not isinstance(url, str) or not url.startswith(("https://", "http://")):
        raise ValueError("url must be an absolute http(s) URL")

    qr = qrcode.QRCode(box_size=10, border=max(0, int(border)))
    qr.add_data(url)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    if getattr(img, "size", None) != (size, size):
        img = img.resize((size, size), Image.NEAREST)

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


__all__ = ["generate_payment_qr"]
