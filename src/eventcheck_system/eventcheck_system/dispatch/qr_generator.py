from __future__ import annotations

import io
from typing import Protocol

import qrcode
from PIL import Image

from ..core.constants import QR_IMAGE_SIZE


class ImageGenerator(Protocol):
    def generate(self, data: str, size: int = QR_IMAGE_SIZE) -> bytes:
        raise NotImplementedError


class QRCodeImageGenerator(ImageGenerator):
    """Render text as a square PNG QR code of `size` x `size` pixels."""

    def __init__(self, *, box_size: int = 10, border: int = 2):
        self._box_size = box_size
        self._border = border

    def generate(self, data: str, size: int = QR_IMAGE_SIZE) -> bytes:
        size = size or QR_IMAGE_SIZE

        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        raw = io.BytesIO()
        img.save(raw, format="PNG")
        raw.seek(0)

        # NEAREST keeps module edges sharp so scanners read the resized code.
        with Image.open(raw) as rendered:
            resized = rendered.convert("1").resize((size, size), Image.NEAREST)

        buf = io.BytesIO()
        resized.save(buf, format="PNG")
        return buf.getvalue()
