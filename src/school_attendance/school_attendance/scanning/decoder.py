from __future__ import annotations

import io
from typing import Any

from PIL import Image, UnidentifiedImageError
from pyzbar.pyzbar import ZBarSymbol
from pyzbar.pyzbar import decode as pyzbar_decode

from ..core.exceptions import DecodeError


def decode_payloads(image: Any) -> list[str]:
    """QR payloads found in a PIL image or a grayscale numpy frame."""
    results = pyzbar_decode(image, symbols=[ZBarSymbol.QRCODE])
    return [r.data.decode("utf-8", errors="replace") for r in results]


def decode_image(data: bytes) -> list[str]:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise DecodeError("Imagem inválida") from e
    return decode_payloads(image.convert("L"))
