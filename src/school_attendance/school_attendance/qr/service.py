from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage

from ..core.constants import DEFAULT_QR_BORDER, DEFAULT_QR_BOX_SIZE
from ..roster.model import Student

logger = logging.getLogger(__name__)

_UNSAFE_FILE_CHARS = re.compile(r"[\s/\\]+")


@dataclass(frozen=True)
class StudentQRCode:
    """Rendered check-in code for one student; `ok` is False when rendering failed."""

    student_id: str
    student_name: str
    filename: str
    png: Optional[bytes]
    ok: bool
    error: Optional[str] = None


def qr_filename(student_name: str) -> str:
    return _UNSAFE_FILE_CHARS.sub("_", student_name) + ".png"


class QRCodeService:
    """Renders the raw student id into a PNG with high error correction."""

    def __init__(self, *, box_size: int = DEFAULT_QR_BOX_SIZE, border: int = DEFAULT_QR_BORDER):
        self._box_size = int(box_size)
        self._border = int(border)

    def _render_png(self, payload: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_H,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(image_factory=PilImage, fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def render_student_qr(self, student: Student) -> StudentQRCode:
        filename = qr_filename(student.name)
        try:
            png = self._render_png(student.id)
        except (DataOverflowError, ValueError, OSError) as e:
            logger.error("Failed to generate QR code for %s: %s", student.name, e)
            return StudentQRCode(student.id, student.name, filename, None, ok=False, error=str(e))
        return StudentQRCode(student.id, student.name, filename, png, ok=True)

    def render_students(self, students: Iterable[Student]) -> list[StudentQRCode]:
        return [self.render_student_qr(s) for s in students]
