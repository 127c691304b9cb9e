from __future__ import annotations

import logging
from typing import Iterator, Optional

import cv2

from ..core.exceptions import CaptureError
from .decoder import decode_payloads

logger = logging.getLogger(__name__)


class OpenCVCaptureSource:
    """Camera capture through OpenCV; each frame is decoded with pyzbar.

    Note: Desktop cameras have no facing mode, so "rear" and "front" are plain
    device indices chosen in settings.
    """

    def __init__(self, name: str, device_index: int, *, max_failed_reads: int = 30):
        self.name = name
        self._device_index = int(device_index)
        self._max_failed_reads = int(max_failed_reads)
        self._capture: Optional["cv2.VideoCapture"] = None
        self._stopped = False

    def start(self) -> None:
        capture = cv2.VideoCapture(self._device_index)
        if not capture.isOpened():
            capture.release()
            raise CaptureError(f"camera {self._device_index} could not be opened")
        self._capture = capture
        self._stopped = False

    def read_codes(self) -> Iterator[str]:
        if self._capture is None:
            raise CaptureError("capture not started")

        failed_reads = 0
        while not self._stopped:
            ok, frame = self._capture.read()
            if not ok:
                failed_reads += 1
                if failed_reads >= self._max_failed_reads:
                    logger.warning("Camera %s stopped delivering frames", self.name)
                    return
                continue
            failed_reads = 0
            gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
            yield from decode_payloads(gray)

    def stop(self) -> None:
        self._stopped = True
        if self._capture is not None:
            self._capture.release()
            self._capture = None
