from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Protocol, Sequence

from ..core.exceptions import CaptureError, CaptureUnavailableError
from .session import ScanResult, ScanSession

logger = logging.getLogger(__name__)


class CaptureSource(Protocol):
    name: str

    def start(self) -> None:
        """Open the device; raise CaptureError when it cannot be used."""
        raise NotImplementedError

    def read_codes(self) -> Iterator[str]:
        """Decoded QR payloads, on the source's own schedule."""
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError


def open_first_available(sources: Sequence[CaptureSource]) -> CaptureSource:
    """Start the first source that works (rear camera first, then front)."""
    for source in sources:
        try:
            source.start()
        except CaptureError as e:
            logger.info("Capture source %s failed to start, trying the next one: %s", source.name, e)
            continue
        logger.info("Capture started with %s", source.name)
        return source
    raise CaptureUnavailableError("Câmera não disponível")


def pump_codes(
    session: ScanSession,
    codes: Iterable[str],
    *,
    on_result: Optional[Callable[[ScanResult], None]] = None,
) -> int:
    """Deliver each decoded payload to the session; returns handled deliveries."""
    handled = 0
    for code in codes:
        result = session.deliver(code)
        if result is None:
            continue
        handled += 1
        if on_result:
            on_result(result)
    return handled


def run_scanner(
    session: ScanSession,
    sources: Sequence[CaptureSource],
    *,
    on_result: Optional[Callable[[ScanResult], None]] = None,
) -> int:
    source = open_first_available(sources)
    try:
        return pump_codes(session, source.read_codes(), on_result=on_result)
    finally:
        source.stop()
