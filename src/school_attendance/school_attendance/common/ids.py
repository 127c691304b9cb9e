from __future__ import annotations

import uuid
from typing import Protocol


class IdProvider(Protocol):
    def new_id(self) -> str:
        raise NotImplementedError


class UuidIdProvider:
    """Default id source: random uuid4 hex, unique across rapid batch creation."""

    def new_id(self) -> str:
        return uuid.uuid4().hex
