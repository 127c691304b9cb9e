from __future__ import annotations

from typing import Optional

import pytest

from src.school_attendance.school_attendance.roster.repository import SchoolRepository


class SequentialIds:
    def __init__(self, prefix: str = "id"):
        self._prefix = prefix
        self._n = 0

    def new_id(self) -> str:
        self._n += 1
        return f"{self._prefix}-{self._n}"


class InMemoryBridge:
    def __init__(self, text: Optional[str] = None):
        self.text = text
        self.saves = 0

    def load(self) -> Optional[str]:
        return self.text

    def save(self, text: str) -> None:
        self.text = text
        self.saves += 1


@pytest.fixture
def bridge() -> InMemoryBridge:
    return InMemoryBridge()


@pytest.fixture
def repo(bridge) -> SchoolRepository:
    return SchoolRepository(bridge, ids=SequentialIds())
