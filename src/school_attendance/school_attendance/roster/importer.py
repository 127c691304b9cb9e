from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_roster(text: str) -> list[str]:
    """One trimmed name per non-blank line; any line-ending convention."""
    names = []
    for line in _LINE_BREAK.split(text or ""):
        name = line.strip()
        if name:
            names.append(name)
    return names


def decode_roster_bytes(data: bytes) -> str:
    """Uploaded roster files are UTF-8; a leading BOM is dropped."""
    return data.decode("utf-8-sig", errors="replace")
