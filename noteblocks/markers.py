"""
Reference grammar for attachment markers embedded in flat note text.

A marker has the form ``[File: <name>](<attachment-id>)`` or
``[Link: <name>](<attachment-id>)``. The name is cosmetic; resolution always
uses the id.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

FILE_LABEL = "File"
LINK_LABEL = "Link"

MARKER_RE = re.compile(r"\[(File|Link): ([^\]]*)\]\((att-[^)]+)\)")


@dataclass(frozen=True)
class Marker:
    label: str
    name: str
    attachment_id: str


def find_markers(text: str) -> Iterator[re.Match]:
    """Yield every marker match in ``text``, left to right."""
    return MARKER_RE.finditer(text)


def parse_marker(text: str) -> Optional[Marker]:
    """Return the marker if ``text`` is exactly one marker, else None."""
    m = MARKER_RE.fullmatch(text)
    if m is None:
        return None
    return Marker(label=m.group(1), name=m.group(2), attachment_id=m.group(3))


def format_marker(name: str, attachment_id: str, label: str = FILE_LABEL) -> str:
    # "]" would terminate the name early and the marker would no longer parse
    safe = (name or "").replace("]", "")
    return f"[{label}: {safe}]({attachment_id})"
