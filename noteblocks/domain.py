# noteblocks/domain.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextSegment:
    """Literal text run, an exact slice of the flat string."""

    content: str

    @property
    def literal(self) -> str:
        return self.content


@dataclass(frozen=True)
class AttachmentRef:
    """Reference to a catalog attachment, holding the marker exactly as written."""

    raw_marker: str
    attachment_id: str

    @property
    def literal(self) -> str:
        return self.raw_marker


Segment = Union[TextSegment, AttachmentRef]
