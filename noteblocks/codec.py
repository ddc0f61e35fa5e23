"""
Flat-text codec: note ``content`` string <-> ordered segment list.

``decode`` splits on markers keeping them, so segment boundaries line up with
marker start/end and every text segment is an exact slice of the input.
``encode`` concatenates the literal text of each segment. For any input,
``encode(decode(text)) == text``.

Attachment ids are not checked against the catalog here; dangling references
are a rendering concern.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .domain import AttachmentRef, Segment, TextSegment
from .markers import find_markers

LOGGER = logging.getLogger(__name__)


def decode(text: Optional[str]) -> List[Segment]:
    text = text or ""
    segments: List[Segment] = []
    pos = 0
    for m in find_markers(text):
        if m.start() > pos:
            segments.append(TextSegment(text[pos : m.start()]))
        segments.append(AttachmentRef(raw_marker=m.group(0), attachment_id=m.group(3)))
        pos = m.end()
    if pos < len(text):
        segments.append(TextSegment(text[pos:]))
    if not segments:
        segments.append(TextSegment(""))
    LOGGER.debug(
        "noteblocks.codec.decode chars=%d segments=%d", len(text), len(segments)
    )
    return segments


def encode(segments: Iterable[Segment]) -> str:
    return "".join(seg.literal for seg in segments)


def referenced_ids(segments: Sequence[Segment]) -> List[str]:
    """Attachment ids referenced by ``segments``, first occurrence order, no repeats."""
    seen = set()
    out: List[str] = []
    for seg in segments:
        if isinstance(seg, AttachmentRef) and seg.attachment_id not in seen:
            seen.add(seg.attachment_id)
            out.append(seg.attachment_id)
    return out


class FlatTextCodec:
    """Class-based interface for the flat-text codec."""

    def decode(self, text: Optional[str]) -> List[Segment]:
        return decode(text)

    def encode(self, segments: Iterable[Segment]) -> str:
        return encode(segments)
