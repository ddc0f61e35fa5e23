"""
Lookup seam between block content and the attachment catalog.

Blocks and segments only ever hold an attachment id. Anything that needs the
live record (renderer, structured projection) asks an ``AttachmentLookup``.
The lookup never performs I/O.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..models.note import Attachment


class AttachmentLookup(Protocol):
    """Minimal attachment resolver required by the renderer and codecs."""

    def get(self, attachment_id: str) -> Optional[Attachment]: ...
