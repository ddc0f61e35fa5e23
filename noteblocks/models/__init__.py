"""Public exports for note data models."""

from __future__ import annotations

from .blocks import (
    AttachmentBlock,
    Block,
    OutputData,
    ParagraphBlock,
    attachment_block,
    paragraph,
)
from .note import Attachment, AttachmentKind, Note

__all__ = [
    "Attachment",
    "AttachmentBlock",
    "AttachmentKind",
    "Block",
    "Note",
    "OutputData",
    "ParagraphBlock",
    "attachment_block",
    "paragraph",
]
