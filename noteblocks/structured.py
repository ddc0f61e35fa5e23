"""
Structured-block codec.

Two directions:
  - ``upgrade``: legacy flat content -> structured document. Runs the flat
    codec, turns every non-blank line of a text segment into a paragraph and
    every marker into an attachment block.
  - ``flatten``: structured document -> flat text, used to keep ``Note.content``
    searchable while the structured form is the editing surface. Attachment
    markers are rebuilt from the catalog's current name.

Attachment blocks hold only the id and are resolved through an
``AttachmentLookup`` at use time.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from .codec import decode
from .domain import AttachmentRef
from .markers import format_marker
from .models.blocks import (
    AttachmentBlock,
    Block,
    ChecklistBlock,
    CodeBlock,
    HeaderBlock,
    ListBlock,
    ListItem,
    OutputData,
    ParagraphBlock,
    QuoteBlock,
    TableBlock,
    WarningBlock,
    attachment_block,
    paragraph,
)
from .models.note import Note
from .rendering.renderer_iface import AttachmentLookup

LOGGER = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n"


def upgrade(text: Optional[str]) -> OutputData:
    blocks: List[Block] = []
    for seg in decode(text):
        if isinstance(seg, AttachmentRef):
            blocks.append(attachment_block(seg.attachment_id))
            continue
        for line in seg.content.split("\n"):
            if line.strip():
                blocks.append(paragraph(line))
    if not blocks:
        blocks.append(paragraph(""))
    LOGGER.debug("noteblocks.structured.upgrade blocks=%d", len(blocks))
    return OutputData(blocks=blocks)


def _list_item_text(item: Union[str, ListItem]) -> str:
    if isinstance(item, str):
        return item
    parts = [item.content] + [_list_item_text(child) for child in item.items]
    return " ".join(p for p in parts if p)


def project_block(block: Block, lookup: Optional[AttachmentLookup]) -> str:
    """Textual projection of one block."""
    if isinstance(block, (ParagraphBlock, HeaderBlock, QuoteBlock)):
        return block.data.text
    if isinstance(block, ListBlock):
        return " ".join(_list_item_text(item) for item in block.data.items)
    if isinstance(block, ChecklistBlock):
        return " ".join(item.text for item in block.data.items)
    if isinstance(block, TableBlock):
        return " ".join(" ".join(row) for row in block.data.content)
    if isinstance(block, CodeBlock):
        return block.data.code
    if isinstance(block, WarningBlock):
        return " ".join(p for p in (block.data.title, block.data.message) if p)
    if isinstance(block, AttachmentBlock):
        att = lookup.get(block.attachment_id) if lookup is not None else None
        name = att.name if att is not None else block.attachment_id
        return format_marker(name, block.attachment_id)
    # delimiter and unknown tools carry no text
    return ""


def flatten(document: Optional[OutputData], lookup: Optional[AttachmentLookup]) -> str:
    if document is None:
        return ""
    parts = [project_block(b, lookup) for b in document.blocks]
    return BLOCK_SEPARATOR.join(p for p in parts if p)


def attachment_ids(document: Optional[OutputData]) -> List[str]:
    if document is None:
        return []
    seen = set()
    out: List[str] = []
    for b in document.blocks:
        if isinstance(b, AttachmentBlock) and b.attachment_id not in seen:
            seen.add(b.attachment_id)
            out.append(b.attachment_id)
    return out


def ensure_structured(note: Note) -> OutputData:
    """Give a legacy note (flat content only) its structured form.

    A document saved with no blocks (a fresh editor) gets one empty paragraph.
    Otherwise a no-op.
    """
    doc = note.structured_content
    if doc is None:
        LOGGER.info("Upgrading note %s to structured content", note.id)
        note.structured_content = upgrade(note.content)
    elif not doc.blocks:
        LOGGER.debug("noteblocks.structured.empty_document note=%s", note.id)
        note.structured_content = doc.model_copy(update={"blocks": [paragraph("")]})
    return note.structured_content
