"""
Block mutation engine.

Pure operations over an in-memory segment list (``edit``, ``insert_text``,
``insert_attachments``, ``reorder``, ``remove``) plus two edit sessions that
apply them to a ``Note`` and immediately write the re-serialized content
back:

  - FlatEditSession: segments decoded from ``Note.content``
  - StructuredEditSession: blocks of ``Note.structured_content``; ``content``
    is re-derived with ``structured.flatten`` after every operation

Every operation leaves the list non-empty. Removing a reference never
touches the attachment catalog; catalog changes go through the
``*_attachment`` helpers at the bottom of this module.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, TypeVar, Union

from .catalog import AttachmentCatalog
from .codec import decode, encode, referenced_ids
from .domain import AttachmentRef, Segment, TextSegment
from .ingest import link_attachment
from .markers import FILE_LABEL, LINK_LABEL, format_marker, parse_marker
from .models.blocks import (
    Block,
    HeaderBlock,
    OutputData,
    ParagraphBlock,
    QuoteBlock,
    attachment_block,
    paragraph,
)
from .models.note import Attachment, Note
from .structured import attachment_ids, ensure_structured, flatten, upgrade

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Text appended after a batch of inserted attachments so there is always a
# place to keep typing.
TRAILING_PAD = "\n"


def _in_range(items: Sequence, index: int) -> bool:
    return 0 <= index < len(items)


def _reorder(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    out = list(items)
    if from_index == to_index or not (_in_range(out, from_index) and _in_range(out, to_index)):
        return out
    moved = out.pop(from_index)
    out.insert(to_index, moved)
    return out


def _remove(items: Sequence[T], index: int, filler: Callable[[], T]) -> List[T]:
    out = list(items)
    if not _in_range(out, index):
        return out
    del out[index]
    if not out:
        out.append(filler())
    return out


def marker_for(attachment: Attachment) -> str:
    label = LINK_LABEL if attachment.is_link else FILE_LABEL
    return format_marker(attachment.name, attachment.id, label)


# ----------------------------- Segment operations ----------------------------


def edit(segments: Sequence[Segment], index: int, content: str) -> List[Segment]:
    """Replace the text of one segment in place.

    Editing a reference keeps it a reference only while the new text is still
    a single well-formed marker.
    """
    out = list(segments)
    if not _in_range(out, index):
        return out
    if isinstance(out[index], AttachmentRef):
        marker = parse_marker(content)
        if marker is not None:
            out[index] = AttachmentRef(raw_marker=content, attachment_id=marker.attachment_id)
            return out
    out[index] = TextSegment(content)
    return out


def insert_text(segments: Sequence[Segment], text: str) -> List[Segment]:
    return list(segments) + [TextSegment(text)]


def insert_attachments(
    segments: Sequence[Segment], attachments: Sequence[Attachment]
) -> List[Segment]:
    """Append one reference per attachment (catalog order) and a trailing text pad."""
    out = list(segments)
    if not attachments:
        return out
    for att in attachments:
        out.append(AttachmentRef(raw_marker=marker_for(att), attachment_id=att.id))
    out.append(TextSegment(TRAILING_PAD))
    return out


def reorder(segments: Sequence[Segment], from_index: int, to_index: int) -> List[Segment]:
    return _reorder(segments, from_index, to_index)


def remove(segments: Sequence[Segment], index: int) -> List[Segment]:
    return _remove(segments, index, lambda: TextSegment(""))


# ------------------------------- Edit sessions -------------------------------


class FlatEditSession:
    """Segment editing over ``Note.content``.

    Every operation first re-parses ``note.content`` if it was replaced from
    outside (e.g. by sync) since the last operation, so synced text is never
    overwritten by stale segments.
    """

    def __init__(self, note: Note):
        self.note = note
        self.segments: List[Segment] = decode(note.content)

    def reload(self) -> bool:
        """Re-parse when the note content was replaced from outside (e.g. sync)."""
        if self.note.content == encode(self.segments):
            return False
        LOGGER.debug("noteblocks.mutations.reload note=%s", self.note.id)
        self.segments = decode(self.note.content)
        return True

    def _commit(self, op: str, apply: Callable[[List[Segment]], List[Segment]]) -> str:
        self.reload()
        segments = apply(self.segments)
        self.segments = segments
        self.note.content = encode(segments)
        self.note.touch()
        LOGGER.debug(
            "noteblocks.mutations.%s note=%s segments=%d", op, self.note.id, len(segments)
        )
        return self.note.content

    def edit(self, index: int, content: str) -> str:
        return self._commit("edit", lambda segs: edit(segs, index, content))

    def insert_text(self, text: str) -> str:
        return self._commit("insert_text", lambda segs: insert_text(segs, text))

    def insert_attachments(self, attachments: Sequence[Attachment]) -> str:
        return self._commit(
            "insert_attachments", lambda segs: insert_attachments(segs, attachments)
        )

    def insert_link(self, attachment: Attachment) -> str:
        return self.insert_text(f"\n{marker_for(attachment)}\n")

    def reorder(self, from_index: int, to_index: int) -> str:
        return self._commit("reorder", lambda segs: reorder(segs, from_index, to_index))

    def remove(self, index: int) -> str:
        return self._commit("remove", lambda segs: remove(segs, index))


_TEXT_BLOCKS = (ParagraphBlock, HeaderBlock, QuoteBlock)


def _edit_block(blocks: List[Block], index: int, text: str) -> List[Block]:
    if _in_range(blocks, index) and isinstance(blocks[index], _TEXT_BLOCKS):
        block = blocks[index]
        blocks[index] = block.model_copy(
            update={"data": block.data.model_copy(update={"text": text})}
        )
    return blocks


def _append_attachments(blocks: List[Block], attachments: Sequence[Attachment]) -> List[Block]:
    if attachments:
        blocks.extend(attachment_block(att.id) for att in attachments)
        blocks.append(paragraph(""))
    return blocks


class StructuredEditSession:
    """Block editing over ``Note.structured_content``; ``content`` follows.

    An outside replacement of ``structured_content`` is adopted as is; an
    outside replacement of only ``content`` is re-upgraded into blocks.
    """

    def __init__(self, note: Note):
        self.note = note
        ensure_structured(note)
        self._doc = note.structured_content
        self._content = note.content

    @property
    def blocks(self) -> List[Block]:
        doc = self.note.structured_content
        return list(doc.blocks) if doc is not None else []

    def reload(self) -> bool:
        """Pick up a document or content replaced from outside (e.g. sync)."""
        note = self.note
        if note.structured_content is self._doc and note.content == self._content:
            return False
        if note.structured_content is self._doc:
            LOGGER.info("Content of note %s replaced; rebuilding blocks", note.id)
            note.structured_content = upgrade(note.content)
        ensure_structured(note)
        self._doc = note.structured_content
        self._content = note.content
        return True

    def _commit(self, op: str, apply: Callable[[List[Block]], List[Block]]) -> str:
        self.reload()
        blocks = apply(self.blocks)
        version = self._doc.version if self._doc is not None else OutputData().version
        doc = OutputData(blocks=blocks, version=version)
        self.note.structured_content = doc
        self.note.content = flatten(doc, AttachmentCatalog.for_note(self.note))
        self.note.touch()
        self._doc = doc
        self._content = self.note.content
        LOGGER.debug(
            "noteblocks.mutations.structured_%s note=%s blocks=%d", op, self.note.id, len(blocks)
        )
        return self.note.content

    def edit(self, index: int, text: str) -> str:
        """Replace the text of a paragraph, header or quote block."""
        return self._commit("edit", lambda blocks: _edit_block(blocks, index, text))

    def insert_text(self, text: str) -> str:
        return self._commit("insert_text", lambda blocks: blocks + [paragraph(text)])

    def insert_attachments(self, attachments: Sequence[Attachment]) -> str:
        return self._commit(
            "insert_attachments", lambda blocks: _append_attachments(blocks, attachments)
        )

    def insert_link(self, attachment: Attachment) -> str:
        return self._commit(
            "insert_link", lambda blocks: blocks + [attachment_block(attachment.id)]
        )

    def reorder(self, from_index: int, to_index: int) -> str:
        return self._commit("reorder", lambda blocks: _reorder(blocks, from_index, to_index))

    def remove(self, index: int) -> str:
        return self._commit("remove", lambda blocks: _remove(blocks, index, paragraph))

    def refresh(self) -> str:
        """Re-derive ``content`` after a catalog change (e.g. rename)."""
        return self._commit("refresh", list)


# ---------------------------- Catalog operations -----------------------------


def add_attachments(note: Note, attachments: Sequence[Attachment]) -> List[Attachment]:
    catalog = AttachmentCatalog.for_note(note)
    added = catalog.add(attachments)
    catalog.write_to(note)
    return added


def resize_attachment(note: Note, attachment_id: str, width: int) -> Optional[Attachment]:
    catalog = AttachmentCatalog.for_note(note)
    updated = catalog.resize(attachment_id, width)
    if updated is not None:
        catalog.write_to(note)
    return updated


def rename_attachment(note: Note, attachment_id: str, name: str) -> Optional[Attachment]:
    catalog = AttachmentCatalog.for_note(note)
    updated = catalog.rename(attachment_id, name)
    if updated is not None:
        catalog.write_to(note)
    return updated


def remove_attachment(note: Note, attachment_id: str) -> Optional[Attachment]:
    """Drop a catalog record; references to it in the text are left dangling."""
    catalog = AttachmentCatalog.for_note(note)
    removed = catalog.remove(attachment_id)
    if removed is not None:
        catalog.write_to(note)
        LOGGER.info("Removed attachment %s from note %s", attachment_id, note.id)
    return removed


def add_link(
    session: Union[FlatEditSession, StructuredEditSession],
    raw_url: str,
    name: Optional[str] = None,
) -> Attachment:
    """Side-panel link flow: create a url attachment, catalog it, reference it."""
    attachment = link_attachment(raw_url, name=name)
    add_attachments(session.note, [attachment])
    session.insert_link(attachment)
    return attachment


def dangling_references(note: Note) -> List[str]:
    """Referenced attachment ids with no catalog record, first occurrence order.

    Reads the structured document when the note has one, the flat content
    otherwise.
    """
    if note.structured_content is not None:
        ids = attachment_ids(note.structured_content)
    else:
        ids = referenced_ids(decode(note.content))
    catalog = AttachmentCatalog.for_note(note)
    return [att_id for att_id in ids if att_id not in catalog]
