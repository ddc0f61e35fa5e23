"""
Attachment catalog for a single note.

An ordered collection of ``Attachment`` records with an id index built once
on construction. Records are immutable; resize/rename replace the record in
place so its position in the catalog never changes. The catalog satisfies the
``AttachmentLookup`` protocol used by the renderer and the structured codec.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import DuplicateAttachmentError
from .models.note import Attachment, Note

LOGGER = logging.getLogger(__name__)


class AttachmentCatalog:
    def __init__(self, records: Iterable[Attachment] = ()):
        self._records: List[Attachment] = []
        self._index: Dict[str, int] = {}
        for rec in records:
            if rec.id in self._index:
                # Keep the first occurrence; later duplicates are unreachable by id anyway
                LOGGER.warning("noteblocks.catalog.duplicate_id id=%s", rec.id)
                continue
            self._index[rec.id] = len(self._records)
            self._records.append(rec)

    @classmethod
    def for_note(cls, note: Note) -> "AttachmentCatalog":
        return cls(note.attachments)

    # Lookup protocol
    def get(self, attachment_id: str) -> Optional[Attachment]:
        pos = self._index.get(attachment_id)
        return self._records[pos] if pos is not None else None

    def __contains__(self, attachment_id: object) -> bool:
        return attachment_id in self._index

    def __iter__(self) -> Iterator[Attachment]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Attachment]:
        return list(self._records)

    def add(self, records: Iterable[Attachment]) -> List[Attachment]:
        """Append records to the end of the catalog, in the given order."""
        added: List[Attachment] = []
        for rec in records:
            if rec.id in self._index:
                raise DuplicateAttachmentError(f"attachment id already in catalog: {rec.id}")
            self._index[rec.id] = len(self._records)
            self._records.append(rec)
            added.append(rec)
        LOGGER.debug("noteblocks.catalog.add count=%d total=%d", len(added), len(self._records))
        return added

    def _replace(self, attachment_id: str, **changes) -> Optional[Attachment]:
        pos = self._index.get(attachment_id)
        if pos is None:
            LOGGER.debug("noteblocks.catalog.update_missing id=%s", attachment_id)
            return None
        updated = self._records[pos].model_copy(update=changes)
        self._records[pos] = updated
        return updated

    def resize(self, attachment_id: str, width: int) -> Optional[Attachment]:
        if width <= 0:
            raise ValueError("width must be positive")
        return self._replace(attachment_id, width=int(width))

    def rename(self, attachment_id: str, name: str) -> Optional[Attachment]:
        return self._replace(attachment_id, name=name)

    def remove(self, attachment_id: str) -> Optional[Attachment]:
        """Drop a record. Markers that still reference it become dangling."""
        pos = self._index.pop(attachment_id, None)
        if pos is None:
            return None
        removed = self._records.pop(pos)
        self._index = {rec.id: i for i, rec in enumerate(self._records)}
        return removed

    def write_to(self, note: Note) -> None:
        note.attachments = list(self._records)
        note.touch()
