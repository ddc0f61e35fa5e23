"""Exceptions raised by noteblocks."""

from __future__ import annotations

from typing import Optional


class NoteBlocksError(Exception):
    """Base noteblocks error."""


class NoteNotFound(NoteBlocksError):
    pass


class InvalidNoteError(NoteBlocksError):
    """A persisted note snapshot failed validation."""

    def __init__(self, message: str, payload: Optional[object] = None):
        super().__init__(message)
        self.payload = payload


class DuplicateAttachmentError(NoteBlocksError):
    """An attachment id is already present in the catalog."""


class IngestionError(NoteBlocksError):
    """A single file could not be turned into an attachment."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason
