"""
Note and attachment wire models.

These are the shapes handed to and received from the persistence
collaborator. Python attributes are snake_case; JSON uses camelCase with the
attachment kind stored under ``type``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from ..utils import now_ms
from ._base import NoteModel
from .blocks import OutputData

ATTACHMENT_ID_PATTERN = r"^att-[^)]+$"


class AttachmentKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    DOCUMENT = "document"
    URL = "url"


class Attachment(NoteModel):
    """Catalog record for one attachment. Immutable; updates go through ``model_copy``."""

    model_config = NoteModel.model_config | ConfigDict(frozen=True)

    id: str = Field(..., pattern=ATTACHMENT_ID_PATTERN)
    name: str = ""
    kind: AttachmentKind = Field(..., alias="type")
    url: str = ""
    """Payload locator: a ``data:`` URI or an external URL."""
    size: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = Field(default=None, gt=0)
    """Display width in pixels; only meaningful for images."""

    @property
    def is_link(self) -> bool:
        return self.kind is AttachmentKind.URL


class Note(NoteModel):
    """A single note snapshot: canonical flat ``content`` plus its catalog."""

    id: str
    title: str = ""
    content: str = ""
    structured_content: Optional[OutputData] = Field(default=None, alias="jsonContent")
    attachments: List[Attachment] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    folder_id: Optional[str] = None
    is_pinned: bool = False
    is_starred: bool = False
    is_trashed: bool = False
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)
    read_time: int = 0

    def touch(self) -> None:
        self.updated_at = now_ms()
