"""
Attachment ingestion.

Turns raw files into catalog records (id, name, kind, data URI, size). Files
are read concurrently; each file succeeds or fails on its own, so one
oversized or unreadable file never blocks the rest of the batch. Nothing is
retried. The caller appends ``report.attachments`` to the catalog and then
runs the insert-attachments mutation.

Also builds ``url`` attachments for links submitted by the user.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union
from urllib.parse import urlsplit

from .embeds import tweet_id, youtube_id
from .errors import IngestionError
from .models.note import Attachment, AttachmentKind
from .utils import new_attachment_id

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_FILE_BYTES = int(2.5 * 1024 * 1024)
DEFAULT_MIME = "application/octet-stream"
DEFAULT_LINK_NAME = "Web Link"


def _env_max_file_bytes() -> int:
    raw = os.getenv("NOTEBLOCKS_MAX_FILE_BYTES", "").strip()
    if raw.isdigit() and int(raw) > 0:
        return int(raw)
    return DEFAULT_MAX_FILE_BYTES


@dataclass(frozen=True)
class IngestConfig:
    max_file_bytes: int = field(default_factory=_env_max_file_bytes)


@dataclass(frozen=True)
class IncomingFile:
    """A file handed over by the upload surface: in-memory bytes or a path on disk."""

    name: str
    data: Optional[bytes] = None
    path: Optional[Path] = None
    mime_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "IncomingFile":
        p = Path(path)
        return cls(name=p.name, path=p)

    @property
    def resolved_mime(self) -> str:
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.name)
        return guessed or DEFAULT_MIME

    def declared_size(self) -> Optional[int]:
        if self.data is not None:
            return len(self.data)
        if self.path is not None:
            return self.path.stat().st_size
        return None

    def read(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise ValueError("file has neither data nor path")
        return self.path.read_bytes()


@dataclass
class IngestionReport:
    attachments: List[Attachment] = field(default_factory=list)
    failures: List[IngestionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def kind_for_mime(mime: str) -> AttachmentKind:
    m = (mime or "").lower()
    if m.startswith("audio/"):
        return AttachmentKind.AUDIO
    if m.startswith("video/"):
        return AttachmentKind.VIDEO
    if m.startswith("image/"):
        return AttachmentKind.IMAGE
    return AttachmentKind.DOCUMENT


def to_data_uri(payload: bytes, mime: str) -> str:
    return f"data:{mime or DEFAULT_MIME};base64,{base64.b64encode(payload).decode('ascii')}"


async def ingest_file(incoming: IncomingFile, config: Optional[IngestConfig] = None) -> Attachment:
    """Ingest one file. Raises ``IngestionError`` when it is too large or unreadable."""
    cfg = config or IngestConfig()
    try:
        size = incoming.declared_size()
    except OSError as e:
        raise IngestionError(incoming.name, f"unreadable: {e}") from e
    if size is not None and size > cfg.max_file_bytes:
        raise IngestionError(
            incoming.name, f"exceeds the {cfg.max_file_bytes} byte limit ({size} bytes)"
        )
    try:
        payload = await asyncio.to_thread(incoming.read)
    except (OSError, ValueError) as e:
        raise IngestionError(incoming.name, f"unreadable: {e}") from e
    if len(payload) > cfg.max_file_bytes:
        raise IngestionError(
            incoming.name, f"exceeds the {cfg.max_file_bytes} byte limit ({len(payload)} bytes)"
        )
    mime = incoming.resolved_mime
    return Attachment(
        id=new_attachment_id(),
        name=incoming.name,
        kind=kind_for_mime(mime),
        url=to_data_uri(payload, mime),
        size=len(payload),
    )


async def ingest_files(
    files: Sequence[IncomingFile], config: Optional[IngestConfig] = None
) -> IngestionReport:
    """Ingest a batch; accepted records keep the input order."""
    results = await asyncio.gather(
        *(ingest_file(f, config) for f in files), return_exceptions=True
    )
    report = IngestionReport()
    for incoming, result in zip(files, results):
        if isinstance(result, IngestionError):
            LOGGER.warning("Skipping file %s: %s", incoming.name, result.reason)
            report.failures.append(result)
        elif isinstance(result, BaseException):
            raise result
        else:
            report.attachments.append(result)
    LOGGER.debug(
        "noteblocks.ingest.batch files=%d accepted=%d failed=%d",
        len(files),
        len(report.attachments),
        len(report.failures),
    )
    return report


def normalize_link(raw: str) -> str:
    url = (raw or "").strip()
    if url and not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def link_name(url: str) -> str:
    if youtube_id(url):
        return "YouTube Video"
    if tweet_id(url):
        return "Tweet"
    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None
    return host or url or DEFAULT_LINK_NAME


def link_attachment(raw_url: str, name: Optional[str] = None) -> Attachment:
    """Build a ``url`` attachment for a user-submitted link."""
    url = normalize_link(raw_url)
    if not url:
        raise ValueError("empty URL")
    return Attachment(
        id=new_attachment_id(),
        name=name or link_name(url),
        kind=AttachmentKind.URL,
        url=url,
    )
