"""
Render classifier: attachment -> rendering variant.

Pure and total. Non-url kinds map straight from ``Attachment.kind``; url
attachments are refined into a video embed, a social embed, a generic link,
or a broken link. A malformed URL is a rendered state, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

from ..embeds import tweet_id, youtube_id
from ..models.note import Attachment, AttachmentKind


class RenderKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO_EMBED = "video-embed"
    SOCIAL_EMBED = "social-embed"
    GENERIC_LINK = "generic-link"
    BROKEN_LINK = "broken-link"


@dataclass(frozen=True)
class RenderVariant:
    kind: RenderKind
    # video token or status id for embeds
    embed_id: Optional[str] = None
    # generic links only
    hostname: Optional[str] = None


_DIRECT = {
    AttachmentKind.AUDIO: RenderKind.AUDIO,
    AttachmentKind.VIDEO: RenderKind.VIDEO,
    AttachmentKind.IMAGE: RenderKind.IMAGE,
    AttachmentKind.DOCUMENT: RenderKind.DOCUMENT,
}


def parse_hostname(url: str) -> Optional[str]:
    """Hostname of an absolute URL, or None when it does not parse as one."""
    try:
        parts = urlsplit((url or "").strip())
        host = parts.hostname
        # Port access validates the netloc (raises on garbage such as "host:abc")
        _ = parts.port
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    return host


def classify_url(url: str) -> RenderVariant:
    vid = youtube_id(url)
    if vid:
        return RenderVariant(RenderKind.VIDEO_EMBED, embed_id=vid)
    tid = tweet_id(url)
    if tid:
        return RenderVariant(RenderKind.SOCIAL_EMBED, embed_id=tid)
    host = parse_hostname(url)
    if host:
        return RenderVariant(RenderKind.GENERIC_LINK, hostname=host)
    return RenderVariant(RenderKind.BROKEN_LINK)


def classify(attachment: Attachment) -> RenderVariant:
    direct = _DIRECT.get(attachment.kind)
    if direct is not None:
        return RenderVariant(direct)
    return classify_url(attachment.url)
