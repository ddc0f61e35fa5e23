"""Embed token extraction for video-host and micro-blog URLs."""

from __future__ import annotations

import re
from typing import Optional

_YOUTUBE_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
_TWEET_RE = re.compile(r"^https?://(?:twitter\.com|x\.com)/(?:#!/)?\w+/status(?:es)?/(\d+)")

YOUTUBE_ID_LENGTH = 11


def youtube_id(url: str) -> Optional[str]:
    """Return the 11-character video token of a YouTube watch/share/embed URL."""
    m = _YOUTUBE_RE.match(url or "")
    if m and len(m.group(2)) == YOUTUBE_ID_LENGTH:
        return m.group(2)
    return None


def tweet_id(url: str) -> Optional[str]:
    """Return the numeric status id of a twitter.com / x.com status URL."""
    m = _TWEET_RE.match(url or "")
    return m.group(1) if m else None
