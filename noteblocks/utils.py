"""Small helpers shared across the package."""

from __future__ import annotations

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def underscore_to_camelcase(word: str) -> str:
    """Convert ``snake_case`` to ``camelCase`` (used as pydantic alias generator)."""
    head, *rest = word.split("_")
    return head + "".join(part.title() for part in rest)


def now_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def new_attachment_id() -> str:
    """Return a fresh ``att-<millis>-<5 base36 chars>`` identifier."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"att-{now_ms()}-{suffix}"
