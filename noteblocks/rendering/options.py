"""
Render configuration for note HTML output.

Centralizes behavior flags so callers can tune defaults without touching
core logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderConfig:
    # Read-only views drop editing affordances (image resize handles)
    readonly: bool = True

    # Link behavior
    link_target_blank: bool = True
    link_rel: str = "noopener noreferrer"
    referrer_policy: str = "no-referrer"

    # Embeds
    video_embed_template: str = "https://www.youtube.com/embed/{id}"
    social_embed_template: str = "https://twitter.com/i/status/{id}"
    favicon_template: str = "https://www.google.com/s2/favicons?domain={host}&sz=128"

    # Generic link cards show the hostname instead of this placeholder name
    default_link_name: str = "Web Link"

    def link_attrs(self) -> dict[str, str]:
        attrs = {}
        if self.link_target_blank:
            attrs["target"] = "_blank"
        if self.link_rel:
            attrs["rel"] = self.link_rel
        if self.referrer_policy:
            attrs["referrerpolicy"] = self.referrer_policy
        return attrs
