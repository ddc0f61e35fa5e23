"""
Variant-based attachment rendering strategies.

A small, pure dispatcher that maps a classified attachment to an HTML
fragment. It performs no I/O; everything the strategies use arrives through
the AttachmentContext.

Design:
  - AttachmentContext: immutable bundle of the record, its variant and config
  - Renderers: small classes implementing `render(ctx)`
  - Dispatcher: exact RenderKind map; `render_missing` for dangling ids
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Dict, Optional

from tinyhtml import h, raw

from ..models.note import Attachment
from .classifier import RenderKind, RenderVariant, classify
from .options import RenderConfig


def _void_tag(name: str, attrs: Dict[str, str]) -> str:
    attr_html = " ".join(f'{k}="{html.escape(v)}"' for k, v in attrs.items())
    return f"<{name} {attr_html}>"


@dataclass(frozen=True)
class AttachmentContext:
    attachment: Attachment
    variant: RenderVariant
    config: RenderConfig

    @property
    def title(self) -> str:
        return self.attachment.name or self.variant.kind.value

    def base_attrs(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = {
            "class": "attachment",
            "data-id": self.attachment.id,
            "data-kind": self.variant.kind.value,
        }
        if extra:
            base.update(extra)
        return base

    def label(self, text: str) -> str:
        return h("div", **{"class": "attachment-label"})(text).render()


class _Renderer:
    def render(self, ctx: AttachmentContext) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class _AudioRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        audio = _void_tag("audio controls", {"src": ctx.attachment.url, "class": "w-full"})
        return h("div", **ctx.base_attrs({"class": "attachment audio"}))(
            raw(ctx.label(f"Audio File: {ctx.title}")), raw(audio + "</audio>")
        ).render()


class _VideoRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        video = _void_tag(
            "video controls",
            {"src": ctx.attachment.url, "style": "max-width:100%;height:auto"},
        )
        return h("div", **ctx.base_attrs({"class": "attachment video"}))(
            raw(ctx.label(f"Video File: {ctx.title}")), raw(video + "</video>")
        ).render()


class _ImageRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        width = ctx.attachment.width
        attrs = {
            "src": ctx.attachment.url,
            "alt": ctx.title,
            "style": f"width:{width}px;max-width:100%" if width else "width:100%",
        }
        if width:
            attrs["width"] = str(width)
        extra = {"class": "attachment image"}
        if not ctx.config.readonly:
            # Resize handle is wired up by the editing surface
            extra["data-resizable"] = "true"
        return h("figure", **ctx.base_attrs(extra))(
            raw(_void_tag("img", attrs)), h("figcaption")(ctx.title)
        ).render()


class _DocumentRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        save = h(
            "a",
            **{
                "href": ctx.attachment.url,
                "download": ctx.attachment.name or "attachment",
                "class": "attachment-save",
            },
        )("Save")
        return h("div", **ctx.base_attrs({"class": "attachment document"}))(
            raw(ctx.label("Document Attachment")),
            h("div", **{"class": "attachment-name"})(ctx.title),
            save,
        ).render()


class _VideoEmbedRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        src = ctx.config.video_embed_template.format(id=ctx.variant.embed_id)
        frame = h(
            "iframe",
            **{
                "src": src,
                "title": ctx.title,
                "frameborder": "0",
                "allow": "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture",
                "allowfullscreen": "allowfullscreen",
            },
        )()
        return h(
            "div",
            **ctx.base_attrs(
                {"class": "attachment video-embed", "data-embed-id": ctx.variant.embed_id or ""}
            ),
        )(raw(ctx.label("YouTube Embed")), frame).render()


class _SocialEmbedRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        status_url = ctx.config.social_embed_template.format(id=ctx.variant.embed_id)
        quote = h("blockquote", **{"class": "twitter-tweet"})(
            h("a", href=status_url, **ctx.config.link_attrs())(ctx.attachment.url)
        )
        return h(
            "div",
            **ctx.base_attrs(
                {"class": "attachment social-embed", "data-embed-id": ctx.variant.embed_id or ""}
            ),
        )(raw(ctx.label("Social Embed")), quote).render()


class _GenericLinkRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        host = ctx.variant.hostname or ""
        name = ctx.attachment.name
        title = name if name and name != ctx.config.default_link_name else host
        favicon = _void_tag(
            "img",
            {
                "src": ctx.config.favicon_template.format(host=host),
                "alt": "",
                "class": "favicon",
            },
        )
        secure = "secure" if ctx.attachment.url.startswith("https") else "insecure"
        return h(
            "a",
            href=ctx.attachment.url,
            **ctx.base_attrs({"class": "attachment link-card", "data-host": host}),
            **ctx.config.link_attrs(),
        )(
            raw(favicon),
            h("span", **{"class": "link-title"})(title),
            h("span", **{"class": "link-url"})(ctx.attachment.url),
            h("span", **{"class": f"link-host {secure}"})(host),
        ).render()


class _BrokenLinkRenderer(_Renderer):
    def render(self, ctx: AttachmentContext) -> str:
        return h("div", **ctx.base_attrs({"class": "attachment broken-link"}))(
            f"Invalid Link: {ctx.attachment.url}"
        ).render()


# Singletons
_RENDERERS: Dict[RenderKind, _Renderer] = {
    RenderKind.AUDIO: _AudioRenderer(),
    RenderKind.VIDEO: _VideoRenderer(),
    RenderKind.IMAGE: _ImageRenderer(),
    RenderKind.DOCUMENT: _DocumentRenderer(),
    RenderKind.VIDEO_EMBED: _VideoEmbedRenderer(),
    RenderKind.SOCIAL_EMBED: _SocialEmbedRenderer(),
    RenderKind.GENERIC_LINK: _GenericLinkRenderer(),
    RenderKind.BROKEN_LINK: _BrokenLinkRenderer(),
}


def render_attachment(attachment: Attachment, config: Optional[RenderConfig] = None) -> str:
    ctx = AttachmentContext(
        attachment=attachment,
        variant=classify(attachment),
        config=config or RenderConfig(),
    )
    return _RENDERERS[ctx.variant.kind].render(ctx)


def render_missing(attachment_id: str) -> str:
    """Placeholder for a reference whose id is not in the catalog."""
    return h(
        "div",
        **{"class": "attachment missing", "data-id": attachment_id},
    )(f"Missing Attachment: {attachment_id}").render()
