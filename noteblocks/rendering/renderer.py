"""
Pure HTML renderer for note content.

Renders either the flat segment list or the structured block document. Each
attachment reference is resolved through an ``AttachmentLookup``; ids the
lookup does not know render as a missing-attachment placeholder and never
stop the rest of the note from rendering. No I/O.
"""

from __future__ import annotations

import html
import logging
from typing import List, Optional, Sequence, Union

from tinyhtml import h

from ..catalog import AttachmentCatalog
from ..codec import decode
from ..domain import AttachmentRef, Segment
from ..models.blocks import (
    AttachmentBlock,
    Block,
    ChecklistBlock,
    CodeBlock,
    DelimiterBlock,
    HeaderBlock,
    ListBlock,
    ListItem,
    OutputData,
    ParagraphBlock,
    QuoteBlock,
    TableBlock,
    WarningBlock,
)
from ..models.note import Note
from .attachments import render_attachment, render_missing
from .options import RenderConfig
from .renderer_iface import AttachmentLookup

LOGGER = logging.getLogger(__name__)


def _resolve(attachment_id: str, lookup: Optional[AttachmentLookup], config: RenderConfig) -> str:
    att = lookup.get(attachment_id) if lookup is not None else None
    if att is None:
        LOGGER.debug("noteblocks.render.missing id=%s", attachment_id)
        return render_missing(attachment_id)
    try:
        return render_attachment(att, config)
    except (KeyError, IndexError, TypeError, ValueError):
        # e.g. a config template with an unknown placeholder
        LOGGER.exception("Failed to render attachment %s", attachment_id)
        return render_missing(attachment_id)


def render_segments(
    segments: Sequence[Segment],
    lookup: Optional[AttachmentLookup],
    config: Optional[RenderConfig] = None,
) -> str:
    cfg = config or RenderConfig()
    fragments: List[str] = []
    for seg in segments:
        if isinstance(seg, AttachmentRef):
            fragments.append(_resolve(seg.attachment_id, lookup, cfg))
        elif not seg.content.strip():
            if seg.content:
                fragments.append('<div class="spacer"></div>')
        else:
            fragments.append(
                h("p", **{"class": "note-text", "style": "white-space:pre-wrap"})(
                    seg.content
                ).render()
            )
    return "".join(fragments)


def _render_list_items(items: Sequence[Union[str, ListItem]], tag: str) -> str:
    out: List[str] = []
    for item in items:
        if isinstance(item, str):
            out.append(f"<li>{html.escape(item)}</li>")
            continue
        nested = _render_list_items(item.items, tag) if item.items else ""
        out.append(f"<li>{html.escape(item.content)}{nested}</li>")
    return f"<{tag}>{''.join(out)}</{tag}>"


def render_block(
    block: Block, lookup: Optional[AttachmentLookup], config: RenderConfig
) -> str:
    if isinstance(block, ParagraphBlock):
        return h("p", **{"class": "note-text"})(block.data.text).render()
    if isinstance(block, HeaderBlock):
        return h(f"h{block.data.level}")(block.data.text).render()
    if isinstance(block, ListBlock):
        tag = "ol" if block.data.style == "ordered" else "ul"
        return _render_list_items(block.data.items, tag)
    if isinstance(block, ChecklistBlock):
        items = []
        for item in block.data.items:
            checked = " checked" if item.checked else ""
            items.append(
                f'<li><input type="checkbox" disabled{checked}> {html.escape(item.text)}</li>'
            )
        return f'<ul class="checklist">{"".join(items)}</ul>'
    if isinstance(block, QuoteBlock):
        parts = [h("p")(block.data.text)]
        if block.data.caption:
            parts.append(h("footer")(block.data.caption))
        return h("blockquote")(*parts).render()
    if isinstance(block, WarningBlock):
        return h("div", **{"class": "warning"})(
            h("strong")(block.data.title), " ", block.data.message
        ).render()
    if isinstance(block, CodeBlock):
        return h("pre")(h("code")(block.data.code)).render()
    if isinstance(block, TableBlock):
        rows = list(block.data.content)
        out: List[str] = ["<table>"]
        if block.data.with_headings and rows:
            head = "".join(f"<th>{html.escape(c)}</th>" for c in rows.pop(0))
            out.append(f"<thead><tr>{head}</tr></thead>")
        out.append("<tbody>")
        for row in rows:
            out.append("<tr>" + "".join(f"<td>{html.escape(c)}</td>" for c in row) + "</tr>")
        out.append("</tbody></table>")
        return "".join(out)
    if isinstance(block, DelimiterBlock):
        return "<hr>"
    if isinstance(block, AttachmentBlock):
        return _resolve(block.attachment_id, lookup, config)
    LOGGER.debug("noteblocks.render.skip_block type=%s", getattr(block, "type", None))
    return ""


def render_blocks(
    document: Optional[OutputData],
    lookup: Optional[AttachmentLookup],
    config: Optional[RenderConfig] = None,
) -> str:
    if document is None:
        return ""
    cfg = config or RenderConfig()
    return "".join(render_block(b, lookup, cfg) for b in document.blocks)


def render_note_page(title: str, html_fragment: str, extra_css: str = "") -> str:
    return (
        '<!doctype html><meta charset="utf-8">'
        '<meta name="color-scheme" content="light dark">'
        f"<title>{html.escape(title or 'Untitled Note')}</title>"
        "<style>"
        "body{font-family:-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica,Arial,sans-serif;line-height:1.5;background:#fff;color:#18181b;max-width:48rem;margin:2rem auto;padding:0 1rem}"
        "h1.note-title{font-size:2.5rem;border-bottom:1px solid #f4f4f5;padding-bottom:1rem}"
        ".spacer{height:1rem}"
        "pre{white-space:pre-wrap;background:#f4f4f5;padding:.75rem;border-radius:.5rem}"
        "blockquote{margin:.5em 0 .5em 1em;padding-left:.8em;border-left:3px solid #ddd}"
        "table{border-collapse:collapse;margin:.5rem 0}"
        "td,th{border:1px solid #ccc;padding:.25rem .5rem;vertical-align:top}"
        "ul.checklist{list-style:none;padding-left:.5em}"
        ".attachment{margin:1rem 0;padding:1rem;border:1px solid #e4e4e7;border-radius:1rem;background:#fafafa}"
        ".attachment-label{font-size:10px;font-weight:700;text-transform:uppercase;letter-spacing:.1em;color:#a1a1aa;margin-bottom:.75rem}"
        ".attachment.image{padding:0;border:0;background:none}"
        ".attachment.image img{border-radius:1rem}"
        ".attachment.video-embed iframe{width:100%;aspect-ratio:16/9;border:0;border-radius:1rem}"
        "a.link-card{display:flex;gap:1rem;align-items:center;text-decoration:none;color:inherit}"
        ".link-card .favicon{width:40px;height:40px}"
        ".link-card .link-url{font-family:monospace;font-size:12px;color:#71717a}"
        ".attachment.broken-link,.attachment.missing{border-color:#fecaca;color:#ef4444;background:#fef2f2;font-size:12px}"
        ".warning{padding:1rem;border-radius:.5rem;background:#fffbeb}"
        "@media (prefers-color-scheme: dark){"
        "body{background:#111;color:#eee}"
        ".attachment{background:#1b1b1b;border-color:#333}"
        "pre{background:#1b1b1b;color:#eee}"
        "td,th{border-color:#555}"
        "}"
        f'{extra_css}</style><h1 class="note-title">{html.escape(title or "Untitled Note")}</h1>'
        f'<div class="note-content">{html_fragment}</div>'
    )


class NoteRenderer:
    """Class-based interface for note rendering."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def render(self, note: Note, structured: Optional[bool] = None) -> str:
        """Render the note body to an HTML fragment string.

        ``structured=None`` picks the structured document when the note has
        one and falls back to the flat content otherwise.
        """
        # id index built once per render pass
        catalog = AttachmentCatalog.for_note(note)
        use_blocks = note.structured_content is not None if structured is None else structured
        if use_blocks and note.structured_content is not None:
            return render_blocks(note.structured_content, catalog, self.config)
        return render_segments(decode(note.content), catalog, self.config)

    def render_full_page(self, note: Note, structured: Optional[bool] = None) -> str:
        """Render the note and wrap it in a standalone page with CSS."""
        return render_note_page(note.title, self.render(note, structured=structured))
