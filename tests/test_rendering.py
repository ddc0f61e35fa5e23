"""Tests for the render classifier and the HTML renderer."""

import unittest

from noteblocks.catalog import AttachmentCatalog
from noteblocks.codec import decode
from noteblocks.models.note import Attachment, AttachmentKind, Note
from noteblocks.rendering.attachments import render_attachment, render_missing
from noteblocks.rendering.classifier import RenderKind, classify, classify_url
from noteblocks.rendering.options import RenderConfig
from noteblocks.rendering.renderer import NoteRenderer, render_note_page, render_segments
from noteblocks.structured import upgrade

URL_KINDS = {
    RenderKind.VIDEO_EMBED,
    RenderKind.SOCIAL_EMBED,
    RenderKind.GENERIC_LINK,
    RenderKind.BROKEN_LINK,
}


def _url(att_id: str, url: str, name: str = "Web Link") -> Attachment:
    return Attachment(id=att_id, name=name, kind=AttachmentKind.URL, url=url)


def _generated_urls():
    urls = []
    for i in range(25):
        token = f"abcdefghij{i % 10}"
        urls.append(
            (
                [
                    f"https://www.youtube.com/watch?v={token}",
                    f"https://youtu.be/{token}",
                    f"https://www.youtube.com/embed/{token}?start=3",
                    f"https://m.youtube.com/watch?feature=share&v={token}",
                ][i % 4],
                RenderKind.VIDEO_EMBED,
            )
        )
    for i in range(25):
        host = "twitter.com" if i % 2 else "x.com"
        urls.append((f"https://{host}/user_{i}/status/{1000 + i}", RenderKind.SOCIAL_EMBED))
    for i in range(25):
        urls.append((f"https://example{i}.com/articles/{i}?ref=home", RenderKind.GENERIC_LINK))
    garbage = [
        "",
        "just some words",
        "http://",
        "https://",
        "::::",
        "mailto:someone@example.com",
        "http://[::1",
        "http://host:notaport/x",
        "www.example.com",
        "ftp//missing-colon",
        "[File: a](att-1)",
        "\x00\x01\x02",
        "javascript:alert(1)",
    ]
    for i in range(25):
        urls.append((garbage[i % len(garbage)], RenderKind.BROKEN_LINK))
    return urls


class TestClassifier(unittest.TestCase):
    def test_direct_kinds(self):
        for kind, expected in [
            (AttachmentKind.AUDIO, RenderKind.AUDIO),
            (AttachmentKind.VIDEO, RenderKind.VIDEO),
            (AttachmentKind.IMAGE, RenderKind.IMAGE),
            (AttachmentKind.DOCUMENT, RenderKind.DOCUMENT),
        ]:
            att = Attachment(id="att-1", name="f", kind=kind, url="not even a url")
            self.assertEqual(classify(att).kind, expected)

    def test_totality_over_generated_urls(self):
        urls = _generated_urls()
        self.assertEqual(len(urls), 100)
        for url, expected in urls:
            variant = classify(_url("att-1", url))
            self.assertIn(variant.kind, URL_KINDS)
            self.assertEqual(variant.kind, expected, url)

    def test_video_embed_token(self):
        variant = classify_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42")
        self.assertEqual(variant.embed_id, "dQw4w9WgXcQ")

    def test_short_token_is_not_an_embed(self):
        self.assertEqual(classify_url("https://youtu.be/short").kind, RenderKind.GENERIC_LINK)

    def test_social_embed_status_id(self):
        variant = classify_url("https://twitter.com/#!/someone/statuses/123456789")
        self.assertEqual(variant.kind, RenderKind.SOCIAL_EMBED)
        self.assertEqual(variant.embed_id, "123456789")

    def test_generic_link_carries_hostname(self):
        variant = classify_url("https://docs.python.org/3/library/re.html")
        self.assertEqual(variant.kind, RenderKind.GENERIC_LINK)
        self.assertEqual(variant.hostname, "docs.python.org")


class TestAttachmentRendering(unittest.TestCase):
    def test_image_uses_catalog_width(self):
        att = Attachment(id="att-1", name="p.png", kind=AttachmentKind.IMAGE, url="data:image/png;base64,AAA", width=320)
        out = render_attachment(att)
        self.assertIn('src="data:image/png;base64,AAA"', out)
        self.assertIn("width:320px", out)
        self.assertNotIn("data-resizable", out)
        editable = render_attachment(att, RenderConfig(readonly=False))
        self.assertIn("data-resizable", editable)

    def test_generic_link_falls_back_to_hostname(self):
        out = render_attachment(_url("att-1", "https://example.org/x"))
        self.assertIn("example.org", out)
        self.assertIn("favicons?domain=example.org", out)

    def test_broken_link_is_a_warning_card(self):
        out = render_attachment(_url("att-1", "not a url"))
        self.assertIn("Invalid Link: not a url", out)
        self.assertIn("broken-link", out)

    def test_video_embed_iframe(self):
        out = render_attachment(_url("att-1", "https://youtu.be/dQw4w9WgXcQ", name="YouTube Video"))
        self.assertIn("https://www.youtube.com/embed/dQw4w9WgXcQ", out)

    def test_missing_placeholder_carries_id(self):
        out = render_missing("att-gone")
        self.assertIn("Missing Attachment: att-gone", out)


class TestNoteRendering(unittest.TestCase):
    def setUp(self):
        self.note = Note(
            id="n-1",
            title="Trip",
            content="Intro text\n[File: photo.png](att-1)\n[File: lost.pdf](att-ghost)\nOutro",
            attachments=[
                Attachment(id="att-1", name="photo.png", kind=AttachmentKind.IMAGE, url="data:image/png;base64,AAA")
            ],
        )

    def test_dangling_reference_is_non_fatal(self):
        out = NoteRenderer().render(self.note)
        self.assertIn("Missing Attachment: att-ghost", out)
        self.assertIn("Intro text", out)
        self.assertIn('src="data:image/png;base64,AAA"', out)
        self.assertIn("Outro", out)
        # rendering order follows the content
        self.assertLess(out.index("Intro text"), out.index("att-ghost"))
        self.assertLess(out.index("att-ghost"), out.index("Outro"))

    def test_marker_name_is_not_used_for_display(self):
        self.note.content = "[File: stale.png](att-1)"
        out = NoteRenderer().render(self.note)
        self.assertNotIn("stale.png", out)
        self.assertIn("photo.png", out)

    def test_structured_and_flat_render_same_attachments(self):
        self.note.structured_content = upgrade(self.note.content)
        blocks_html = NoteRenderer().render(self.note)
        flat_html = NoteRenderer().render(self.note, structured=False)
        for out in (blocks_html, flat_html):
            self.assertIn("Missing Attachment: att-ghost", out)
            self.assertIn('src="data:image/png;base64,AAA"', out)

    def test_whitespace_only_text_renders_spacer(self):
        out = render_segments(decode("[File: a](att-1)\n\n[File: a](att-1)"), AttachmentCatalog())
        self.assertIn('class="spacer"', out)

    def test_full_page(self):
        page = NoteRenderer().render_full_page(self.note)
        self.assertTrue(page.startswith("<!doctype html>"))
        self.assertIn("<title>Trip</title>", page)
        self.assertIn("<title>Untitled Note</title>", render_note_page("", ""))

    def test_failing_attachment_is_logged_and_isolated(self):
        note = Note(
            id="n-2",
            content="Before[File: clip](att-1)After",
            attachments=[_url("att-1", "https://youtu.be/dQw4w9WgXcQ")],
        )
        renderer = NoteRenderer(RenderConfig(video_embed_template="https://embed/{token}"))
        with self.assertLogs("noteblocks.rendering.renderer", level="ERROR") as logs:
            out = renderer.render(note)
        self.assertIn("Missing Attachment: att-1", out)
        self.assertIn("Before", out)
        self.assertIn("After", out)
        self.assertIsNotNone(logs.records[0].exc_info)


if __name__ == "__main__":
    unittest.main()
