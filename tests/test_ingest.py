"""Tests for attachment ingestion."""

import base64
import os
import tempfile
import unittest
from pathlib import Path

from noteblocks.ingest import (
    IncomingFile,
    IngestConfig,
    ingest_files,
    kind_for_mime,
    link_attachment,
    normalize_link,
)
from noteblocks.models.note import AttachmentKind
from noteblocks.rendering.classifier import RenderKind, classify


class TestIngestFiles(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = Path(self.tmp.name)

    async def test_batch_with_oversized_and_missing_files(self):
        small = self.dir / "notes.txt"
        small.write_bytes(b"hello")
        big = self.dir / "huge.png"
        big.write_bytes(b"x" * 64)
        files = [
            IncomingFile.from_path(small),
            IncomingFile.from_path(big),
            IncomingFile.from_path(self.dir / "missing.mp3"),
            IncomingFile(name="clip.mp4", data=b"\x00\x01", mime_type="video/mp4"),
        ]
        report = await ingest_files(files, IngestConfig(max_file_bytes=32))

        self.assertEqual([a.name for a in report.attachments], ["notes.txt", "clip.mp4"])
        self.assertEqual(sorted(f.filename for f in report.failures), ["huge.png", "missing.mp3"])
        self.assertFalse(report.ok)

        text_att, video_att = report.attachments
        self.assertEqual(text_att.kind, AttachmentKind.DOCUMENT)
        self.assertEqual(text_att.size, 5)
        self.assertEqual(text_att.url, "data:text/plain;base64," + base64.b64encode(b"hello").decode())
        self.assertEqual(video_att.kind, AttachmentKind.VIDEO)
        self.assertTrue(video_att.id.startswith("att-"))
        self.assertNotEqual(text_att.id, video_att.id)

    async def test_empty_batch(self):
        report = await ingest_files([])
        self.assertEqual(report.attachments, [])
        self.assertTrue(report.ok)


class TestKinds(unittest.TestCase):
    def test_kind_for_mime(self):
        self.assertEqual(kind_for_mime("audio/mpeg"), AttachmentKind.AUDIO)
        self.assertEqual(kind_for_mime("video/webm"), AttachmentKind.VIDEO)
        self.assertEqual(kind_for_mime("image/png"), AttachmentKind.IMAGE)
        self.assertEqual(kind_for_mime("application/pdf"), AttachmentKind.DOCUMENT)
        self.assertEqual(kind_for_mime(""), AttachmentKind.DOCUMENT)

    def test_max_bytes_from_environment(self):
        old = os.environ.get("NOTEBLOCKS_MAX_FILE_BYTES")
        os.environ["NOTEBLOCKS_MAX_FILE_BYTES"] = "1024"
        try:
            self.assertEqual(IngestConfig().max_file_bytes, 1024)
        finally:
            if old is None:
                del os.environ["NOTEBLOCKS_MAX_FILE_BYTES"]
            else:
                os.environ["NOTEBLOCKS_MAX_FILE_BYTES"] = old


class TestLinks(unittest.TestCase):
    def test_normalize_adds_scheme(self):
        self.assertEqual(normalize_link("  example.com/a "), "https://example.com/a")
        self.assertEqual(normalize_link("HTTP://example.com"), "HTTP://example.com")

    def test_link_names(self):
        self.assertEqual(link_attachment("youtu.be/dQw4w9WgXcQ").name, "YouTube Video")
        self.assertEqual(link_attachment("https://x.com/someone/status/42").name, "Tweet")
        self.assertEqual(link_attachment("example.com/page").name, "example.com")
        self.assertEqual(link_attachment("example.com", name="Mine").name, "Mine")

    def test_link_attachment_is_url_kind(self):
        att = link_attachment("https://example.com")
        self.assertEqual(att.kind, AttachmentKind.URL)
        self.assertEqual(classify(att).kind, RenderKind.GENERIC_LINK)

    def test_empty_link_rejected(self):
        with self.assertRaises(ValueError):
            link_attachment("   ")


if __name__ == "__main__":
    unittest.main()
