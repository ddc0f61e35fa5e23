"""Public API for noteblocks."""

from .catalog import AttachmentCatalog
from .codec import FlatTextCodec, decode, encode
from .domain import AttachmentRef, Segment, TextSegment
from .models import Attachment, AttachmentKind, Note, OutputData
from .mutations import FlatEditSession, StructuredEditSession
from .rendering.classifier import RenderKind, RenderVariant, classify
from .rendering.renderer import NoteRenderer
from .structured import flatten, upgrade

__all__ = [
    "Attachment",
    "AttachmentCatalog",
    "AttachmentKind",
    "AttachmentRef",
    "FlatEditSession",
    "FlatTextCodec",
    "Note",
    "NoteRenderer",
    "OutputData",
    "RenderKind",
    "RenderVariant",
    "Segment",
    "StructuredEditSession",
    "TextSegment",
    "classify",
    "decode",
    "encode",
    "flatten",
    "upgrade",
]
