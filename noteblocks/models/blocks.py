"""
Structured block document models.

The shape follows the Editor.js ``OutputData`` layout persisted by the
interactive editor: ``{"time": ..., "blocks": [{"id", "type", "data"}], "version": ...}``.
Block ``data`` keeps unrecognised keys so a load/save cycle never drops
editor-specific settings; block types this package does not know are kept
as ``UnknownBlock``.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import ConfigDict, Discriminator, Field, Tag

from ..utils import now_ms
from ._base import NoteModel

EDITOR_VERSION = "2.29.0"


class BlockData(NoteModel):
    model_config = NoteModel.model_config | ConfigDict(extra="allow")


class TextData(BlockData):
    text: str = ""


class HeaderData(BlockData):
    text: str = ""
    level: int = Field(default=2, ge=1, le=6)


class ListItem(BlockData):
    """Nested list item (list tool v2). Older documents store plain strings instead."""

    content: str = ""
    items: List["ListItem"] = Field(default_factory=list)


class ListData(BlockData):
    style: str = "unordered"
    items: List[Union[str, ListItem]] = Field(default_factory=list)


class ChecklistItem(BlockData):
    text: str = ""
    checked: bool = False


class ChecklistData(BlockData):
    items: List[ChecklistItem] = Field(default_factory=list)


class QuoteData(BlockData):
    text: str = ""
    caption: str = ""


class WarningData(BlockData):
    title: str = ""
    message: str = ""


class CodeData(BlockData):
    code: str = ""


class TableData(BlockData):
    with_headings: bool = False
    content: List[List[str]] = Field(default_factory=list)


class AttachmentData(BlockData):
    attachment_id: str


class _Block(NoteModel):
    id: Optional[str] = None


class ParagraphBlock(_Block):
    type: Literal["paragraph"] = "paragraph"
    data: TextData = Field(default_factory=TextData)


class HeaderBlock(_Block):
    type: Literal["header"] = "header"
    data: HeaderData = Field(default_factory=HeaderData)


class ListBlock(_Block):
    type: Literal["list"] = "list"
    data: ListData = Field(default_factory=ListData)


class ChecklistBlock(_Block):
    type: Literal["checklist"] = "checklist"
    data: ChecklistData = Field(default_factory=ChecklistData)


class QuoteBlock(_Block):
    type: Literal["quote"] = "quote"
    data: QuoteData = Field(default_factory=QuoteData)


class WarningBlock(_Block):
    type: Literal["warning"] = "warning"
    data: WarningData = Field(default_factory=WarningData)


class CodeBlock(_Block):
    type: Literal["code"] = "code"
    data: CodeData = Field(default_factory=CodeData)


class TableBlock(_Block):
    type: Literal["table"] = "table"
    data: TableData = Field(default_factory=TableData)


class DelimiterBlock(_Block):
    type: Literal["delimiter"] = "delimiter"
    data: Dict[str, Any] = Field(default_factory=dict)


class AttachmentBlock(_Block):
    """Holds only the attachment id; the record is resolved through the catalog."""

    type: Literal["attachment"] = "attachment"
    data: AttachmentData

    @property
    def attachment_id(self) -> str:
        return self.data.attachment_id


class UnknownBlock(_Block):
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


_KNOWN_TYPES = {
    "paragraph",
    "header",
    "list",
    "checklist",
    "quote",
    "warning",
    "code",
    "table",
    "delimiter",
    "attachment",
}


def _block_tag(value: Any) -> str:
    raw = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return raw if raw in _KNOWN_TYPES else "unknown"


Block = Annotated[
    Union[
        Annotated[ParagraphBlock, Tag("paragraph")],
        Annotated[HeaderBlock, Tag("header")],
        Annotated[ListBlock, Tag("list")],
        Annotated[ChecklistBlock, Tag("checklist")],
        Annotated[QuoteBlock, Tag("quote")],
        Annotated[WarningBlock, Tag("warning")],
        Annotated[CodeBlock, Tag("code")],
        Annotated[TableBlock, Tag("table")],
        Annotated[DelimiterBlock, Tag("delimiter")],
        Annotated[AttachmentBlock, Tag("attachment")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(_block_tag),
]


class OutputData(NoteModel):
    time: Optional[int] = Field(default_factory=now_ms)
    blocks: List[Block] = Field(default_factory=list)
    version: str = EDITOR_VERSION


def paragraph(text: str = "") -> ParagraphBlock:
    return ParagraphBlock(data=TextData(text=text))


def attachment_block(attachment_id: str) -> AttachmentBlock:
    return AttachmentBlock(data=AttachmentData(attachment_id=attachment_id))
