"""Data models for both conversion directions: tokens, blocks, and inline runs"""

from typing import Annotated, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


AssetMap = Mapping[str, bytes]

MAX_HEADING_LEVEL = 4


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- tokens (compiler input) ---

class TextSpan(_Frozen):
    kind: Literal["text"] = "text"
    text: str


class StrongSpan(_Frozen):
    kind: Literal["strong"] = "strong"
    text: str


class EmphasisSpan(_Frozen):
    kind: Literal["emphasis"] = "emphasis"
    text: str


class CodeSpan(_Frozen):
    kind: Literal["code_span"] = "code_span"
    text: str


class LinkSpan(_Frozen):
    kind: Literal["link"] = "link"
    text: str
    href: str


class ImageSpan(_Frozen):
    kind: Literal["image"] = "image"
    href: str
    alt: str = ""


class LineBreakSpan(_Frozen):
    kind: Literal["line_break"] = "line_break"


InlineToken = Annotated[
    Union[TextSpan, StrongSpan, EmphasisSpan, CodeSpan, LinkSpan, ImageSpan, LineBreakSpan],
    Field(discriminator="kind"),
]


class HeadingToken(_Frozen):
    kind: Literal["heading"] = "heading"
    depth: int = Field(ge=1)
    text: str


class ParagraphToken(_Frozen):
    kind: Literal["paragraph"] = "paragraph"
    text: str = ""
    children: list[InlineToken] = []


class ListToken(_Frozen):
    kind: Literal["list"] = "list"
    items: list[str] = []


class CodeToken(_Frozen):
    kind: Literal["code"] = "code"
    text: str


class RuleToken(_Frozen):
    kind: Literal["horizontal_rule"] = "horizontal_rule"


class OtherToken(_Frozen):
    """Any block construct without a dedicated mapping (blockquote, table, html)."""
    kind: Literal["other"] = "other"
    type: str
    text: str = ""


Token = Annotated[
    Union[HeadingToken, ParagraphToken, ListToken, CodeToken, RuleToken, OtherToken],
    Field(discriminator="kind"),
]


# --- inline runs ---

class PlainText(_Frozen):
    kind: Literal["plain"] = "plain"
    text: str


class Bold(_Frozen):
    kind: Literal["bold"] = "bold"
    text: str


class Italic(_Frozen):
    kind: Literal["italic"] = "italic"
    text: str


class InlineCode(_Frozen):
    kind: Literal["inline_code"] = "inline_code"
    text: str


class Hyperlink(_Frozen):
    kind: Literal["hyperlink"] = "hyperlink"
    text: str
    href: str


class Image(_Frozen):
    kind: Literal["image"] = "image"
    data: bytes


class MissingImageMarker(_Frozen):
    kind: Literal["missing_image"] = "missing_image"
    href: str

    @property
    def label(self) -> str:
        """Visible marker text, framed by line breaks."""
        return f"\n[MISSING IMAGE: {self.href}]\n"


class LineBreak(_Frozen):
    kind: Literal["line_break"] = "line_break"


InlineRun = Annotated[
    Union[PlainText, Bold, Italic, InlineCode, Hyperlink, Image, MissingImageMarker, LineBreak],
    Field(discriminator="kind"),
]


# --- blocks ---

class Heading(_Frozen):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=MAX_HEADING_LEVEL)
    text: str


class Paragraph(_Frozen):
    kind: Literal["paragraph"] = "paragraph"
    runs: tuple[InlineRun, ...] = ()


class BulletItem(_Frozen):
    kind: Literal["bullet"] = "bullet"
    text: str
    level: int = 0


class CodeBlock(_Frozen):
    kind: Literal["code"] = "code"
    lines: tuple[str, ...]


class Rule(_Frozen):
    kind: Literal["rule"] = "rule"


Block = Annotated[
    Union[Heading, Paragraph, BulletItem, CodeBlock, Rule],
    Field(discriminator="kind"),
]


class Document(_Frozen):
    """Compiled document: blocks in markdown source order."""
    blocks: tuple[Block, ...] = ()
