"""Style mapping tables: block/run rendering attributes and the inverse docx style map

Spacing, indent, and line values are twips (1/20 pt); font sizes are
half-points; border sizes are eighths of a point.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Border(BaseModel):
    model_config = ConfigDict(frozen=True)
    color: str
    size: int
    space: int
    style: str = "single"


class BlockStyle(BaseModel):
    model_config = ConfigDict(frozen=True)
    space_before: Optional[int] = None
    space_after:  Optional[int] = None
    line:         Optional[int] = None     # line pitch, lineRule="auto"
    indent_left:  Optional[int] = None
    indent_right: Optional[int] = None
    shading:      Optional[str] = None
    borders:      dict[str, Border] = {}   # side name (top/left/bottom/right) -> border
    style_name:   Optional[str] = None     # python-docx paragraph style


class RunStyle(BaseModel):
    model_config = ConfigDict(frozen=True)
    bold:       bool = False
    italic:     bool = False
    underline:  bool = False
    font:       Optional[str] = None
    size:       Optional[int] = None
    color:      Optional[str] = None
    shading:    Optional[str] = None
    style_name: Optional[str] = None       # character style reference


CODE_FONT = "Consolas"

_CODE_BORDER = Border(color="E2E8F0", size=4, space=8)

BLOCK_STYLES: dict[str, BlockStyle] = {
    "heading":   BlockStyle(space_before=400, space_after=200),
    "paragraph": BlockStyle(space_after=150),
    "bullet":    BlockStyle(space_after=100, style_name="List Bullet"),
    "code": BlockStyle(
        space_before=240, space_after=240, line=320,
        indent_left=240, indent_right=240,
        shading="F8F9FA",
        borders={side: _CODE_BORDER for side in ("top", "left", "bottom", "right")},
    ),
    "rule": BlockStyle(
        space_before=200, space_after=200,
        borders={"bottom": Border(color="CBD5E1", size=6, space=1)},
    ),
}

RUN_STYLES: dict[str, RunStyle] = {
    "plain":         RunStyle(),
    "bold":          RunStyle(bold=True),
    "italic":        RunStyle(italic=True),
    "inline_code":   RunStyle(font=CODE_FONT, color="D11111", shading="F3F4F6"),
    "hyperlink":     RunStyle(underline=True, color="0563C1", style_name="Hyperlink"),
    "missing_image": RunStyle(bold=True, color="FF0000"),
    "code_line":     RunStyle(font=CODE_FONT, size=18),
}


def heading_style_name(level: int) -> str:
    """python-docx paragraph style for a heading level."""
    return f"Heading {level}"


# Inverse direction: docx style names -> markdown constructs (mammoth style map).
DOCX_STYLE_MAP: list[str] = [
    "p[style-name='Code'] => pre > code:fresh",
    "p[style-name='Source Code'] => pre > code:fresh",
    "p[style-name='Consolas'] => code",
    "r[style-name='Code Text'] => code",
    "p[style-name='Heading 1'] => h1:fresh",
    "p[style-name='Heading 2'] => h2:fresh",
    "p[style-name='Heading 3'] => h3:fresh",
]


def docx_style_map() -> str:
    """Return DOCX_STYLE_MAP in mammoth's newline-separated form."""
    return "\n".join(DOCX_STYLE_MAP)
