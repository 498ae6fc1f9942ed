"""Unit tests for core/parse.py"""

import pytest

from mddocx.core.models import (
    CodeSpan,
    CodeToken,
    EmphasisSpan,
    HeadingToken,
    ImageSpan,
    LineBreakSpan,
    LinkSpan,
    ListToken,
    OtherToken,
    ParagraphToken,
    RuleToken,
    StrongSpan,
    TextSpan,
)
from mddocx.core.parse import parse_markdown


def _inline(md: str):
    tokens = parse_markdown(md)
    assert len(tokens) == 1
    assert isinstance(tokens[0], ParagraphToken)
    return tokens[0].children


def test_sample_token_kinds(sample_tokens):
    """Block constructs map to their token kinds in source order."""
    assert [t.kind for t in sample_tokens] == [
        "heading", "paragraph", "heading", "list", "code", "horizontal_rule", "paragraph",
    ]


def test_heading_depth_and_text():
    """heading_open depth and raw inline text are preserved."""
    assert parse_markdown("### Third level\n") == [HeadingToken(depth=3, text="Third level")]


def test_deep_heading_keeps_depth():
    """Depth beyond 4 is left for the compiler to clamp."""
    assert parse_markdown("###### Six\n")[0].depth == 6


def test_paragraph_inline_styles():
    """strong, em, and code spans become their own inline tokens."""
    assert _inline("**b** and *i* and `c`\n") == [
        StrongSpan(text="b"),
        TextSpan(text=" and "),
        EmphasisSpan(text="i"),
        TextSpan(text=" and "),
        CodeSpan(text="c"),
    ]


def test_nested_markup_is_flattened():
    """Emphasis nested inside strong contributes only its text."""
    assert _inline("**bold *and* more**\n") == [StrongSpan(text="bold and more")]


def test_link_text_and_href():
    """link_open href and its text are captured."""
    assert _inline("[site](https://example.com)\n") == [LinkSpan(text="site", href="https://example.com")]


def test_image_href_and_alt():
    """image src and alt text are captured."""
    assert _inline("See ![a figure](./img/a.png)\n") == [
        TextSpan(text="See "),
        ImageSpan(href="./img/a.png", alt="a figure"),
    ]


def test_image_href_is_unquoted():
    """Percent-encoded image paths are decoded so they match file names."""
    children = _inline("![](<my images/a b.png>)\n")
    assert children == [ImageSpan(href="my images/a b.png")]


def test_hard_break_and_soft_break():
    """Hard breaks become LineBreakSpan; soft breaks fold into a space."""
    assert _inline("one  \ntwo\nthree\n") == [
        TextSpan(text="one"),
        LineBreakSpan(),
        TextSpan(text="two three"),
    ]


def test_strikethrough_keeps_text():
    """Unmapped inline wrappers keep only their text."""
    assert _inline("a ~~gone~~ b\n") == [TextSpan(text="a gone b")]


def test_list_items_flattened_in_order():
    """Nested list items follow their parent as separate items."""
    tokens = parse_markdown("- one\n- two\n  - nested\n- three\n")
    assert tokens == [ListToken(items=["one", "two", "nested", "three"])]


def test_ordered_list_is_a_list():
    """Ordered lists produce a ListToken as well."""
    assert parse_markdown("1. a\n2. b\n") == [ListToken(items=["a", "b"])]


@pytest.mark.parametrize("md,expected", [
    ("```python\nprint('x')\nx = 1\n```\n", "print('x')\nx = 1"),
    ("    indented\n",                    "indented"),
    ("```\n```\n",                        ""),
])
def test_code_blocks_drop_trailing_newline(md, expected):
    """Fenced and indented code keep their text without the final newline."""
    assert parse_markdown(md) == [CodeToken(text=expected)]


def test_horizontal_rule():
    """hr produces a RuleToken."""
    assert parse_markdown("---\n") == [RuleToken()]


def test_blockquote_is_other_with_text():
    """A blockquote becomes an OtherToken carrying its text."""
    assert parse_markdown("> quoted text\n") == [OtherToken(type="blockquote", text="quoted text")]


def test_html_block_is_other():
    """Raw HTML blocks pass through as OtherToken text."""
    assert parse_markdown("<div>raw</div>\n") == [OtherToken(type="html", text="<div>raw</div>")]


def test_table_is_other():
    """Tables become OtherToken with cell texts."""
    tokens = parse_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert len(tokens) == 1
    assert tokens[0].type == "table"
    assert tokens[0].text.split("\n") == ["a", "b", "1", "2"]
