"""Rewrites applied to raw extraction output: image placeholders and over-escaping"""

import re


PLACEHOLDER_PREFIX = "IMAGE_PLACEHOLDER_"

SRC_ATTR_RE = re.compile(r'src="IMAGE_PLACEHOLDER_(\d+)"')
IMAGE_LINK_RE = re.compile(r'!\[(?P<alt>[^\]]*)\]\(IMAGE_PLACEHOLDER_(?P<n>\d+)\)')
ESCAPED_PUNCT_RE = re.compile(r'\\([_()\[\]"\'])')
ESCAPED_PERIOD_RE = re.compile(r'\\\.')
ESCAPED_HYPHEN_RE = re.compile(r'\\-')


def placeholder(n: int) -> str:
    return f"{PLACEHOLDER_PREFIX}{n}"


def figure_path(n) -> str:
    """Canonical markdown path for the n-th extracted image."""
    return f"images/figure_{n}.png"


def rewrite_placeholders(markdown: str) -> str:
    """Replace image placeholders with their canonical figure paths.

    Only the src attribute and image-link forms are rewritten; placeholder-like
    words in body text arrive escaped and are left alone.
    """
    markdown = SRC_ATTR_RE.sub(lambda m: f"![]({figure_path(m.group(1))})", markdown)
    return IMAGE_LINK_RE.sub(lambda m: f"![{m['alt']}]({figure_path(m['n'])})", markdown)


def strip_escapes(markdown: str) -> str:
    """Drop backslashes before _ ( ) [ ] " ', then before '.', then before '-'."""
    markdown = ESCAPED_PUNCT_RE.sub(r'\1', markdown)
    markdown = ESCAPED_PERIOD_RE.sub('.', markdown)
    return ESCAPED_HYPHEN_RE.sub('-', markdown)


def postprocess_markdown(markdown: str) -> str:
    """Apply placeholder rewrite and escape cleanup, in that order."""
    return strip_escapes(rewrite_placeholders(markdown))
