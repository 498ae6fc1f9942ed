"""Unit tests for core/extract.py"""

import re
import zipfile

import pytest

from mddocx.core.extract import extract_markdown, extract_raw
from mddocx.core.logs import LogBuffer, LogLevel
from mddocx.core.styles import DOCX_STYLE_MAP, docx_style_map


def test_raw_extraction_carries_placeholders(make_docx, log):
    """Before post-processing, images are placeholder references numbered from 1."""
    raw = extract_raw(make_docx([("Normal", "Intro"), ("Normal", None), ("Normal", None)]), log)
    assert re.findall(r"IMAGE\\?_PLACEHOLDER\\?_(\d+)", raw) == ["1", "2"]


def test_single_image_rewritten_once(make_docx, log):
    """One embedded image yields exactly one figure path and no placeholder."""
    markdown = extract_markdown(make_docx([("Normal", "Intro"), ("Normal", None)]), log)
    assert markdown.count("images/figure_1.png") == 1
    assert "IMAGE_PLACEHOLDER" not in markdown


def test_placeholder_like_body_text_survives(make_docx, log):
    """Text that looks like a placeholder is not mistaken for an image."""
    markdown = extract_markdown(make_docx([("Normal", "see IMAGE_PLACEHOLDER_7 here"), ("Normal", None)]), log)
    assert "see IMAGE_PLACEHOLDER_7 here" in markdown
    assert "images/figure_7.png" not in markdown
    assert markdown.count("images/figure_1.png") == 1


def test_placeholder_numbering_logged_in_order(make_docx, log):
    """Each image assignment is logged with its number."""
    extract_markdown(make_docx([("Normal", None), ("Normal", None)]), log)
    detected = [m for m in log.messages(LogLevel.success) if m.startswith("Asset detected")]
    assert detected == ["Asset detected: Image #1", "Asset detected: Image #2"]


def test_numbering_restarts_per_call(make_docx):
    """Two extractions of the same bytes both start at 1."""
    data = make_docx([("Normal", None), ("Normal", None)])
    first, second = LogBuffer(), LogBuffer()
    assert extract_markdown(data, first) == extract_markdown(data, second)
    for log in (first, second):
        assert "Asset detected: Image #1" in log.messages()
        assert "Asset detected: Image #3" not in log.messages()


def test_headings_map_to_markdown(make_docx, log):
    """Heading 1..3 paragraphs become markdown headings."""
    markdown = extract_markdown(
        make_docx([("Heading 1", "Top"), ("Heading 2", "Mid"), ("Heading 3", "Low")]), log,
    )
    assert "# Top" in markdown
    assert "## Mid" in markdown
    assert "### Low" in markdown


def test_escapes_cleaned(make_docx, log):
    """Mammoth's escaping of _ . - ( ) is undone."""
    markdown = extract_markdown(make_docx([("Normal", "p_value (x) v1.2 well-known")]), log)
    assert "p_value (x) v1.2 well-known" in markdown


def test_corrupted_bytes_propagate_unchanged(log):
    """Undecodable input logs an error and re-raises the decoder's exception."""
    with pytest.raises(zipfile.BadZipFile):
        extract_markdown(b"this is not a docx", log)
    errors = log.messages(LogLevel.error)
    assert len(errors) == 1
    assert errors[0].startswith("Extraction failed")


def test_style_map_covers_code_and_headings():
    """The inverse style map covers code paragraphs, code runs, and headings 1..3."""
    text = docx_style_map()
    assert text.split("\n") == DOCX_STYLE_MAP
    assert "p[style-name='Source Code'] => pre > code:fresh" in DOCX_STYLE_MAP
    assert "r[style-name='Code Text'] => code" in DOCX_STYLE_MAP
    for level in (1, 2, 3):
        assert f"p[style-name='Heading {level}'] => h{level}:fresh" in DOCX_STYLE_MAP
