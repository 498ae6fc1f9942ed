"""Root test configuration: shared image and .docx fixtures"""

import base64
from io import BytesIO

import docx
import pytest

from mddocx.core.logs import LogBuffer


# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture(name="png_bytes")
def png_bytes_fixture():
    return PNG_BYTES


@pytest.fixture(name="log")
def log_fixture():
    return LogBuffer()


@pytest.fixture(name="make_docx")
def make_docx_fixture():
    """Factory building .docx bytes from (style, text) paragraphs; text None inserts an image."""

    def _make(paragraphs: list[tuple[str, str]]) -> bytes:
        doc = docx.Document()
        for style, text in paragraphs:
            if text is None:
                doc.add_paragraph().add_run().add_picture(BytesIO(PNG_BYTES))
            else:
                doc.add_paragraph(text, style=style)
        buffer = BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    return _make
