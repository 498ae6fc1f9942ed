""".docx -> markdown extraction with mammoth and per-call image placeholders"""

from io import BytesIO

import mammoth

from mddocx.core.logs import LogLevel, Sink
from mddocx.core.postprocess import placeholder, postprocess_markdown
from mddocx.core.styles import docx_style_map


def _image_converter(log: Sink):
    """Build a mammoth image handler numbering images 1, 2, ... for one call."""
    count = 0

    def convert(image) -> dict[str, str]:
        nonlocal count
        count += 1
        log(f"Asset detected: Image #{count}", LogLevel.success)
        return {"src": placeholder(count)}

    return mammoth.images.img_element(convert)


def extract_raw(data: bytes, log: Sink) -> str:
    """Decode .docx bytes to markdown that still carries image placeholders."""
    result = mammoth.convert_to_markdown(
        BytesIO(data),
        style_map=docx_style_map(),
        convert_image=_image_converter(log),
    )
    for message in result.messages:
        log(f"Conversion notice: {message.message}", LogLevel.warning)
    return result.value


def extract_markdown(data: bytes, log: Sink) -> str:
    """Extract markdown from .docx bytes; images become images/figure_<n>.png references."""
    log("Analyzing Word structure and identifying assets...", LogLevel.info)
    try:
        raw = extract_raw(data, log)
    except Exception as e:
        log(f"Extraction failed: {e}", LogLevel.error)
        raise

    log("Refining document structure...", LogLevel.info)
    markdown = postprocess_markdown(raw)
    log("Base Markdown generated successfully.", LogLevel.success)
    return markdown
