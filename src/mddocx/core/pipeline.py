"""Conversion entry points and file-level md2docx / docx2md pipeline steps"""

import asyncio
from pathlib import Path
from typing import Optional

from mddocx.config import Settings
from mddocx.core.compile import compile_tokens
from mddocx.core.encode import encode_document
from mddocx.core.extract import extract_markdown
from mddocx.core.logs import LogLevel, Sink
from mddocx.core.models import AssetMap
from mddocx.core.parse import parse_markdown
from mddocx.core.polish import Polisher, polish_text


IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.bmp'}
MD_EXTENSIONS = {'.md', '.markdown', '.txt'}


async def compile_and_encode(
    markdown: str,
    assets: AssetMap,
    log: Sink,
    settings: Settings = None,
    ) -> bytes:
    """Compile markdown into a Document and encode it to .docx bytes.

    Unresolved images are recovered as in-document markers; an encoder
    failure is logged and re-raised unchanged.
    """
    settings = settings or Settings()
    log("Initializing DOCX engine...", LogLevel.info)
    document = compile_tokens(parse_markdown(markdown, settings.parser_config), assets, log)

    log("Finalizing DOCX binary data...", LogLevel.info)
    try:
        return await asyncio.to_thread(
            encode_document, document, settings.image_width, settings.image_height,
        )
    except Exception as e:
        log(f"Encoding failed: {e}", LogLevel.error)
        raise


async def decode_and_extract(data: bytes, log: Sink) -> str:
    """Decode .docx bytes to post-processed markdown; bad input is logged and re-raised unchanged."""
    return await asyncio.to_thread(extract_markdown, data, log)


def load_assets(asset_dir: Path) -> dict[str, bytes]:
    """Read image files under asset_dir, keyed by POSIX path relative to it."""
    return {
        p.relative_to(asset_dir).as_posix(): p.read_bytes()
        for p in sorted(asset_dir.rglob('*'))
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    }


def docx_name(md_path: Path) -> str:
    """Output .docx filename for a markdown source (notes.md -> notes.docx)."""
    stem = md_path.stem if md_path.suffix.lower() in MD_EXTENSIONS else md_path.name
    return f"{stem}.docx"


def markdown_name(docx_path: Path) -> str:
    """Output .md filename for a .docx source."""
    return f"{docx_path.stem}.md"


async def run_md2docx(
    md_path: Path,
    asset_dir: Optional[Path],
    output_dir: Path,
    settings: Settings,
    log: Sink,
    polisher: Optional[Polisher] = None,
    ) -> Path:
    """Convert a markdown file (plus optional image directory) to a .docx in output_dir.

    Raises ValueError, after an error log, when the file holds no markdown.
    """
    log("Starting conversion workflow...", LogLevel.info)
    markdown = md_path.read_text(encoding='utf-8')
    if not markdown.strip():
        log("No Markdown content to convert!", LogLevel.error)
        raise ValueError(f"No markdown content in {md_path}")
    log(f"Markdown file loaded: {md_path.name}", LogLevel.success)

    assets = load_assets(asset_dir) if asset_dir else {}
    for key in assets:
        log(f"Image registered: {key}", LogLevel.info)

    markdown = (await polish_text(markdown, polisher, log)).text

    log("Generating Word Document...", LogLevel.info)
    data = await compile_and_encode(markdown, assets, log, settings)

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / docx_name(md_path)
    out_path.write_bytes(data)
    log(f"Conversion successful! Document written to {out_path}", LogLevel.success)
    return out_path


async def run_docx2md(
    docx_path: Path,
    output_dir: Path,
    log: Sink,
    polisher: Optional[Polisher] = None,
    ) -> Path:
    """Convert a .docx file to markdown in output_dir; images are referenced, not written."""
    log("Starting conversion workflow...", LogLevel.info)
    markdown = await decode_and_extract(docx_path.read_bytes(), log)
    markdown = (await polish_text(markdown, polisher, log)).text

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / markdown_name(docx_path)
    out_path.write_text(markdown, encoding='utf-8')
    log(f"Conversion successful! Markdown written to {out_path}", LogLevel.success)
    return out_path
