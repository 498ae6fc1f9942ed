"""Markdown Token stream -> Document compilation with image asset resolution"""

from mddocx.core.logs import LogLevel, Sink
from mddocx.core.models import (
    MAX_HEADING_LEVEL,
    AssetMap,
    Block,
    Bold,
    BulletItem,
    CodeBlock,
    CodeSpan,
    CodeToken,
    Document,
    EmphasisSpan,
    Heading,
    HeadingToken,
    Hyperlink,
    Image,
    ImageSpan,
    InlineCode,
    InlineRun,
    InlineToken,
    Italic,
    LineBreak,
    LineBreakSpan,
    LinkSpan,
    ListToken,
    MissingImageMarker,
    OtherToken,
    Paragraph,
    ParagraphToken,
    PlainText,
    Rule,
    RuleToken,
    StrongSpan,
    TextSpan,
    Token,
)
from mddocx.core.resolve import basename, resolve_asset


def clamp_level(depth: int) -> int:
    """Clamp a markdown heading depth into the supported 1..4 range."""
    return max(1, min(depth, MAX_HEADING_LEVEL))


def _image_run(span: ImageSpan, assets: AssetMap, log: Sink) -> InlineRun:
    data = resolve_asset(span.href, assets)
    if data is None:
        log(f"Image not found in local assets: {span.href}", LogLevel.warning)
        return MissingImageMarker(href=span.href)
    log(f"Embedding image: {basename(span.href)}", LogLevel.success)
    return Image(data=data)


def compile_inline(span: InlineToken, assets: AssetMap, log: Sink) -> InlineRun:
    """Map one inline token to its InlineRun."""
    match span:
        case ImageSpan():
            return _image_run(span, assets, log)
        case LinkSpan(text=text, href=href):
            return Hyperlink(text=text, href=href)
        case StrongSpan(text=text):
            return Bold(text=text)
        case EmphasisSpan(text=text):
            return Italic(text=text)
        case CodeSpan(text=text):
            return InlineCode(text=text)
        case TextSpan(text=text):
            return PlainText(text=text)
        case LineBreakSpan():
            return LineBreak()
    raise TypeError(f"Unsupported inline token: {span!r}")


def compile_token(token: Token, assets: AssetMap, log: Sink) -> list[Block]:
    """Map one block token to zero or more Blocks."""
    match token:
        case HeadingToken(depth=depth, text=text):
            return [Heading(level=clamp_level(depth), text=text)]
        case ParagraphToken(children=children, text=text):
            if not children:
                return [Paragraph(runs=(PlainText(text=text),))]
            return [Paragraph(runs=tuple(compile_inline(c, assets, log) for c in children))]
        case ListToken(items=items):
            return [BulletItem(text=item) for item in items]
        case CodeToken(text=text):
            return [CodeBlock(lines=tuple(text.split('\n')))]
        case RuleToken():
            return [Rule()]
        case OtherToken(text=text):
            # unmapped constructs pass their literal text through; empty ones are dropped
            return [Paragraph(runs=(PlainText(text=text),))] if text else []
    raise TypeError(f"Unsupported token: {token!r}")


def compile_tokens(tokens: list[Token], assets: AssetMap, log: Sink) -> Document:
    """Compile a Token stream into a Document; image misses become visible markers."""
    blocks: list[Block] = []
    for token in tokens:
        blocks.extend(compile_token(token, assets, log))
    return Document(blocks=tuple(blocks))
