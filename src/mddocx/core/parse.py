"""markdown-it tokenization folded into the compiler's Token variants"""

from urllib.parse import unquote

from markdown_it import MarkdownIt

from mddocx.core.models import (
    CodeSpan,
    CodeToken,
    EmphasisSpan,
    HeadingToken,
    ImageSpan,
    InlineToken,
    LineBreakSpan,
    LinkSpan,
    ListToken,
    OtherToken,
    ParagraphToken,
    RuleToken,
    StrongSpan,
    TextSpan,
    Token,
)


LIST_OPEN = {'bullet_list_open', 'ordered_list_open'}
TEXT_TYPES = {'text', 'text_special', 'html_inline'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _close_index(tokens: list, i: int) -> int:
    """Index of the token closing tokens[i] (same nesting level), else the last index."""
    level = tokens[i].level
    for j in range(i + 1, len(tokens)):
        if tokens[j].nesting == -1 and tokens[j].level == level:
            return j
    return len(tokens) - 1


def _flatten(children: list) -> str:
    """Plain text of an inline token run, dropping all markup."""
    parts = []
    for c in children:
        if c.type in TEXT_TYPES or c.type in ('code_inline', 'image'):
            parts.append(c.content)
        elif c.type == 'softbreak':
            parts.append(' ')
        elif c.type == 'hardbreak':
            parts.append('\n')
    return ''.join(parts)


def _append_text(spans: list, text: str) -> None:
    """Append text, merging with a preceding TextSpan."""
    if spans and isinstance(spans[-1], TextSpan):
        spans[-1] = TextSpan(text=spans[-1].text + text)
    else:
        spans.append(TextSpan(text=text))


def inline_spans(children: list) -> list[InlineToken]:
    """Fold markdown-it inline children into InlineTokens; nested markup is flattened."""
    spans: list[InlineToken] = []
    i = 0
    while i < len(children):
        c = children[i]
        if c.type in ('strong_open', 'em_open', 'link_open'):
            end = _close_index(children, i)
            text = _flatten(children[i + 1:end])
            if c.type == 'strong_open':
                spans.append(StrongSpan(text=text))
            elif c.type == 'em_open':
                spans.append(EmphasisSpan(text=text))
            else:
                spans.append(LinkSpan(text=text, href=c.attrGet('href') or ''))
            i = end + 1
            continue

        if c.type == 'code_inline':
            spans.append(CodeSpan(text=c.content))
        elif c.type == 'image':
            spans.append(ImageSpan(href=unquote(c.attrGet('src') or ''), alt=c.content))
        elif c.type == 'hardbreak':
            spans.append(LineBreakSpan())
        elif c.type == 'softbreak':
            _append_text(spans, ' ')
        elif c.type in TEXT_TYPES:
            _append_text(spans, c.content)
        elif c.nesting == 1:
            # strikethrough and other wrappers keep only their text
            end = _close_index(children, i)
            _append_text(spans, _flatten(children[i + 1:end]))
            i = end + 1
            continue
        i += 1
    return spans


def _list_items(tokens: list) -> list[str]:
    """Item texts of a list in document order; nested items follow their parent."""
    items: list[list[str]] = []
    stack: list[int] = []
    for tok in tokens:
        if tok.type == 'list_item_open':
            items.append([])
            stack.append(len(items) - 1)
        elif tok.type == 'list_item_close':
            stack.pop()
        elif tok.type == 'inline' and stack:
            items[stack[-1]].append(tok.content)
    return [' '.join(parts) for parts in items]


def _strip_newline(text: str) -> str:
    return text[:-1] if text.endswith('\n') else text


def tokens_to_stream(tokens: list) -> list[Token]:
    """Convert a flat markdown-it block token list into compiler Tokens."""
    stream: list[Token] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == 'heading_open':
            end = _close_index(tokens, i)
            text = ''.join(t.content for t in tokens[i + 1:end] if t.type == 'inline')
            stream.append(HeadingToken(depth=int(tok.tag[1:]), text=text))
            i = end + 1
        elif tok.type == 'paragraph_open':
            end = _close_index(tokens, i)
            inline = next((t for t in tokens[i + 1:end] if t.type == 'inline'), None)
            if inline is not None:
                stream.append(ParagraphToken(
                    text=inline.content,
                    children=inline_spans(inline.children or []),
                ))
            i = end + 1
        elif tok.type in LIST_OPEN:
            end = _close_index(tokens, i)
            stream.append(ListToken(items=_list_items(tokens[i:end + 1])))
            i = end + 1
        elif tok.type in ('fence', 'code_block'):
            stream.append(CodeToken(text=_strip_newline(tok.content)))
            i += 1
        elif tok.type == 'hr':
            stream.append(RuleToken())
            i += 1
        elif tok.type == 'html_block':
            stream.append(OtherToken(type='html', text=tok.content.strip()))
            i += 1
        elif tok.nesting == 1:
            end = _close_index(tokens, i)
            text = '\n'.join(t.content for t in tokens[i + 1:end] if t.type == 'inline')
            stream.append(OtherToken(type=tok.type.removesuffix('_open'), text=text))
            i = end + 1
        else:
            i += 1
    return stream


def parse_markdown(text: str, parser_config: str = 'gfm-like') -> list[Token]:
    """Tokenize markdown text into the compiler's Token stream."""
    return tokens_to_stream(_make_parser(parser_config).parse(text))
