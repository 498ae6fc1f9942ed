"""Document -> .docx bytes rendering with python-docx"""

from io import BytesIO

import docx
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Pt, RGBColor, Twips
from docx.text.paragraph import Paragraph as DocxParagraph
from docx.text.run import Run

from mddocx.core.models import (
    Block,
    Bold,
    BulletItem,
    CodeBlock,
    Document,
    Heading,
    Hyperlink,
    Image,
    InlineCode,
    InlineRun,
    Italic,
    LineBreak,
    MissingImageMarker,
    Paragraph,
    PlainText,
    Rule,
)
from mddocx.core.styles import BLOCK_STYLES, RUN_STYLES, BlockStyle, RunStyle, heading_style_name


EMU_PER_PX = 9525

# Schema successors used to keep pPr / rPr children in the order Word expects.
PPR_AFTER_PBDR = (
    'w:shd', 'w:tabs', 'w:suppressAutoHyphens', 'w:kinsoku', 'w:wordWrap',
    'w:overflowPunct', 'w:topLinePunct', 'w:autoSpaceDE', 'w:autoSpaceDN',
    'w:bidi', 'w:adjustRightInd', 'w:snapToGrid', 'w:spacing', 'w:ind',
    'w:contextualSpacing', 'w:mirrorIndents', 'w:suppressOverlap', 'w:jc',
    'w:textDirection', 'w:textAlignment', 'w:textboxTightWrap',
    'w:outlineLvl', 'w:divId', 'w:cnfStyle', 'w:rPr', 'w:sectPr', 'w:pPrChange',
)
PPR_AFTER_SHD = PPR_AFTER_PBDR[1:]
RPR_AFTER_SHD = (
    'w:fitText', 'w:vertAlign', 'w:rtl', 'w:cs', 'w:em', 'w:lang',
    'w:eastAsianLayout', 'w:specVanish', 'w:oMath',
)


def _shading(fill: str):
    shd = OxmlElement('w:shd')
    shd.set(qn('w:val'), 'clear')
    shd.set(qn('w:color'), 'auto')
    shd.set(qn('w:fill'), fill)
    return shd


def _borders(style: BlockStyle):
    pBdr = OxmlElement('w:pBdr')
    for side in ('top', 'left', 'bottom', 'right'):
        border = style.borders.get(side)
        if border is None:
            continue
        el = OxmlElement(f'w:{side}')
        el.set(qn('w:val'), border.style)
        el.set(qn('w:sz'), str(border.size))
        el.set(qn('w:space'), str(border.space))
        el.set(qn('w:color'), border.color)
        pBdr.append(el)
    return pBdr


def apply_block_style(paragraph: DocxParagraph, style: BlockStyle) -> None:
    """Apply spacing, indent, border, and shading attributes to a paragraph."""
    fmt = paragraph.paragraph_format
    if style.space_before is not None:
        fmt.space_before = Twips(style.space_before)
    if style.space_after is not None:
        fmt.space_after = Twips(style.space_after)
    if style.indent_left is not None:
        fmt.left_indent = Twips(style.indent_left)
    if style.indent_right is not None:
        fmt.right_indent = Twips(style.indent_right)

    pPr = paragraph._p.get_or_add_pPr()
    if style.line is not None:
        spacing = pPr.get_or_add_spacing()
        spacing.set(qn('w:line'), str(style.line))
        spacing.set(qn('w:lineRule'), 'auto')
    if style.borders:
        pPr.insert_element_before(_borders(style), *PPR_AFTER_PBDR)
    if style.shading:
        pPr.insert_element_before(_shading(style.shading), *PPR_AFTER_SHD)


def apply_run_style(run: Run, style: RunStyle) -> None:
    """Apply character formatting to a run."""
    if style.bold:
        run.bold = True
    if style.italic:
        run.italic = True
    if style.underline:
        run.underline = True
    if style.font:
        run.font.name = style.font
    if style.size:
        run.font.size = Pt(style.size / 2)
    if style.color:
        run.font.color.rgb = RGBColor.from_string(style.color)
    if style.style_name:
        run._r.get_or_add_rPr().style = style.style_name
    if style.shading:
        run._r.get_or_add_rPr().insert_element_before(_shading(style.shading), *RPR_AFTER_SHD)


def _styled_run(paragraph: DocxParagraph, text: str, kind: str) -> Run:
    run = paragraph.add_run(text)
    apply_run_style(run, RUN_STYLES[kind])
    return run


def _add_hyperlink(paragraph: DocxParagraph, link: Hyperlink) -> None:
    if not link.href:
        _styled_run(paragraph, link.text, 'hyperlink')
        return
    r_id = paragraph.part.relate_to(link.href, RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement('w:hyperlink')
    hyperlink.set(qn('r:id'), r_id)
    r = OxmlElement('w:r')
    hyperlink.append(r)
    paragraph._p.append(hyperlink)
    run = Run(r, paragraph)
    run.text = link.text
    apply_run_style(run, RUN_STYLES['hyperlink'])


def render_run(paragraph: DocxParagraph, item: InlineRun, width: int, height: int) -> None:
    """Append one InlineRun to a python-docx paragraph."""
    match item:
        case PlainText(text=text):
            paragraph.add_run(text)
        case Bold(text=text):
            _styled_run(paragraph, text, 'bold')
        case Italic(text=text):
            _styled_run(paragraph, text, 'italic')
        case InlineCode(text=text):
            _styled_run(paragraph, text, 'inline_code')
        case Hyperlink():
            _add_hyperlink(paragraph, item)
        case Image(data=data):
            paragraph.add_run().add_picture(
                BytesIO(data), width=Emu(width * EMU_PER_PX), height=Emu(height * EMU_PER_PX),
            )
        case MissingImageMarker():
            _styled_run(paragraph, item.label, 'missing_image')
        case LineBreak():
            paragraph.add_run().add_break()
        case _:
            raise TypeError(f"Unsupported inline run: {item!r}")


def render_block(doc, block: Block, width: int, height: int) -> DocxParagraph:
    """Append one Block to a python-docx document and return its paragraph."""
    match block:
        case Heading(level=level, text=text):
            paragraph = doc.add_paragraph(text, style=heading_style_name(level))
            style = BLOCK_STYLES['heading']
        case Paragraph(runs=runs):
            paragraph = doc.add_paragraph()
            for item in runs:
                render_run(paragraph, item, width, height)
            style = BLOCK_STYLES['paragraph']
        case BulletItem(text=text):
            style = BLOCK_STYLES['bullet']
            paragraph = doc.add_paragraph(text, style=style.style_name)
        case CodeBlock(lines=lines):
            paragraph = doc.add_paragraph()
            for index, line in enumerate(lines):
                run = paragraph.add_run()
                if index > 0:
                    run.add_break()
                run.add_text(line)
                apply_run_style(run, RUN_STYLES['code_line'])
            style = BLOCK_STYLES['code']
        case Rule():
            paragraph = doc.add_paragraph()
            style = BLOCK_STYLES['rule']
        case _:
            raise TypeError(f"Unsupported block: {block!r}")
    apply_block_style(paragraph, style)
    return paragraph


def encode_document(document: Document, image_width: int = 500, image_height: int = 300) -> bytes:
    """Render a compiled Document to .docx bytes."""
    doc = docx.Document()
    for block in document.blocks:
        render_block(doc, block, image_width, image_height)
    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
