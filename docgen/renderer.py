"""
DOCX Renderer

Serializes a DocumentModel to a Word document with python-docx, dropping
to OXML where python-docx has no API (cell shading and borders, simple
and complex fields, numbering definitions, repeated header rows).

RENDERING:
  - Style sheet: Normal (Inter 11pt), Title and Heading 1-3 in brand colours
  - Numbering: one bullet and one decimal list definition per document
  - Page geometry: US Letter, 1 inch margins
  - Header / footer: running regions with PAGE / NUMPAGES fields
  - Table of contents: a TOC complex field, refreshed by the word processor
"""

from __future__ import annotations

import logging
import re
from io import BytesIO
from typing import Dict, Optional

from docx import Document
from docx.enum.table import WD_ROW_HEIGHT_RULE
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK, WD_TAB_ALIGNMENT
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import Pt, RGBColor, Twips

from .elements import (
    Alignment,
    DocumentModel,
    Paragraph,
    Table,
    TableCell,
    TableOfContents,
    TabStopType,
    TextRun,
)
from .style import BULLET_LIST, COLORS, FONT_NAME, FONT_SIZES, NUMBERED_LIST, PAGE, TABLE_BORDER

logger = logging.getLogger(__name__)

_ALIGNMENTS = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
    Alignment.JUSTIFY: WD_ALIGN_PARAGRAPH.JUSTIFY,
}

_TAB_ALIGNMENTS = {
    TabStopType.LEFT: WD_TAB_ALIGNMENT.LEFT,
    TabStopType.CENTER: WD_TAB_ALIGNMENT.CENTER,
    TabStopType.RIGHT: WD_TAB_ALIGNMENT.RIGHT,
}

# Element style ids -> built-in style names
_STYLE_NAMES = {
    "Title": "Title",
    "Heading1": "Heading 1",
    "Heading2": "Heading 2",
    "Heading3": "Heading 3",
}

# reference, numFmt, lvlText
_LIST_DEFINITIONS = (
    (BULLET_LIST, "bullet", "•"),
    (NUMBERED_LIST, "decimal", "%1."),
)

# Control characters outside the XML 1.0 character range
_XML_INCOMPATIBLE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _xml_text(text: str) -> str:
    """Drop characters lxml refuses to serialize (form feeds, vertical tabs, NULs)."""
    return _XML_INCOMPATIBLE.sub("", text)


# ============================================================================
# Styles
# ============================================================================

def _set_font(style, name: str = FONT_NAME) -> None:
    style.font.name = name
    # theme font attributes override w:ascii
    r_fonts = style.element.rPr.rFonts
    for attr in ("w:asciiTheme", "w:hAnsiTheme", "w:eastAsiaTheme", "w:cstheme"):
        if r_fonts.get(qn(attr)) is not None:
            del r_fonts.attrib[qn(attr)]


def _configure_style(style, size: int, color: str, before: int, after: int, bold: bool = True) -> None:
    _set_font(style)
    style.font.size = Pt(size / 2)
    style.font.bold = bold
    style.font.italic = False
    style.font.color.rgb = RGBColor.from_string(color)
    style.paragraph_format.space_before = Twips(before)
    style.paragraph_format.space_after = Twips(after)


def _apply_styles(doc, heading_color: str) -> None:
    normal = doc.styles["Normal"]
    _set_font(normal)
    normal.font.size = Pt(FONT_SIZES.body / 2)

    title = doc.styles["Title"]
    _configure_style(title, FONT_SIZES.title, heading_color, before=0, after=200)
    title.paragraph_format.alignment = WD_ALIGN_PARAGRAPH.CENTER

    _configure_style(doc.styles["Heading 1"], FONT_SIZES.heading1, heading_color, before=400, after=200)
    _configure_style(doc.styles["Heading 2"], FONT_SIZES.heading2, COLORS.secondary, before=300, after=150)
    _configure_style(doc.styles["Heading 3"], FONT_SIZES.heading3, COLORS.secondary, before=200, after=100)


# ============================================================================
# Numbering
# ============================================================================

def _add_numbering(doc) -> Dict[str, int]:
    """Register the list definitions and return reference -> numId."""
    numbering = doc.part.numbering_part.element

    abstract_ids = [
        int(el.get(qn("w:abstractNumId"))) for el in numbering.findall(qn("w:abstractNum"))
    ]
    next_id = max(abstract_ids, default=-1) + 1
    first_num = numbering.find(qn("w:num"))

    num_ids: Dict[str, int] = {}
    for offset, (reference, num_fmt, lvl_text) in enumerate(_LIST_DEFINITIONS):
        abstract_id = next_id + offset
        abstract = parse_xml(
            f'<w:abstractNum {nsdecls("w")} w:abstractNumId="{abstract_id}">'
            '<w:multiLevelType w:val="singleLevel"/>'
            '<w:lvl w:ilvl="0">'
            '<w:start w:val="1"/>'
            f'<w:numFmt w:val="{num_fmt}"/>'
            f'<w:lvlText w:val="{lvl_text}"/>'
            '<w:lvlJc w:val="left"/>'
            '<w:pPr><w:ind w:left="720" w:hanging="360"/></w:pPr>'
            "</w:lvl>"
            "</w:abstractNum>"
        )
        # abstractNum elements must precede every w:num
        if first_num is not None:
            first_num.addprevious(abstract)
        else:
            numbering.append(abstract)
        num_ids[reference] = numbering.add_num(abstract_id).numId

    return num_ids


# ============================================================================
# Runs and Paragraphs
# ============================================================================

def _format_run(run, node: TextRun) -> None:
    if node.bold:
        run.bold = True
    if node.italics:
        run.italic = True
    if node.size is not None:
        run.font.size = Pt(node.size / 2)
    if node.color is not None:
        run.font.color.rgb = RGBColor.from_string(node.color)
    if node.font is not None:
        run.font.name = node.font


def _add_field(paragraph, node: TextRun) -> None:
    """Insert a simple field (PAGE / NUMPAGES) with a formatted placeholder run."""
    run = paragraph.add_run("1")
    _format_run(run, node)

    field = OxmlElement("w:fldSimple")
    field.set(qn("w:instr"), f" {node.field.value} ")
    run._r.addprevious(field)
    field.append(run._r)


def _fill_paragraph(paragraph, node: Paragraph, num_ids: Dict[str, int]) -> None:
    fmt = paragraph.paragraph_format
    if node.alignment is not None:
        paragraph.alignment = _ALIGNMENTS[node.alignment]
    if node.spacing_before is not None:
        fmt.space_before = Twips(node.spacing_before)
    if node.spacing_after is not None:
        fmt.space_after = Twips(node.spacing_after)
    for stop in node.tab_stops:
        fmt.tab_stops.add_tab_stop(Twips(stop.position), _TAB_ALIGNMENTS[stop.type])

    if node.numbering is not None and node.numbering in num_ids:
        num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
        num_pr.get_or_add_ilvl().val = 0
        num_pr.get_or_add_numId().val = num_ids[node.numbering]

    for run_node in node.runs:
        if run_node.field is not None:
            _add_field(paragraph, run_node)
            continue
        run = paragraph.add_run(_xml_text(run_node.text))
        _format_run(run, run_node)
        if run_node.page_break:
            run.add_break(WD_BREAK.PAGE)


def _add_body_paragraph(doc, node: Paragraph, num_ids: Dict[str, int]) -> None:
    paragraph = doc.add_paragraph()
    if node.style is not None:
        paragraph.style = doc.styles[_STYLE_NAMES.get(node.style, node.style)]
    _fill_paragraph(paragraph, node, num_ids)


def _add_table_of_contents(doc, toc: TableOfContents) -> None:
    """Insert a TOC complex field; the word processor fills it on update."""
    paragraph = doc.add_paragraph()

    def fld_char(kind: str):
        run = paragraph.add_run()
        char = OxmlElement("w:fldChar")
        char.set(qn("w:fldCharType"), kind)
        run._r.append(char)

    fld_char("begin")
    instr_run = paragraph.add_run()
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = f" {toc.instruction} "
    instr_run._r.append(instr)
    fld_char("separate")
    paragraph.add_run(_xml_text(toc.title))
    fld_char("end")


# ============================================================================
# Tables
# ============================================================================

def _set_cell_borders(cell) -> None:
    tc_pr = cell._tc.get_or_add_tcPr()
    borders = OxmlElement("w:tcBorders")
    for side in ("top", "left", "bottom", "right"):
        el = OxmlElement(f"w:{side}")
        el.set(qn("w:val"), TABLE_BORDER.style)
        el.set(qn("w:sz"), str(TABLE_BORDER.size))
        el.set(qn("w:space"), "0")
        el.set(qn("w:color"), TABLE_BORDER.color)
        borders.append(el)
    tc_pr.append(borders)


def _set_cell_shading(cell, color: str) -> None:
    shading = OxmlElement("w:shd")
    shading.set(qn("w:fill"), color)
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    cell._tc.get_or_add_tcPr().append(shading)


def _fill_cell(cell, node: TableCell, num_ids: Dict[str, int]) -> None:
    cell.width = Twips(node.width)
    _set_cell_borders(cell)
    if node.shading:
        _set_cell_shading(cell, node.shading)

    for index, para_node in enumerate(node.paragraphs):
        paragraph = cell.paragraphs[0] if index == 0 else cell.add_paragraph()
        _fill_paragraph(paragraph, para_node, num_ids)


def _add_table(doc, node: Table, num_ids: Dict[str, int]) -> None:
    if not node.column_widths:
        logger.warning("Skipping table without columns")
        return

    table = doc.add_table(rows=0, cols=len(node.column_widths))
    table.autofit = False
    for column, width in zip(table.columns, node.column_widths):
        column.width = Twips(width)

    for row_node in node.rows:
        row = table.add_row()
        if row_node.is_header:
            header = OxmlElement("w:tblHeader")
            header.set(qn("w:val"), "true")
            row._tr.get_or_add_trPr().append(header)
        if row_node.min_height is not None:
            row.height = Twips(row_node.min_height)
            row.height_rule = WD_ROW_HEIGHT_RULE.AT_LEAST
        for cell, cell_node in zip(row.cells, row_node.cells):
            _fill_cell(cell, cell_node, num_ids)


# ============================================================================
# Document
# ============================================================================

def _setup_section(doc, model: DocumentModel, num_ids: Dict[str, int]) -> None:
    section = doc.sections[0]
    section.page_width = Twips(PAGE.width)
    section.page_height = Twips(PAGE.height)
    section.top_margin = Twips(PAGE.margin_top)
    section.right_margin = Twips(PAGE.margin_right)
    section.bottom_margin = Twips(PAGE.margin_bottom)
    section.left_margin = Twips(PAGE.margin_left)

    for region, node in ((section.header, model.header), (section.footer, model.footer)):
        region.is_linked_to_previous = False
        for index, para_node in enumerate(node.paragraphs):
            paragraph = region.paragraphs[0] if index == 0 and region.paragraphs else region.add_paragraph()
            _fill_paragraph(paragraph, para_node, num_ids)


def _enable_update_fields(doc) -> None:
    update = OxmlElement("w:updateFields")
    update.set(qn("w:val"), "true")
    doc.settings.element.append(update)


def render_document(model: DocumentModel, template: Optional[str] = None):
    """Render the element tree to a python-docx Document."""
    doc = Document(template)
    _apply_styles(doc, model.heading_color)
    num_ids = _add_numbering(doc)
    _setup_section(doc, model, num_ids)

    for block in model.body:
        if isinstance(block, Table):
            _add_table(doc, block, num_ids)
        elif isinstance(block, TableOfContents):
            _add_table_of_contents(doc, block)
        else:
            _add_body_paragraph(doc, block, num_ids)

    if model.update_fields:
        _enable_update_fields(doc)

    logger.debug(
        f"Rendered document: {len(model.body)} blocks, {len(model.tables())} tables, "
        f"toc={model.has_table_of_contents()}"
    )
    return doc


def pack_document(model: DocumentModel) -> bytes:
    """Render and serialize to .docx bytes."""
    buffer = BytesIO()
    render_document(model).save(buffer)
    return buffer.getvalue()
