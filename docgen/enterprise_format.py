"""
Enterprise Document Formatting

Formatting blocks that upgrade a document according to its quality tier:
cover page, document control section, table of contents, enhanced
header/footer, signature block and certification badge. Each function is
pure and returns element-tree blocks; the assembly layer decides which
blocks a tier includes.

TIERS:
  - basic: simple title page, basic header/footer
  - standard: cover page, document control, enhanced header/footer
  - enterprise: standard + table of contents, signature block,
    certification badge, custom colours
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from shared.models import Confidentiality, EnterpriseDocumentOptions, risk_level_label

from .elements import (
    Alignment,
    Block,
    FieldType,
    Footer,
    Header,
    Paragraph,
    Table,
    TableCell,
    TableOfContents,
    TableRow,
    TabStop,
    TabStopType,
    TextRun,
)
from .helpers import format_date, page_break, spacer
from .lookups import format_doc_type_name, resolve_articles
from .style import COLORS, COMPANY, FONT_SIZES, NARROW_RULE, PAGE, WIDE_RULE
from .tiers import DocumentBlock, includes

_RED_CLASSIFICATIONS = {
    Confidentiality.CONFIDENTIAL.value,
    Confidentiality.STRICTLY_CONFIDENTIAL.value,
}

_CONTROL_KEY_WIDTH = 3200
_VERSION_COLUMNS = (1500, 1500, 2500, 3860)
_SIGNATURE_COLUMNS = (2340, 3510, 1755, 1755)
_SIGNATURE_ROW_HEIGHT = 800


def brand_color(opts: EnterpriseDocumentOptions) -> str:
    """Custom primary colour at enterprise tier, otherwise the brand primary."""
    if opts.primary_color and includes(opts.quality, DocumentBlock.CUSTOM_BRANDING):
        return opts.primary_color
    return COLORS.primary


def _centered(text: str, after: Optional[int] = None, **run) -> Paragraph:
    return Paragraph(
        runs=(TextRun(text=text, **run),),
        alignment=Alignment.CENTER,
        spacing_after=after,
    )


def _rule(text: str, color: str, after: Optional[int] = None) -> Paragraph:
    return _centered(text, after=after, color=color, size=16)


# ============================================================================
# Cover Page
# ============================================================================

def create_cover_page(opts: EnterpriseDocumentOptions) -> List[Paragraph]:
    color = brand_color(opts)
    date = format_date(opts.date)
    articles = resolve_articles(opts)
    risk_label = risk_level_label(opts.risk_level)

    elements: List[Paragraph] = [
        spacer(3000),
        _rule(WIDE_RULE, color, after=400),
        _centered(opts.organization_name.upper(), after=200, size=28, bold=True, color=COLORS.dark_gray),
        _centered(opts.title, after=100, size=FONT_SIZES.title, bold=True, color=color),
    ]

    if opts.subtitle:
        elements.append(
            _centered(opts.subtitle, after=200, size=FONT_SIZES.subtitle, color=COLORS.gray)
        )

    elements.append(
        _centered("EU AI Act Compliance Documentation", after=600, size=24, italics=True, color=COLORS.gray)
    )
    elements.append(_rule(WIDE_RULE, color, after=600))

    meta_items: List[Tuple[str, str]] = []
    if opts.ai_system_name:
        meta_items.append(("AI System", opts.ai_system_name))
    if risk_label:
        meta_items.append(("Risk Level", risk_label))
    meta_items.append(("Version", opts.version_label))
    meta_items.append(("Date", date))
    meta_items.append(("Classification", opts.classification))
    if articles:
        meta_items.append(("EU AI Act Reference", ", ".join(articles)))

    for key, value in meta_items:
        elements.append(
            Paragraph(
                runs=(
                    TextRun(text=f"{key}:  ", size=20, color=COLORS.gray),
                    TextRun(text=value, size=20, bold=True, color=COLORS.dark_gray),
                ),
                alignment=Alignment.CENTER,
                spacing_after=80,
            )
        )

    elements.append(spacer(800))
    elements.append(_rule(WIDE_RULE, color, after=100))
    elements.append(_centered(f"Prepared by: {opts.preparer}", after=80, size=20, color=COLORS.gray))
    elements.append(
        _centered(
            f"Generated via {COMPANY.name} — {COMPANY.tagline}",
            after=80, size=18, italics=True, color=COLORS.gray,
        )
    )

    if opts.certification_number and includes(opts.quality, DocumentBlock.CERTIFICATION_BADGE):
        elements.append(spacer(400))
        elements.append(_centered("✓ EU AI Act Compliant", size=22, bold=True, color=COLORS.success))
        elements.append(
            _centered(f"Certificate #: {opts.certification_number}", size=18, color=COLORS.gray)
        )

    elements.append(page_break())
    return elements


# ============================================================================
# Document Control
# ============================================================================

def _simple_cell(text: str, width: int) -> TableCell:
    return TableCell(paragraphs=(Paragraph(runs=(TextRun(text=text, size=20),)),), width=width)


def _branded_header_row(texts: Sequence[str], widths: Sequence[int], shading: str) -> TableRow:
    return TableRow(
        cells=tuple(
            TableCell(
                paragraphs=(Paragraph(runs=(TextRun(text=text, bold=True, color=COLORS.white, size=20),)),),
                width=width,
                shading=shading,
            )
            for text, width in zip(texts, widths)
        ),
        is_header=True,
    )


def _control_table(data: Sequence[Tuple[str, str]]) -> Table:
    key_width = _CONTROL_KEY_WIDTH
    value_width = PAGE.usable_width - key_width

    rows = []
    for index, (key, value) in enumerate(data):
        rows.append(
            TableRow(cells=(
                TableCell(
                    paragraphs=(Paragraph(runs=(TextRun(text=key, bold=True, size=20, color=COLORS.dark_gray),)),),
                    width=key_width,
                    shading=COLORS.light,
                ),
                TableCell(
                    paragraphs=(Paragraph(runs=(TextRun(text=value, size=20, color=COLORS.black),)),),
                    width=value_width,
                    shading=COLORS.brand25 if index % 2 == 1 else None,
                ),
            ))
        )
    return Table(column_widths=(key_width, value_width), rows=tuple(rows))


def _version_history_table(opts: EnterpriseDocumentOptions, color: str) -> Table:
    widths = _VERSION_COLUMNS
    return Table(
        column_widths=widths,
        rows=(
            _branded_header_row(("Version", "Date", "Author", "Description"), widths, color),
            TableRow(cells=(
                _simple_cell(opts.version_label, widths[0]),
                _simple_cell(format_date(opts.date), widths[1]),
                _simple_cell(opts.preparer, widths[2]),
                _simple_cell("Initial version generated via Protectron", widths[3]),
            )),
            # blank row for the next revision
            TableRow(cells=tuple(_simple_cell("", w) for w in widths)),
        ),
    )


def create_document_control_section(opts: EnterpriseDocumentOptions) -> List[Block]:
    """
    Document control table plus version history.

    Rows: title, display type name, version, date, status (always Draft),
    preparer, organisation, classification, then AI system, risk
    classification and EU AI Act reference when known.
    """
    color = brand_color(opts)

    control: List[Tuple[str, str]] = [
        ("Document Title", opts.title),
        ("Document Type", format_doc_type_name(opts.document_type)),
        ("Version", opts.version_label),
        ("Date", format_date(opts.date)),
        ("Status", "Draft"),
        ("Prepared By", opts.preparer),
        ("Organization", opts.organization_name),
        ("Classification", opts.classification),
    ]
    if opts.ai_system_name:
        control.append(("AI System", opts.ai_system_name))
    if opts.risk_level:
        control.append(("Risk Classification", risk_level_label(opts.risk_level) or opts.risk_level))
    articles = resolve_articles(opts)
    if articles:
        control.append(("EU AI Act Reference", ", ".join(articles)))

    return [
        Paragraph(runs=(TextRun(text="Document Control", color=color),), style="Heading1"),
        _control_table(control),
        spacer(400),
        Paragraph(runs=(TextRun(text="Version History"),), style="Heading2"),
        _version_history_table(opts, color),
        page_break(),
    ]


# ============================================================================
# Table of Contents
# ============================================================================

def create_table_of_contents_section() -> List[Block]:
    return [
        Paragraph(runs=(TextRun(text="Table of Contents"),), style="Heading1"),
        TableOfContents(),
        Paragraph(
            runs=(TextRun(
                text="(Update this table of contents after opening the document in Word: right-click → Update Field)",
                size=18,
                italics=True,
                color=COLORS.gray,
            ),),
            spacing_after=200,
        ),
        page_break(),
    ]


# ============================================================================
# Header / Footer
# ============================================================================

def _tab(size: int = 16) -> TextRun:
    return TextRun(text="\t", size=size, font=None)


def create_enterprise_header(opts: EnterpriseDocumentOptions) -> Header:
    """Organisation and classification on line one, title and version on line two."""
    classification = opts.classification
    right_tab = (TabStop(TabStopType.RIGHT, PAGE.usable_width),)

    return Header(paragraphs=(
        Paragraph(
            runs=(
                TextRun(text=opts.organization_name, color=brand_color(opts), bold=True, size=16),
                _tab(),
                TextRun(
                    text=classification.upper(),
                    color=COLORS.error if classification in _RED_CLASSIFICATIONS else COLORS.gray,
                    bold=True,
                    size=16,
                ),
            ),
            tab_stops=right_tab,
        ),
        Paragraph(
            runs=(
                TextRun(text=opts.title, color=COLORS.gray, size=16),
                _tab(),
                TextRun(text=f"v{opts.version_label}", color=COLORS.gray, size=16),
            ),
            tab_stops=right_tab,
            spacing_after=100,
        ),
    ))


def create_enterprise_footer(opts: EnterpriseDocumentOptions) -> Footer:
    """Company name, live "Page X of Y" and the document date."""
    return Footer(paragraphs=(
        Paragraph(
            runs=(
                TextRun(text=COMPANY.name, size=16, color=COLORS.gray),
                _tab(),
                TextRun(text="Page ", size=16, color=COLORS.gray),
                TextRun(field=FieldType.PAGE, size=16, color=COLORS.gray),
                TextRun(text=" of ", size=16, color=COLORS.gray),
                TextRun(field=FieldType.NUM_PAGES, size=16, color=COLORS.gray),
                _tab(),
                TextRun(text=format_date(opts.date), size=16, color=COLORS.gray),
            ),
            tab_stops=(
                TabStop(TabStopType.CENTER, PAGE.usable_width // 2),
                TabStop(TabStopType.RIGHT, PAGE.usable_width),
            ),
        ),
    ))


# ============================================================================
# Signature Block
# ============================================================================

def _signature_row(role: str, name: str) -> TableRow:
    widths = _SIGNATURE_COLUMNS
    return TableRow(
        cells=(
            _simple_cell(role, widths[0]),
            _simple_cell(name, widths[1]),
            _simple_cell("", widths[2]),  # signature
            _simple_cell("", widths[3]),  # date
        ),
        min_height=_SIGNATURE_ROW_HEIGHT,
    )


def create_signature_block(opts: EnterpriseDocumentOptions) -> List[Block]:
    signatures = Table(
        column_widths=_SIGNATURE_COLUMNS,
        rows=(
            _branded_header_row(("Role", "Name", "Signature", "Date"), _SIGNATURE_COLUMNS, COLORS.primary),
            _signature_row("Prepared By", opts.prepared_by or ""),
            _signature_row("Reviewed By", ""),
            _signature_row("Approved By", ""),
        ),
    )

    return [
        page_break(),
        Paragraph(runs=(TextRun(text="Approval & Signatures"),), style="Heading1"),
        Paragraph(
            runs=(TextRun(
                text=(
                    "This document has been prepared in accordance with EU AI Act requirements. "
                    "The following approval is required before this document is considered final."
                ),
                size=FONT_SIZES.body,
                color=COLORS.dark_gray,
            ),),
            spacing_after=400,
        ),
        signatures,
        spacer(400),
        Paragraph(
            runs=(TextRun(
                text=(
                    "By signing above, I confirm that the information in this document is "
                    "accurate and complete to the best of my knowledge."
                ),
                size=FONT_SIZES.small,
                italics=True,
                color=COLORS.gray,
            ),),
            spacing_after=200,
        ),
    ]


# ============================================================================
# Certification Badge
# ============================================================================

def create_certification_badge(opts: EnterpriseDocumentOptions) -> List[Paragraph]:
    """Compliance badge; empty when no certification number is set."""
    if not opts.certification_number:
        return []

    cert_date = format_date(opts.certification_date)
    return [
        spacer(600),
        _rule(NARROW_RULE, COLORS.success, after=100),
        _centered("✓  EU AI ACT COMPLIANT", after=50, size=28, bold=True, color=COLORS.success),
        _centered(
            f"Verified: {cert_date}  |  Certificate #: {opts.certification_number}",
            after=50, size=18, color=COLORS.gray,
        ),
        _centered(
            f"Generated by {COMPANY.name} — {COMPANY.website}",
            after=100, size=16, italics=True, color=COLORS.gray,
        ),
        _rule(NARROW_RULE, COLORS.success),
    ]
