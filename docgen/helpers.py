"""
Protectron Document Generator Helper Functions

Reusable builders that translate style constants into document elements.
Every builder is a pure function: the same inputs produce an equal element.
Inputs are not validated; malformed input (negative widths, empty header
lists) yields a malformed but non-crashing element.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from .elements import Alignment, Paragraph, Table, TableCell, TableRow, TextRun
from .style import (
    ALT_ROW_SHADING,
    BULLET_LIST,
    COLORS,
    COLUMN_WIDTHS,
    COMPANY,
    FONT_SIZES,
    HEADER_SHADING,
    NUMBERED_LIST,
    PAGE,
)

DateLike = Union[dt.datetime, dt.date, str]

_HEADING_STYLES = {1: "Heading1", 2: "Heading2", 3: "Heading3"}

# en-US month names, independent of the process locale
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def header_cell(text: str, width: int) -> TableCell:
    """Create a styled table header cell with brand colour background."""
    return TableCell(
        paragraphs=(Paragraph(runs=(TextRun(text=text, bold=True, color=COLORS.white),)),),
        width=width,
        shading=HEADER_SHADING,
    )


def cell(text: str, width: int, shaded: bool = False) -> TableCell:
    """Create a regular table cell with optional alternating shading."""
    return TableCell(
        paragraphs=(Paragraph(runs=(TextRun(text=text),)),),
        width=width,
        shading=ALT_ROW_SHADING if shaded else None,
    )


def multi_line_cell(text: str, width: int, shaded: bool = False) -> TableCell:
    """Create a cell with one paragraph per non-empty line."""
    lines = [line for line in text.split("\n") if line]
    return TableCell(
        paragraphs=tuple(
            Paragraph(runs=(TextRun(text=line),), spacing_after=100) for line in lines
        ),
        width=width,
        shading=ALT_ROW_SHADING if shaded else None,
    )


def bullet(text: str, reference: str = BULLET_LIST) -> Paragraph:
    """Create a bullet point paragraph."""
    return Paragraph(runs=(TextRun(text=text),), numbering=reference)


def numbered_item(text: str, reference: str = NUMBERED_LIST) -> Paragraph:
    """Create a numbered list item."""
    return Paragraph(runs=(TextRun(text=text),), numbering=reference)


def heading(text: str, level: int = 1) -> Paragraph:
    """Create a section heading (levels 1-3)."""
    return Paragraph(runs=(TextRun(text=text),), style=_HEADING_STYLES[level])


def para(
    text: str,
    spacing: int = 200,
    align: Alignment = Alignment.LEFT,
    bold: bool = False,
    italics: bool = False,
    color: str = COLORS.black,
    size: int = FONT_SIZES.body,
) -> Paragraph:
    """Create a regular paragraph."""
    return Paragraph(
        runs=(TextRun(text=text, bold=bold, italics=italics, color=color, size=size),),
        alignment=align,
        spacing_after=spacing,
    )


def rich_para(
    runs: Iterable[Mapping],
    spacing: int = 200,
    align: Alignment = Alignment.LEFT,
) -> Paragraph:
    """
    Create a paragraph with mixed formatting.

    Each run is a mapping with ``text`` and optional ``bold``, ``italics``,
    ``color`` and ``size`` keys.
    """
    return Paragraph(
        runs=tuple(
            TextRun(
                text=run["text"],
                bold=run.get("bold", False),
                italics=run.get("italics", False),
                color=run.get("color", COLORS.black),
                size=run.get("size", FONT_SIZES.body),
            )
            for run in runs
        ),
        alignment=align,
        spacing_after=spacing,
    )


def key_value_table(data: Sequence[Tuple[str, str]]) -> Table:
    """Create a key-value table (2 columns: 30%/70%) with a Property/Value header."""
    key_width = COLUMN_WIDTHS.two_column_narrow
    value_width = COLUMN_WIDTHS.two_column_wide

    rows = [
        TableRow(
            cells=(header_cell("Property", key_width), header_cell("Value", value_width)),
            is_header=True,
        )
    ]
    for index, (key, value) in enumerate(data):
        shaded = index % 2 == 1
        rows.append(
            TableRow(cells=(cell(key, key_width, shaded), multi_line_cell(value, value_width, shaded)))
        )
    return Table(column_widths=(key_width, value_width), rows=tuple(rows))


def data_table(headers: Sequence[str], data: Sequence[Sequence[str]]) -> Table:
    """Create an N-column table with equal-width columns and a branded header row."""
    col_width = PAGE.usable_width // len(headers) if headers else 0

    rows = [TableRow(cells=tuple(header_cell(h, col_width) for h in headers), is_header=True)]
    for row_index, row in enumerate(data):
        rows.append(
            TableRow(cells=tuple(cell(text, col_width, row_index % 2 == 1) for text in row))
        )
    return Table(column_widths=tuple(col_width for _ in headers), rows=tuple(rows))


def spacer(height: int = 200) -> Paragraph:
    """Create an empty paragraph used for vertical whitespace."""
    return Paragraph(spacing_before=height)


def page_break() -> Paragraph:
    return Paragraph(runs=(TextRun(page_break=True, font=None),))


def to_date(value: Optional[DateLike] = None) -> dt.date:
    """Coerce a date, datetime or ISO string to a date; today when omitted."""
    if value is None:
        return dt.date.today()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError:
        return dt.date.fromisoformat(text[:10])


def format_date(value: Optional[DateLike] = None) -> str:
    """Format a date as "Month D, YYYY" (en-US long form); today when omitted."""
    d = to_date(value)
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"


def attribution_line(date: Optional[DateLike] = None) -> Paragraph:
    """The closing "Document generated by ... on ..." line."""
    return rich_para([
        {"text": "Document generated by ", "color": COLORS.gray, "italics": True},
        {"text": COMPANY.name, "color": COLORS.primary, "bold": True},
        {"text": f" on {format_date(date)}", "color": COLORS.gray, "italics": True},
    ])

