"""
Document Element Tree

Immutable building blocks produced by the builders and formatting layer
and consumed by the renderer. Keeping generation as a pure tree of value
objects means two identical builder calls produce equal elements, and
document structure can be inspected without serializing to DOCX.

ELEMENTS:
  - TextRun: a styled run of text, a live field (PAGE / NUMPAGES) or a page break
  - Paragraph: runs plus style id, alignment, spacing, list numbering, tab stops
  - Table / TableRow / TableCell: fixed-width tables with shading
  - TableOfContents: a native TOC field bound to heading levels
  - Header / Footer: running page regions
  - DocumentModel: the complete document, ready to render
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from .style import COLORS, FONT_NAME


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class TabStopType(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FieldType(str, Enum):
    """Live fields resolved by the word processor."""

    PAGE = "PAGE"
    NUM_PAGES = "NUMPAGES"


@dataclass(frozen=True)
class TextRun:
    text: str = ""
    bold: bool = False
    italics: bool = False
    color: Optional[str] = None
    size: Optional[int] = None  # half-points
    font: Optional[str] = FONT_NAME
    field: Optional[FieldType] = None
    page_break: bool = False


@dataclass(frozen=True)
class TabStop:
    type: TabStopType
    position: int  # twips


@dataclass(frozen=True)
class Paragraph:
    runs: Tuple[TextRun, ...] = ()
    style: Optional[str] = None
    alignment: Optional[Alignment] = None
    spacing_before: Optional[int] = None
    spacing_after: Optional[int] = None
    numbering: Optional[str] = None
    tab_stops: Tuple[TabStop, ...] = ()

    @property
    def text(self) -> str:
        """Plain text of the paragraph (fields and breaks excluded)."""
        return "".join(run.text for run in self.runs if run.field is None)

    @property
    def has_page_break(self) -> bool:
        return any(run.page_break for run in self.runs)


@dataclass(frozen=True)
class TableCell:
    paragraphs: Tuple[Paragraph, ...]
    width: int
    shading: Optional[str] = None

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)


@dataclass(frozen=True)
class TableRow:
    cells: Tuple[TableCell, ...]
    is_header: bool = False
    min_height: Optional[int] = None


@dataclass(frozen=True)
class Table:
    column_widths: Tuple[int, ...]
    rows: Tuple[TableRow, ...]

    def cell_texts(self) -> List[List[str]]:
        """Cell text grid, header row included."""
        return [[c.text for c in row.cells] for row in self.rows]


@dataclass(frozen=True)
class TableOfContents:
    title: str = "Table of Contents"
    heading_range: str = "1-3"
    hyperlink: bool = True

    @property
    def instruction(self) -> str:
        switches = f'TOC \\o "{self.heading_range}"'
        if self.hyperlink:
            switches += " \\h"
        return switches + " \\z \\u"


Block = Union[Paragraph, Table, TableOfContents]


@dataclass(frozen=True)
class Header:
    paragraphs: Tuple[Paragraph, ...]


@dataclass(frozen=True)
class Footer:
    paragraphs: Tuple[Paragraph, ...]


@dataclass
class DocumentModel:
    """
    A complete document: body blocks plus the page furniture and style
    parameters the renderer applies to the whole document.
    """

    body: List[Block]
    header: Header
    footer: Footer
    heading_color: str = COLORS.primary
    update_fields: bool = False

    def paragraphs(self) -> Iterator[Paragraph]:
        """Body paragraphs in order (table cell paragraphs excluded)."""
        for block in self.body:
            if isinstance(block, Paragraph):
                yield block

    def tables(self) -> List[Table]:
        return [block for block in self.body if isinstance(block, Table)]

    def texts(self) -> List[str]:
        """Non-empty body paragraph texts in order."""
        return [p.text for p in self.paragraphs() if p.text]

    def headings(self, level: Optional[int] = None) -> List[str]:
        """Heading texts, optionally restricted to one level."""
        styles = {f"Heading{level}"} if level else {"Heading1", "Heading2", "Heading3"}
        return [p.text for p in self.paragraphs() if p.style in styles]

    def has_table_of_contents(self) -> bool:
        return any(isinstance(block, TableOfContents) for block in self.body)

    def all_text(self) -> str:
        """Body text including table cells, joined by newlines."""
        parts: List[str] = []
        for block in self.body:
            if isinstance(block, Paragraph):
                parts.append(block.text)
            elif isinstance(block, Table):
                for row in block.cell_texts():
                    parts.extend(row)
        return "\n".join(parts)
