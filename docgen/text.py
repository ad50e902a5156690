"""
Text Processing for AI-Authored Content

AI-authored sections arrive as loosely formatted markdown. Before they are
laid out they are cleaned of markdown syntax and split into paragraphs,
with short "Label: text" openings promoted to subheadings.

Heading ("# ") and bullet ("- ", "* ") markers are removed at line start
and, mid-line, when a letter follows them. Arithmetic such as "3 * 4"
survives, but a spaced hyphen used as a dash before a word ("model - it
works") is still collapsed. Underscores inside identifiers (snake_case)
are never treated as emphasis.

SUBHEADING DETECTION:
  The default detector treats a paragraph as "<subheading>: <body>" when it
  starts with a capital letter followed by 2-50 non-colon characters and a
  colon. This misfires on ordinary sentences such as "Note: ..." and is kept
  behind the SubheadingDetector protocol so it can be swapped out.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, Union

from .lookups import export_type_label


# ============================================================================
# Markdown Cleaning
# ============================================================================

_MARKDOWN_RULES: Tuple[Tuple[re.Pattern, str], ...] = (
    # emphasis must hug its text; underscores never match inside a word
    (re.compile(r"\*\*(?=\S)([^*]+?)(?<=\S)\*\*"), r"\1"),  # **bold**
    (re.compile(r"(?<!\w)__(?=\S)([^_]+?)(?<=\S)__(?!\w)"), r"\1"),  # __bold__
    (re.compile(r"\*(?=\S)([^*]+?)(?<=\S)\*"), r"\1"),  # *italic*
    (re.compile(r"(?<!\w)_(?=\S)([^_]+?)(?<=\S)_(?!\w)"), r"\1"),  # _italic_
    # heading and bullet markers: always at line start, mid-line only before a letter
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"(?<=\s)#{1,6}\s+(?=[^\W\d_])"), ""),
    (re.compile(r"^[-*]\s+", re.MULTILINE), ""),
    (re.compile(r"(?<=\s)[-*]\s+(?=[^\W\d_])"), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
)


def clean_markdown(text: str) -> str:
    """Strip markdown emphasis, heading and bullet markers from text."""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


# ============================================================================
# Subheading Detection
# ============================================================================

@dataclass(frozen=True)
class ContentPart:
    is_subheading: bool
    text: str


class SubheadingDetector(Protocol):
    def split(self, paragraph: str) -> Optional[Tuple[str, str]]:
        """Return (subheading, remainder) or None when the paragraph has no subheading."""
        ...


class ColonSubheadingDetector:
    """Detects a capitalised label of 3-51 characters followed by a colon."""

    pattern = re.compile(r"^([A-Z][^:]{2,50}):\s*([\s\S]+)")

    def split(self, paragraph: str) -> Optional[Tuple[str, str]]:
        match = self.pattern.match(paragraph)
        if not match:
            return None
        return match.group(1), match.group(2).strip()


DEFAULT_DETECTOR = ColonSubheadingDetector()


def parse_content_with_subheadings(
    content: str,
    detector: Optional[SubheadingDetector] = None,
) -> List[ContentPart]:
    """
    Split AI content into subheadings and body paragraphs.

    Paragraphs are separated by blank lines; blank paragraphs are dropped
    and each one is cleaned of markdown before detection. A detected
    subheading with an empty remainder yields only the subheading part.
    """
    detector = detector or DEFAULT_DETECTOR
    parts: List[ContentPart] = []

    for raw in content.split("\n\n"):
        if not raw.strip():
            continue
        cleaned = clean_markdown(raw.strip())

        split = detector.split(cleaned)
        if split is None:
            parts.append(ContentPart(is_subheading=False, text=cleaned))
            continue

        subheading, remainder = split
        parts.append(ContentPart(is_subheading=True, text=subheading))
        if remainder:
            parts.append(ContentPart(is_subheading=False, text=remainder))

    return parts


# ============================================================================
# Filenames
# ============================================================================

_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


def safe_filename(title: str, extension: str = "docx") -> str:
    """Replace every non-alphanumeric character of the title with '_'."""
    return f"{_UNSAFE.sub('_', title)}.{extension}"


def export_filename(
    document_type: Optional[str],
    system_name: Optional[str] = None,
    created: Optional[Union[dt.datetime, dt.date]] = None,
) -> str:
    """
    Filename for an exported document: {TypeLabel}_{System}_{YYYY-MM-DD}.docx

    The system part is sanitised, truncated to 30 characters and omitted
    when empty.
    """
    created = created or dt.date.today()
    date_str = created.strftime("%Y-%m-%d")
    system = _UNSAFE.sub("_", system_name or "")[:30]

    label = export_type_label(document_type)
    if system:
        return f"{label}_{system}_{date_str}.docx"
    return f"{label}_{date_str}.docx"
