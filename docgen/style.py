"""
Protectron Document Style Configuration

Single source of truth for brand colours, page geometry, font sizes and
column-width presets used by every generated document. Any colour or size
change is made here exactly once.

UNITS:
  - Page geometry and widths: twips (1 inch = 1440 twips)
  - Font sizes: half-points (22 = 11pt)
  - Colours: hex without '#'
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BrandColors:
    """Protectron brand colours, derived from the app's theme."""

    # Primary brand colors (purple)
    primary: str = "7F56D9"  # brand-600
    secondary: str = "9E77ED"  # brand-500
    dark: str = "53389E"  # brand-800
    light: str = "F9F5FF"  # brand-50, alternating rows

    # Neutral colors
    white: str = "FFFFFF"
    black: str = "000000"
    gray: str = "667085"  # gray-500
    light_gray: str = "E4E7EC"  # gray-200
    dark_gray: str = "344054"  # gray-700

    # Status colors
    success: str = "17B26A"
    error: str = "F04438"
    warning: str = "F79009"

    # Additional
    brand25: str = "FCFAFF"
    brand100: str = "F4EBFF"
    brand200: str = "E9D7FE"
    brand700: str = "6941C6"
    brand900: str = "42307D"


@dataclass(frozen=True)
class CompanyInfo:
    name: str = "Protectron Inc."
    tagline: str = "EU AI Act Compliance Platform"
    website: str = "https://protectron.ai"


@dataclass(frozen=True)
class PageGeometry:
    """US Letter with 1 inch margins."""

    margin_top: int = 1440
    margin_right: int = 1440
    margin_bottom: int = 1440
    margin_left: int = 1440
    width: int = 12240
    height: int = 15840
    usable_width: int = 9360


@dataclass(frozen=True)
class FontSizes:
    body: int = 22  # 11pt
    small: int = 20  # 10pt
    heading1: int = 32  # 16pt
    heading2: int = 26  # 13pt
    heading3: int = 24  # 12pt
    title: int = 48  # 24pt
    subtitle: int = 28  # 14pt


@dataclass(frozen=True)
class ColumnWidths:
    two_column_narrow: int = 2808  # 30%
    two_column_wide: int = 6552  # 70%
    three_column_equal: int = 3120  # 33.3%
    four_column_equal: int = 2340  # 25%


@dataclass(frozen=True)
class BorderStyle:
    """Table cell border. Size is in eighths of a point."""

    style: str = "single"
    size: int = 4
    color: str = "E4E7EC"


COLORS = BrandColors()
COMPANY = CompanyInfo()
PAGE = PageGeometry()
FONT_SIZES = FontSizes()
COLUMN_WIDTHS = ColumnWidths()
TABLE_BORDER = BorderStyle(color=COLORS.light_gray)

FONT_NAME = "Inter"

# Shading presets for tables
HEADER_SHADING = COLORS.primary
ALT_ROW_SHADING = COLORS.light

# Decorative rules used on cover pages and badges
WIDE_RULE = "━" * 62
NARROW_RULE = "━" * 34

# Numbering definitions applied to every document
BULLET_LIST = "bullet-list"
NUMBERED_LIST = "numbered-list"
