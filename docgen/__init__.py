"""
Protectron Document Generator

Turns structured compliance answers or AI-authored sections into branded
EU AI Act compliance documents (.docx) at one of three quality tiers:

  1. basic - title page, simple header/footer
  2. standard - cover page, document control, enhanced header/footer
  3. enterprise - standard + table of contents, signature block,
     certification badge, custom brand colour

Pipeline:
  Answers → Content generator → Tier shell → Element tree → python-docx → bytes

Usage:
    from docgen import generate_document
    from shared.models import TechnicalDocumentData, GenerateDocumentOptions

    payload = await generate_document(
        data, GenerateDocumentOptions(quality="standard")
    )
"""

from .base import GenerationTrace, GeneratorConfig
from .elements import DocumentModel
from .assembly import (
    build_document,
    build_enterprise_options,
    build_universal_document,
    create_base_document,
    create_enterprise_document,
    generate_document,
    generate_universal_document,
    save_document,
)
from .generators import GENERATORS, generate_content, generate_from_ai_sections
from .lookups import (
    DOCUMENT_TYPE_ARTICLES,
    format_doc_type_name,
    get_document_type_name,
    resolve_articles,
)
from .renderer import pack_document, render_document
from .text import clean_markdown, export_filename, parse_content_with_subheadings, safe_filename
from .tiers import TIER_BLOCKS, DocumentBlock, quality_for_plan

__all__ = [
    # Config
    "GenerationTrace",
    "GeneratorConfig",
    # Assembly
    "DocumentModel",
    "build_document",
    "build_enterprise_options",
    "build_universal_document",
    "create_base_document",
    "create_enterprise_document",
    "generate_document",
    "generate_universal_document",
    "save_document",
    # Generators
    "GENERATORS",
    "generate_content",
    "generate_from_ai_sections",
    # Lookups
    "DOCUMENT_TYPE_ARTICLES",
    "format_doc_type_name",
    "get_document_type_name",
    "resolve_articles",
    # Rendering
    "pack_document",
    "render_document",
    # Text
    "clean_markdown",
    "export_filename",
    "parse_content_with_subheadings",
    "safe_filename",
    # Tiers
    "TIER_BLOCKS",
    "DocumentBlock",
    "quality_for_plan",
]
