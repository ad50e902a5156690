"""
Document Assembly

Wraps generated content in a document shell and serializes it.

FLOW:
  1. Generate body content (template or AI-authored sections)
  2. Pick the shell for the quality tier:
     - basic: title page + simple header/footer
     - standard / enterprise: cover page, document control and the
       enterprise header/footer, plus the enterprise-only blocks
  3. Render with python-docx in a worker thread and return the bytes
  4. Optionally write the file to the output directory

Unknown document types fail before any construction happens, and PDF
output is rejected with NotImplementedError.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from shared.models import (
    AISection,
    DocumentData,
    DocumentMetadata,
    DocumentQuality,
    EnterpriseDocumentOptions,
    GenerateDocumentOptions,
    OutputFormat,
    SystemSummary,
)

from .base import GenerationTrace, GeneratorConfig
from .elements import Alignment, Block, DocumentModel, FieldType, Footer, Header, Paragraph, TextRun
from .enterprise_format import (
    brand_color,
    create_certification_badge,
    create_cover_page,
    create_document_control_section,
    create_enterprise_footer,
    create_enterprise_header,
    create_signature_block,
    create_table_of_contents_section,
)
from .generators import generate_content, generate_from_ai_sections
from .helpers import format_date, page_break, spacer
from .renderer import pack_document
from .style import COLORS, COMPANY, FONT_SIZES
from .text import safe_filename
from .tiers import DocumentBlock, includes

logger = logging.getLogger(__name__)


# ============================================================================
# Options
# ============================================================================

def build_enterprise_options(
    metadata: DocumentMetadata,
    options: GenerateDocumentOptions,
    document_type: str,
    system: Optional[SystemSummary] = None,
) -> EnterpriseDocumentOptions:
    """
    Derive the formatting-layer metadata from the call's metadata and options.

    Explicit options win; the AI system fills in the system name and risk
    level when the options leave them unset.
    """
    return EnterpriseDocumentOptions(
        quality=options.quality or DocumentQuality.BASIC,
        title=metadata.title,
        subtitle=metadata.subtitle,
        document_type=document_type,
        version=metadata.version,
        date=metadata.date or datetime.now(),
        organization_name=options.organization_name or metadata.company_name or COMPANY.name,
        prepared_by=options.prepared_by or metadata.prepared_by or COMPANY.name,
        contact_email=options.contact_email,
        ai_system_name=options.ai_system_name or (system.name if system else None),
        risk_level=options.risk_level or (system.risk_level if system else None),
        confidentiality=options.confidentiality,
        eu_ai_act_articles=options.eu_ai_act_articles,
        certification_number=options.certification_number,
        certification_date=options.certification_date,
        primary_color=options.primary_color,
    )


# ============================================================================
# Document Shells
# ============================================================================

def _small(text: str, color: str = COLORS.gray, **run) -> TextRun:
    return TextRun(text=text, size=FONT_SIZES.small, color=color, **run)


def create_base_document(metadata: DocumentMetadata, content: Sequence[Block]) -> DocumentModel:
    """Plain shell: centred title page, right-aligned header, centred page footer."""
    prepared_by = metadata.prepared_by or COMPANY.name

    title_page: List[Block] = [
        spacer(2000),
        Paragraph(runs=(TextRun(text=metadata.title),), style="Title"),
        Paragraph(
            runs=(TextRun(text=metadata.subtitle or "", size=FONT_SIZES.subtitle, color=COLORS.gray),),
            alignment=Alignment.CENTER,
            spacing_after=400,
        ),
        Paragraph(
            runs=(TextRun(text=format_date(metadata.date), size=FONT_SIZES.body, bold=True),),
            alignment=Alignment.CENTER,
            spacing_before=800,
        ),
        Paragraph(
            runs=(_small(f"Prepared by: {prepared_by}"),),
            alignment=Alignment.CENTER,
            spacing_before=600,
        ),
        Paragraph(
            runs=(_small(f"Generated via {COMPANY.name} - {COMPANY.tagline}", italics=True),),
            alignment=Alignment.CENTER,
            spacing_before=200,
        ),
        page_break(),
    ]

    header = Header(paragraphs=(
        Paragraph(
            runs=(
                _small(metadata.title, color=COLORS.primary, bold=True),
                _small("  |  "),
                _small("Confidential" if metadata.confidential else COMPANY.name),
            ),
            alignment=Alignment.RIGHT,
        ),
    ))
    footer = Footer(paragraphs=(
        Paragraph(
            runs=(
                _small(f"{COMPANY.name}  |  "),
                _small("Page "),
                TextRun(field=FieldType.PAGE, size=FONT_SIZES.small, color=COLORS.gray),
                _small(" of "),
                TextRun(field=FieldType.NUM_PAGES, size=FONT_SIZES.small, color=COLORS.gray),
            ),
            alignment=Alignment.CENTER,
        ),
    ))

    return DocumentModel(body=title_page + list(content), header=header, footer=footer)


def create_enterprise_document(
    metadata: DocumentMetadata,
    content: Sequence[Block],
    opts: EnterpriseDocumentOptions,
) -> DocumentModel:
    """Compose the tier's blocks around the content; basic falls back to the plain shell."""
    quality = opts.quality
    if not includes(quality, DocumentBlock.COVER_PAGE):
        return create_base_document(metadata, content)

    body: List[Block] = []
    body.extend(create_cover_page(opts))
    if includes(quality, DocumentBlock.DOCUMENT_CONTROL):
        body.extend(create_document_control_section(opts))
    if includes(quality, DocumentBlock.TABLE_OF_CONTENTS):
        body.extend(create_table_of_contents_section())

    body.extend(content)

    if includes(quality, DocumentBlock.SIGNATURE_BLOCK):
        body.extend(create_signature_block(opts))
    if includes(quality, DocumentBlock.CERTIFICATION_BADGE):
        body.extend(create_certification_badge(opts))

    return DocumentModel(
        body=body,
        header=create_enterprise_header(opts),
        footer=create_enterprise_footer(opts),
        heading_color=brand_color(opts),
        update_fields=includes(quality, DocumentBlock.UPDATE_FIELDS),
    )


def _wrap(
    metadata: DocumentMetadata,
    content: List[Block],
    options: GenerateDocumentOptions,
    document_type: str,
    system: Optional[SystemSummary],
) -> DocumentModel:
    if options.quality and options.quality != DocumentQuality.BASIC:
        opts = build_enterprise_options(metadata, options, document_type, system)
        return create_enterprise_document(metadata, content, opts)
    return create_base_document(metadata, content)


# ============================================================================
# Building
# ============================================================================

def _check_format(options: GenerateDocumentOptions) -> None:
    if options.format == OutputFormat.PDF:
        raise NotImplementedError("PDF output is not supported; use format 'docx'")


def build_document(
    data: DocumentData,
    options: Optional[GenerateDocumentOptions] = None,
) -> DocumentModel:
    """Build the element tree for a structured document without serializing it."""
    options = options or GenerateDocumentOptions()
    _check_format(options)

    content = generate_content(data)
    return _wrap(data.metadata, content, options, data.type, getattr(data, "ai_system", None))


def build_universal_document(
    sections: Sequence[AISection],
    metadata: DocumentMetadata,
    system_info: SystemSummary,
    options: Optional[GenerateDocumentOptions] = None,
    document_type: str = "technical",
) -> DocumentModel:
    """Build the element tree for free-form AI-authored sections of any document type."""
    options = options or GenerateDocumentOptions()
    _check_format(options)

    content = generate_from_ai_sections(sections)
    return _wrap(metadata, content, options, document_type, system_info)


# ============================================================================
# Serialization
# ============================================================================

def save_document(payload: bytes, title: str, output_dir: str) -> Path:
    """Write document bytes to output_dir under a filename derived from the title."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / safe_filename(title)
    path.write_bytes(payload)
    logger.info(f"Saved document to {path}")
    return path


async def _pack(
    model: DocumentModel,
    title: str,
    document_type: str,
    options: GenerateDocumentOptions,
    config: Optional[GeneratorConfig],
) -> bytes:
    trace = GenerationTrace(
        document_type=document_type,
        quality=(options.quality or DocumentQuality.BASIC).value,
        started_at=datetime.now(),
    )
    try:
        payload = await asyncio.to_thread(pack_document, model)
    except Exception as e:
        trace.error = str(e)
        logger.error(f"Failed to serialize {document_type} document: {e}")
        raise

    trace.completed_at = datetime.now()
    trace.size_bytes = len(payload)

    if options.download:
        output_dir = options.output_dir or (config or GeneratorConfig.from_env()).output_dir
        trace.saved_to = str(save_document(payload, title, output_dir))

    logger.info(f"Generated document: {trace.summary()}")
    return payload


async def generate_document(
    data: DocumentData,
    options: Optional[GenerateDocumentOptions] = None,
    config: Optional[GeneratorConfig] = None,
) -> bytes:
    """
    Generate a .docx document for structured Q&A data.

    Args:
        data: Document data (technical, risk, policy or model_card)
        options: Output format, quality tier and enterprise metadata
        config: Generator configuration (used for the download directory)

    Returns:
        The serialized .docx bytes

    Raises:
        ValueError: Unknown document type
        NotImplementedError: PDF output requested
    """
    options = options or GenerateDocumentOptions()
    model = build_document(data, options)
    return await _pack(model, data.metadata.title, data.type, options, config)


async def generate_universal_document(
    sections: Sequence[AISection],
    metadata: DocumentMetadata,
    system_info: SystemSummary,
    options: Optional[GenerateDocumentOptions] = None,
    document_type: str = "technical",
    config: Optional[GeneratorConfig] = None,
) -> bytes:
    """Generate a .docx document from AI-authored sections of any document type."""
    options = options or GenerateDocumentOptions()
    model = build_universal_document(sections, metadata, system_info, options, document_type)
    return await _pack(model, metadata.title, document_type, options, config)
