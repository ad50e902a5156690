"""
Unit Tests for Document Assembly and Rendering

This module contains tests for:
- docgen/assembly.py: enterprise option derivation, tier shells,
  generate_document / generate_universal_document, downloads
- docgen/renderer.py: the .docx produced by python-docx

Test coverage includes:
- Tier gating (basic shell, standard blocks, enterprise-only blocks)
- End-to-end generation re-opened with python-docx
- PDF and unknown type rejection
- Saving to the configured output directory
"""

import datetime as dt
import logging

import pytest
from docx.oxml.ns import qn
from docx.shared import RGBColor

from docgen import (
    build_document,
    build_enterprise_options,
    build_universal_document,
    generate_document,
    generate_universal_document,
)
from docgen.base import GenerationTrace, GeneratorConfig
from docgen.elements import TableOfContents
from docgen.renderer import render_document
from docgen.style import COMPANY
from shared.models import (
    AISection,
    DocumentMetadata,
    DocumentQuality,
    GenerateDocumentOptions,
    SystemSummary,
    TechnicalAnswers,
    TechnicalDocumentData,
)


def _paragraph_texts(doc, style=None):
    return [p.text for p in doc.paragraphs if style is None or p.style.name == style]


def _row_value(doc, key):
    """Second cell of the first table row whose first cell is key."""
    for table in doc.tables:
        for row in table.rows:
            if row.cells[0].text == key:
                return row.cells[1].text
    return None


def _has_toc(doc):
    return "TOC \\o" in doc.element.body.xml


# ============================================================================
# ENTERPRISE OPTIONS
# ============================================================================

class TestBuildEnterpriseOptions:
    """Tests for build_enterprise_options."""

    def test_fallbacks_from_metadata_and_system(self, sample_metadata, sample_ai_system):
        """Test metadata and system fill what the options leave unset."""
        opts = build_enterprise_options(
            sample_metadata,
            GenerateDocumentOptions(quality="standard"),
            "technical",
            sample_ai_system,
        )
        assert opts.quality == DocumentQuality.STANDARD
        assert opts.organization_name == "Acme Corp"
        assert opts.prepared_by == "Jane Doe"
        assert opts.ai_system_name == "Resume Screener"
        assert opts.risk_level == "high"
        assert opts.date == sample_metadata.date

    def test_options_win(self, sample_metadata, sample_ai_system):
        """Test explicit options override metadata and system values."""
        options = GenerateDocumentOptions(
            organization_name="Globex",
            prepared_by="Compliance Team",
            ai_system_name="Screener v2",
            risk_level="limited",
        )
        opts = build_enterprise_options(sample_metadata, options, "technical", sample_ai_system)
        assert opts.organization_name == "Globex"
        assert opts.prepared_by == "Compliance Team"
        assert opts.ai_system_name == "Screener v2"
        assert opts.risk_level == "limited"

    def test_company_defaults(self):
        """Test the company name stands in for missing organisation and preparer."""
        opts = build_enterprise_options(DocumentMetadata(title="Doc"), GenerateDocumentOptions(), "risk")
        assert opts.quality == DocumentQuality.BASIC
        assert opts.organization_name == COMPANY.name
        assert opts.prepared_by == COMPANY.name
        assert opts.ai_system_name is None
        assert isinstance(opts.date, dt.datetime)


# ============================================================================
# TIER SHELLS (ELEMENT TREE)
# ============================================================================

class TestTierShells:
    """Tests for which blocks each tier assembles."""

    def test_basic_is_default(self, technical_data):
        """Test omitted quality produces the plain title page shell."""
        model = build_document(technical_data)
        assert model.body[1].style == "Title"
        assert model.body[1].text == "Technical Documentation"
        assert "Document Control" not in model.headings(1)
        assert not model.update_fields

    def test_basic_never_has_enterprise_blocks(self, technical_data):
        """Test basic ignores a certificate number and has no TOC or signatures."""
        options = GenerateDocumentOptions(quality="basic", certification_number="CERT-1")
        model = build_document(technical_data, options)

        assert not model.has_table_of_contents()
        assert "Approval & Signatures" not in model.headings(1)
        assert "Certificate" not in model.all_text()

    def test_basic_header(self, technical_data):
        """Test the plain header marks confidential documents."""
        header = build_document(technical_data).header.paragraphs[0]
        assert header.text == "Technical Documentation  |  Confidential"

    def test_basic_header_not_confidential(self, sample_metadata, sample_ai_system):
        """Test non-confidential documents show the company name instead."""
        metadata = sample_metadata.model_copy(update={"confidential": False})
        data = TechnicalDocumentData(metadata=metadata, ai_system=sample_ai_system)
        header = build_document(data).header.paragraphs[0]
        assert header.text == f"Technical Documentation  |  {COMPANY.name}"

    def test_standard_blocks(self, technical_data):
        """Test standard adds cover page and document control only."""
        model = build_document(technical_data, GenerateDocumentOptions(quality="standard"))
        assert "Document Control" in model.headings(1)
        assert not model.has_table_of_contents()
        assert "Approval & Signatures" not in model.headings(1)
        assert not model.update_fields

    def test_enterprise_blocks(self, technical_data):
        """Test enterprise adds TOC, signatures and field refresh."""
        options = GenerateDocumentOptions(quality="enterprise", certification_number="CERT-7")
        model = build_document(technical_data, options)

        assert model.has_table_of_contents()
        assert "Approval & Signatures" in model.headings(1)
        assert model.update_fields
        assert any("Certificate #: CERT-7" in text for text in model.texts())

    def test_enterprise_block_order(self, technical_data):
        """Test cover, control, TOC, content, signatures in that order."""
        model = build_document(technical_data, GenerateDocumentOptions(quality="enterprise"))
        h1 = model.headings(1)
        assert h1.index("Document Control") < h1.index("Table of Contents")
        assert h1.index("Table of Contents") < h1.index("1. Executive Summary")
        assert h1.index("7. Compliance Statement") < h1.index("Approval & Signatures")

        toc_index = next(i for i, b in enumerate(model.body) if isinstance(b, TableOfContents))
        assert toc_index > 0

    def test_no_badge_without_certificate(self, technical_data):
        """Test the badge is omitted at enterprise without a certificate."""
        model = build_document(technical_data, GenerateDocumentOptions(quality="enterprise"))
        assert not any("EU AI ACT COMPLIANT" in text for text in model.texts())

    def test_heading_color(self, technical_data):
        """Test the custom colour reaches the style sheet only at enterprise."""
        enterprise = build_document(
            technical_data, GenerateDocumentOptions(quality="enterprise", primary_color="112233")
        )
        standard = build_document(
            technical_data, GenerateDocumentOptions(quality="standard", primary_color="112233")
        )
        assert enterprise.heading_color == "112233"
        assert standard.heading_color == "7F56D9"

    def test_universal_document_type(self, sample_sections, sample_metadata):
        """Test the universal builder looks up names and articles by type."""
        model = build_universal_document(
            sample_sections,
            sample_metadata,
            SystemSummary(name="Resume Screener"),
            GenerateDocumentOptions(quality="standard"),
            document_type="qms",
        )
        control = model.tables()[0].cell_texts()
        assert ["Document Type", "Quality Management System"] in control
        assert ["EU AI Act Reference", "Article 17"] in control
        assert "1. System Overview" in model.headings(1)

    def test_pdf_rejected(self, technical_data):
        """Test PDF output is not implemented."""
        with pytest.raises(NotImplementedError):
            build_document(technical_data, GenerateDocumentOptions(format="pdf"))


# ============================================================================
# END-TO-END GENERATION
# ============================================================================

@pytest.mark.docx
class TestGenerateDocument:
    """Tests for generate_document, re-opening the bytes with python-docx."""

    @pytest.mark.asyncio
    async def test_standard_technical_document(self, technical_data, open_docx):
        """Test a standard technical document with one answer missing."""
        payload = await generate_document(technical_data, GenerateDocumentOptions(quality="standard"))
        doc = open_docx(payload)

        assert _row_value(doc, "Document Type") == "Technical Documentation"
        assert _row_value(doc, "Risk Classification") == "HIGH RISK"

        headings = _paragraph_texts(doc, "Heading 1")
        assert "3. Intended Purpose" in headings
        assert "Approval & Signatures" not in headings
        assert not _has_toc(doc)

        texts = _paragraph_texts(doc)
        index = texts.index("4.1 Data Types Processed")
        assert texts[index + 1] == "The data types processed by this system have not been specified."

    @pytest.mark.asyncio
    async def test_resume_screener_scenario(self, open_docx):
        """Test cover page, control table and body sections appear in order."""
        data = TechnicalDocumentData(
            metadata=DocumentMetadata(title="Technical Documentation"),
            ai_system={"id": "rs-1", "name": "Resume Screener", "riskLevel": "high"},
            answers=TechnicalAnswers(purpose="Screens job applicants"),
        )
        doc = open_docx(await generate_document(data, GenerateDocumentOptions(quality="standard")))
        texts = _paragraph_texts(doc)

        cover_system = texts.index("AI System:  Resume Screener")
        cover_risk = texts.index("Risk Level:  HIGH RISK")
        control = texts.index("Document Control")
        purpose = texts.index("3. Intended Purpose")
        data_heading = texts.index("4. Data Processing")
        data_types = texts.index("4.1 Data Types Processed")

        assert cover_system < cover_risk < control < purpose < data_heading < data_types
        assert texts[purpose + 1] == "Screens job applicants"
        assert texts[data_types + 1] == "The data types processed by this system have not been specified."
        assert _row_value(doc, "Document Type") == "Technical Documentation"
        assert not _has_toc(doc)
        assert "Approval & Signatures" not in texts

    @pytest.mark.asyncio
    async def test_enterprise_document(self, technical_data, open_docx):
        """Test the enterprise-only blocks survive serialization."""
        options = GenerateDocumentOptions(
            quality="enterprise", certification_number="CERT-9", primary_color="112233"
        )
        doc = open_docx(await generate_document(technical_data, options))

        assert _has_toc(doc)
        assert "Approval & Signatures" in _paragraph_texts(doc, "Heading 1")
        assert doc.settings.element.find(qn("w:updateFields")) is not None
        assert any("Certificate #: CERT-9" in text for text in _paragraph_texts(doc))
        assert doc.styles["Heading 1"].font.color.rgb == RGBColor.from_string("112233")

    @pytest.mark.asyncio
    async def test_basic_document(self, technical_data, open_docx):
        """Test the plain shell, header text and live page fields."""
        doc = open_docx(await generate_document(technical_data))

        assert _paragraph_texts(doc, "Title") == ["Technical Documentation"]
        section = doc.sections[0]
        assert section.header.paragraphs[0].text == "Technical Documentation  |  Confidential"
        footer_xml = section.footer._element.xml
        assert 'w:instr=" PAGE "' in footer_xml
        assert 'w:instr=" NUMPAGES "' in footer_xml
        assert section.page_width.twips == 12240

    @pytest.mark.asyncio
    async def test_table_styling(self, technical_data, open_docx):
        """Test header rows repeat and carry brand shading."""
        doc = open_docx(await generate_document(technical_data))
        table_xml = doc.tables[0]._tbl.xml

        assert 'w:fill="7F56D9"' in table_xml
        assert "w:tblHeader" in table_xml
        assert 'w:color="E4E7EC"' in table_xml

    @pytest.mark.asyncio
    async def test_bullets_are_numbered(self, sample_metadata, sample_ai_system, open_docx):
        """Test bullet paragraphs reference a numbering definition."""
        from shared.models import RiskAssessmentData

        data = RiskAssessmentData(metadata=sample_metadata, ai_system=sample_ai_system)
        doc = open_docx(await generate_document(data))
        bullet = next(p for p in doc.paragraphs if p.text == "Human oversight risks")
        assert bullet._p.pPr.numPr is not None

    @pytest.mark.asyncio
    async def test_universal_document(self, sample_sections, sample_metadata, open_docx):
        """Test AI-authored sections render with numbered and lettered headings."""
        payload = await generate_universal_document(
            sample_sections,
            sample_metadata,
            SystemSummary(name="Resume Screener", risk_level="high"),
            GenerateDocumentOptions(quality="standard"),
            document_type="risk",
        )
        doc = open_docx(payload)

        assert _paragraph_texts(doc, "Heading 1")[-2:] == ["1. System Overview", "2. Oversight"]
        assert _paragraph_texts(doc, "Heading 2")[-3:] == [
            "a. Data Sources",
            "b. Model Type",
            "a. Review Process",
        ]
        assert _row_value(doc, "Document Type") == "Risk Assessment"

    @pytest.mark.asyncio
    async def test_control_characters_in_ai_sections(self, sample_metadata, open_docx):
        """Test vertical tabs and form feeds pasted into AI content are dropped."""
        payload = await generate_universal_document(
            [AISection(title="Overview", content="Risk\x0bsummary: line\x0cbreak")],
            sample_metadata,
            SystemSummary(name="Resume Screener"),
        )
        doc = open_docx(payload)

        assert "a. Risksummary" in _paragraph_texts(doc, "Heading 2")
        assert "linebreak" in _paragraph_texts(doc)

    @pytest.mark.asyncio
    async def test_control_characters_in_answers(self, sample_metadata, sample_ai_system, open_docx):
        """Test template answers are sanitised as well."""
        data = TechnicalDocumentData(
            metadata=sample_metadata,
            ai_system=sample_ai_system,
            answers=TechnicalAnswers(purpose="Screen\x00 CVs\x1f"),
        )
        doc = open_docx(await generate_document(data))
        assert "Screen CVs" in _paragraph_texts(doc)

    @pytest.mark.asyncio
    async def test_pdf_raises(self, technical_data):
        """Test PDF requests fail before anything is rendered."""
        with pytest.raises(NotImplementedError):
            await generate_document(technical_data, GenerateDocumentOptions(format="pdf"))

    @pytest.mark.asyncio
    async def test_unknown_type_raises(self, sample_metadata):
        """Test an unknown document type is rejected."""

        class UnknownData:
            type = "qms"
            metadata = sample_metadata

        with pytest.raises(ValueError, match="Unknown document type"):
            await generate_document(UnknownData())

    @pytest.mark.asyncio
    async def test_generation_logged(self, technical_data, caplog):
        """Test a trace summary is logged for each document."""
        with caplog.at_level(logging.INFO, logger="docgen.assembly"):
            await generate_document(technical_data, GenerateDocumentOptions(quality="standard"))
        assert "Generated document: technical (standard)" in caplog.text


# ============================================================================
# DOWNLOADS
# ============================================================================

class TestDownload:
    """Tests for writing generated documents to disk."""

    @pytest.mark.asyncio
    async def test_no_file_by_default(self, technical_data, output_dir):
        """Test nothing is written unless download is requested."""
        await generate_document(technical_data)
        assert not output_dir.exists()

    @pytest.mark.asyncio
    async def test_download_to_env_directory(self, technical_data, output_dir):
        """Test DOCGEN_OUTPUT_DIR is used when no directory is given."""
        payload = await generate_document(technical_data, GenerateDocumentOptions(download=True))
        path = output_dir / "Technical_Documentation.docx"
        assert path.read_bytes() == payload

    @pytest.mark.asyncio
    async def test_download_to_explicit_directory(self, technical_data, tmp_path):
        """Test the options directory wins over the configuration."""
        target = tmp_path / "exports"
        options = GenerateDocumentOptions(download=True, output_dir=str(target))
        await generate_document(technical_data, options, GeneratorConfig(output_dir=str(tmp_path / "unused")))
        assert (target / "Technical_Documentation.docx").exists()
        assert not (tmp_path / "unused").exists()

    @pytest.mark.asyncio
    async def test_download_to_config_directory(self, technical_data, tmp_path):
        """Test the passed configuration supplies the directory."""
        config = GeneratorConfig(output_dir=str(tmp_path / "cfg"))
        await generate_document(technical_data, GenerateDocumentOptions(download=True), config)
        assert (tmp_path / "cfg" / "Technical_Documentation.docx").exists()


# ============================================================================
# CONFIGURATION
# ============================================================================

class TestConfiguration:
    """Tests for GeneratorConfig and GenerationTrace."""

    def test_from_env(self, monkeypatch):
        """Test environment variables are read."""
        monkeypatch.setenv("DOCGEN_OUTPUT_DIR", "/tmp/docs")
        monkeypatch.setenv("DOCGEN_PORT", "9000")
        monkeypatch.setenv("CORS_ORIGINS", "https://app.example.com, https://admin.example.com")
        config = GeneratorConfig.from_env()
        assert config.output_dir == "/tmp/docs"
        assert config.port == 9000
        assert config.cors_origins == ["https://app.example.com", "https://admin.example.com"]

    def test_default_origins(self, monkeypatch):
        """Test local development origins are allowed by default."""
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        assert "http://localhost:3000" in GeneratorConfig.from_env().cors_origins

    def test_trace_summary(self):
        """Test duration and size in the summary."""
        started = dt.datetime(2025, 1, 1, 12, 0, 0)
        trace = GenerationTrace(
            document_type="risk",
            quality="enterprise",
            started_at=started,
            completed_at=started + dt.timedelta(milliseconds=250),
            size_bytes=1024,
        )
        assert trace.duration_ms() == 250.0
        assert trace.summary() == "risk (enterprise): 1024 bytes in 250.0ms"

    def test_incomplete_trace(self):
        """Test an unfinished trace has no duration."""
        trace = GenerationTrace(document_type="risk", quality="basic", started_at=dt.datetime.now())
        assert trace.duration_ms() is None
        assert trace.summary().endswith("incomplete")


class TestRenderDocument:
    """Tests for render_document."""

    def test_returns_python_docx_document(self, technical_data):
        """Test the renderer returns an unsaved python-docx Document."""
        doc = render_document(build_document(technical_data))
        assert doc.styles["Normal"].font.name == "Inter"
        assert doc.sections[0].left_margin.twips == 1440
