"""
Protectron Document Generator Test Configuration

Shared pytest fixtures and configuration for all tests.
"""

import datetime as dt
import sys
from io import BytesIO
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# Environment Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "docx: mark test as rendering a real .docx (python-docx round trip)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow (long-running)"
    )


# =============================================================================
# Fixtures: Environment
# =============================================================================

@pytest.fixture(scope="session")
def project_root_path():
    """Return the project root path."""
    return project_root


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    """Point DOCGEN_OUTPUT_DIR at a temporary directory."""
    target = tmp_path / "output"
    monkeypatch.setenv("DOCGEN_OUTPUT_DIR", str(target))
    return target


# =============================================================================
# Fixtures: API
# =============================================================================

@pytest.fixture(scope="module")
def api_client():
    """Create FastAPI test client."""
    from fastapi.testclient import TestClient
    from api.main import app
    return TestClient(app)


# =============================================================================
# Fixtures: Test Data
# =============================================================================

@pytest.fixture
def fixed_date():
    """A fixed document date so rendered dates are predictable."""
    return dt.date(2025, 3, 14)


@pytest.fixture
def sample_metadata(fixed_date):
    """Return document metadata for a technical document."""
    from shared.models import DocumentMetadata

    return DocumentMetadata(
        title="Technical Documentation",
        subtitle="Resume Screener",
        version="1.0",
        date=fixed_date,
        prepared_by="Jane Doe",
        company_name="Acme Corp",
    )


@pytest.fixture
def sample_ai_system():
    """Return a high-risk AI system."""
    from shared.models import AISystemInfo

    return AISystemInfo(
        id="sys-001",
        name="Resume Screener",
        description="Ranks job applicants based on CV content",
        risk_level="high",
        status="Active",
        purpose="Shortlisting candidates for recruiters",
    )


@pytest.fixture
def technical_data(sample_metadata, sample_ai_system):
    """Technical documentation data with a purpose answer and no data answer."""
    from shared.models import TechnicalAnswers, TechnicalDocumentData

    return TechnicalDocumentData(
        metadata=sample_metadata,
        ai_system=sample_ai_system,
        answers=TechnicalAnswers(purpose="Screen CVs"),
    )


@pytest.fixture
def sample_sections():
    """AI-authored sections with markdown and colon subheadings."""
    from shared.models import AISection

    return [
        AISection(
            title="**System Overview**",
            content=(
                "The system ranks applicants.\n\n"
                "Data Sources: CVs and cover letters.\n\n"
                "Model Type: Gradient boosted trees."
            ),
        ),
        AISection(
            title="Oversight",
            content="Review Process: Recruiters review every shortlist.",
        ),
    ]


@pytest.fixture
def open_docx():
    """Re-open generated bytes with python-docx."""
    from docx import Document

    def _open(payload: bytes):
        return Document(BytesIO(payload))

    return _open
