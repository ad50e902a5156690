"""
Pydantic Models for Generation Options

GenerateDocumentOptions is what callers pass to the top-level generation
functions. EnterpriseDocumentOptions is the superset metadata bag consumed
only by the formatting layer (cover page, document control, headers,
signature block, certification badge); it is derived from the call's
DocumentMetadata and GenerateDocumentOptions.

QUALITY TIERS:

  - basic: plain title page and simple header/footer
  - standard: cover page, document control, enhanced header/footer
  - enterprise: standard + table of contents, signature block,
    certification badge and custom brand colours
"""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .risk import RiskClassificationResult

_HEX_COLOR = re.compile(r"^#?[0-9A-Fa-f]{6}$")


class DocumentQuality(str, Enum):
    """Enterprise formatting tier."""

    BASIC = "basic"
    STANDARD = "standard"
    ENTERPRISE = "enterprise"


class Confidentiality(str, Enum):
    """Confidentiality classification printed on headers and cover pages."""

    PUBLIC = "Public"
    INTERNAL = "Internal"
    CONFIDENTIAL = "Confidential"
    STRICTLY_CONFIDENTIAL = "Strictly Confidential"


class OutputFormat(str, Enum):
    """Output formats. Only DOCX is implemented."""

    DOCX = "docx"
    PDF = "pdf"


def _normalize_hex_color(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    if not _HEX_COLOR.match(v):
        raise ValueError(f"Invalid hex color: '{v}'. Expected 6 hex digits, e.g. '7F56D9'")
    return v.lstrip("#").upper()


class GenerateDocumentOptions(BaseModel):
    """Options for generate_document / generate_universal_document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    format: OutputFormat = Field(
        default=OutputFormat.DOCX,
        description="Output format. PDF is declared but not implemented."
    )
    download: bool = Field(
        default=False,
        description="Write the generated document to output_dir under a filename derived from the title."
    )
    output_dir: Optional[str] = Field(
        default=None,
        description="Directory for downloads. Defaults to DOCGEN_OUTPUT_DIR."
    )
    quality: Optional[DocumentQuality] = Field(
        default=None,
        description="Enterprise formatting tier. Treated as basic when omitted."
    )
    organization_name: Optional[str] = None
    prepared_by: Optional[str] = None
    contact_email: Optional[str] = Field(
        default=None,
        description="Reserved. Passed to the enterprise options, not rendered yet."
    )
    ai_system_name: Optional[str] = None
    risk_level: Optional[str] = None
    confidentiality: Optional[Confidentiality] = None
    eu_ai_act_articles: Optional[List[str]] = Field(
        default=None,
        description="Explicit EU AI Act references. Derived from the document type when omitted."
    )
    certification_number: Optional[str] = Field(
        default=None,
        description="Certificate number. Its presence enables the certification badge (enterprise only)."
    )
    certification_date: Optional[Union[dt.datetime, dt.date]] = None
    primary_color: Optional[str] = Field(
        default=None,
        description="Custom primary brand colour (enterprise only), hex without '#'."
    )

    @field_validator("primary_color")
    @classmethod
    def validate_primary_color(cls, v):
        return _normalize_hex_color(v)

    def with_risk_classification(self, result: RiskClassificationResult) -> GenerateDocumentOptions:
        """
        Return a copy carrying an upstream risk classification.

        Explicitly set risk level and article references win over the
        classification result.
        """
        update = {}
        if self.risk_level is None:
            update["risk_level"] = result.risk_level.value
        if self.eu_ai_act_articles is None and result.triggered_articles:
            update["eu_ai_act_articles"] = list(result.triggered_articles)
        return self.model_copy(update=update)


class EnterpriseDocumentOptions(BaseModel):
    """
    Metadata bag consumed by the enterprise formatting layer.

    ``certification_number`` gates the certification badge: when it is
    absent the badge is silently omitted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quality: DocumentQuality = DocumentQuality.BASIC

    # Core metadata
    title: str
    subtitle: Optional[str] = None
    document_type: str = Field(
        description="Open-ended document type key used for display name and article lookups."
    )
    version: Optional[str] = None
    date: Optional[Union[dt.datetime, dt.date]] = None

    # Organization
    organization_name: str
    organization_logo: Optional[str] = Field(
        default=None,
        description="Reserved for logo rendering (base64 or URL). Not rendered yet."
    )
    prepared_by: Optional[str] = None
    contact_email: Optional[str] = Field(
        default=None,
        description="Reserved for a contact line. Carried through from the request, not rendered yet."
    )

    # AI system
    ai_system_name: Optional[str] = None
    risk_level: Optional[str] = None

    # Classification and references
    confidentiality: Optional[Confidentiality] = None
    eu_ai_act_articles: Optional[List[str]] = None
    annex_references: Optional[List[str]] = Field(
        default=None,
        description="Reserved for Annex references. Not rendered yet; articles cover Annex IV today."
    )

    # Certification
    certification_number: Optional[str] = None
    certification_date: Optional[Union[dt.datetime, dt.date]] = None

    # Custom branding (enterprise only)
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = Field(
        default=None,
        description="Reserved secondary brand colour, hex without '#'. Validated, not rendered yet."
    )

    @field_validator("primary_color", "secondary_color")
    @classmethod
    def validate_brand_colors(cls, v):
        return _normalize_hex_color(v)

    @property
    def classification(self) -> str:
        """Confidentiality label, defaulting to Confidential."""
        return (self.confidentiality or Confidentiality.CONFIDENTIAL).value

    @property
    def version_label(self) -> str:
        return self.version or "1.0"

    @property
    def preparer(self) -> str:
        """Who prepared the document, falling back to the organization."""
        return self.prepared_by or self.organization_name
