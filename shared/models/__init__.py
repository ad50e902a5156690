"""
Protectron Document Generator Shared Pydantic Models

This package contains the value objects consumed by the document generator.
Models are organized by purpose:

  - metadata.py: Document metadata and AI system information
  - documents.py: DocumentData union, answers records, AI-authored sections
  - options.py: Generation options, quality tiers, enterprise metadata
  - risk.py: Risk levels and upstream classification results

Usage:
    from shared.models import (
        DocumentMetadata, AISystemInfo,
        TechnicalDocumentData, TechnicalAnswers,
        GenerateDocumentOptions, DocumentQuality,
    )
"""

# Metadata
from .metadata import (
    AISystemInfo,
    DocumentMetadata,
    SystemSummary,
)

# Document input
from .documents import (
    AI_GENERATED_KEY,
    AISection,
    DataGovernancePolicyData,
    DocumentAnswers,
    DocumentData,
    GeneratorDocumentType,
    ModelCardAnswers,
    ModelCardData,
    PolicyAnswers,
    RiskAnswers,
    RiskAssessmentData,
    TechnicalAnswers,
    TechnicalDocumentData,
    decode_ai_sections,
    parse_document_data,
)

# Options
from .options import (
    Confidentiality,
    DocumentQuality,
    EnterpriseDocumentOptions,
    GenerateDocumentOptions,
    OutputFormat,
)

# Risk
from .risk import (
    RISK_LEVEL_LABELS,
    RiskClassificationResult,
    RiskLevel,
    risk_level_label,
)

__all__ = [
    # Metadata
    "AISystemInfo",
    "DocumentMetadata",
    "SystemSummary",
    # Documents
    "AI_GENERATED_KEY",
    "AISection",
    "DataGovernancePolicyData",
    "DocumentAnswers",
    "DocumentData",
    "GeneratorDocumentType",
    "ModelCardAnswers",
    "ModelCardData",
    "PolicyAnswers",
    "RiskAnswers",
    "RiskAssessmentData",
    "TechnicalAnswers",
    "TechnicalDocumentData",
    "decode_ai_sections",
    "parse_document_data",
    # Options
    "Confidentiality",
    "DocumentQuality",
    "EnterpriseDocumentOptions",
    "GenerateDocumentOptions",
    "OutputFormat",
    # Risk
    "RISK_LEVEL_LABELS",
    "RiskClassificationResult",
    "RiskLevel",
    "risk_level_label",
]
