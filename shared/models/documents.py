"""
Pydantic Models for Document Generation Input

DocumentData is a closed, discriminated union over the four document
types that have a content generator:

  - technical: Technical Documentation (Article 11)
  - risk: Risk Assessment (Article 9)
  - policy: Data Governance Policy (Article 10)
  - model_card: Model Card (Article 13)

Each variant pairs DocumentMetadata, the AI system being documented and a
type-specific answers record of free-text strings keyed by question id.

AI OVERRIDE:

  Every answers record may carry AI-authored sections. When present they
  replace the static template for that document type. The explicit field
  is ``ai_generated_sections``; the legacy reserved key ``_aiGenerated``
  (a JSON-encoded list) is decoded on input. A payload that does not
  decode is logged and dropped, so generation falls back to the template.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from .metadata import AISystemInfo, DocumentMetadata

logger = logging.getLogger(__name__)

# Reserved answers key used by the assessment forms for AI-authored content
AI_GENERATED_KEY = "_aiGenerated"


class GeneratorDocumentType(str, Enum):
    """Document types with a content generator."""

    TECHNICAL = "technical"
    RISK = "risk"
    POLICY = "policy"
    MODEL_CARD = "model_card"


class AISection(BaseModel):
    """One AI-authored section: a title and free-text (possibly markdown) body."""

    title: str
    content: str


_SECTIONS_ADAPTER = TypeAdapter(List[AISection])


def decode_ai_sections(raw: Any) -> Optional[List[AISection]]:
    """
    Decode AI-authored sections from the legacy answers payload.

    Accepts a JSON string or an already-decoded list. Returns None when the
    payload is empty or malformed; malformed payloads are logged.
    """
    if raw is None or raw == "":
        return None
    try:
        parsed = json.loads(raw) if isinstance(raw, str) else raw
        return _SECTIONS_ADAPTER.validate_python(parsed)
    except ValueError as e:
        logger.warning(f"Failed to parse AI-generated sections: {e}")
        return None


class DocumentAnswers(BaseModel):
    """Base class for answers records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ai_generated_sections: Optional[List[AISection]] = Field(
        default=None,
        description="AI-authored sections that replace the template content when non-empty."
    )

    @model_validator(mode="before")
    @classmethod
    def decode_legacy_ai_payload(cls, data: Any) -> Any:
        """Move the JSON-encoded ``_aiGenerated`` answer into the typed field."""
        if not isinstance(data, dict) or AI_GENERATED_KEY not in data:
            return data
        data = dict(data)
        sections = decode_ai_sections(data.pop(AI_GENERATED_KEY))
        already_set = data.get("ai_generated_sections") or data.get("aiGeneratedSections")
        if sections is not None and not already_set:
            data["ai_generated_sections"] = sections
        return data

    def get_ai_sections(self) -> Optional[List[AISection]]:
        """Return the AI override sections, or None when the template should be used."""
        if self.ai_generated_sections:
            return self.ai_generated_sections
        return None


class TechnicalAnswers(DocumentAnswers):
    purpose: Optional[str] = None
    data: Optional[str] = None
    decisions: Optional[str] = None
    users: Optional[str] = None


class RiskAnswers(DocumentAnswers):
    risks: Optional[str] = None
    mitigation: Optional[str] = None
    monitoring: Optional[str] = None


class PolicyAnswers(DocumentAnswers):
    data_sources: Optional[str] = None
    quality: Optional[str] = None
    bias: Optional[str] = None


class ModelCardAnswers(DocumentAnswers):
    capabilities: Optional[str] = None
    limitations: Optional[str] = None
    performance: Optional[str] = None


class _DocumentDataBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    metadata: DocumentMetadata


class TechnicalDocumentData(_DocumentDataBase):
    """Technical documentation input (Article 11)."""

    type: Literal["technical"] = "technical"
    ai_system: AISystemInfo
    answers: TechnicalAnswers = Field(default_factory=TechnicalAnswers)


class RiskAssessmentData(_DocumentDataBase):
    """Risk assessment input (Article 9)."""

    type: Literal["risk"] = "risk"
    ai_system: AISystemInfo
    answers: RiskAnswers = Field(default_factory=RiskAnswers)


class DataGovernancePolicyData(_DocumentDataBase):
    """Data governance policy input. Organization-wide, so the AI system is optional."""

    type: Literal["policy"] = "policy"
    ai_system: Optional[AISystemInfo] = None
    answers: PolicyAnswers = Field(default_factory=PolicyAnswers)


class ModelCardData(_DocumentDataBase):
    """Model card input."""

    type: Literal["model_card"] = "model_card"
    ai_system: AISystemInfo
    answers: ModelCardAnswers = Field(default_factory=ModelCardAnswers)


DocumentData = Annotated[
    Union[
        TechnicalDocumentData,
        RiskAssessmentData,
        DataGovernancePolicyData,
        ModelCardData,
    ],
    Field(discriminator="type"),
]

_DOCUMENT_DATA_ADAPTER = TypeAdapter(DocumentData)


def parse_document_data(payload: Any) -> Union[
    TechnicalDocumentData,
    RiskAssessmentData,
    DataGovernancePolicyData,
    ModelCardData,
]:
    """Validate a raw payload (dict or JSON-decoded) into the matching DocumentData variant."""
    return _DOCUMENT_DATA_ADAPTER.validate_python(payload)
