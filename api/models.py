"""
API Request/Response Models

Pydantic models for the FastAPI endpoints. Document payloads reuse the
shared models, so nested objects accept camelCase keys as well.
"""

from typing import Optional

from pydantic import BaseModel, Field

from shared.models import (
    AISection,
    DocumentData,
    DocumentMetadata,
    DocumentQuality,
    GenerateDocumentOptions,
    SystemSummary,
)


class GenerateDocumentRequest(BaseModel):
    """Request model for POST /api/documents"""

    data: DocumentData = Field(
        ...,
        description="Document data, discriminated by its 'type' field"
    )
    options: Optional[GenerateDocumentOptions] = Field(
        None,
        description="Quality tier and enterprise metadata. Downloads are ignored by the API."
    )


class UniversalDocumentRequest(BaseModel):
    """Request model for POST /api/documents/universal"""

    sections: list[AISection] = Field(
        ...,
        min_length=1,
        description="AI-authored sections, rendered in order"
    )
    metadata: DocumentMetadata
    system_info: SystemSummary
    document_type: str = Field(
        "technical",
        description="Document type key used for the display name and article references"
    )
    options: Optional[GenerateDocumentOptions] = None


class DocumentTypeInfo(BaseModel):
    """One entry of the document type catalogue"""

    type: str
    name: str
    articles: list[str]
    has_generator: bool = Field(
        ...,
        description="Whether POST /api/documents has a template for this type"
    )


class DocumentTypesResponse(BaseModel):
    """Response model for GET /api/document-types"""

    document_types: list[DocumentTypeInfo]


class PlanQualityResponse(BaseModel):
    """Response model for GET /api/plans/{plan}/quality"""

    plan: str
    tier: str
    quality: DocumentQuality
