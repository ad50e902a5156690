"""
Protectron Document Generator Web API Package

FastAPI-based HTTP interface for the document generator.

Usage:
    # Start the server
    uvicorn api.main:app --reload

    # Or via entry point
    protectron-docgen-api
"""

from api.main import app
from api.models import (
    DocumentTypeInfo,
    DocumentTypesResponse,
    GenerateDocumentRequest,
    PlanQualityResponse,
    UniversalDocumentRequest,
)

__all__ = [
    "app",
    "DocumentTypeInfo",
    "DocumentTypesResponse",
    "GenerateDocumentRequest",
    "PlanQualityResponse",
    "UniversalDocumentRequest",
]
