"""
Protectron Document Generator FastAPI Application

HTTP surface for the document generator. Provides endpoints for:
  - Generating documents from structured answers
  - Generating documents from AI-authored sections
  - Listing the document type catalogue
  - Resolving the document quality of a subscription plan
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Awaitable

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.models import (
    DocumentTypeInfo,
    DocumentTypesResponse,
    GenerateDocumentRequest,
    PlanQualityResponse,
    UniversalDocumentRequest,
)
from docgen import generate_document, generate_universal_document, safe_filename
from docgen.base import GeneratorConfig
from docgen.generators import GENERATORS
from docgen.lookups import DOCUMENT_TYPE_NAMES, articles_for_type, get_document_type_name
from docgen.tiers import quality_for_plan, tier_for_plan
from shared.models import GenerateDocumentOptions

config = GeneratorConfig.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("docgen.api")

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Starting Protectron document generator API")
    yield
    logger.info("Shutting down Protectron document generator API")


# Create FastAPI app
app = FastAPI(
    title="Protectron Document Generator API",
    description="EU AI Act compliance document generation",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend (configurable via environment)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Generation
# ============================================================================

def _request_options(options: GenerateDocumentOptions | None) -> GenerateDocumentOptions:
    # The API always returns the bytes; nothing is written server-side
    return (options or GenerateDocumentOptions()).model_copy(update={"download": False})


async def _docx_response(generation: Awaitable[bytes], title: str, document_type: str) -> Response:
    try:
        payload = await generation
    except NotImplementedError as e:
        raise HTTPException(status_code=501, detail=str(e))
    except Exception as e:
        # unknown types never get here; the request models reject them with 422
        logger.exception(f"Document generation failed for {document_type}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate document")

    return Response(
        content=payload,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{safe_filename(title)}"'},
    )


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "Protectron Document Generator API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.post("/api/documents")
async def create_document(request: GenerateDocumentRequest):
    """
    Generate a document from structured answers.

    The document type is taken from data.type (technical, risk, policy,
    model_card). Returns the .docx file as an attachment.
    """
    data = request.data
    logger.info(f"Generating {data.type} document: {data.metadata.title}")
    return await _docx_response(
        generate_document(data, _request_options(request.options), config),
        data.metadata.title,
        data.type,
    )


@app.post("/api/documents/universal")
async def create_universal_document(request: UniversalDocumentRequest):
    """
    Generate a document of any type from AI-authored sections.

    Sections are numbered in order; "Label: text" paragraphs become
    lettered subheadings.
    """
    logger.info(
        f"Generating universal {request.document_type} document with "
        f"{len(request.sections)} sections: {request.metadata.title}"
    )
    return await _docx_response(
        generate_universal_document(
            request.sections,
            request.metadata,
            request.system_info,
            _request_options(request.options),
            request.document_type,
            config,
        ),
        request.metadata.title,
        request.document_type,
    )


@app.get("/api/document-types", response_model=DocumentTypesResponse)
async def list_document_types():
    """
    Get the document type catalogue.

    Every known type with its display name, the EU AI Act articles it
    addresses and whether a structured-answers template exists for it.
    Types without a template can still be generated via the universal
    endpoint.
    """
    return DocumentTypesResponse(
        document_types=[
            DocumentTypeInfo(
                type=doc_type,
                name=get_document_type_name(doc_type),
                articles=articles_for_type(doc_type),
                has_generator=doc_type in GENERATORS,
            )
            for doc_type in DOCUMENT_TYPE_NAMES
        ]
    )


@app.get("/api/plans/{plan}/quality", response_model=PlanQualityResponse)
async def get_plan_quality(plan: str):
    """Resolve the document quality tier for a subscription plan slug."""
    return PlanQualityResponse(
        plan=plan,
        tier=tier_for_plan(plan),
        quality=quality_for_plan(plan),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


# ============================================================================
# Entry Point
# ============================================================================

def main():
    """Run the API server"""
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=True,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
