"""
Protectron Document Generator Configuration

Runtime configuration and per-generation trace records.

ENVIRONMENT:
  - DOCGEN_OUTPUT_DIR: directory for downloaded documents (default "output")
  - DOCGEN_LOG_LEVEL: logging level for the generator and API (default INFO)
  - DOCGEN_HOST / DOCGEN_PORT: bind address of the API server
  - CORS_ORIGINS: comma-separated origins allowed by the API
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Configuration for the document generator and its API."""

    output_dir: str = "output"
    log_level: str = "INFO"

    # API server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )

    @classmethod
    def from_env(cls) -> GeneratorConfig:
        """Load configuration from environment variables."""
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            output_dir=os.getenv("DOCGEN_OUTPUT_DIR", "output"),
            log_level=os.getenv("DOCGEN_LOG_LEVEL", "INFO"),
            host=os.getenv("DOCGEN_HOST", "0.0.0.0"),
            port=int(os.getenv("DOCGEN_PORT", "8000")),
            cors_origins=(
                [o.strip() for o in origins.split(",") if o.strip()]
                if origins
                else cls().cors_origins
            ),
        )


@dataclass
class GenerationTrace:
    """Timing and outcome of one document generation."""

    document_type: str
    quality: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    size_bytes: Optional[int] = None
    saved_to: Optional[str] = None
    error: Optional[str] = None

    def duration_ms(self) -> Optional[float]:
        """Get duration in milliseconds."""
        if self.completed_at is None:
            return None
        delta = self.completed_at - self.started_at
        return delta.total_seconds() * 1000

    def summary(self) -> str:
        duration = self.duration_ms()
        timing = f"{duration:.1f}ms" if duration is not None else "incomplete"
        return f"{self.document_type} ({self.quality}): {self.size_bytes or 0} bytes in {timing}"
