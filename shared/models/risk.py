"""
Pydantic Models for Risk Classification

The risk classification itself is produced upstream (the assessment
wizard's rule table). Documents only consume the resulting risk level
string and, optionally, the list of triggered EU AI Act articles.

RISK LEVELS (EU AI Act):

  - PROHIBITED: Article 5 prohibited practices
  - HIGH: Article 6 + Annex III - full Chapter III requirements apply
  - LIMITED: Article 50 - transparency obligations only
  - MINIMAL: No specific regulatory obligations
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class RiskLevel(str, Enum):
    """
    EU AI Act risk levels as stored on an AI system record.

    These map directly to the regulatory framework:
      - PROHIBITED: Prohibited under Article 5
      - HIGH: Regulated under Chapter III (Articles 8-27)
      - LIMITED: Transparency obligations under Article 50
      - MINIMAL: No specific obligations
    """

    PROHIBITED = "prohibited"
    HIGH = "high"
    LIMITED = "limited"
    MINIMAL = "minimal"


# Display label shown on cover pages and document control tables
RISK_LEVEL_LABELS: Dict[str, str] = {
    RiskLevel.PROHIBITED.value: "PROHIBITED",
    RiskLevel.HIGH.value: "HIGH RISK",
    RiskLevel.LIMITED.value: "LIMITED RISK",
    RiskLevel.MINIMAL.value: "MINIMAL RISK",
}


def risk_level_label(risk_level: Optional[str]) -> str:
    """Return the display label for a risk level, or "" when unknown."""
    return RISK_LEVEL_LABELS.get(risk_level or "", "")


class RiskClassificationResult(BaseModel):
    """
    Output of the upstream risk classification function.

    Consumed as plain data: the level feeds cover pages and document
    control tables, the triggered articles may be forwarded as explicit
    EU AI Act references.
    """

    risk_level: RiskLevel = Field(
        description="The determined risk level."
    )
    triggered_articles: List[str] = Field(
        default_factory=list,
        description="EU AI Act articles or criteria that triggered this level, e.g. 'Article 6'."
    )

    @property
    def label(self) -> str:
        """Display label for the classified level."""
        return risk_level_label(self.risk_level.value)
