"""
Document Content Generators

One generator per document type turns the user's answers into body blocks.
When the answers carry AI-authored sections those replace the template
entirely; otherwise the fixed template is used and every missing answer
renders a placeholder sentence rather than an empty paragraph.

DOCUMENT TYPES:
  - technical: Technical Documentation (Article 11)
  - risk: Risk Assessment Report (Article 9)
  - policy: Data Governance Policy (Article 10)
  - model_card: Model Card (Article 13)

The content lists do not include the title page or any enterprise blocks;
those are added by the assembly layer according to the quality tier.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from shared.models import (
    AISection,
    DataGovernancePolicyData,
    DocumentData,
    GeneratorDocumentType,
    ModelCardData,
    RiskAssessmentData,
    TechnicalDocumentData,
)

from .elements import Block
from .helpers import attribution_line, bullet, format_date, heading, key_value_table, para, spacer
from .text import SubheadingDetector, clean_markdown, parse_content_with_subheadings

logger = logging.getLogger(__name__)


# ============================================================================
# AI-Authored Sections
# ============================================================================

def subheading_letter(position: int) -> str:
    """Letter label for the n-th subheading (1-based): a..z, then aa, ab, ..."""
    label = ""
    while position > 0:
        position, rem = divmod(position - 1, 26)
        label = chr(ord("a") + rem) + label
    return label


def generate_from_ai_sections(
    sections: Sequence[AISection],
    detector: Optional[SubheadingDetector] = None,
) -> List[Block]:
    """
    Lay out AI-authored sections.

    Each section gets a numbered Heading 1 ("1. Title"); detected
    subheadings become lettered Heading 2s ("a. Label") with the letters
    restarting in every section. The content ends with the attribution line.
    """
    elements: List[Block] = []

    for index, section in enumerate(sections, start=1):
        elements.append(heading(f"{index}. {clean_markdown(section.title)}", 1))

        subheading_count = 0
        for part in parse_content_with_subheadings(section.content, detector):
            if part.is_subheading:
                subheading_count += 1
                elements.append(heading(f"{subheading_letter(subheading_count)}. {part.text}", 2))
            elif part.text:
                elements.append(para(part.text))

        elements.append(spacer(200))

    elements.append(spacer(400))
    elements.append(attribution_line())
    return elements


def _closing() -> List[Block]:
    return [spacer(400), attribution_line()]


# ============================================================================
# Template Generators
# ============================================================================

def generate_technical_content(data: TechnicalDocumentData) -> List[Block]:
    ai_sections = data.answers.get_ai_sections()
    if ai_sections:
        return generate_from_ai_sections(ai_sections)

    system = data.ai_system
    answers = data.answers
    return [
        heading("1. Executive Summary", 1),
        para(
            f'This technical documentation provides a comprehensive overview of the "{system.name}" AI system, '
            "as required under Article 11 of the EU AI Act. This document covers the system's architecture, "
            "data processing, algorithms, and performance metrics."
        ),

        heading("2. System Overview", 1),
        key_value_table([
            ("System Name", system.name),
            ("Description", system.description or "N/A"),
            ("Risk Classification", system.risk_level or "To be determined"),
            ("Current Status", system.status or "Active"),
        ]),

        heading("3. Intended Purpose", 1),
        para(answers.purpose or "The intended purpose of this AI system has not been specified."),

        heading("4. Data Processing", 1),
        heading("4.1 Data Types Processed", 2),
        para(answers.data or "The data types processed by this system have not been specified."),

        heading("5. Decision-Making Process", 1),
        para(answers.decisions or "The decision-making process has not been specified."),

        heading("6. Intended Users", 1),
        para(answers.users or "The intended users have not been specified."),

        heading("7. Compliance Statement", 1),
        para(
            "This AI system is designed to comply with the requirements of the EU AI Act. "
            "Regular monitoring and updates are performed to ensure continued compliance."
        ),
        *_closing(),
    ]


def generate_risk_content(data: RiskAssessmentData) -> List[Block]:
    ai_sections = data.answers.get_ai_sections()
    if ai_sections:
        return generate_from_ai_sections(ai_sections)

    system = data.ai_system
    answers = data.answers
    return [
        heading("1. Executive Summary", 1),
        para(
            "This risk assessment report identifies and evaluates potential risks associated with the "
            f'"{system.name}" AI system. It covers foreseeable misuse, bias risks, and safety concerns '
            "with proposed mitigation strategies."
        ),

        heading("2. System Information", 1),
        key_value_table([
            ("System Name", system.name),
            ("Risk Classification", system.risk_level or "To be determined"),
            ("Assessment Date", format_date()),
        ]),

        heading("3. Identified Risks", 1),
        para(answers.risks or "No specific risks have been identified at this time."),

        heading("4. Mitigation Measures", 1),
        para(answers.mitigation or "Mitigation measures have not been specified."),

        heading("5. Monitoring Procedures", 1),
        para(answers.monitoring or "Monitoring procedures have not been specified."),

        heading("6. Risk Matrix", 1),
        para("The following risk categories are evaluated for this AI system:", spacing=100),
        bullet("Bias and discrimination risks"),
        bullet("Privacy and data protection risks"),
        bullet("Safety and security risks"),
        bullet("Transparency and explainability risks"),
        bullet("Human oversight risks"),

        heading("7. Recommendations", 1),
        para(
            "Based on this assessment, the following actions are recommended to maintain compliance "
            "and minimize risks associated with this AI system."
        ),
        *_closing(),
    ]


def generate_policy_content(data: DataGovernancePolicyData) -> List[Block]:
    ai_sections = data.answers.get_ai_sections()
    if ai_sections:
        return generate_from_ai_sections(ai_sections)

    answers = data.answers
    return [
        heading("1. Purpose", 1),
        para(
            "This Data Governance Policy documents our organization's approach to data quality, "
            "collection, and bias mitigation for AI systems. It outlines procedures for ensuring "
            "training data is representative, accurate, and ethically sourced."
        ),

        heading("2. Scope", 1),
        para(
            "This policy applies to all AI systems developed, deployed, or operated by the organization, "
            "including third-party AI systems integrated into our operations."
        ),

        heading("3. Data Sources", 1),
        para(answers.data_sources or "Data sources have not been specified."),

        heading("4. Data Quality Assurance", 1),
        para(answers.quality or "Data quality assurance procedures have not been specified."),

        heading("5. Bias Mitigation", 1),
        para(answers.bias or "Bias mitigation measures have not been specified."),

        heading("6. Data Governance Principles", 1),
        bullet("Data Accuracy: Ensure all data is accurate and up-to-date"),
        bullet("Data Completeness: Maintain comprehensive datasets"),
        bullet("Data Consistency: Apply consistent standards across all data"),
        bullet("Data Timeliness: Use current and relevant data"),
        bullet("Data Validity: Validate data against defined rules"),

        heading("7. Roles and Responsibilities", 1),
        para(
            "The organization designates specific roles responsible for data governance, "
            "including data stewards, data owners, and compliance officers."
        ),

        heading("8. Review and Updates", 1),
        para(
            "This policy shall be reviewed annually or when significant changes occur to "
            "AI systems or regulatory requirements."
        ),
        *_closing(),
    ]


def generate_model_card_content(data: ModelCardData) -> List[Block]:
    ai_sections = data.answers.get_ai_sections()
    if ai_sections:
        return generate_from_ai_sections(ai_sections)

    system = data.ai_system
    answers = data.answers
    return [
        heading("1. Model Overview", 1),
        key_value_table([
            ("Model Name", system.name),
            ("Description", system.description or "N/A"),
            ("Version", "1.0"),
            ("Last Updated", format_date()),
        ]),

        heading("2. Intended Use", 1),
        heading("2.1 Primary Use Cases", 2),
        para(system.purpose or "Primary use cases have not been specified."),

        heading("2.2 Out-of-Scope Uses", 2),
        para(
            "This model should not be used for purposes outside its intended scope, "
            "particularly in high-stakes decision-making without human oversight."
        ),

        heading("3. Capabilities", 1),
        para(answers.capabilities or "Model capabilities have not been specified."),

        heading("4. Limitations", 1),
        para(answers.limitations or "Model limitations have not been specified."),

        heading("5. Performance Metrics", 1),
        para(answers.performance or "Performance metrics have not been specified."),

        heading("6. Training Data", 1),
        para(
            "Information about the training data used for this model, including sources, "
            "preprocessing steps, and any known biases."
        ),

        heading("7. Ethical Considerations", 1),
        bullet("Fairness: Steps taken to ensure fair outcomes across different groups"),
        bullet("Privacy: Data protection measures implemented"),
        bullet("Transparency: Explainability of model decisions"),
        bullet("Accountability: Oversight and governance structures"),

        heading("8. Recommendations", 1),
        para(
            "Users of this model should implement appropriate human oversight and "
            "regularly monitor for performance degradation or bias."
        ),
        *_closing(),
    ]


# ============================================================================
# Dispatch
# ============================================================================

GENERATORS: Dict[str, Callable[..., List[Block]]] = {
    GeneratorDocumentType.TECHNICAL.value: generate_technical_content,
    GeneratorDocumentType.RISK.value: generate_risk_content,
    GeneratorDocumentType.POLICY.value: generate_policy_content,
    GeneratorDocumentType.MODEL_CARD.value: generate_model_card_content,
}


def generate_content(data: DocumentData) -> List[Block]:
    """Body blocks for a document. Raises ValueError for an unknown type."""
    document_type = getattr(data, "type", None)
    generator = GENERATORS.get(document_type)
    if generator is None:
        raise ValueError(f"Unknown document type: {document_type}")

    logger.debug(f"Generating {document_type} content")
    return generator(data)
