"""
Document Type Lookup Tables

Static tables keyed by the open-ended document type string.

TABLES:
  - DOCUMENT_TYPE_ARTICLES: EU AI Act articles each document type satisfies
  - DOCUMENT_CONTROL_NAMES: names shown in the document control table
  - DOCUMENT_TYPE_NAMES: the full catalogue of display names
  - EXPORT_TYPE_LABELS: filename-safe labels used for exported files

The control names and the catalogue differ for some types on purpose
("risk" is "Risk Assessment" in document control and "Risk Assessment
Report" in the catalogue).
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from shared.models import EnterpriseDocumentOptions


# ============================================================================
# EU AI Act References
# ============================================================================

DOCUMENT_TYPE_ARTICLES: Dict[str, List[str]] = {
    "technical": ["Article 11", "Annex IV"],
    "risk": ["Article 9"],
    "policy": ["Article 10"],
    "model_card": ["Article 13"],
    "human_oversight": ["Article 14"],
    "instructions_for_use": ["Article 13"],
    "testing_validation": ["Article 15"],
    "security_assessment": ["Article 15"],
    "qms": ["Article 17"],
    "logging_policy": ["Article 12", "Article 18", "Article 19"],
    "post_market_monitoring": ["Article 72"],
    "incident_response_plan": ["Article 73"],
    "cybersecurity_assessment": ["Article 15"],
    "eu_db_registration": ["Article 49", "Annex VIII"],
    "transparency_notice": ["Article 13", "Article 50"],
    "training_data_doc": ["Article 10", "Annex IV(2)(d)"],
    "bias_assessment": ["Article 10(2)(f)(g)"],
    "change_management": ["Annex IV(6)"],
    "ce_marking": ["Article 48"],
    "standards_mapping": ["Annex IV(7)"],
    "conformity_declaration": ["Article 47", "Annex V"],
    "fria": ["Article 27"],
}


def articles_for_type(document_type: str) -> List[str]:
    """Articles for a document type; empty for unknown types."""
    return list(DOCUMENT_TYPE_ARTICLES.get(document_type, []))


def resolve_articles(opts: EnterpriseDocumentOptions) -> List[str]:
    """
    Article references to print for a document.

    An explicit list on the options wins (even when empty). Otherwise the
    static lookup for the document type is used, and unknown types resolve
    to no references at all.
    """
    if opts.eu_ai_act_articles is not None:
        return list(opts.eu_ai_act_articles)
    return articles_for_type(opts.document_type)


# ============================================================================
# Display Names
# ============================================================================

DOCUMENT_CONTROL_NAMES: Dict[str, str] = {
    "technical": "Technical Documentation",
    "risk": "Risk Assessment",
    "policy": "Data Governance Policy",
    "model_card": "Model Card",
    "human_oversight": "Human Oversight Procedures",
    "instructions_for_use": "Instructions for Use",
    "testing_validation": "Testing & Validation Report",
    "security_assessment": "Security Assessment",
    "qms": "Quality Management System",
    "logging_policy": "Record-Keeping & Logging Plan",
    "post_market_monitoring": "Post-Market Monitoring Plan",
    "incident_response_plan": "Serious Incident Response Plan",
    "cybersecurity_assessment": "Cybersecurity Assessment",
    "eu_db_registration": "EU Database Registration Package",
    "transparency_notice": "Transparency Notice",
    "training_data_doc": "Training Data Documentation",
    "bias_assessment": "Bias & Fairness Assessment",
    "change_management": "Change Management Log",
    "ce_marking": "CE Marking Documentation",
    "standards_mapping": "Harmonised Standards Mapping",
    "conformity_declaration": "EU Declaration of Conformity",
    "fria": "Fundamental Rights Impact Assessment",
    "risk_mitigation_plan": "Risk Mitigation Plan",
    "ai_system_description": "AI System Description",
    "deployer_checklist": "Deployer Checklist",
}

DOCUMENT_TYPE_NAMES: Dict[str, str] = {
    "technical": "Technical Documentation",
    "risk": "Risk Assessment Report",
    "policy": "Data Governance Policy",
    "model_card": "Model Card",
    # Phase 1 - High Priority
    "testing_validation": "Testing & Validation Report",
    "instructions_for_use": "Instructions for Use",
    "human_oversight": "Human Oversight Procedures",
    "security_assessment": "Security Assessment Report",
    # Phase 2 - Medium Priority
    "risk_mitigation_plan": "Risk Mitigation Plan",
    "training_data_doc": "Training Data Documentation",
    "bias_assessment": "Bias Assessment Report",
    "ai_system_description": "AI System Description",
    "logging_policy": "Logging Policy",
    "deployer_checklist": "Deployer Compliance Checklist",
    # Phase 3 - Lower Priority
    "risk_management_policy": "Risk Management Policy",
    "design_development_spec": "Design & Development Specification",
    "audit_trail_samples": "Audit Trail Samples",
    "log_retention_doc": "Log Retention Documentation",
    "deployer_info_package": "Deployer Information Package",
    "user_notification_templates": "User Notification Templates",
    "intervention_protocols": "Intervention Protocols",
    "operator_training_records": "Operator Training Records",
    "accuracy_test_results": "Accuracy Test Results",
    "robustness_testing_doc": "Robustness Testing Documentation",
    "incident_reporting_procedures": "Incident Reporting Procedures",
    "monitoring_log": "Monitoring Log Template",
    "ai_disclosure_notice": "AI Disclosure Notice",
    "synthetic_content_policy": "Synthetic Content Policy",
    # Phase 4 - Remaining EU AI Act documents
    "qms": "Quality Management System",
    "post_market_monitoring": "Post-Market Monitoring Plan",
    "incident_response_plan": "Incident Response Plan",
    "fria": "Fundamental Rights Impact Assessment",
    "cybersecurity_assessment": "Cybersecurity Assessment",
    "transparency_notice": "Transparency Notice",
    "eu_db_registration": "EU Database Registration Form",
    "ce_marking": "CE Marking Declaration",
    "conformity_declaration": "EU Declaration of Conformity",
    "change_management": "Change Management Procedures",
    "standards_mapping": "Standards Mapping Document",
}


def _humanize(document_type: str) -> str:
    # "post_market_monitoring" -> "Post Market Monitoring"
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), document_type.replace("_", " "))


def format_doc_type_name(document_type: str) -> str:
    """Name shown in the document control table, humanised for unknown types."""
    return DOCUMENT_CONTROL_NAMES.get(document_type) or _humanize(document_type)


def get_document_type_name(document_type: str) -> str:
    """Catalogue display name, or the raw type string when unknown."""
    return DOCUMENT_TYPE_NAMES.get(document_type, document_type)


# ============================================================================
# Export Filenames
# ============================================================================

EXPORT_TYPE_LABELS: Dict[str, str] = {
    "technical": "Technical_Documentation",
    "risk": "Risk_Assessment",
    "policy": "Data_Governance_Policy",
    "model_card": "Model_Card",
    "testing_validation": "Testing_Validation_Report",
    "instructions_for_use": "Instructions_For_Use",
    "human_oversight": "Human_Oversight_Procedures",
    "security_assessment": "Security_Assessment",
    "risk_mitigation_plan": "Risk_Mitigation_Plan",
    "training_data_doc": "Training_Data_Documentation",
    "bias_assessment": "Bias_Assessment",
    "ai_system_description": "AI_System_Description",
    "logging_policy": "Logging_Policy",
    "deployer_checklist": "Deployer_Checklist",
    "qms": "Quality_Management_System",
    "post_market_monitoring": "Post_Market_Monitoring_Plan",
    "incident_response_plan": "Incident_Response_Plan",
    "fria": "Fundamental_Rights_Impact_Assessment",
    "cybersecurity_assessment": "Cybersecurity_Assessment",
    "transparency_notice": "Transparency_Notice",
    "eu_db_registration": "EU_Database_Registration",
    "ce_marking": "CE_Marking_Declaration",
    "conformity_declaration": "EU_Declaration_Of_Conformity",
    "change_management": "Change_Management",
    "standards_mapping": "Standards_Mapping",
}


def export_type_label(document_type: Optional[str]) -> str:
    if not document_type:
        return "Document"
    return EXPORT_TYPE_LABELS.get(document_type) or re.sub(r"[^a-zA-Z0-9]", "_", document_type)
