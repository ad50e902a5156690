"""
Pydantic Models for Document Metadata and AI System Information

These value objects identify a single generated artifact and supply the
subject-matter content (the AI system being documented) to templates.
They are constructed fresh for every generation call and never persisted
by the generator.

Field names are snake_case; camelCase aliases are accepted so payloads
from the dashboard (``preparedBy``, ``riskLevel``, ...) validate as-is.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentMetadata(BaseModel):
    """Identifies a single generated document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(
        description="Document title, also used to derive the download filename."
    )
    subtitle: Optional[str] = Field(
        default=None,
        description="Optional subtitle shown under the title."
    )
    version: str = Field(
        default="1.0",
        description="Document version shown in headers and version history."
    )
    date: Optional[Union[dt.datetime, dt.date]] = Field(
        default=None,
        description="Document date. Defaults to the generation time when omitted."
    )
    prepared_by: Optional[str] = Field(
        default=None,
        description="Person or team that prepared the document."
    )
    company_name: Optional[str] = Field(
        default=None,
        description="Organization the document belongs to."
    )
    confidential: bool = Field(
        default=True,
        description="Whether the plain header marks the document as confidential."
    )


class SystemSummary(BaseModel):
    """
    Minimal description of an AI system.

    This is all the universal (AI-authored) generator needs; full system
    records use AISystemInfo.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    description: Optional[str] = None
    risk_level: Optional[str] = None
    status: Optional[str] = None


class AISystemInfo(SystemSummary):
    """AI system record supplying subject-matter content to templates."""

    id: str
    purpose: Optional[str] = None
    data_processed: Optional[str] = None
    intended_users: Optional[str] = None
    decision_making: Optional[str] = None
