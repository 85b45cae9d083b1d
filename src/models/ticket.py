"""
Ticket — structured record produced from one email.

The enum fields are never null: every classifier guarantees a default.
Text fields are already capped by the assembler; the ``max_length``
constraints here only reject tickets built by hand with oversize values.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config.constants import (
    CONTRIBUTOR_NAME_MAX_CHARS,
    DESCRIPTION_MAX_CHARS,
    IMPACT_MAX_CHARS,
    SUMMARY_MAX_CHARS,
    TICKET_OWNER_MAX_CHARS,
)
from src.models.contributor import Contributor
from src.models.enums import BugType, Priority, Project, Status


class Ticket(BaseModel):
    """Support ticket derived from a raw email."""

    model_config = ConfigDict(frozen=True)

    summary: str = Field(..., min_length=1, max_length=SUMMARY_MAX_CHARS)
    project: Project = Project.GENERAL
    issue_description: str = Field(..., max_length=DESCRIPTION_MAX_CHARS)
    received_date: date
    priority: Priority = Priority.MODERATE
    bug_type: BugType = BugType.BUG
    status: Status = Status.OPENED
    impact: str = Field(..., max_length=IMPACT_MAX_CHARS)
    ticket_owner: str = Field(..., max_length=TICKET_OWNER_MAX_CHARS)
    contributor: Optional[Contributor] = None
    contributor_name: Optional[str] = Field(None, max_length=CONTRIBUTOR_NAME_MAX_CHARS)

    # Optional enrichment
    contact: Optional[str] = None
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    message_id: Optional[str] = None

    @field_validator("summary")
    @classmethod
    def summary_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("summary must not be blank")
        return v

    def to_dict(self) -> dict:
        """JSON-ready dict: enum display values, ISO date, contributor as a dict."""
        return {
            "summary": self.summary,
            "project": self.project.value,
            "issue_description": self.issue_description,
            "received_date": self.received_date.isoformat(),
            "priority": self.priority.value,
            "bug_type": self.bug_type.value,
            "status": self.status.value,
            "impact": self.impact,
            "ticket_owner": self.ticket_owner,
            "contributor": self.contributor.model_dump() if self.contributor else None,
            "contributor_name": self.contributor_name,
            "contact": self.contact,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "message_id": self.message_id,
        }
