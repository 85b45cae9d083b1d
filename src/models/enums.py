"""
Closed ticket taxonomies: Project, Priority, BugType, Status.

Members are ``str``-valued so they serialize to their display value. Lenient
``coerce`` / ``from_string`` helpers map caller-supplied strings (HTTP payloads,
CSV imports) onto members; free-text classification lives in
``src.classification.category_classifier``.
"""
import re
from enum import Enum
from typing import Optional


def _normalize(value: str) -> str:
    """Lower-case, drop punctuation (keeping spaces), collapse whitespace."""
    cleaned = re.sub(r"[^a-z0-9\s]", "", value.strip().lower())
    return re.sub(r"\s+", " ", cleaned).strip()


class Project(str, Enum):
    """Supported L3 projects; GENERAL is the fallback."""

    MATERIAL_RECEIPT = "Material Receipt"
    MY_BUDDY = "My Buddy"
    CK_ALUMNI = "CK Alumni"
    HEPL_ALUMNI = "HEPL Alumni"
    HEPL_PORTAL = "HEPL Portal"
    MMW_MODULE_TICKET_TOOL = "MMW Module (Ticket Tool)"
    CK_TRENDS = "CK Trends"
    LIVEWIRE = "Livewire"
    MEETING_AGENDA = "Meeting Agenda"
    PRO_HIRE = "Pro Hire"
    E_CAPEX = "E-Capex"
    SOP = "SOP"
    ASSET_MANAGEMENT = "Asset Management"
    MOULD_MAMP = "Mould Mamp"
    E_LIBRARY = "E-Library"
    OUTLET_APPROVAL = "Outlet Approval"
    RA_TOOL = "RA Tool"
    CK_BAKERY = "CK Bakery"
    I_VIEW = "I-View"
    FORM_BUILDER = "Form Builder"
    GENERAL = "General"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Project":
        """
        Resolve a project name typed by a person.

        Matches display names and registered variants after normalization
        (``"ck-alumni"``, ``"CK_Alumni"`` and ``"ck alumni"`` are equivalent).
        Anything unknown resolves to GENERAL.
        """
        if value is None or not value.strip():
            return cls.GENERAL

        normalized = _normalize(value)
        compact = normalized.replace(" ", "")

        # Imported lazily: the dictionary module imports this one.
        from src.dictionary.variants import PROJECT_VARIANTS

        for project, variants in PROJECT_VARIANTS.items():
            candidates = {_normalize(project.value)}
            candidates.update(_normalize(v) for v in variants)
            if normalized in candidates or compact in {c.replace(" ", "") for c in candidates}:
                return project

        return cls.GENERAL


class Priority(str, Enum):
    """Ticket priority. PRIORITY is a generic marker never produced by classification."""

    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"
    PRIORITY = "PRIORITY"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "Priority":
        if value is None:
            return cls.MODERATE
        cleaned = value.strip().upper()
        if cleaned in cls.__members__:
            return cls[cleaned]
        if "HIGH" in cleaned or "URGENT" in cleaned:
            return cls.HIGH
        if "LOW" in cleaned:
            return cls.LOW
        if "MODERATE" in cleaned or "MEDIUM" in cleaned:
            return cls.MODERATE
        if "PRIORITY" in cleaned:
            return cls.PRIORITY
        return cls.MODERATE


class BugType(str, Enum):
    BUG = "BUG"
    ENHANCEMENT = "ENHANCEMENT"
    TASK = "TASK"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "BugType":
        if value is None:
            return cls.BUG
        cleaned = value.strip().upper()
        if cleaned in cls.__members__:
            return cls[cleaned]
        if "ENHANCEMENT" in cleaned or "FEATURE" in cleaned:
            return cls.ENHANCEMENT
        if "TASK" in cleaned:
            return cls.TASK
        return cls.BUG


class Status(str, Enum):
    """Ticket lifecycle. New tickets always start OPENED."""

    OPENED = "OPENED"
    ASSIGNED = "ASSIGNED"
    FIXED = "FIXED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"

    @property
    def is_terminal(self) -> bool:
        return self in (Status.FIXED, Status.RESOLVED, Status.CLOSED)

    @classmethod
    def coerce(cls, value: Optional[str]) -> "Status":
        if value is None:
            return cls.OPENED
        cleaned = value.strip().upper()
        if cleaned in cls.__members__:
            return cls[cleaned]
        if "ASSIGNED" in cleaned:
            return cls.ASSIGNED
        if "CLOSED" in cleaned or "FIXED" in cleaned:
            return cls.CLOSED
        return cls.OPENED
