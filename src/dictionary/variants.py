"""
Canonical variant dictionaries — category → known textual spellings.

Each classifier scans these lists with fuzzy matching; the lists are data,
kept here so they can be reviewed and extended without touching the
classifier. Dict order is the tie-break priority between categories that
reach the same similarity score.

Curation rules:
    - Variants are lower-case.
    - A project's lower-cased display name is always its first variant.
    - A variant must not contain, as a substring, a variant of an EARLIER
      category of the same classifier (it would lose every tie to it).
"""
from typing import Dict, Mapping, Tuple, TypeVar

from src.models.enums import BugType, Priority, Project

E = TypeVar("E")

# =============================================================================
# Projects (GENERAL is the fallback and has no variants)
# =============================================================================
PROJECT_VARIANTS: Dict[Project, Tuple[str, ...]] = {
    Project.MATERIAL_RECEIPT: (
        "material receipt", "materialreceipt", "material reciept", "materialreciept",
        "material-receipt", "material_receipt", "mat receipt", "matreceipt",
    ),
    Project.MY_BUDDY: (
        "my buddy", "mybuddy", "my-buddy", "my_buddy", "mybudy", "my budy",
    ),
    Project.CK_ALUMNI: (
        "ck alumni", "ckalumni", "ck-alumni", "ck_alumni", "c k alumni", "ckpl alumni",
        "ck alumini", "ckalumini", "ck alumi", "ckalumi",
    ),
    Project.HEPL_ALUMNI: (
        "hepl alumni", "heplalumni", "hepl-alumni", "hepl_alumni", "h e p l alumni",
        "hepl alumini", "heplalumini", "hepl alumi", "heplalumi",
    ),
    Project.HEPL_PORTAL: (
        "hepl portal", "heplportal", "hepl-portal", "hepl_portal", "h e p l portal",
        "hepl portl", "heplportl", "hepl protal", "heplprotal",
    ),
    Project.MMW_MODULE_TICKET_TOOL: (
        "mmw module (ticket tool)", "mmw module", "mmwmodule", "mmw-module", "mmw_module",
        "ticket tool", "tickettool", "ticket-tool", "ticket_tool",
        "mmw ticket tool", "mmwticket tool", "mmw tickettool",
    ),
    Project.CK_TRENDS: (
        "ck trends", "cktrends", "ck-trends", "ck_trends", "c k trends",
        "ck trend", "cktrend", "ck trands", "cktrands",
    ),
    Project.LIVEWIRE: (
        "livewire", "live wire", "live-wire", "live_wire", "livwire", "livewir",
    ),
    Project.MEETING_AGENDA: (
        "meeting agenda", "meetingagenda", "meeting-agenda", "meeting_agenda",
        "meet agenda", "meetagenda", "meeting agend", "meetingagend",
    ),
    Project.PRO_HIRE: (
        "pro hire", "prohire", "pro-hire", "pro_hire", "prohir", "pro hir",
    ),
    Project.E_CAPEX: (
        "e-capex", "ecapex", "e capex", "e_capex", "e-capx", "ecapx", "e capx",
    ),
    Project.SOP: (
        "sop", "s o p", "s.o.p", "standard operating procedure", "standard op procedure",
    ),
    Project.ASSET_MANAGEMENT: (
        "asset management", "assetmanagement", "asset-management", "asset_management",
        "assert management", "assertmanagement", "asset mgmt", "assetmgmt",
        "asset managment", "assetmanagment",
    ),
    Project.MOULD_MAMP: (
        "mould mamp", "mouldmamp", "mould-mamp", "mould_mamp",
        "mold mamp", "moldmamp", "mould map", "mouldmap",
    ),
    Project.E_LIBRARY: (
        "e-library", "elibrary", "e library", "e_library", "e-libary", "elibary",
    ),
    Project.OUTLET_APPROVAL: (
        "outlet approval", "outletapproval", "outlet_approval", "outlet-approval",
        "outlet aproval", "outletaproval",
    ),
    Project.RA_TOOL: (
        "ra tool", "ratool", "ra_tool", "ra-tool",
    ),
    Project.CK_BAKERY: (
        "ck bakery", "ckbakery", "ck_bakery", "ck-bakery", "ck bakry",
    ),
    Project.I_VIEW: (
        "i-view", "iview", "i view", "i_view",
    ),
    Project.FORM_BUILDER: (
        "form builder", "formbuilder", "form-builder", "form_builder", "form buildr",
    ),
}

# =============================================================================
# Priority (MODERATE is the fallback)
# =============================================================================
PRIORITY_VARIANTS: Dict[Priority, Tuple[str, ...]] = {
    Priority.HIGH: (
        "critical", "urgent", "high priority", "asap", "emergency", "immediate",
        "critcal", "urgnt", "high priorit", "a s a p", "emergenc", "immedaite",
    ),
    Priority.LOW: (
        "low", "minor", "low priority", "when possible",
        "minr", "low priorit", "wen possible",
    ),
}

# =============================================================================
# Bug type (BUG is the fallback)
# =============================================================================
BUG_TYPE_VARIANTS: Dict[BugType, Tuple[str, ...]] = {
    BugType.ENHANCEMENT: (
        "enhancement", "feature", "improvement", "new feature", "upgrade", "optimize",
        "enhancment", "featur", "improvment", "new featur", "upgrad", "optimiz",
    ),
    BugType.TASK: (
        "task", "todo", "action item", "work item", "activity", "assignment",
        "tsk", "to do", "action itm", "work itm", "activit", "assignmnt",
    ),
}


def iter_variants(dictionary: Mapping[E, Tuple[str, ...]]):
    """Yield ``(category, variant)`` pairs in tie-break order."""
    for category, variants in dictionary.items():
        for variant in variants:
            yield category, variant
