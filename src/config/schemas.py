"""
JSON Schema for the serialized ticket (``Ticket.to_dict()``).

Checked with jsonschema before a ticket leaves the pipeline: required keys,
enum membership, length caps and the ISO date format.
"""
from src.config.constants import (
    CONTRIBUTOR_NAME_MAX_CHARS,
    DESCRIPTION_MAX_CHARS,
    IMPACT_MAX_CHARS,
    SUMMARY_MAX_CHARS,
    TICKET_OWNER_MAX_CHARS,
)
from src.models.enums import BugType, Priority, Project, Status

_NULLABLE_STRING: dict = {"type": ["string", "null"]}

# =============================================================================
# Ticket Output Schema
# =============================================================================
TICKET_OUTPUT_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": [
        "summary",
        "project",
        "issue_description",
        "received_date",
        "priority",
        "bug_type",
        "status",
        "impact",
        "ticket_owner",
        "contributor",
        "contributor_name",
    ],
    "properties": {
        "summary": {
            "type": "string",
            "minLength": 1,
            "maxLength": SUMMARY_MAX_CHARS,
        },
        "project": {
            "type": "string",
            "enum": [p.value for p in Project],
        },
        "issue_description": {
            "type": "string",
            "maxLength": DESCRIPTION_MAX_CHARS,
        },
        "received_date": {
            "type": "string",
            "pattern": r"^\d{4}-\d{2}-\d{2}$",
            "description": "ISO calendar date (yyyy-mm-dd)",
        },
        "priority": {
            "type": "string",
            "enum": [p.value for p in Priority],
        },
        "bug_type": {
            "type": "string",
            "enum": [b.value for b in BugType],
        },
        "status": {
            "type": "string",
            "enum": [s.value for s in Status],
        },
        "impact": {
            "type": "string",
            "minLength": 1,
            "maxLength": IMPACT_MAX_CHARS,
        },
        "ticket_owner": {
            "type": "string",
            "minLength": 1,
            "maxLength": TICKET_OWNER_MAX_CHARS,
        },
        "contributor": {
            "oneOf": [
                {"type": "null"},
                {
                    "type": "object",
                    "required": ["id", "name", "email", "active"],
                    "properties": {
                        "id": {"type": ["integer", "string"]},
                        "name": {"type": "string", "minLength": 1, "maxLength": 100},
                        "email": {"type": ["string", "null"], "maxLength": 150},
                        "active": {"type": "boolean"},
                    },
                },
            ],
        },
        "contributor_name": {
            "type": ["string", "null"],
            "maxLength": CONTRIBUTOR_NAME_MAX_CHARS,
        },
        "contact": _NULLABLE_STRING,
        "employee_id": _NULLABLE_STRING,
        "employee_name": _NULLABLE_STRING,
        "message_id": _NULLABLE_STRING,
    },
}
