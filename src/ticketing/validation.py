"""
Ticket output validation — JSON Schema conformance of a serialized ticket.
"""
import logging
from typing import List

from jsonschema import Draft7Validator

from src.config.schemas import TICKET_OUTPUT_SCHEMA
from src.models.ticket import Ticket

logger = logging.getLogger(__name__)

_VALIDATOR = Draft7Validator(TICKET_OUTPUT_SCHEMA)


def ticket_schema_errors(data: dict) -> List[str]:
    """
    All schema violations of a ticket dict, as readable messages.

    An empty list means the dict conforms to TICKET_OUTPUT_SCHEMA.
    """
    errors: List[str] = []
    for error in sorted(_VALIDATOR.iter_errors(data), key=lambda e: list(e.path)):
        location = ".".join(str(p) for p in error.path) or "<root>"
        errors.append(f"{location}: {error.message}")
    return errors


def validate_ticket(ticket: Ticket) -> List[str]:
    """Serialize *ticket* and return its schema violations (empty when valid)."""
    errors = ticket_schema_errors(ticket.to_dict())
    for error in errors:
        logger.warning("Ticket schema violation: %s", error)
    return errors
