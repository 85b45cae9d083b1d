"""
Extraction Pipeline — main entry point: raw email text → Ticket.

Executes the stages:
    1. Header extraction (Subject / From / To / sent-date token)
    2. Body extraction (headers and signature boilerplate removed)
    3. Date resolution (format cascade, fallback to today)
    4. Classification: project, priority, bug type
    5. Contributor resolution from the To: header
    6. Ticket assembly + output schema validation

Recoverable absence (missing header, unparseable date, no match) never fails
a parse. Any unexpected exception is caught once, here, and re-raised as a
TicketParseError; no partial ticket is returned.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from src.classification.category_classifier import TicketClassifiers
from src.classification.contributor_resolver import OUTCOME_AMBIGUOUS, resolve_contributor
from src.config import settings
from src.models.contributor import Contributor, load_contributors
from src.models.extraction_config import ExtractionConfig
from src.models.ticket import Ticket
from src.parsing.body_extractor import extract_body
from src.parsing.date_resolver import Today, resolve_date_token
from src.parsing.header_extractor import extract_headers
from src.ticketing.metrics import (
    record_classifier_fallback,
    record_contributor_outcome,
    record_date_source,
    record_parse_outcome,
    timed_stage,
)
from src.ticketing.ticket_assembler import assemble_ticket
from src.ticketing.validation import validate_ticket

logger = logging.getLogger(__name__)


class TicketParseError(Exception):
    """An email could not be turned into a ticket."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


@dataclass
class ParseOutcome:
    """Value-style result of ``parse_email_to_ticket_safe``."""

    ok: bool
    ticket: Optional[Ticket] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "ticket": self.ticket.to_dict() if self.ticket else None,
            "error": self.error,
            "warnings": list(self.warnings),
        }


def _preview(raw: str) -> str:
    limit = settings.MAX_BODY_LOG_CHARS
    return raw if len(raw) <= limit else raw[:limit] + "..."


def _run(
    raw_email: str,
    contributors: Sequence[Contributor],
    config: ExtractionConfig,
    today: Optional[Today],
    warnings: List[str],
) -> Ticket:
    with timed_stage("headers"):
        headers = extract_headers(raw_email)
        body = extract_body(raw_email)

    with timed_stage("date"):
        resolution = resolve_date_token(headers.sent_token, today=today)
    record_date_source(resolution.source)
    if resolution.is_fallback:
        warnings.append(f"received_date defaulted to {resolution.value.isoformat()}")

    # The "No Subject" placeholder is not email content.
    subject = headers.subject if headers.has_subject else ""
    classifiers = TicketClassifiers.from_config(config)
    with timed_stage("classification"):
        project = classifiers.project.explain(subject, body)
        priority = classifiers.priority.explain(subject, body)
        bug_type = classifiers.bug_type.explain(subject, body)
    for name, result in (("project", project), ("priority", priority), ("bug_type", bug_type)):
        if result.fallback:
            record_classifier_fallback(name)
            warnings.append(f"{name} defaulted to {result.value.value}")

    with timed_stage("contributor"):
        match = resolve_contributor(headers.to_raw, contributors)
    record_contributor_outcome(match.outcome)
    if match.outcome == OUTCOME_AMBIGUOUS:
        warnings.append(
            "ambiguous contributor match: " + ", ".join(c.name for c in match.candidates)
        )

    with timed_stage("assembly"):
        ticket = assemble_ticket(
            headers=headers,
            body=body,
            received_date=resolution.value,
            project=project.value,
            priority=priority.value,
            bug_type=bug_type.value,
            contributor_match=match,
            raw=raw_email,
        )

    errors = validate_ticket(ticket)
    if errors:
        raise TicketParseError("Ticket failed output validation: " + "; ".join(errors))

    logger.info(
        "Ticket parsed: summary=%r project=%s priority=%s bug_type=%s contributor=%s",
        ticket.summary, ticket.project.value, ticket.priority.value,
        ticket.bug_type.value, ticket.contributor_name or "None",
    )
    return ticket


def parse_email_to_ticket(
    raw_email: str,
    contributors: Iterable[Any] = (),
    config: Optional[ExtractionConfig] = None,
    today: Optional[Today] = None,
    warnings: Optional[List[str]] = None,
) -> Ticket:
    """
    Parse one raw email into a Ticket.

    Args:
        raw_email: Plain-text email (headers + body).
        contributors: Read-only registry snapshot (Contributor models, dicts
            or attribute objects with id/name/email/active).
        config: Thresholds and logging switch. Defaults to ``from_settings()``.
        today: Clock for the received-date fallback. Defaults to ``date.today``.
        warnings: Optional list collecting recoverable-absence notes.

    Returns:
        The assembled Ticket.

    Raises:
        TicketParseError: empty input, out-of-range configured thresholds,
            invalid contributor rows, or any unexpected failure during
            extraction/assembly.
    """
    if warnings is None:
        warnings = []

    if raw_email is not None and not isinstance(raw_email, str):
        record_parse_outcome("failure")
        raise TicketParseError(f"Email content must be text, got {type(raw_email).__name__}")

    if raw_email is None or not raw_email.strip():
        record_parse_outcome("failure")
        raise TicketParseError("Email content is empty")

    try:
        config = config or ExtractionConfig.from_settings()
    except ValueError as e:
        record_parse_outcome("failure")
        logger.error("Invalid extraction configuration: %s", e)
        raise TicketParseError(f"Invalid extraction configuration: {e}", cause=e) from e

    logger.debug("Parsing email: %s", _preview(raw_email))

    # No registry snapshot means nobody can be assigned.
    try:
        registry = load_contributors(contributors or ())
    except (ValidationError, TypeError) as e:
        record_parse_outcome("failure")
        logger.error("Invalid contributor registry: %s", e)
        raise TicketParseError(f"Invalid contributor registry: {e}", cause=e) from e

    try:
        with timed_stage("parse"):
            ticket = _run(raw_email, registry, config, today, warnings)
    except TicketParseError as e:
        record_parse_outcome("failure")
        logger.error("Failed to parse email: %s", e.message)
        raise
    except Exception as e:
        record_parse_outcome("failure")
        logger.exception("Failed to parse email")
        raise TicketParseError(f"Failed to parse email: {e}", cause=e) from e

    record_parse_outcome("success")
    return ticket


def parse_email_to_ticket_safe(
    raw_email: str,
    contributors: Iterable[Any] = (),
    config: Optional[ExtractionConfig] = None,
    today: Optional[Today] = None,
) -> ParseOutcome:
    """Like ``parse_email_to_ticket`` but returns a ParseOutcome; never raises."""
    warnings: List[str] = []
    try:
        ticket = parse_email_to_ticket(raw_email, contributors, config, today, warnings)
    except TicketParseError as e:
        return ParseOutcome(ok=False, error=e.message, warnings=warnings)
    return ParseOutcome(ok=True, ticket=ticket, warnings=warnings)


def parse_emails(
    raw_emails: Iterable[str],
    contributors: Iterable[Any] = (),
    config: Optional[ExtractionConfig] = None,
    today: Optional[Today] = None,
) -> List[ParseOutcome]:
    """
    Parse a batch of emails. Calls are independent, so callers may also
    fan them out across threads or processes. Each email gets its own
    ParseOutcome.
    """
    registry = list(contributors or ())
    return [
        parse_email_to_ticket_safe(raw, registry, config, today)
        for raw in raw_emails
    ]
