"""
Ticket Assembler — composes extracted parts into a Ticket.

Applies the field policies:
    - summary: subject, else first body line, else DEFAULT_SUMMARY (≤100 chars)
    - issue_description: labelled subject + labelled body (≤2000 chars)
    - impact: middle half of the body (≤500 chars), NO_IMPACT when empty
    - ticket_owner: sender's local part with dots as spaces, else UNKNOWN_OWNER
    - contact: first phone, else address, after the header block (signature included)
    - status: always OPENED

Truncation keeps ``limit - 3`` characters and appends "...".
"""
import logging
from datetime import date
from typing import List, Optional

from src.config.constants import (
    DEFAULT_SUMMARY,
    DESCRIPTION_MAX_CHARS,
    ELLIPSIS,
    IMPACT_MAX_CHARS,
    IMPACT_MIN_CHARS_FOR_WINDOW,
    IMPACT_MIN_SENTENCES,
    NO_DESCRIPTION,
    NO_IMPACT,
    SUMMARY_MAX_CHARS,
    TICKET_OWNER_MAX_CHARS,
    UNKNOWN_OWNER,
)
from src.classification.contributor_resolver import ContributorMatch
from src.models.email_headers import EmailHeaders
from src.models.enums import BugType, Priority, Project, Status
from src.models.ticket import Ticket
from src.parsing.body_extractor import extract_message_text
from src.parsing.patterns import (
    EMAIL_ADDRESS,
    EMPLOYEE_ID_BARE,
    EMPLOYEE_ID_LABELLED,
    EMPLOYEE_ID_PREFIXED,
    EMPLOYEE_NAME_LABELLED,
    MESSAGE_ID,
    PHONE_NUMBER,
    SALUTATION,
    SENTENCE_END,
    SIGNATURE_NAME,
)

logger = logging.getLogger(__name__)


def truncate(text: str, limit: int) -> str:
    """Cap *text* at *limit* characters, ending with an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


# =============================================================================
# Field derivations
# =============================================================================

def build_summary(headers: EmailHeaders, body: str) -> str:
    if headers.has_subject and headers.subject.strip():
        return truncate(headers.subject.strip(), SUMMARY_MAX_CHARS)
    if body and body.strip():
        first_line = body.strip().split("\n")[0].strip()
        return truncate(first_line, SUMMARY_MAX_CHARS)
    return DEFAULT_SUMMARY


def build_description(headers: EmailHeaders, body: str) -> str:
    parts: List[str] = []
    if headers.has_subject:
        parts.append(f"Subject: {headers.subject}\n\n")
    if body and body.strip():
        parts.append(f"Description:\n{body}")
    if not parts:
        return NO_DESCRIPTION
    return truncate("".join(parts), DESCRIPTION_MAX_CHARS)


def _middle_sentences(sentences: List[str]) -> List[str]:
    n = len(sentences)
    start, end = n // 4, (n * 3) // 4
    if start >= end:
        start, end = n // 3, (n * 2) // 3
    if start >= end:
        start, end = 0, max(1, n // 2)
    return sentences[start:end]


def build_impact(body: str) -> str:
    """
    Positional proxy for "the part that isn't greeting or signature".

    ≥3 sentences: the middle half by sentence count. 2 sentences: the second.
    Otherwise the middle half by characters when the body is long enough,
    or the whole body.
    """
    if not body or not body.strip():
        return NO_IMPACT

    clean = body.strip()
    sentences = [s for s in SENTENCE_END.split(clean) if s.strip()]

    if len(sentences) >= IMPACT_MIN_SENTENCES:
        impact = " ".join(s.strip() for s in _middle_sentences(sentences))
    elif len(sentences) == 2:
        impact = sentences[1].strip()
    elif len(clean) > IMPACT_MIN_CHARS_FOR_WINDOW:
        impact = clean[len(clean) // 4 : (len(clean) * 3) // 4].strip()
    else:
        impact = clean

    return truncate(impact, IMPACT_MAX_CHARS) if impact else NO_IMPACT


def build_ticket_owner(from_address: Optional[str]) -> str:
    """``john.doe@x.com`` → ``john doe``."""
    if not from_address or not from_address.strip():
        return UNKNOWN_OWNER
    local = from_address.split("@")[0].replace(".", " ").strip()
    return truncate(local, TICKET_OWNER_MAX_CHARS) if local else UNKNOWN_OWNER


def extract_contact(text: str) -> Optional[str]:
    """First phone-number-like token, else first email address, else None."""
    if not text:
        return None
    phone = PHONE_NUMBER.search(text)
    if phone:
        return phone.group(1)
    email = EMAIL_ADDRESS.search(text)
    return email.group(0) if email else None


def extract_employee_id(text: str) -> Optional[str]:
    if not text:
        return None
    for pattern in (EMPLOYEE_ID_LABELLED, EMPLOYEE_ID_PREFIXED, EMPLOYEE_ID_BARE):
        match = pattern.search(text)
        if match:
            return match.group(1).replace(" ", "")
    return None


def extract_employee_name(text: str) -> Optional[str]:
    """``Employee Name:`` label, else the alphabetic line after a closing salutation."""
    if not text:
        return None
    labelled = EMPLOYEE_NAME_LABELLED.search(text)
    if labelled and labelled.group(1).strip():
        return labelled.group(1).strip()

    lines = text.replace("\r\n", "\n").split("\n")
    for i, line in enumerate(lines[:-1]):
        if SALUTATION.match(line.strip().lower()):
            candidate = lines[i + 1].strip()
            if SIGNATURE_NAME.match(candidate) and 2 < len(candidate) < 50:
                return candidate
    return None


def extract_message_id(raw: str) -> Optional[str]:
    match = MESSAGE_ID.search(raw or "")
    return match.group(1) if match else None


# =============================================================================
# Assembly
# =============================================================================

def assemble_ticket(
    headers: EmailHeaders,
    body: str,
    received_date: date,
    project: Project,
    priority: Priority,
    bug_type: BugType,
    contributor_match: ContributorMatch,
    raw: str = "",
) -> Ticket:
    """
    Build the Ticket. Any exception propagates to the pipeline, which turns
    it into a parse failure.
    """
    contributor = contributor_match.contributor
    ticket = Ticket(
        summary=build_summary(headers, body),
        project=project,
        issue_description=build_description(headers, body),
        received_date=received_date,
        priority=priority,
        bug_type=bug_type,
        status=Status.OPENED,
        impact=build_impact(body),
        ticket_owner=build_ticket_owner(headers.from_address),
        contributor=contributor,
        contributor_name=contributor.name if contributor else None,
        contact=extract_contact(extract_message_text(raw) if raw else body),
        employee_id=extract_employee_id(raw or body),
        employee_name=extract_employee_name(raw or body),
        message_id=extract_message_id(raw),
    )
    logger.debug("Assembled ticket: summary=%r impact=%d chars", ticket.summary, len(ticket.impact))
    return ticket
