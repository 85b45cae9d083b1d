"""
Header Extractor — Subject / From / To / sent-date token from raw email text.

Emails arrive pasted or forwarded as plain text, so headers are located by
line patterns rather than by an RFC 5322 parser:
    - the first line starting with ``<Label>:`` (case-insensitive) wins
    - continuation lines starting with whitespace are folded into the value
    - a missing header is a normal state and resolves to a default
"""
import logging
from typing import List, Optional, Tuple

from src.config.constants import (
    FROM_LABEL,
    GENERIC_DATE_LABEL,
    NO_SUBJECT,
    SENT_DATE_LABELS,
    SUBJECT_LABEL,
    TO_LABEL,
)
from src.models.email_headers import EmailHeaders
from src.parsing.patterns import (
    ANGLE_ADDRESS,
    EMAIL_ADDRESS,
    find_email_addresses,
    header_value_pattern,
)

logger = logging.getLogger(__name__)


def normalize_newlines(raw: str) -> str:
    return raw.replace("\r\n", "\n").replace("\r", "\n")


def find_header(raw: str, label: str) -> Optional[str]:
    """
    Value of the first ``<label>:`` line, with folded continuation lines joined.

    Returns None when the label is absent; an empty string when the header is
    present but blank.
    """
    text = normalize_newlines(raw)
    match = header_value_pattern(label).search(text)
    if match is None:
        return None

    parts = [match.group(1).strip()]
    rest = text[match.end():].split("\n")[1:]
    for line in rest:
        if line[:1] in (" ", "\t") and line.strip():
            parts.append(line.strip())
        else:
            break
    return " ".join(p for p in parts if p)


def extract_subject(raw: str) -> str:
    subject = find_header(raw, SUBJECT_LABEL)
    if not subject:
        logger.debug("No subject header found")
        return NO_SUBJECT
    return subject


def extract_from_address(raw: str) -> Optional[str]:
    """
    Sender address.

    ``Name <addr>`` → bracketed address; else the first address token in the
    value; else the raw value itself.
    """
    value = find_header(raw, FROM_LABEL)
    if not value:
        return None

    angle = ANGLE_ADDRESS.search(value)
    if angle:
        return angle.group(1).strip()

    plain = EMAIL_ADDRESS.search(value)
    if plain:
        return plain.group(0)

    return value


def extract_to_addresses(to_raw: Optional[str]) -> Tuple[str, ...]:
    """Lower-cased address tokens of a To: value, de-duplicated, in order."""
    seen: List[str] = []
    for address in find_email_addresses(to_raw):
        address = address.lower()
        if address not in seen:
            seen.append(address)
    return tuple(seen)


def extract_sent_token(raw: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Raw date text from the first non-empty sent-date header.

    Sent-date label spellings are tried in priority order; the generic
    ``Date:`` header is the fallback.

    Returns:
        (label, token), or (None, None) when no date header is present.
    """
    for label in SENT_DATE_LABELS + [GENERIC_DATE_LABEL]:
        value = find_header(raw, label)
        if value:
            return label, value
    return None, None


def extract_headers(raw: str) -> EmailHeaders:
    """
    Extract all headers from raw email text.

    Never raises for missing headers; absent values keep the EmailHeaders
    defaults.
    """
    if not raw:
        return EmailHeaders()

    to_raw = find_header(raw, TO_LABEL) or None
    sent_label, sent_token = extract_sent_token(raw)

    headers = EmailHeaders(
        subject=extract_subject(raw),
        from_address=extract_from_address(raw),
        to_raw=to_raw,
        to_addresses=extract_to_addresses(to_raw),
        sent_label=sent_label,
        sent_token=sent_token,
    )
    logger.debug(
        "Headers: subject=%r from=%r to=%s sent=%s:%r",
        headers.subject, headers.from_address, list(headers.to_addresses),
        sent_label, sent_token,
    )
    return headers
