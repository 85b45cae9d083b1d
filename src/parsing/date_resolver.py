"""
Date Resolver — raw sent-date token → calendar date.

Resolution cascade:
    1. Sent-date header token (``Sent:``, ``Sent On:``, ..., then ``Date:``)
    2. Ordered strptime formats (DATE_FORMATS); first success wins
    3. RFC 2822 (optional weekday prefix, optional timezone offset)
    4. Date-shaped fragment extracted by regex, re-parsed exactly once
    5. Fallback: today's date

Never raises. Format order matters: "05/07/2025" is read day-first.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from email.utils import parsedate_to_datetime
from typing import Callable, Optional

from src.config.constants import DATE_FORMATS
from src.parsing.header_extractor import extract_sent_token
from src.parsing.patterns import DATE_FRAGMENT

logger = logging.getLogger(__name__)

Today = Callable[[], date]

SOURCE_FORMAT = "format"
SOURCE_RFC2822 = "rfc2822"
SOURCE_FRAGMENT = "fragment"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class DateResolution:
    """Resolved date plus how it was obtained (for logging and metrics)."""

    value: date
    source: str                       # format | rfc2822 | fragment | fallback
    token: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


def _clean_token(token: str) -> str:
    """Collapse whitespace; drop Outlook's " at " between date and time."""
    cleaned = re.sub(r"\s+", " ", token.strip())
    cleaned = re.sub(r"(\d{4}) at (\d)", r"\1 \2", cleaned, flags=re.IGNORECASE)
    return cleaned


def _parse_with_formats(token: str) -> Optional[date]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(token, fmt).date()
        except ValueError:
            logger.debug("Date %r does not match format %r", token, fmt)
    return None


def _parse_rfc2822(token: str) -> Optional[date]:
    try:
        return parsedate_to_datetime(token).date()
    except (TypeError, ValueError, IndexError):
        return None


def parse_date_string(token: Optional[str]) -> Optional[date]:
    """
    Parse one date token with the format cascade and RFC 2822.

    Returns None instead of raising when nothing matches.
    """
    if not token or not token.strip():
        return None
    cleaned = _clean_token(token)
    return _parse_with_formats(cleaned) or _parse_rfc2822(cleaned)


def resolve_date_token(
    token: Optional[str],
    today: Optional[Today] = None,
) -> DateResolution:
    """
    Resolve a sent-date token, falling back to today's date.

    Args:
        token: Raw text captured after a date header label (may be None).
        today: Clock for the fallback. Defaults to ``date.today``.

    Returns:
        DateResolution (never raises).
    """
    today = today or date.today

    if token and token.strip():
        cleaned = _clean_token(token)

        parsed = _parse_with_formats(cleaned)
        if parsed is not None:
            return DateResolution(parsed, SOURCE_FORMAT, token)

        parsed = _parse_rfc2822(cleaned)
        if parsed is not None:
            return DateResolution(parsed, SOURCE_RFC2822, token)

        # Re-parse a minimal date-shaped fragment, once.
        fragment = DATE_FRAGMENT.search(cleaned)
        if fragment and fragment.group(1) != cleaned:
            logger.debug("Extracted date fragment %r from %r", fragment.group(1), token)
            parsed = parse_date_string(fragment.group(1))
            if parsed is not None:
                return DateResolution(parsed, SOURCE_FRAGMENT, token)

    fallback = today()
    logger.warning("Could not parse date %r, using today's date %s", token, fallback.isoformat())
    return DateResolution(fallback, SOURCE_FALLBACK, token)


def resolve_email_date(raw: str, today: Optional[Today] = None) -> DateResolution:
    """Locate the sent-date header in raw email text and resolve it."""
    label, token = extract_sent_token(raw or "")
    if label:
        logger.info("Sent date found under %r: %r", label, token)
    return resolve_date_token(token, today=today)
