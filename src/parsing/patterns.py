"""
Compiled regular expressions shared by the header, body and ticket extractors.
"""
import re
from typing import List, Optional, Pattern

from src.config.constants import (
    DATE_FRAGMENT_PATTERN,
    HEADER_LINE_LABELS,
    SALUTATION_PATTERN,
)

# RFC-5322-like address token (good enough for headers and signatures).
EMAIL_ADDRESS = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# "Name <addr>"
ANGLE_ADDRESS = re.compile(r"<\s*([^<>\s]+@[^<>\s]+)\s*>")

# "98765 432109", "9876543210", "+91 9876543210"
PHONE_NUMBER = re.compile(r"(\+\d{1,3}\s?\d{10}|\d{5}\s+\d{6}|\b\d{10}\b)")

EMPLOYEE_ID_LABELLED = re.compile(
    r"\b(?:employee\s*id|emp\s*id)\s*[:#-]?\s*([A-Za-z0-9-]*\d[A-Za-z0-9-]*)",
    re.IGNORECASE,
)
EMPLOYEE_ID_PREFIXED = re.compile(r"\b(EMP\s?\d+)\b", re.IGNORECASE)
EMPLOYEE_ID_BARE = re.compile(r"\b(\d{6,8})\b")

EMPLOYEE_NAME_LABELLED = re.compile(r"employee\s*name\s*[:-]?[ \t]*([A-Za-z][A-Za-z .]*)", re.IGNORECASE)
SIGNATURE_NAME = re.compile(r"^[A-Za-z][A-Za-z ]+$")

SENTENCE_END = re.compile(r"(?<=[.!?])\s+")

SALUTATION = re.compile(SALUTATION_PATTERN, re.IGNORECASE)
DATE_FRAGMENT = re.compile(DATE_FRAGMENT_PATTERN)

HEADER_LINE = re.compile(
    r"^(?:" + "|".join(
        label if label.startswith("X-") else re.escape(label)
        for label in sorted(HEADER_LINE_LABELS, key=len, reverse=True)
    ) + r")\s*:",
    re.IGNORECASE,
)

MESSAGE_ID = re.compile(r"^message-id\s*:\s*<?([^<>\s]+)>?", re.IGNORECASE | re.MULTILINE)


def header_value_pattern(label: str) -> Pattern[str]:
    """
    Pattern for a header line ``<label>:`` at the start of a line.

    Group 1 is the value up to end-of-line; folded continuation lines are
    joined separately by the header extractor.
    """
    return re.compile(
        r"^[ \t]*" + re.escape(label).replace(r"\ ", r"[ \t]*") + r"[ \t]*:[ \t]*(.*)$",
        re.IGNORECASE | re.MULTILINE,
    )


def find_email_addresses(text: Optional[str]) -> List[str]:
    """All address tokens in *text*, in order of appearance (duplicates kept)."""
    if not text:
        return []
    return EMAIL_ADDRESS.findall(text)
