"""
Constants used across the extraction engine.
Pinned so that the same email always yields the same ticket.
"""
from typing import List, Tuple

# =============================================================================
# Header labels
# =============================================================================
SUBJECT_LABEL: str = "Subject"
FROM_LABEL: str = "From"
TO_LABEL: str = "To"

# Sent-date labels, tried in order; the generic "Date" header is the fallback.
SENT_DATE_LABELS: List[str] = [
    "Sent",
    "Sent On",
    "Sent Date",
    "ReceivedDate",
    "Received Date",
    "Date Sent",
]
GENERIC_DATE_LABEL: str = "Date"

# Lines starting with one of these labels belong to the header block.
HEADER_LINE_LABELS: List[str] = [
    "From", "To", "Cc", "Bcc", "Subject", "Date", "Reply-To",
    "Sent", "Sent On", "Sent Date", "ReceivedDate", "Received Date", "Date Sent",
    "Importance", "Message-ID", "MIME-Version", "Content-Type",
    "Content-Transfer-Encoding", "Return-Path", "Received", "X-[A-Za-z0-9-]+",
]

# =============================================================================
# Date-format cascade (order matters: some formats shadow others)
# =============================================================================
DATE_FORMATS: List[str] = [
    # "Friday, July 11, 2025 1:14 PM"
    "%A, %B %d, %Y %I:%M %p",
    "%A, %B %d, %Y",
    "%A, %B %d, %Y %H:%M",
    # "July 11, 2025 1:14 PM"
    "%B %d, %Y %I:%M %p",
    "%B %d, %Y",
    # "15 July 2025 15:21"
    "%d %B %Y %H:%M",
    "%d %B %Y",
    # "15 Jul 2025 15:21"
    "%d %b %Y %H:%M",
    "%d %b %Y",
    # "July 15, 2025 15:21"
    "%B %d, %Y %H:%M",
    # "Jul 15, 2025 15:21"
    "%b %d, %Y %H:%M",
    "%b %d, %Y",
    # ISO
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    # Day-first slash dates win over US month-first ones
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
]

# Minimal date-shaped fragment extracted when no format matches the whole token.
DATE_FRAGMENT_PATTERN: str = r"(\d{1,2}\s+\w+\s+\d{4}|\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{4})"

# =============================================================================
# Body boilerplate markers
# =============================================================================
CONFIDENTIALITY_MARKERS: List[str] = [
    "confidentiality notice",
    "disclaimer:",
    "this e-mail and any attachments",
    "this email and any attachments",
]

# Closing salutations that start a signature block.
SALUTATION_PATTERN: str = (
    r"^(?:thanks\s*(?:&|and)\s*regards|(?:best|kind|warm|with)?\s*regards)\b"
)

# Reply/forward quoting that must not be mistaken for a salutation line.
SALUTATION_EXCEPTIONS: Tuple[str, ...] = ("as per",)

# =============================================================================
# Ticket field caps & sentinels
# =============================================================================
SUMMARY_MAX_CHARS: int = 100
DESCRIPTION_MAX_CHARS: int = 2000
IMPACT_MAX_CHARS: int = 500
TICKET_OWNER_MAX_CHARS: int = 100
CONTRIBUTOR_NAME_MAX_CHARS: int = 500
ELLIPSIS: str = "..."

NO_SUBJECT: str = "No Subject"
DEFAULT_SUMMARY: str = "Ticket from Email"
NO_DESCRIPTION: str = "No description available"
NO_IMPACT: str = "No impact information available"
UNKNOWN_OWNER: str = "Unknown"

# Impact heuristics.
IMPACT_MIN_SENTENCES: int = 3
IMPACT_MIN_CHARS_FOR_WINDOW: int = 100
