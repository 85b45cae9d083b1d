"""
Body Extractor — message body without headers and trailing boilerplate.

The body starts at the first line after the header block that is neither
blank, a header line, nor a folded header continuation. Collection stops at
the first confidentiality-notice marker or closing salutation, which drops
signature and disclaimer trailers.
"""
import logging
from typing import List

from src.config.constants import CONFIDENTIALITY_MARKERS, SALUTATION_EXCEPTIONS
from src.parsing.header_extractor import normalize_newlines
from src.parsing.patterns import HEADER_LINE, SALUTATION

logger = logging.getLogger(__name__)


def is_header_line(line: str) -> bool:
    return bool(HEADER_LINE.match(line.strip()))


def is_boilerplate_start(line: str) -> bool:
    """True if *line* opens a signature or disclaimer block."""
    lowered = line.strip().lower()
    if not lowered:
        return False
    if any(marker in lowered for marker in CONFIDENTIALITY_MARKERS):
        return True
    if any(exception in lowered for exception in SALUTATION_EXCEPTIONS):
        return False
    return bool(SALUTATION.match(lowered))


def find_body_start(lines: List[str]) -> int:
    """Index of the first body line, or ``len(lines)`` if there is none."""
    in_header = False
    for i, line in enumerate(lines):
        if not line.strip():
            in_header = False
            continue
        if is_header_line(line):
            in_header = True
            continue
        # RFC 5322 folding: indented line right after a header line
        if in_header and line[:1] in (" ", "\t"):
            continue
        return i
    return len(lines)


def extract_body(raw: str) -> str:
    """
    Extract the trimmed message body. An empty string is a valid result.
    """
    if not raw:
        return ""

    lines = normalize_newlines(raw).split("\n")
    start = find_body_start(lines)

    collected: List[str] = []
    for line in lines[start:]:
        if is_boilerplate_start(line):
            logger.debug("Body truncated at boilerplate line %r", line.strip()[:80])
            break
        collected.append(line)

    body = "\n".join(collected).strip()
    logger.debug("Extracted body (%d chars)", len(body))
    return body


def extract_message_text(raw: str) -> str:
    """
    Everything after the header block, signature and disclaimer included.

    Contact details usually sit in the signature, which ``extract_body`` cuts.
    """
    if not raw:
        return ""
    lines = normalize_newlines(raw).split("\n")
    return "\n".join(lines[find_body_start(lines):]).strip()
