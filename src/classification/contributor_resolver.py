"""
Contributor Resolver — To: header → at most one registered contributor.

Two passes over the active contributors of a registry snapshot:
    1. Exact: the contributor's email (case-insensitive) is one of the
       addresses in the To: header.
    2. Name pattern (only if pass 1 found nobody): an address contains the
       contributor's name with spaces removed or replaced by dots
       ("john.doe@..." / "johndoe@...").

Exactly one match → that contributor. Zero or several → None; several
matches are left for a person to assign manually.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from src.models.contributor import Contributor
from src.parsing.header_extractor import extract_to_addresses

logger = logging.getLogger(__name__)

OUTCOME_MATCHED = "matched"
OUTCOME_AMBIGUOUS = "ambiguous"
OUTCOME_NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ContributorMatch:
    """Resolution result; ``candidates`` lists every contributor that matched."""

    contributor: Optional[Contributor]
    candidates: Tuple[Contributor, ...] = field(default=())
    method: Optional[str] = None          # "email" | "name_pattern"

    @property
    def outcome(self) -> str:
        if self.contributor is not None:
            return OUTCOME_MATCHED
        if len(self.candidates) > 1:
            return OUTCOME_AMBIGUOUS
        return OUTCOME_NOT_FOUND


def _distinct(contributors: Iterable[Contributor]) -> List[Contributor]:
    seen = set()
    result: List[Contributor] = []
    for c in contributors:
        if c.id not in seen:
            seen.add(c.id)
            result.append(c)
    return result


def match_by_email(addresses: Sequence[str], contributors: Sequence[Contributor]) -> List[Contributor]:
    wanted = set(addresses)
    return _distinct(
        c for c in contributors
        if c.active and c.email and c.email.lower() in wanted
    )


def match_by_name_pattern(addresses: Sequence[str], contributors: Sequence[Contributor]) -> List[Contributor]:
    matches: List[Contributor] = []
    for c in contributors:
        if not c.active:
            continue
        if any(c.dotted_name in addr or c.compact_name in addr for addr in addresses):
            logger.debug("Contributor %r matched by name pattern", c.name)
            matches.append(c)
    return _distinct(matches)


def resolve_contributor(
    to_raw: Optional[str],
    contributors: Sequence[Contributor],
) -> ContributorMatch:
    """
    Resolve the assignee for a ticket from its To: header.

    Args:
        to_raw: Raw To: header value (may be None).
        contributors: Registry snapshot; inactive rows are ignored.

    Returns:
        ContributorMatch whose ``contributor`` is None on zero or ambiguous matches.
    """
    addresses = extract_to_addresses(to_raw)
    logger.debug("To addresses: %s", list(addresses))
    if not addresses:
        logger.warning("No addresses in To header, no contributor assigned")
        return ContributorMatch(None)

    method = "email"
    matches = match_by_email(addresses, contributors)
    if not matches:
        method = "name_pattern"
        matches = match_by_name_pattern(addresses, contributors)

    if len(matches) == 1:
        logger.info("Contributor resolved by %s: %s", method, matches[0].name)
        return ContributorMatch(matches[0], tuple(matches), method)

    if matches:
        logger.warning(
            "Ambiguous contributor match (%s), leaving unassigned: %s",
            method, ", ".join(c.name for c in matches),
        )
        return ContributorMatch(None, tuple(matches), method)

    logger.warning("No contributor found for addresses: %s", list(addresses))
    return ContributorMatch(None)
