"""
EmailHeaders — header fields pulled out of a raw email.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from src.config.constants import NO_SUBJECT


@dataclass(frozen=True)
class EmailHeaders:
    """Headers extracted once per parse. Absent headers keep their defaults."""

    subject: str = NO_SUBJECT
    from_address: Optional[str] = None
    to_raw: Optional[str] = None                        # Unparsed To: value
    to_addresses: Tuple[str, ...] = field(default=())   # Lower-cased, de-duplicated
    sent_label: Optional[str] = None                    # e.g. "Sent On", "Date"
    sent_token: Optional[str] = None                    # Raw date text after the label

    @property
    def has_subject(self) -> bool:
        return self.subject != NO_SUBJECT

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "from_address": self.from_address,
            "to_raw": self.to_raw,
            "to_addresses": list(self.to_addresses),
            "sent_label": self.sent_label,
            "sent_token": self.sent_token,
        }
