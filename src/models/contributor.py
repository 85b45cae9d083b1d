"""
Contributor — read-only view of a row from the external contributor registry.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Contributor(BaseModel):
    """
    A person eligible for ticket assignment.

    The registry owns these rows; the extraction engine only reads them.
    Extra registry columns (timestamps, roles, ...) are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Union[int, str] = Field(..., description="Registry primary key.")
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=150)
    active: bool = Field(True, description="Inactive contributors are never matched.")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def compact_name(self) -> str:
        """Lower-cased name with spaces removed ("John Doe" → "johndoe")."""
        return self.name.lower().replace(" ", "")

    @property
    def dotted_name(self) -> str:
        """Lower-cased name with spaces replaced by dots ("John Doe" → "john.doe")."""
        return self.name.lower().replace(" ", ".")


def load_contributors(rows: Iterable[Union[Contributor, dict, Any]]) -> List[Contributor]:
    """
    Validate a registry snapshot into Contributor models.

    Accepts Contributor instances (kept as-is) or mappings/ORM-style objects.

    Raises:
        pydantic.ValidationError: on any invalid row.
    """
    contributors: List[Contributor] = []
    for row in rows:
        if isinstance(row, Contributor):
            contributors.append(row)
        elif isinstance(row, dict):
            contributors.append(Contributor.model_validate(row))
        else:
            contributors.append(Contributor.model_validate(row, from_attributes=True))
    return contributors
