"""
Ownership Record Models
=======================

Pydantic models and result objects shared by every stage of the owner
mapping pipeline.

OWNER RECORDS:
--------------
- PersonOwner:  first/last name required, middle and suffix optional
- CompanyOwner: display name only (matching uses the canonical key)

Both serialize with ``to_dict()``, omitting optional fields that are None,
so repeated runs produce byte-identical JSON.

Author: BellaTerra Intelligence Team
Date: December 2025
"""

from dataclasses import dataclass, field
from enum import Enum
import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


class ContractError(ValueError):
    """Raised when a caller hands the engine input of the wrong shape."""


class ReasonCode(str, Enum):
    """Reason an owner string was excluded from the timeline."""
    EMPTY = "empty"
    ADDRESS_OR_NOISE = "address_or_noise"
    UNCLASSIFIED = "unclassified"
    INSUFFICIENT_NAME_PARTS = "insufficient_name_parts"
    NON_OWNER_PLACEHOLDER = "non_owner_placeholder"
    COMMA_BUT_INSUFFICIENT_PARTS = "comma_but_insufficient_parts"


class EntityType(str, Enum):
    PERSON = "person"
    COMPANY = "company"


class NameOrder(str, Enum):
    """
    Token order of owner names written without a comma.

    Counties disagree: some print "LAST FIRST MIDDLE", others
    "FIRST MIDDLE LAST". The order is chosen per source.
    """
    FIRST_LAST = "first_last"
    LAST_FIRST = "last_first"


def _require_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("name component must not be empty")
    return value


class PersonOwner(BaseModel):
    """Individual owner with title-cased name components."""

    model_config = ConfigDict(from_attributes=True)

    type: Literal["person"] = "person"
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    suffix_name: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_required_names(cls, v):
        return _require_text(v)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class CompanyOwner(BaseModel):
    """Company, trust, bank or any other non-person owner."""

    model_config = ConfigDict(from_attributes=True)

    type: Literal["company"] = "company"
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _require_text(v)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


OwnerRecord = Union[PersonOwner, CompanyOwner]


class InvalidEntry(BaseModel):
    """Owner string rejected by the pipeline, with the reason."""

    model_config = ConfigDict(from_attributes=True)

    raw: str
    reason: ReasonCode

    def to_dict(self) -> Dict[str, str]:
        return {"raw": self.raw, "reason": self.reason.value}


class SalesRecord(BaseModel):
    """
    One row of a sales-history table.

    Dates arrive as M/D/YYYY or ISO strings; any field may be missing.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    date: Optional[StrictStr] = None
    grantor: Optional[StrictStr] = None
    grantee: Optional[StrictStr] = None


class ParseResult:
    """
    Result of classifying one owner string.

    Encapsulates success/failure and the (possibly several) owners found,
    e.g. "DOE, JANE=&JOHN" yields two persons.
    """

    def __init__(
        self,
        success: bool,
        records: Optional[List[OwnerRecord]] = None,
        reason: Optional[ReasonCode] = None
    ):
        self.success = success
        self.records = records or []
        self.reason = reason

    @classmethod
    def ok(cls, records: List[OwnerRecord]) -> "ParseResult":
        return cls(success=True, records=records)

    @classmethod
    def reject(cls, reason: ReasonCode) -> "ParseResult":
        return cls(success=False, reason=reason)

    @property
    def found_owner(self) -> bool:
        """True if at least one owner was produced."""
        return self.success and len(self.records) > 0

    @property
    def multiple_owners(self) -> bool:
        """True if the string expanded to more than one owner."""
        return len(self.records) > 1

    def __repr__(self) -> str:
        if self.success:
            return f"ParseResult(success=True, records={len(self.records)})"
        return f"ParseResult(success=False, reason={self.reason.value if self.reason else None})"


@dataclass
class PropertyOwnership:
    """
    Ownership history for one property.

    ``owners_by_date`` is already in output order: ISO dates ascending,
    then unknown_date_N buckets, then ``current``.
    """
    property_id: str
    owners_by_date: Dict[str, List[OwnerRecord]] = field(default_factory=dict)
    invalid_owners: List[InvalidEntry] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"property_{self.property_id}"

    def to_dict(self) -> Dict[str, Any]:
        """Converts to the owner mapping consumed by the file writers."""
        return {
            self.key: {
                "owners_by_date": {
                    bucket: [record.to_dict() for record in records]
                    for bucket, records in self.owners_by_date.items()
                },
                "invalid_owners": [entry.to_dict() for entry in self.invalid_owners],
            }
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
