"""
Stable owner indexing.

File writers store each distinct owner once (person_1.json, company_2.json)
and link it to every date it appears under. OwnerIndex walks a finished
timeline in output order and hands out those identifiers; because the
timeline is byte-stable, so are the identifiers.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..models import CompanyOwner, OwnerRecord
from .deduplication import Deduplicator


class OwnerIndex:
    """Assigns person_N / company_N ids to owners across all buckets."""

    def __init__(self, deduplicator: Optional[Deduplicator] = None):
        self.deduplicator = deduplicator or Deduplicator()
        self._ids: Dict[Tuple[str, str], str] = {}
        self._owners: Dict[str, OwnerRecord] = {}
        self._by_date: Dict[str, List[str]] = {}
        self._counts = {'person': 0, 'company': 0}

    @classmethod
    def from_timeline(
        cls,
        owners_by_date: Dict[str, List[OwnerRecord]],
        deduplicator: Optional[Deduplicator] = None
    ) -> "OwnerIndex":
        index = cls(deduplicator)
        for bucket, records in owners_by_date.items():
            for record in records:
                index.register(bucket, record)
        return index

    def register(self, bucket: str, record: OwnerRecord) -> str:
        """Returns the owner's id, allocating one on first sight."""
        key = self.deduplicator.key(record)
        owner_id = self._ids.get(key)

        if owner_id is None:
            kind = 'company' if isinstance(record, CompanyOwner) else 'person'
            self._counts[kind] += 1
            owner_id = f"{kind}_{self._counts[kind]}"
            self._ids[key] = owner_id
            self._owners[owner_id] = record

        refs = self._by_date.setdefault(bucket, [])
        if owner_id not in refs:
            refs.append(owner_id)
        return owner_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owners": {owner_id: record.to_dict() for owner_id, record in self._owners.items()},
            "by_date": {bucket: list(ids) for bucket, ids in self._by_date.items()},
        }
