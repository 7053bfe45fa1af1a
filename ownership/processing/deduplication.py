"""
Owner deduplication within a timeline bucket.

Collapses owner records that name the same owner inside one timeline
bucket. Deduplication never crosses buckets: the same person may own a
property in 2010 and again today.
"""

import re
from typing import Dict, List, Optional, Tuple

from loguru import logger

from ..classification.company_canonicalizer import CompanyNameCanonicalizer
from ..models import CompanyOwner, OwnerRecord, PersonOwner


class Deduplicator:
    """First-occurrence-wins deduplication with optional-field backfill."""

    PUNCTUATION = re.compile(r'[^\w\s]')
    WHITESPACE = re.compile(r'\s+')

    # Optional person fields outside the key that a later duplicate may fill in
    BACKFILL_FIELDS = ('suffix_name',)

    def __init__(self, canonicalizer: Optional[CompanyNameCanonicalizer] = None):
        self.canonicalizer = canonicalizer or CompanyNameCanonicalizer()

    @staticmethod
    def normalize_name(name: str) -> str:
        """Lowercase, no punctuation, single spaces."""
        if not name:
            return ''
        name = Deduplicator.PUNCTUATION.sub('', name.lower())
        return Deduplicator.WHITESPACE.sub(' ', name).strip()

    def key(self, record: OwnerRecord) -> Tuple[str, str]:
        """
        Dedup key, namespaced by owner type.

        Person:  "first middle last" (suffix is not part of the key)
        Company: canonical key ("ACME HOLDINGS LLC" -> "ACMEHOLDINGS")
        """
        if isinstance(record, CompanyOwner):
            return ('company', self.canonicalizer.key(record.name))

        parts = [record.first_name, record.middle_name, record.last_name]
        return ('person', self.normalize_name(' '.join(p for p in parts if p)))

    def dedupe(self, records: List[OwnerRecord]) -> List[OwnerRecord]:
        kept: Dict[Tuple[str, str], OwnerRecord] = {}

        for record in records:
            record_key = self.key(record)
            existing = kept.get(record_key)

            if existing is None:
                kept[record_key] = record
                continue

            if isinstance(existing, PersonOwner):
                kept[record_key] = self._backfill(existing, record)

        removed = len(records) - len(kept)
        if removed:
            logger.debug(f"🔁 {removed} duplicate owner(s) removed")

        return list(kept.values())

    def _backfill(self, existing: PersonOwner, duplicate: PersonOwner) -> PersonOwner:
        updates = {
            name: getattr(duplicate, name)
            for name in self.BACKFILL_FIELDS
            if getattr(existing, name) is None and getattr(duplicate, name) is not None
        }
        if not updates:
            return existing
        return existing.model_copy(update=updates)
