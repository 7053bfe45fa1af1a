"""
Timeline Assembler
==================

Groups owner records into the buckets of a property's ownership history.

BUCKETS:
--------
- "YYYY-MM-DD":      owners that acquired the property on that date
- "unknown_date_N":  one bucket per undatable batch, numbered in the
                     order the batches were found
- "current":         owners listed on the parcel today

OUTPUT ORDER:
-------------
ISO dates ascending, then unknown_date_N in discovery order, then
"current" last. Empty buckets are omitted.

The unknown_date counter is owned by the caller and passed in, so two
properties processed side by side never share numbering.
"""

from datetime import date
import re
from typing import Dict, List, Optional

from loguru import logger

from ..models import OwnerRecord
from .deduplication import Deduplicator


CURRENT_BUCKET = "current"
UNKNOWN_DATE_PREFIX = "unknown_date_"

ISO_DATE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})(?:[T ][\d:.]+(?:Z|[+-]\d{2}:?\d{2})?)?$')
US_DATE = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})$')


def to_iso_date(value: Optional[str]) -> Optional[str]:
    """
    Normalizes a sale date to YYYY-MM-DD.

    Accepts M/D/YYYY, MM/DD/YYYY, YYYY-MM-DD and ISO timestamps.
    Returns None for anything else, including impossible dates.

    Examples:
        >>> to_iso_date("4/1/2010")
        '2010-04-01'
        >>> to_iso_date("13/45/2001") is None
        True
    """
    if not isinstance(value, str):
        return None
    text = value.strip()

    iso = ISO_DATE.match(text)
    us = US_DATE.match(text)
    if iso:
        year, month, day = (int(g) for g in iso.groups())
    elif us:
        month, day, year = (int(g) for g in us.groups())
    else:
        return None

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


class UnknownDateCounter:
    """Caller-owned numbering for unknown_date_N buckets (1-based)."""

    def __init__(self, start: int = 1):
        self._next = start

    def allocate(self) -> str:
        key = f"{UNKNOWN_DATE_PREFIX}{self._next}"
        self._next += 1
        return key

    @property
    def allocated(self) -> int:
        return self._next - 1


class TimelineAssembler:
    """Collects records per bucket and builds the ordered timeline."""

    def __init__(
        self,
        counter: Optional[UnknownDateCounter] = None,
        deduplicator: Optional[Deduplicator] = None
    ):
        self.counter = counter or UnknownDateCounter()
        self.deduplicator = deduplicator or Deduplicator()
        self._dated: Dict[str, List[OwnerRecord]] = {}
        self._undated: Dict[str, List[OwnerRecord]] = {}
        self._current: List[OwnerRecord] = []

    def add_dated(self, sale_date: Optional[str], records: List[OwnerRecord]) -> Optional[str]:
        """
        Adds records under their sale date.

        A date that does not parse turns the records into their own
        undated batch instead.

        Returns:
            Bucket key used, or None if there was nothing to add
        """
        iso = to_iso_date(sale_date)
        if iso is None:
            if sale_date:
                logger.debug(f"📅 Unparseable date '{sale_date}', using an unknown_date bucket")
            return self.add_undated_batch(records)

        if not records:
            return None
        self._dated.setdefault(iso, []).extend(records)
        return iso

    def add_current(self, records: List[OwnerRecord]) -> None:
        self._current.extend(records)

    def add_undated_batch(self, records: List[OwnerRecord]) -> Optional[str]:
        """Allocates the next unknown_date_N for a non-empty batch."""
        if not records:
            return None
        key = self.counter.allocate()
        self._undated[key] = list(records)
        return key

    def build(self) -> Dict[str, List[OwnerRecord]]:
        timeline: Dict[str, List[OwnerRecord]] = {}

        for key in sorted(self._dated):
            timeline[key] = self.deduplicator.dedupe(self._dated[key])

        for key, records in self._undated.items():
            timeline[key] = self.deduplicator.dedupe(records)

        if self._current:
            timeline[CURRENT_BUCKET] = self.deduplicator.dedupe(self._current)

        return timeline
