"""
Collects rejected owner strings with their reason codes.
"""

from typing import Any, List, Set, Tuple

from ..models import InvalidEntry, ReasonCode
from ..normalization.text_normalizer import TextNormalizer
from .deduplication import Deduplicator


class InvalidCollector:
    """
    Ordered, deduplicated list of InvalidEntry.

    Entries are unique by (normalized raw, reason). The normalized raw is
    the TextNormalizer output without punctuation, so "SMITH", "SMITH ET AL"
    and "SMITH." are one rejection; the first spelling seen is the one
    reported.
    """

    def __init__(self):
        self._entries: List[InvalidEntry] = []
        self._seen: Set[Tuple[str, ReasonCode]] = set()

    @staticmethod
    def key(raw: Any) -> str:
        """Comparison text of a raw value; falls back to the raw text when cleanup empties it."""
        normalized = Deduplicator.normalize_name(TextNormalizer.normalize(raw))
        return normalized or TextNormalizer.collapse_whitespace(raw).casefold()

    def add(self, raw: Any, reason: ReasonCode) -> bool:
        """
        Records a rejection.

        Returns:
            True if the entry is new, False if it was a duplicate
        """
        reason = ReasonCode(reason)
        key = (self.key(raw), reason)

        if key in self._seen:
            return False

        self._seen.add(key)
        self._entries.append(InvalidEntry(raw=TextNormalizer.collapse_whitespace(raw), reason=reason))
        return True

    def entries(self) -> List[InvalidEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
