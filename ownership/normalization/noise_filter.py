"""
Noise filter for address fragments, ZIP codes and placeholders.

Owner blocks on assessor pages often leak mailing address lines, bare ZIP
codes or city/state fragments into the owner list, and sales tables use
placeholders such as "UNKNOWN SELLER" where no grantor was recorded.
"""

import re
from typing import Iterable, Optional

from ..models import ReasonCode


DEFAULT_STREET_TOKENS = (
    'ST', 'AVE', 'BLVD', 'RD', 'LN', 'DR', 'CT', 'HWY', 'PKWY', 'PL',
    'TRL', 'CIR', 'UNIT', 'APT', 'SUITE', 'STE', 'PO BOX', 'P O BOX',
)

# Whole-string placeholders
DEFAULT_PLACEHOLDERS = ('UNKNOWN', 'UNKNOWN SELLER', 'CONVERSION')

# Placeholders that disqualify a string wherever they appear in it
DEFAULT_PLACEHOLDER_PHRASES = ('UNKNOWN SELLER', 'CONVERSION')


def word_set_pattern(words: Iterable[str]) -> Optional[re.Pattern]:
    """
    Compiles words into one boundary-aware pattern for upper-cased text.

    A word only matches when it is not glued to other letters, so "ST"
    matches "123 MAIN ST" but not "STONE". Spaces inside a word match
    any run of whitespace ("PO BOX" == "PO  BOX").
    """
    cleaned = sorted({w.strip().upper() for w in words if w and w.strip()}, key=len, reverse=True)
    if not cleaned:
        return None
    alternatives = '|'.join(r'\s+'.join(re.escape(part) for part in w.split()) for w in cleaned)
    return re.compile(rf'(?:^|[^A-Z])(?:{alternatives})(?:[^A-Z]|$)')


class NoiseFilter:
    """Decides whether a normalized owner string is noise or a placeholder."""

    ZIP_PATTERN = re.compile(r'^\d{5}(-\d{4})?$')
    STATE_ZIP_PATTERN = re.compile(r'\b[A-Z]{2}\s+\d{5}(-\d{4})?$')

    MIN_DIGITS = 3
    MAX_NOISE_LENGTH = 3

    def __init__(
        self,
        street_tokens: Iterable[str] = DEFAULT_STREET_TOKENS,
        placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS,
        placeholder_phrases: Iterable[str] = DEFAULT_PLACEHOLDER_PHRASES
    ):
        self.street_pattern = word_set_pattern(street_tokens)
        self.placeholders = {p.strip().upper() for p in placeholders if p and p.strip()}
        self.phrase_pattern = word_set_pattern(placeholder_phrases)

    def is_placeholder(self, text: str) -> bool:
        upper = text.strip().upper()
        if upper in self.placeholders:
            return True
        return bool(self.phrase_pattern and self.phrase_pattern.search(upper))

    def is_noise(self, text: str) -> bool:
        """
        True if the string looks like an address fragment.

        Heuristics (any one is enough):
        - bare ZIP or trailing "STATE ZIP"
        - street suffix / unit token as a whole word
        - 3 or more digits
        - 3 characters or fewer
        """
        stripped = text.strip()
        upper = stripped.upper()

        if self.ZIP_PATTERN.match(stripped) or self.STATE_ZIP_PATTERN.search(upper):
            return True
        if self.street_pattern and self.street_pattern.search(upper):
            return True
        if sum(1 for c in stripped if c.isdigit()) >= self.MIN_DIGITS:
            return True
        return len(stripped) <= self.MAX_NOISE_LENGTH

    def check(self, text: str) -> Optional[ReasonCode]:
        """
        Returns the rejection reason for a normalized string, or None.

        Placeholders are checked before the address heuristics so that
        "UNKNOWN SELLER" is reported as a placeholder, not as noise.
        """
        if not text or not text.strip():
            return ReasonCode.EMPTY
        if self.is_placeholder(text):
            return ReasonCode.NON_OWNER_PLACEHOLDER
        if self.is_noise(text):
            return ReasonCode.ADDRESS_OR_NOISE
        return None
