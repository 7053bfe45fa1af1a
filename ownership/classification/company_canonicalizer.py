"""
Canonical keys for company names.

"ACME HOLDINGS LLC", "Acme Holdings, L.L.C." and "ACME HOLDINGS" are the
same owner; the key drops legal-form suffixes and punctuation so they
collapse during deduplication. The display name is left alone.
"""

import re
from typing import Iterable

from ..normalization.text_normalizer import TextNormalizer


CORPORATE_SUFFIXES = (
    'LLC', 'LTD', 'INC', 'CO', 'CORP', 'LP', 'LLP', 'LLLP',
    'COMPANY', 'CORPORATION', 'LIMITED',
)


class CompanyNameCanonicalizer:
    """Builds matching keys for CompanyOwner names."""

    NON_ALNUM = re.compile(r'[^A-Z0-9]+')

    def __init__(self, suffixes: Iterable[str] = CORPORATE_SUFFIXES):
        self.suffixes = frozenset(s.upper().replace('.', '') for s in suffixes)

    def key(self, name: str) -> str:
        """
        Examples:
            >>> CompanyNameCanonicalizer().key("ACME HOLDINGS LLC")
            'ACMEHOLDINGS'
            >>> CompanyNameCanonicalizer().key("Acme Holdings, L.L.C.")
            'ACMEHOLDINGS'
        """
        if not name:
            return ''

        upper = name.upper().replace('.', '')
        words = [w for w in self.NON_ALNUM.split(upper) if w]
        kept = [w for w in words if w not in self.suffixes]

        # A name made only of suffix words ("CO LLC") keeps all of them
        if not kept:
            kept = words
        return ''.join(kept)

    @staticmethod
    def display_name(name: str) -> str:
        return TextNormalizer.collapse_whitespace(name)
