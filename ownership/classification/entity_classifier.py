"""
Entity Classifier
=================

Decides whether a normalized owner string names a company or a person.

Assessor rolls have no structured entity-type field, so the only signal is
the vocabulary of the name itself: corporate suffixes (LLC, INC), legal
forms (TRUST, LP) and business words (HOLDINGS, REALTY). The keyword table
is injectable so a county with its own conventions can extend it from
configuration without code changes.

Author: BellaTerra Intelligence Team
Date: December 2025
"""

import re
from typing import Iterable, Optional, Tuple

from loguru import logger

from ..models import EntityType


DEFAULT_COMPANY_KEYWORDS: Tuple[str, ...] = (
    # Legal forms
    'INC', 'LLC', 'L.L.C', 'LTD', 'CORP', 'CORPORATION', 'CO', 'COMPANY',
    'LP', 'LLP', 'PLC', 'PLLC', 'LIMITED',
    # Trusts and banks
    'TRUST', 'TR', 'BANK', 'N.A.', 'NATIONAL ASSOCIATION', 'FUND',
    # Associations
    'ASSOCIATION', 'ASSOC', 'ASSN', 'ASSOCIATES', 'FOUNDATION', 'ALLIANCE',
    'CHURCH', 'MINISTRIES',
    # Business vocabulary
    'HOLDINGS', 'HOLDING', 'REALTY', 'PROPERTIES', 'PARTNERS', 'INVESTMENTS',
    'GROUP', 'ENTERPRISES', 'SOLUTIONS', 'SERVICES', 'SERVICE', 'MANAGEMENT',
)


class CompanyKeywordTable:
    """
    Case-insensitive keyword set matched on word boundaries.

    A keyword matches only when the characters around it are not letters,
    i.e. ``(^|[^A-Z])KEYWORD([^A-Z]|$)``, so "CO" matches "SMITH & CO"
    but not "COLLINS".
    """

    def __init__(self, keywords: Iterable[str] = DEFAULT_COMPANY_KEYWORDS):
        seen = []
        for keyword in keywords:
            cleaned = ' '.join(str(keyword).upper().split())
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        self.keywords: Tuple[str, ...] = tuple(seen)

        # Longest first so "NATIONAL ASSOCIATION" is reported over "ASSOCIATION"
        ordered = sorted(self.keywords, key=len, reverse=True)
        alternatives = '|'.join(re.escape(k) for k in ordered)
        self._pattern = re.compile(rf'(?:^|[^A-Z])({alternatives})(?:[^A-Z]|$)') if ordered else None

    def match(self, text: str) -> Optional[str]:
        """Returns the first keyword found in the text, or None."""
        if not text or self._pattern is None:
            return None
        found = self._pattern.search(text.upper())
        return found.group(1) if found else None


class EntityClassifier:
    """Company-vs-person decision over a keyword table."""

    def __init__(self, keyword_table: Optional[CompanyKeywordTable] = None):
        self.keyword_table = keyword_table if keyword_table is not None else CompanyKeywordTable()

    def classify(self, text: str) -> EntityType:
        """
        Examples:
            >>> EntityClassifier().classify("ACME HOLDINGS LLC").value
            'company'
            >>> EntityClassifier().classify("JOHN Q SMITH").value
            'person'
        """
        keyword = self.keyword_table.match(text)
        if keyword:
            logger.debug(f"🏢 '{text}' classified as company (keyword {keyword})")
            return EntityType.COMPANY
        return EntityType.PERSON
