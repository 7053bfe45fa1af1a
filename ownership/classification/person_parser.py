"""
Person Name Parser
==================

Turns a normalized, non-company owner string into one or more PersonOwner
records.

SUPPORTED FORMATS:
------------------
1. With comma: "LAST [SUFFIX], FIRST [MIDDLE] [=& FIRST2 ...]"
   - "CARLUCCI JR, CARL PETER"  -> Carl Peter Carlucci Jr.
   - "DOE, JANE=&JOHN"          -> Jane Doe, John Doe

2. Without comma, order chosen per source (NameOrder):
   - FIRST_LAST: "JOHN Q SMITH"   -> John Q Smith
   - LAST_FIRST: "SMITH JOHN Q"   -> John Q Smith
   - Ampersand segments share a surname: "JOHN & JANE DOE",
     "DOE JOHN & JANE"

Failures are returned as ParseResult.reject(reason), never raised.

Author: BellaTerra Intelligence Team
Date: December 2025
"""

import re
from typing import List, Optional

from loguru import logger

from ..models import NameOrder, ParseResult, PersonOwner, ReasonCode


# Canonical spelling of generational/professional suffixes
SUFFIX_MAP = {
    'JR': 'Jr.',
    'SR': 'Sr.',
    'II': 'II',
    'III': 'III',
    'IV': 'IV',
    'V': 'V',
    'ESQ': 'Esq.',
}

# "V" is also a common middle initial; only trusted right before a comma
AMBIGUOUS_SUFFIXES = {'V'}

SEGMENT_SEPARATOR = re.compile(r'\s*=?\s*&\s*|\s*=\s*')
NAME_CHARS = re.compile(r"[^\w'\-]|[\d_]")
LETTER = re.compile(r"[^\W\d_]")
SUBWORD_BOUNDARY = re.compile(r"([\s'\-]+)")


def canonical_suffix(token: str, allow_ambiguous: bool = False) -> Optional[str]:
    """
    Returns the canonical suffix for a token, or None.

    Examples:
        >>> canonical_suffix("jr.")
        'Jr.'
        >>> canonical_suffix("V") is None
        True
        >>> canonical_suffix("V", allow_ambiguous=True)
        'V'
    """
    key = token.strip().upper().rstrip('.')
    if key in AMBIGUOUS_SUFFIXES and not allow_ambiguous:
        return None
    return SUFFIX_MAP.get(key)


def title_case(value: str) -> str:
    """
    Capitalizes every sub-word separated by whitespace, hyphen or apostrophe.

    Examples:
        >>> title_case("O'NEIL-SMITH")
        "O'Neil-Smith"
        >>> title_case("van dyke")
        'Van Dyke'
    """
    parts = SUBWORD_BOUNDARY.split(value)
    return ''.join(
        part if SUBWORD_BOUNDARY.fullmatch(part) else part[:1].upper() + part[1:].lower()
        for part in parts
    )


def clean_token(token: str) -> str:
    """Keeps letters, hyphens and apostrophes; trims dangling punctuation."""
    return NAME_CHARS.sub('', token).strip("-'")


def name_tokens(text: str) -> List[str]:
    return [t for t in (clean_token(raw) for raw in text.split()) if t]


class PersonNameParser:
    """Parses person names under a configurable no-comma token order."""

    def __init__(self, name_order: NameOrder = NameOrder.FIRST_LAST):
        self.name_order = NameOrder(name_order)

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    def parse(self, text: str) -> ParseResult:
        if not text or not text.strip():
            return ParseResult.reject(ReasonCode.EMPTY)

        if not LETTER.search(text):
            return ParseResult.reject(ReasonCode.UNCLASSIFIED)

        if ',' in text:
            result = self._parse_with_comma(text)
        else:
            result = self._parse_without_comma(text)

        if not result.success:
            logger.debug(f"⚠️ Could not parse person '{text}': {result.reason.value}")
        return result

    # ==========================================================================
    # "LAST [SUFFIX], FIRST [MIDDLE] [=& FIRST2]"
    # ==========================================================================

    def _parse_with_comma(self, text: str) -> ParseResult:
        left, right = text.split(',', 1)

        surname = name_tokens(left)
        suffix = None
        if len(surname) >= 2:
            suffix = canonical_suffix(surname[-1], allow_ambiguous=True)
            if suffix:
                surname = surname[:-1]

        if not surname:
            return ParseResult.reject(ReasonCode.COMMA_BUT_INSUFFICIENT_PARTS)

        last_name = title_case(' '.join(surname))
        people = []
        for segment in SEGMENT_SEPARATOR.split(right.replace(',', ' ')):
            given = name_tokens(segment)
            if not given:
                continue

            segment_suffix = suffix
            if segment_suffix is None and len(given) >= 2:
                segment_suffix = canonical_suffix(given[-1])
                if segment_suffix:
                    given = given[:-1]

            people.append(self._build(given[0], given[1:], last_name, segment_suffix))

        if not people:
            return ParseResult.reject(ReasonCode.INSUFFICIENT_NAME_PARTS)
        return ParseResult.ok(people)

    # ==========================================================================
    # NO COMMA
    # ==========================================================================

    def _parse_without_comma(self, text: str) -> ParseResult:
        segments = [name_tokens(s) for s in SEGMENT_SEPARATOR.split(text)]
        segments = [s for s in segments if s]
        if not segments:
            return ParseResult.reject(ReasonCode.UNCLASSIFIED)

        parsed = [self._split_plain(tokens) for tokens in segments]

        people = []
        for index, tokens in enumerate(segments):
            parts = parsed[index]
            if parts is not None:
                first, middle, last, suffix = parts
                people.append(self._build(first, middle, title_case(last), suffix))
                continue

            # One-token segment: "JOHN & JANE DOE" / "DOE JOHN & JANE"
            shared = self._shared_surname(parsed, index)
            if len(tokens) != 1 or shared is None:
                return ParseResult.reject(ReasonCode.INSUFFICIENT_NAME_PARTS)
            people.append(self._build(tokens[0], [], title_case(shared), None))

        return ParseResult.ok(people)

    def _split_plain(self, tokens: List[str]):
        """
        Splits one segment into (first, middle_tokens, last, suffix).

        Returns None when fewer than two name tokens remain.
        """
        tokens = list(tokens)
        suffix = None

        if len(tokens) > 2:
            suffix = canonical_suffix(tokens[-1])
            if suffix:
                tokens.pop()

        if self.name_order == NameOrder.LAST_FIRST and suffix is None and len(tokens) > 2:
            # "SMITH JR JOHN"
            suffix = canonical_suffix(tokens[1])
            if suffix:
                del tokens[1]

        if len(tokens) < 2:
            return None

        if self.name_order == NameOrder.LAST_FIRST:
            return tokens[1], tokens[2:], tokens[0], suffix
        return tokens[0], tokens[1:-1], tokens[-1], suffix

    def _shared_surname(self, parsed, index: int) -> Optional[str]:
        """
        Finds the surname a bare first name inherits.

        FIRST_LAST prints the surname after the names that share it,
        LAST_FIRST before them, so the search starts in that direction.
        """
        following = [p for p in parsed[index + 1:] if p is not None]
        preceding = [p for p in reversed(parsed[:index]) if p is not None]
        if self.name_order == NameOrder.LAST_FIRST:
            candidates = preceding + following
        else:
            candidates = following + preceding
        return candidates[0][2] if candidates else None

    @staticmethod
    def _build(first: str, middle: List[str], last_name: str, suffix: Optional[str]) -> PersonOwner:
        return PersonOwner(
            first_name=title_case(first),
            middle_name=title_case(' '.join(middle)) if middle else None,
            last_name=last_name,
            suffix_name=suffix,
        )
