"""
Owner Text Normalizer
=====================

Owner columns scraped from county pages carry more than names: marital
tags (H&W), trustee markers (TTEE, TR U/A), "care of" prefixes, ET AL,
annotations in parentheses, HTML entities and irregular whitespace.

TextNormalizer removes that noise and leaves the name text, keeping the
original casing. It never raises; anything unusable becomes "".

Examples:
    >>> TextNormalizer.normalize("*SMITH JOHN  H&W")
    'SMITH JOHN'
    >>> TextNormalizer.normalize("DOE, JANE =& JOHN ET AL")
    'DOE, JANE =& JOHN'
"""

import re
from typing import Any


class TextNormalizer:
    """Pure string cleanup for raw owner lines."""

    WHITESPACE = re.compile(r"[\s\u00a0]+")
    HTML_AMPERSAND = re.compile(r"&amp;", re.IGNORECASE)

    # Annotations: "(LIFE ESTATE)", "SMITH JOHN - REMAINDERMAN", "ACME LLC | 50%"
    PARENTHETICAL = re.compile(r"\([^)]*\)?")
    TRAILING_ANNOTATION = re.compile(r"(?:\s+-\s+|\s*\|).*$")

    # Descriptors that are never part of a name. Longer forms first.
    DESCRIPTOR_PATTERNS = [
        re.compile(r"\bTR\s+U/A\b", re.IGNORECASE),
        re.compile(r"\bAS\s+TTEES?\b", re.IGNORECASE),
        re.compile(r"\bTTEES?\b", re.IGNORECASE),
        re.compile(r"\bH\s*&\s*W\b", re.IGNORECASE),
        re.compile(r"\bH/W\b", re.IGNORECASE),
        re.compile(r"\bC/O\b", re.IGNORECASE),
        re.compile(r"\bET\s*AL\b\.?", re.IGNORECASE),
        re.compile(r"\bDEC'?D\b", re.IGNORECASE),
        re.compile(r"\bDECEASED\b", re.IGNORECASE),
        re.compile(r"\bAND\b", re.IGNORECASE),
    ]

    ESTATE_PREFIX = re.compile(r"^(?:ESTATE|EST)\s+OF\s+", re.IGNORECASE)

    LEADING_JUNK = re.compile(r"^[\s*,&=]+")
    TRAILING_JUNK = re.compile(r"[\s,&=]+$")

    @staticmethod
    def collapse_whitespace(text: Any) -> str:
        """Collapses whitespace/NBSP runs; non-strings become ''."""
        if not isinstance(text, str):
            return ''
        return TextNormalizer.WHITESPACE.sub(' ', text).strip()

    @staticmethod
    def normalize(raw: Any) -> str:
        """
        Cleans one raw owner string.

        Args:
            raw: Text as scraped (any type accepted)

        Returns:
            Name text without descriptors, or '' if nothing is left
        """
        text = TextNormalizer.collapse_whitespace(raw)
        if not text:
            return ''

        text = TextNormalizer.HTML_AMPERSAND.sub('&', text)
        text = TextNormalizer.PARENTHETICAL.sub(' ', text)
        text = TextNormalizer.TRAILING_ANNOTATION.sub('', text)
        text = TextNormalizer.LEADING_JUNK.sub('', text)
        text = TextNormalizer.ESTATE_PREFIX.sub('', text)

        for pattern in TextNormalizer.DESCRIPTOR_PATTERNS:
            text = pattern.sub(' ', text)

        # Separators left behind by the removals ("SMITH JOHN & H&W")
        text = TextNormalizer.WHITESPACE.sub(' ', text)
        text = re.sub(r'\s+,', ',', text)
        text = TextNormalizer.LEADING_JUNK.sub('', text)
        text = TextNormalizer.TRAILING_JUNK.sub('', text)

        return text.strip()
