"""Unit tests for company/person classification."""

import pytest

from ownership.classification.entity_classifier import (
    DEFAULT_COMPANY_KEYWORDS,
    CompanyKeywordTable,
    EntityClassifier,
)
from ownership.models import EntityType


@pytest.mark.parametrize(
    "text",
    [
        "ACME HOLDINGS LLC",
        "SMITH FAMILY TRUST",
        "FIRST NATIONAL BANK N.A.",
        "JONES & CO",
        "SUNCOAST REALTY",
        "ABC L.L.C",
        "Smith Properties Inc",
        "GRACE COMMUNITY CHURCH",
    ],
)
def test_company_keywords(text):
    """Any keyword on a word boundary makes a company."""
    assert EntityClassifier().classify(text) == EntityType.COMPANY


@pytest.mark.parametrize("text", ["JOHN Q SMITH", "COLLINS JOHN", "TRUMAN HARRY", "BANKS JOHN", "INCE MARY"])
def test_keywords_inside_words_do_not_match(text):
    """CO in COLLINS or BANK in BANKS is not a company signal."""
    assert EntityClassifier().classify(text) == EntityType.PERSON


def test_match_reports_longest_keyword():
    """Multi-word keywords are preferred over their parts."""
    table = CompanyKeywordTable()
    assert table.match("FIRST NATIONAL ASSOCIATION") == "NATIONAL ASSOCIATION"
    assert table.match("JOHN SMITH") is None
    assert table.match("") is None


def test_profile_keywords_extend_the_defaults():
    """Source profiles add keywords on top of the built-in table."""
    base = CompanyKeywordTable()
    extended = CompanyKeywordTable(DEFAULT_COMPANY_KEYWORDS + ("estates",))

    assert extended.keywords[-1] == "ESTATES"
    assert EntityClassifier(extended).classify("PALM ESTATES") == EntityType.COMPANY
    assert EntityClassifier(base).classify("PALM ESTATES") == EntityType.PERSON


def test_injected_table_replaces_defaults():
    """An injected table is the only vocabulary used."""
    classifier = EntityClassifier(CompanyKeywordTable(["FARM"]))
    assert classifier.classify("SMITH FARM") == EntityType.COMPANY
    assert classifier.classify("ACME LLC") == EntityType.PERSON


def test_duplicate_keywords_are_collapsed():
    """Keywords are upper-cased and deduplicated."""
    table = CompanyKeywordTable(["llc", "LLC", " Llc "])
    assert table.keywords == ("LLC",)


def test_default_table_covers_legal_forms():
    """The built-in table knows the common legal forms."""
    for keyword in ("INC", "LLC", "LTD", "CORP", "LP", "LLP", "TRUST"):
        assert keyword in DEFAULT_COMPANY_KEYWORDS


def test_empty_table_is_kept():
    """An injected empty table classifies everything as a person."""
    classifier = EntityClassifier(CompanyKeywordTable([]))
    assert classifier.classify("ACME LLC") == EntityType.PERSON
