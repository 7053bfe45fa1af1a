"""Unit tests for owner records and result objects."""

import json

import pytest
from pydantic import ValidationError

from ownership.models import (
    CompanyOwner,
    InvalidEntry,
    ParseResult,
    PersonOwner,
    PropertyOwnership,
    ReasonCode,
)


@pytest.mark.parametrize("first,last", [("", "Smith"), ("John", "  ")])
def test_person_requires_first_and_last(first, last):
    """Person names are never empty."""
    with pytest.raises(ValidationError):
        PersonOwner(first_name=first, last_name=last)


def test_company_requires_name():
    """Company names are never empty."""
    with pytest.raises(ValidationError):
        CompanyOwner(name="")


def test_to_dict_omits_missing_optionals():
    """Optional name parts are left out rather than written as null."""
    person = PersonOwner(first_name="Carl", last_name="Carlucci", middle_name="Peter", suffix_name="Jr.")

    assert PersonOwner(first_name="John", last_name="Smith").to_dict() == {
        "type": "person", "first_name": "John", "last_name": "Smith",
    }
    assert list(person.to_dict()) == ["type", "first_name", "last_name", "middle_name", "suffix_name"]
    assert CompanyOwner(name="ACME LLC").to_dict() == {"type": "company", "name": "ACME LLC"}


def test_parse_result():
    """ParseResult mirrors success, owners and reason."""
    ok = ParseResult.ok([CompanyOwner(name="ACME LLC")])
    rejected = ParseResult.reject(ReasonCode.EMPTY)

    assert ok.found_owner and not ok.multiple_owners
    assert not rejected.found_owner
    assert rejected.reason == ReasonCode.EMPTY
    assert "empty" in repr(rejected)


def test_property_ownership_json():
    """to_json writes UTF-8 text without escaping accents."""
    result = PropertyOwnership(
        property_id="9",
        owners_by_date={"current": [PersonOwner(first_name="José", last_name="Núñez")]},
        invalid_owners=[InvalidEntry(raw="32114", reason=ReasonCode.ADDRESS_OR_NOISE)],
    )

    text = result.to_json()

    assert "José" in text
    assert json.loads(text) == result.to_dict()
    assert result.to_dict()["property_9"]["invalid_owners"] == [{"raw": "32114", "reason": "address_or_noise"}]
