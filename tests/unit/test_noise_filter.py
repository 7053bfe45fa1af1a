"""Unit tests for the address/placeholder noise filter."""

import pytest

from ownership.models import ReasonCode
from ownership.normalization.noise_filter import NoiseFilter, word_set_pattern


@pytest.fixture
def noise_filter():
    return NoiseFilter()


@pytest.mark.parametrize(
    "text",
    [
        "123 MAIN ST",
        "32114",
        "32114-1234",
        "DAYTONA BEACH FL 32114",
        "PO BOX 55",
        "P O BOX 9",
        "APT B",
        "OCEAN SHORE BLVD",
        "FL",
        "A&B",
    ],
)
def test_address_fragments_are_noise(noise_filter, text):
    """ZIPs, street tokens, digit runs and short fragments are rejected."""
    assert noise_filter.check(text) == ReasonCode.ADDRESS_OR_NOISE


@pytest.mark.parametrize("text", ["UNKNOWN", "unknown seller", "UNKNOWN SELLER 1", "CONVERSION", "BANK CONVERSION"])
def test_placeholders(noise_filter, text):
    """Placeholders win over the address heuristics."""
    assert noise_filter.check(text) == ReasonCode.NON_OWNER_PLACEHOLDER


@pytest.mark.parametrize("text", ["JOHN SMITH", "STONE JOHN", "DREW CARTER", "UNKNOWN HEIRS OF SMITH"])
def test_names_pass(noise_filter, text):
    """Street tokens glued to other letters do not trigger."""
    assert noise_filter.check(text) is None


@pytest.mark.parametrize("text", ["", "   "])
def test_empty(noise_filter, text):
    """Empty strings get their own reason code."""
    assert noise_filter.check(text) == ReasonCode.EMPTY


def test_custom_tables():
    """Street tokens and placeholders are configurable."""
    custom = NoiseFilter(street_tokens=("WAY",), placeholders=("VACANT",))

    assert custom.is_noise("OCEAN WAY")
    assert not custom.is_noise("MAIN ST")
    assert custom.is_placeholder("vacant")
    assert not custom.is_placeholder("UNKNOWN")


def test_word_set_pattern_empty():
    """No words means no pattern."""
    assert word_set_pattern([]) is None
    assert word_set_pattern(["  "]) is None


@pytest.mark.parametrize("text", ["PARCEL 1234", "SMITH JOHN 1999", "LOT 1 BLK 22"])
def test_three_or_more_digits_are_noise(noise_filter, text):
    """Digit runs without a ZIP or street token are still rejected."""
    assert noise_filter.is_noise(text)
    assert noise_filter.check(text) == ReasonCode.ADDRESS_OR_NOISE


@pytest.mark.parametrize("text", ["SMITH JOHN 12", "JOHN SMITH 2ND"])
def test_fewer_than_three_digits_pass(noise_filter, text):
    """One or two digits are not enough to call a name noise."""
    assert noise_filter.check(text) is None
