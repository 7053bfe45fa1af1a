"""Unit tests for timeline assembly and sale date parsing."""

import pytest

from ownership.models import CompanyOwner, PersonOwner
from ownership.processing.timeline import (
    CURRENT_BUCKET,
    TimelineAssembler,
    UnknownDateCounter,
    to_iso_date,
)


def _person(first, last="Smith"):
    return PersonOwner(first_name=first, last_name=last)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("4/1/2010", "2010-04-01"),
        ("04/01/2010", "2010-04-01"),
        (" 12/31/1999 ", "1999-12-31"),
        ("2010-04-01", "2010-04-01"),
        ("2010-04-01T00:00:00", "2010-04-01"),
        ("2010-04-01T13:45:00Z", "2010-04-01"),
        ("13/45/2001", None),
        ("2/30/2010", None),
        ("2010-02-30", None),
        ("April 1 2010", None),
        ("", None),
        (None, None),
    ],
)
def test_to_iso_date(raw, expected):
    """Only real calendar dates in the known formats are accepted."""
    assert to_iso_date(raw) == expected


def test_counter_is_sequential_and_independent():
    """Each counter numbers its own buckets from 1."""
    first = UnknownDateCounter()
    second = UnknownDateCounter()

    assert first.allocate() == "unknown_date_1"
    assert first.allocate() == "unknown_date_2"
    assert second.allocate() == "unknown_date_1"
    assert first.allocated == 2


def test_bucket_order():
    """Dates ascending, then unknown buckets in discovery order, then current."""
    assembler = TimelineAssembler(UnknownDateCounter())
    assembler.add_current([_person("Current")])
    assembler.add_dated("2015-01-01", [_person("Later")])
    assembler.add_undated_batch([_person("Undated")])
    assembler.add_dated("4/1/2010", [_person("Earlier")])
    assembler.add_dated("not a date", [_person("Garbled")])

    timeline = assembler.build()

    assert list(timeline) == [
        "2010-04-01",
        "2015-01-01",
        "unknown_date_1",
        "unknown_date_2",
        CURRENT_BUCKET,
    ]
    assert timeline["unknown_date_2"][0].first_name == "Garbled"


def test_empty_batches_do_not_consume_numbers():
    """Only non-empty batches get an unknown_date key."""
    counter = UnknownDateCounter()
    assembler = TimelineAssembler(counter)

    assert assembler.add_undated_batch([]) is None
    assert assembler.add_dated(None, []) is None
    assert counter.allocated == 0
    assert assembler.build() == {}


def test_dedup_within_bucket_not_across():
    """The same owner may appear in several buckets, but once per bucket."""
    assembler = TimelineAssembler()
    assembler.add_dated("2010-04-01", [_person("John"), _person("John")])
    assembler.add_current([_person("John"), CompanyOwner(name="ACME LLC"), CompanyOwner(name="Acme, Inc")])

    timeline = assembler.build()

    assert len(timeline["2010-04-01"]) == 1
    assert len(timeline[CURRENT_BUCKET]) == 2


def test_same_date_records_share_bucket():
    """Different spellings of the same date land in one bucket."""
    assembler = TimelineAssembler()
    assembler.add_dated("4/1/2010", [_person("John")])
    assembler.add_dated("2010-04-01", [_person("Mary")])

    timeline = assembler.build()

    assert list(timeline) == ["2010-04-01"]
    assert [p.first_name for p in timeline["2010-04-01"]] == ["John", "Mary"]
