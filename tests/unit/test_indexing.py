"""Unit tests for stable owner indexing."""

from ownership.models import CompanyOwner, PersonOwner
from ownership.processing.indexing import OwnerIndex


def _timeline():
    john = PersonOwner(first_name="John", last_name="Smith")
    return {
        "2010-04-01": [john, PersonOwner(first_name="Mary", last_name="Jones")],
        "unknown_date_1": [CompanyOwner(name="ACME HOLDINGS LLC")],
        "current": [john, CompanyOwner(name="Acme Holdings, Inc.")],
    }


def test_ids_follow_timeline_order():
    """Ids are numbered per type in the order owners first appear."""
    index = OwnerIndex.from_timeline(_timeline())
    data = index.to_dict()

    assert list(data["owners"]) == ["person_1", "person_2", "company_1"]
    assert data["owners"]["person_1"] == {"type": "person", "first_name": "John", "last_name": "Smith"}


def test_same_owner_same_id_across_buckets():
    """An owner seen in several buckets keeps one id."""
    data = OwnerIndex.from_timeline(_timeline()).to_dict()

    assert data["by_date"] == {
        "2010-04-01": ["person_1", "person_2"],
        "unknown_date_1": ["company_1"],
        "current": ["person_1", "company_1"],
    }


def test_register_returns_id():
    """register() is idempotent for the same owner."""
    index = OwnerIndex()
    first = index.register("current", CompanyOwner(name="ACME LLC"))
    second = index.register("current", CompanyOwner(name="Acme Inc"))

    assert first == second == "company_1"
    assert index.to_dict()["owners"]["company_1"] == {"type": "company", "name": "ACME LLC"}


def test_indexing_is_repeatable():
    """The same timeline always yields the same index."""
    assert OwnerIndex.from_timeline(_timeline()).to_dict() == OwnerIndex.from_timeline(_timeline()).to_dict()
