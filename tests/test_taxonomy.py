"""Tests for the ledger taxonomy store."""

from spendsense.domain.entities import Direction
from spendsense.domain.taxonomy import (
    DEFAULT_LEDGERS,
    SKIPPED_SUBGROUP_ID,
    UNCATEGORIZED_GROUP_ID,
    TaxonomyStore,
    default_ledgers,
)


def test_default_ledgers_include_reserved_bucket():
    taxonomy = TaxonomyStore(default_ledgers())

    assert taxonomy.is_resolved(UNCATEGORIZED_GROUP_ID, SKIPPED_SUBGROUP_ID)
    assert [g.name for g in taxonomy.groups] == ["UNCATEGORIZED", "HOUSEHOLD", "INCOME"]
    assert taxonomy.find_group("grp-inc").direction == Direction.CREDIT


def test_default_ledgers_returns_independent_copy():
    ledgers = default_ledgers()
    ledgers[1].subgroups.clear()

    assert len(DEFAULT_LEDGERS[1].subgroups) == 2
    assert len(default_ledgers()[1].subgroups) == 2


def test_add_group_appends_empty_group():
    taxonomy = TaxonomyStore()
    group_id = taxonomy.add_group("TRAVEL", Direction.DEBIT)

    group = taxonomy.find_group(group_id)
    assert group.name == "TRAVEL"
    assert group.direction == Direction.DEBIT
    assert group.subgroups == []


def test_duplicate_group_names_are_allowed():
    taxonomy = TaxonomyStore()
    first = taxonomy.add_group("FOOD", Direction.DEBIT)
    second = taxonomy.add_group("FOOD", Direction.DEBIT)

    assert first != second
    assert len(taxonomy.groups) == 2


def test_add_subgroup_records_parent():
    taxonomy = TaxonomyStore(default_ledgers())
    subgroup_id = taxonomy.add_subgroup("grp-house", "Electricity")

    subgroup = taxonomy.find_subgroup("grp-house", subgroup_id)
    assert subgroup.name == "Electricity"
    assert subgroup.parent_id == "grp-house"
    assert taxonomy.find_subgroup_name("grp-house", subgroup_id) == "Electricity"


def test_add_subgroup_blank_name_is_noop():
    taxonomy = TaxonomyStore(default_ledgers())

    assert taxonomy.add_subgroup("grp-house", "   ") is None
    assert taxonomy.add_subgroup("grp-house", "") is None
    assert len(taxonomy.find_group("grp-house").subgroups) == 2


def test_add_subgroup_unknown_group_is_noop():
    taxonomy = TaxonomyStore(default_ledgers())

    assert taxonomy.add_subgroup("missing", "Anything") is None


def test_remove_group_returns_removed_group():
    taxonomy = TaxonomyStore(default_ledgers())
    removed = taxonomy.remove_group("grp-house")

    assert removed.name == "HOUSEHOLD"
    assert taxonomy.find_group("grp-house") is None


def test_remove_unknown_group_is_noop():
    taxonomy = TaxonomyStore(default_ledgers())

    assert taxonomy.remove_group("missing") is None
    assert len(taxonomy.groups) == 3


def test_remove_subgroup():
    taxonomy = TaxonomyStore(default_ledgers())
    removed = taxonomy.remove_subgroup("grp-house", "sub-rent")

    assert removed.name == "Rent"
    assert taxonomy.find_subgroup("grp-house", "sub-rent") is None
    assert taxonomy.remove_subgroup("grp-house", "sub-rent") is None


def test_find_subgroup_only_searches_given_group():
    taxonomy = TaxonomyStore(default_ledgers())

    assert taxonomy.find_subgroup("grp-inc", "sub-rent") is None
    assert taxonomy.find_subgroup_name("grp-inc", "sub-rent") is None
    assert not taxonomy.is_resolved("grp-inc", "sub-rent")


def test_find_group_for_subgroup():
    taxonomy = TaxonomyStore(default_ledgers())

    assert taxonomy.find_group_for_subgroup("sub-sal").id == "grp-inc"
    assert taxonomy.find_group_for_subgroup("missing") is None


def test_groups_for_direction():
    taxonomy = TaxonomyStore(default_ledgers())

    assert [g.id for g in taxonomy.groups_for_direction(Direction.CREDIT)] == ["grp-inc"]
    assert [g.id for g in taxonomy.groups_for_direction(Direction.DEBIT)] == [
        UNCATEGORIZED_GROUP_ID,
        "grp-house",
    ]


def test_groups_property_is_a_copy():
    taxonomy = TaxonomyStore(default_ledgers())
    taxonomy.groups.clear()

    assert len(taxonomy.groups) == 3
