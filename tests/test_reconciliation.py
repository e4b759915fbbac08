"""Tests for orphaned transaction detection."""

from spendsense.domain.reconciliation import find_orphans, is_orphan, orphaned_transactions
from spendsense.domain.taxonomy import TaxonomyStore


def test_resolved_transaction_is_not_orphan(store, taxonomy, rent_payment):
    assert find_orphans(store.items(), taxonomy) == set()
    assert not is_orphan(rent_payment, taxonomy)


def test_removed_group_orphans_its_transactions(store, taxonomy, rent_payment):
    taxonomy.remove_group("grp-house")

    assert find_orphans(store.items(), taxonomy) == {rent_payment.id}


def test_removed_subgroup_orphans_its_transactions(store, taxonomy, rent_payment):
    taxonomy.remove_subgroup("grp-house", "sub-rent")

    assert find_orphans(store.items(), taxonomy) == {rent_payment.id}


def test_subgroup_under_wrong_group_is_orphan(store, taxonomy, rent_payment):
    store.update(rent_payment.id, group_id="grp-inc")

    assert find_orphans(store.items(), taxonomy) == {rent_payment.id}


def test_orphan_status_heals_when_ids_reappear(store, taxonomy, rent_payment):
    removed = taxonomy.remove_group("grp-house")
    assert find_orphans(store.items(), taxonomy) == {rent_payment.id}

    restored = TaxonomyStore(taxonomy.groups + [removed])

    assert find_orphans(store.items(), restored) == set()


def test_repairing_reference_clears_orphan(store, taxonomy, transaction_service, rent_payment):
    taxonomy.remove_subgroup("grp-house", "sub-rent")
    transaction_service.update_transaction(rent_payment.id, subgroup_id="sub-grocery")

    assert find_orphans(store.items(), taxonomy) == set()


def test_orphaned_transactions_keeps_store_order(store, taxonomy, transaction_service, rent_payment):
    second = transaction_service.create_transaction(
        date=rent_payment.date,
        direction=rent_payment.direction,
        amount=rent_payment.amount,
        bank_name="HDFC",
        merchant="Grocer",
        subgroup_id="sub-grocery",
    )
    taxonomy.remove_group("grp-house")

    assert [t.id for t in orphaned_transactions(store.items(), taxonomy)] == [second, rent_payment.id]
