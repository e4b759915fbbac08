"""Orphaned transaction detection."""

from typing import Iterable

from spendsense.domain.entities import Transaction
from spendsense.domain.taxonomy import TaxonomyStore


def is_orphan(txn: Transaction, taxonomy: TaxonomyStore) -> bool:
    """True when the transaction's group or subgroup no longer resolves."""
    return not taxonomy.is_resolved(txn.group_id, txn.subgroup_id)


def find_orphans(transactions: Iterable[Transaction], taxonomy: TaxonomyStore) -> set[str]:
    """Return the IDs of transactions whose group/subgroup does not resolve.

    A transaction is orphaned when its group ID is missing from the taxonomy,
    or when the group exists but does not own the referenced subgroup. The
    result is derived from the current state on every call.
    """
    return {txn.id for txn in transactions if is_orphan(txn, taxonomy)}


def orphaned_transactions(
    transactions: Iterable[Transaction], taxonomy: TaxonomyStore
) -> list[Transaction]:
    """Same as find_orphans, returning the records in their original order."""
    return [txn for txn in transactions if is_orphan(txn, taxonomy)]
