"""Transaction store and transaction domain service."""

import dataclasses
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from spendsense.domain.activity import ActivityLog
from spendsense.domain.entities import (
    ActivityAction,
    ActivityEntity,
    Direction,
    Transaction,
    transaction_snapshot,
)
from spendsense.domain.errors import NotFoundError, ValidationError, transaction_not_found
from spendsense.domain.taxonomy import TaxonomyStore
from spendsense.utils.ids import new_id, placeholder_reference

_MUTABLE_FIELDS = frozenset(f.name for f in dataclasses.fields(Transaction)) - {"id"}


class TransactionStore:
    """In-memory ordered collection of transactions, newest first.

    The store does not validate references or amounts; invalid group or
    subgroup IDs are accepted and surface later as orphans.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: list[Transaction] = list(transactions) if transactions is not None else []

    def create(self, transaction: Transaction) -> str:
        """Store a transaction under a fresh ID and prepend it.

        Returns:
            New transaction ID
        """
        stored = dataclasses.replace(transaction, id=new_id("tx"))
        self._transactions.insert(0, stored)
        return stored.id

    def update(self, transaction_id: str, **patch: Any) -> bool:
        """Merge the given fields into an existing transaction.

        Fields left out of ``patch`` keep their value.

        Returns:
            False if the transaction does not exist
        """
        unknown = set(patch) - _MUTABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown transaction fields: {', '.join(sorted(unknown))}")

        for index, txn in enumerate(self._transactions):
            if txn.id == transaction_id:
                self._transactions[index] = dataclasses.replace(txn, **patch)
                return True
        return False

    def delete(self, transaction_id: str) -> Optional[Transaction]:
        """Remove a transaction. Returns the removed record, or None."""
        txn = self.get(transaction_id)
        if txn is not None:
            self._transactions = [t for t in self._transactions if t.id != transaction_id]
        return txn

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for txn in self._transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def items(self) -> list[Transaction]:
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)


class TransactionService:
    """Service for manually entered and edited transactions."""

    def __init__(self, store: TransactionStore, taxonomy: TaxonomyStore, activity: ActivityLog):
        """Initialize transaction service.

        Args:
            store: Transaction store to mutate
            taxonomy: Taxonomy used to derive a group from the chosen subgroup
            activity: Activity log receiving audit entries
        """
        self.store = store
        self.taxonomy = taxonomy
        self.activity = activity

    def create_transaction(
        self,
        date: Optional[date],
        direction: Direction,
        amount: Optional[Decimal],
        bank_name: str,
        merchant: str,
        subgroup_id: str,
        purpose: str = "",
        ref_no: Optional[str] = None,
    ) -> str:
        """Validate and record a manually entered transaction.

        Args:
            date: Transaction date
            direction: DEBIT or CREDIT
            amount: Positive amount
            bank_name: Bank or institution name
            merchant: Payee or merchant name
            subgroup_id: Ledger subgroup to link to
            purpose: Optional purpose note
            ref_no: Optional reference; a placeholder is generated if blank

        Returns:
            Transaction ID

        Raises:
            ValidationError: If a required field is empty or the amount is not positive
        """
        self._validate(date, amount, bank_name, merchant, subgroup_id)

        # The group follows whichever group owns the subgroup; an unknown
        # subgroup is still accepted and shows up as an orphan.
        group = self.taxonomy.find_group_for_subgroup(subgroup_id)
        txn = Transaction(
            id="",
            date=date,
            direction=Direction(direction),
            amount=amount,
            bank_name=bank_name.strip(),
            ref_no=(ref_no or "").strip() or placeholder_reference(),
            merchant=merchant.strip(),
            purpose=purpose or "",
            group_id=group.id if group is not None else "",
            subgroup_id=subgroup_id,
        )
        transaction_id = self.store.create(txn)
        self.activity.record(
            ActivityAction.ADD,
            ActivityEntity.TRANSACTION,
            f"Added transaction: {amount} ({txn.merchant})",
            transaction_snapshot(self.store.get(transaction_id)),
        )
        return transaction_id

    def update_transaction(self, transaction_id: str, **changes: Any) -> Transaction:
        """Edit a transaction in place.

        ``None`` values are ignored. Changing ``subgroup_id`` also moves the
        transaction to the group owning that subgroup.

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If an edited field is invalid
        """
        current = self.store.get(transaction_id)
        if current is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        patch = {key: value for key, value in changes.items() if value is not None}
        if "amount" in patch and patch["amount"] <= 0:
            raise ValidationError("Amount must be greater than zero")
        for key in ("bank_name", "merchant"):
            if key in patch:
                if not patch[key].strip():
                    raise ValidationError(f"{_label(key)} is required")
                patch[key] = patch[key].strip()
        if "direction" in patch:
            patch["direction"] = Direction(patch["direction"])
        if "subgroup_id" in patch and "group_id" not in patch:
            group = self.taxonomy.find_group_for_subgroup(patch["subgroup_id"])
            patch["group_id"] = group.id if group is not None else ""

        self.store.update(transaction_id, **patch)
        self.activity.record(
            ActivityAction.EDIT,
            ActivityEntity.TRANSACTION,
            f"Edited transaction {transaction_id}: {', '.join(sorted(patch)) or 'no changes'}",
            transaction_snapshot(current),
        )
        return self.store.get(transaction_id)

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction does not exist
        """
        txn = self.store.delete(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.activity.record(
            ActivityAction.DELETE,
            ActivityEntity.TRANSACTION,
            f"Deleted transaction: {txn.amount}",
            transaction_snapshot(txn),
        )
        return txn

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.store.get(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        direction: Optional[Direction] = None,
        group_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions newest-first with optional filters."""
        result = []
        for txn in self.store.items():
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            if direction is not None and txn.direction != direction:
                continue
            if group_id is not None and txn.group_id != group_id:
                continue
            result.append(txn)
        return result

    @staticmethod
    def _validate(
        txn_date: Optional[date],
        amount: Optional[Decimal],
        bank_name: str,
        merchant: str,
        subgroup_id: str,
    ) -> None:
        if txn_date is None:
            raise ValidationError("Date is required")
        if not bank_name or not bank_name.strip():
            raise ValidationError("Bank is required")
        if not merchant or not merchant.strip():
            raise ValidationError("Merchant is required")
        if not subgroup_id:
            raise ValidationError("Select a category")
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")


def _label(field_name: str) -> str:
    return {"bank_name": "Bank", "merchant": "Merchant"}.get(field_name, field_name)
