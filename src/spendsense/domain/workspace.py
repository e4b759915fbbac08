"""Per-user ledger workspace.

A workspace loads one user's datasets from the database into in-memory
stores, wires the domain services over them, and writes everything back on
``save()``.
"""

from datetime import date
from typing import Optional, TextIO

import structlog

from spendsense.database import base as datasets
from spendsense.database import mappers
from spendsense.database.base import Database
from spendsense.domain import aggregation, export
from spendsense.domain.activity import ActivityLog
from spendsense.domain.entities import (
    ActivityAction,
    ActivityEntity,
    DashboardSummary,
    Direction,
    LedgerGroup,
    LedgerSubgroup,
    Statement,
    Transaction,
)
from spendsense.domain.errors import NotFoundError, ValidationError
from spendsense.domain.importer import ImportService, TransactionExtractor
from spendsense.domain.notes import NotesService
from spendsense.domain.reconciliation import orphaned_transactions
from spendsense.domain.taxonomy import TaxonomyStore, default_ledgers
from spendsense.domain.transaction import TransactionService, TransactionStore

logger = structlog.get_logger(__name__)


class LedgerWorkspace:
    """All ledger state belonging to one user."""

    def __init__(
        self,
        db: Database,
        user_id: str,
        taxonomy: TaxonomyStore,
        store: TransactionStore,
        activity: ActivityLog,
        notes: NotesService,
        extractor: Optional[TransactionExtractor] = None,
        pending=None,
    ):
        self.db = db
        self.user_id = user_id
        self.taxonomy = taxonomy
        self.store = store
        self.activity = activity
        self.notes = notes
        self.transactions = TransactionService(store, taxonomy, activity)
        self.importer = ImportService(store, taxonomy, activity, extractor=extractor, pending=pending)

    @classmethod
    def load(
        cls, db: Database, user_id: str, extractor: Optional[TransactionExtractor] = None
    ) -> "LedgerWorkspace":
        """Load a user's datasets. Missing datasets start empty, ledgers start from the defaults."""
        ledgers = db.load_dataset(user_id, datasets.LEDGERS)
        groups = (
            [mappers.group_from_record(r) for r in ledgers] if ledgers is not None else default_ledgers()
        )
        transactions = db.load_dataset(user_id, datasets.TRANSACTIONS) or []
        logs = db.load_dataset(user_id, datasets.LOGS) or []
        notes = db.load_dataset(user_id, datasets.NOTES) or []
        receivables = db.load_dataset(user_id, datasets.RECEIVABLES) or []
        pending = db.load_dataset(user_id, datasets.PENDING_DRAFT)

        logger.debug(
            "workspace_loaded",
            user_id=user_id,
            groups=len(groups),
            transactions=len(transactions),
        )
        return cls(
            db,
            user_id,
            taxonomy=TaxonomyStore(groups),
            store=TransactionStore(mappers.transaction_from_record(r) for r in transactions),
            activity=ActivityLog(mappers.log_entry_from_record(r) for r in logs),
            notes=NotesService(
                notes=(mappers.note_from_record(r) for r in notes),
                receivables=(mappers.receivable_from_record(r) for r in receivables),
            ),
            extractor=extractor,
            pending=mappers.draft_from_record(pending) if pending is not None else None,
        )

    def save(self) -> None:
        """Write every dataset back to the database."""
        uid = self.user_id
        self.db.save_dataset(uid, datasets.LEDGERS, [mappers.group_to_record(g) for g in self.taxonomy.groups])
        self.db.save_dataset(
            uid, datasets.TRANSACTIONS, [mappers.transaction_to_record(t) for t in self.store.items()]
        )
        self.db.save_dataset(uid, datasets.LOGS, [mappers.log_entry_to_record(e) for e in self.activity.entries()])
        self.db.save_dataset(uid, datasets.NOTES, [mappers.note_to_record(n) for n in self.notes.notes])
        self.db.save_dataset(
            uid, datasets.RECEIVABLES, [mappers.receivable_to_record(r) for r in self.notes.receivables]
        )
        if self.importer.pending is None:
            self.db.delete_dataset(uid, datasets.PENDING_DRAFT)
        else:
            self.db.save_dataset(uid, datasets.PENDING_DRAFT, mappers.draft_to_record(self.importer.pending))

    # Taxonomy
    def add_group(self, name: str, direction: Direction) -> str:
        """Create a ledger group.

        Raises:
            ValidationError: If the name is blank
        """
        if not name or not name.strip():
            raise ValidationError("Group name is required")
        group_id = self.taxonomy.add_group(name.strip(), Direction(direction))
        self.activity.record(ActivityAction.ADD, ActivityEntity.GROUP, f"Created group: {name.strip()}")
        return group_id

    def remove_group(self, group_id: str) -> LedgerGroup:
        """Remove a group. Its transactions stay and become orphans.

        Raises:
            NotFoundError: If the group does not exist
        """
        group = self.taxonomy.remove_group(group_id)
        if group is None:
            raise NotFoundError(f"Group {group_id} not found")
        self.activity.record(ActivityAction.DELETE, ActivityEntity.GROUP, f"Deleted group: {group.name}")
        return group

    def add_subgroup(self, group_id: str, name: str) -> str:
        """Create a subgroup under an existing group.

        Raises:
            NotFoundError: If the group does not exist
            ValidationError: If the name is blank
        """
        if self.taxonomy.find_group(group_id) is None:
            raise NotFoundError(f"Group {group_id} not found")
        subgroup_id = self.taxonomy.add_subgroup(group_id, name)
        if subgroup_id is None:
            raise ValidationError("Sub-group name is required")
        return subgroup_id

    def remove_subgroup(self, group_id: str, subgroup_id: str) -> LedgerSubgroup:
        subgroup = self.taxonomy.remove_subgroup(group_id, subgroup_id)
        if subgroup is None:
            raise NotFoundError(f"Sub-group {subgroup_id} not found in group {group_id}")
        return subgroup

    # Derived views
    def orphans(self) -> list[Transaction]:
        return orphaned_transactions(self.store.items(), self.taxonomy)

    def statement(self) -> Statement:
        return aggregation.build_statement(self.store.items(), self.taxonomy)

    def dashboard(self, days: int = 7, today: Optional[date] = None) -> DashboardSummary:
        return aggregation.dashboard_summary(self.store.items(), self.taxonomy, days=days, today=today)

    def export(self, stream: TextIO) -> int:
        """Write the CSV statement to ``stream`` and log the export."""
        count = export.write_statement_csv(stream, self.store.items(), self.taxonomy)
        self.activity.record(ActivityAction.EXPORT, ActivityEntity.TRANSACTION, f"Exported {count} transactions")
        return count

    def record_password_change(self) -> None:
        self.activity.record(ActivityAction.PASSWORD_CHANGE, ActivityEntity.USER, "Password changed")

    def record_profile_update(self, fields: list[str]) -> None:
        self.activity.record(ActivityAction.EDIT, ActivityEntity.USER, f"Updated profile: {', '.join(fields)}")
