"""SMS import: extract a draft, then confirm, skip or discard it."""

import random
from datetime import date
from typing import Optional, Protocol

import structlog

from spendsense.domain.activity import ActivityLog
from spendsense.domain.entities import (
    ActivityAction,
    ActivityEntity,
    Direction,
    LedgerGroup,
    Transaction,
    TransactionDraft,
    transaction_snapshot,
)
from spendsense.domain.errors import ExtractionError, ValidationError, no_pending_draft
from spendsense.domain.taxonomy import SKIPPED_SUBGROUP_ID, UNCATEGORIZED_GROUP_ID, TaxonomyStore
from spendsense.domain.transaction import TransactionStore
from spendsense.utils.ids import placeholder_reference

logger = structlog.get_logger(__name__)

SKIPPED_PURPOSE = "Skipped categorization"
UNKNOWN = "Unknown"

MOCK_SMS_TEMPLATES = (
    "HDFC Bank: Rs. 1,250 debited at STARBUCKS. Ref: 40515923. Bal: 45,200",
    "ICICI Bank: A/c XXXXX123 Credited with Rs. 75,000 via NEFT Salary. Ref: SAL-9921. Avl Bal: 1,20,200",
    "SBI: Paid Rs. 450 to AMZ-ORDER-123. Ref: UPI-882211.",
    "AXIS Bank: Debited INR 3,200 for FUEL. Ref: FL-1122.",
)


class TransactionExtractor(Protocol):
    """Anything that can turn free text into a draft."""

    def extract(self, text: str) -> TransactionDraft:
        """Raise ExtractionError when no usable draft can be produced."""
        ...


class ImportService:
    """Holds at most one pending draft and commits it on request.

    A draft is never written to the transaction store until it is confirmed
    or skipped.
    """

    def __init__(
        self,
        store: TransactionStore,
        taxonomy: TaxonomyStore,
        activity: ActivityLog,
        extractor: Optional[TransactionExtractor] = None,
        pending: Optional[TransactionDraft] = None,
    ):
        self.store = store
        self.taxonomy = taxonomy
        self.activity = activity
        self.extractor = extractor
        self.pending = pending

    def process_import(self, text: Optional[str] = None) -> Optional[TransactionDraft]:
        """Extract a draft from text and hold it as pending.

        When ``text`` is omitted a simulated bank SMS is used.

        Returns:
            The new pending draft, or None if extraction failed. A failed
            attempt leaves any existing pending draft untouched.
        """
        if text is None:
            text = random.choice(MOCK_SMS_TEMPLATES)
        if self.extractor is None:
            logger.warning("import_extraction_failed", error="No extraction service configured", text=text)
            return None

        try:
            draft = self.extractor.extract(text)
        except ExtractionError as e:
            logger.warning("import_extraction_failed", error=str(e), text=text)
            return None

        if draft.raw_text is None:
            draft = draft.model_copy(update={"raw_text": text})
        self.pending = draft
        logger.info("import_draft_pending", amount=str(draft.amount), direction=draft.direction.value)
        return draft

    def candidate_groups(self) -> list[LedgerGroup]:
        """Groups whose direction matches the pending draft.

        This only narrows the choices offered; confirm() accepts any subgroup.
        """
        if self.pending is None:
            return []
        return self.taxonomy.groups_for_direction(self.pending.direction)

    def confirm(self, subgroup_id: str, purpose: Optional[str] = None) -> str:
        """Commit the pending draft into the chosen subgroup.

        Args:
            subgroup_id: Subgroup to file the transaction under
            purpose: Purpose note; defaults to the draft's suggested purpose

        Returns:
            Transaction ID

        Raises:
            ValidationError: If nothing is pending or the subgroup is unknown
        """
        draft = self._require_pending()
        group = self.taxonomy.find_group_for_subgroup(subgroup_id) if subgroup_id else None
        if group is None:
            raise ValidationError("Select a category")

        if purpose is None or not purpose.strip():
            purpose = draft.suggested_purpose
        return self._commit(draft, group.id, subgroup_id, purpose)

    def skip(self) -> str:
        """Commit the pending draft to the reserved uncategorized bucket."""
        draft = self._require_pending()
        purpose = draft.suggested_purpose or SKIPPED_PURPOSE
        return self._commit(draft, UNCATEGORIZED_GROUP_ID, SKIPPED_SUBGROUP_ID, purpose)

    def discard(self) -> Optional[TransactionDraft]:
        """Drop the pending draft without persisting anything."""
        draft, self.pending = self.pending, None
        return draft

    def _require_pending(self) -> TransactionDraft:
        if self.pending is None:
            raise ValidationError(no_pending_draft())
        return self.pending

    def _commit(self, draft: TransactionDraft, group_id: str, subgroup_id: str, purpose: str) -> str:
        txn = build_transaction(draft, group_id, subgroup_id, purpose)
        transaction_id = self.store.create(txn)
        self.pending = None
        self.activity.record(
            ActivityAction.ADD,
            ActivityEntity.TRANSACTION,
            f"Imported transaction: {txn.amount} ({txn.merchant})",
            transaction_snapshot(self.store.get(transaction_id)),
        )
        logger.info("import_committed", transaction_id=transaction_id, group_id=group_id, subgroup_id=subgroup_id)
        return transaction_id


def build_transaction(
    draft: TransactionDraft, group_id: str, subgroup_id: str, purpose: str
) -> Transaction:
    """Build a full transaction from a draft, filling blanks with defaults."""
    return Transaction(
        id="",
        date=draft.date or date.today(),
        direction=draft.direction or Direction.DEBIT,
        amount=draft.amount,
        bank_name=draft.bank_name or UNKNOWN,
        ref_no=draft.ref_no or placeholder_reference(),
        merchant=draft.merchant or UNKNOWN,
        purpose=purpose,
        group_id=group_id,
        subgroup_id=subgroup_id,
        raw_text=draft.raw_text,
        suggested_purpose=draft.suggested_purpose,
    )
