"""Daily notes and receivables."""

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from spendsense.domain.entities import DailyNote, Receivable
from spendsense.domain.errors import NotFoundError, ValidationError
from spendsense.utils.ids import new_id


class NotesService:
    """Free-text notes and money owed to the user, newest first."""

    def __init__(
        self,
        notes: Optional[Iterable[DailyNote]] = None,
        receivables: Optional[Iterable[Receivable]] = None,
    ):
        self.notes: list[DailyNote] = list(notes) if notes is not None else []
        self.receivables: list[Receivable] = list(receivables) if receivables is not None else []

    def add_note(self, title: str, content: str, note_date: Optional[date] = None) -> str:
        if not title or not title.strip():
            raise ValidationError("Note title is required")
        note = DailyNote(
            id=new_id("note"),
            date=note_date or date.today(),
            title=title.strip(),
            content=content or "",
            timestamp=datetime.now(),
        )
        self.notes.insert(0, note)
        return note.id

    def delete_note(self, note_id: str) -> None:
        if not any(n.id == note_id for n in self.notes):
            raise NotFoundError(f"Note {note_id} not found")
        self.notes = [n for n in self.notes if n.id != note_id]

    def add_receivable(
        self,
        debtor_name: str,
        amount: Decimal,
        purpose: str = "",
        lent_on: Optional[date] = None,
        due_date: Optional[date] = None,
    ) -> str:
        """Record money lent to someone.

        Raises:
            ValidationError: If the debtor is blank or the amount is not positive
        """
        if not debtor_name or not debtor_name.strip():
            raise ValidationError("Debtor name is required")
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        receivable = Receivable(
            id=new_id("rec"),
            date=lent_on or date.today(),
            debtor_name=debtor_name.strip(),
            amount=amount,
            purpose=purpose or "",
            due_date=due_date,
            is_settled=False,
            timestamp=datetime.now(),
        )
        self.receivables.insert(0, receivable)
        return receivable.id

    def settle_receivable(self, receivable_id: str) -> Receivable:
        for index, receivable in enumerate(self.receivables):
            if receivable.id == receivable_id:
                settled = dataclasses.replace(receivable, is_settled=True)
                self.receivables[index] = settled
                return settled
        raise NotFoundError(f"Receivable {receivable_id} not found")

    def delete_receivable(self, receivable_id: str) -> None:
        if not any(r.id == receivable_id for r in self.receivables):
            raise NotFoundError(f"Receivable {receivable_id} not found")
        self.receivables = [r for r in self.receivables if r.id != receivable_id]

    def outstanding_total(self) -> Decimal:
        return sum((r.amount for r in self.receivables if not r.is_settled), Decimal("0"))

    def overdue(self, today: Optional[date] = None) -> list[Receivable]:
        today = today or date.today()
        return [
            r for r in self.receivables if not r.is_settled and r.due_date is not None and r.due_date < today
        ]
