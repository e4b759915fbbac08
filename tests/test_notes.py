"""Tests for daily notes and receivables."""

from datetime import date
from decimal import Decimal

import pytest

from spendsense.domain.errors import NotFoundError, ValidationError
from spendsense.domain.notes import NotesService


def test_add_and_delete_note():
    service = NotesService()
    note_id = service.add_note("Budget", "Cut eating out", note_date=date(2024, 3, 1))

    assert service.notes[0].title == "Budget"
    assert service.notes[0].date == date(2024, 3, 1)

    service.delete_note(note_id)
    assert service.notes == []
    with pytest.raises(NotFoundError):
        service.delete_note(note_id)


def test_note_requires_title():
    with pytest.raises(ValidationError):
        NotesService().add_note("  ", "text")


def test_receivables_outstanding_and_settle():
    service = NotesService()
    first = service.add_receivable("Ravi", Decimal("500"), "Lunch")
    service.add_receivable("Meera", Decimal("1200"))

    assert service.outstanding_total() == Decimal("1700")

    settled = service.settle_receivable(first)
    assert settled.is_settled
    assert service.outstanding_total() == Decimal("1200")


def test_receivable_validation():
    service = NotesService()

    with pytest.raises(ValidationError):
        service.add_receivable("", Decimal("10"))
    with pytest.raises(ValidationError):
        service.add_receivable("Ravi", Decimal("0"))
    with pytest.raises(NotFoundError):
        service.settle_receivable("missing")
    with pytest.raises(NotFoundError):
        service.delete_receivable("missing")


def test_overdue():
    service = NotesService()
    late = service.add_receivable("Ravi", Decimal("500"), due_date=date(2024, 3, 1))
    service.add_receivable("Meera", Decimal("100"), due_date=date(2024, 4, 1))
    service.add_receivable("Kiran", Decimal("100"))

    assert [r.id for r in service.overdue(today=date(2024, 3, 15))] == [late]

    service.settle_receivable(late)
    assert service.overdue(today=date(2024, 3, 15)) == []
