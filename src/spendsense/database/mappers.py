"""Mapper functions between domain entities and stored forms.

Datasets are stored as JSON arrays of records. Readers tolerate missing keys
by falling back to the entity defaults, since stored data carries no schema
version.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from spendsense.domain import entities as domain
from spendsense.database.models import User as ORMUser


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _parse_datetime(value: Optional[str]) -> datetime:
    return datetime.fromisoformat(value) if value else datetime.now()


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    profile = None
    if orm_user.profile:
        profile = domain.UserProfile(**json.loads(orm_user.profile))
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        email=orm_user.email,
        password=orm_user.password,
        role=orm_user.role,
        preferences=domain.UserPreferences(theme=orm_user.theme, font=orm_user.font),
        profile=profile,
    )


def apply_user_to_orm(user: domain.User, orm_user: ORMUser) -> ORMUser:
    """Copy domain User fields onto a SQLAlchemy User model."""
    orm_user.id = user.id
    orm_user.username = user.username
    orm_user.email = user.email
    orm_user.password = user.password
    orm_user.role = user.role
    orm_user.theme = user.preferences.theme
    orm_user.font = user.preferences.font
    orm_user.profile = json.dumps(user.profile.__dict__) if user.profile is not None else None
    return orm_user


def group_to_record(group: domain.LedgerGroup) -> dict[str, Any]:
    return {
        "id": group.id,
        "name": group.name,
        "direction": group.direction.value,
        "subgroups": [
            {"id": sub.id, "name": sub.name, "parent_id": sub.parent_id} for sub in group.subgroups
        ],
    }


def group_from_record(record: dict[str, Any]) -> domain.LedgerGroup:
    return domain.LedgerGroup(
        id=record["id"],
        name=record.get("name", ""),
        direction=domain.Direction(record.get("direction", domain.Direction.DEBIT.value)),
        subgroups=[
            domain.LedgerSubgroup(
                id=sub["id"],
                name=sub.get("name", ""),
                parent_id=sub.get("parent_id", record["id"]),
            )
            for sub in record.get("subgroups", [])
        ],
    )


def transaction_to_record(txn: domain.Transaction) -> dict[str, Any]:
    return domain.transaction_snapshot(txn)


def transaction_from_record(record: dict[str, Any]) -> domain.Transaction:
    return domain.Transaction(
        id=record["id"],
        date=_parse_date(record.get("date")) or date.today(),
        direction=domain.Direction(record.get("direction", domain.Direction.DEBIT.value)),
        amount=Decimal(str(record.get("amount", "0"))),
        bank_name=record.get("bank_name", ""),
        ref_no=record.get("ref_no", ""),
        merchant=record.get("merchant", ""),
        purpose=record.get("purpose", ""),
        group_id=record.get("group_id", ""),
        subgroup_id=record.get("subgroup_id", ""),
        raw_text=record.get("raw_text"),
        suggested_purpose=record.get("suggested_purpose"),
    )


def log_entry_to_record(entry: domain.ActivityLogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "action": entry.action.value,
        "entity": entry.entity.value,
        "details": entry.details,
        "timestamp": entry.timestamp.isoformat(),
        "data": entry.data,
    }


def log_entry_from_record(record: dict[str, Any]) -> domain.ActivityLogEntry:
    return domain.ActivityLogEntry(
        id=record["id"],
        action=domain.ActivityAction(record["action"]),
        entity=domain.ActivityEntity(record["entity"]),
        details=record.get("details", ""),
        timestamp=_parse_datetime(record.get("timestamp")),
        data=record.get("data"),
    )


def note_to_record(note: domain.DailyNote) -> dict[str, Any]:
    return {
        "id": note.id,
        "date": note.date.isoformat(),
        "title": note.title,
        "content": note.content,
        "timestamp": note.timestamp.isoformat(),
    }


def note_from_record(record: dict[str, Any]) -> domain.DailyNote:
    return domain.DailyNote(
        id=record["id"],
        date=_parse_date(record.get("date")) or date.today(),
        title=record.get("title", ""),
        content=record.get("content", ""),
        timestamp=_parse_datetime(record.get("timestamp")),
    )


def receivable_to_record(receivable: domain.Receivable) -> dict[str, Any]:
    return {
        "id": receivable.id,
        "date": receivable.date.isoformat(),
        "debtor_name": receivable.debtor_name,
        "amount": str(receivable.amount),
        "purpose": receivable.purpose,
        "due_date": receivable.due_date.isoformat() if receivable.due_date else None,
        "is_settled": receivable.is_settled,
        "timestamp": receivable.timestamp.isoformat(),
    }


def receivable_from_record(record: dict[str, Any]) -> domain.Receivable:
    return domain.Receivable(
        id=record["id"],
        date=_parse_date(record.get("date")) or date.today(),
        debtor_name=record.get("debtor_name", ""),
        amount=Decimal(str(record.get("amount", "0"))),
        purpose=record.get("purpose", ""),
        due_date=_parse_date(record.get("due_date")),
        is_settled=bool(record.get("is_settled", False)),
        timestamp=_parse_datetime(record.get("timestamp")),
    )


def draft_to_record(draft: domain.TransactionDraft) -> dict[str, Any]:
    return draft.model_dump(mode="json")


def draft_from_record(record: dict[str, Any]) -> domain.TransactionDraft:
    return domain.TransactionDraft.model_validate(record)
