"""Domain model entities for spendsense.

These are plain data classes representing ledger concepts, independent of how
they are persisted. Optional fields carry their defaults here so that no read
site has to re-derive them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class Direction(str, Enum):
    """Monetary direction of a transaction or ledger group."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class ActivityAction(str, Enum):
    ADD = "ADD"
    DELETE = "DELETE"
    EDIT = "EDIT"
    EXPORT = "EXPORT"
    PASSWORD_CHANGE = "PASSWORD_CHANGE"


class ActivityEntity(str, Enum):
    TRANSACTION = "TRANSACTION"
    GROUP = "GROUP"
    USER = "USER"


@dataclass
class LedgerSubgroup:
    """Second-level ledger category."""

    id: str
    name: str
    parent_id: str


@dataclass
class LedgerGroup:
    """Top-level ledger category owning an ordered list of subgroups."""

    id: str
    name: str
    direction: Direction
    subgroups: list[LedgerSubgroup] = field(default_factory=list)


@dataclass
class Transaction:
    """Transaction domain entity.

    ``group_id`` and ``subgroup_id`` are plain references; they are not
    checked against the taxonomy when the record is written.
    """

    id: str
    date: date
    direction: Direction
    amount: Decimal
    bank_name: str
    ref_no: str
    merchant: str
    purpose: str
    group_id: str
    subgroup_id: str
    raw_text: Optional[str] = None
    suggested_purpose: Optional[str] = None


@dataclass(frozen=True)
class ActivityLogEntry:
    """Audit trail entry. Never mutated once recorded."""

    id: str
    action: ActivityAction
    entity: ActivityEntity
    details: str
    timestamp: datetime
    data: Optional[dict[str, Any]] = None


class TransactionDraft(BaseModel):
    """Structured transaction extracted from free text, awaiting confirmation."""

    amount: Decimal = Field(ge=0)
    direction: Direction
    date: date
    merchant: str
    bank_name: str
    ref_no: str
    suggested_purpose: str
    raw_text: Optional[str] = None

    @field_validator("merchant", "bank_name", "ref_no", "suggested_purpose")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()


@dataclass
class UserPreferences:
    theme: str = "Light Blue"
    font: str = "inter"


@dataclass
class UserProfile:
    full_name: str = ""
    pet_name: str = ""
    dob: str = ""
    occupation: str = ""
    email: str = ""
    mobile: str = ""


@dataclass
class User:
    """Application user. Passwords are stored and compared as given."""

    id: str
    username: str
    email: str
    password: str
    role: str = "user"
    preferences: UserPreferences = field(default_factory=UserPreferences)
    profile: Optional[UserProfile] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass
class DailyNote:
    id: str
    date: date
    title: str
    content: str
    timestamp: datetime


@dataclass
class Receivable:
    """Money owed to the user by someone else."""

    id: str
    date: date
    debtor_name: str
    amount: Decimal
    purpose: str
    due_date: Optional[date]
    is_settled: bool
    timestamp: datetime


@dataclass(frozen=True)
class DailyTotal:
    """Debit total for one calendar day."""

    day: date
    label: str
    amount: Decimal


@dataclass(frozen=True)
class SubgroupLine:
    subgroup_id: str
    name: str
    total: Decimal
    percent_of_spend: Optional[Decimal]


@dataclass(frozen=True)
class GroupStatement:
    group_id: str
    name: str
    direction: Direction
    total: Decimal
    lines: tuple[SubgroupLine, ...]


@dataclass(frozen=True)
class Statement:
    """Rolled-up ledger statement."""

    groups: tuple[GroupStatement, ...]
    total_credit: Decimal
    total_debit: Decimal
    net_balance: Decimal
    ledger_net: Decimal
    orphan_count: int


@dataclass(frozen=True)
class DashboardSummary:
    income: Decimal
    expenses: Decimal
    balance: Decimal
    recent: tuple[Transaction, ...]
    spend_by_group: dict[str, Decimal]
    daily: tuple[DailyTotal, ...]


def transaction_snapshot(txn: Transaction) -> dict[str, Any]:
    """Return a JSON-safe copy of a transaction for logs and storage."""
    return {
        "id": txn.id,
        "date": txn.date.isoformat(),
        "direction": txn.direction.value,
        "amount": str(txn.amount),
        "bank_name": txn.bank_name,
        "ref_no": txn.ref_no,
        "merchant": txn.merchant,
        "purpose": txn.purpose,
        "group_id": txn.group_id,
        "subgroup_id": txn.subgroup_id,
        "raw_text": txn.raw_text,
        "suggested_purpose": txn.suggested_purpose,
    }
