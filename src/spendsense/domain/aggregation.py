"""Ledger aggregation: totals, statements and dashboard figures.

Every function here is a pure derivation over a snapshot of transactions and
the taxonomy. Amounts are summed as ``Decimal`` so that totals of many small
values do not pick up binary floating-point error.
"""

from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from spendsense.domain.entities import (
    DailyTotal,
    DashboardSummary,
    Direction,
    GroupStatement,
    LedgerGroup,
    Statement,
    SubgroupLine,
    Transaction,
)
from spendsense.domain.reconciliation import find_orphans
from spendsense.domain.taxonomy import TaxonomyStore

ZERO = Decimal("0")
HUNDRED = Decimal("100")
UNCATEGORIZED_LABEL = "Uncategorized"
RECENT_LIMIT = 5


def subgroup_total(transactions: Iterable[Transaction], subgroup_id: str) -> Decimal:
    """Sum of amounts referencing the subgroup, regardless of direction."""
    return sum((txn.amount for txn in transactions if txn.subgroup_id == subgroup_id), ZERO)


def group_total(transactions: Sequence[Transaction], group: LedgerGroup) -> Decimal:
    """Sum of subgroup totals over the subgroups the group currently owns.

    Transactions pointing at the group but at a removed subgroup are not
    counted; they only show up as orphans.
    """
    return sum((subgroup_total(transactions, sub.id) for sub in group.subgroups), ZERO)


def directional_total(transactions: Iterable[Transaction], direction: Direction) -> Decimal:
    """Sum of all amounts in one direction, orphans included."""
    return sum((txn.amount for txn in transactions if txn.direction == direction), ZERO)


def net_balance(transactions: Sequence[Transaction]) -> Decimal:
    return directional_total(transactions, Direction.CREDIT) - directional_total(
        transactions, Direction.DEBIT
    )


def percent_of_spend(total: Decimal, total_debit: Decimal) -> Optional[Decimal]:
    """Share of total debit spend, or None when there is no spend to compare with."""
    if total_debit <= 0:
        return None
    return total / total_debit * HUNDRED


def daily_series(
    transactions: Sequence[Transaction], days: int = 7, today: Optional[date] = None
) -> list[DailyTotal]:
    """Debit totals for the trailing ``days`` calendar days, oldest first.

    Today is the last entry. Days without spending report zero.
    """
    if today is None:
        today = date.today()

    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        amount = sum(
            (txn.amount for txn in transactions if txn.direction == Direction.DEBIT and txn.date == day),
            ZERO,
        )
        series.append(DailyTotal(day=day, label=f"{day:%a} {day.day}", amount=amount))
    return series


def group_by_category(
    transactions: Iterable[Transaction], taxonomy: TaxonomyStore, direction: Direction
) -> "OrderedDict[str, Decimal]":
    """Sum amounts per group name for one direction.

    Transactions whose group does not resolve are bucketed under
    "Uncategorized". Groups sharing a name are merged.
    """
    totals: "OrderedDict[str, Decimal]" = OrderedDict()
    for txn in transactions:
        if txn.direction != direction:
            continue
        group = taxonomy.find_group(txn.group_id)
        name = group.name if group is not None else UNCATEGORIZED_LABEL
        totals[name] = totals.get(name, ZERO) + txn.amount
    return totals


def build_statement(transactions: Sequence[Transaction], taxonomy: TaxonomyStore) -> Statement:
    """Roll transactions up into per-group and per-subgroup totals."""
    total_debit = directional_total(transactions, Direction.DEBIT)
    total_credit = directional_total(transactions, Direction.CREDIT)

    groups = []
    ledger_net = ZERO
    for group in taxonomy.groups:
        lines = []
        for sub in group.subgroups:
            total = subgroup_total(transactions, sub.id)
            share = percent_of_spend(total, total_debit) if group.direction == Direction.DEBIT else None
            lines.append(SubgroupLine(subgroup_id=sub.id, name=sub.name, total=total, percent_of_spend=share))
        total = sum((line.total for line in lines), ZERO)
        groups.append(
            GroupStatement(
                group_id=group.id,
                name=group.name,
                direction=group.direction,
                total=total,
                lines=tuple(lines),
            )
        )
        ledger_net += total if group.direction == Direction.CREDIT else -total

    return Statement(
        groups=tuple(groups),
        total_credit=total_credit,
        total_debit=total_debit,
        net_balance=total_credit - total_debit,
        ledger_net=ledger_net,
        orphan_count=len(find_orphans(transactions, taxonomy)),
    )


def dashboard_summary(
    transactions: Sequence[Transaction],
    taxonomy: TaxonomyStore,
    days: int = 7,
    today: Optional[date] = None,
) -> DashboardSummary:
    """Headline figures for the dashboard view."""
    income = directional_total(transactions, Direction.CREDIT)
    expenses = directional_total(transactions, Direction.DEBIT)
    return DashboardSummary(
        income=income,
        expenses=expenses,
        balance=income - expenses,
        recent=tuple(transactions[:RECENT_LIMIT]),
        spend_by_group=dict(group_by_category(transactions, taxonomy, Direction.DEBIT)),
        daily=tuple(daily_series(transactions, days=days, today=today)),
    )
