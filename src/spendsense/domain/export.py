"""CSV statement export."""

import csv
from datetime import datetime
from typing import Iterable, Optional, TextIO

from spendsense.domain.entities import Transaction
from spendsense.domain.taxonomy import TaxonomyStore

EXPORT_HEADERS = ["Date", "Bank", "Type", "Ref No", "Group", "Sub-group", "Purpose", "Amount"]
NOT_AVAILABLE = "N/A"


def report_filename(now: Optional[datetime] = None) -> str:
    """Return the export file name, e.g. ``SpendSense_Report_1700000000000.csv``."""
    now = now or datetime.now()
    return f"SpendSense_Report_{int(now.timestamp() * 1000)}.csv"


def export_rows(transactions: Iterable[Transaction], taxonomy: TaxonomyStore) -> list[list[str]]:
    """Build one row per transaction, in store order.

    Group and subgroup names are resolved now; unresolved names become "N/A".
    """
    rows = []
    for txn in transactions:
        group = taxonomy.find_group(txn.group_id)
        subgroup_name = taxonomy.find_subgroup_name(txn.group_id, txn.subgroup_id)
        rows.append(
            [
                txn.date.isoformat(),
                txn.bank_name,
                txn.direction.value,
                txn.ref_no,
                group.name if group is not None else NOT_AVAILABLE,
                subgroup_name if subgroup_name is not None else NOT_AVAILABLE,
                txn.purpose,
                str(txn.amount),
            ]
        )
    return rows


def write_statement_csv(
    stream: TextIO, transactions: Iterable[Transaction], taxonomy: TaxonomyStore
) -> int:
    """Write the header and transaction rows. Returns the number of rows."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    rows = export_rows(transactions, taxonomy)
    writer.writerows(rows)
    return len(rows)


def read_statement_csv(stream: TextIO) -> list[dict[str, str]]:
    """Read an exported statement back into dicts keyed by header."""
    reader = csv.DictReader(stream)
    if reader.fieldnames is None or list(reader.fieldnames) != EXPORT_HEADERS:
        raise ValueError(f"Not a statement export: expected columns {', '.join(EXPORT_HEADERS)}")
    return list(reader)
