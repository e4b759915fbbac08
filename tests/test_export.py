"""Tests for CSV statement export."""

import io
from datetime import date, datetime
from decimal import Decimal

import pytest

from spendsense.domain.entities import Direction
from spendsense.domain.export import (
    EXPORT_HEADERS,
    export_rows,
    read_statement_csv,
    report_filename,
    write_statement_csv,
)


def test_export_round_trip(store, taxonomy, transaction_service, rent_payment):
    transaction_service.create_transaction(
        date=date(2024, 3, 9),
        direction=Direction.CREDIT,
        amount=Decimal("75000.50"),
        bank_name="ICICI",
        merchant="Employer",
        subgroup_id="sub-sal",
        purpose="Salary, March",
        ref_no="SAL-1",
    )
    buffer = io.StringIO()

    assert write_statement_csv(buffer, store.items(), taxonomy) == 2

    buffer.seek(0)
    rows = read_statement_csv(buffer)
    assert [r["Amount"] for r in rows] == ["75000.50", "5000"]
    first = rows[0]
    assert first["Date"] == "2024-03-09"
    assert first["Bank"] == "ICICI"
    assert first["Type"] == "CREDIT"
    assert first["Ref No"] == "SAL-1"
    assert first["Group"] == "INCOME"
    assert first["Sub-group"] == "Salary"
    assert first["Purpose"] == "Salary, March"


def test_header_row(store, taxonomy):
    buffer = io.StringIO()
    write_statement_csv(buffer, store.items(), taxonomy)

    assert buffer.getvalue() == ",".join(EXPORT_HEADERS) + "\n"


def test_unresolved_names_are_not_available(store, taxonomy, rent_payment):
    taxonomy.remove_subgroup("grp-house", "sub-rent")
    row = export_rows(store.items(), taxonomy)[0]

    assert row[4] == "HOUSEHOLD"
    assert row[5] == "N/A"

    taxonomy.remove_group("grp-house")
    row = export_rows(store.items(), taxonomy)[0]
    assert row[4:6] == ["N/A", "N/A"]


def test_read_rejects_foreign_csv():
    with pytest.raises(ValueError, match="Not a statement export"):
        read_statement_csv(io.StringIO("a,b\n1,2\n"))


def test_report_filename_embeds_timestamp():
    now = datetime(2024, 3, 1, 12, 0, 0)

    assert report_filename(now) == f"SpendSense_Report_{int(now.timestamp() * 1000)}.csv"
