"""Tests for the database layer and workspace persistence."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from conftest import FakeExtractor
from spendsense.database import base as datasets
from spendsense.database import mappers
from spendsense.database.factories import create_database, database_url_for
from spendsense.domain.entities import (
    ActivityAction,
    ActivityEntity,
    Direction,
    LedgerGroup,
    LedgerSubgroup,
    Receivable,
    User,
    UserProfile,
)
from spendsense.domain.errors import NotFoundError, ValidationError
from spendsense.domain.taxonomy import default_ledgers
from spendsense.domain.workspace import LedgerWorkspace


class TestDatabase:
    def test_dataset_round_trip(self, temp_db, sample_user):
        temp_db.save_dataset(sample_user.id, "things", [{"a": 1}])
        temp_db.save_dataset(sample_user.id, "things", [{"a": 2}])

        assert temp_db.load_dataset(sample_user.id, "things") == [{"a": 2}]
        assert temp_db.load_dataset(sample_user.id, "missing") is None

        temp_db.delete_dataset(sample_user.id, "things")
        assert temp_db.load_dataset(sample_user.id, "things") is None

    def test_datasets_are_per_user(self, temp_db, user_service, sample_user):
        other = user_service.sign_up("ravi", "pw")
        temp_db.save_dataset(sample_user.id, datasets.NOTES, ["mine"])

        assert temp_db.load_dataset(other.id, datasets.NOTES) is None

    def test_user_round_trip(self, temp_db):
        user = User(
            id="u-1",
            username="kiran",
            email="k@example.com",
            password="pw",
            profile=UserProfile(full_name="Kiran", mobile="123"),
        )
        temp_db.save_user(user)

        loaded = temp_db.get_user_by_username("kiran")
        assert loaded == user
        assert temp_db.get_user("missing") is None

    def test_session_user(self, temp_db):
        assert temp_db.get_session_user() is None

        temp_db.set_session_user("u-1")
        assert temp_db.get_session_user() == "u-1"

        temp_db.set_session_user(None)
        assert temp_db.get_session_user() is None

    def test_factory_honours_environment(self, tmp_path, monkeypatch):
        db_path = tmp_path / "env.db"
        monkeypatch.setenv("SPENDSENSE_DB_PATH", str(db_path))

        db = create_database()
        db.set_session_user("u-1")
        db.disconnect()

        assert db.database_url == f"sqlite:///{db_path}"
        assert db_path.exists()

    def test_factory_creates_missing_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "ledger.db"

        assert database_url_for(str(db_path)) == f"sqlite:///{db_path}"
        assert db_path.parent.is_dir()

    def test_factory_accepts_database_url(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SPENDSENSE_DB_PATH", str(tmp_path / "ignored.db"))
        url = f"sqlite:///{tmp_path / 'by-url.db'}"

        db = create_database(url)
        db.connect()
        db.initialize_schema()
        db.set_session_user("u-1")
        assert db.get_session_user() == "u-1"
        db.disconnect()

        assert db.database_url == url
        assert database_url_for("postgresql://ledger@localhost/spendsense") == "postgresql://ledger@localhost/spendsense"
        assert not (tmp_path / "ignored.db").exists()


class TestMappers:
    def test_group_round_trip(self):
        group = LedgerGroup(
            id="g1",
            name="TRAVEL",
            direction=Direction.DEBIT,
            subgroups=[LedgerSubgroup(id="s1", name="Flights", parent_id="g1")],
        )

        assert mappers.group_from_record(mappers.group_to_record(group)) == group

    def test_group_record_tolerates_missing_keys(self):
        group = mappers.group_from_record({"id": "g1", "subgroups": [{"id": "s1"}]})

        assert group.name == ""
        assert group.direction == Direction.DEBIT
        assert group.subgroups[0].parent_id == "g1"

    def test_transaction_record_keeps_exact_amount(self, rent_payment):
        record = mappers.transaction_to_record(rent_payment)

        assert record["amount"] == "5000"
        assert mappers.transaction_from_record(record) == rent_payment

    def test_transaction_record_accepts_numeric_amount(self):
        txn = mappers.transaction_from_record(
            {"id": "t1", "date": "2024-03-01", "direction": "CREDIT", "amount": 12.5}
        )

        assert txn.amount == Decimal("12.5")
        assert txn.merchant == ""
        assert txn.raw_text is None

    def test_receivable_round_trip(self):
        receivable = Receivable(
            id="r1",
            date=date(2024, 3, 1),
            debtor_name="Ravi",
            amount=Decimal("500.25"),
            purpose="Lunch",
            due_date=None,
            is_settled=False,
            timestamp=datetime(2024, 3, 1, 9, 30),
        )

        assert mappers.receivable_from_record(mappers.receivable_to_record(receivable)) == receivable


class TestWorkspace:
    def test_new_user_starts_with_default_ledgers(self, workspace):
        assert [g.id for g in workspace.taxonomy.groups] == [g.id for g in default_ledgers()]
        assert len(workspace.store) == 0
        assert workspace.importer.pending is None

    def test_save_and_reload(self, temp_db, sample_user, workspace):
        group_id = workspace.add_group("TRAVEL", Direction.DEBIT)
        subgroup_id = workspace.add_subgroup(group_id, "Flights")
        transaction_id = workspace.transactions.create_transaction(
            date=date(2024, 3, 1),
            direction=Direction.DEBIT,
            amount=Decimal("8999.99"),
            bank_name="AXIS",
            merchant="Airline",
            subgroup_id=subgroup_id,
        )
        workspace.notes.add_note("Trip", "Goa")
        workspace.notes.add_receivable("Ravi", Decimal("300"))
        workspace.save()

        reloaded = LedgerWorkspace.load(temp_db, sample_user.id)
        assert reloaded.taxonomy.find_subgroup_name(group_id, subgroup_id) == "Flights"
        assert reloaded.store.get(transaction_id).amount == Decimal("8999.99")
        assert [e.action for e in reloaded.activity.entries()] == [ActivityAction.ADD, ActivityAction.ADD]
        assert reloaded.notes.notes[0].title == "Trip"
        assert reloaded.notes.outstanding_total() == Decimal("300")

    def test_removed_default_groups_stay_removed(self, temp_db, sample_user, workspace):
        workspace.remove_group("grp-house")
        workspace.save()

        reloaded = LedgerWorkspace.load(temp_db, sample_user.id)
        assert reloaded.taxonomy.find_group("grp-house") is None

    def test_pending_draft_persists_until_resolved(self, temp_db, sample_user, salary_payload):
        workspace = LedgerWorkspace.load(temp_db, sample_user.id, extractor=FakeExtractor(salary_payload))
        workspace.importer.process_import("ICICI salary credited")
        workspace.save()

        reloaded = LedgerWorkspace.load(temp_db, sample_user.id)
        assert reloaded.importer.pending.amount == Decimal("75000")
        assert reloaded.importer.pending.raw_text == "ICICI salary credited"

        reloaded.importer.discard()
        reloaded.save()
        assert temp_db.load_dataset(sample_user.id, datasets.PENDING_DRAFT) is None

    def test_add_group_rejects_blank_name(self, workspace):
        with pytest.raises(ValidationError):
            workspace.add_group("  ", Direction.DEBIT)
        assert len(workspace.activity) == 0

    def test_group_changes_are_logged(self, workspace):
        group_id = workspace.add_group("TRAVEL", Direction.DEBIT)
        workspace.remove_group(group_id)

        entries = workspace.activity.entries()
        assert [(e.action, e.entity) for e in entries] == [
            (ActivityAction.DELETE, ActivityEntity.GROUP),
            (ActivityAction.ADD, ActivityEntity.GROUP),
        ]

    def test_taxonomy_errors(self, workspace):
        with pytest.raises(NotFoundError):
            workspace.remove_group("missing")
        with pytest.raises(NotFoundError):
            workspace.add_subgroup("missing", "Name")
        with pytest.raises(ValidationError):
            workspace.add_subgroup("grp-house", " ")
        with pytest.raises(NotFoundError):
            workspace.remove_subgroup("grp-house", "missing")

    def test_removing_group_orphans_transactions(self, workspace):
        transaction_id = workspace.transactions.create_transaction(
            date=date(2024, 3, 1),
            direction=Direction.DEBIT,
            amount=Decimal("5000"),
            bank_name="HDFC",
            merchant="Landlord",
            subgroup_id="sub-rent",
        )
        workspace.remove_group("grp-house")

        assert [t.id for t in workspace.orphans()] == [transaction_id]
        assert workspace.statement().orphan_count == 1
        assert workspace.dashboard().expenses == Decimal("5000")

    def test_export_is_logged(self, workspace, tmp_path):
        with open(tmp_path / "out.csv", "w", newline="") as f:
            assert workspace.export(f) == 0

        assert workspace.activity.entries()[0].action == ActivityAction.EXPORT
