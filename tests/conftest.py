"""Shared pytest fixtures for spendsense tests."""

import json
import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from spendsense.database.factories import create_database
from spendsense.domain.activity import ActivityLog
from spendsense.domain.entities import Direction
from spendsense.domain.errors import ExtractionError
from spendsense.domain.taxonomy import TaxonomyStore, default_ledgers
from spendsense.domain.transaction import TransactionService, TransactionStore
from spendsense.domain.users import UserService
from spendsense.domain.workspace import LedgerWorkspace
from spendsense.logconfig import configure_logging
from spendsense.services.gemini import parse_extraction_payload

SALARY_PAYLOAD = {
    "amount": 75000,
    "type": "CREDIT",
    "date": "2024-03-01",
    "merchant": "ACME Corp",
    "bankName": "ICICI",
    "refNo": "SAL-9921",
    "suggestedPurpose": "Salary",
}


class FakeExtractor:
    """Stands in for the Gemini client, replaying canned responses in order."""

    def __init__(self, *responses: str):
        self.responses = list(responses)
        self.calls: list[str] = []

    def extract(self, text):
        self.calls.append(text)
        payload = self.responses.pop(0) if self.responses else ""
        return parse_extraction_payload(payload, raw_text=text)


class FailingExtractor:
    def extract(self, text):
        raise ExtractionError("service unavailable")


@pytest.fixture(autouse=True)
def quiet_logging():
    """Send log output to the current stderr for each test."""
    configure_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_database(db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Sign up a user and log them in."""
    user = user_service.sign_up("asha", "secret")
    user_service.login("asha", "secret")
    return user


@pytest.fixture
def workspace(temp_db, sample_user):
    """Workspace for the logged-in sample user, seeded with the default ledgers."""
    return LedgerWorkspace.load(temp_db, sample_user.id)


@pytest.fixture
def taxonomy():
    return TaxonomyStore(default_ledgers())


@pytest.fixture
def activity():
    return ActivityLog()


@pytest.fixture
def store():
    return TransactionStore()


@pytest.fixture
def transaction_service(store, taxonomy, activity):
    return TransactionService(store, taxonomy, activity)


@pytest.fixture
def rent_payment(transaction_service):
    """A 5000 DEBIT transaction filed under HOUSEHOLD > Rent."""
    transaction_id = transaction_service.create_transaction(
        date=date(2024, 3, 5),
        direction=Direction.DEBIT,
        amount=Decimal("5000"),
        bank_name="HDFC",
        merchant="Landlord",
        subgroup_id="sub-rent",
        purpose="March rent",
    )
    return transaction_service.get_transaction(transaction_id)


@pytest.fixture
def salary_payload():
    return json.dumps(SALARY_PAYLOAD)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
