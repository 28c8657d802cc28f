"""Shared fixtures: a temp-file store wired to real DAOs and services."""
import pytest

from database.category_dao import CategoryDAO
from database.db_manager import DatabaseManager
from database.ledger_dao import LedgerDAO
from models.transaction import Transaction
from services.category_service import CategoryService
from services.data_service import DataService
from services.report_service import ReportService
from services.transaction_service import TransactionService


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_tx(id_, amount, type_="expense", category_id="1", date="2026-10-05", note=""):
    return Transaction(
        id=id_, amount=amount, type=type_, category_id=category_id,
        date=date, note=note, created_at="2026-10-05T09:00:00",
    )


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "test.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def ledger_dao(db):
    return LedgerDAO(db)


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def category_svc(category_dao):
    return CategoryService(category_dao)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tx_svc(ledger_dao, clock):
    return TransactionService(ledger_dao, clock=clock)


@pytest.fixture
def report_svc(tx_svc, category_svc):
    return ReportService(tx_svc, category_svc)


@pytest.fixture
def data_svc(tx_svc, category_svc):
    return DataService(tx_svc, category_svc)
