import uuid

from database.db_manager import DatabaseManager
from models.transaction import Transaction
from utils.constants import TRANSACTIONS_KEY


def new_id() -> str:
    return uuid.uuid4().hex


def _text(value) -> str:
    return value if isinstance(value, str) else ("" if value is None else str(value))


def record_to_model(record: dict) -> Transaction:
    """Lenient conversion from a stored/imported record. Never raises."""
    try:
        amount = float(record.get("amount") or 0)
    except (TypeError, ValueError):
        amount = 0.0
    return Transaction(
        id=_text(record.get("id")) or new_id(),
        amount=amount,
        type=_text(record.get("type")),
        category_id=_text(record.get("categoryId")),
        date=_text(record.get("date")),
        note=_text(record.get("note")),
        created_at=_text(record.get("createdAt")),
    )


def model_to_record(tx: Transaction) -> dict:
    return {
        "id": tx.id,
        "amount": tx.amount,
        "type": tx.type,
        "categoryId": tx.category_id,
        "date": tx.date,
        "note": tx.note,
        "createdAt": tx.created_at,
    }


class LedgerDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def load(self) -> list[Transaction]:
        records = self._db.get_json(TRANSACTIONS_KEY, [])
        if not isinstance(records, list):
            return []
        return [record_to_model(r) for r in records if isinstance(r, dict)]

    def save(self, transactions: list[Transaction]) -> None:
        self._db.set_json(TRANSACTIONS_KEY, [model_to_record(t) for t in transactions])
