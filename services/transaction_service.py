import math
import time
from dataclasses import replace

from loguru import logger

from database.ledger_dao import LedgerDAO, new_id
from models.transaction import Transaction
from services.errors import StorageError, ValidationError
from utils.constants import TRANSACTION_TYPES, UNDO_TIMEOUT_SECONDS
from utils.date_helpers import now_iso, parse_date


class TransactionService:
    """Owner of the in-memory ledger (newest first).

    Every mutation is written back through the DAO. A failed write keeps the
    in-memory change, is logged and is reported to on_commit_error.
    """

    def __init__(self, ledger_dao: LedgerDAO, clock=time.monotonic, on_commit_error=None):
        self._dao = ledger_dao
        self._clock = clock
        self.on_commit_error = on_commit_error
        self._ledger: list[Transaction] = ledger_dao.load()
        self._undo_tx: Transaction | None = None
        self._undo_deadline = 0.0
        logger.debug(f"Loaded {len(self._ledger)} transactions")

    # ── Reads ────────────────────────────────────────────────────────────────

    def get_all(self) -> list[Transaction]:
        return list(self._ledger)

    def get_by_id(self, tx_id: str) -> Transaction | None:
        return next((t for t in self._ledger if t.id == tx_id), None)

    def count(self) -> int:
        return len(self._ledger)

    # ── Sequence operations ──────────────────────────────────────────────────

    def insert_front(self, tx: Transaction) -> Transaction:
        self._ledger.insert(0, tx)
        self._commit()
        return tx

    def prepend_many(self, txs: list[Transaction]) -> int:
        self._ledger[:0] = txs
        self._commit()
        return len(txs)

    def replace_by_id(self, tx: Transaction) -> bool:
        for i, existing in enumerate(self._ledger):
            if existing.id == tx.id:
                self._ledger[i] = tx
                self._commit()
                return True
        return False

    def remove_by_id(self, tx_id: str) -> Transaction | None:
        for i, existing in enumerate(self._ledger):
            if existing.id == tx_id:
                removed = self._ledger.pop(i)
                self._commit()
                return removed
        return None

    def replace_all(self, txs: list[Transaction]):
        self._ledger = list(txs)
        self._commit()

    def clear_all(self):
        self._ledger = []
        self.clear_undo()
        self._commit()
        logger.info("Cleared all transactions")

    # ── Entry form contract ──────────────────────────────────────────────────

    def create(
        self,
        type_: str,
        amount,
        category_id: str,
        date: str,
        note: str = "",
    ) -> Transaction:
        value = self._validate(type_, amount, date)
        tx = Transaction(
            id=new_id(),
            amount=value,
            type=type_,
            category_id=category_id,
            date=date,
            note=note,
            created_at=now_iso(),
        )
        logger.debug(f"Adding {type_} of {value} on {date}")
        return self.insert_front(tx)

    def update(
        self,
        tx_id: str,
        type_: str,
        amount,
        category_id: str,
        date: str,
        note: str = "",
    ) -> Transaction:
        value = self._validate(type_, amount, date)
        existing = self.get_by_id(tx_id)
        if existing is None:
            raise ValidationError("Transaction no longer exists.")
        updated = replace(
            existing, type=type_, amount=value,
            category_id=category_id, date=date, note=note,
        )
        self.replace_by_id(updated)
        logger.debug(f"Updated transaction {tx_id}")
        return updated

    # ── Delete / undo ────────────────────────────────────────────────────────

    def delete(self, tx_id: str) -> Transaction | None:
        removed = self.remove_by_id(tx_id)
        if removed is not None:
            self._undo_tx = removed
            self._undo_deadline = self._clock() + UNDO_TIMEOUT_SECONDS
            logger.debug(f"Deleted transaction {tx_id}")
        return removed

    def has_undo(self) -> bool:
        if self._undo_tx is not None and self._clock() >= self._undo_deadline:
            self.clear_undo()
        return self._undo_tx is not None

    def undo(self) -> Transaction | None:
        """Restore the last deleted transaction at the front of the ledger."""
        if not self.has_undo():
            return None
        tx = self._undo_tx
        self.clear_undo()
        self.insert_front(tx)
        logger.debug(f"Restored transaction {tx.id}")
        return tx

    def clear_undo(self):
        self._undo_tx = None
        self._undo_deadline = 0.0

    # ── Internals ────────────────────────────────────────────────────────────

    def _commit(self):
        try:
            self._dao.save(self._ledger)
        except StorageError as e:
            logger.error(f"Ledger not saved: {e}")
            if self.on_commit_error:
                self.on_commit_error(e)

    def _validate(self, type_: str, amount, date: str) -> float:
        if amount is None or (isinstance(amount, str) and not amount.strip()):
            raise ValidationError("Please enter a valid amount")
        try:
            value = float(amount)
        except (TypeError, ValueError):
            raise ValidationError("Please enter a valid amount")
        if not (math.isfinite(value) and value > 0):
            raise ValidationError("Please enter a valid amount")
        if type_ not in TRANSACTION_TYPES:
            raise ValidationError(f"Invalid type: {type_}")
        if not parse_date(date):
            raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
        return value
