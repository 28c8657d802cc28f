"""Narrowing of the ledger to the displayed month and the active filters."""
from dataclasses import dataclass
from typing import Callable, Iterable

from models.category import Category
from models.transaction import Transaction
from utils.date_helpers import parse_date, parse_month


@dataclass(frozen=True)
class TransactionFilter:
    query: str = ""
    category_id: str = "all"
    type: str = "all"

    @property
    def is_active(self) -> bool:
        return bool(self.query) or self.category_id != "all" or self.type != "all"


def in_month(tx: Transaction, month: str) -> bool:
    """True when tx.date falls in the YYYY-MM month. Unparseable dates never match."""
    d = parse_date(tx.date)
    m = parse_month(month)
    if d is None or m is None:
        return False
    return d.year == m.year and d.month == m.month


def matches(
    tx: Transaction,
    month: str,
    criteria: TransactionFilter,
    resolve_category: Callable[[str], Category],
) -> bool:
    if not in_month(tx, month):
        return False

    if criteria.query:
        q = criteria.query.lower()
        note = (tx.note or "").lower()
        name = resolve_category(tx.category_id).name.lower()
        if q not in note and q not in name:
            return False

    if criteria.category_id != "all" and tx.category_id != criteria.category_id:
        return False
    if criteria.type != "all" and tx.type != criteria.type:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    month: str,
    criteria: TransactionFilter,
    resolve_category: Callable[[str], Category],
) -> list[Transaction]:
    """Ledger order is preserved."""
    return [t for t in transactions if matches(t, month, criteria, resolve_category)]
