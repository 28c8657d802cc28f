from datetime import date
from typing import Iterable

from models.category import Category
from models.transaction import Transaction
from services.category_service import CategoryService
from services.filter_service import in_month
from services.transaction_service import TransactionService
from utils.constants import LEGEND_LIMIT, TREND_MONTHS
from utils.date_helpers import add_months, format_month, short_month, today


def summarize(transactions: Iterable[Transaction]) -> dict:
    """Return {income, expenses, balance}."""
    income = 0.0
    expenses = 0.0
    for tx in transactions:
        if tx.type == "income":
            income += tx.amount
        elif tx.type == "expense":
            expenses += tx.amount
    return {"income": income, "expenses": expenses, "balance": income - expenses}


def category_breakdown(
    transactions: Iterable[Transaction], categories: list[Category]
) -> list[dict]:
    """Expense totals per catalog category, largest first; zero totals dropped.

    Income transactions never count, even when tagged with an income category.
    Ties keep catalog order.
    """
    totals = {c.id: 0.0 for c in categories}
    for tx in transactions:
        if tx.type == "expense" and tx.category_id in totals:
            totals[tx.category_id] += tx.amount

    rows = [
        {
            "category_id": c.id,
            "name": c.name,
            "value": totals[c.id],
            "color_hex": c.color_hex,
            "icon": c.icon,
        }
        for c in categories
        if totals[c.id] > 0
    ]
    rows.sort(key=lambda r: r["value"], reverse=True)
    return rows


def monthly_trend(
    transactions: Iterable[Transaction],
    ref_date: date | None = None,
    months: int = TREND_MONTHS,
) -> list[dict]:
    """One {month, key, income, expenses} point per month, oldest first.

    The last point is the month of ref_date (today by default); months without
    transactions are zero-filled.
    """
    ref = (ref_date or today()).replace(day=1)
    txs = list(transactions)
    points = []
    for i in range(months - 1, -1, -1):
        month_start = add_months(ref, -i)
        key = format_month(month_start)
        in_this_month = [t for t in txs if in_month(t, key)]
        totals = summarize(in_this_month)
        points.append({
            "month": short_month(month_start),
            "key": key,
            "income": totals["income"],
            "expenses": totals["expenses"],
        })
    return points


class ReportService:
    def __init__(self, tx_service: TransactionService, category_service: CategoryService):
        self._tx_svc = tx_service
        self._cat_svc = category_service

    def get_summary(self, transactions: list[Transaction]) -> dict:
        return summarize(transactions)

    def get_category_breakdown(self, transactions: list[Transaction]) -> list[dict]:
        """Return [{category_id, name, value, color_hex, icon}, ...] for the pie chart."""
        return category_breakdown(transactions, self._cat_svc.get_all())

    def get_legend(self, transactions: list[Transaction], limit: int = LEGEND_LIMIT) -> list[dict]:
        return self.get_category_breakdown(transactions)[:limit]

    def get_monthly_trend(self, ref_date: date | None = None) -> list[dict]:
        """Six-month series over the whole ledger, independent of any filter."""
        return monthly_trend(self._tx_svc.get_all(), ref_date)
