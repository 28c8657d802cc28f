"""Tests for summary totals, the category breakdown and the monthly trend."""
from datetime import date

import pytest

from models.category import Category
from services.report_service import category_breakdown, monthly_trend, summarize
from tests.conftest import make_tx


class TestSummary:
    def test_month_scenario(self, report_svc, category_svc):
        txs = [
            make_tx("a", 500.0, "expense", "1", "2026-10-03"),
            make_tx("b", 20000.0, "income", "6", "2026-10-01"),
        ]
        assert report_svc.get_summary(txs) == {"income": 20000.0, "expenses": 500.0, "balance": 19500.0}
        assert report_svc.get_category_breakdown(txs) == [{
            "category_id": "1", "name": "Food & Dining", "value": 500.0,
            "color_hex": "#EF4444", "icon": category_svc.get_by_id("1").icon,
        }]

    def test_empty(self):
        assert summarize([]) == {"income": 0.0, "expenses": 0.0, "balance": 0.0}

    def test_balance_is_income_minus_expenses(self):
        txs = [make_tx(str(i), float(i * 7 + 1), "income" if i % 3 == 0 else "expense") for i in range(12)]
        totals = summarize(txs)
        assert totals["balance"] == pytest.approx(totals["income"] - totals["expenses"])

    def test_unrecognised_type_ignored(self):
        assert summarize([make_tx("a", 10.0, "transfer")])["balance"] == 0.0


class TestCategoryBreakdown:
    def _cats(self):
        return [
            Category("1", "Food", "expense", "#111111"),
            Category("2", "Transport", "expense", "#222222"),
            Category("3", "Shopping", "expense", "#333333"),
            Category("6", "Salary", "income", "#666666"),
        ]

    def test_sorted_descending_without_zero_totals(self):
        txs = [
            make_tx("a", 10.0, category_id="1"),
            make_tx("b", 30.0, category_id="2"),
            make_tx("c", 5.0, category_id="1"),
        ]
        rows = category_breakdown(txs, self._cats())
        assert [(r["name"], r["value"]) for r in rows] == [("Transport", 30.0), ("Food", 15.0)]

    def test_income_never_counted(self):
        txs = [make_tx("a", 100.0, "income", "6"), make_tx("b", 50.0, "income", "1")]
        assert category_breakdown(txs, self._cats()) == []

    def test_expense_tagged_with_income_category_counts(self):
        rows = category_breakdown([make_tx("a", 8.0, "expense", "6")], self._cats())
        assert [r["name"] for r in rows] == ["Salary"]

    def test_ties_keep_catalog_order(self):
        txs = [
            make_tx("a", 20.0, category_id="3"),
            make_tx("b", 20.0, category_id="1"),
            make_tx("c", 20.0, category_id="2"),
        ]
        assert [r["name"] for r in category_breakdown(txs, self._cats())] == ["Food", "Transport", "Shopping"]

    def test_unknown_category_dropped(self):
        assert category_breakdown([make_tx("a", 5.0, category_id="99")], self._cats()) == []

    def test_legend_limited(self, report_svc):
        txs = [make_tx(c, float(i + 1), category_id=c) for i, c in enumerate(["1", "2", "3", "4", "5", "6", "7"])]
        legend = report_svc.get_legend(txs)
        assert len(legend) == 5
        assert legend[0]["category_id"] == "7"


class TestMonthlyTrend:
    def test_six_points_oldest_first_zero_filled(self):
        points = monthly_trend([], ref_date=date(2026, 10, 18))
        assert [p["key"] for p in points] == [
            "2026-05", "2026-06", "2026-07", "2026-08", "2026-09", "2026-10",
        ]
        assert [p["month"] for p in points] == ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]
        assert all(p["income"] == 0.0 and p["expenses"] == 0.0 for p in points)

    def test_wraps_year(self):
        points = monthly_trend([], ref_date=date(2026, 2, 28))
        assert [p["key"] for p in points] == [
            "2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02",
        ]

    def test_month_end_reference(self):
        points = monthly_trend([], ref_date=date(2026, 8, 31))
        assert points[0]["key"] == "2026-03"

    def test_totals_per_month(self):
        txs = [
            make_tx("a", 100.0, "income", "6", "2026-10-02"),
            make_tx("b", 40.0, "expense", "1", "2026-10-09"),
            make_tx("c", 15.0, "expense", "2", "2026-07-20"),
            make_tx("d", 999.0, "expense", "2", "2026-04-30"),
        ]
        points = {p["key"]: p for p in monthly_trend(txs, ref_date=date(2026, 10, 1))}
        assert points["2026-10"]["income"] == 100.0
        assert points["2026-10"]["expenses"] == 40.0
        assert points["2026-07"]["expenses"] == 15.0
        assert "2026-04" not in points

    def test_service_uses_whole_ledger(self, tx_svc, report_svc):
        tx_svc.prepend_many([
            make_tx("a", 100.0, "income", "6", "2026-10-02"),
            make_tx("b", 40.0, "expense", "1", "2026-09-09"),
        ])
        points = report_svc.get_monthly_trend(ref_date=date(2026, 10, 18))
        assert points[-1]["income"] == 100.0
        assert points[-2]["expenses"] == 40.0
