"""Tests for the date, currency and config helpers."""
import json
import locale
import sys
from datetime import date

import pytest
from loguru import logger

from utils import app_config
from utils.constants import LOG_FILE
from utils.currency import format_currency, format_plain, format_signed
from utils.date_helpers import (
    add_months, format_display_date, friendly_month, next_month, parse_date,
    parse_display_date, parse_month, prev_month, short_month,
)
from utils.logging_setup import configure_logging


class TestDates:
    def test_parse_date(self):
        assert parse_date("2026-10-18") == date(2026, 10, 18)
        assert parse_date("2026/10/18") == date(2026, 10, 18)
        assert parse_date("2026-02-30") is None
        assert parse_date("") is None
        assert parse_date(None) is None
        assert parse_date(20261018) is None

    def test_parse_month(self):
        assert parse_month("2026-10") == date(2026, 10, 1)
        assert parse_month("October") is None

    def test_month_navigation(self):
        assert prev_month("2026-01") == "2025-12"
        assert next_month("2025-12") == "2026-01"
        with pytest.raises(ValueError):
            next_month("bad")

    def test_add_months_clamps_day(self):
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2026, 3, 15), -15) == date(2024, 12, 15)

    def test_friendly_month(self):
        assert friendly_month("2026-10") == "October 2026"
        assert friendly_month("2026-05") == "May 2026"
        assert friendly_month("junk") == "junk"

    def test_month_labels(self):
        labels = [short_month(date(2026, m, 1)) for m in range(1, 13)]
        assert labels == ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    def test_month_labels_ignore_locale(self):
        saved = locale.setlocale(locale.LC_TIME)
        try:
            locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
        except locale.Error:
            pytest.skip("de_DE locale not installed")
        try:
            assert short_month(date(2026, 3, 1)) == "Mar"
            assert friendly_month("2026-03") == "March 2026"
        finally:
            locale.setlocale(locale.LC_TIME, saved)

    def test_display_dates(self):
        assert format_display_date("2026-10-18", "DD/MM/YYYY") == "18/10/2026"
        assert format_display_date("not a date") == "not a date"
        assert parse_display_date("10/18/2026", "MM/DD/YYYY") == date(2026, 10, 18)
        assert parse_display_date("2026-10-18", "DD.MM.YYYY") == date(2026, 10, 18)


class TestCurrency:
    def test_format_currency(self):
        assert format_currency(1234.5) == "₱1,234.50"
        assert format_currency(-1, "$") == "-$1.00"

    def test_format_signed(self):
        assert format_signed(20000, "income") == "+₱20,000.00"
        assert format_signed(500, "expense") == "-₱500.00"

    def test_format_plain(self):
        assert format_plain(500.0) == "500"
        assert format_plain(12.5) == "12.5"
        assert format_plain(12.345) == "12.345"


class TestAppConfig:
    @pytest.fixture(autouse=True)
    def _config_in_tmp(self, tmp_path, monkeypatch):
        monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
        monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")

    def test_missing_file(self):
        assert app_config.load_config() == {}
        assert app_config.get_data_folder() is None

    def test_set_and_reset_data_folder(self, tmp_path):
        app_config.set_data_folder("/data/money")
        assert app_config.get_data_folder() == "/data/money"
        app_config.set_data_folder(None)
        assert app_config.get_data_folder() is None

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "config.json").write_text("{oops", encoding="utf-8")
        assert app_config.load_config() == {}

    def test_non_object_file(self, tmp_path):
        (tmp_path / "config.json").write_text(json.dumps([1, 2]), encoding="utf-8")
        assert app_config.load_config() == {}


class TestLogging:
    def test_file_sink_in_data_folder(self, tmp_path):
        configure_logging(str(tmp_path))
        try:
            logger.info("ledger opened")
        finally:
            logger.remove()
            logger.add(sys.stderr)
        assert "ledger opened" in (tmp_path / LOG_FILE).read_text(encoding="utf-8")
