import os
import sys
import customtkinter as ctk
from loguru import logger

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.ledger_dao import LedgerDAO
from database.category_dao import CategoryDAO

from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.data_service import DataService

from ui.app_window import AppWindow
from utils.app_config import get_data_folder
from utils.logging_setup import configure_logging


def main():
    # ── Bootstrap: read data folder from pre-DB config ────────────────────────
    data_folder = get_data_folder()
    configure_logging(data_folder)

    # ── Storage ──────────────────────────────────────────────────────────────
    db = DatabaseManager.open_default(data_folder=data_folder)
    ledger_dao = LedgerDAO(db)
    category_dao = CategoryDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    category_svc = CategoryService(category_dao)
    tx_svc = TransactionService(ledger_dao)
    report_svc = ReportService(tx_svc, category_svc)
    data_svc = DataService(tx_svc, category_svc)
    logger.info(f"Starting with {tx_svc.count()} transactions, {len(category_svc.get_all())} categories")

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        tx_service=tx_svc,
        category_service=category_svc,
        report_service=report_svc,
        data_service=data_svc,
        db=db,
        date_format=db.get_setting("date_format", "MM/DD/YYYY"),
        currency_symbol=db.get_setting("currency_symbol", "₱"),
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
