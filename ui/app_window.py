import customtkinter as ctk
from tkinter import filedialog, messagebox
from models.transaction import Transaction
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.data_service import DataService
from services.filter_service import TransactionFilter, filter_transactions
from services.errors import ExportError, ImportFormatError
from database.db_manager import DatabaseManager
from ui.components.alert_banner import AlertBanner
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.transaction_form import TransactionForm
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.register_tab import RegisterTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import (
    APP_NAME, APP_WIDTH, APP_HEIGHT, ERROR_COLOR, INFO_COLOR, UNDO_TIMEOUT_SECONDS,
)
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month


_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"dashboard", "register", "settings"},
    "filter":      {"dashboard", "register"},
    "full":        {"dashboard", "register", "settings"},
}


class AppWindow(ctk.CTk):
    """Main window. Owns the view state: displayed month and active filter."""

    def __init__(
        self,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        data_service: DataService,
        db: DatabaseManager,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "₱",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._data_svc = data_service
        self._db = db
        self._date_format = date_format
        self._symbol = currency_symbol

        self._month = current_month_str()
        self._criteria = TransactionFilter()
        self._tx_svc.on_commit_error = self._on_commit_error

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()
        self._update_month_nav()

    # ── View state ───────────────────────────────────────────────────────────
    def get_filter(self) -> TransactionFilter:
        return self._criteria

    def set_filter(self, criteria: TransactionFilter):
        if criteria != self._criteria:
            self._criteria = criteria
            self.notify_tabs_refresh("filter")

    def get_visible_transactions(self) -> list[Transaction]:
        return filter_transactions(
            self._tx_svc.get_all(), self._month, self._criteria, self._cat_svc.resolve
        )

    # ── Header ───────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=52)
        bar.grid(row=0, column=0, sticky="ew")

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=18, weight="bold"),
        ).pack(side="left", padx=(16, 12), pady=10)

        ctk.CTkButton(bar, text="◀", width=28, command=lambda: self._change_month(-1)).pack(side="left")
        self._month_label = ctk.CTkLabel(
            bar, text="", font=ctk.CTkFont(size=15, weight="bold"), width=150, anchor="center",
        )
        self._month_label.pack(side="left", padx=8)
        self._next_btn = ctk.CTkButton(bar, text="▶", width=28, command=lambda: self._change_month(1))
        self._next_btn.pack(side="left")

        ctk.CTkButton(
            bar, text="+ Add Transaction", width=140, command=self._open_add_form,
        ).pack(side="right", padx=(4, 16))
        for label, cmd in (
            ("Import", self._import_json),
            ("Backup", self._export_json),
            ("CSV", self._export_csv),
        ):
            ctk.CTkButton(
                bar, text=label, width=80,
                fg_color="transparent", border_width=1,
                text_color=("gray10", "gray90"),
                command=cmd,
            ).pack(side="right", padx=4)

    def _change_month(self, direction: int):
        step = next_month if direction > 0 else prev_month
        candidate = step(self._month)
        if candidate > current_month_str():
            return
        self._month = candidate
        self._update_month_nav()
        self.notify_tabs_refresh("filter")

    def _update_month_nav(self):
        self._month_label.configure(text=friendly_month(self._month))
        at_current = self._month >= current_month_str()
        self._next_btn.configure(state="disabled" if at_current else "normal")

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Transactions", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            report_service=self._report_svc,
            get_visible=self.get_visible_transactions,
            get_ledger_size=self._tx_svc.count,
            currency_symbol=self._symbol,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._register_tab = RegisterTab(
            self._tabview.tab("Transactions"),
            category_service=self._cat_svc,
            get_visible=self.get_visible_transactions,
            get_filter=self.get_filter,
            set_filter=self.set_filter,
            on_edit=self._open_edit_form,
            on_delete=self._delete_tx,
            currency_symbol=self._symbol,
            date_format=self._date_format,
        )
        self._register_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            db=self._db,
            data_service=self._data_svc,
            tx_service=self._tx_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "dashboard" in tabs: self._dashboard_tab.refresh()
        if "register"  in tabs: self._register_tab.refresh()
        if "settings"  in tabs: self._settings_tab.refresh()

    # ── Transactions ─────────────────────────────────────────────────────────
    def _open_add_form(self):
        self._open_form(None)

    def _open_edit_form(self, tx: Transaction):
        self._open_form(tx)

    def _open_form(self, tx: Transaction | None):
        form = TransactionForm(
            self, self._tx_svc, self._cat_svc,
            transaction=tx,
            date_format=self._date_format,
            currency_symbol=self._symbol,
        )
        self.wait_window(form)
        if form.saved:
            self.notify_tabs_refresh("transaction")

    def _delete_tx(self, tx: Transaction):
        if self._tx_svc.delete(tx.id) is None:
            return
        self.notify_tabs_refresh("transaction")
        self._show_banner(
            "Transaction deleted",
            INFO_COLOR,
            action_text="Undo",
            action_cmd=self._undo_delete,
            timeout_ms=UNDO_TIMEOUT_SECONDS * 1000,
            on_expire=self._tx_svc.clear_undo,
        )

    def _undo_delete(self):
        if self._tx_svc.undo() is not None:
            self.notify_tabs_refresh("transaction")

    # ── Export / import ──────────────────────────────────────────────────────
    def _export_csv(self):
        try:
            self._data_svc.export_csv(self._month)
        except ExportError as e:
            messagebox.showwarning("Export CSV", str(e))
            return
        path = filedialog.asksaveasfilename(
            title="Export CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile=self._data_svc.csv_filename(self._month),
        )
        if not path:
            return
        try:
            self._data_svc.write_csv(path, self._month)
        except (ExportError, OSError) as e:
            messagebox.showerror("Export Failed", str(e))

    def _export_json(self):
        path = filedialog.asksaveasfilename(
            title="Backup as JSON",
            defaultextension=".json",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
            initialfile=self._data_svc.backup_filename(),
        )
        if not path:
            return
        try:
            self._data_svc.write_json(path)
        except OSError as e:
            messagebox.showerror("Export Failed", str(e))

    def _import_json(self):
        path = filedialog.askopenfilename(
            title="Import JSON",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            count = self._data_svc.import_file(path, confirm=self._confirm_import)
        except ImportFormatError as e:
            messagebox.showerror("Import Failed", str(e))
            return
        if count:
            self.notify_tabs_refresh("full")
            messagebox.showinfo("Import", "Data imported successfully!")

    def _confirm_import(self, count: int) -> bool:
        dlg = ConfirmDialog(
            self,
            "Import Transactions",
            f"Import {count} transactions? This will merge with your existing data.",
            confirm_text="Import",
            destructive=False,
        )
        return dlg.result

    # ── Banners ──────────────────────────────────────────────────────────────
    def _show_banner(self, message: str, color: str, **kwargs):
        for w in self._banner_frame.winfo_children():
            if isinstance(w, AlertBanner):
                w.dismiss()
        AlertBanner(self._banner_frame, message=message, color=color, **kwargs).pack(fill="x", pady=2)

    def _on_commit_error(self, exc: Exception):
        self._show_banner(f"Changes could not be saved: {exc}", ERROR_COLOR)
