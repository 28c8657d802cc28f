import customtkinter as ctk
from tkinter import filedialog, messagebox

from database.db_manager import DatabaseManager
from services.data_service import DataService
from services.errors import StorageError
from services.transaction_service import TransactionService
from ui.components.confirm_dialog import ConfirmDialog
from utils.app_config import get_data_folder, set_data_folder
from utils.constants import DEFAULT_CURRENCY_SYMBOL
from utils.date_helpers import DATE_FORMAT_OPTIONS


class SettingsTab(ctk.CTkFrame):
    """Settings tab: data folder, sample data, app preferences."""

    def __init__(
        self,
        master,
        db: DatabaseManager,
        data_service: DataService,
        tx_service: TransactionService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db
        self._data_svc = data_service
        self._tx_svc = tx_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_data_folder_section(scroll)
        self._build_data_section(scroll)
        self._build_app_settings_section(scroll)
        self.refresh()

    def refresh(self):
        """Re-read settings from DB and update displayed values."""
        appearance = self._db.get_setting("appearance_mode", "system")
        self._appearance_var.set(appearance.title())
        self._currency_var.set(self._db.get_setting("currency_symbol", DEFAULT_CURRENCY_SYMBOL))
        date_fmt = self._db.get_setting("date_format", "MM/DD/YYYY")
        if date_fmt in DATE_FORMAT_OPTIONS:
            self._date_fmt_var.set(date_fmt)
        self._count_var.set(f"{self._tx_svc.count()} transactions stored.")

    # ── Section 1: Data folder ────────────────────────────────────────────────

    def _build_data_folder_section(self, parent):
        section = self._make_section(parent, "Data Folder", row=0)

        ctk.CTkLabel(
            section,
            text="monivera.db and the log file are stored in this folder.",
            text_color="gray60",
            font=ctk.CTkFont(size=11),
            anchor="w",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=8, pady=(4, 6))

        self._folder_var = ctk.StringVar(value=get_data_folder() or "(default: app folder)")
        ctk.CTkEntry(
            section, textvariable=self._folder_var, state="readonly", width=340,
        ).grid(row=1, column=0, padx=(8, 4), pady=4, sticky="ew")

        ctk.CTkButton(
            section, text="Browse…", width=90,
            command=self._browse_data_folder,
        ).grid(row=1, column=1, padx=4)

        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._change_data_folder(None),
        ).grid(row=1, column=2, padx=(4, 8))

        self._restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800",
            font=ctk.CTkFont(size=11), anchor="w",
        )
        self._restart_label.grid(row=2, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_data_folder(self):
        path = filedialog.askdirectory(title="Choose data folder")
        if path:
            self._change_data_folder(path)

    def _change_data_folder(self, path: str | None):
        try:
            set_data_folder(path)
        except OSError as e:
            messagebox.showerror("Settings", f"Could not save configuration:\n{e}")
            return
        self._folder_var.set(path or "(default: app folder)")
        self._restart_label.configure(text="Restart the app for the change to take effect.")

    # ── Section 2: Data ───────────────────────────────────────────────────────

    def _build_data_section(self, parent):
        section = self._make_section(parent, "Data", row=1)

        self._count_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._count_var, anchor="w", text_color="gray60",
        ).grid(row=0, column=0, sticky="w", padx=8, pady=(4, 2))

        btn_frame = ctk.CTkFrame(section, fg_color="transparent")
        btn_frame.grid(row=1, column=0, sticky="w", padx=8, pady=6)

        ctk.CTkButton(
            btn_frame, text="Load Demo Data", width=130,
            command=self._load_demo_data,
        ).pack(side="left", padx=4)

        ctk.CTkButton(
            btn_frame, text="Clear All Transactions", width=160,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._clear_transactions,
        ).pack(side="left", padx=4)

    def _load_demo_data(self):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Load Demo Data",
            "Replace all transactions with random sample data for the last 6 months?",
            confirm_text="Load",
        )
        if not dlg.result:
            return
        self._data_svc.load_demo_data()
        self._notify_refresh("full")

    def _clear_transactions(self):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Clear Transactions",
            f"Remove all {self._tx_svc.count()} transactions? This cannot be undone.",
            confirm_text="Remove",
        )
        if not dlg.result:
            return
        self._tx_svc.clear_all()
        self._notify_refresh("full")
        messagebox.showinfo("Clear Transactions", "All transactions removed.")

    # ── Section 3: App settings ───────────────────────────────────────────────

    def _build_app_settings_section(self, parent):
        section = self._make_section(parent, "App Settings", row=2)

        self._appearance_var = ctk.StringVar()
        self._currency_var = ctk.StringVar()
        self._date_fmt_var = ctk.StringVar()

        rows = (
            ("Appearance:", ctk.CTkComboBox(
                section, values=["System", "Light", "Dark"],
                variable=self._appearance_var, width=180, state="readonly",
            )),
            ("Currency Symbol:", ctk.CTkEntry(section, textvariable=self._currency_var, width=60)),
            ("Date Format:", ctk.CTkComboBox(
                section, values=DATE_FORMAT_OPTIONS,
                variable=self._date_fmt_var, width=180, state="readonly",
            )),
        )
        for r, (label, widget) in enumerate(rows):
            ctk.CTkLabel(section, text=label, anchor="e", width=120).grid(
                row=r, column=0, padx=(8, 4), pady=6, sticky="e"
            )
            widget.grid(row=r, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(
            section,
            text="Currency and date format changes take effect on next app restart.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=3, column=0, columnspan=2, sticky="w", padx=8)

        ctk.CTkButton(
            section, text="Save Settings", width=140, command=self._save_settings,
        ).grid(row=4, column=0, columnspan=2, pady=(10, 8))

        self._status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._status_var,
            text_color="#4CAF50", font=ctk.CTkFont(size=11),
        ).grid(row=5, column=0, columnspan=2, pady=(0, 8))

    def _save_settings(self):
        appearance = self._appearance_var.get().lower()
        values = {
            "appearance_mode": appearance,
            "currency_symbol": self._currency_var.get().strip() or DEFAULT_CURRENCY_SYMBOL,
            "date_format": self._date_fmt_var.get(),
        }
        try:
            for key, value in values.items():
                self._db.set_setting(key, value)
        except StorageError as e:
            messagebox.showerror("Settings", str(e))
            return
        ctk.set_appearance_mode(appearance)
        self._status_var.set("Settings saved.")

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Create a labelled card section and return its inner frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer,
            text=title,
            font=ctk.CTkFont(size=14, weight="bold"),
            anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner
