import customtkinter as ctk
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.errors import ValidationError
from models.transaction import Transaction
from ui.components.date_picker import DatePickerWidget
from utils.currency import format_plain
from utils.date_helpers import format_date, today


class TransactionForm(ctk.CTkToplevel):
    """Add or edit an income/expense entry."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        transaction: Transaction | None = None,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "₱",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._transaction = transaction
        self.saved = False

        tx = transaction
        self.title("Edit Transaction" if tx else "Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Type
        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=tx.type if tx else "expense")
        ctk.CTkSegmentedButton(
            self, values=["expense", "income"],
            variable=self._type_var,
            command=lambda _: self._on_type_change(),
        ).grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="w")
        r += 1

        # Amount
        self._label(f"Amount ({currency_symbol}):", r)
        self._amount_var = ctk.StringVar(value=format_plain(tx.amount) if tx else "")
        amount_entry = ctk.CTkEntry(
            self, textvariable=self._amount_var, width=200, placeholder_text="0.00"
        )
        amount_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Category
        self._label("Category:", r)
        self._cat_var = ctk.StringVar()
        self._cat_combo = ctk.CTkComboBox(
            self, values=[], variable=self._cat_var, width=200, state="readonly"
        )
        self._cat_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        self._load_categories(tx.category_id if tx else None)
        r += 1

        # Date
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self, initial_date=tx.date if tx else format_date(today()), date_format=date_format,
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Note
        self._label("Note (optional):", r)
        self._note_var = ctk.StringVar(value=tx.note if tx else "")
        ctk.CTkEntry(
            self, textvariable=self._note_var, width=200,
            placeholder_text="e.g., Lunch at restaurant",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._build_footer(r)

        self.bind("<Return>", lambda _e: self._on_save())
        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(master)
        self.grab_set()
        self._center()
        amount_entry.focus_set()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=280, anchor="w"
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame,
            text="Update Transaction" if self._transaction else "Add Transaction",
            width=140,
            command=self._on_save,
        ).pack(side="right")

    def _load_categories(self, selected_id: str | None):
        self._cats = self._cat_svc.choices_for_type(self._type_var.get(), keep_id=selected_id)
        names = [c.name for c in self._cats]
        self._cat_combo.configure(values=names)
        current = next((c for c in self._cats if c.id == selected_id), None)
        if current is None:
            first_id = self._cat_svc.first_id_for_type(self._type_var.get())
            current = self._cat_svc.get_by_id(first_id)
        name = current.name if current else ""
        self._cat_var.set(name)
        self._cat_combo.set(name)

    def _on_type_change(self):
        self._load_categories(None)

    def _on_save(self):
        if not self._date_picker.is_valid():
            self._error_var.set("Please enter a valid date")
            return
        cat = next((c for c in self._cats if c.name == self._cat_var.get()), None)
        category_id = cat.id if cat else ""
        args = dict(
            type_=self._type_var.get(),
            amount=self._amount_var.get(),
            category_id=category_id,
            date=self._date_picker.get(),
            note=self._note_var.get().strip(),
        )
        try:
            if self._transaction:
                self._tx_svc.update(self._transaction.id, **args)
            else:
                self._tx_svc.create(**args)
        except ValidationError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
