import customtkinter as ctk
from services.category_service import CategoryService
from services.filter_service import TransactionFilter
from models.transaction import Transaction
from utils.constants import EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_signed
from utils.date_helpers import format_display_date


_MAX_RENDERED_ROWS = 100
_ALL_CATEGORIES = "All Categories"
_TYPE_LABELS = {"All Types": "all", "Expenses Only": "expense", "Income Only": "income"}


class RegisterTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        category_service: CategoryService,
        get_visible,      # callable → list[Transaction]
        get_filter,       # callable → TransactionFilter
        set_filter,       # callable(TransactionFilter)
        on_edit,          # callable(Transaction)
        on_delete,        # callable(Transaction)
        currency_symbol: str = "₱",
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._cat_svc = category_service
        self._get_visible = get_visible
        self._get_filter = get_filter
        self._set_filter = set_filter
        self._on_edit = on_edit
        self._on_delete = on_delete
        self._symbol = currency_symbol
        self._date_format = date_format

        self._search_var = ctk.StringVar()
        self._type_var = ctk.StringVar(value="All Types")
        self._cat_var = ctk.StringVar(value=_ALL_CATEGORIES)
        self._search_var.trace_add("write", lambda *_: self._apply_filters())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._build_register()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        bar.grid_columnconfigure(0, weight=1)

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search transactions…",
        ).grid(row=0, column=0, padx=8, pady=6, sticky="ew")

        ctk.CTkComboBox(
            bar, values=list(_TYPE_LABELS), variable=self._type_var,
            width=140, state="readonly",
            command=lambda _: self._apply_filters(),
        ).grid(row=0, column=1, padx=4)

        cat_names = [_ALL_CATEGORIES] + [c.name for c in self._cat_svc.get_all()]
        ctk.CTkComboBox(
            bar, values=cat_names, variable=self._cat_var,
            width=170, state="readonly",
            command=lambda _: self._apply_filters(),
        ).grid(row=0, column=2, padx=4)

        self._clear_btn = ctk.CTkButton(
            bar, text="Clear Filters", width=100,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._clear_filters,
        )
        self._clear_btn.grid(row=0, column=3, padx=(4, 8))

    def _apply_filters(self):
        cat_name = self._cat_var.get()
        cat = next((c for c in self._cat_svc.get_all() if c.name == cat_name), None)
        self._set_filter(TransactionFilter(
            query=self._search_var.get().strip(),
            category_id=cat.id if cat else "all",
            type=_TYPE_LABELS.get(self._type_var.get(), "all"),
        ))

    def _clear_filters(self):
        self._type_var.set("All Types")
        self._cat_var.set(_ALL_CATEGORIES)
        # Fires the trace, which applies the reset filter
        self._search_var.set("")

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        self._count_label = ctk.CTkLabel(
            hdr, text="", anchor="w", font=ctk.CTkFont(weight="bold"),
        )
        self._count_label.pack(side="left", padx=8, pady=4)

    # ── Scrollable register ──────────────────────────────────────────────────
    def _build_register(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        criteria = self._get_filter()
        self._clear_btn.configure(state="normal" if criteria.is_active else "disabled")

        rows = self._get_visible()
        self._count_label.configure(text=f"Transactions ({len(rows)})")

        if not rows:
            if criteria.is_active:
                title, hint = "No matching transactions", "Try adjusting your filters or search query"
            else:
                title, hint = "No transactions this month", 'Click "Add Transaction" to record your first transaction'
            ctk.CTkLabel(
                self._scroll, text=title, font=ctk.CTkFont(size=14, weight="bold"),
            ).grid(row=0, column=0, pady=(24, 2))
            ctk.CTkLabel(self._scroll, text=hint, text_color="gray60").grid(row=1, column=0)
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} transactions. Use filters or search to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, tx: Transaction):
        cat = self._cat_svc.resolve(tx.category_id)
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=cat.icon or "•", width=36, height=36, corner_radius=18,
            fg_color=cat.color_hex, text_color="white",
        ).grid(row=0, column=0, rowspan=2, padx=(6, 8), pady=4)

        ctk.CTkLabel(
            row, text=cat.name, anchor="w", font=ctk.CTkFont(weight="bold"),
        ).grid(row=0, column=1, sticky="w")
        detail = f"{tx.note or 'No note'}  ·  {format_display_date(tx.date, self._date_format)}"
        ctk.CTkLabel(
            row, text=detail, anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=1, sticky="w")

        ctk.CTkLabel(
            row, text=format_signed(tx.amount, tx.type, self._symbol), width=110, anchor="e",
            text_color=INCOME_COLOR if tx.type == "income" else EXPENSE_COLOR,
        ).grid(row=0, column=2, rowspan=2, padx=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=3, rowspan=2, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._on_edit(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._on_delete(t),
        ).pack(side="left")
