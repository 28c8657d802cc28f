import customtkinter as ctk
import tkinter as tk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from utils.constants import BALANCE_COLOR, EXPENSE_COLOR, INCOME_COLOR
from utils.currency import format_currency


class DashboardTab(ctk.CTkFrame):
    """Summary cards, spending-by-category pie and the six-month trend."""

    def __init__(
        self,
        master,
        report_service: ReportService,
        get_visible,      # callable → list[Transaction] (month + filters applied)
        get_ledger_size,  # callable → int
        currency_symbol: str = "₱",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._get_visible = get_visible
        self._get_ledger_size = get_ledger_size
        self._symbol = currency_symbol

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_summary_cards()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=1, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure(0, weight=2)
        charts.grid_columnconfigure(1, weight=3)
        charts.grid_rowconfigure(0, weight=1)

        pie_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        pie_outer.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            pie_outer, text="Spending by Category",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=pie_outer)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 4))
        self._legend_frame = ctk.CTkFrame(pie_outer, fg_color="transparent")
        self._legend_frame.pack(fill="x", padx=8, pady=(0, 8))

        bar_outer = ctk.CTkFrame(charts, fg_color=("gray90", "gray20"), corner_radius=8)
        bar_outer.grid(row=0, column=1, sticky="nsew")
        ctk.CTkLabel(
            bar_outer, text="Monthly Trend (Last 6 Months)",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._bar_fig = Figure(figsize=(5, 3), dpi=80, tight_layout=True)
        self._bar_ax = self._bar_fig.add_subplot(111)
        self._bar_mpl = FigureCanvasTkAgg(self._bar_fig, master=bar_outer)
        self._bar_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 4))
        bar_legend = ctk.CTkFrame(bar_outer, fg_color="transparent")
        bar_legend.pack(pady=(0, 8))
        for label, color in (("Income", INCOME_COLOR), ("Expenses", EXPENSE_COLOR)):
            tk.Label(bar_legend, bg=color, width=2).pack(side="left", padx=(8, 4))
            ctk.CTkLabel(bar_legend, text=label, font=ctk.CTkFont(size=11)).pack(side="left")

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _load(self):
        visible = self._get_visible()

        for w in self._card_frame.winfo_children():
            w.destroy()
        summary = self._report_svc.get_summary(visible)
        for i, (label, value, color) in enumerate([
            ("Income", summary["income"], INCOME_COLOR),
            ("Expenses", summary["expenses"], EXPENSE_COLOR),
            ("Balance", summary["balance"], BALANCE_COLOR),
        ]):
            self._make_card(i, label, value, color)

        breakdown = self._report_svc.get_category_breakdown(visible)
        self.after(50, lambda b=breakdown: self._draw_pie_chart(b))

        for w in self._legend_frame.winfo_children():
            w.destroy()
        for item in self._report_svc.get_legend(visible):
            row = ctk.CTkFrame(self._legend_frame, fg_color="transparent")
            row.pack(fill="x", pady=1)
            tk.Label(row, bg=item["color_hex"], width=2).pack(side="left", padx=(0, 4))
            ctk.CTkLabel(
                row,
                text=f"{item['icon']} {item['name']}: {format_currency(item['value'], self._symbol)}",
                anchor="w", font=ctk.CTkFont(size=11),
            ).pack(side="left")

        self.after(50, self._draw_bar_chart)

    def _make_card(self, col, label, value, color):
        card = ctk.CTkFrame(self._card_frame, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12), text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card,
            text=format_currency(value, self._symbol),
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)

    def _draw_pie_chart(self, breakdown):
        ax = self._pie_ax
        ax.clear()
        self._style_ax(ax, self._pie_fig)

        if not breakdown:
            ax.text(0.5, 0.5, "No expense data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.set_axis_off()
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [d["value"] for d in breakdown],
            colors=[d["color_hex"] for d in breakdown],
            labels=[d["name"] for d in breakdown],
            autopct="%1.0f%%",
            startangle=90,
            textprops={"fontsize": 8},
        )
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()

    def _draw_bar_chart(self):
        ax = self._bar_ax
        ax.clear()
        self._style_ax(ax, self._bar_fig)

        if self._get_ledger_size() == 0:
            ax.text(0.5, 0.5, "No data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._bar_mpl.draw_idle()
            return

        data = self._report_svc.get_monthly_trend()
        labels = [d["month"] for d in data]
        x = list(range(len(labels)))
        w = 0.35
        ax.bar([i - w / 2 for i in x], [d["income"] for d in data], w, color=INCOME_COLOR)
        ax.bar([i + w / 2 for i in x], [d["expenses"] for d in data], w, color=EXPENSE_COLOR)
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.grid(axis="y", linestyle="--", alpha=0.3)
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._bar_mpl.draw_idle()
