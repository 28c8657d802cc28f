import customtkinter as ctk

from utils.constants import ERROR_COLOR


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no question. Blocks until closed; answer in .result."""

    def __init__(
        self,
        master,
        title: str,
        message: str,
        confirm_text: str = "Confirm",
        destructive: bool = True,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close(False),
        ).pack(side="left", padx=(0, 8))

        confirm_colors = {"fg_color": ERROR_COLOR, "hover_color": "#D32F2F"} if destructive else {}
        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            command=lambda: self._close(True),
            **confirm_colors,
        ).pack(side="left")

        self.bind("<Escape>", lambda _e: self._close(False))
        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_width(), self.winfo_height()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

    def _close(self, result: bool):
        self.result = result
        self.destroy()
