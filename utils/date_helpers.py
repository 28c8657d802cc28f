import calendar
from datetime import date, datetime

from utils.constants import DATE_FORMAT, MONTH_FORMAT

# Accepted when reading stored or imported dates; writing always uses DATE_FORMAT.
_STORAGE_FORMATS = (DATE_FORMAT, "%Y/%m/%d", "%Y.%m.%d")

# Display format key -> strftime pattern
_DISPLAY_FORMATS = {
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
    "MM-DD-YYYY": "%m-%d-%Y",
}
DATE_FORMAT_OPTIONS = list(_DISPLAY_FORMATS)

# English month names, independent of the process locale
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def today() -> date:
    return date.today()


def now_iso() -> str:
    return datetime.now().isoformat()


# ── Stored dates (YYYY-MM-DD) ────────────────────────────────────────────────

def parse_date(value) -> date | None:
    """Calendar date for a stored date string; None for anything else."""
    if not isinstance(value, str) or not value:
        return None
    for fmt in _STORAGE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            pass
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


# ── Months (YYYY-MM) ─────────────────────────────────────────────────────────

def current_month_str() -> str:
    return format_month(today())


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def parse_month(month_str: str) -> date | None:
    """First day of a YYYY-MM month, or None."""
    try:
        return datetime.strptime(month_str, MONTH_FORMAT).date()
    except (TypeError, ValueError):
        return None


def add_months(d: date, n: int) -> date:
    """Shift d by n months. Days past the end of the target month are clamped."""
    year, month_index = divmod(d.year * 12 + d.month - 1 + n, 12)
    last_day = calendar.monthrange(year, month_index + 1)[1]
    return date(year, month_index + 1, min(d.day, last_day))


def shift_month(month_str: str, n: int) -> str:
    d = parse_month(month_str)
    if d is None:
        raise ValueError(f"Invalid month: {month_str}")
    return format_month(add_months(d, n))


def prev_month(month_str: str) -> str:
    return shift_month(month_str, -1)


def next_month(month_str: str) -> str:
    return shift_month(month_str, 1)


def friendly_month(month_str: str) -> str:
    """'2026-02' -> 'February 2026'. Unparseable input is returned as is."""
    d = parse_month(month_str)
    return f"{_MONTH_NAMES[d.month - 1]} {d.year}" if d else month_str


def short_month(d: date) -> str:
    return _MONTH_NAMES[d.month - 1][:3]


# ── Display dates ────────────────────────────────────────────────────────────

def format_display_date(date_str: str, fmt_key: str = "MM/DD/YYYY") -> str:
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_DISPLAY_FORMATS.get(fmt_key, "%m/%d/%Y"))


def parse_display_date(text: str, fmt_key: str) -> date | None:
    """Read a date typed in the user's display format, else as a stored date."""
    if not text:
        return None
    text = text.strip()
    try:
        return datetime.strptime(text, _DISPLAY_FORMATS.get(fmt_key, "%m/%d/%Y")).date()
    except ValueError:
        return parse_date(text)
