from utils.constants import DEFAULT_CURRENCY_SYMBOL


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format a float as currency string, e.g. '₱1,234.56'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_signed(amount: float, type_: str, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """'+' for income, '-' for expense."""
    sign = "+" if type_ == "income" else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_plain(amount: float) -> str:
    """Plain number for CSV cells: 500 rather than 500.0, 12.5 stays 12.5."""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)
