APP_NAME = "Monivera"
APP_WIDTH = 1200
APP_HEIGHT = 780
DB_FILE = "monivera.db"
LOG_FILE = "monivera.log"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# Key-value storage keys
TRANSACTIONS_KEY = "transactions"
CATEGORIES_KEY = "categories"

TRANSACTION_TYPES = ["expense", "income"]
UNDO_TIMEOUT_SECONDS = 5
LEGEND_LIMIT = 5
TREND_MONTHS = 6
DEFAULT_CURRENCY_SYMBOL = "₱"

# Legacy stored categories carry no type; their names decide the bucket once.
LEGACY_INCOME_PATTERN = r"salary|income"

DEFAULT_CATEGORIES = [
    {"id": "1", "name": "Food & Dining",     "type": "expense", "color_hex": "#EF4444", "icon": "🍽"},
    {"id": "2", "name": "Transportation",    "type": "expense", "color_hex": "#2D7FF9", "icon": "🚗"},
    {"id": "3", "name": "Shopping",          "type": "expense", "color_hex": "#F59E0B", "icon": "🛍"},
    {"id": "4", "name": "Entertainment",     "type": "expense", "color_hex": "#8B5CF6", "icon": "🎬"},
    {"id": "5", "name": "Bills & Utilities", "type": "expense", "color_hex": "#10B981", "icon": "💡"},
    {"id": "6", "name": "Salary",            "type": "income",  "color_hex": "#06B6D4", "icon": "💼"},
    {"id": "7", "name": "Other Income",      "type": "income",  "color_hex": "#84CC16", "icon": "💵"},
]

UNKNOWN_CATEGORY = {"id": "", "name": "Unknown", "type": "expense", "color_hex": "#999999", "icon": "❔"}

INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"
BALANCE_COLOR = "#2D7FF9"
ERROR_COLOR = "#F44336"
INFO_COLOR = "#2196F3"

SAMPLE_NOTES = [
    "Grocery shopping", "Lunch out", "Monthly salary", "Gas refill", "Online purchase",
    "Utilities bill", "Cinema night", "Coffee", "Clothes", "Freelance payment",
]
