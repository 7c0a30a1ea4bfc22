"""Shared constants for transactions, categories and query validation."""

INCOME = "INCOME"
EXPENSE = "EXPENSE"

TRANSACTION_TYPE_CHOICES = [
    (INCOME, "Income"),
    (EXPENSE, "Expense"),
]

TRANSACTION_TYPE_LABELS = dict(TRANSACTION_TYPE_CHOICES)

COMMON_CATEGORIES = {
    INCOME: [
        "Salary",
        "Freelance",
        "Investment",
        "Bonus",
        "Gift",
        "Other Income",
    ],
    EXPENSE: [
        "Food & Dining",
        "Transportation",
        "Housing",
        "Utilities",
        "Healthcare",
        "Entertainment",
        "Shopping",
        "Education",
        "Travel",
        "Other Expense",
    ],
}

# Form validation limits
DESCRIPTION_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 100
NOTES_MAX_LENGTH = 500

# Paginated list queries
SORT_FIELDS = ["transactionDate", "description", "type", "amount", "category"]
SORT_DIRECTIONS = ["asc", "desc"]
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_FIELD = "transactionDate"
DEFAULT_SORT_DIRECTION = "desc"

DEFAULT_CATEGORY_COLOR = "#6B7280"
DEFAULT_CURRENCY = "USD"
