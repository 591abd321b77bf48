"""Fixed category and type enumerations for transactions.

Ingestion is lenient: an unknown category becomes "Other" and an unknown
type is inferred from the sign of the raw amount. Neither rejects a row.
"""

from decimal import Decimal

CATEGORIES = (
    "Housing",
    "Food",
    "Transportation",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Utilities",
    "Income",
    "Other",
)

FALLBACK_CATEGORY = "Other"

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)


def is_valid_category(category: str) -> bool:
    """Check a category name against the enumeration (case-sensitive)."""
    return category in CATEGORIES


def coerce_category(category: str) -> str:
    """Return the category if valid, otherwise the fallback "Other"."""
    if is_valid_category(category):
        return category
    return FALLBACK_CATEGORY


def resolve_type(raw_type: str, signed_amount: Decimal) -> str:
    """Resolve a transaction type from its raw value.

    The raw value is lower-cased; "income" and "expense" are accepted as-is.
    Anything else (including empty) falls back to the sign of the amount:
    negative means expense, zero or positive means income.
    """
    value = (raw_type or "").strip().lower()
    if value in TRANSACTION_TYPES:
        return value
    return EXPENSE if signed_amount < 0 else INCOME
