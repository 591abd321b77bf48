"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal

from models.transaction import Transaction, new_transaction_id


def make_transaction(
    date_str: str,
    amount,
    description: str = "Test",
    category: str = "Other",
    type: str = "expense",
    id: str = None,
) -> Transaction:
    """Build a Transaction directly, bypassing manual-entry validation."""
    return Transaction(
        id=id or new_transaction_id(),
        date=date.fromisoformat(date_str),
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        type=type,
    )


def tuples(transactions):
    """Compare transactions ignoring their ids."""
    return sorted(
        (t.date, t.amount, t.description, t.category, t.type) for t in transactions
    )
