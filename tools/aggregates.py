"""Transaction aggregation: totals, balance and category breakdowns.

All functions are pure and accept any iterable of transactions. An empty
ledger yields zero totals and an empty breakdown; nothing here raises for
degenerate input.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from models.budget import Budget
from models.category import EXPENSE, INCOME
from models.transaction import Transaction

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a monetary value to two decimal places."""
    return Decimal(value).quantize(CENT)


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of amounts over income transactions."""
    return sum((t.amount for t in transactions if t.type == INCOME), ZERO)


def total_expenses(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of amounts over expense transactions."""
    return sum((t.amount for t in transactions if t.type == EXPENSE), ZERO)


def balance(transactions: Iterable[Transaction]) -> Decimal:
    """Income minus expenses. May be negative."""
    transactions = list(transactions)
    return total_income(transactions) - total_expenses(transactions)


def spending_by_category(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Map category name to summed expense amount.

    Income transactions are excluded regardless of their category label, and
    categories without expenses are absent rather than zero. Keys appear in
    the order their first expense was seen.
    """
    breakdown: Dict[str, Decimal] = {}
    for t in transactions:
        if t.type != EXPENSE:
            continue
        breakdown[t.category] = breakdown.get(t.category, ZERO) + t.amount
    return breakdown


def compute_savings_rate(
    income: Decimal, expenses: Decimal
) -> Optional[Decimal]:
    """(income - expenses) / income, or None when income is zero."""
    if income == 0:
        return None
    return (income - expenses) / income


def savings_rate(transactions: Iterable[Transaction]) -> Optional[Decimal]:
    """Fraction of income not spent, or None when there is no income."""
    transactions = list(transactions)
    return compute_savings_rate(
        total_income(transactions), total_expenses(transactions)
    )


def summarize(transactions: Iterable[Transaction]) -> Dict:
    """Compute all headline metrics in one pass over the ledger.

    Returns:
        Dictionary with:
        - "total_income": Decimal
        - "total_expenses": Decimal
        - "balance": Decimal (income - expenses)
        - "spending_by_category": Dict[str, Decimal]
    """
    income = ZERO
    expenses = ZERO
    by_category: Dict[str, Decimal] = {}

    for t in transactions:
        if t.type == INCOME:
            income += t.amount
        elif t.type == EXPENSE:
            expenses += t.amount
            by_category[t.category] = by_category.get(t.category, ZERO) + t.amount

    return {
        "total_income": income,
        "total_expenses": expenses,
        "balance": income - expenses,
        "spending_by_category": by_category,
    }


def monthly_summary(transactions: Iterable[Transaction]) -> Dict[str, Dict]:
    """Summaries keyed by month ("YYYY/MM"), oldest month first.

    Example:
        {
            "2024/01": {
                "total_income": Decimal("1000"),
                "total_expenses": Decimal("200"),
                "balance": Decimal("800"),
                "spending_by_category": {"Food": Decimal("200")},
            },
        }
    """
    by_month: Dict[str, List[Transaction]] = {}
    for t in transactions:
        month_key = f"{t.date.year:04d}/{t.date.month:02d}"
        by_month.setdefault(month_key, []).append(t)

    return {key: summarize(by_month[key]) for key in sorted(by_month)}


def compare_to_budget(
    budget: Budget, transactions: Iterable[Transaction]
) -> Dict[str, Dict]:
    """Compare budgeted amounts against actual spending per category.

    Budgeted categories come first in budget order, followed by categories
    with spending but no budget entry (budgeted as zero).

    Returns:
        Category -> {"budgeted", "spent", "remaining", "over"}, where
        remaining = budgeted - spent (negative when over budget).
    """
    spent = spending_by_category(transactions)
    targets = budget.as_mapping()

    categories = list(targets)
    categories.extend(c for c in spent if c not in targets)

    comparison = {}
    for category in categories:
        budgeted = targets.get(category, ZERO)
        actual = spent.get(category, ZERO)
        comparison[category] = {
            "budgeted": budgeted,
            "spent": actual,
            "remaining": budgeted - actual,
            "over": actual > budgeted,
        }
    return comparison


def sort_newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Display order: newest date first, stable for equal dates."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def filter_transactions(
    transactions: Iterable[Transaction],
    *,
    category: Optional[str] = None,
    type: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Transaction]:
    """Filter by exact category, exact type and a free-text query.

    A filter of None or "all" is ignored. The query matches case-insensitively
    against description and category.
    """
    result = list(transactions)

    if category and category != "all":
        result = [t for t in result if t.category == category]

    if type and type != "all":
        result = [t for t in result if t.type == type]

    if query:
        needle = query.lower()
        result = [
            t
            for t in result
            if needle in t.description.lower() or needle in t.category.lower()
        ]

    return result
