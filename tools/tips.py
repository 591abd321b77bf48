"""Rule-based budget recommendations derived from aggregated metrics."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from models.transaction import Transaction
from tools.aggregates import compute_savings_rate, summarize

TITLE = "# Smart Budget Recommendations"

LOW_SAVINGS_THRESHOLD = Decimal("0.1")
GOOD_SAVINGS_THRESHOLD = Decimal("0.2")
TOP_CATEGORY_COUNT = 3

CATEGORY_ADVICE = {
    "Housing": [
        "Housing should ideally be under 30% of income",
        "Consider negotiating rent or refinancing mortgage",
        "Evaluate if downsizing could benefit your finances",
    ],
    "Food": [
        "Try meal planning to reduce grocery costs",
        "Limit dining out to special occasions",
        "Consider bulk purchases for non-perishables",
    ],
    "Transportation": [
        "Evaluate if public transport could replace car usage",
        "Consider carpooling to reduce fuel costs",
        "Look into fuel rewards programs",
    ],
    "Entertainment": [
        "Look for free or low-cost entertainment options",
        "Review subscription services - keep only what you use regularly",
        "Set a monthly entertainment budget and stick to it",
    ],
    "Shopping": [
        "Implement a 24-hour rule before non-essential purchases",
        "Look for sales and use cashback apps",
        "Consider quality over quantity for lasting value",
    ],
}

GENERIC_ADVICE = [
    "Analyze if expenses in this category align with your priorities",
    "Look for ways to reduce costs without sacrificing quality",
    "Track this category closely for the next month",
]

GENERAL_RECOMMENDATIONS = [
    "Emergency Fund: Aim to save 3-6 months of expenses",
    "Debt Reduction: Prioritize high-interest debt",
    "Automate Savings: Set up automatic transfers on payday",
    "Review Regularly: Check your budget monthly to stay on track",
]


def _percent(value: Decimal) -> Decimal:
    return (value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def savings_banner(
    rate: Optional[Decimal], total_expenses: Decimal
) -> Optional[Tuple[str, str]]:
    """Pick the severity banner for a savings rate.

    Returns:
        (heading, message) or None for the neutral tier. With no income,
        any spending is an alert and no spending gets no banner.
    """
    if rate is None:
        if total_expenses > 0:
            return (
                "## Spending Alert",
                "You have expenses but no recorded income. "
                "Consider reducing expenses immediately.",
            )
        return None

    if rate < 0:
        return (
            "## Spending Alert",
            "You're spending more than you earn. Consider reducing expenses immediately.",
        )
    if rate < LOW_SAVINGS_THRESHOLD:
        return (
            "## Low Savings Rate",
            "Your savings rate is below 10%. "
            "Financial experts recommend saving at least 20% of income.",
        )
    if rate >= GOOD_SAVINGS_THRESHOLD:
        return (
            "## Great Savings Rate",
            f"You're saving {_percent(rate)}% of your income. Keep up the good work!",
        )
    return None


def top_expense_categories(
    spending: Dict[str, Decimal], count: int = TOP_CATEGORY_COUNT
) -> List[Tuple[str, Decimal]]:
    """Largest categories by amount. Equal amounts keep mapping order."""
    return sorted(spending.items(), key=lambda item: item[1], reverse=True)[:count]


def generate_budget_tips(summary: Dict) -> str:
    """Render recommendations for a summary produced by tools.aggregates.summarize."""
    income = summary["total_income"]
    expenses = summary["total_expenses"]
    spending = summary["spending_by_category"]

    lines = [TITLE, ""]

    banner = savings_banner(compute_savings_rate(income, expenses), expenses)
    if banner:
        heading, message = banner
        lines.extend([heading, message, ""])

    lines.extend(["## Category Recommendations", ""])
    for category, amount in top_expense_categories(spending):
        share = amount / expenses if expenses else Decimal("0")
        lines.append(f"### {category} ({_percent(share)}% of expenses)")
        for advice in CATEGORY_ADVICE.get(category, GENERIC_ADVICE):
            lines.append(f"- {advice}")
        lines.append("")

    lines.extend(["## Smart Money Moves", ""])
    for number, recommendation in enumerate(GENERAL_RECOMMENDATIONS, start=1):
        lines.append(f"{number}. {recommendation}")

    return "\n".join(lines) + "\n"


def budget_tips(transactions: Iterable[Transaction]) -> str:
    """Summarize a ledger and render recommendations for it."""
    return generate_budget_tips(summarize(transactions))
