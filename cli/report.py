#!/usr/bin/env python3

from tools.aggregates import compute_savings_rate, monthly_summary, summarize, to_cents
from tools.tips import budget_tips
from logger import get_logger

logger = get_logger()


def _log_summary(summary):
    logger.info(f"Total income:   {to_cents(summary['total_income']):>12}")
    logger.info(f"Total expenses: {to_cents(summary['total_expenses']):>12}")
    logger.info(f"Balance:        {to_cents(summary['balance']):>12}")

    rate = compute_savings_rate(summary["total_income"], summary["total_expenses"])
    if rate is None:
        logger.info("Savings rate:   n/a (no income)")
    else:
        logger.info(f"Savings rate:   {rate * 100:>11.1f}%")

    if summary["spending_by_category"]:
        logger.info("\nSpending by category:")
        for category, amount in summary["spending_by_category"].items():
            logger.info(f"  {category:<16} {to_cents(amount):>12}")


def cmd_summary(args, services):
    """Show income, expenses, balance and category breakdown."""
    transactions = services.transactions.load_all()

    if args.monthly:
        for month_key, summary in monthly_summary(transactions).items():
            logger.info(f"\n{month_key}")
            logger.info("=" * 40)
            _log_summary(summary)
        return

    _log_summary(summarize(transactions))


def cmd_tips(args, services):
    """Print budget recommendations for the current ledger."""
    print(budget_tips(services.transactions.load_all()))


def setup_parser(subparsers):
    """Setup report subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "report",
        help="Totals, category breakdown and budget tips",
        description="Derived metrics for the transaction ledger",
    )

    report_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    summary_parser = report_subparsers.add_parser(
        "summary", help="Income, expenses, balance and category breakdown"
    )
    summary_parser.add_argument(
        "--monthly", action="store_true", help="Break the summary down by month"
    )
    summary_parser.set_defaults(func=cmd_summary)

    tips_parser = report_subparsers.add_parser(
        "tips", help="Rule-based budget recommendations"
    )
    tips_parser.set_defaults(func=cmd_tips)
