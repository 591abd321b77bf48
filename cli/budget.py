#!/usr/bin/env python3

import sys
from decimal import Decimal, InvalidOperation
from errors import InvalidAmountError
from models.category import CATEGORIES
from tools.aggregates import compare_to_budget, to_cents
from logger import get_logger

logger = get_logger()


def _parse_budget_amount(raw: str) -> Decimal:
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation:
        raise InvalidAmountError(raw)
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(raw)
    return amount


def cmd_set(args, services):
    """Set the monthly budget for a category."""
    if args.category not in CATEGORIES:
        logger.error(f"Invalid category '{args.category}'.")
        logger.error(f"Must be one of: {', '.join(CATEGORIES)}")
        sys.exit(1)

    try:
        amount = _parse_budget_amount(args.amount)
    except InvalidAmountError as e:
        logger.error(str(e))
        sys.exit(1)

    budget = services.budgets.load()
    budget.set_amount(args.category, amount)
    services.budgets.save(budget)

    logger.info(f"✓ Budget for {args.category} set to {to_cents(amount)}")


def cmd_remove(args, services):
    """Remove the budget entry for a category."""
    budget = services.budgets.load()
    if not budget.remove(args.category):
        logger.error(f"No budget set for '{args.category}'.")
        sys.exit(1)

    services.budgets.save(budget)
    logger.info(f"✓ Removed budget for {args.category}")


def cmd_show(args, services):
    """Show the budget targets."""
    budget = services.budgets.load()

    if not budget.items:
        logger.info("No budget set.")
        return

    logger.info("\nBudget:")
    logger.info("=" * 40)
    for item in budget.items:
        logger.info(f"{item.category:<16} {to_cents(item.amount):>12}")
    logger.info("-" * 40)
    logger.info(f"{'Total':<16} {to_cents(budget.total):>12}")


def cmd_compare(args, services):
    """Compare the budget against actual spending."""
    budget = services.budgets.load()
    comparison = compare_to_budget(budget, services.transactions.load_all())

    if not comparison:
        logger.info("No budget and no expenses to compare.")
        return

    logger.info(f"\n{'Category':<16} {'Budgeted':>12} {'Spent':>12} {'Remaining':>12}")
    logger.info("=" * 56)
    for category, row in comparison.items():
        flag = "  OVER" if row["over"] else ""
        logger.info(
            f"{category:<16} {to_cents(row['budgeted']):>12} "
            f"{to_cents(row['spent']):>12} {to_cents(row['remaining']):>12}{flag}"
        )


def setup_parser(subparsers):
    """Setup budget subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budget",
        help="Manage monthly budget targets",
        description="Set, show and compare per-category monthly budgets",
    )

    budget_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available budget commands",
        dest="subcommand",
        required=True,
    )

    set_parser = budget_subparsers.add_parser(
        "set", help="Set the monthly budget for a category"
    )
    set_parser.add_argument("category", help=f"One of: {', '.join(CATEGORIES)}")
    set_parser.add_argument("amount", help="Monthly target amount")
    set_parser.set_defaults(func=cmd_set)

    remove_parser = budget_subparsers.add_parser(
        "remove", help="Remove the budget for a category"
    )
    remove_parser.add_argument("category")
    remove_parser.set_defaults(func=cmd_remove)

    show_parser = budget_subparsers.add_parser("show", help="Show budget targets")
    show_parser.set_defaults(func=cmd_show)

    compare_parser = budget_subparsers.add_parser(
        "compare", help="Compare budget against actual spending"
    )
    compare_parser.set_defaults(func=cmd_compare)
