#!/usr/bin/env python3

import sys
import argparse
from pathlib import Path
from datetime import date
from errors import EmptyImportError, MissingColumnsError
from ingestion import export_filename, generate_csv, parse_full_date
from models.category import CATEGORIES, TRANSACTION_TYPES
from models.transaction import Transaction
from reconciliation import ADDED, import_csv, preview_import
from tools.aggregates import filter_transactions, sort_newest_first, to_cents
from logger import get_logger

logger = get_logger()


def _log_transactions(transactions):
    for t in transactions:
        sign = "+" if t.type == "income" else "-"
        logger.info(
            f"{t.date.isoformat()}  {sign}{to_cents(t.amount):>12}  "
            f"{t.category:<14}  {t.description}  [{t.id}]"
        )


def cmd_add(args, services):
    """Record a transaction entered by hand."""
    try:
        transaction_date = parse_full_date(args.date)
    except ValueError as e:
        logger.error(f"Invalid date: {e}")
        sys.exit(1)

    try:
        transaction = Transaction.create(
            transaction_date,
            args.amount,
            args.description,
            args.category,
            args.type,
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    services.transactions.create(transaction)

    logger.info(f"✓ Transaction recorded with ID: {transaction.id}")
    logger.info(f"  {transaction.description}: {to_cents(transaction.amount)}")
    logger.info(f"  Category: {transaction.category}, Type: {transaction.type}")


def cmd_list(args, services):
    """List transactions, newest first, with optional filters."""
    transactions = filter_transactions(
        services.transactions.load_all(),
        category=args.category,
        type=args.type,
        query=args.search,
    )

    if not transactions:
        logger.info("No transactions found.")
        return

    _log_transactions(sort_newest_first(transactions))
    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    transaction = services.transactions.find(args.transaction_id)
    if transaction is None:
        logger.error(f"Transaction with ID '{args.transaction_id}' not found.")
        sys.exit(1)

    services.transactions.delete(transaction.id)
    logger.info(f"✓ Deleted transaction {transaction.id}")
    logger.info(
        f"  {transaction.date.isoformat()}  {transaction.description}: "
        f"{to_cents(transaction.amount)}"
    )


def cmd_import(args, services):
    """Import transactions from a CSV file, skipping duplicates.

    Args:
        args: Parsed command-line arguments with csv_file and preview flag
        services: Services container with the transactions service
    """
    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    with open(csv_path, "r", encoding="utf-8-sig") as f:
        text = f.read()

    try:
        if args.preview:
            result = preview_import(text)
        else:
            result = import_csv(text, services.transactions.load_all())
    except (MissingColumnsError, EmptyImportError) as e:
        logger.error(str(e))
        sys.exit(1)

    if result.skipped_rows:
        logger.warning(f"Skipped {result.skipped_rows} malformed row(s)")

    if args.preview:
        logger.info(f"Preview: {result.count} transaction(s) would be imported")
        _log_transactions(result.transactions)
        return

    if result.kind == ADDED:
        services.transactions.save_all(result.ledger)
        logger.info(f"✓ Successfully imported {result.count} new transaction(s)")
    else:
        logger.info("No new transactions to import (all rows are duplicates).")


def cmd_export(args, services):
    """Export the ledger to CSV, newest first."""
    transactions = sort_newest_first(services.transactions.load_all())

    if not transactions:
        logger.info("No transactions to export.")
        return

    if args.output:
        output_path = Path(args.output)
    else:
        config = services.config
        output_path = config.export_dir / export_filename(
            config.product_name, date.today()
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(generate_csv(transactions))

    logger.info(f"✓ Exported {len(transactions)} transaction(s) to: {output_path}")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record, list, import and export transactions",
        description="Manage the transaction ledger",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add", help="Record a new transaction"
    )
    add_parser.add_argument("--date", required=True, help="Transaction date, e.g. 2024-01-31")
    add_parser.add_argument("--amount", required=True, help="Positive amount, e.g. 12.50")
    add_parser.add_argument("--description", required=True, help="Free text description")
    add_parser.add_argument(
        "--category",
        default="Other",
        help=f"One of: {', '.join(CATEGORIES)} (unknown values become Other)",
    )
    add_parser.add_argument("--type", required=True, choices=TRANSACTION_TYPES)
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List transactions, newest first"
    )
    list_parser.add_argument("--category", help="Only this category")
    list_parser.add_argument("--type", choices=TRANSACTION_TYPES, help="Only this type")
    list_parser.add_argument(
        "--search", help="Case-insensitive match on description or category"
    )
    list_parser.set_defaults(func=cmd_list)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction"
    )
    delete_parser.add_argument("transaction_id", help="Transaction ID")
    delete_parser.set_defaults(func=cmd_delete)

    # transactions import
    import_parser = transactions_subparsers.add_parser(
        "import",
        help="Import transactions from a CSV file",
        epilog="""
CSV format:
  date,amount,description,category,type
  2024-02-01,50,Lunch,Food,expense

Rows matching an existing transaction on date, description and amount are skipped.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    import_parser.add_argument("csv_file", help="Path to the CSV file to import")
    import_parser.add_argument(
        "--preview",
        action="store_true",
        help="Parse and show the transactions without saving anything",
    )
    import_parser.set_defaults(func=cmd_import)

    # transactions export
    export_parser = transactions_subparsers.add_parser(
        "export", help="Export all transactions to CSV"
    )
    export_parser.add_argument(
        "--output",
        help="Output CSV path (default: <export_dir>/<product>_transactions_<date>.csv)",
    )
    export_parser.set_defaults(func=cmd_export)
