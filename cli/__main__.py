#!/usr/bin/env python3
"""
Budget Buddy CLI - Unified command-line interface for the personal finance ledger.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Record, list, import and export transactions
    budget       Manage monthly budget targets
    report       Totals, category breakdown and budget tips
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli transactions add --date 2024-01-02 --amount 12.50 --description Lunch --category Food --type expense
    python -m cli transactions import statement.csv --preview
    python -m cli transactions export
    python -m cli report tips
"""

import sys
import argparse
from cli import transactions, budget, report, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Budget Buddy - Personal finance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    transactions.setup_parser(subparsers)
    budget.setup_parser(subparsers)
    report.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
