#!/usr/bin/env python3
"""
FinFlow CLI - Unified command-line interface for tracking personal finances.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Record and manage transactions
    report       Monthly summaries, bank balances and insights
    savings      Savings goal
    wishlist     Planned purchases
    migrate      Database migrations

Examples:
    python -m cli transactions add --type expense --description "Groceries" --amount 120.50 --category food
    python -m cli transactions add --type expense --description "Laptop" --amount 300 --category shopping --frequency installment --installments 10
    python -m cli report summary --month 2025/10
    python -m cli report insights
    python -m cli migrate apply
"""

import sys
import argparse
from cli import transactions, report, savings, wishlist, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="FinFlow - Personal finance tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    transactions.setup_parser(subparsers)
    report.setup_parser(subparsers)
    savings.setup_parser(subparsers)
    wishlist.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()

            setup_logging(config)

            # Commands that use db_manager directly: migrate
            if args.command == "migrate":
                db_manager = DatabaseManager(config)
                args.func(args, db_manager)
            else:
                services = Services(config)
                args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
