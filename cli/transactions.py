#!/usr/bin/env python3

import sys
import csv
from datetime import date
from pathlib import Path
from errors import NotFoundError, StoreError, ValidationError
from logger import get_logger
from models.category import BANKS, EXPENSE_CATEGORIES, INCOME_CATEGORIES
from tools.transactions import record_transaction, summarize_amounts

logger = get_logger()


def parse_month(value):
    """Parse a YYYY/MM string into (year, month).

    Args:
        value: Month string, or None for the current month.

    Returns:
        Tuple of (year, month).

    Raises:
        ValueError: If the string is malformed or the month is out of range.
    """
    if not value:
        today = date.today()
        return today.year, today.month

    year, month = value.split("/")
    year = int(year)
    month = int(month)
    if month < 1 or month > 12:
        raise ValueError("Month must be between 1 and 12")
    return year, month


def _paid_flag(args):
    if getattr(args, "paid", False):
        return True
    if getattr(args, "unpaid", False):
        return False
    return None


def _log_transaction(t):
    status = {True: "paid", False: "unpaid", None: "auto"}[t.paid]
    bank = f" [{t.bank}]" if t.bank else ""
    sign = "+" if t.type == "income" else "-"
    logger.info(
        f"{t.date.isoformat()}  {sign}{t.amount:>10}  {t.category:<12} "
        f"{t.description}{bank}  ({status})  {t.id}"
    )


def cmd_add(args, services):
    """Record a transaction, expanding installments or recurrences.

    Args:
        args: Parsed command-line arguments
        services: Services container with transactions service
    """
    intent = {
        "description": args.description,
        "amount": args.amount,
        "type": args.type,
        "category": args.category,
        "bank": args.bank,
        "date": args.date or date.today().isoformat(),
        "paid": _paid_flag(args),
        "frequency": args.frequency,
        "installments": args.installments,
    }

    try:
        stored = record_transaction(services, services.config.user_id, intent)
    except ValidationError as e:
        logger.error(f"Invalid transaction: {e}")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not save transaction, nothing was recorded: {e}")
        sys.exit(1)

    logger.info(f"✓ Recorded {len(stored)} transaction(s)")
    for t in stored:
        _log_transaction(t)
    if len(stored) > 1:
        logger.info(f"  Total scheduled: {summarize_amounts(stored)}")


def cmd_list(args, services):
    """List transactions, optionally restricted to one month."""
    user_id = services.config.user_id
    try:
        if args.month:
            year, month = parse_month(args.month)
            transactions = services.transactions.find_by_month(user_id, year, month)
        else:
            transactions = services.transactions.find_all(user_id)
    except ValueError as e:
        logger.error(f"Invalid month: {e}")
        sys.exit(1)

    if not transactions:
        logger.info("No transactions found.")
        return

    for t in transactions:
        _log_transaction(t)
    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_update(args, services):
    """Edit fields of an existing transaction."""
    fields = {
        name: value
        for name, value in (
            ("description", args.description),
            ("amount", args.amount),
            ("type", args.type),
            ("category", args.category),
            ("bank", args.bank),
            ("date", args.date),
        )
        if value is not None
    }
    if args.clear_bank:
        fields["bank"] = None

    try:
        updated = services.transactions.update(
            services.config.user_id, args.transaction_id, fields
        )
    except NotFoundError:
        logger.error(f"Transaction '{args.transaction_id}' not found. It may have been removed.")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Invalid update: {e}")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not update transaction, try again: {e}")
        sys.exit(1)

    logger.info("✓ Transaction updated")
    _log_transaction(updated)


def cmd_mark_paid(args, services):
    """Set or clear the paid flag of a transaction."""
    try:
        updated = services.transactions.set_paid(
            services.config.user_id, args.transaction_id, not args.unpaid
        )
    except NotFoundError:
        logger.error(f"Transaction '{args.transaction_id}' not found. It may have been removed.")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not update transaction, try again: {e}")
        sys.exit(1)

    logger.info(f"✓ Transaction marked {'paid' if updated.paid else 'unpaid'}")
    _log_transaction(updated)


def cmd_delete(args, services):
    """Delete a transaction."""
    try:
        services.transactions.delete(services.config.user_id, args.transaction_id)
    except NotFoundError:
        logger.error(f"Transaction '{args.transaction_id}' was already removed.")
        sys.exit(1)
    except StoreError as e:
        logger.error(f"Could not delete transaction, try again: {e}")
        sys.exit(1)

    logger.info("✓ Transaction deleted")


def cmd_export(args, services):
    """Export transactions to CSV.

    Args:
        args: Parsed command-line arguments
        services: Services container with transactions service
    """
    user_id = services.config.user_id
    try:
        if args.month:
            year, month = parse_month(args.month)
            logger.info(f"Exporting transactions for {year}/{month:02d}")
            transactions = services.transactions.find_by_month(user_id, year, month)
        else:
            transactions = services.transactions.find_all(user_id)
    except ValueError as e:
        logger.error(f"Invalid month: {e}")
        logger.error("Use YYYY/MM format for --month")
        sys.exit(1)

    if not transactions:
        logger.info("No transactions found for the specified criteria.")
        sys.exit(0)

    try:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(
                ["id", "date", "description", "amount", "type", "category", "bank", "paid"]
            )
            for t in transactions:
                writer.writerow(
                    [
                        t.id,
                        t.date.isoformat(),
                        t.description,
                        str(t.amount),
                        t.type,
                        t.category,
                        t.bank or "",
                        "" if t.paid is None else str(t.paid).lower(),
                    ]
                )

        logger.info(f"✓ Exported {len(transactions)} transaction(s) to: {output_path}")

    except OSError as e:
        logger.error(f"Error exporting transactions: {e}")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and manage transactions",
        description="Record, edit, list and export transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    categories = sorted(set(EXPENSE_CATEGORIES) | set(INCOME_CATEGORIES))

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add",
        help="Record a new transaction",
        epilog="""
Examples:
  python -m cli transactions add --type income --description Salary --amount 5000 --category salary --bank Nubank
  python -m cli transactions add --type expense --description Rent --amount 1500 --category housing --frequency monthly
  python -m cli transactions add --type expense --description Phone --amount 250 --category shopping --frequency installment --installments 12
        """,
    )
    add_parser.add_argument("--type", required=True, choices=["income", "expense"])
    add_parser.add_argument("--description", required=True)
    add_parser.add_argument("--amount", required=True, help="Positive amount, e.g. 120.50")
    add_parser.add_argument("--category", required=True, choices=categories)
    add_parser.add_argument("--bank", choices=BANKS)
    add_parser.add_argument("--date", help="Date in YYYY-MM-DD format (default: today)")
    paid_group = add_parser.add_mutually_exclusive_group()
    paid_group.add_argument("--paid", action="store_true", help="Mark as paid")
    paid_group.add_argument("--unpaid", action="store_true", help="Mark as not paid yet")
    add_parser.add_argument(
        "--frequency",
        choices=["single", "monthly", "installment"],
        default="single",
        help="single (default), monthly (12 occurrences) or installment",
    )
    add_parser.add_argument(
        "--installments", type=int, help="Number of installments (2-48)"
    )
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser("list", help="List transactions")
    list_parser.add_argument("--month", help="Month in YYYY/MM format")
    list_parser.set_defaults(func=cmd_list)

    # transactions update
    update_parser = transactions_subparsers.add_parser(
        "update", help="Edit an existing transaction"
    )
    update_parser.add_argument("transaction_id")
    update_parser.add_argument("--type", choices=["income", "expense"])
    update_parser.add_argument("--description")
    update_parser.add_argument("--amount")
    update_parser.add_argument("--category", choices=categories)
    update_parser.add_argument("--bank", choices=BANKS)
    update_parser.add_argument("--clear-bank", action="store_true", help="Remove the bank")
    update_parser.add_argument("--date", help="Date in YYYY-MM-DD format")
    update_parser.set_defaults(func=cmd_update)

    # transactions mark-paid
    mark_paid_parser = transactions_subparsers.add_parser(
        "mark-paid", help="Mark a transaction as paid (or unpaid)"
    )
    mark_paid_parser.add_argument("transaction_id")
    mark_paid_parser.add_argument("--unpaid", action="store_true", help="Mark as unpaid instead")
    mark_paid_parser.set_defaults(func=cmd_mark_paid)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction"
    )
    delete_parser.add_argument("transaction_id")
    delete_parser.set_defaults(func=cmd_delete)

    # transactions export
    export_parser = transactions_subparsers.add_parser(
        "export",
        help="Export transactions to CSV",
        epilog="""
Examples:
  python -m cli transactions export --month 2025/10 --output transactions.csv
  python -m cli transactions export --output all.csv
        """,
    )
    export_parser.add_argument("--month", help="Month to export in YYYY/MM format")
    export_parser.add_argument("--output", required=True, help="Output CSV file path")
    export_parser.set_defaults(func=cmd_export)
