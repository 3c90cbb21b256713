"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    migration_files = sorted(migrations_dir.glob("*.sql"))

    for migration_file in migration_files:
        with open(migration_file, "r") as f:
            sql = f.read()

        conn.executescript(sql)

    conn.commit()


def make_transaction(
    amount="100.00",
    type="expense",
    category=None,
    on=date(2024, 1, 15),
    description="Test",
    bank=None,
    paid=None,
    id=None,
) -> Transaction:
    """Build a Transaction with sensible defaults for tests."""
    if category is None:
        category = "salary" if type == "income" else "food"
    return Transaction(
        id=id,
        description=description,
        amount=Decimal(amount),
        type=type,
        category=category,
        date=on,
        bank=bank,
        paid=paid,
    )
