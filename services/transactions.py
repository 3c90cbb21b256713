"""Transaction service for database operations."""

import calendar
import uuid
from datetime import date
from typing import List, Optional
from errors import NotFoundError, ValidationError
from models.transaction import Transaction, from_cents, to_cents

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """id, description, amount_cents, transaction_type, category,
       bank, transaction_date, paid"""

_TRANSACTION_INSERT_FIELDS = """id, user_id, description, amount_cents, transaction_type,
    category, bank, transaction_date, paid"""

# Automatically generate placeholders from field count
_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_INSERT_FIELDS.split(',')))})"
)

# Transaction attributes a caller may change after creation
UPDATABLE_FIELDS = {"description", "amount", "type", "category", "bank", "date", "paid"}


def new_transaction_id() -> str:
    """Generate an opaque transaction ID."""
    return uuid.uuid4().hex


def apply_update(existing: Transaction, fields: dict) -> Transaction:
    """Merge a partial update into a transaction and validate the result.

    Args:
        existing: The stored transaction.
        fields: Mapping of attribute name to new value.

    Returns:
        A new Transaction with the changes applied.

    Raises:
        ValidationError: If fields is empty, names unsupported attributes, or
            the merged record violates an invariant.
    """
    if not fields:
        raise ValidationError("fields cannot be empty")

    invalid_fields = set(fields) - UPDATABLE_FIELDS
    if invalid_fields:
        raise ValidationError(f"Unsupported field names: {sorted(invalid_fields)}")

    return existing.with_changes(**fields).validate()


def _paid_to_db(paid: Optional[bool]) -> Optional[int]:
    return None if paid is None else int(paid)


class TransactionService:
    """Service for managing transactions in SQLite."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, user_id: str, transaction: Transaction) -> Transaction:
        """Create a single transaction.

        Args:
            user_id: Owner of the transaction.
            transaction: Transaction to insert (its id is ignored).

        Returns:
            The stored Transaction with its assigned ID.

        Raises:
            ValidationError: If the transaction is invalid.
            StoreError: If the insert fails.
        """
        return self.bulk_create(user_id, [transaction])[0]

    def bulk_create(
        self, user_id: str, transactions: List[Transaction]
    ) -> List[Transaction]:
        """Create multiple transactions in a single database transaction.

        All records are validated before anything is written, so either all
        of them are inserted or none is.

        Args:
            user_id: Owner of the transactions.
            transactions: Transactions to insert, in generation order.

        Returns:
            The stored transactions with assigned IDs, in the same order.

        Raises:
            ValidationError: If any transaction is invalid.
            StoreError: If the insert fails. All inserts are rolled back.
        """
        if not transactions:
            return []

        for t in transactions:
            t.validate()

        stored = [t.with_changes(id=new_transaction_id()) for t in transactions]

        with self.db_manager.connect() as conn:
            data = [
                (
                    t.id,
                    user_id,
                    t.description,
                    to_cents(t.amount),
                    t.type,
                    t.category,
                    t.bank,
                    t.date.isoformat(),
                    _paid_to_db(t.paid),
                )
                for t in stored
            ]

            conn.executemany(
                f"""
                INSERT INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                data,
            )
            conn.commit()

        return stored

    def update(self, user_id: str, transaction_id: str, fields: dict) -> Transaction:
        """Update fields of a single transaction.

        Args:
            user_id: Owner of the transaction.
            transaction_id: ID of the transaction to update.
            fields: Mapping of attribute name to new value. Supported names:
                    'description', 'amount', 'type', 'category', 'bank', 'date', 'paid'

        Returns:
            The updated Transaction.

        Raises:
            ValidationError: If the fields are unsupported or the result is invalid.
            NotFoundError: If the transaction does not exist for this user.
            StoreError: If the update fails.
        """
        existing = self.find(user_id, transaction_id)
        if existing is None:
            raise NotFoundError(f"Transaction with ID {transaction_id} not found")

        updated = apply_update(existing, fields)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE transactions
                SET description = ?, amount_cents = ?, transaction_type = ?,
                    category = ?, bank = ?, transaction_date = ?, paid = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    updated.description,
                    to_cents(updated.amount),
                    updated.type,
                    updated.category,
                    updated.bank,
                    updated.date.isoformat(),
                    _paid_to_db(updated.paid),
                    transaction_id,
                    user_id,
                ),
            )
            conn.commit()

            # Removed between the read and the write
            if cursor.rowcount == 0:
                raise NotFoundError(f"Transaction with ID {transaction_id} not found")

        return updated

    def set_paid(self, user_id: str, transaction_id: str, paid: bool) -> Transaction:
        """Set the explicit paid flag of a transaction."""
        return self.update(user_id, transaction_id, {"paid": paid})

    def delete(self, user_id: str, transaction_id: str) -> bool:
        """Delete a transaction by ID.

        Returns:
            True once the transaction is deleted.

        Raises:
            NotFoundError: If the transaction does not exist for this user.
            StoreError: If the delete fails.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE id = ? AND user_id = ?",
                (transaction_id, user_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError(f"Transaction with ID {transaction_id} not found")
            return True

    def find_all(self, user_id: str) -> List[Transaction]:
        """Get all transactions for a user.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE user_id = ?
                ORDER BY transaction_date DESC, id
                """,
                (user_id,),
            )
            rows = cursor.fetchall()

            return [self._row_to_transaction(row) for row in rows]

    def find(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found for this user, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE id = ? AND user_id = ?
                """,
                (transaction_id, user_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_by_month(self, user_id: str, year: int, month: int) -> List[Transaction]:
        """Get a user's transactions dated within a calendar month.

        Args:
            user_id: Owner of the transactions.
            year: Year (e.g., 2025).
            month: Month (1-12).

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        last_day = calendar.monthrange(year, month)[1]
        start_date = date(year, month, 1).isoformat()
        end_date = date(year, month, last_day).isoformat()

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE user_id = ?
                  AND transaction_date >= ? AND transaction_date <= ?
                ORDER BY transaction_date DESC, id
                """,
                (user_id, start_date, end_date),
            )
            rows = cursor.fetchall()

            return [self._row_to_transaction(row) for row in rows]

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            description=row[1],
            amount=from_cents(row[2]),
            type=row[3],
            category=row[4],
            bank=row[5],
            date=date.fromisoformat(row[6]),
            paid=None if row[7] is None else bool(row[7]),
        )
