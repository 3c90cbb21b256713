"""Local JSON-file transaction store.

Drop-in replacement for TransactionService that keeps every user's
transactions in a single JSON document on disk instead of SQLite.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional
from errors import NotFoundError, StoreError
from logger import get_logger
from models.transaction import Transaction
from services.transactions import apply_update, new_transaction_id

logger = get_logger()


def _sort_newest_first(transactions: List[Transaction]) -> List[Transaction]:
    # Date descending, ties by id, same as the SQLite store
    by_id = sorted(transactions, key=lambda t: t.id)
    return sorted(by_id, key=lambda t: t.date, reverse=True)


class LocalTransactionService:
    """Service for managing transactions in a local JSON file.

    The document layout is {"users": {user_id: [transaction, ...]}}.

    Args:
        path: Location of the JSON document. Created on first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, List[dict]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read local store {self.path}: {e}")
            raise StoreError(f"Could not read local store: {e}") from e
        return document.get("users", {})

    def _save(self, users: Dict[str, List[dict]]) -> None:
        # Write to a sibling file and swap it in so a failed write leaves the
        # previous document intact
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump({"users": users}, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Could not write local store {self.path}: {e}")
            raise StoreError(f"Could not write local store: {e}") from e

    def _user_records(self, user_id: str) -> List[Transaction]:
        users = self._load()
        return [Transaction.from_dict(data) for data in users.get(user_id, [])]

    def _replace_user_records(
        self, user_id: str, transactions: List[Transaction]
    ) -> None:
        users = self._load()
        users[user_id] = [t.to_dict() for t in transactions]
        self._save(users)

    def create(self, user_id: str, transaction: Transaction) -> Transaction:
        """Create a single transaction."""
        return self.bulk_create(user_id, [transaction])[0]

    def bulk_create(
        self, user_id: str, transactions: List[Transaction]
    ) -> List[Transaction]:
        """Create multiple transactions with a single document write.

        Raises:
            ValidationError: If any transaction is invalid.
            StoreError: If the document cannot be read or written.
        """
        if not transactions:
            return []

        for t in transactions:
            t.validate()

        stored = [t.with_changes(id=new_transaction_id()) for t in transactions]
        self._replace_user_records(user_id, self._user_records(user_id) + stored)
        return stored

    def update(self, user_id: str, transaction_id: str, fields: dict) -> Transaction:
        """Update fields of a single transaction.

        Raises:
            ValidationError: If the fields are unsupported or the result is invalid.
            NotFoundError: If the transaction does not exist for this user.
            StoreError: If the document cannot be read or written.
        """
        records = self._user_records(user_id)
        for index, existing in enumerate(records):
            if existing.id == transaction_id:
                updated = apply_update(existing, fields)
                records[index] = updated
                self._replace_user_records(user_id, records)
                return updated

        raise NotFoundError(f"Transaction with ID {transaction_id} not found")

    def set_paid(self, user_id: str, transaction_id: str, paid: bool) -> Transaction:
        """Set the explicit paid flag of a transaction."""
        return self.update(user_id, transaction_id, {"paid": paid})

    def delete(self, user_id: str, transaction_id: str) -> bool:
        """Delete a transaction by ID.

        Raises:
            NotFoundError: If the transaction does not exist for this user.
            StoreError: If the document cannot be read or written.
        """
        records = self._user_records(user_id)
        remaining = [t for t in records if t.id != transaction_id]
        if len(remaining) == len(records):
            raise NotFoundError(f"Transaction with ID {transaction_id} not found")

        self._replace_user_records(user_id, remaining)
        return True

    def find_all(self, user_id: str) -> List[Transaction]:
        """Get all transactions for a user, newest first."""
        return _sort_newest_first(self._user_records(user_id))

    def find(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID, or None."""
        for t in self._user_records(user_id):
            if t.id == transaction_id:
                return t
        return None

    def find_by_month(self, user_id: str, year: int, month: int) -> List[Transaction]:
        """Get a user's transactions dated within a calendar month, newest first."""
        return _sort_newest_first(
            [
                t
                for t in self._user_records(user_id)
                if t.date.year == year and t.date.month == month
            ]
        )
