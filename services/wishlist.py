"""Wishlist service for database operations."""

from typing import List, Optional
from errors import NotFoundError, ValidationError
from models.transaction import from_cents, to_amount, to_cents
from models.wishlist import PRIORITY_RANK, WishlistItem


def _validate(description: str, price, priority: str):
    if not description or not description.strip():
        raise ValidationError("description is required")
    amount = to_amount(price)
    if amount <= 0:
        raise ValidationError(f"price must be positive, got {amount}")
    if priority not in PRIORITY_RANK:
        raise ValidationError(
            f"Unknown priority: {priority!r} (expected one of {list(PRIORITY_RANK)})"
        )
    return description.strip(), amount, priority


class WishlistService:
    """Service for managing wishlist items."""

    def __init__(self, db_manager):
        """Initialize the wishlist service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, user_id: str) -> List[WishlistItem]:
        """Get all wishlist items for a user.

        Returns:
            List of WishlistItem objects, newest first.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, description, price_cents, priority
                FROM wishlist_items
                WHERE user_id = ?
                ORDER BY id DESC
                """,
                (user_id,),
            )
            rows = cursor.fetchall()

            return [self._row_to_item(row) for row in rows]

    def find(self, user_id: str, item_id: int) -> Optional[WishlistItem]:
        """Get a single wishlist item by ID, or None."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, description, price_cents, priority
                FROM wishlist_items
                WHERE id = ? AND user_id = ?
                """,
                (item_id, user_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_item(row)
            return None

    def create(
        self, user_id: str, description: str, price, priority: str = "Medium"
    ) -> WishlistItem:
        """Create a new wishlist item.

        Returns:
            The created WishlistItem with id populated.

        Raises:
            ValidationError: If the description is empty, the price is not
                positive, or the priority is unknown.
            StoreError: If the insert fails.
        """
        description, amount, priority = _validate(description, price, priority)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO wishlist_items (user_id, description, price_cents, priority)
                VALUES (?, ?, ?, ?)
                """,
                (user_id, description, to_cents(amount), priority),
            )
            conn.commit()
            item_id = cursor.lastrowid

            return WishlistItem(
                id=item_id, description=description, price=amount, priority=priority
            )

    def update(
        self,
        user_id: str,
        item_id: int,
        description: Optional[str] = None,
        price=None,
        priority: Optional[str] = None,
    ) -> WishlistItem:
        """Update an existing wishlist item. Arguments left as None are kept.

        Raises:
            ValidationError: If the resulting item is invalid.
            NotFoundError: If the item does not exist for this user.
            StoreError: If the update fails.
        """
        existing = self.find(user_id, item_id)
        if existing is None:
            raise NotFoundError(f"Wishlist item with ID {item_id} not found")

        description, amount, priority = _validate(
            description if description is not None else existing.description,
            price if price is not None else existing.price,
            priority if priority is not None else existing.priority,
        )

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE wishlist_items
                SET description = ?, price_cents = ?, priority = ?
                WHERE id = ? AND user_id = ?
                """,
                (description, to_cents(amount), priority, item_id, user_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError(f"Wishlist item with ID {item_id} not found")

            return WishlistItem(
                id=item_id, description=description, price=amount, priority=priority
            )

    def delete(self, user_id: str, item_id: int) -> bool:
        """Delete a wishlist item by ID.

        Raises:
            NotFoundError: If the item does not exist for this user.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM wishlist_items WHERE id = ? AND user_id = ?",
                (item_id, user_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError(f"Wishlist item with ID {item_id} not found")
            return True

    def _row_to_item(self, row: tuple) -> WishlistItem:
        return WishlistItem(
            id=row[0], description=row[1], price=from_cents(row[2]), priority=row[3]
        )
