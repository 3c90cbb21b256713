"""Savings goal service for database operations."""

from decimal import Decimal
from errors import ValidationError
from models.savings import SavingsGoal
from models.transaction import from_cents, to_amount, to_cents


class SavingsService:
    """Service for managing the per-user savings goal."""

    def __init__(self, db_manager, default_target: Decimal = Decimal("1000")):
        """Initialize the savings service.

        Args:
            db_manager: Database manager instance for database operations.
            default_target: Target returned for users who never set a goal.
        """
        self.db_manager = db_manager
        self.default_target = default_target

    def get(self, user_id: str) -> SavingsGoal:
        """Get the savings goal for a user.

        Returns:
            The stored SavingsGoal, or (0, default_target) if none is set.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT current_cents, target_cents FROM savings_goals WHERE user_id = ?",
                (user_id,),
            )
            row = cursor.fetchone()

            if row:
                return SavingsGoal(
                    current_amount=from_cents(row[0]),
                    target_amount=from_cents(row[1]),
                )
            return SavingsGoal(
                current_amount=Decimal("0.00"),
                target_amount=to_amount(self.default_target),
            )

    def upsert(self, user_id: str, current, target) -> SavingsGoal:
        """Create or replace the savings goal for a user.

        Args:
            user_id: Owner of the goal.
            current: Amount saved so far.
            target: Amount to reach.

        Returns:
            The stored SavingsGoal.

        Raises:
            ValidationError: If either amount is negative or not numeric.
            StoreError: If the write fails.
        """
        current_amount = to_amount(current)
        target_amount = to_amount(target)
        if current_amount < 0 or target_amount < 0:
            raise ValidationError("Savings amounts cannot be negative")

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO savings_goals (user_id, current_cents, target_cents)
                VALUES (?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    current_cents = excluded.current_cents,
                    target_cents = excluded.target_cents,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (user_id, to_cents(current_amount), to_cents(target_amount)),
            )
            conn.commit()

        return SavingsGoal(current_amount=current_amount, target_amount=target_amount)
