"""SavingsGoal model for the per-user piggy bank target."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class SavingsGoal:
    """Represents a user's savings goal.

    Attributes:
        current_amount: Amount saved so far (never negative).
        target_amount: Amount the user wants to reach (never negative).
    """

    current_amount: Decimal
    target_amount: Decimal

    @property
    def progress(self) -> Decimal:
        """Percentage of the target reached, capped at 100."""
        if self.target_amount <= 0:
            return Decimal("0")
        pct = self.current_amount / self.target_amount * 100
        return min(pct, Decimal("100")).quantize(Decimal("0.1"))

    @property
    def remaining(self) -> Decimal:
        """Amount still missing to reach the target."""
        return max(self.target_amount - self.current_amount, Decimal("0"))
