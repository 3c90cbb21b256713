"""WishlistItem model for planned purchases."""

from dataclasses import dataclass
from decimal import Decimal

PRIORITY_RANK = {
    "High": 3,
    "Medium": 2,
    "Low": 1,
}


@dataclass
class WishlistItem:
    """Represents something the user wants to buy.

    Attributes:
        id: Unique identifier (assigned by the store).
        description: What the item is.
        price: Expected price (always positive).
        priority: "High", "Medium" or "Low".
    """

    id: int
    description: str
    price: Decimal
    priority: str = "Medium"

    @property
    def rank(self) -> int:
        """Numeric priority rank (High=3, Medium=2, Low=1)."""
        return PRIORITY_RANK[self.priority]
