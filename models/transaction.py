from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from errors import ValidationError
from models.category import BANKS, TRANSACTION_TYPES, is_valid_category

CENT = Decimal("0.01")


def to_calendar_date(value: Union[date, datetime, str]) -> date:
    """Normalize a date-like value to a calendar date.

    Time-of-day carries no meaning for transactions, so datetimes are
    truncated and ISO strings are parsed on their date part only.

    Raises:
        ValidationError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise ValidationError(f"Invalid date: {value!r}") from e
    raise ValidationError(f"Invalid date: {value!r}")


def to_amount(value) -> Decimal:
    """Convert a number or numeric string to a Decimal with cent precision.

    Floats go through str() so 0.1 stays 0.1.

    Raises:
        ValidationError: If the value is not numeric.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    """Convert a Decimal amount to integer minor units for storage."""
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    """Convert stored integer minor units back to a Decimal amount."""
    return (Decimal(cents) / 100).quantize(CENT)


@dataclass
class Transaction:
    description: str
    amount: Decimal  # always positive
    type: str  # 'income' or 'expense'
    category: str
    date: date  # due/occurrence date, no time-of-day
    bank: Optional[str] = None
    paid: Optional[bool] = None  # None means "derive from date"
    id: Optional[str] = None  # assigned by the store

    def validate(self) -> "Transaction":
        """Check the record invariants.

        Returns:
            The same transaction, for chaining.

        Raises:
            ValidationError: If any invariant is violated.
        """
        if not self.description or not self.description.strip():
            raise ValidationError("description is required")
        if self.type not in TRANSACTION_TYPES:
            raise ValidationError(f"Invalid transaction type: {self.type!r}")
        if not isinstance(self.amount, Decimal) or self.amount <= 0:
            raise ValidationError(f"amount must be positive, got {self.amount}")
        if not is_valid_category(self.type, self.category):
            raise ValidationError(
                f"Category {self.category!r} is not valid for {self.type} transactions"
            )
        if self.bank is not None and self.bank not in BANKS:
            raise ValidationError(f"Unknown bank: {self.bank!r}")
        if not isinstance(self.date, date) or isinstance(self.date, datetime):
            raise ValidationError(f"date must be a calendar date, got {self.date!r}")
        if self.paid is not None and not isinstance(self.paid, bool):
            raise ValidationError(f"paid must be a boolean, got {self.paid!r}")
        return self

    def with_changes(self, **fields) -> "Transaction":
        """Return a copy with the given fields replaced and normalized."""
        if "amount" in fields:
            fields["amount"] = to_amount(fields["amount"])
        if "date" in fields:
            fields["date"] = to_calendar_date(fields["date"])
        return replace(self, **fields)

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": str(self.amount),
            "type": self.type,
            "category": self.category,
            "bank": self.bank,
            "date": self.date.isoformat(),
            "paid": self.paid,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Build a transaction from the output of to_dict()."""
        return cls(
            id=data.get("id"),
            description=data["description"],
            amount=to_amount(data["amount"]),
            type=data["type"],
            category=data["category"],
            bank=data.get("bank"),
            date=to_calendar_date(data["date"]),
            paid=data.get("paid"),
        )
