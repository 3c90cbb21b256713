"""Expansion of a user-entered transaction into dated transaction records.

A single form submission can stand for one transaction, a purchase split
into N installments, or a recurring entry repeated for a year.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Literal, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from logger import get_logger
from models.category import BANKS, is_valid_category
from models.transaction import Transaction, to_amount, to_calendar_date

logger = get_logger()

MIN_INSTALLMENTS = 2
MAX_INSTALLMENTS = 48
MONTHLY_OCCURRENCES = 12
RECURRING_SUFFIX = "(Recurring)"


class TransactionIntent(BaseModel):
    """What the user submitted, before expansion into records."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    description: str
    amount: Decimal
    type: Literal["income", "expense"]
    category: str
    date: dt.date
    bank: Optional[str] = None
    paid: Optional[bool] = None
    frequency: Literal["single", "monthly", "installment"] = "single"
    installments: Optional[int] = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("description is required")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_positive(cls, value) -> Decimal:
        amount = to_amount(value)
        if amount <= 0:
            raise ValueError(f"amount must be positive, got {amount}")
        return amount

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value) -> dt.date:
        return to_calendar_date(value)

    @field_validator("bank")
    @classmethod
    def _known_bank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in BANKS:
            raise ValueError(f"Unknown bank: {value!r}")
        return value

    @model_validator(mode="after")
    def _check_category_and_installments(self) -> "TransactionIntent":
        if not is_valid_category(self.type, self.category):
            raise ValueError(
                f"Category {self.category!r} is not valid for {self.type} transactions"
            )
        if self.frequency == "installment":
            if self.installments is None:
                raise ValueError("installments is required for installment frequency")
            if not MIN_INSTALLMENTS <= self.installments <= MAX_INSTALLMENTS:
                raise ValueError(
                    f"installments must be between {MIN_INSTALLMENTS} and "
                    f"{MAX_INSTALLMENTS}, got {self.installments}"
                )
        return self


def parse_intent(data: dict) -> TransactionIntent:
    """Validate raw input into a TransactionIntent.

    Args:
        data: Field mapping, e.g. parsed CLI arguments or a JSON payload.

    Returns:
        The validated intent.

    Raises:
        ValidationError: If any field is missing or invalid.
    """
    try:
        return TransactionIntent.model_validate(data)
    except PydanticValidationError as e:
        messages = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            message = error["msg"].removeprefix("Value error, ")
            messages.append(f"{location}: {message}" if location else message)
        raise ValidationError("; ".join(messages)) from e


def _shift_months(base: dt.date, months: int) -> dt.date:
    # relativedelta clamps to the last day of shorter months
    # (Jan 31 + 1 month -> Feb 28/29). Offsets are always taken from the
    # base date so a clamped month does not shift the ones after it.
    return base + relativedelta(months=months)


def expand(intent: TransactionIntent) -> List[Transaction]:
    """Turn an intent into the transaction records to persist.

    - single: one record, unchanged.
    - installment: one record per installment, a month apart, described
      "<description> (i/N)", each for the full amount.
    - monthly: twelve records a month apart; all but the first are described
      "<description> (Recurring)".

    Only the first record keeps the submitted paid flag. Later records are
    future obligations and are always created unpaid.

    Returns:
        Records in date order (earliest first), without IDs.
    """
    if intent.frequency == "installment":
        count = intent.installments
    elif intent.frequency == "monthly":
        count = MONTHLY_OCCURRENCES
    else:
        count = 1

    records = []
    for index in range(count):
        if intent.frequency == "installment":
            description = f"{intent.description} ({index + 1}/{count})"
        elif intent.frequency == "monthly" and index > 0:
            description = f"{intent.description} {RECURRING_SUFFIX}"
        else:
            description = intent.description

        records.append(
            Transaction(
                description=description,
                amount=intent.amount,
                type=intent.type,
                category=intent.category,
                bank=intent.bank,
                date=_shift_months(intent.date, index),
                paid=intent.paid if index == 0 else False,
            )
        )

    logger.debug(
        f"Expanded {intent.frequency} intent '{intent.description}' into "
        f"{len(records)} record(s)"
    )
    return records
