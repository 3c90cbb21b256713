from datetime import date, datetime
from decimal import Decimal

import pytest

from errors import ValidationError
from models.category import categories_for_type, is_valid_category
from models.transaction import (
    Transaction,
    from_cents,
    to_amount,
    to_calendar_date,
    to_cents,
)
from tests.helpers import make_transaction


class TestConversions:
    """Tests for the date and amount helpers."""

    def test_to_calendar_date(self):
        assert to_calendar_date(date(2024, 3, 1)) == date(2024, 3, 1)
        assert to_calendar_date(datetime(2024, 3, 1, 22, 15)) == date(2024, 3, 1)
        assert to_calendar_date("2024-03-01") == date(2024, 3, 1)
        assert to_calendar_date("2024-03-01T10:00:00Z") == date(2024, 3, 1)

    @pytest.mark.parametrize("value", ["", "03/01/2024", "2024-13-01", None, 20240301])
    def test_to_calendar_date_rejects_garbage(self, value):
        with pytest.raises(ValidationError):
            to_calendar_date(value)

    def test_to_amount(self):
        assert to_amount("10") == Decimal("10.00")
        assert to_amount(0.1) == Decimal("0.10")
        assert to_amount(Decimal("2.005")) == Decimal("2.01")

    @pytest.mark.parametrize("value", ["ten", "NaN", "Infinity", None])
    def test_to_amount_rejects_garbage(self, value):
        with pytest.raises(ValidationError):
            to_amount(value)

    def test_cents(self):
        assert to_cents(Decimal("12.34")) == 1234
        assert from_cents(1234) == Decimal("12.34")
        assert from_cents(5) == Decimal("0.05")


class TestTransaction:
    """Tests for the Transaction model."""

    def test_valid_transaction(self):
        """Test that a well-formed transaction validates."""
        t = make_transaction(bank="PicPay", paid=True)

        assert t.validate() is t

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"description": " "}, "description"),
            ({"amount": Decimal("0")}, "amount"),
            ({"amount": Decimal("-3")}, "amount"),
            ({"type": "transfer"}, "transaction type"),
            ({"category": "salary"}, "not valid for expense"),
            ({"bank": "Piggy"}, "Unknown bank"),
            ({"date": datetime(2024, 1, 1, 12, 0)}, "calendar date"),
            ({"paid": "yes"}, "paid"),
        ],
    )
    def test_invariants(self, overrides, message):
        """Test that each invariant is enforced."""
        t = make_transaction()
        for name, value in overrides.items():
            setattr(t, name, value)

        with pytest.raises(ValidationError, match=message):
            t.validate()

    def test_with_changes_normalizes(self):
        """Test that with_changes converts amounts and dates."""
        t = make_transaction()

        changed = t.with_changes(amount="7.5", date="2024-05-06")

        assert changed.amount == Decimal("7.50")
        assert changed.date == date(2024, 5, 6)
        assert t.amount == Decimal("100.00")

    def test_dict_round_trip(self):
        """Test to_dict and from_dict."""
        t = make_transaction("19.99", bank="Inter", paid=False, id="abc")

        data = t.to_dict()

        assert data["amount"] == "19.99"
        assert data["date"] == "2024-01-15"
        assert Transaction.from_dict(data) == t


class TestCategories:
    """Tests for the category catalog."""

    def test_shared_other_category(self):
        assert is_valid_category("income", "other")
        assert is_valid_category("expense", "other")

    def test_type_specific_categories(self):
        assert is_valid_category("expense", "piggy_bank")
        assert not is_valid_category("income", "piggy_bank")
        assert not is_valid_category("expense", "salary")
        assert not is_valid_category("transfer", "other")

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            categories_for_type("transfer")
