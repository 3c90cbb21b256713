"""Tests for the store-backed dashboard tools."""

from datetime import date
from decimal import Decimal

import pytest

from errors import ValidationError
from tests.helpers import make_transaction
from tools.recurrence import parse_intent
from tools.transactions import (
    get_dashboard,
    get_period_summary,
    record_transaction,
    summarize_amounts,
)

AS_OF = date(2024, 1, 20)


class TestRecordTransaction:
    """Tests for record_transaction."""

    def test_records_single_transaction(self, services, user_id):
        """Test recording a single transaction from a raw mapping."""
        stored = record_transaction(
            services,
            user_id,
            {
                "description": "Groceries",
                "amount": "85.40",
                "type": "expense",
                "category": "food",
                "date": "2024-01-10",
                "bank": "Nubank",
            },
        )

        assert len(stored) == 1
        assert stored[0].id is not None
        assert services.transactions.find_all(user_id) == stored

    def test_records_installments(self, services, user_id):
        """Test that an installment intent stores every installment."""
        intent = parse_intent(
            {
                "description": "Phone",
                "amount": "150",
                "type": "expense",
                "category": "shopping",
                "date": "2024-01-15",
                "frequency": "installment",
                "installments": 3,
                "paid": True,
            }
        )

        stored = record_transaction(services, user_id, intent)

        assert [t.description for t in stored] == [
            "Phone (1/3)",
            "Phone (2/3)",
            "Phone (3/3)",
        ]
        found = services.transactions.find_all(user_id)
        assert len(found) == 3
        assert {t.paid for t in found} == {True, False}

    def test_invalid_intent_stores_nothing(self, services, user_id):
        """Test that validation errors leave the store untouched."""
        with pytest.raises(ValidationError):
            record_transaction(
                services,
                user_id,
                {
                    "description": "Phone",
                    "amount": "150",
                    "type": "expense",
                    "category": "shopping",
                    "date": "2024-01-15",
                    "frequency": "installment",
                    "installments": 60,
                },
            )

        assert services.transactions.find_all(user_id) == []


class TestGetDashboard:
    """Tests for get_dashboard."""

    def test_empty_dashboard(self, services, user_id):
        """Test the dashboard of a user with no data."""
        dashboard = get_dashboard(services, user_id, 2024, 1, as_of=AS_OF)

        assert dashboard["totals"].balance == Decimal("0")
        assert dashboard["transactions"] == []
        assert dashboard["chart"] == []
        assert dashboard["bank_balances"].is_empty
        assert len(dashboard["yearly_series"]) == 12
        assert dashboard["savings_goal"].target_amount == Decimal("1000.00")
        assert [i.rule for i in dashboard["insights"]] == ["get_started"]

    def test_dashboard_combines_views(self, services, user_id):
        """Test lifetime totals, monthly slice, banks and insights together."""
        services.transactions.bulk_create(
            user_id,
            [
                make_transaction("3000.00", type="income", bank="Itaú", on=date(2024, 1, 5)),
                make_transaction("1400.00", category="housing", bank="Itaú", on=date(2024, 1, 8)),
                make_transaction("200.00", category="food", bank="Nubank", on=date(2024, 1, 12)),
                # Scheduled later this month, not realized yet
                make_transaction("100.00", category="leisure", on=date(2024, 1, 28)),
                make_transaction("50.00", category="food", on=date(2023, 12, 20)),
            ],
        )
        services.wishlist.create(user_id, "Bike", "1000", "High")

        dashboard = get_dashboard(services, user_id, 2024, 1, as_of=AS_OF)

        totals = dashboard["totals"]
        assert totals.total_income == Decimal("3000.00")
        assert totals.total_expense == Decimal("1650.00")
        assert totals.balance == Decimal("1350.00")

        month = dashboard["month_totals"]
        assert month.month_income == Decimal("3000.00")
        assert month.month_expense == Decimal("1700.00")

        assert [t.date.day for t in dashboard["transactions"]] == [28, 12, 8, 5]
        assert [e.category for e in dashboard["chart"]] == ["housing", "food", "leisure"]

        banks = dashboard["bank_balances"].banks
        assert list(banks) == ["Itaú", "Nubank"]
        assert banks["Itaú"].balance == Decimal("1600.00")
        assert banks["Nubank"].balance == Decimal("-200.00")

        rules = [i.rule for i in dashboard["insights"]]
        assert rules[0] == "wishlist"
        assert dashboard["insights"][0].kind == "success"
        assert "dominant_category" in rules

    def test_defaults_to_today(self, services, user_id):
        """Test that as_of is optional."""
        today = date.today()

        dashboard = get_dashboard(services, user_id, today.year, today.month)

        assert dashboard["month_totals"].month_balance == Decimal("0")


class TestGetPeriodSummary:
    """Tests for get_period_summary."""

    def test_summary_across_year_boundary(self, services, user_id):
        """Test that every month in range is present, including empty ones."""
        services.transactions.bulk_create(
            user_id,
            [
                make_transaction("1000.00", type="income", on=date(2023, 12, 1)),
                make_transaction("200.00", category="food", on=date(2023, 12, 15)),
                make_transaction("50.00", category="transport", on=date(2024, 2, 3), paid=False),
            ],
        )

        summary = get_period_summary(
            services, user_id, date(2023, 12, 1), date(2024, 2, 28)
        )

        assert list(summary) == ["2023/12", "2024/01", "2024/02"]
        assert summary["2023/12"]["net"] == Decimal("800.00")
        assert summary["2023/12"]["expenses_by_category"] == {"food": Decimal("200.00")}
        assert summary["2024/01"]["income_total"] == Decimal("0")
        assert summary["2024/01"]["expenses_by_category"] == {}
        assert summary["2024/02"]["expense_total"] == Decimal("50.00")


def test_summarize_amounts():
    transactions = [make_transaction("1.10"), make_transaction("2.20", type="income")]

    assert summarize_amounts(transactions) == Decimal("3.30")
