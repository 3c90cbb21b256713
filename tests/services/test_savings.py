from decimal import Decimal

import pytest

from errors import ValidationError
from models.savings import SavingsGoal


class TestSavingsService:
    """Tests for SavingsService."""

    def test_default_goal_when_none_set(self, services, user_id):
        """Test that users without a goal get the configured default."""
        goal = services.savings.get(user_id)

        assert goal.current_amount == Decimal("0")
        assert goal.target_amount == Decimal("1000.00")

    def test_upsert_creates_goal(self, services, user_id):
        """Test storing a goal for the first time."""
        stored = services.savings.upsert(user_id, "250", Decimal("2000"))

        assert stored == SavingsGoal(Decimal("250.00"), Decimal("2000.00"))
        assert services.savings.get(user_id) == stored

    def test_upsert_replaces_goal(self, services, user_id):
        """Test that a second upsert overwrites the first."""
        services.savings.upsert(user_id, "100", "500")
        services.savings.upsert(user_id, "300", "800")

        goal = services.savings.get(user_id)

        assert goal.current_amount == Decimal("300.00")
        assert goal.target_amount == Decimal("800.00")

    def test_goals_are_per_user(self, services, user_id):
        """Test that one user's goal does not affect another's."""
        services.savings.upsert("someone_else", "999", "999")

        assert services.savings.get(user_id).target_amount == Decimal("1000.00")

    def test_upsert_rejects_negative_amounts(self, services, user_id):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            services.savings.upsert(user_id, "-1", "100")

        with pytest.raises(ValidationError):
            services.savings.upsert(user_id, "1", "-100")

    def test_zero_amounts_allowed(self, services, user_id):
        """Test that zero is a valid amount for both fields."""
        goal = services.savings.upsert(user_id, "0", "0")

        assert goal.progress == Decimal("0")


class TestSavingsGoal:
    """Tests for SavingsGoal."""

    def test_progress(self):
        goal = SavingsGoal(Decimal("250"), Decimal("1000"))

        assert goal.progress == Decimal("25.0")
        assert goal.remaining == Decimal("750")

    def test_progress_capped_at_100(self):
        goal = SavingsGoal(Decimal("1500"), Decimal("1000"))

        assert goal.progress == Decimal("100.0")
        assert goal.remaining == Decimal("0")

    def test_progress_rounds_to_one_decimal(self):
        goal = SavingsGoal(Decimal("1"), Decimal("3"))

        assert goal.progress == Decimal("33.3")
