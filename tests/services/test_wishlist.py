from decimal import Decimal

import pytest

from errors import NotFoundError, ValidationError


class TestWishlistService:
    """Tests for WishlistService."""

    def test_create_item(self, services, user_id):
        """Test creating a wishlist item."""
        item = services.wishlist.create(user_id, "  Headphones ", "199.9", "High")

        assert item.id is not None
        assert item.description == "Headphones"
        assert item.price == Decimal("199.90")
        assert item.priority == "High"
        assert item.rank == 3

    def test_default_priority_is_medium(self, services, user_id):
        """Test that priority defaults to Medium."""
        item = services.wishlist.create(user_id, "Book", "30")

        assert item.priority == "Medium"

    def test_create_validation(self, services, user_id):
        """Test that invalid items are rejected."""
        with pytest.raises(ValidationError):
            services.wishlist.create(user_id, "", "10")

        with pytest.raises(ValidationError):
            services.wishlist.create(user_id, "Book", "0")

        with pytest.raises(ValidationError, match="Unknown priority"):
            services.wishlist.create(user_id, "Book", "10", "Urgent")

        assert services.wishlist.find_all(user_id) == []

    def test_find_all_newest_first_and_scoped(self, services, user_id):
        """Test listing a user's items."""
        first = services.wishlist.create(user_id, "First", "10")
        second = services.wishlist.create(user_id, "Second", "20")
        services.wishlist.create("someone_else", "Theirs", "30")

        items = services.wishlist.find_all(user_id)

        assert [i.id for i in items] == [second.id, first.id]

    def test_update_item(self, services, user_id):
        """Test updating some fields keeps the rest."""
        item = services.wishlist.create(user_id, "Bike", "500", "Low")

        updated = services.wishlist.update(user_id, item.id, price="450")

        assert updated.description == "Bike"
        assert updated.price == Decimal("450.00")
        assert updated.priority == "Low"
        assert services.wishlist.find(user_id, item.id) == updated

    def test_update_missing_item(self, services, user_id):
        """Test updating an item that does not exist."""
        with pytest.raises(NotFoundError):
            services.wishlist.update(user_id, 12345, description="x")

    def test_delete_item(self, services, user_id):
        """Test deleting an item."""
        item = services.wishlist.create(user_id, "Bike", "500")

        assert services.wishlist.delete(user_id, item.id) is True
        assert services.wishlist.find(user_id, item.id) is None

        with pytest.raises(NotFoundError):
            services.wishlist.delete(user_id, item.id)
