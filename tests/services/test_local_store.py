import json
from datetime import date
from decimal import Decimal

import pytest

from errors import NotFoundError, StoreError, ValidationError
from services.local import LocalTransactionService
from tests.helpers import make_transaction


@pytest.fixture
def store(tmp_path):
    """Local store backed by a file in a temporary directory."""
    return LocalTransactionService(tmp_path / "data" / "transactions.json")


class TestLocalTransactionService:
    """Tests for LocalTransactionService."""

    def test_missing_file_is_empty(self, store):
        """Test that a store with no file has no transactions."""
        assert store.find_all("user") == []
        assert not store.path.exists()

    def test_create_writes_document(self, store):
        """Test that creating a transaction writes the JSON document."""
        created = store.create("user", make_transaction("12.34", bank="Caixa"))

        document = json.loads(store.path.read_text(encoding="utf-8"))
        (record,) = document["users"]["user"]
        assert record["id"] == created.id
        assert record["amount"] == "12.34"
        assert record["bank"] == "Caixa"
        assert record["date"] == "2024-01-15"
        assert record["paid"] is None

    def test_records_survive_reopen(self, store):
        """Test that a new instance reads what a previous one wrote."""
        created = store.create("user", make_transaction("99.99", paid=True))

        reopened = LocalTransactionService(store.path)

        found = reopened.find("user", created.id)
        assert found == created
        assert found.amount == Decimal("99.99")

    def test_bulk_create_is_all_or_nothing(self, store):
        """Test that one invalid record stops the whole batch."""
        with pytest.raises(ValidationError):
            store.bulk_create("user", [make_transaction(), make_transaction(bank="Nowhere")])

        assert store.find_all("user") == []

    def test_find_all_newest_first(self, store):
        """Test ordering by date descending."""
        store.bulk_create(
            "user",
            [make_transaction(on=date(2024, 1, d)) for d in (3, 30, 14)],
        )

        assert [t.date.day for t in store.find_all("user")] == [30, 14, 3]

    def test_users_are_isolated(self, store):
        """Test that users never see each other's transactions."""
        mine = store.create("me", make_transaction(description="Mine"))
        store.create("you", make_transaction(description="Theirs"))

        assert [t.description for t in store.find_all("me")] == ["Mine"]
        assert store.find("you", mine.id) is None

    def test_find_by_month(self, store):
        """Test getting transactions within a calendar month."""
        store.bulk_create(
            "user",
            [
                make_transaction(on=date(2023, 12, 31)),
                make_transaction(on=date(2024, 1, 1)),
                make_transaction(on=date(2024, 1, 31)),
            ],
        )

        found = store.find_by_month("user", 2024, 1)

        assert [t.date for t in found] == [date(2024, 1, 31), date(2024, 1, 1)]

    def test_update_and_set_paid(self, store):
        """Test updating fields and the paid flag."""
        created = store.create("user", make_transaction("10.00"))

        store.update("user", created.id, {"amount": Decimal("20"), "category": "health"})
        store.set_paid("user", created.id, False)

        found = store.find("user", created.id)
        assert found.amount == Decimal("20.00")
        assert found.category == "health"
        assert found.paid is False

    def test_update_missing_transaction(self, store):
        """Test updating a transaction that does not exist."""
        with pytest.raises(NotFoundError):
            store.update("user", "missing", {"paid": True})

    def test_delete(self, store):
        """Test deleting a transaction."""
        created = store.create("user", make_transaction())

        assert store.delete("user", created.id) is True
        assert store.find_all("user") == []

        with pytest.raises(NotFoundError):
            store.delete("user", created.id)

    def test_corrupt_document_raises_store_error(self, store):
        """Test that an unreadable document surfaces as StoreError."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError):
            store.find_all("user")
