from decimal import Decimal
from pathlib import Path

import pytest

from config import parse_config
from services.base import Services
from services.local import LocalTransactionService
from services.transactions import TransactionService


class TestParseConfig:
    """Tests for parse_config."""

    def test_defaults(self):
        """Test that an empty document yields the defaults."""
        config = parse_config({})

        assert config.db_filename == "finflow.db"
        assert config.log_level == "INFO"
        assert config.store_backend == "sqlite"
        assert config.user_id == "local"
        assert config.default_savings_target == Decimal("1000")
        assert config.enable_reset is False

    def test_explicit_values(self, tmp_path):
        """Test reading every section."""
        config = parse_config(
            {
                "base_dir": str(tmp_path),
                "enable_reset": True,
                "database": {"filename": "other.db"},
                "logging": {"level": "DEBUG"},
                "store": {"backend": "local", "local_path": str(tmp_path / "tx.json")},
                "user": {"id": "alex"},
                "savings": {"default_target": 2500.5},
            }
        )

        assert config.db_path == tmp_path / "db" / "other.db"
        assert config.log_dir == tmp_path / "logs"
        assert config.log_level == "DEBUG"
        assert config.store_backend == "local"
        assert config.local_store_path == Path(tmp_path / "tx.json")
        assert config.user_id == "alex"
        assert config.default_savings_target == Decimal("2500.5")
        assert config.enable_reset is True

    def test_unknown_backend(self):
        """Test that an unknown store backend is rejected."""
        with pytest.raises(ValueError, match="Unknown store backend"):
            parse_config({"store": {"backend": "cloud"}})


class TestServicesBackend:
    """Tests for choosing the transaction store."""

    def test_sqlite_backend(self, test_config, db_manager_with_schema):
        services = Services(test_config, db_manager=db_manager_with_schema)

        assert isinstance(services.transactions, TransactionService)

    def test_local_backend(self, test_config, db_manager_with_schema):
        test_config.store_backend = "local"

        services = Services(test_config, db_manager=db_manager_with_schema)

        assert isinstance(services.transactions, LocalTransactionService)
        assert services.transactions.path == test_config.local_store_path
