"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.transactions import TransactionService
        from services.local import LocalTransactionService
        from services.savings import SavingsService
        from services.wishlist import WishlistService

        # Both transaction stores expose the same interface
        if config.store_backend == "local":
            self.transactions = LocalTransactionService(config.local_store_path)
        else:
            self.transactions = TransactionService(self.db_manager)
        self.savings = SavingsService(self.db_manager, config.default_savings_target)
        self.wishlist = WishlistService(self.db_manager)
