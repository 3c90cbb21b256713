"""Configuration management for FinFlow.

Reads configuration from ~/.config/finflow.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
from decimal import Decimal
import tomllib
import tomli_w


STORE_BACKENDS = ("sqlite", "local")


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    store_backend: str
    local_store_path: Path
    user_id: str
    default_savings_target: Decimal
    enable_reset: bool = False

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "finflow"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="finflow.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            store_backend="sqlite",
            local_store_path=base_dir / "local" / "transactions.json",
            user_id="local",
            default_savings_target=Decimal("1000"),
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "finflow.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.

    Raises:
        ValueError: If the configured store backend is unknown.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return parse_config(data)


def parse_config(data: dict) -> Config:
    """Build a Config from a parsed TOML document, filling in defaults.

    Args:
        data: Dictionary as returned by tomllib.

    Returns:
        Config object.

    Raises:
        ValueError: If the configured store backend is unknown.
    """
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "finflow"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "finflow.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    store_config = data.get("store", {})
    store_backend = store_config.get("backend", "sqlite")
    if store_backend not in STORE_BACKENDS:
        raise ValueError(
            f"Unknown store backend: {store_backend} (expected one of {STORE_BACKENDS})"
        )
    local_store_path = Path(
        store_config.get("local_path", base_dir / "local" / "transactions.json")
    )

    user_config = data.get("user", {})
    user_id = str(user_config.get("id", "local"))

    savings_config = data.get("savings", {})
    # TOML floats are read through str() so 1000.1 stays 1000.1
    default_savings_target = Decimal(str(savings_config.get("default_target", 1000)))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        store_backend=store_backend,
        local_store_path=local_store_path,
        user_id=user_id,
        default_savings_target=default_savings_target,
        enable_reset=data.get("enable_reset", False),
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "enable_reset": config.enable_reset,
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "store": {
            "backend": config.store_backend,
            "local_path": str(config.local_store_path),
        },
        "user": {
            "id": config.user_id,
        },
        "savings": {
            "default_target": float(config.default_savings_target),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
