"""
Run configuration for address checks.

Defaults can be overridden through ADDRCHECK_* environment variables
(optionally loaded from a .env file) and then by CLI arguments.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

DEFAULT_DB_PATH = "btc_addresses.db"
DEFAULT_TEXT_PATH = "addressonly.txt"
DEFAULT_BATCH_SIZE = 1000
DEFAULT_BUSY_TIMEOUT = 5.0
DEFAULT_READ_BUFFER = 1024 * 1024  # 1MB
DEFAULT_TABLE = "addresses"
DEFAULT_COLUMN = "address"

ENV_PREFIX = "ADDRCHECK_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CheckerConfig:
    """Settings for one check run."""

    db_path: Path = Path(DEFAULT_DB_PATH)
    text_path: Path = Path(DEFAULT_TEXT_PATH)
    batch_size: int = DEFAULT_BATCH_SIZE
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT
    read_buffer_size: int = DEFAULT_READ_BUFFER
    table_name: str = DEFAULT_TABLE
    column_name: str = DEFAULT_COLUMN
    unique: bool = False
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.busy_timeout < 0:
            raise ValueError(f"busy_timeout must not be negative, got {self.busy_timeout}")
        if self.read_buffer_size < 1:
            raise ValueError(f"read_buffer_size must be positive, got {self.read_buffer_size}")

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Build a config from ADDRCHECK_* environment variables."""
        overrides = {}

        def get(name: str) -> Optional[str]:
            value = os.getenv(ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        if get("DB_PATH"):
            overrides["db_path"] = Path(get("DB_PATH"))
        if get("TEXT_PATH"):
            overrides["text_path"] = Path(get("TEXT_PATH"))
        if get("BATCH_SIZE"):
            overrides["batch_size"] = _parse_int("BATCH_SIZE", get("BATCH_SIZE"))
        if get("BUSY_TIMEOUT"):
            overrides["busy_timeout"] = _parse_float("BUSY_TIMEOUT", get("BUSY_TIMEOUT"))
        if get("READ_BUFFER"):
            overrides["read_buffer_size"] = _parse_int("READ_BUFFER", get("READ_BUFFER"))
        if get("TABLE"):
            overrides["table_name"] = get("TABLE")
        if get("COLUMN"):
            overrides["column_name"] = get("COLUMN")
        if get("UNIQUE"):
            overrides["unique"] = get("UNIQUE").lower() in _TRUE_VALUES
        if get("LOG_LEVEL"):
            overrides["log_level"] = get("LOG_LEVEL").upper()
        if get("LOG_DIR"):
            overrides["log_dir"] = Path(get("LOG_DIR"))

        return cls(**overrides)

    def with_overrides(self, **overrides) -> "CheckerConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from None


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {value!r}") from None
