"""
Tests for config.py and env.py - settings and environment overrides.
"""

import os
from pathlib import Path

import pytest

from addrcheck.config import CheckerConfig
from addrcheck.env import load_env


ENV_NAMES = ("DB_PATH", "TEXT_PATH", "BATCH_SIZE", "BUSY_TIMEOUT", "READ_BUFFER",
             "TABLE", "COLUMN", "UNIQUE", "LOG_LEVEL", "LOG_DIR")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ADDRCHECK_* variables; restored after the test."""
    for name in ENV_NAMES:
        # setenv first so teardown also removes anything load_env adds
        monkeypatch.setenv(f"ADDRCHECK_{name}", "")
        monkeypatch.delenv(f"ADDRCHECK_{name}")
    return monkeypatch


class TestCheckerConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = CheckerConfig()

        assert config.db_path == Path("btc_addresses.db")
        assert config.text_path == Path("addressonly.txt")
        assert config.batch_size == 1000
        assert config.busy_timeout == 5.0
        assert config.read_buffer_size == 1024 * 1024
        assert config.table_name == "addresses"
        assert config.column_name == "address"
        assert config.unique is False
        assert config.log_dir is None

    @pytest.mark.parametrize("field,value", [
        ("batch_size", 0),
        ("batch_size", -5),
        ("busy_timeout", -1.0),
        ("read_buffer_size", 0),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            CheckerConfig(**{field: value})

    def test_with_overrides_ignores_none(self):
        config = CheckerConfig().with_overrides(batch_size=10, table_name=None)

        assert config.batch_size == 10
        assert config.table_name == "addresses"

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError):
            CheckerConfig().with_overrides(batch_size=0)


class TestFromEnv:
    """Test ADDRCHECK_* overrides."""

    def test_no_env_gives_defaults(self, clean_env):
        assert CheckerConfig.from_env() == CheckerConfig()

    def test_reads_all_overrides(self, clean_env, tmp_path):
        clean_env.setenv("ADDRCHECK_DB_PATH", str(tmp_path / "a.db"))
        clean_env.setenv("ADDRCHECK_TEXT_PATH", str(tmp_path / "a.txt"))
        clean_env.setenv("ADDRCHECK_BATCH_SIZE", "250")
        clean_env.setenv("ADDRCHECK_BUSY_TIMEOUT", "1.5")
        clean_env.setenv("ADDRCHECK_READ_BUFFER", "4096")
        clean_env.setenv("ADDRCHECK_TABLE", "wallets")
        clean_env.setenv("ADDRCHECK_COLUMN", "addr")
        clean_env.setenv("ADDRCHECK_UNIQUE", "yes")
        clean_env.setenv("ADDRCHECK_LOG_LEVEL", "debug")
        clean_env.setenv("ADDRCHECK_LOG_DIR", str(tmp_path / "logs"))

        config = CheckerConfig.from_env()

        assert config.db_path == tmp_path / "a.db"
        assert config.text_path == tmp_path / "a.txt"
        assert config.batch_size == 250
        assert config.busy_timeout == 1.5
        assert config.read_buffer_size == 4096
        assert config.table_name == "wallets"
        assert config.column_name == "addr"
        assert config.unique is True
        assert config.log_level == "DEBUG"
        assert config.log_dir == tmp_path / "logs"

    def test_blank_values_are_ignored(self, clean_env):
        clean_env.setenv("ADDRCHECK_BATCH_SIZE", "  ")

        assert CheckerConfig.from_env().batch_size == 1000

    def test_invalid_number(self, clean_env):
        clean_env.setenv("ADDRCHECK_BATCH_SIZE", "lots")

        with pytest.raises(ValueError, match="ADDRCHECK_BATCH_SIZE"):
            CheckerConfig.from_env()


class TestLoadEnv:
    """Test .env loading."""

    def test_loads_dotenv_from_cwd(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("ADDRCHECK_TABLE=from_file\n", encoding="utf-8")
        clean_env.chdir(tmp_path)

        load_env()

        assert os.environ["ADDRCHECK_TABLE"] == "from_file"

    def test_existing_env_wins(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("ADDRCHECK_TABLE=from_file\n", encoding="utf-8")
        clean_env.chdir(tmp_path)
        clean_env.setenv("ADDRCHECK_TABLE", "from_env")

        load_env()

        assert os.environ["ADDRCHECK_TABLE"] == "from_env"

    def test_missing_dotenv_is_fine(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)

        load_env()

        assert "ADDRCHECK_TABLE" not in os.environ
