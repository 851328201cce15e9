"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from typing import Callable, Iterable

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import Session

from addrcheck.database import Address, Base
from addrcheck.logger import StructuredLogger, reset_logger


@pytest.fixture(autouse=True)
def fresh_logger():
    """Each test starts without a global logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    """Logger that writes nowhere but still tracks metrics."""
    return StructuredLogger(name="addrcheck.test", enable_console=False)


@pytest.fixture
def make_store(tmp_path) -> Callable[..., Path]:
    """Factory building a SQLite address store in tmp_path."""

    def _make(addresses: Iterable[str] = (), name: str = "addresses.db") -> Path:
        db_path = tmp_path / name
        engine = create_engine(URL.create("sqlite", database=str(db_path)))
        Base.metadata.create_all(engine)
        with Session(engine) as session:
            session.add_all([Address(address=a) for a in addresses])
            session.commit()
        engine.dispose()
        return db_path

    return _make


@pytest.fixture
def make_candidates(tmp_path) -> Callable[..., Path]:
    """Factory writing a candidate list file in tmp_path."""

    def _make(content: str, name: str = "candidates.txt") -> Path:
        text_path = tmp_path / name
        text_path.write_text(content, encoding="utf-8")
        return text_path

    return _make


@pytest.fixture
def sample_store(make_store) -> Path:
    """Store holding two well-known addresses."""
    return make_store(["1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"])
