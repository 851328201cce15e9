"""
Address store schema and read-only connection management.

The store is an existing SQLite database owned by someone else; this module
only ever opens it read-only (SQLite URI mode=ro plus PRAGMA query_only).
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
from urllib.parse import quote

from sqlalchemy import Column, String, create_engine, event
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from .config import DEFAULT_BUSY_TIMEOUT
from .errors import StoreConnectionError
from .logger import StructuredLogger, get_logger

Base = declarative_base()

# Applied on every new DBAPI connection. None of these permit writes or
# change query results.
READ_PRAGMAS = (
    "PRAGMA query_only = ON",
    "PRAGMA read_uncommitted = 1",
    "PRAGMA temp_store = MEMORY",
    "PRAGMA mmap_size = 268435456",
    "PRAGMA cache_size = -64000",
)

# sqlite3 prepared statement cache; one entry per distinct batch size
STATEMENT_CACHE_SIZE = 128


class Address(Base):
    """
    Expected layout of the address store.

    The store is external and never written here; this model documents the
    default table and column and is used to build stores in tests.
    BatchMatcher queries by name so other layouts work too.
    """

    __tablename__ = "addresses"

    address = Column(String, primary_key=True)


def store_url(db_path: Path) -> URL:
    """
    Build a read-only SQLite URI for a database file.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy URL opening the file with mode=ro
    """
    location = quote(Path(db_path).as_posix())
    return URL.create(
        "sqlite+pysqlite",
        database=f"file:{location}",
        query={"mode": "ro", "uri": "true"},
    )


def _apply_read_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    try:
        for pragma in READ_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def create_store_engine(db_path: Path, busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> Engine:
    """
    Create an engine for the store without connecting.

    Args:
        db_path: Path to SQLite database file
        busy_timeout: Seconds to wait for a lock held by a writer

    Returns:
        SQLAlchemy engine with read pragmas installed
    """
    engine = create_engine(
        store_url(db_path),
        connect_args={
            "timeout": busy_timeout,
            "cached_statements": STATEMENT_CACHE_SIZE,
        },
    )
    event.listen(engine, "connect", _apply_read_pragmas)
    return engine


@contextmanager
def open_store(
    db_path: Path,
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT,
    logger: Optional[StructuredLogger] = None,
) -> Iterator[Connection]:
    """
    Open the store read-only for the duration of a with-block.

    Args:
        db_path: Path to SQLite database file
        busy_timeout: Seconds to wait for a lock held by a writer
        logger: Logger for connection diagnostics

    Yields:
        SQLAlchemy connection

    Raises:
        StoreConnectionError: If the file cannot be opened or a pragma is rejected
    """
    logger = logger or get_logger()
    db_path = Path(db_path)
    engine = create_store_engine(db_path, busy_timeout=busy_timeout)
    try:
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            reason = getattr(e, "orig", None) or e
            raise StoreConnectionError(f"Cannot open database {db_path}: {reason}") from e

        logger.debug("Opened store read-only", path=str(db_path), busy_timeout=busy_timeout)
        try:
            yield connection
        finally:
            connection.close()
    finally:
        engine.dispose()
