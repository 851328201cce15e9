"""
Batched membership lookup against the address store.

Candidates are checked in fixed-size batches, one parameterized
``SELECT ... WHERE address IN (...)`` per batch.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import String, bindparam, column, select, table
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from .config import DEFAULT_BATCH_SIZE, DEFAULT_COLUMN, DEFAULT_TABLE
from .errors import DecodeError, QueryError
from .logger import StructuredLogger, get_logger


@dataclass
class MatchResult:
    """Addresses found in the store plus counters for the run."""

    matches: List[str] = field(default_factory=list)
    candidates: int = 0
    batches: int = 0

    @property
    def found(self) -> bool:
        return bool(self.matches)


def chunked(items: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    """Split a sequence into consecutive chunks of at most `size` items."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def decode_address(value) -> str:
    """Return a store value as a string, or raise DecodeError."""
    if isinstance(value, str):
        return value
    raise DecodeError(f"Expected text address, got {type(value).__name__}: {value!r}")


def dedupe(addresses: Sequence[str]) -> List[str]:
    """Drop repeated addresses, keeping first-seen order."""
    return list(dict.fromkeys(addresses))


class BatchMatcher:
    """
    Checks candidate addresses against a store table in fixed-size batches.

    The membership statement is built once with an expanding bind parameter,
    so each batch size renders to one SQL string and the compiled form and
    prepared statement are reused across batches of that size.
    """

    def __init__(
        self,
        batch_size: int = DEFAULT_BATCH_SIZE,
        table_name: str = DEFAULT_TABLE,
        column_name: str = DEFAULT_COLUMN,
        unique: bool = False,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            batch_size: Maximum candidates bound into a single query
            table_name: Store table holding addresses
            column_name: Column of that table holding the address string
            unique: Deduplicate matches that recur across batches
            logger: Logger for batch diagnostics and metrics
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size
        self.unique = unique
        self.logger = logger or get_logger()

        address = column(column_name, String)
        table(table_name, address)  # binds the column to its table
        self.statement = select(address).where(
            address.in_(bindparam("batch", expanding=True))
        )

    def check_batch(self, connection: Connection, batch: Sequence[str]) -> List[str]:
        """
        Return the addresses of one batch that exist in the store.

        Raises:
            QueryError: If the statement cannot be prepared or executed
            DecodeError: If a returned value is not text
        """
        params: List[str] = list(batch)
        try:
            rows = connection.execute(self.statement, {"batch": params}).fetchall()
        except SQLAlchemyError as e:
            reason = getattr(e, "orig", None) or e
            raise QueryError(f"Batch query failed ({len(params)} addresses): {reason}") from e

        return [decode_address(row[0]) for row in rows]

    def match(self, connection: Connection, candidates: Sequence[str]) -> MatchResult:
        """
        Check every candidate and collect those present in the store.

        Matches are concatenated in batch order. Without ``unique`` a
        candidate repeated in two different batches is reported once per
        batch it matches in.
        """
        result = MatchResult(candidates=len(candidates))
        if not candidates:
            return result

        for index, batch in enumerate(chunked(candidates, self.batch_size)):
            found = self.check_batch(connection, batch)
            result.batches += 1
            result.matches.extend(found)
            self.logger.record_batch(len(found))
            self.logger.debug("Checked batch", batch=index, size=len(batch), found=len(found))

        if self.unique:
            result.matches = dedupe(result.matches)

        return result
