"""
End-to-end address check: load candidates, open the store, match.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import CheckerConfig
from .database import open_store
from .loader import load_candidates
from .logger import StructuredLogger, get_logger
from .matcher import BatchMatcher, MatchResult


@dataclass
class CheckResult:
    """Outcome of a successful run."""

    db_path: Path
    text_path: Path
    result: MatchResult

    @property
    def matches(self) -> List[str]:
        return self.result.matches

    @property
    def found(self) -> bool:
        return self.result.found


def check_addresses(config: CheckerConfig, logger: Optional[StructuredLogger] = None) -> CheckResult:
    """
    Check the candidate file in `config` against its address store.

    The store is opened even when there are no candidates, so a bad store
    path is always reported; no query is issued in that case.

    Args:
        config: Run settings
        logger: Logger for diagnostics and metrics

    Returns:
        CheckResult with the matched addresses

    Raises:
        CheckError: Any load, connection, query, or decode failure
    """
    logger = logger or get_logger()

    candidates = load_candidates(
        config.text_path, buffer_size=config.read_buffer_size, logger=logger
    )
    logger.info("Loaded candidates", path=str(config.text_path), count=len(candidates))

    matcher = BatchMatcher(
        batch_size=config.batch_size,
        table_name=config.table_name,
        column_name=config.column_name,
        unique=config.unique,
        logger=logger,
    )

    with open_store(config.db_path, busy_timeout=config.busy_timeout, logger=logger) as connection:
        result = matcher.match(connection, candidates)

    logger.info(
        "Check complete",
        candidates=result.candidates,
        batches=result.batches,
        matches=len(result.matches),
    )
    return CheckResult(db_path=config.db_path, text_path=config.text_path, result=result)
