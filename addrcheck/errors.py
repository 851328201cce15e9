"""
Error taxonomy for address checks.

Every failure aborts the run; the CLI maps any CheckError to exit code 2.
"""


class CheckError(Exception):
    """Base class for failures while checking addresses."""

    kind = "check"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SourceReadError(CheckError):
    """Candidate source missing, unreadable, or not valid UTF-8."""

    kind = "io"


class StoreConnectionError(CheckError):
    """Store missing, unopenable, or rejected a tuning pragma."""

    kind = "connection"


class QueryError(CheckError):
    """A batch membership query failed to prepare or execute."""

    kind = "query"


class DecodeError(CheckError):
    """A returned row value could not be read as a string."""

    kind = "decode"
