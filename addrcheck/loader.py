"""
Candidate loading from newline-delimited text files.
"""

from pathlib import Path
from typing import Iterator, List, Optional

from .config import DEFAULT_READ_BUFFER
from .errors import SourceReadError
from .logger import StructuredLogger, get_logger


def iter_candidates(
    path: Path,
    buffer_size: int = DEFAULT_READ_BUFFER,
    logger: Optional[StructuredLogger] = None,
) -> Iterator[str]:
    """
    Yield trimmed, non-empty lines from a text file.

    Args:
        path: Path to the candidate list
        buffer_size: Read buffer size in bytes
        logger: Logger receiving counts once the file is exhausted

    Raises:
        SourceReadError: If the file cannot be opened, read, or decoded
    """
    logger = logger or get_logger()
    path = Path(path)
    lines = 0
    skipped = 0
    try:
        # utf-8-sig drops a leading BOM; only \n ends a line, strip() removes a CRLF's \r
        with path.open("r", encoding="utf-8-sig", buffering=buffer_size, newline="\n") as f:
            for line in f:
                lines += 1
                address = line.strip()
                if not address:
                    skipped += 1
                    continue
                yield address
    except UnicodeDecodeError as e:
        raise SourceReadError(
            f"Cannot decode {path} near line {lines + 1}: {e.reason}"
        ) from e
    except OSError as e:
        raise SourceReadError(f"Cannot read {path}: {e.strerror or e}") from e

    logger.record_candidates(lines - skipped, skipped)
    logger.debug("Read candidate file", path=str(path), lines=lines, blank_lines=skipped)


def load_candidates(
    path: Path,
    buffer_size: int = DEFAULT_READ_BUFFER,
    logger: Optional[StructuredLogger] = None,
) -> List[str]:
    """Read every candidate address from a file, preserving file order."""
    return list(iter_candidates(path, buffer_size=buffer_size, logger=logger))
