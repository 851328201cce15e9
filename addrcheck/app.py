import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .checker import CheckResult, check_addresses
from .config import CheckerConfig
from .env import load_env
from .errors import CheckError
from .logger import configure_logger

EXIT_NOT_FOUND = 0
EXIT_FOUND = 1
EXIT_ERROR = 2


def report(outcome: CheckResult) -> int:
    """Print the match report to stderr and return the exit code."""
    if outcome.found:
        print(f"✓ Found {len(outcome.matches)} address(es) in database:", file=sys.stderr)
        for address in outcome.matches:
            print(f"  → {address}", file=sys.stderr)
        return EXIT_FOUND
    print("✗ No addresses found in database", file=sys.stderr)
    return EXIT_NOT_FOUND


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="addrcheck",
        description="Check whether any address from a text list exists in a SQLite address database. "
                    "Exit status: 0 = none found, 1 = found, 2 = error.",
    )
    parser.add_argument("db_path", nargs="?", help="Path to address database (default: btc_addresses.db)")
    parser.add_argument("text_path", nargs="?", help="Path to address list, one per line (default: addressonly.txt)")
    parser.add_argument("--batch-size", type=int, help="Addresses per query (default: 1000)")
    parser.add_argument("--busy-timeout", type=float, help="Seconds to wait for a locked database (default: 5)")
    parser.add_argument("--table", dest="table_name", help="Table holding addresses (default: addresses)")
    parser.add_argument("--column", dest="column_name", help="Column holding addresses (default: address)")
    parser.add_argument("--unique", action="store_true", default=None,
                        help="Report each matched address once even if it repeats in the list")
    parser.add_argument("--no-unique", dest="unique", action="store_false",
                        help="Report a match once per batch it appears in (default)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper, help="Diagnostic log level on stderr (default: WARNING)")
    parser.add_argument("--log-dir", help="Also write a debug log file into this directory")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Load .env if present (ADDRCHECK_* settings)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = CheckerConfig.from_env().with_overrides(
            db_path=Path(args.db_path) if args.db_path else None,
            text_path=Path(args.text_path) if args.text_path else None,
            batch_size=args.batch_size,
            busy_timeout=args.busy_timeout,
            table_name=args.table_name,
            column_name=args.column_name,
            unique=args.unique,
            log_level=args.log_level,
            log_dir=Path(args.log_dir) if args.log_dir else None,
        )
    except ValueError as e:
        parser.error(str(e))

    logger = configure_logger(
        level=config.log_level,
        log_dir=config.log_dir,
        enable_file=config.log_dir is not None,
    )

    try:
        outcome = check_addresses(config, logger=logger)
    except CheckError as e:
        logger.record_error(e.kind)
        logger.info("Check failed", kind=e.kind, error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        logger.log_metrics_summary()

    return report(outcome)


if __name__ == "__main__":
    sys.exit(main())
