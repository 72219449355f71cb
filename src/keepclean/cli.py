#!/usr/bin/env python3
"""
keepclean CLI — remove files from a clean tree that duplicate files in a keep tree.
The keep tree is never modified. Use -dry to see what would be removed.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import logging
from typing import List, Optional, NoReturn

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from keepclean.core.models import CleanupParams, CleanupStats, DuplicatePair, RemovalMode
from keepclean.core.scanner import ScanError
from keepclean.commands import CleanupCommand
from keepclean.services.file_service import DeletionError
from keepclean.utils.convert_utils import ConvertUtils
from keepclean.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    EXTENSIONS_HELP_TEXT, EPILOG_TEXT
)

logger = logging.getLogger("keepclean")


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments. Missing -keep/-clean prints usage and exits."""
        parser = argparse.ArgumentParser(
            prog="keepclean",
            description="keepclean — delete files from the clean tree that already exist in the keep tree",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Required arguments
        parser.add_argument(
            "-keep", "--keep",
            required=True,
            type=str,
            dest="keep",
            help="Directory to look for duplicates in; nothing here is deleted"
        )
        parser.add_argument(
            "-clean", "--clean",
            required=True,
            type=str,
            dest="clean",
            help="Directory to find and delete duplicates in"
        )

        # Filtering options
        parser.add_argument(
            "-extensions", "--extensions",
            default="",
            type=str,
            dest="extensions",
            help=EXTENSIONS_HELP_TEXT
        )
        parser.add_argument(
            "--min-size",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--max-size",
            default=None,
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). Default: no limit"
        )
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "-dry", "--dry",
            action="store_true",
            dest="dry",
            help="Dry run: report duplicates, make no changes"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of deleting them"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Only log warnings and errors"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Log every scanned and skipped file, show progress"
        )

        return parser.parse_args(args)

    def setup_logging(self) -> None:
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.WARNING
        else:
            level = logging.INFO
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
        logger.setLevel(level)

    def create_params(self, args: argparse.Namespace) -> CleanupParams:
        """Create CleanupParams from CLI arguments."""
        try:
            return CleanupParams.from_human_readable(
                keep_dir=args.keep,
                clean_dir=args.clean,
                extensions_str=args.extensions,
                dry_run=args.dry,
                removal=RemovalMode.TRASH if args.trash else RemovalMode.DELETE,
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                min_size_str=args.min_size,
                max_size_str=args.max_size,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - reported through the logger at DEBUG."""
        if total and total > 0:
            percent = (current / total) * 100
            logger.debug(f"[{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            logger.debug(f"[{stage}] {current} files found")

    def run_cleanup(self, params: CleanupParams) -> tuple[List[DuplicatePair], CleanupStats]:
        """Execute the cleanup; fatal errors end the process."""
        command = CleanupCommand()
        try:
            pairs, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
            )
        except ScanError as e:
            self.error_exit(f"Scan failed: {e}")
        except DeletionError as e:
            self.error_exit(str(e))

        if self.verbose:
            logger.debug(
                f"{ConvertUtils.bytes_to_human(stats.duplicate_bytes)} of duplicate data found "
                f"in {stats.total_time:.2f}s, {stats.skipped_paths} unreadable entries skipped"
            )
        return pairs, stats

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Log a fatal error and exit."""
        logger.critical(message)
        sys.exit(code)

    def run(self, argv=None) -> CleanupStats:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.setup_logging()

        params = self.create_params(args)
        _, stats = self.run_cleanup(params)
        return stats


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
