"""
Command orchestrator for the keep/clean comparison.
The CLI only builds params and reports; all matching and removal happens here.
"""
import os
import time
import logging
from typing import Callable, Dict, List, Optional, Tuple

from keepclean.core.models import (
    CleanupParams, CleanupStats, DuplicatePair, HashResult, ScanResult)
from keepclean.core.scanner import SizeScannerImpl
from keepclean.core.hasher import HashDisambiguatorImpl, get_algorithm
from keepclean.core.interfaces import HashDisambiguator
from keepclean.services.file_service import FileService

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, Optional[int]], None]


class CleanupCommand:
    """
    Orchestrates one run:
    1. Scan keep and clean trees for file sizes
    2. Hash keep and clean paths of every size present in both trees
    3. Match digests across trees
    4. Remove (or, in dry run, report) every matched clean-tree file

    Usage:
        params = CleanupParams(keep_dir="/photos", clean_dir="/backup", dry_run=True)
        pairs, stats = CleanupCommand().execute(params)
        print(stats.summary())
    """

    def __init__(self, disambiguator: Optional[HashDisambiguator] = None, file_service=FileService):
        self._disambiguator = disambiguator
        self._file_service = file_service

    def execute(
            self,
            params: CleanupParams,
            progress_callback: Optional[ProgressCallback] = None,
    ) -> Tuple[List[DuplicatePair], CleanupStats]:
        """
        Run scan → hash → match → act.

        Args:
            params: Validated cleanup parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (duplicate pairs in processing order, statistics)

        Raises:
            ScanError: keep or clean root is missing, not a directory or unreadable
            DeletionError: a duplicate could not be removed (live mode only)
        """
        start_time = time.time()
        stats = CleanupStats()
        disambiguator = self._disambiguator or HashDisambiguatorImpl(get_algorithm(params.algorithm))

        if params.dry_run:
            logger.info("dry run: no files will be deleted")
        logger.debug(f"Content hash: {params.algorithm.display_name}")

        keep_scan = self._scan(params.keep_dir, params, "keep", progress_callback)
        stats.keep_sizes = len(keep_scan.sizes)
        clean_scan = self._scan(params.clean_dir, params, "clean", progress_callback)
        stats.clean_sizes = len(clean_scan.sizes)
        stats.skipped_paths += keep_scan.skipped_count + clean_scan.skipped_count

        shared_sizes = [size for size in keep_scan.sizes if size in clean_scan.sizes]
        stats.shared_sizes = len(shared_sizes)
        logger.debug(f"{len(shared_sizes)} file sizes present in both trees")

        pairs: List[DuplicatePair] = []
        for processed, size in enumerate(shared_sizes, 1):
            keepers = disambiguator.disambiguate(keep_scan.sizes[size])
            cleaners = disambiguator.disambiguate(clean_scan.sizes[size])
            stats.skipped_paths += keepers.skipped_count + cleaners.skipped_count

            for pair in self.match(size, keepers, cleaners):
                stats.record_duplicate(pair.size)
                pairs.append(pair)
                self._act(pair, params, stats)

            if progress_callback:
                progress_callback("Hashing", processed, len(shared_sizes))

        stats.total_time = time.time() - start_time
        logger.info(stats.summary())
        return pairs, stats

    @staticmethod
    def match(size: int, keepers: HashResult, cleaners: HashResult) -> List[DuplicatePair]:
        """
        Pairs every clean path whose digest also appears on the keep side.
        All clean copies of a keep file are matched, not just one per digest.
        """
        pairs = []
        keep_paths: Dict[str, str] = keepers.representatives
        for digest, keep_path in keep_paths.items():
            clean_paths = cleaners.groups.get(digest)
            if not clean_paths:
                continue
            keep_real = {os.path.realpath(p) for p in keepers.groups[digest]}
            for clean_path in clean_paths:
                # Overlapping trees: a keep-tree file must never be removed
                if os.path.realpath(clean_path) in keep_real:
                    logger.warning(f"{clean_path} is also in the keep tree, leaving it alone")
                    continue
                pairs.append(DuplicatePair(
                    keep_path=keep_path, clean_path=clean_path, size=size, digest=digest))
        return pairs

    def _scan(
            self,
            root: str,
            params: CleanupParams,
            label: str,
            progress_callback: Optional[ProgressCallback],
    ) -> ScanResult:
        logger.info(f"scanning {root} for file sizes")
        scanner = SizeScannerImpl(
            root_dir=root,
            extensions=params.extensions,
            min_size=params.min_size_bytes,
            max_size=params.max_size_bytes,
        )
        result = scanner.scan()
        logger.info(f"found {len(result.sizes)} {label} file sizes")
        if result.skipped:
            logger.warning(f"{result.skipped_count} entries under {root} could not be read")
        if progress_callback:
            progress_callback(f"Scanning {label}", result.file_count, None)
        return result

    def _act(self, pair: DuplicatePair, params: CleanupParams, stats: CleanupStats) -> None:
        if params.dry_run:
            logger.info(f"found {pair.clean_path} is dup of {pair.keep_path}")
            return

        logger.info(f"deleting {pair.clean_path} (dup of {pair.keep_path})")
        self._file_service.remove(pair.clean_path, params.removal)
        stats.removed_files += 1
