"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the size scan of one directory tree.
Features:
- Recursively walks the tree with os.walk (symlinked directories are not followed)
- Keeps regular files only
- Applies extension and size filters
- Returns a ScanResult grouping paths by exact byte size
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import List, Optional

from keepclean.core.models import ScanResult, normalize_extensions
from keepclean.core.interfaces import SizeScanner

logger = logging.getLogger(__name__)


class ScanError(RuntimeError):
    """Root of a tree is missing, not a directory or cannot be listed."""


class SizeScannerImpl(SizeScanner):
    """
    Scans a directory recursively and buckets regular files by size.

    Attributes:
        root_dir: Root directory to scan, used as given for every produced path
        extensions: Allowed extensions without leading dot (e.g., ["txt", "jpg"]).
                    Empty means every regular file.
        min_size: Minimum file size in bytes, inclusive (optional)
        max_size: Maximum file size in bytes, inclusive (optional)
    """

    def __init__(
        self,
        root_dir: str,
        extensions: Optional[List[str]] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ):
        self.root_dir = root_dir
        self.extensions = normalize_extensions(extensions or [])
        self._suffixes = tuple("." + ext for ext in self.extensions)
        self.min_size = min_size
        self.max_size = max_size

    def scan(self) -> ScanResult:
        """
        Single-pass scan. Unreadable subtrees and files are logged,
        recorded in ScanResult.skipped and left out.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        logger.debug(f"Filters: min_size={self.min_size}, max_size={self.max_size}, extensions={self.extensions}")

        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise ScanError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise ScanError(error_msg)
        self._check_readable()

        result = ScanResult(root=self.root_dir)
        start_time = time.time()

        def on_walk_error(error: OSError) -> None:
            # os.walk drops the failing directory and carries on with its siblings
            logger.warning(f"Error walking directories, skipping: {error}")
            result.skipped.append(error.filename or str(error))

        for root, dirs, files in os.walk(self.root_dir, onerror=on_walk_error):
            for filename in files:
                path = os.path.join(root, filename)
                size = self._process_file(path, result)
                if size is not None:
                    result.add(size, path)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {result.file_count} matching files in {len(result.sizes)} sizes.")
        return result

    def _check_readable(self) -> None:
        """An unlistable root would otherwise walk as an empty tree."""
        try:
            with os.scandir(self.root_dir):
                pass
        except OSError as e:
            error_msg = f"Cannot read directory: {self.root_dir} ({e})"
            logger.error(error_msg)
            raise ScanError(error_msg) from e

    def _process_file(self, path: str, result: ScanResult) -> Optional[int]:
        """
        Returns the size of a regular file that passes all filters, else None.
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.warning(f"Could not stat {path}, skipping: {e}")
            result.skipped.append(path)
            return None

        # Symlinks, sockets, pipes and devices
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        if not self._extension_passes(path):
            return None

        size = st.st_size
        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes outside range)")
            return None

        return size

    def _size_passes(self, size: int) -> bool:
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True

    def _extension_passes(self, path: str) -> bool:
        """
        Case-insensitive suffix match against "." + extension.
        Works for multi-part extensions such as "tar.gz".
        """
        if not self._suffixes:
            return True
        return path.lower().endswith(self._suffixes)
