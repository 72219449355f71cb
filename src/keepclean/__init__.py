"""
keepclean — remove files from a "clean" tree that duplicate files in a "keep" tree.

Core features:
- Two-phase matching: group by exact size, confirm by full-content hash
- SHA-256 by default, XXH3-128 (xxhash) for speed
- Permanent deletion or move to system trash (via send2trash)
- Dry-run mode that reports without touching the filesystem
"""

try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("keepclean")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API
from keepclean.commands import CleanupCommand
from keepclean.core import (
    CleanupParams, CleanupStats, DuplicatePair, HashAlgorithmName, RemovalMode,
    ScanError, ScanResult, HashResult)
from keepclean.services import FileService, DeletionError
from keepclean.utils.convert_utils import ConvertUtils

__all__ = [
    "CleanupCommand",
    "CleanupParams",
    "CleanupStats",
    "DuplicatePair",
    "HashAlgorithmName",
    "RemovalMode",
    "ScanError",
    "ScanResult",
    "HashResult",
    "FileService",
    "DeletionError",
    "ConvertUtils",
    "__version__",
]
