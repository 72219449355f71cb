"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used by the keep/clean comparison.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-256, XXH3-128, ...).
- SizeScanner: Walks one tree and groups regular files by size.
- HashDisambiguator: Splits a same-size bucket by content digest.
"""

from typing import Protocol, List

from keepclean.core.models import ScanResult, HashResult


class HashState(Protocol):
    """Incremental hash object, as returned by hashlib.new() or xxhash.xxh3_128()."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for content hash algorithms.

    Allows plugging in different hashing functions without affecting
    the disambiguation logic.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh incremental hash object."""
        ...


class SizeScanner(Protocol):
    def scan(self) -> ScanResult:
        """
        Scan the configured root.

        Returns:
            ScanResult mapping size to paths, plus skipped entries.

        Raises:
            ScanError: root does not exist or is not a directory.
        """
        ...


class HashDisambiguator(Protocol):
    def disambiguate(self, paths: List[str]) -> HashResult:
        """
        Hash every path (all of one size) and group by hex digest.
        Unreadable paths are reported in HashResult.skipped, never raised.
        """
        ...
