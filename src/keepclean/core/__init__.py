"""
Core comparison engine — size scanner, hash disambiguator and models.

- SizeScannerImpl: recursive traversal grouping regular files by byte size
- HashDisambiguatorImpl + Sha256AlgorithmImpl / XXHashAlgorithmImpl: full-content hashing
- Models: ScanResult, HashResult, DuplicatePair, CleanupParams, CleanupStats

Pure Python, no filesystem mutation happens here.
"""

from .scanner import SizeScannerImpl, ScanError
from .hasher import HashDisambiguatorImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, get_algorithm
from .models import (
    ScanResult, HashResult, DuplicatePair, CleanupParams, CleanupStats,
    HashAlgorithmName, RemovalMode)

__all__ = [
    "SizeScannerImpl",
    "ScanError",
    "HashDisambiguatorImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "get_algorithm",
    "ScanResult",
    "HashResult",
    "DuplicatePair",
    "CleanupParams",
    "CleanupStats",
    "HashAlgorithmName",
    "RemovalMode",
]
