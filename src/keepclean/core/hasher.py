"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Content hashing for same-size buckets with pluggable hash algorithms.

HashDisambiguatorImpl streams every file of a bucket through the chosen
algorithm and groups paths by hex digest. Unreadable files are logged and
reported in the result, never raised.
"""

import hashlib
import logging
from typing import List, Optional

import xxhash

from keepclean.core.models import HashAlgorithmName, HashResult
from keepclean.core.interfaces import HashAlgorithm, HashDisambiguator, HashState

logger = logging.getLogger(__name__)

READ_BLOCK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.SHA256.value

    def new(self) -> HashState:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    """XXH3 128-bit. Much faster than SHA-256, not cryptographic."""
    name = HashAlgorithmName.XXH128.value

    def new(self) -> HashState:
        return xxhash.xxh3_128()


ALGORITHMS = {
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.XXH128: XXHashAlgorithmImpl,
}


def get_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    return ALGORITHMS[name]()


class HashDisambiguatorImpl(HashDisambiguator):
    """
    Groups paths of one size bucket by full-content digest.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None, block_size: int = READ_BLOCK_SIZE):
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.block_size = block_size

    def disambiguate(self, paths: List[str]) -> HashResult:
        result = HashResult()
        for path in paths:
            try:
                digest = self.compute_digest(path)
            except OSError as e:
                logger.warning(f"Error computing hash for {path}, skipping: {e}")
                result.skipped.append(path)
                continue
            result.add(digest, path)

        if result.skipped:
            logger.warning(f"Skipped {len(result.skipped)} files due to hash computation errors")
        return result

    def compute_digest(self, path: str) -> str:
        """Streams the whole file through the algorithm; returns the hex digest."""
        state = self.algorithm.new()
        with open(path, 'rb') as f:
            for block in iter(lambda: f.read(self.block_size), b''):
                state.update(block)
        return state.hexdigest()
