"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for keep/clean tree comparison: scan and hash results,
duplicate pairs, run parameters and run statistics.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from keepclean.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """Content hash algorithm used to confirm duplicates."""
    SHA256 = "sha256"
    XXH128 = "xxh128"

    @property
    def display_name(self) -> str:
        """Human-readable name for help text and logs."""
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.XXH128: "XXH3-128",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class RemovalMode(Enum):
    """How a confirmed duplicate is removed from the clean tree."""
    DELETE = "delete"
    TRASH = "trash"

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass
class ScanResult:
    """
    Files of one tree grouped by exact byte size.
    `sizes` preserves traversal order inside each bucket.
    `skipped` lists subtrees and files that could not be read.
    """
    root: str
    sizes: Dict[int, List[str]] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    def add(self, size: int, path: str) -> None:
        self.sizes.setdefault(size, []).append(path)

    @property
    def file_count(self) -> int:
        return sum(len(paths) for paths in self.sizes.values())

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __repr__(self):
        return f"<ScanResult root={self.root}, sizes={len(self.sizes)}, files={self.file_count}>"


@dataclass
class HashResult:
    """
    Paths of one size bucket grouped by hex digest.
    Every path is kept in `groups`; `representatives` collapses each
    digest to the last path seen.
    """
    groups: Dict[str, List[str]] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    def add(self, digest: str, path: str) -> None:
        self.groups.setdefault(digest, []).append(path)

    @property
    def representatives(self) -> Dict[str, str]:
        """Digest → single path, later input paths overwrite earlier ones."""
        return {digest: paths[-1] for digest, paths in self.groups.items()}

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __repr__(self):
        return f"<HashResult digests={len(self.groups)}, skipped={len(self.skipped)}>"


@dataclass(frozen=True)
class DuplicatePair:
    """A clean-tree file confirmed identical to a keep-tree file."""
    keep_path: str
    clean_path: str
    size: int
    digest: str


@dataclass
class CleanupStats:
    """
    Running totals for one run. Built and returned by CleanupCommand.execute.
    """
    duplicate_files: int = 0
    duplicate_bytes: int = 0
    removed_files: int = 0
    keep_sizes: int = 0
    clean_sizes: int = 0
    shared_sizes: int = 0
    skipped_paths: int = 0
    total_time: float = 0.0

    def record_duplicate(self, size: int) -> None:
        self.duplicate_files += 1
        self.duplicate_bytes += size

    @property
    def megabytes(self) -> float:
        return self.duplicate_bytes / (1024 * 1024)

    @property
    def gigabytes(self) -> float:
        return self.duplicate_bytes / (1024 * 1024 * 1024)

    def summary(self) -> str:
        return (
            f"found {self.duplicate_files} duplicate files with total size "
            f"{self.duplicate_bytes} ({self.megabytes:.2f} MB / {self.gigabytes:.2f} GB)"
        )


"""
DTO for cleanup parameters with built-in validation.
Built by the CLI, consumed by CleanupCommand.
"""

def normalize_extensions(extensions: List[str]) -> List[str]:
    """
    Lowercase, strip whitespace and leading dots, drop empty entries.
    ["JPG", ".Png", " ", "tar.gz"] → ["jpg", "png", "tar.gz"]
    """
    normalized = []
    for ext in extensions:
        ext = ext.strip().lower().lstrip(".")
        if ext and ext not in normalized:
            normalized.append(ext)
    return normalized


@dataclass
class CleanupParams:
    """Parameters for a keep/clean comparison run with validation."""
    keep_dir: str
    clean_dir: str
    extensions: List[str] = field(default_factory=list)
    dry_run: bool = False
    removal: RemovalMode = RemovalMode.DELETE
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA256
    min_size_bytes: int = 0
    max_size_bytes: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.keep_dir:
            raise ValueError("Keep directory cannot be empty")

        if not self.clean_dir:
            raise ValueError("Clean directory cannot be empty")

        if os.path.realpath(self.keep_dir) == os.path.realpath(self.clean_dir):
            raise ValueError("Keep and clean directories must be different")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        self.extensions = normalize_extensions(self.extensions)

    @staticmethod
    def from_human_readable(
            keep_dir: str,
            clean_dir: str,
            extensions_str: str = "",
            dry_run: bool = False,
            removal: RemovalMode = RemovalMode.DELETE,
            algorithm: HashAlgorithmName = HashAlgorithmName.SHA256,
            min_size_str: str = "0",
            max_size_str: Optional[str] = None,
    ) -> 'CleanupParams':
        """
        Factory method to create params from human-readable inputs.
        Extensions come as one comma-separated string ("jpg,PNG,.txt").
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str)
        max_size = ConvertUtils.human_to_bytes(max_size_str) if max_size_str else None

        ext_list = extensions_str.split(",") if extensions_str else []

        return CleanupParams(
            keep_dir=keep_dir,
            clean_dir=clean_dir,
            extensions=ext_list,
            dry_run=dry_run,
            removal=removal,
            algorithm=algorithm,
            min_size_bytes=min_size,
            max_size_bytes=max_size,
        )
