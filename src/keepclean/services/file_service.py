"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
The only place where keepclean mutates the filesystem.
Files are either unlinked or moved to the system trash (via send2trash).
"""
import os
import logging
from pathlib import Path

from send2trash import send2trash

from keepclean.core.models import RemovalMode

logger = logging.getLogger(__name__)


class DeletionError(RuntimeError):
    """A confirmed duplicate could not be removed. Fatal for the run."""


class FileService:
    """Removal of confirmed duplicates from the clean tree."""

    @staticmethod
    def delete_file(file_path: str):
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise DeletionError(f"error removing {file_path}: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise DeletionError(f"error moving {file_path} to trash: file not found")

        try:
            send2trash(str(path))
        except Exception as e:
            raise DeletionError(f"error moving {file_path} to trash: {e}") from e

    @classmethod
    def remove(cls, file_path: str, mode: RemovalMode = RemovalMode.DELETE):
        """Dispatches on removal mode. Raises DeletionError on failure."""
        if mode == RemovalMode.TRASH:
            cls.move_to_trash(file_path)
        else:
            cls.delete_file(file_path)
        logger.debug(f"Removed {file_path} ({mode.value})")
