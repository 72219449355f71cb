from .file_service import FileService, DeletionError

__all__ = ["FileService", "DeletionError"]
