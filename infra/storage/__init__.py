from .filesystem_storage_service import FileSystemStorageService

__all__ = ["FileSystemStorageService"]
