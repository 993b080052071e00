"""Storage abstraction layer."""

from .base import (
    StorageBackend,
    LocalStorageBackend,
    S3StorageBackend,
    get_storage_backend,
    get_storage_backend_for,
)

__all__ = [
    "StorageBackend",
    "LocalStorageBackend",
    "S3StorageBackend",
    "get_storage_backend",
    "get_storage_backend_for",
]
