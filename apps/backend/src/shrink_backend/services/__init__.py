"""Backend services."""

from .storage import Derivative, DerivativeStore, StorageError
from .upload_service import UploadResult, UploadService

__all__ = [
    "Derivative",
    "DerivativeStore",
    "StorageError",
    "UploadResult",
    "UploadService",
]
