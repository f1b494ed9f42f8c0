"""
Shared helpers for the image shrinking service

The backend uses it to validate uploads by extension and to
name stored derivatives. It has no image or HTTP dependencies.

Deployment:
    pip install shrink-app
"""

from .files import (
    ALLOWED_IMG_EXTS,
    ValidationError,
    file_extension,
    is_in_dir,
    is_supported_image,
)
from .naming import IdentityAllocator

__all__ = [
    # Files
    "ALLOWED_IMG_EXTS",
    "ValidationError",
    "file_extension",
    "is_in_dir",
    "is_supported_image",
    # Naming
    "IdentityAllocator",
]
