"""
File name helpers shared by the backend and the compressor.

Uploads are classified by extension only. Content is never sniffed here:
a file with a spoofed extension passes validation and fails later when
the codec tries to decode it.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

logger = logging.getLogger(__name__)

ALLOWED_IMG_EXTS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}
)


class ValidationError(ValueError):
    """Raised when an upload is missing or is not a supported image."""
    pass


def file_extension(filename: str) -> str:
    """Return the final suffix of filename, case preserved (".JPG", ".png", "")."""
    return PurePath(filename.replace("\\", "/")).suffix


def is_supported_image(filename: str) -> bool:
    """Check if the file name carries a supported image extension."""
    if not filename:
        return False
    return file_extension(filename).lower() in ALLOWED_IMG_EXTS


def is_in_dir(base: Path, target: Path) -> bool:
    """Check if target path is in base dir."""
    try:
        target.resolve().relative_to(base.resolve())
        return True
    except ValueError:
        return False
