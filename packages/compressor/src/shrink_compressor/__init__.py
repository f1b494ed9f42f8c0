"""
Image Compression Engine.

This package is the core size-bounding logic. It is used by the
backend upload service.

Deployment:
    pip install shrink-app

This package has no networking dependencies. It's pure image processing.

"""

from .codec import CodecError, ImageCodec, PillowCodec
from .compress import (
    FALLBACK_MAX_WIDTH,
    FALLBACK_QUALITY,
    MAX_SIZE,
    QUALITY_LADDER,
    CompressionAttempt,
    CompressionEngine,
    CompressionResult,
    compress,
)

__all__ = [
    "CodecError",
    "ImageCodec",
    "PillowCodec",
    "MAX_SIZE",
    "QUALITY_LADDER",
    "FALLBACK_QUALITY",
    "FALLBACK_MAX_WIDTH",
    "CompressionAttempt",
    "CompressionEngine",
    "CompressionResult",
    "compress",
]
