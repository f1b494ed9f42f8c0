"""
Image codec used by the compression engine.

The engine only needs one capability: re-encode a payload at a quality
level, optionally capped to a maximum width. PillowCodec provides it with
Pillow; tests can pass any object with the same ``encode`` signature.
"""

from __future__ import annotations

import io
import logging
from typing import Protocol

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

# Formats whose encoder takes a lossy quality setting.
QUALITY_FORMATS: frozenset[str] = frozenset({"JPEG", "WEBP"})

# Camera JPEGs can open as MPO; they are written back as plain JPEG.
SAVE_FORMATS: dict[str, str] = {"MPO": "JPEG"}


class CodecError(RuntimeError):
    """Raised when an image cannot be decoded or re-encoded."""

    def __init__(self, message: str, quality: int | None = None, max_width: int | None = None):
        self.quality = quality
        self.max_width = max_width
        super().__init__(message)


class ImageCodec(Protocol):
    def encode(self, data: bytes, quality: int, max_width: int | None = None) -> bytes:
        ...


class PillowCodec:
    """
    Re-encode images with Pillow, keeping the input container format.

    Quality applies to JPEG and WebP. PNG is saved optimized, GIF and BMP
    are re-saved as-is. Only the first frame of animated images is kept.
    Formats Pillow can read but not write (XPM, PSD, ...) fail with
    CodecError, as does any other decode or encode failure.
    """

    def encode(self, data: bytes, quality: int, max_width: int | None = None) -> bytes:
        try:
            return self._encode(data, quality, max_width)
        except CodecError:
            raise
        except Exception as e:
            raise CodecError(
                f"{type(e).__name__}: {e}", quality=quality, max_width=max_width
            ) from e

    def _encode(self, data: bytes, quality: int, max_width: int | None) -> bytes:
        with Image.open(io.BytesIO(data)) as src:
            if src.format is None:
                raise CodecError("Unknown image format", quality=quality, max_width=max_width)
            fmt = SAVE_FORMATS.get(src.format, src.format)
            if fmt not in Image.SAVE:
                raise CodecError(
                    f"Cannot write {src.format} images", quality=quality, max_width=max_width
                )

            img = ImageOps.exif_transpose(src)

            if max_width is not None and img.width > max_width:
                height = max(1, int(round(img.height * max_width / img.width)))
                logger.debug("Resizing %dx%d -> %dx%d", img.width, img.height, max_width, height)
                img = img.resize((max_width, height), Image.Resampling.LANCZOS)

            if fmt == "JPEG" and img.mode not in ("RGB", "L", "CMYK"):
                img = img.convert("RGB")

            out = io.BytesIO()
            img.save(out, format=fmt, **self._save_options(fmt, quality))

        return out.getvalue()

    @staticmethod
    def _save_options(fmt: str, quality: int) -> dict:
        if fmt == "JPEG":
            return {"quality": quality, "optimize": True}
        if fmt in QUALITY_FORMATS:
            return {"quality": quality}
        if fmt == "PNG":
            return {"optimize": True}
        return {}
