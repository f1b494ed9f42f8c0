"""
Size-bounded recompression of uploaded images.

The workflow:
1. Payloads already within the target are returned untouched
2. Walk a fixed quality ladder, re-encoding the original payload each time
3. If no quality fits, re-encode once at a reduced width and return that
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from .codec import ImageCodec, PillowCodec

logger = logging.getLogger(__name__)

MAX_SIZE = 1024 * 1024

QUALITY_LADDER: tuple[int, ...] = (80, 70, 60, 50, 40, 30, 20)
FALLBACK_QUALITY = 70
FALLBACK_MAX_WIDTH = 800

Strategy = Literal["unchanged", "quality", "fallback"]


@dataclass(frozen=True)
class CompressionAttempt:
    """One re-encode tried during the search."""
    quality: int
    size: int
    max_width: int | None = None


@dataclass
class CompressionResult:
    """Outcome of a compression run."""
    data: bytes
    original_size: int
    strategy: Strategy
    attempts: list[CompressionAttempt] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.data)


class CompressionEngine:
    """
    Bring an encoded image under a byte size target.

    The first ladder quality whose output fits wins; the search does not
    look for a better quality afterwards. The width fallback is returned
    even when it is still over the target. A codec failure on any attempt
    ends the run with CodecError.
    """

    def __init__(self, codec: ImageCodec | None = None, target: int = MAX_SIZE):
        if target <= 0:
            raise ValueError(f"target must be positive, got {target}")
        self.codec: ImageCodec = codec or PillowCodec()
        self.target = target

    def run(self, payload: bytes) -> CompressionResult:
        original_size = len(payload)

        if original_size <= self.target:
            logger.debug("Payload %d bytes within target %d, left as is", original_size, self.target)
            return CompressionResult(payload, original_size, "unchanged")

        attempts: list[CompressionAttempt] = []

        for quality in QUALITY_LADDER:
            compressed = self.codec.encode(payload, quality)
            attempts.append(CompressionAttempt(quality, len(compressed)))
            logger.debug("Quality %d -> %d bytes", quality, len(compressed))

            if len(compressed) <= self.target:
                logger.info(
                    "Compressed %d -> %d bytes at quality %d",
                    original_size, len(compressed), quality,
                )
                return CompressionResult(compressed, original_size, "quality", attempts)

        compressed = self.codec.encode(payload, FALLBACK_QUALITY, FALLBACK_MAX_WIDTH)
        attempts.append(CompressionAttempt(FALLBACK_QUALITY, len(compressed), FALLBACK_MAX_WIDTH))

        if len(compressed) > self.target:
            logger.warning(
                "Width fallback still over target: %d > %d bytes",
                len(compressed), self.target,
            )
        else:
            logger.info(
                "Compressed %d -> %d bytes with width fallback",
                original_size, len(compressed),
            )
        return CompressionResult(compressed, original_size, "fallback", attempts)

    def compress(self, payload: bytes) -> bytes:
        """Return payload re-encoded to fit the target (see class docstring)."""
        return self.run(payload).data


def compress(payload: bytes, target: int = MAX_SIZE, codec: ImageCodec | None = None) -> bytes:
    """Compress payload with a one-off engine."""
    return CompressionEngine(codec, target).compress(payload)
