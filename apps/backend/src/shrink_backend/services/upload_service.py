"""
Upload orchestration for the shrink backend.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from shrink_compressor import CompressionEngine
from shrink_shared import IdentityAllocator, ValidationError, file_extension, is_supported_image

from .storage import DerivativeStore

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Image uploaded and compressed successfully"


@dataclass(frozen=True)
class UploadResult:
    """Summary returned to the client after a successful upload."""
    original_size: int
    compressed_size: int
    filename: str
    url: str

    def to_dict(self, message: str = SUCCESS_MESSAGE) -> dict[str, Any]:
        return {"message": message, **asdict(self)}


class UploadService:
    """Validates, compresses, names and stores a single upload."""

    def __init__(
        self,
        store: DerivativeStore,
        engine: CompressionEngine,
        allocator: IdentityAllocator,
        public_url: str,
    ):
        self.store = store
        self.engine = engine
        self.allocator = allocator
        self.public_url = public_url.rstrip("/")

    def url_for(self, filename: str) -> str:
        return f"{self.public_url}/uploads/{filename}"

    def handle(self, filename: str, data: bytes) -> UploadResult:
        """
        Process one uploaded image.

        Nothing is written to the store until compression has succeeded.

        Raises:
            ValidationError: If the file name has no supported image extension
            CodecError: If the image cannot be decoded or re-encoded
            StorageError: If the derivative cannot be written
        """
        if not is_supported_image(filename):
            raise ValidationError("Uploaded file is not a valid image")

        result = self.engine.run(data)

        name = self.allocator.allocate(file_extension(filename))
        derivative = self.store.put(name, result.data)

        logger.info(
            "Upload %s -> %s: %d -> %d bytes (%s)",
            filename, name, result.original_size, derivative.size, result.strategy,
        )
        return UploadResult(
            original_size=result.original_size,
            compressed_size=derivative.size,
            filename=name,
            url=self.url_for(name),
        )
