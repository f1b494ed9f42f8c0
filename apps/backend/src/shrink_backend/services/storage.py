"""
Flat on-disk store for compressed derivatives.

Every derivative lives directly under one content root, named by the
IdentityAllocator. There is no index, listing or deletion.
"""
from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from werkzeug.utils import secure_filename

from shrink_shared.files import is_in_dir

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class StorageError(RuntimeError):
    """Raised when the content root or a derivative cannot be written."""
    pass


@dataclass(frozen=True)
class Derivative:
    """A stored, possibly compressed, image."""
    filename: str
    path: Path
    size: int


class DerivativeStore:
    """Writes derivatives under a single content root."""

    def __init__(self, root: Path):
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def put(self, filename: str, data: bytes) -> Derivative:
        """
        Write data to root/filename.

        The bytes go to a temporary file next to the target and are moved
        into place, so a concurrent reader sees either nothing or the
        whole file. An existing file with the same name is replaced.

        Raises:
            StorageError: If the root cannot be created or the write fails
        """
        if not filename or secure_filename(filename) != filename:
            raise StorageError(f"Invalid derivative name: {filename!r}")

        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create {self._root}: {e}") from e

        path = self._root / filename
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".tmp-")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise StorageError(f"Failed to write {path}: {e}") from e

        logger.info("Stored %s (%d bytes)", filename, len(data))
        return Derivative(filename=filename, path=path, size=len(data))

    def path_for(self, filename: str) -> Path:
        """
        Resolve a stored derivative by name.

        Raises:
            FileNotFoundError: If no such derivative exists under the root
        """
        path = self._root / filename
        if path.name != filename or not is_in_dir(self._root, path) or not path.is_file():
            raise FileNotFoundError(filename)
        return path
