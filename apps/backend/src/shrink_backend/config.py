"""Configuration management for the shrink backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PUBLIC_URL = "http://localhost:8888"


@dataclass(frozen=True)
class Config:
    """Backend configuration loaded from environment variables."""

    host: str = "0.0.0.0"
    port: int = 8888
    upload_dir: Path = Path("uploads")
    public_url: str = DEFAULT_PUBLIC_URL
    max_upload_size: int = 20 * 1024 * 1024
    target_size: int = 1024 * 1024

    @classmethod
    def load(cls) -> Config:
        """
        Load configuration from environment variables.

        Values are read once, when the app is created. Changing PUBLIC_URL
        afterwards has no effect until the app is rebuilt.
        """
        return cls(
            host=os.getenv("SHRINK_HOST", "0.0.0.0"),
            port=int(os.getenv("SHRINK_PORT", "8888")),
            upload_dir=Path(os.getenv("SHRINK_UPLOAD_DIR", "uploads")),
            public_url=os.getenv("PUBLIC_URL") or DEFAULT_PUBLIC_URL,
            max_upload_size=int(os.getenv("SHRINK_MAX_UPLOAD_SIZE", str(20 * 1024 * 1024))),
            target_size=int(os.getenv("SHRINK_TARGET_SIZE", str(1024 * 1024))),
        )

    def ensure_directories(self) -> None:
        """Create the upload directory. Existing derivatives are kept."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
