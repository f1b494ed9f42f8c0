"""Backend HTTP routes."""

from .uploads import uploads_bp

__all__ = ["uploads_bp"]
