"""HTTP service for structid identifier generation and validation."""

from .api import app

__all__ = [
    "app",
]
