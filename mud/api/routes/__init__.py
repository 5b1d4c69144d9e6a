"""API route modules."""

from . import health

__all__ = [
    "health",
]
