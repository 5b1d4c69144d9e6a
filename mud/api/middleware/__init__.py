"""API middleware modules."""

from .security import (
    AccessControlMiddleware,
    RequestIDMiddleware,
)

__all__ = [
    "AccessControlMiddleware",
    "RequestIDMiddleware",
]
