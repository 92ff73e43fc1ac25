"""Session storage backends for FastAPI-SecureX."""

from .base import BaseSessionBackend
from .memory import MemoryBackend
from .redis import AsyncRedisBackend

__all__ = [
    "AsyncRedisBackend",
    "BaseSessionBackend",
    "MemoryBackend",
]
