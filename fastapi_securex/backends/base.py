from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import Optional


class BaseSessionBackend(ABC):
    """Base class for all session storage backends."""

    @abstractmethod
    async def get(self, key: str) -> Optional[dict[str, Any]]:
        """Retrieve a stored session payload."""

    @abstractmethod
    async def set(
        self, key: str, value: dict[str, Any], ttl: Optional[int] = None
    ) -> None:
        """Store a session payload, expiring after ``ttl`` seconds."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a session payload."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every stored session."""
