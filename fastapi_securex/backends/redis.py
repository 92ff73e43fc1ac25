from typing import TYPE_CHECKING
from typing import Any
from typing import Optional

import orjson

from fastapi_securex.exceptions import SecureXError
from fastapi_securex.exceptions import SessionBackendError

from .base import BaseSessionBackend

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis


class AsyncRedisBackend(BaseSessionBackend):
    """Async Redis session backend implementation."""

    client: "AsyncRedis[str]"

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        encoding: str = "utf-8",
        decode_responses: bool = True,
        socket_timeout: float = 1.0,
        socket_connect_timeout: float = 1.0,
        key_prefix: str = "securex:",
        **kwargs: Any,
    ) -> None:
        """Initialize async Redis session backend.

        Args:
            host: Redis host
            port: Redis port
            password: Redis password
            db: Redis database number
            encoding: Character encoding to use
            decode_responses: Whether to decode response automatically
            socket_timeout: Timeout for socket operations (in seconds)
            socket_connect_timeout: Timeout for socket connection (in seconds)
            key_prefix: Prefix for every key written by this backend
            **kwargs: Additional arguments to pass to Redis client
        """
        try:
            from redis.asyncio import Redis as AsyncRedis
        except ImportError:
            msg = "redis[hiredis] is not installed. Please install it with 'pip install \"redis[hiredis]\"' "
            raise SecureXError(msg) from None

        self.client = AsyncRedis(
            host=host,
            port=port,
            password=password,
            db=db,
            encoding=encoding,
            decode_responses=decode_responses,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout,
            **kwargs,
        )
        self.key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _serialize(self, value: dict[str, Any]) -> str:
        return orjson.dumps(value).decode()

    def _deserialize(self, value: str | bytes | None) -> Optional[dict[str, Any]]:
        if value is None:
            return None
        try:
            payload = orjson.loads(value)
        except orjson.JSONDecodeError:
            return None
        return payload if isinstance(payload, dict) else None

    async def get(self, key: str) -> Optional[dict[str, Any]]:
        try:
            value = await self.client.get(self._make_key(key))
        except Exception as e:
            msg = f"Failed to read session from Redis: {e}"
            raise SessionBackendError(msg) from e
        return self._deserialize(value)

    async def set(
        self, key: str, value: dict[str, Any], ttl: Optional[int] = None
    ) -> None:
        try:
            serialized = self._serialize(value)
        except TypeError as e:
            msg = f"Session payload is not serializable: {e}"
            raise SessionBackendError(msg) from e

        try:
            if ttl is not None:
                await self.client.setex(self._make_key(key), ttl, serialized)
            else:
                await self.client.set(self._make_key(key), serialized)
        except Exception as e:
            msg = f"Failed to write session to Redis: {e}"
            raise SessionBackendError(msg) from e

    async def delete(self, key: str) -> None:
        await self.client.delete(self._make_key(key))

    async def clear(self) -> None:
        """Remove every key carrying this backend's prefix."""
        cursor = 0
        pattern = f"{self.key_prefix}*"
        while True:
            cursor, keys = await self.client.scan(cursor, match=pattern, count=100)
            if keys:
                await self.client.delete(*keys)
            if cursor == 0:
                break
