import asyncio
import copy
import time
from typing import Any
from typing import Optional

from fastapi_securex.types import SessionItem

from .base import BaseSessionBackend


class MemoryBackend(BaseSessionBackend):
    """In-memory session backend implementation.

    Expired items are dropped when read, and ``set`` sweeps the whole store
    at most once per ``cleanup_interval`` seconds. ``start_cleanup`` adds a
    periodic sweep on the running loop for idle processes.
    """

    def __init__(self) -> None:
        self.store: dict[str, SessionItem] = {}
        self.lock = asyncio.Lock()
        self.cleanup_interval = 60
        self._cleanup: asyncio.Task[None] | None = None
        self._last_sweep = time.time()

    async def get(self, key: str) -> Optional[dict[str, Any]]:
        async with self.lock:
            item = self.store.get(key)
            if item:
                if item.expiry is None or item.expiry > time.time():
                    return copy.deepcopy(item.payload)
                else:
                    del self.store[key]
                    return None
            return None

    async def set(
        self, key: str, value: dict[str, Any], ttl: Optional[int] = None
    ) -> None:
        async with self.lock:
            now = time.time()
            if now - self._last_sweep >= self.cleanup_interval:
                self._purge(now)
            expiry = now + ttl if ttl is not None else None
            self.store[key] = SessionItem(payload=copy.deepcopy(value), expiry=expiry)

    async def delete(self, key: str) -> None:
        async with self.lock:
            self.store.pop(key, None)

    async def clear(self) -> None:
        async with self.lock:
            self.store.clear()

    def start_cleanup(self) -> None:
        """Start the periodic expiry sweep on the running loop."""
        if self._cleanup is None or self._cleanup.done():
            self._cleanup = asyncio.get_running_loop().create_task(
                self._cleanup_task()
            )

    def stop_cleanup(self) -> None:
        if self._cleanup is not None:
            self._cleanup.cancel()
            self._cleanup = None

    async def _cleanup_task(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval)
            await self.cleanup()

    async def cleanup(self) -> None:
        async with self.lock:
            self._purge(time.time())

    def _purge(self, now: float) -> None:
        expired_keys = [
            k
            for k, v in self.store.items()
            if v.expiry is not None and v.expiry <= now
        ]
        for key in expired_keys:
            self.store.pop(key, None)
        self._last_sweep = now
