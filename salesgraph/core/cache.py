"""Side cache: key derivation, the CacheStore interface and its Redis backend."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import redis.asyncio as redis
from fastapi import Request
from redis.exceptions import RedisError

from salesgraph.core.config import Settings, get_settings
from salesgraph.core.exceptions import CacheUnavailableError
from salesgraph.core.logging import get_logger

logger = get_logger(__name__)


def cache_key(operation: str, *args: object) -> str:
    """Derive a cache key from an operation name and its arguments.

    ``cache_key("topSellingProducts", 5)`` -> ``"topSellingProducts:5"``.
    """
    return ":".join([operation, *(str(arg) for arg in args)])


@runtime_checkable
class CacheStore(Protocol):
    """Key to serialized-value store with per-entry expiry.

    Implementations raise CacheUnavailableError when the backend fails.
    """

    async def get(self, key: str) -> bytes | None:
        """Return the stored payload, or None when absent or expired."""
        ...

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        ...


class RedisCacheStore:
    """CacheStore backed by Redis ``GET`` / ``SET EX``."""

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    async def get(self, key: str) -> bytes | None:
        try:
            value = await self.client.get(key)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis GET failed: {e}", details={"key": key}) from e
        if value is None:
            return None
        return value if isinstance(value, bytes) else str(value).encode()

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        try:
            await self.client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheUnavailableError(f"Redis SET failed: {e}", details={"key": key}) from e

    async def ping(self) -> bool:
        """Check connectivity without raising."""
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False


class CacheAside:
    """Best-effort reads and writes over a CacheStore with a fixed TTL.

    Backend failures are logged and degrade to a miss (on read) or a skipped
    write, so a broken cache never fails a query.
    """

    def __init__(self, store: CacheStore, ttl_seconds: int) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds

    async def read(self, key: str) -> bytes | None:
        """Return the cached payload, or None on miss or cache failure."""
        try:
            payload = await self.store.get(key)
        except CacheUnavailableError as e:
            logger.warning("cache.read_failed", key=key, error=e.message)
            return None
        if payload is None:
            logger.debug("cache.miss", key=key)
        else:
            logger.debug("cache.hit", key=key)
        return payload

    async def write(self, key: str, payload: bytes) -> None:
        """Store ``payload`` with the configured TTL, ignoring cache failures."""
        try:
            await self.store.set(key, payload, self.ttl_seconds)
        except CacheUnavailableError as e:
            logger.warning("cache.write_failed", key=key, error=e.message)
            return
        logger.debug("cache.stored", key=key, ttl=self.ttl_seconds)


def create_redis_client(settings: Settings | None = None) -> redis.Redis:
    """Create the async Redis client from settings."""
    settings = settings or get_settings()
    return redis.from_url(
        settings.redis_url,
        socket_connect_timeout=settings.redis_socket_timeout_seconds,
        socket_timeout=settings.redis_socket_timeout_seconds,
    )


def get_cache(request: Request) -> CacheAside:
    """Dependency returning the cache-aside helper built in the application lifespan."""
    cache: CacheAside = request.app.state.cache
    return cache
