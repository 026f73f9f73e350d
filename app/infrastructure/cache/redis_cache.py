"""Redis-based cache for resolved permission sets.

Async Redis caching with TTL support. Values are JSON-encoded. Every
operation degrades to a miss (or a no-op) when Redis is unreachable, so
callers fall back to the database.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import get_settings
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_DELETE_CHUNK_SIZE = 500


class CacheService:
    """Async Redis cache service with TTL support (implements ICacheService).

    Call connect() at startup and disconnect() at shutdown. When redis_enabled
    is False the service never connects and is_available() stays False.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. A supplied
                client is treated as connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring close error during reconnect", exc_info=True)
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op_name: str,
        key: str,
        op: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run op against Redis; retry once after reconnect on connection loss."""
        if not self.is_available() or self.redis is None:
            return fallback
        try:
            return await op(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await op(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op_name, key)
                    return fallback
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op_name, key)
            return fallback
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op_name, key)
            return fallback

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-decoded) or None if missing/unavailable."""

        async def _get(client: redis.Redis) -> Any | None:
            value = await client.get(key)
            if value is None:
                logger.debug("Cache MISS: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return json.loads(value)

        return await self._run("get", key, _get, None)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store JSON-serializable value with TTL (seconds). Returns True on success."""
        serialized = json.dumps(value)

        async def _set(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True

        return await self._run("set", key, _set, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command ran."""

        async def _delete(client: redis.Redis) -> bool:
            await client.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._run("delete", key, _delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Args:
            pattern: Redis SCAN match pattern (e.g. permission:*).

        Returns:
            Number of keys deleted.
        """

        async def _unlink(client: redis.Redis, chunk: list[str]) -> int:
            async with client.pipeline(transaction=False) as pipe:
                pipe.unlink(*chunk)
                results = await pipe.execute()
            return sum(int(r or 0) for r in results)

        async def _delete_pattern(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= _DELETE_CHUNK_SIZE:
                    deleted += await _unlink(client, chunk)
                    chunk = []
            if chunk:
                deleted += await _unlink(client, chunk)
            if deleted > 0:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted

        return await self._run("delete_pattern", pattern, _delete_pattern, 0)
