"""Cache: Redis service for resolved permission sets (implements ICacheService)."""

from app.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService"]
