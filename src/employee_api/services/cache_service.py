"""Redis caching service for single-employee lookups."""

import json
import logging

import redis.asyncio as redis
from pydantic import BaseModel

from employee_api.config import get_settings

logger = logging.getLogger(__name__)


class CacheConfig:
    """Cache configuration with key prefixes."""

    # Cache key prefixes (constant - not configurable)
    PREFIX_EMPLOYEES = "employees"


class CacheService:
    """Service for Redis-based caching of employee records.

    Values are JSON using the external field names. When Redis is not
    configured, or unreachable at startup, caching is disabled and every
    lookup is a miss. Errors from a connected Redis are raised to the caller.
    """

    _instance: "CacheService | None" = None

    def __init__(
        self,
        client: redis.Redis | None = None,
        namespace: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize cache service."""
        settings = get_settings()
        self._client = client
        self._connected = client is not None
        self.namespace = namespace or settings.cache_key_prefix
        self.ttl = ttl or settings.cache_ttl_employee

    @classmethod
    async def get_instance(cls) -> "CacheService":
        """Get or create cache service instance.

        Returns:
            CacheService singleton instance
        """
        if cls._instance is None:
            cls._instance = CacheService()
            await cls._instance._connect()
        return cls._instance

    @classmethod
    async def close_instance(cls) -> None:
        """Close the shared Redis connection, if any."""
        if cls._instance is not None and cls._instance._client is not None:
            await cls._instance._client.aclose()
        cls._instance = None

    async def _connect(self) -> None:
        """Connect to Redis server."""
        settings = get_settings()

        if not settings.redis_url:
            logger.warning("REDIS_URL not configured - caching disabled")
            return

        try:
            self._client = redis.from_url(
                str(settings.redis_url),
                encoding="utf-8",
                decode_responses=True,
            )
            await self._client.ping()
            self._connected = True
            logger.info("Redis cache connected successfully")
        except redis.RedisError as e:
            logger.warning("Failed to connect to Redis for caching: %s", e)
            self._client = None
            self._connected = False

    @property
    def is_connected(self) -> bool:
        """Check if cache is connected."""
        return self._connected and self._client is not None

    def _make_key(self, prefix: str, *parts: object) -> str:
        """Create a namespaced cache key from parts.

        Args:
            prefix: Key prefix
            *parts: Additional key parts

        Returns:
            Formatted cache key, e.g. ``employee-api:employees:42``
        """
        key_parts = [self.namespace, prefix] + [str(p) for p in parts if p is not None]
        return ":".join(key_parts)

    async def get(self, key: str) -> str | None:
        """Get value from cache."""
        if not self.is_connected:
            return None
        return await self._client.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds

        Returns:
            True if the value was stored
        """
        if not self.is_connected:
            return False

        if ttl:
            await self._client.setex(key, ttl, value)
        else:
            await self._client.set(key, value)
        return True

    async def delete(self, *keys: str) -> int:
        """Delete keys from cache.

        Returns:
            Number of keys deleted
        """
        if not self.is_connected or not keys:
            return 0
        return await self._client.delete(*keys)

    async def get_json(self, key: str) -> dict | list | None:
        """Get JSON value from cache.

        A corrupt entry is treated as a miss.
        """
        value = await self.get(key)
        if value:
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                logger.warning("Discarding unreadable cache entry %s", key)
                return None
        return None

    async def set_json(
        self,
        key: str,
        value: dict | list | BaseModel,
        ttl: int | None = None,
    ) -> bool:
        """Set JSON value in cache.

        Pydantic models are stored with their field aliases.
        """
        if isinstance(value, BaseModel):
            json_str = value.model_dump_json(by_alias=True)
        else:
            json_str = json.dumps(value)
        return await self.set(key, json_str, ttl)

    # Domain-specific cache methods

    async def get_employee(self, employee_id: int) -> dict | None:
        """Get cached employee data.

        Args:
            employee_id: Employee ID

        Returns:
            Cached employee payload or None
        """
        key = self._make_key(CacheConfig.PREFIX_EMPLOYEES, employee_id)
        cached = await self.get_json(key)
        return cached if isinstance(cached, dict) else None

    async def set_employee(self, employee_id: int, data: dict | BaseModel) -> bool:
        """Cache employee data with the configured TTL.

        Args:
            employee_id: Employee ID
            data: Employee payload

        Returns:
            True if successful
        """
        key = self._make_key(CacheConfig.PREFIX_EMPLOYEES, employee_id)
        return await self.set_json(key, data, self.ttl)

    async def evict_employee(self, employee_id: int) -> int:
        """Remove an employee from the cache.

        Returns:
            Number of keys deleted
        """
        key = self._make_key(CacheConfig.PREFIX_EMPLOYEES, employee_id)
        return await self.delete(key)


async def get_cache_service() -> CacheService:
    """Get the cache service instance.

    Returns:
        CacheService singleton instance
    """
    return await CacheService.get_instance()
