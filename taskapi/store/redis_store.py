from contextlib import contextmanager
from typing import Mapping, Optional

from redis.asyncio import Redis, RedisError

from taskapi.core.config import Settings
from taskapi.core.exceptions import StoreError

import logging

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str, key: str):
    """Re-raise any Redis failure as StoreError, keeping the cause chained."""
    try:
        yield
    except RedisError as e:
        logger.error(f"Redis {operation} error on {key!r}: {e}")
        raise StoreError(f"Redis {operation} failed") from e


class RedisKeyValueStore:
    """
    KeyValueStore backed by a redis.asyncio client.

    Records map to hashes, membership indexes to sets, id counters to INCR
    and secondary indexes to plain strings. The client must be created
    with decode_responses=True so every reply is a str.
    """

    def __init__(self, redis: Redis):
        self._redis = redis

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisKeyValueStore":
        redis = Redis.from_url(
            settings.redis_dsn,
            encoding="utf-8",
            decode_responses=True,
            max_connections=settings.redis_pool_size,
            socket_connect_timeout=settings.redis_connect_timeout,
            socket_keepalive=True,
            health_check_interval=30,
        )
        return cls(redis)

    async def increment(self, counter_key: str) -> int:
        with _translate_errors("INCR", counter_key):
            return int(await self._redis.incr(counter_key))

    async def get_field_map(self, key: str) -> dict[str, str]:
        with _translate_errors("HGETALL", key):
            return dict(await self._redis.hgetall(key))

    async def set_fields(self, key: str, fields: Mapping[str, str]) -> None:
        with _translate_errors("HSET", key):
            await self._redis.hset(key, mapping=dict(fields))

    async def set_field(self, key: str, field: str, value: str) -> None:
        with _translate_errors("HSET", key):
            await self._redis.hset(key, field, value)

    async def delete_key(self, key: str) -> None:
        with _translate_errors("DEL", key):
            await self._redis.delete(key)

    async def add_to_index(self, index_key: str, member: str) -> None:
        with _translate_errors("SADD", index_key):
            await self._redis.sadd(index_key, member)

    async def remove_from_index(self, index_key: str, member: str) -> None:
        with _translate_errors("SREM", index_key):
            await self._redis.srem(index_key, member)

    async def list_index_members(self, index_key: str) -> list[str]:
        with _translate_errors("SMEMBERS", index_key):
            return list(await self._redis.smembers(index_key))

    async def scan_keys(self, pattern: str) -> list[str]:
        keys = []
        with _translate_errors("SCAN", pattern):
            async for key in self._redis.scan_iter(match=pattern, count=50):
                keys.append(key)
        return keys

    async def get_string(self, key: str) -> Optional[str]:
        with _translate_errors("GET", key):
            return await self._redis.get(key)

    async def set_string(self, key: str, value: str) -> None:
        with _translate_errors("SET", key):
            await self._redis.set(key, value)

    async def ping(self) -> bool:
        with _translate_errors("PING", "-"):
            return bool(await self._redis.ping())

    async def close(self):
        """Graceful shutdown of the connection pool."""
        try:
            await self._redis.aclose()
            logger.info("Redis connection closed")
        except RedisError as e:
            logger.error(f"Error closing Redis: {e}")
