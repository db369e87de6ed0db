"""Conversation storage - keyed, replaceable history persistence.

Two backends behind one async get/set interface:
    InMemoryConversationStore: process-local, LRU-bounded, optional TTL
    RedisConversationStore: shared across workers, key conversation:{id}

Histories are immutable, so the in-memory store keeps the instances
themselves; Redis stores the pydantic JSON dump.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict

from ..domain.domain_type import ConversationBackend
from ..domain.domain_value import ConversationHistory

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisStoreConfig(BaseModel):
    """Redis connection configuration."""

    url: str

    model_config = ConfigDict(frozen=True)


class ConversationStore(Protocol):
    async def get(self, conversation_id: str) -> ConversationHistory | None: ...

    async def set(self, conversation_id: str, history: ConversationHistory) -> None: ...


class InMemoryConversationStore:
    """
    Process-local store with least-recently-used eviction.

    Reads and writes both count as use. An entry older than ttl_seconds
    (measured from its last write) reads as absent and is dropped.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, ConversationHistory]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._entries

    async def get(self, conversation_id: str) -> ConversationHistory | None:
        entry = self._entries.get(conversation_id)
        if entry is None:
            return None
        written_at, history = entry
        if self.ttl_seconds is not None and self._clock() - written_at >= self.ttl_seconds:
            del self._entries[conversation_id]
            logger.debug("Conversation %s expired", conversation_id)
            return None
        self._entries.move_to_end(conversation_id)
        return history

    async def set(self, conversation_id: str, history: ConversationHistory) -> None:
        self._entries[conversation_id] = (self._clock(), history)
        self._entries.move_to_end(conversation_id)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted conversation %s", evicted)


class RedisConversationStore:
    """Redis-backed store. Expiry is delegated to Redis via EX."""

    def __init__(self, redis: Redis, ttl_seconds: int | None = None, prefix: str = "conversation"):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    def key(self, conversation_id: str) -> str:
        return f"{self.prefix}:{conversation_id}"

    async def get(self, conversation_id: str) -> ConversationHistory | None:
        data = await self.redis.get(self.key(conversation_id))
        if not data:
            return None
        return ConversationHistory.model_validate_json(data)

    async def set(self, conversation_id: str, history: ConversationHistory) -> None:
        await self.redis.set(self.key(conversation_id), history.model_dump_json(), ex=self.ttl_seconds)


def create_conversation_store(
    backend: ConversationBackend | str,
    *,
    max_entries: int = 1000,
    ttl_seconds: int | None = None,
    redis_config: RedisStoreConfig | None = None,
) -> ConversationStore:
    """Factory from settings; the Redis client is created lazily here."""
    if ConversationBackend(backend) is ConversationBackend.REDIS:
        if redis_config is None:
            raise ValueError("Redis conversation store requires a RedisStoreConfig")
        from redis.asyncio import Redis

        logger.info("Using Redis conversation store")
        return RedisConversationStore(Redis.from_url(redis_config.url), ttl_seconds=ttl_seconds)

    logger.info("Using in-memory conversation store (max %d entries)", max_entries)
    return InMemoryConversationStore(max_entries=max_entries, ttl_seconds=ttl_seconds)


__all__ = [
    "ConversationStore",
    "InMemoryConversationStore",
    "RedisConversationStore",
    "RedisStoreConfig",
    "create_conversation_store",
]
