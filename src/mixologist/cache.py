"""Search result cache backends."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from pydantic import ValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from mixologist.exceptions import CacheError
from mixologist.schema import CacheEntry

logger = logging.getLogger(__name__)


def cache_key(query: str) -> str:
    """Trimmed, lowercased query."""
    return query.strip().lower()


def _is_expired(entry: CacheEntry, ttl_seconds: float | None) -> bool:
    if ttl_seconds is None:
        return False
    created_at = entry.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    age = (datetime.now(timezone.utc) - created_at).total_seconds()
    return age > ttl_seconds


class BaseCache(ABC):
    """Abstract base class for result caches."""

    @abstractmethod
    async def get(self, query: str) -> CacheEntry | None:
        """Return the entry stored for `query`, or None on a miss.

        Raises:
            CacheError: If the backend fails
        """
        pass

    @abstractmethod
    async def set(self, entry: CacheEntry) -> None:
        """Store `entry`, replacing any entry with the same key.

        Raises:
            CacheError: If the backend fails
        """
        pass


class InMemoryCache(BaseCache):
    """Process-local cache, mainly for the CLI and tests."""

    def __init__(self, ttl_seconds: float | None = None):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, query: str) -> CacheEntry | None:
        key = cache_key(query)
        entry = self._entries.get(key)
        if entry is not None and _is_expired(entry, self.ttl_seconds):
            del self._entries[key]
            return None
        return entry

    async def set(self, entry: CacheEntry) -> None:
        key = cache_key(entry.query)
        self._entries[key] = entry.model_copy(update={"query": key})


class MongoCache(BaseCache):
    """Cache stored in a MongoDB collection, one document per query."""

    def __init__(
        self,
        uri: str,
        database: str = "mixologist",
        collection: str = "searchResults",
        *,
        ttl_seconds: float | None = None,
        client=None,
    ):
        """Initialize the Mongo cache.

        Args:
            uri: MongoDB connection string.
            database: Database name.
            collection: Collection name.
            ttl_seconds: Entries older than this are treated as misses.
            client: Pre-built `AsyncMongoClient`, mostly for tests.
        """
        if client is None:
            client = AsyncMongoClient(uri, tz_aware=True)
        self.client = client
        self.collection = client[database][collection]
        self.ttl_seconds = ttl_seconds

    async def get(self, query: str) -> CacheEntry | None:
        key = cache_key(query)
        try:
            document = await self.collection.find_one({"query": key})
        except PyMongoError as e:
            raise CacheError(f"Cache lookup failed: {e}") from e

        if document is None:
            return None
        document.pop("_id", None)
        try:
            entry = CacheEntry.model_validate(document)
        except ValidationError as e:
            raise CacheError(f"Cached entry for {key!r} is malformed: {e}") from e
        if _is_expired(entry, self.ttl_seconds):
            logger.info("cache entry for %r expired", key)
            return None
        return entry

    async def set(self, entry: CacheEntry) -> None:
        key = cache_key(entry.query)
        document = entry.model_dump(by_alias=True)
        document["query"] = key
        try:
            await self.collection.replace_one({"query": key}, document, upsert=True)
        except PyMongoError as e:
            raise CacheError(f"Cache write failed: {e}") from e
