import asyncio
import json
import logging
from typing import Optional, Sequence, Set, Tuple

from redis import RedisError
from redis.asyncio import Redis

from devbytes.application.live_data import LiveData, MutableLiveData
from devbytes.application.ports.video_store import VideoStore
from devbytes.core.exceptions import StorageError
from devbytes.core.models import VideoItem
from devbytes.infrastructure.cache.redis_client import get_redis_client

log = logging.getLogger("devbytes.video_store")


class RedisVideoStore(VideoStore):
    """Keeps the whole playlist as one JSON document under a single key.

    A single ``SET`` replaces the document, so readers see either the old
    playlist or the new one. A write that has been sent runs to completion
    even if the caller is cancelled; :meth:`close` waits for such writes.
    """

    def __init__(self, key: str = "videos:devbytes:all", redis: Optional[Redis] = None) -> None:
        self._key = key
        self._redis = redis
        self._live: MutableLiveData[Tuple[VideoItem, ...]] = MutableLiveData(())
        self._pending: Set[asyncio.Task] = set()

    def _client(self) -> Redis:
        if self._redis is None:
            self._redis = get_redis_client()
        return self._redis

    async def load(self) -> Tuple[VideoItem, ...]:
        try:
            cached = await self._client().get(self._key)
        except RedisError as exc:
            raise StorageError(f"Failed to read playlist cache key={self._key}") from exc
        if not cached:
            return self._live.value
        if isinstance(cached, bytes):
            cached = cached.decode("utf-8", errors="replace")
        try:
            items = tuple(VideoItem.from_dict(doc) for doc in json.loads(cached))
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Corrupt playlist cache key={self._key}") from exc

        self._live.set_value(items)
        log.info("Playlist cache loaded items=%d key=%s", len(items), self._key)
        return items

    async def replace_all(self, items: Sequence[VideoItem]) -> None:
        snapshot = tuple(items)
        payload = json.dumps([item.to_dict() for item in snapshot], ensure_ascii=False)

        write = asyncio.get_running_loop().create_task(self._commit(payload, snapshot))
        self._pending.add(write)
        write.add_done_callback(self._pending.discard)
        try:
            await asyncio.shield(write)
        except asyncio.CancelledError:
            # nobody awaits the write any more, report its outcome here
            write.add_done_callback(self._log_abandoned_write)
            raise

    async def _commit(self, payload: str, snapshot: Tuple[VideoItem, ...]) -> None:
        try:
            await self._client().set(self._key, payload)
        except RedisError as exc:
            raise StorageError(f"Failed to write playlist cache key={self._key}") from exc
        self._live.set_value(snapshot)

    def _log_abandoned_write(self, write: asyncio.Task) -> None:
        if write.cancelled():
            return
        exc = write.exception()
        if exc is not None:
            log.error("Playlist cache write failed after caller was cancelled", exc_info=exc)

    def observe_all(self) -> LiveData[Tuple[VideoItem, ...]]:
        return self._live.as_live_data()

    async def close(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._redis is not None:
            await self._redis.aclose()
