import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from redis import RedisError

from devbytes.core.exceptions import StorageError
from devbytes.infrastructure.cache import InMemoryVideoStore, RedisVideoStore
from devbytes.infrastructure.playlist import get_video_store

CACHE_KEY = "test_videos:devbytes"


def test_replace_all_writes_single_document(video_item):
    redis = AsyncMock()
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)
    items = [video_item("A"), video_item("B")]

    asyncio.run(store.replace_all(items))

    key, payload = redis.set.await_args.args
    assert key == CACHE_KEY
    assert json.loads(payload) == [item.to_dict() for item in items]
    assert list(store.observe_all().value) == items


def test_replace_all_notifies_observers_in_commit_order(video_item):
    store = RedisVideoStore(key=CACHE_KEY, redis=AsyncMock())
    seen = []
    store.observe_all().observe(seen.append)

    asyncio.run(store.replace_all([video_item("A")]))
    asyncio.run(store.replace_all([video_item("B"), video_item("C")]))

    assert seen == [(), (video_item("A"),), (video_item("B"), video_item("C"))]


def test_write_failure_raises_storage_error_and_keeps_view(video_item):
    redis = AsyncMock()
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)
    asyncio.run(store.replace_all([video_item("A")]))
    redis.set.side_effect = RedisError("OOM command not allowed")

    with pytest.raises(StorageError) as exc_info:
        asyncio.run(store.replace_all([video_item("B")]))

    assert isinstance(exc_info.value.__cause__, RedisError)
    assert list(store.observe_all().value) == [video_item("A")]


def test_load_publishes_persisted_items(video_item):
    redis = AsyncMock()
    redis.get.return_value = json.dumps([video_item("A").to_dict()])
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)

    items = asyncio.run(store.load())

    redis.get.assert_awaited_once_with(CACHE_KEY)
    assert items == (video_item("A"),)
    assert list(store.observe_all().value) == [video_item("A")]


def test_load_with_nothing_persisted():
    redis = AsyncMock()
    redis.get.return_value = None
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)

    assert asyncio.run(store.load()) == ()


@pytest.mark.parametrize("payload", ["{not json", json.dumps([{"title": "A"}])])
def test_load_corrupt_document_raises_storage_error(payload):
    redis = AsyncMock()
    redis.get.return_value = payload
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)

    with pytest.raises(StorageError):
        asyncio.run(store.load())


def test_load_read_failure_raises_storage_error():
    redis = AsyncMock()
    redis.get.side_effect = RedisError("connection refused")
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)

    with pytest.raises(StorageError):
        asyncio.run(store.load())


def test_in_memory_store_copies_input(video_item):
    store = InMemoryVideoStore()
    items = [video_item("A")]

    asyncio.run(store.replace_all(items))
    items.append(video_item("B"))

    assert list(store.observe_all().value) == [video_item("A")]


def test_get_video_store_backends():
    assert isinstance(get_video_store("memory"), InMemoryVideoStore)
    assert isinstance(get_video_store("redis"), RedisVideoStore)
    with pytest.raises(ValueError):
        get_video_store("sqlite")


def _blocked_set(redis, release, error=None):
    async def set_value(key, payload):
        await release.wait()
        if error is not None:
            raise error
        return True

    redis.set.side_effect = set_value


def test_cancelled_caller_write_failure_is_logged_not_leaked(video_item, caplog):
    redis = AsyncMock()
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)
    leaked = []

    async def scenario():
        asyncio.get_running_loop().set_exception_handler(lambda loop, context: leaked.append(context))
        release = asyncio.Event()
        _blocked_set(redis, release, error=RedisError("connection reset"))
        caller = asyncio.ensure_future(store.replace_all([video_item("A")]))
        await asyncio.sleep(0)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller
        release.set()
        await store.close()

    asyncio.run(scenario())

    assert leaked == []
    assert "Playlist cache write failed after caller was cancelled" in caplog.text
    assert list(store.observe_all().value) == []


def test_close_waits_for_write_in_flight(video_item):
    redis = AsyncMock()
    store = RedisVideoStore(key=CACHE_KEY, redis=redis)

    async def scenario():
        release = asyncio.Event()
        _blocked_set(redis, release)
        caller = asyncio.ensure_future(store.replace_all([video_item("A")]))
        await asyncio.sleep(0)
        caller.cancel()
        closing = asyncio.ensure_future(store.close())
        await asyncio.sleep(0)
        assert not closing.done()
        redis.aclose.assert_not_awaited()
        release.set()
        await closing

    asyncio.run(scenario())

    redis.aclose.assert_awaited_once()
    assert store.observe_all().value == (video_item("A"),)
