from devbytes.infrastructure.cache.memory_store import InMemoryVideoStore
from devbytes.infrastructure.cache.video_store import RedisVideoStore

__all__ = ["InMemoryVideoStore", "RedisVideoStore"]
