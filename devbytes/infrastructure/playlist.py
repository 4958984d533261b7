import requests

from devbytes.application.playlist_refresher import PlaylistRefresher
from devbytes.application.refresh_coordinator import RefreshCoordinator
from devbytes.config import (
    PLAYLIST_CACHE_KEY,
    PLAYLIST_FETCH_TIMEOUT_SEC,
    PLAYLIST_SINGLE_FLIGHT,
    PLAYLIST_STORE_BACKEND,
    PLAYLIST_URL,
)
from devbytes.infrastructure.cache import InMemoryVideoStore, RedisVideoStore
from devbytes.infrastructure.network.devbyte_service import DevByteService


def get_video_store(backend: str = PLAYLIST_STORE_BACKEND):
    if backend == "redis":
        return RedisVideoStore(key=PLAYLIST_CACHE_KEY)
    if backend == "memory":
        return InMemoryVideoStore()
    raise ValueError(f"Unknown PLAYLIST_STORE_BACKEND: {backend!r}")


def get_refresh_coordinator(store, session: requests.Session) -> RefreshCoordinator:
    source = DevByteService(session, url=PLAYLIST_URL, timeout_sec=PLAYLIST_FETCH_TIMEOUT_SEC)
    refresher = PlaylistRefresher(source, store)
    return RefreshCoordinator(refresher, store.observe_all(), single_flight=PLAYLIST_SINGLE_FLIGHT)
