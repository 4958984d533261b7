import logging
from typing import Optional

from devbytes.application.cancellation import CancellationToken
from devbytes.application.ports.playlist_source import PlaylistSource
from devbytes.application.ports.video_store import VideoStore
from devbytes.core.models import as_video_items

log = logging.getLogger("devbytes.playlist_refresher")


class PlaylistRefresher:
    """Fetches the remote playlist and replaces the cached copy with it.

    A failed fetch raises ``NetworkError`` and leaves the store untouched.
    Store failures surface as ``StorageError``. There are no retries here.
    """

    def __init__(self, source: PlaylistSource, store: VideoStore) -> None:
        self._source = source
        self._store = store

    async def refresh(self, token: Optional[CancellationToken] = None) -> None:
        if token is not None:
            token.raise_if_cancelled()

        videos = await self._source.fetch_playlist()
        items = as_video_items(videos)

        # the replace is all-or-nothing, so this is the last point to back out
        if token is not None:
            token.raise_if_cancelled()

        await self._store.replace_all(items)
        log.info("Playlist cache refreshed items=%d", len(items))
