import asyncio
import logging
from typing import Any, Dict, Optional, Set, Tuple

from devbytes.application.cancellation import CancellationToken
from devbytes.application.live_data import LiveData, MutableLiveData
from devbytes.application.playlist_refresher import PlaylistRefresher
from devbytes.core.exceptions import NetworkError
from devbytes.core.models import VideoItem

log = logging.getLogger("devbytes.refresh_coordinator")


class RefreshCoordinator:
    """Owns the playlist state shown to the presentation layer.

    ``items`` is the store's live view, forwarded as is. The two error flags
    are driven by refresh outcomes: a ``NetworkError`` raises the error flag
    only while there is nothing cached to show. Other failures are left to
    propagate out of the refresh task.

    Construction schedules nothing; the owner calls :meth:`start` once it is
    running inside an event loop and :meth:`close` when it is torn down.
    """

    def __init__(
        self,
        refresher: PlaylistRefresher,
        items: LiveData[Tuple[VideoItem, ...]],
        *,
        single_flight: bool = False,
    ) -> None:
        self._refresher = refresher
        self._items = items
        self._single_flight = single_flight

        self._network_error_active = MutableLiveData(False)
        self._network_error_acknowledged = MutableLiveData(False)

        self._token = CancellationToken()
        self._tasks: Set[asyncio.Task] = set()
        self._in_flight: Optional[asyncio.Task] = None
        self._started = False

    @property
    def items(self) -> LiveData[Tuple[VideoItem, ...]]:
        return self._items

    @property
    def network_error_active(self) -> LiveData[bool]:
        return self._network_error_active.as_live_data()

    @property
    def network_error_acknowledged(self) -> LiveData[bool]:
        return self._network_error_acknowledged.as_live_data()

    @property
    def closed(self) -> bool:
        return self._token.cancelled

    def start(self) -> Optional[asyncio.Task]:
        if self._started:
            return None
        self._started = True
        return self.trigger_refresh()

    def trigger_refresh(self) -> asyncio.Task:
        if self._token.cancelled:
            raise RuntimeError("RefreshCoordinator is closed")

        if self._single_flight and self._in_flight is not None and not self._in_flight.done():
            log.debug("Refresh already in flight, joining it")
            return self._in_flight

        task = asyncio.get_running_loop().create_task(self._refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._in_flight = task
        return task

    def acknowledge_network_error(self) -> None:
        self._network_error_acknowledged.set_value(True)

    async def close(self) -> None:
        self._token.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if not tasks:
            return
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                log.error("Refresh task failed before shutdown: %r", result)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "videos": [item.to_dict() for item in self._items.value],
            "network_error_active": self._network_error_active.value,
            "network_error_acknowledged": self._network_error_acknowledged.value,
        }

    async def _refresh(self) -> None:
        try:
            await self._refresher.refresh(self._token)
        except NetworkError as exc:
            cached = self._items.value
            if cached:
                log.info("Playlist refresh failed, serving cached items=%d: %s", len(cached), exc)
                return
            log.warning("Playlist refresh failed with empty cache: %s", exc)
            self._network_error_acknowledged.set_value(False)
            self._network_error_active.set_value(True)
            return

        self._network_error_active.set_value(False)
        self._network_error_acknowledged.set_value(False)
