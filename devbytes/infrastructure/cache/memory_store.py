from typing import Sequence, Tuple

from devbytes.application.live_data import LiveData, MutableLiveData
from devbytes.application.ports.video_store import VideoStore
from devbytes.core.models import VideoItem


class InMemoryVideoStore(VideoStore):
    def __init__(self, items: Sequence[VideoItem] = ()) -> None:
        self._live: MutableLiveData[Tuple[VideoItem, ...]] = MutableLiveData(tuple(items))

    async def load(self) -> Tuple[VideoItem, ...]:
        return self._live.value

    async def replace_all(self, items: Sequence[VideoItem]) -> None:
        self._live.set_value(tuple(items))

    def observe_all(self) -> LiveData[Tuple[VideoItem, ...]]:
        return self._live.as_live_data()

    async def close(self) -> None:
        return None
