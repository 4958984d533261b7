from typing import Protocol, Sequence, Tuple

from devbytes.application.live_data import LiveData
from devbytes.core.models import VideoItem


class VideoStore(Protocol):
    async def replace_all(self, items: Sequence[VideoItem]) -> None:
        ...

    def observe_all(self) -> LiveData[Tuple[VideoItem, ...]]:
        ...
