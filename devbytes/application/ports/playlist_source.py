from typing import Protocol, List

from devbytes.core.models import NetworkVideo


class PlaylistSource(Protocol):
    async def fetch_playlist(self) -> List[NetworkVideo]:
        ...
