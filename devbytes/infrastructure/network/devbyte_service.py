import asyncio
import logging
from typing import Any, List

import requests

from devbytes.core.exceptions import NetworkError
from devbytes.core.models import NetworkVideo

log = logging.getLogger("devbytes.devbyte_service")


class DevByteService:
    """Reads the DevBytes playlist over HTTP.

    The request is blocking, so it runs on a worker thread and the event loop
    only awaits the result.
    """

    def __init__(self, session: requests.Session, url: str, timeout_sec: float = 10.0):
        self._session = session
        self._url = url
        self._timeout_sec = timeout_sec

    async def fetch_playlist(self) -> List[NetworkVideo]:
        return await asyncio.to_thread(self._get_playlist)

    def _get_playlist(self) -> List[NetworkVideo]:
        try:
            response = self._session.get(self._url, timeout=self._timeout_sec)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise NetworkError(f"Playlist request failed: {e}", url=self._url) from e
        except ValueError as e:
            raise NetworkError(f"Playlist response is not JSON: {e}", url=self._url) from e

        videos = self._parse(body)
        log.debug("Fetched playlist items=%d url=%s", len(videos), self._url)
        return videos

    def _parse(self, body: Any) -> List[NetworkVideo]:
        if not isinstance(body, dict) or not isinstance(body.get("videos"), list):
            raise NetworkError("Playlist response has no 'videos' list", url=self._url)
        try:
            return [NetworkVideo.from_json(raw) for raw in body["videos"]]
        except (KeyError, TypeError) as e:
            raise NetworkError(f"Malformed playlist record: {e}", url=self._url) from e
