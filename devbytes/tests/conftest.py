import pytest

from devbytes.core.models import NetworkVideo, VideoItem


@pytest.fixture
def network_video():
    """Factory for remote playlist records."""
    def _make(title: str) -> NetworkVideo:
        return NetworkVideo(
            title=title,
            description=f"{title} description",
            url=f"https://www.youtube.com/watch?v={title}",
            thumbnail=f"https://i.ytimg.com/vi/{title}/hqdefault.jpg",
        )
    return _make


@pytest.fixture
def video_item():
    """Factory for cached items matching ``network_video``."""
    def _make(title: str) -> VideoItem:
        return VideoItem(
            title=title,
            description=f"{title} description",
            url=f"https://www.youtube.com/watch?v={title}",
            thumbnail_url=f"https://i.ytimg.com/vi/{title}/hqdefault.jpg",
        )
    return _make
