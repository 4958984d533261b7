from dataclasses import asdict, dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class NetworkVideo:
    """A playlist record as served by the remote endpoint."""

    title: str
    description: str
    url: str
    thumbnail: str

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "NetworkVideo":
        fields = {}
        for name in ("title", "description", "url", "thumbnail"):
            value = raw[name]
            if not isinstance(value, str):
                raise TypeError(f"field {name!r} must be a string, got {type(value).__name__}")
            fields[name] = value
        return cls(**fields)


@dataclass(frozen=True)
class VideoItem:
    """A cached playlist entry. Equality is structural."""

    title: str
    description: str
    url: str
    thumbnail_url: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoItem":
        return cls(
            title=data["title"],
            description=data["description"],
            url=data["url"],
            thumbnail_url=data["thumbnail_url"],
        )


def as_video_items(videos: List[NetworkVideo]) -> List[VideoItem]:
    return [
        VideoItem(
            title=video.title,
            description=video.description,
            url=video.url,
            thumbnail_url=video.thumbnail,
        )
        for video in videos
    ]
