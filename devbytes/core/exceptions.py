class PlaylistCacheError(Exception):
    pass


class NetworkError(PlaylistCacheError):
    """The remote playlist could not be fetched or parsed."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(f"{message} (url={url})" if url else message)


class StorageError(PlaylistCacheError):
    """The local store could not be read or written."""
