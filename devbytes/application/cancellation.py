import asyncio
import threading


class CancellationToken:
    """Cancellation flag shared between an owning scope and its refresh tasks."""

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise asyncio.CancelledError("refresh scope cancelled")
