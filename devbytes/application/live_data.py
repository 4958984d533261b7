import logging
import threading
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

log = logging.getLogger("devbytes.live_data")

Observer = Callable[[T], None]


class LiveData(Generic[T]):
    """Read-only push-based value.

    Observers receive the current value on registration and then every value
    that is committed afterwards, in commit order.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: List[Observer] = []
        self._lock = threading.RLock()

    @property
    def value(self) -> T:
        return self._value

    def observe(self, observer: Observer) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)
            observer(self._value)

        def _remove() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _remove

    def _commit(self, value: T) -> None:
        with self._lock:
            self._value = value
            for observer in list(self._observers):
                try:
                    observer(value)
                except Exception:
                    log.exception("Live value observer %r failed", observer)


class MutableLiveData(LiveData[T]):
    def set_value(self, value: T) -> None:
        self._commit(value)

    def as_live_data(self) -> LiveData[T]:
        return _ReadOnlyView(self)


class _ReadOnlyView(LiveData[T]):
    def __init__(self, source: LiveData[T]) -> None:
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def observe(self, observer: Observer) -> Callable[[], None]:
        return self._source.observe(observer)
