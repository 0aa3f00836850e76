import threading
from typing import Generic, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class HistoryStore(Protocol[T]):
    def append(self, record: T) -> None: ...

    def list(self, limit: Optional[int] = None, newest_first: bool = False) -> List[T]: ...

    def get_by_id(self, id: str) -> Optional[T]: ...


class InMemoryStore(Generic[T]):
    """Append-only list of records with an `id` attribute.

    Nothing is evicted and nothing survives a restart. Sync FastAPI endpoints
    run on a thread pool, hence the lock.
    """

    def __init__(self):
        self._items: List[T] = []
        self._lock = threading.Lock()

    def append(self, record: T) -> None:
        with self._lock:
            self._items.append(record)

    def list(self, limit: Optional[int] = None, newest_first: bool = False) -> List[T]:
        with self._lock:
            items = list(self._items)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        if newest_first:
            items.reverse()
        return items

    def get_by_id(self, id: str) -> Optional[T]:
        with self._lock:
            for item in self._items:
                if item.id == id:
                    return item
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
