import threading
from collections import deque


class WorkQueue:
    """Unbounded FIFO of document ids with a single logical consumer.

    Entries are not deduplicated and are held in memory only.
    """

    def __init__(self) -> None:
        self._items: deque[int] = deque()
        self._condition = threading.Condition()
        self._closed = False

    def put(self, document_id: int) -> None:
        with self._condition:
            self._items.append(document_id)
            self._condition.notify()

    def get(self, timeout: float | None = None) -> int | None:
        """Pop the oldest id, waiting up to ``timeout`` seconds for one.

        Returns None on timeout or once the queue is closed and empty.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._items or self._closed, timeout)
            if self._items:
                return self._items.popleft()
            return None

    def close(self) -> None:
        """Wake every waiting consumer; later gets no longer block."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)
