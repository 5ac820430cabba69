from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock


class DocumentLocks:
    """
    One mutex per document id; serializes load-check-save sequences.

    An entry lives only while some thread holds or waits for it, so the map
    never grows beyond the documents currently in use.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[str, Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, document_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(document_id, Lock())
            self._users[document_id] = self._users.get(document_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._users[document_id] -= 1
                if self._users[document_id] == 0:
                    del self._users[document_id]
                    del self._locks[document_id]
