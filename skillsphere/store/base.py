from __future__ import annotations

import copy
import threading
from typing import Any, Protocol


class KeyValueStore(Protocol):
    def get(self, namespace: str, key: str, default: Any = None) -> Any: ...

    def set(self, namespace: str, key: str, value: Any) -> None: ...

    def delete(self, namespace: str, key: str) -> None: ...


class InMemoryStore:
    """Process-local store keyed by ``(namespace, key)``.

    Single operations are atomic. A get followed by a set is not, so two
    requests updating the same user can still lose one of the writes.
    Values are copied on the way in and out so callers never share state
    with the store.
    """

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        with self._lock:
            if (namespace, key) not in self._data:
                return default
            return copy.deepcopy(self._data[(namespace, key)])

    def set(self, namespace: str, key: str, value: Any) -> None:
        with self._lock:
            self._data[(namespace, key)] = copy.deepcopy(value)

    def delete(self, namespace: str, key: str) -> None:
        with self._lock:
            self._data.pop((namespace, key), None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
