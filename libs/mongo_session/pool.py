# libs/mongo_session/pool.py
from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, Generic, TypeVar

T = TypeVar("T")


class StorePool(Generic[T]):
    """
    Thread-safe free-list of reusable objects.

    Objects handed out by acquire() may still carry a previous tenant's
    state; callers must reset them before use.
    """

    def __init__(self, factory: Callable[[], T], max_size: int = 1024) -> None:
        self._factory = factory
        self._max_size = max_size
        self._free: Deque[T] = deque()
        self._lock = threading.Lock()

    def acquire(self) -> T:
        with self._lock:
            if self._free:
                return self._free.pop()
        return self._factory()

    def release(self, obj: T) -> None:
        with self._lock:
            if len(self._free) < self._max_size:
                self._free.append(obj)

    def __len__(self) -> int:
        with self._lock:
            return len(self._free)
