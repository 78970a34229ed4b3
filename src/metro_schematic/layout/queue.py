"""Priority queue shared by the grid snapper's two searches."""

from __future__ import annotations

__all__ = ["PriorityQueue"]

import heapq
import itertools
from typing import Generic, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """Binary-heap priority queue over comparable priorities.

    Dequeues the smallest priority first, or the largest when
    ``maximum=True``. Items with equal priority come out in the order
    they were enqueued, so results are reproducible.
    """

    def __init__(self, maximum: bool = False) -> None:
        self._heap: list[tuple[float, int, T]] = []
        self._counter = itertools.count()
        self._maximum = maximum

    def enqueue(self, item: T, priority: float) -> None:
        key = -priority if self._maximum else priority
        heapq.heappush(self._heap, (key, next(self._counter), item))

    def dequeue(self) -> T:
        if not self._heap:
            raise IndexError("dequeue from an empty priority queue")
        return heapq.heappop(self._heap)[2]

    def peek(self) -> T:
        if not self._heap:
            raise IndexError("peek into an empty priority queue")
        return self._heap[0][2]

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
