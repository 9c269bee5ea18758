"""Fixed-capacity ring buffer of timestamped progress samples."""

from typing import NamedTuple

import numpy as np

__all__ = ["Sample", "SlidingWindow"]


class Sample(NamedTuple):
    timestamp: float
    value: float


class SlidingWindow:
    """Ring buffer holding the most recent samples for rate estimation.

    Storage is allocated once at construction; push() overwrites the oldest
    slot once the window is full, so the buffer never grows.
    """

    def __init__(self, capacity: int = 20):
        if capacity < 1:
            raise ValueError(f"Window capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._times = np.zeros(capacity, dtype=np.float64)
        self._values = np.zeros(capacity, dtype=np.float64)
        self._head = 0  # slot of the oldest sample
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, timestamp: float, value: float):
        """Insert the newest sample, evicting the oldest once at capacity."""
        slot = (self._head + self._size) % self._capacity
        self._times[slot] = timestamp
        self._values[slot] = value
        if self._size < self._capacity:
            self._size += 1
        else:
            self._head = (self._head + 1) % self._capacity

    def oldest(self) -> Sample:
        if not self._size:
            raise IndexError("oldest() on empty window")
        return Sample(float(self._times[self._head]), float(self._values[self._head]))

    def newest(self) -> Sample:
        if not self._size:
            raise IndexError("newest() on empty window")
        slot = (self._head + self._size - 1) % self._capacity
        return Sample(float(self._times[slot]), float(self._values[slot]))

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size
