import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional

DEFAULT_CAPACITY = 10000


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Sample:
    timestamp: int  # epoch milliseconds
    price: float


class SeriesBuffer:
    """Rolling price history with a fixed capacity.

    Samples are kept in insertion order. Once the buffer is full the oldest
    sample is dropped to make room for the new one.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._samples: Deque[Sample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen or 0

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(list(self._samples))

    def append(self, sample: Sample) -> None:
        # deque(maxlen=...) evicts from the left on overflow
        self._samples.append(sample)

    def latest(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None

    def query_range(self, now_timestamp: int, window_seconds: float) -> List[Sample]:
        cutoff = now_timestamp - window_seconds * 1000
        return [s for s in self._samples if s.timestamp >= cutoff]
