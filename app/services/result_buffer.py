"""
In-memory results window for polling consumers.

Holds the most recent analyses, newest first. Records are dropped from the
tail once capacity is exceeded and never persist across server restarts.
"""

import logging
import threading
from collections import deque
from typing import Deque, List

from app.models.analysis import BufferedAnalysis

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20


class ResultBuffer:
    """Bounded, most-recent-first buffer guarded by a single lock."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._lock = threading.Lock()
        self._items: Deque[BufferedAnalysis] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, record: BufferedAnalysis) -> None:
        """Insert at the front; the oldest record falls off when full."""
        with self._lock:
            self._items.appendleft(record)
            size = len(self._items)
        logger.debug(
            f"Buffered analysis for {record.request.repository}#{record.request.pr_number} "
            f"({size}/{self._capacity})"
        )

    def snapshot(self) -> List[BufferedAnalysis]:
        """Point-in-time copy, most recent first."""
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
