"""
MandalaRotate - Point Buffer
Live, append-only sequence of generated points awaiting render.

The input path appends while the render path iterates, bakes and evicts.
Readers never lock: a view captures the backing list, its start offset
and its length at creation time. The backing list is only ever appended
to, and compaction swaps in a fresh list, so a captured range is never
modified after the view is taken.
"""

import threading
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence

import numpy as np

from polar_point import Point
from logging_utils import log_event

# Compaction copies the live tail into a new list once the evicted prefix
# is at least this long and covers half the backing list.
COMPACT_MIN_PREFIX = 1024


class PointView:
    """Stable, read-only snapshot of a PointBuffer range"""

    __slots__ = ("_items", "_start", "_end", "first_index")

    def __init__(self, items: List[Point], start: int, end: int, first_index: int = 0):
        self._items = items
        self._start = start
        self._end = end
        # Sequence number of the first point since the buffer was created
        self.first_index = first_index

    def __len__(self) -> int:
        return self._end - self._start

    def __iter__(self) -> Iterator[Point]:
        return islice(self._items, self._start, self._end)

    def __getitem__(self, index: int) -> Point:
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("PointView index out of range")
        return self._items[self._start + index]

    def to_list(self) -> List[Point]:
        return self._items[self._start:self._end]

    def to_array(self) -> np.ndarray:
        """Return an (N, 2) float64 array of x, y."""
        if self._end <= self._start:
            return np.empty((0, 2), dtype=np.float64)
        return np.array(
            [(p.x, p.y) for p in islice(self._items, self._start, self._end)],
            dtype=np.float64,
        )


class PointBuffer:
    """
    Ordered point buffer with snapshot iteration.

    Writers (append/extend/evict/clear) serialize on a short lock;
    snapshot(), size() and iteration take no lock.
    """

    def __init__(self, points: Optional[Iterable[Point]] = None):
        self._write_lock = threading.Lock()
        # (backing list, start offset, sequence number of items[0]) published as one reference
        self._state = (list(points) if points is not None else [], 0, 0)

    def append(self, p: Point) -> None:
        with self._write_lock:
            self._state[0].append(p)

    def extend(self, points: Sequence[Point]) -> None:
        with self._write_lock:
            self._state[0].extend(points)

    def size(self) -> int:
        items, start, _ = self._state
        return len(items) - start

    def __len__(self) -> int:
        return self.size()

    def snapshot(self) -> PointView:
        items, start, base = self._state
        return PointView(items, start, len(items), base + start)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.snapshot())

    def bake_all_into(self, surface) -> PointView:
        """Stamp every currently held point into surface; returns the baked view."""
        view = self.snapshot()
        surface.stamp_many(view)
        return view

    def evict_prefix(self, n: int) -> int:
        """
        Drop the n oldest points, keeping the tail.

        n >= size empties the buffer; n <= 0 is a no-op. Returns the number
        of points actually removed.
        """
        if n <= 0:
            return 0
        with self._write_lock:
            _, start, base = self._state
            return self._evict_to(base + start + n)

    def evict_from_view(self, view: PointView, n: int) -> int:
        """
        Drop the first n points of a previously taken view.

        Points evicted since the view was taken are not counted again, and
        points appended after it are never touched.
        """
        if n <= 0:
            return 0
        with self._write_lock:
            return self._evict_to(view.first_index + min(n, len(view)))

    def _evict_to(self, target: int) -> int:
        # Caller holds the write lock; target is a sequence number
        items, start, base = self._state
        new_start = min(max(target - base, start), len(items))
        removed = new_start - start
        if removed == 0:
            return 0
        if new_start == len(items):
            self._state = ([], 0, base + new_start)
        elif new_start >= COMPACT_MIN_PREFIX and new_start * 2 >= len(items):
            self._state = (items[new_start:], 0, base + new_start)
            log_event("DEBUG", "Buffer", "Compacted", kept=len(items) - new_start)
        else:
            self._state = (items, new_start, base)
        return removed

    def clear(self) -> None:
        with self._write_lock:
            items, _, base = self._state
            self._state = ([], 0, base + len(items))
