# path: taxi-route-api/taxiroute/editor/history.py

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from taxiroute.utils.geo import Coordinate, Path

Snapshot = Tuple[Tuple[float, float], ...]

DEFAULT_HISTORY_LIMIT = 100
SNAPSHOT_TOLERANCE = 1e-9


def to_snapshot(path: Sequence[Coordinate]) -> Snapshot:
    return tuple((p["lat"], p["lng"]) for p in path)


def to_path(snapshot: Snapshot) -> Path:
    return [{"lat": lat, "lng": lng} for lat, lng in snapshot]


def snapshots_equal(a: Snapshot, b: Snapshot, tolerance: float = SNAPSHOT_TOLERANCE) -> bool:
    if len(a) != len(b):
        return False
    for (a_lat, a_lng), (b_lat, b_lng) in zip(a, b):
        if abs(a_lat - b_lat) > tolerance or abs(a_lng - b_lng) > tolerance:
            return False
    return True


class PathHistory:
    """
    Undo/redo stacks of immutable path snapshots, oldest first.

    Starts with one empty snapshot. Holds at most `limit` entries; the
    oldest is dropped first. A snapshot equal to the current top is not
    recorded again.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self._entries: Deque[Snapshot] = deque([()], maxlen=limit)
        self._redo: List[Snapshot] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    @property
    def can_undo(self) -> bool:
        return len(self._entries) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def current(self) -> Path:
        return to_path(self._entries[-1]) if self._entries else []

    def _push(self, snapshot: Snapshot) -> bool:
        if self._entries and snapshots_equal(self._entries[-1], snapshot):
            return False
        self._entries.append(snapshot)
        return True

    def record(self, path: Sequence[Coordinate]) -> bool:
        """Record a new edit. Returns False when nothing changed."""
        changed = self._push(to_snapshot(path))
        if changed:
            self._redo.clear()
        return changed

    def undo(self) -> Optional[Path]:
        """Path to restore, or None when only the initial snapshot is left."""
        if not self.can_undo:
            return None
        self._redo.append(self._entries.pop())
        return self.current()

    def redo(self) -> Optional[Path]:
        if not self._redo:
            return None
        snapshot = self._redo.pop()
        # re-applied as a new entry; the remaining redo stack stays walkable
        self._push(snapshot)
        return to_path(snapshot)

    def reset(self) -> None:
        self._entries = deque([()], maxlen=self.limit)
        self._redo.clear()
