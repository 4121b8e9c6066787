# path: taxi-route-api/taxiroute/editor/session.py

"""
Interactive path editor session.

One EditorSession backs one editing UI. The rendering layer feeds it map
clicks and vertex edits and subscribes to EditorEvent messages to redraw the
draft and snapped overlays. All calls are expected on a single event loop;
snap() and save() await external calls and hold the busy flag meanwhile,
which refuses every other action until they finish.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional
import logging

from taxiroute.editor.events import EditorMode, EventBus, EventKind, Listener
from taxiroute.editor.history import DEFAULT_HISTORY_LIMIT, PathHistory
from taxiroute.utils.geo import (
    Coordinate,
    Path,
    approximately_equal,
    clone_path,
    sanitize_coordinate,
    sanitize_list,
)

logger = logging.getLogger(__name__)

Snapper = Callable[[Path], Awaitable[Path]]
Saver = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]

BUSY_MESSAGE = "Please wait for the current action to finish."
MIN_POINTS_MESSAGE = "Draw at least 2 points first."


class EditorSession:
    def __init__(
        self,
        snapper: Optional[Snapper] = None,
        saver: Optional[Saver] = None,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._snapper = snapper
        self._saver = saver
        self._events = EventBus()
        self.history = PathHistory(history_limit)
        self.mode = EditorMode.IDLE
        self.draft: Path = []
        self.snapped: Path = []
        self.busy = False
        self.status = ""
        self.last_error: Optional[BaseException] = None

    # ------------------------------------------------------------------
    # rendering-layer interface
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def _set_status(self, message: str) -> None:
        self.status = message
        self._events.emit(EventKind.STATUS, message)

    def _set_mode(self, mode: EditorMode) -> None:
        if self.mode != mode:
            self.mode = mode
            self._events.emit(EventKind.MODE, mode)

    def _set_busy(self, busy: bool) -> None:
        self.busy = busy
        self._events.emit(EventKind.BUSY, busy)

    def _render_draft(self) -> None:
        self._events.emit(EventKind.DRAFT, clone_path(self.draft))

    def _drop_snapped(self) -> None:
        if self.snapped:
            self.snapped = []
            self._events.emit(EventKind.SNAPPED, [])

    def _ready(self) -> bool:
        if self.busy:
            self._set_status(BUSY_MESSAGE)
            return False
        return True

    # ------------------------------------------------------------------
    # modes
    # ------------------------------------------------------------------
    def start_drawing(self) -> bool:
        if not self._ready():
            return False
        self._set_mode(EditorMode.DRAW)
        self._set_status("Click on the map to add points.")
        return True

    def start_editing(self) -> bool:
        if not self._ready():
            return False
        if len(self.draft) < 2:
            self._set_status(MIN_POINTS_MESSAGE)
            return False
        self._set_mode(EditorMode.EDIT)
        self._set_status("Drag, add or remove vertices to adjust the path.")
        return True

    def exit(self) -> bool:
        """Discard the draft, snapped path and history; back to idle."""
        if not self._ready():
            return False
        self._reset()
        return True

    clear = exit

    def _reset(self) -> None:
        self.draft = []
        self.snapped = []
        self.history.reset()
        self._render_draft()
        self._events.emit(EventKind.SNAPPED, [])
        self._set_mode(EditorMode.IDLE)

    # ------------------------------------------------------------------
    # draft mutations
    # ------------------------------------------------------------------
    def _commit(self) -> None:
        self._drop_snapped()
        self.history.record(self.draft)
        self._render_draft()

    def add_point(self, point: Any) -> bool:
        """Map click while drawing."""
        if not self._ready():
            return False
        if self.mode != EditorMode.DRAW:
            self._set_status("Start drawing to add points.")
            return False
        p = sanitize_coordinate(point)
        if p is None:
            self._set_status("Ignored a point with an invalid coordinate.")
            return False
        if self.draft and approximately_equal(self.draft[-1], p, 1e-9):
            return False
        self.draft.append(p)
        self._commit()
        return True

    def _editable(self) -> bool:
        if not self._ready():
            return False
        if self.mode != EditorMode.EDIT:
            self._set_status("Switch to edit mode to change vertices.")
            return False
        return True

    def insert_vertex(self, index: int, point: Any) -> bool:
        if not self._editable():
            return False
        p = sanitize_coordinate(point)
        if p is None or not 0 <= index <= len(self.draft):
            self._set_status("Ignored an invalid vertex insert.")
            return False
        self.draft.insert(index, p)
        self._commit()
        return True

    def move_vertex(self, index: int, point: Any) -> bool:
        if not self._editable():
            return False
        p = sanitize_coordinate(point)
        if p is None or not 0 <= index < len(self.draft):
            self._set_status("Ignored an invalid vertex move.")
            return False
        self.draft[index] = p
        self._commit()
        return True

    def remove_vertex(self, index: int) -> bool:
        if not self._editable():
            return False
        if not 0 <= index < len(self.draft):
            self._set_status("Ignored an invalid vertex removal.")
            return False
        del self.draft[index]
        self._commit()
        return True

    def sync_path(self, points: Any) -> bool:
        """Replace the draft with the path as the map widget now holds it."""
        if not self._editable():
            return False
        self.draft = sanitize_list(points)
        self._commit()
        return True

    # ------------------------------------------------------------------
    # history
    # ------------------------------------------------------------------
    def _restore(self, path: Path) -> None:
        self.draft = path
        self._drop_snapped()
        if self.mode == EditorMode.EDIT and len(self.draft) < 2:
            self._set_mode(EditorMode.DRAW)
        self._render_draft()

    def undo(self) -> bool:
        if not self._ready():
            return False
        path = self.history.undo()
        if path is None:
            self._set_status("Nothing to undo.")
            return False
        self._restore(path)
        return True

    def redo(self) -> bool:
        if not self._ready():
            return False
        path = self.history.redo()
        if path is None:
            self._set_status("Nothing to redo.")
            return False
        self._restore(path)
        return True

    # ------------------------------------------------------------------
    # async actions
    # ------------------------------------------------------------------
    async def snap(self) -> bool:
        """Snap the draft to roads; the draft itself is left as drawn."""
        if not self._ready():
            return False
        if len(self.draft) < 2:
            self._set_status(MIN_POINTS_MESSAGE)
            return False
        if self._snapper is None:
            self._set_status("Road snapping is not available.")
            return False

        self._set_busy(True)
        self._set_status("Snapping to roads…")
        try:
            result = await self._snapper(clone_path(self.draft))
        except Exception as exc:  # noqa: BLE001
            logger.warning("snap failed: %s", exc)
            self.last_error = exc
            self._set_status(f"Snapping failed: {exc}. Try again.")
            return False
        finally:
            self._set_busy(False)

        snapped = sanitize_list(result)
        if len(snapped) < 2:
            self._set_status("Snapping returned no road path. Try again.")
            return False
        self.last_error = None
        self.snapped = snapped
        self._events.emit(EventKind.SNAPPED, clone_path(snapped))
        self._set_status(f"Snapped to roads ({len(snapped)} points).")
        return True

    async def save(self, metadata: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Persist the route, preferring the snapped path. On success the
        session resets to idle; on failure nothing changes so the
        contributor can retry.
        """
        if not self._ready():
            return None
        geometry = self.snapped if len(self.snapped) >= 2 else self.draft
        if len(geometry) < 2:
            self._set_status(MIN_POINTS_MESSAGE)
            return None
        if self._saver is None:
            self._set_status("Saving is not available.")
            return None

        payload = dict(metadata or {})
        payload["path"] = sanitize_list(self.draft)
        payload["snappedPath"] = sanitize_list(geometry)

        self._set_busy(True)
        self._set_status("Saving route…")
        try:
            record = await self._saver(payload)
        except Exception as exc:  # noqa: BLE001
            logger.warning("save failed: %s", exc)
            self.last_error = exc
            self._set_status(f"Saving failed: {exc}. Try again.")
            return None
        finally:
            self._set_busy(False)

        self.last_error = None
        self._reset()
        self._events.emit(EventKind.SAVED, record)
        self._set_status("Route saved.")
        return record
