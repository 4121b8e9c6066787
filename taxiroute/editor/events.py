# path: taxi-route-api/taxiroute/editor/events.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List


class EditorMode(str, Enum):
    IDLE = "idle"
    DRAW = "draw"
    EDIT = "edit"


class EventKind(str, Enum):
    MODE = "mode"          # payload: EditorMode
    DRAFT = "draft"        # payload: Path, redraw the draft overlay
    SNAPPED = "snapped"    # payload: Path, redraw the snapped overlay ([] hides it)
    STATUS = "status"      # payload: str shown to the contributor
    BUSY = "busy"          # payload: bool, enable/disable action triggers
    SAVED = "saved"        # payload: stored route record


@dataclass(frozen=True)
class EditorEvent:
    kind: EventKind
    payload: Any = None


Listener = Callable[[EditorEvent], None]


class EventBus:
    """Fan-out of editor events to the rendering layer."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: EventKind, payload: Any = None) -> None:
        event = EditorEvent(kind, payload)
        for listener in list(self._listeners):
            listener(event)
