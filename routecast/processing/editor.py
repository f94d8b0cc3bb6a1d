"""
Route editor state machine.

Tracks the drawing UI through discrete events and notifies subscribers only
when the route becomes final:

    DRAWING  --feature_added-->  FINALIZED
    FINALIZED --selected------>  SELECTED
    SELECTED --edited--------->  EDITING
    EDITING  --edited--------->  EDITING
    SELECTED/EDITING --deselected--> FINALIZED
    any      --reset---------->  DRAWING
"""

import logging
from enum import Enum
from typing import Callable

from ..errors import InvalidTransition
from ..models.route import Waypoint

logger = logging.getLogger(__name__)


class EditorState(str, Enum):
    """States of the route editor."""
    DRAWING = "drawing"
    EDITING = "editing"
    SELECTED = "selected"
    FINALIZED = "finalized"


FinalizedCallback = Callable[[list[Waypoint]], None]


class RouteEditor:
    """Holds the route being drawn and its editing state."""

    def __init__(self):
        self.state = EditorState.DRAWING
        self._waypoints: list[Waypoint] = []
        self._subscribers: list[FinalizedCallback] = []

    @property
    def waypoints(self) -> list[Waypoint]:
        """Copy of the current route coordinates."""
        return list(self._waypoints)

    def on_finalized(self, callback: FinalizedCallback) -> None:
        """Register a callback run with the waypoints each time the route is finalized."""
        self._subscribers.append(callback)

    def feature_added(self, coordinates: list[Waypoint]) -> EditorState:
        """Drawing completed."""
        self._require(EditorState.DRAWING)
        self._waypoints = [tuple(c) for c in coordinates]
        return self._finalize()

    def selected(self) -> EditorState:
        """User picked the route for editing."""
        self._require(EditorState.FINALIZED)
        return self._move(EditorState.SELECTED)

    def edited(self, coordinates: list[Waypoint]) -> EditorState:
        """Route geometry changed while selected."""
        self._require(EditorState.SELECTED, EditorState.EDITING)
        self._waypoints = [tuple(c) for c in coordinates]
        return self._move(EditorState.EDITING)

    def deselected(self) -> EditorState:
        """User released the route."""
        self._require(EditorState.SELECTED, EditorState.EDITING)
        return self._finalize()

    def reset(self) -> EditorState:
        """Discard the route and start drawing again."""
        self._waypoints = []
        return self._move(EditorState.DRAWING)

    def _require(self, *allowed: EditorState) -> None:
        if self.state not in allowed:
            raise InvalidTransition(
                f"Event not allowed in state {self.state.value}; "
                f"expected one of {', '.join(s.value for s in allowed)}"
            )

    def _move(self, state: EditorState) -> EditorState:
        logger.debug(f"Editor {self.state.value} -> {state.value}")
        self.state = state
        return state

    def _finalize(self) -> EditorState:
        self._move(EditorState.FINALIZED)
        for callback in self._subscribers:
            callback(self.waypoints)
        return self.state
