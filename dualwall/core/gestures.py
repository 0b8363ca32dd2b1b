# -*- coding: utf-8 -*-
"""
Gestures - Pointer and touch state machine driving the viewport.

Mouse, wheel, and touch input are unified at the widget boundary into a
single ``PointerEvent`` shape whose ``points`` carry every pointer still
active after the event. ``GestureController`` consumes those events and
mutates the session's viewport:

- one pointer down: drag (pan by pointer delta)
- two pointers down: pinch (anchored zoom around the midpoint)
- lifting one of two pointers: back to drag from the remaining pointer
- wheel: stateless fixed-step anchored zoom

Handlers return ``True`` when the viewport changed so the caller knows
to re-render. No Qt dependency.

License
-------
MIT License

Created
-------
2026-10-16

Modified
--------
2026-10-16
"""

# Standard library
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, NamedTuple

from dualwall.core.viewport import ViewportSnapshot

if TYPE_CHECKING:
    from dualwall.core.session import EditorSession

logger = logging.getLogger(__name__)

#: Relative zoom change per wheel notch.
WHEEL_ZOOM_STEP = 0.1


class EventPhase(Enum):
    """Phase of a unified pointer event."""

    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"
    WHEEL = "wheel"


class GestureMode(Enum):
    """State of the gesture state machine."""

    IDLE = "idle"
    DRAGGING = "dragging"
    PINCHING = "pinching"


class PointerPoint(NamedTuple):
    """A single active pointer in canvas-local coordinates."""

    id: int
    x: float
    y: float


@dataclass(frozen=True)
class PointerEvent:
    """Device-independent pointer event.

    Parameters
    ----------
    phase : EventPhase
        What happened.
    points : Tuple[PointerPoint, ...]
        Pointers still active after the event. Empty after the last
        pointer is released. For wheel events, the pointer position.
    wheel_delta : float
        Vertical scroll amount for ``WHEEL`` events. Negative scrolls up
        (zoom in), positive scrolls down (zoom out).
    """

    phase: EventPhase
    points: Tuple[PointerPoint, ...] = ()
    wheel_delta: float = 0.0


@dataclass
class GestureSession:
    """Transient state of one in-progress pointer interaction."""

    mode: GestureMode = GestureMode.IDLE
    pointer_id: Optional[int] = None
    last_x: float = 0.0
    last_y: float = 0.0
    pinch_distance: float = 0.0
    pinch_mid_x: float = 0.0
    pinch_mid_y: float = 0.0
    pinch_start: Optional[ViewportSnapshot] = None


def pinch_geometry(a: PointerPoint, b: PointerPoint) -> Tuple[float, float, float]:
    """Return ``(distance, midpoint_x, midpoint_y)`` of two pointers."""
    return (
        math.hypot(b.x - a.x, b.y - a.y),
        (a.x + b.x) / 2,
        (a.y + b.y) / 2,
    )


def client_to_canvas(
    client_x: float,
    client_y: float,
    rect: Tuple[float, float, float, float],
    canvas_size: Tuple[float, float],
) -> Tuple[float, float]:
    """Map client coordinates to canvas-local coordinates.

    Parameters
    ----------
    client_x, client_y : float
        Pointer position in the same space as ``rect``.
    rect : Tuple[float, float, float, float]
        ``(left, top, width, height)`` of the canvas as displayed on
        screen.
    canvas_size : Tuple[float, float]
        ``(width, height)`` of the canvas in its own pixels. When the
        canvas is displayed at a different size, coordinates are scaled.

    Returns
    -------
    Tuple[float, float]
        Canvas-space ``(x, y)``.
    """
    left, top, width, height = rect
    x = client_x - left
    y = client_y - top
    if width > 0 and height > 0:
        x *= canvas_size[0] / width
        y *= canvas_size[1] / height
    return (x, y)


class GestureController:
    """Translate unified pointer events into viewport mutations.

    Parameters
    ----------
    session : EditorSession
        Session owning the viewport, source image, and gap. Only its
        ``viewport``, ``has_image``, ``image_size`` and ``canvas_size``
        are used.
    wheel_zoom_step : float
        Relative zoom change per wheel notch. Default 0.1.
    """

    def __init__(
        self,
        session: 'EditorSession',
        wheel_zoom_step: float = WHEEL_ZOOM_STEP,
    ) -> None:
        self._session = session
        self._wheel_zoom_in = 1.0 + wheel_zoom_step
        self._state = GestureSession()

    @property
    def mode(self) -> GestureMode:
        """Current gesture mode."""
        return self._state.mode

    @property
    def state(self) -> GestureSession:
        """The in-progress gesture session."""
        return self._state

    def handle(self, event: PointerEvent) -> bool:
        """Dispatch a pointer event.

        Returns
        -------
        bool
            ``True`` if the viewport changed.
        """
        if event.phase is EventPhase.WHEEL:
            return self.wheel(event)
        if event.phase is EventPhase.DOWN:
            return self._on_down(event.points)
        if event.phase is EventPhase.MOVE:
            return self._on_move(event.points)
        return self._on_up(event.points)

    def wheel(self, event: PointerEvent) -> bool:
        """Zoom one fixed step around the wheel pointer position.

        Only the sign of ``wheel_delta`` matters. A zero delta is ignored.
        """
        if not self._session.has_image or not event.points:
            return False
        if event.wheel_delta < 0:
            factor = self._wheel_zoom_in
        elif event.wheel_delta > 0:
            factor = 1.0 / self._wheel_zoom_in
        else:
            return False
        point = event.points[0]
        return self._zoom(point.x, point.y, factor)

    def cancel(self) -> None:
        """Abandon any in-progress gesture."""
        self._end()

    # --- Transitions ---

    def _on_down(self, points: Sequence[PointerPoint]) -> bool:
        if not self._session.has_image or not points:
            return False
        if len(points) >= 2:
            if self._state.mode is not GestureMode.PINCHING:
                self._start_pinch(points[0], points[1])
        elif self._state.mode is GestureMode.IDLE:
            self._start_drag(points[0])
        return False

    def _on_move(self, points: Sequence[PointerPoint]) -> bool:
        if not self._session.has_image:
            return False
        mode = self._state.mode
        if mode is GestureMode.PINCHING and len(points) == 2:
            return self._pinch_step(points[0], points[1])
        if mode is GestureMode.DRAGGING and points:
            return self._drag_step(self._tracked_point(points))
        return False

    def _on_up(self, points: Sequence[PointerPoint]) -> bool:
        if not self._session.has_image:
            self._end()
            return False
        if not points:
            self._end()
        elif len(points) == 1:
            if self._state.mode is GestureMode.PINCHING:
                self._log_pinch_end()
            self._start_drag(points[0])
        elif self._state.mode is GestureMode.PINCHING:
            # A third pointer lifted; re-baseline on the remaining pair.
            self._rebaseline(points[0], points[1])
        return False

    # --- Drag ---

    def _start_drag(self, point: PointerPoint) -> None:
        self._state = GestureSession(
            mode=GestureMode.DRAGGING,
            pointer_id=point.id,
            last_x=point.x,
            last_y=point.y,
        )

    def _tracked_point(self, points: Sequence[PointerPoint]) -> PointerPoint:
        for point in points:
            if point.id == self._state.pointer_id:
                return point
        return points[0]

    def _drag_step(self, point: PointerPoint) -> bool:
        dx = point.x - self._state.last_x
        dy = point.y - self._state.last_y
        self._state.last_x = point.x
        self._state.last_y = point.y
        self._state.pointer_id = point.id
        if dx == 0 and dy == 0:
            return False
        self._session.viewport.pan(dx, dy)
        return True

    # --- Pinch ---

    def _start_pinch(self, a: PointerPoint, b: PointerPoint) -> None:
        self._state = GestureSession(
            mode=GestureMode.PINCHING,
            pinch_start=self._session.viewport.snapshot(),
        )
        self._rebaseline(a, b)
        logger.debug(
            "Pinch started: distance=%.1f scale=%.3f",
            self._state.pinch_distance, self._state.pinch_start.scale,
        )

    def _rebaseline(self, a: PointerPoint, b: PointerPoint) -> None:
        distance, mid_x, mid_y = pinch_geometry(a, b)
        self._state.pinch_distance = distance
        self._state.pinch_mid_x = mid_x
        self._state.pinch_mid_y = mid_y

    def _pinch_step(self, a: PointerPoint, b: PointerPoint) -> bool:
        distance, mid_x, mid_y = pinch_geometry(a, b)
        reference = self._state.pinch_distance
        if distance <= 0:
            return False
        if reference <= 0:
            # Fingers started on the same spot; resume from here.
            self._rebaseline(a, b)
            return False
        changed = self._zoom(mid_x, mid_y, distance / reference)
        self._rebaseline(a, b)
        return changed

    def _log_pinch_end(self) -> None:
        start = self._state.pinch_start
        if start is not None:
            logger.debug(
                "Pinch ended: scale %.3f -> %.3f",
                start.scale, self._session.viewport.scale,
            )

    def _end(self) -> None:
        if self._state.mode is GestureMode.PINCHING:
            self._log_pinch_end()
        self._state = GestureSession()

    def _zoom(self, anchor_x: float, anchor_y: float, factor: float) -> bool:
        return self._session.viewport.zoom_at(
            anchor_x, anchor_y, factor,
            self._session.image_size,
            self._session.canvas_size,
        )
