# -*- coding: utf-8 -*-
"""
CompositeCanvas - Interactive view of the composite surface.

Displays the composite scaled to fit the widget and turns mouse, wheel,
and touch input into unified ``PointerEvent`` objects for the
``GestureController``. Widget coordinates are mapped to composite pixels
through the on-screen rectangle the composite is drawn into, so drag
and zoom stay anchored regardless of the display scale.

Also provides ``OutputPreview``, a passive label showing one output
surface, and ``array_to_qimage`` for numpy to Qt conversion.

Dependencies
------------
PyQt6

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
from typing import Any, List, Optional, Tuple

# Third-party
import numpy as np

try:
    from PyQt6.QtWidgets import QLabel, QSizePolicy, QWidget
    from PyQt6.QtGui import QColor, QEventPoint, QImage, QPainter, QPixmap
    from PyQt6.QtCore import QEvent, QPointF, QRectF, Qt, pyqtSignal as Signal

    _QT_AVAILABLE = True
except ImportError:
    _QT_AVAILABLE = False

from dualwall.core.compositor import RenderResult
from dualwall.core.gestures import (
    EventPhase,
    GestureController,
    GestureMode,
    PointerEvent,
    PointerPoint,
    client_to_canvas,
)
from dualwall.core.session import EditorSession

_log = logging.getLogger("dualwall.canvas")

_MOUSE_POINTER_ID = 0


def array_to_qimage(arr: np.ndarray) -> Any:
    """Convert an ``(H, W, 3)`` uint8 array to a detached QImage."""
    if not _QT_AVAILABLE:
        raise ImportError("Qt is required for array_to_qimage")
    display = np.ascontiguousarray(arr, dtype=np.uint8)
    h, w = display.shape[:2]
    return QImage(display.data, w, h, 3 * w, QImage.Format.Format_RGB888).copy()


def fit_rect(
    content_size: Tuple[float, float],
    area: Tuple[float, float, float, float],
) -> Tuple[float, float, float, float]:
    """Largest aspect-preserving rectangle of ``content_size`` centred in ``area``.

    Parameters
    ----------
    content_size : Tuple[float, float]
        ``(width, height)`` of the content.
    area : Tuple[float, float, float, float]
        ``(left, top, width, height)`` of the available area.

    Returns
    -------
    Tuple[float, float, float, float]
        ``(left, top, width, height)``.
    """
    left, top, width, height = area
    cw, ch = content_size
    if cw <= 0 or ch <= 0 or width <= 0 or height <= 0:
        return (left, top, 0.0, 0.0)
    factor = min(width / cw, height / ch)
    w, h = cw * factor, ch * factor
    return (left + (width - w) / 2, top + (height - h) / 2, w, h)


if _QT_AVAILABLE:

    class CompositeCanvas(QWidget):
        """Composite surface view with drag, wheel, and pinch interaction.

        Parameters
        ----------
        session : EditorSession
            Session to display and mutate.
        parent : QWidget, optional
            Parent widget.

        Signals
        -------
        file_dropped(str)
            Emitted with the local path of a file dropped on the canvas.
        """

        file_dropped = Signal(str)

        _BACKGROUND = QColor(34, 34, 34)
        _PLACEHOLDER = "Open or drop an image to start"

        def __init__(
            self,
            session: EditorSession,
            parent: Optional[Any] = None,
        ) -> None:
            super().__init__(parent)
            self._session = session
            self._controller = GestureController(
                session, wheel_zoom_step=session.config.wheel_zoom_step,
            )
            self._pixmap: Optional[QPixmap] = None

            self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
            self.setAcceptDrops(True)
            self.setMinimumSize(320, 320)
            self.setSizePolicy(
                QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding,
            )
            self.setCursor(Qt.CursorShape.OpenHandCursor)

            session.add_listener(self._on_render)

        @property
        def controller(self) -> GestureController:
            return self._controller

        # --- Geometry ---

        def display_rect(self) -> QRectF:
            """Widget rectangle the composite is drawn into."""
            left, top, w, h = fit_rect(
                self._session.canvas_size,
                (0.0, 0.0, float(self.width()), float(self.height())),
            )
            return QRectF(left, top, w, h)

        def to_canvas(self, pos: QPointF) -> Tuple[float, float]:
            """Map a widget position to composite pixels."""
            rect = self.display_rect()
            return client_to_canvas(
                pos.x(), pos.y(),
                (rect.x(), rect.y(), rect.width(), rect.height()),
                self._session.canvas_size,
            )

        def _point(self, pointer_id: int, pos: QPointF) -> PointerPoint:
            x, y = self.to_canvas(pos)
            return PointerPoint(pointer_id, x, y)

        # --- Rendering ---

        def _on_render(self, result: Optional[RenderResult]) -> None:
            if result is None:
                self._pixmap = None
                self._controller.cancel()
            else:
                self._pixmap = QPixmap.fromImage(array_to_qimage(result.composite))
            self.update()

        def paintEvent(self, event: Any) -> None:
            painter = QPainter(self)
            painter.fillRect(self.rect(), self._BACKGROUND)
            if self._pixmap is None:
                painter.setPen(QColor(170, 170, 170))
                painter.drawText(
                    self.rect(), Qt.AlignmentFlag.AlignCenter, self._PLACEHOLDER,
                )
            else:
                painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
                painter.drawPixmap(
                    self.display_rect(), self._pixmap,
                    QRectF(self._pixmap.rect()),
                )
            painter.end()

        # --- Input dispatch ---

        def _dispatch(self, event: PointerEvent) -> None:
            if self._controller.handle(event):
                self._session.refresh()
            if self._controller.mode is GestureMode.IDLE:
                self.setCursor(Qt.CursorShape.OpenHandCursor)
            else:
                self.setCursor(Qt.CursorShape.ClosedHandCursor)

        def mousePressEvent(self, event: Any) -> None:
            if event.button() != Qt.MouseButton.LeftButton:
                super().mousePressEvent(event)
                return
            self._dispatch(PointerEvent(
                EventPhase.DOWN,
                (self._point(_MOUSE_POINTER_ID, event.position()),),
            ))
            event.accept()

        def mouseMoveEvent(self, event: Any) -> None:
            if self._controller.mode is not GestureMode.DRAGGING:
                super().mouseMoveEvent(event)
                return
            self._dispatch(PointerEvent(
                EventPhase.MOVE,
                (self._point(_MOUSE_POINTER_ID, event.position()),),
            ))
            event.accept()

        def mouseReleaseEvent(self, event: Any) -> None:
            if event.button() != Qt.MouseButton.LeftButton:
                super().mouseReleaseEvent(event)
                return
            self._dispatch(PointerEvent(EventPhase.UP))
            event.accept()

        def leaveEvent(self, event: Any) -> None:
            if self._controller.mode is GestureMode.DRAGGING:
                self._dispatch(PointerEvent(EventPhase.CANCEL))
            super().leaveEvent(event)

        def wheelEvent(self, event: Any) -> None:
            # Qt reports wheel-up as positive; the controller zooms in on
            # negative deltas.
            self._dispatch(PointerEvent(
                EventPhase.WHEEL,
                (self._point(_MOUSE_POINTER_ID, event.position()),),
                wheel_delta=-event.angleDelta().y(),
            ))
            event.accept()

        def event(self, event: Any) -> bool:
            kind = event.type()
            if kind in (
                QEvent.Type.TouchBegin,
                QEvent.Type.TouchUpdate,
                QEvent.Type.TouchEnd,
                QEvent.Type.TouchCancel,
            ):
                self._handle_touch(event)
                event.accept()
                return True
            return super().event(event)

        def _handle_touch(self, event: Any) -> None:
            kind = event.type()
            if kind == QEvent.Type.TouchCancel:
                self._dispatch(PointerEvent(EventPhase.CANCEL))
                return

            points = event.points()
            active: List[PointerPoint] = [
                self._point(p.id(), p.position())
                for p in points
                if p.state() != QEventPoint.State.Released
            ]
            pressed = any(p.state() == QEventPoint.State.Pressed for p in points)
            released = any(p.state() == QEventPoint.State.Released for p in points)

            if kind == QEvent.Type.TouchBegin or pressed:
                phase = EventPhase.DOWN
            elif kind == QEvent.Type.TouchEnd or released:
                phase = EventPhase.UP
            else:
                phase = EventPhase.MOVE
            self._dispatch(PointerEvent(phase, tuple(active)))

        # --- Drag and drop ---

        def dragEnterEvent(self, event: Any) -> None:
            mime = event.mimeData()
            if mime.hasUrls() and any(u.isLocalFile() for u in mime.urls()):
                event.acceptProposedAction()
            else:
                event.ignore()

        def dropEvent(self, event: Any) -> None:
            for url in event.mimeData().urls():
                if url.isLocalFile():
                    _log.info("File dropped: %s", url.toLocalFile())
                    self.file_dropped.emit(url.toLocalFile())
                    event.acceptProposedAction()
                    return
            event.ignore()

    class OutputPreview(QLabel):
        """Passive preview of one output surface.

        Parameters
        ----------
        title : str
            Placeholder text shown while there is nothing to preview.
        parent : QWidget, optional
            Parent widget.
        """

        def __init__(self, title: str, parent: Optional[Any] = None) -> None:
            super().__init__(parent)
            self._title = title
            self._pixmap: Optional[QPixmap] = None
            self.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.setMinimumSize(240, 135)
            self.setSizePolicy(
                QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding,
            )
            self.setStyleSheet("background-color: #222; color: #aaa;")
            self.setText(title)

        def set_array(self, arr: Optional[np.ndarray]) -> None:
            """Show ``arr``, or the placeholder when None."""
            if arr is None:
                self._pixmap = None
                self.clear()
                self.setText(self._title)
                return
            self._pixmap = QPixmap.fromImage(array_to_qimage(arr))
            self._rescale()

        def resizeEvent(self, event: Any) -> None:
            super().resizeEvent(event)
            self._rescale()

        def _rescale(self) -> None:
            if self._pixmap is None:
                return
            self.setPixmap(self._pixmap.scaled(
                self.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            ))

else:
    # Stubs when Qt is not available
    class CompositeCanvas:  # type: ignore[no-redef]
        """Stub when Qt is unavailable."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise ImportError("Qt is required for CompositeCanvas")

    class OutputPreview:  # type: ignore[no-redef]
        """Stub when Qt is unavailable."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise ImportError("Qt is required for OutputPreview")
