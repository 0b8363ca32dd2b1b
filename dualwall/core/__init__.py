# -*- coding: utf-8 -*-
"""
Core Module - Non-GUI transform and compositing engine for DualWall.

Contains the screen layout geometry, viewport state, gesture state
machine, compositor, image decode/encode helpers, and the editor
session that ties them together. Nothing in this package imports Qt.

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

from dualwall.core.errors import (
    DualWallError,
    GapOutOfRangeError,
    ImageDecodeError,
    LayoutError,
    NoImageError,
)
from dualwall.core.layout import ScreenLayout, validate_gap
from dualwall.core.viewport import ViewportState, ViewportSnapshot
from dualwall.core.gestures import (
    EventPhase,
    GestureController,
    GestureMode,
    PointerEvent,
    PointerPoint,
    client_to_canvas,
)
from dualwall.core.compositor import CompositorStyle, RenderResult, render
from dualwall.core.imaging import SourceImage, decode_image, encode_png
from dualwall.core.session import EditorSession, OutputTarget

__all__ = [
    "DualWallError",
    "GapOutOfRangeError",
    "ImageDecodeError",
    "LayoutError",
    "NoImageError",
    "ScreenLayout",
    "validate_gap",
    "ViewportState",
    "ViewportSnapshot",
    "EventPhase",
    "GestureController",
    "GestureMode",
    "PointerEvent",
    "PointerPoint",
    "client_to_canvas",
    "CompositorStyle",
    "RenderResult",
    "render",
    "SourceImage",
    "decode_image",
    "encode_png",
    "EditorSession",
    "OutputTarget",
]
