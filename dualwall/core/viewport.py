# -*- coding: utf-8 -*-
"""
Viewport State - Scale and translation of the source image on the composite.

The image is drawn centred on the composite surface, scaled by
``scale``, then shifted by ``(offset_x, offset_y)``. All coordinates
handled here are canvas-space (composite surface pixels), never widget
or window coordinates.

Pure data with no Qt dependency. Mutators never trigger rendering; the
caller re-renders after a mutation.

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
from dataclasses import dataclass, field
from typing import NamedTuple, Tuple


MIN_SCALE = 0.1
MAX_SCALE = 10.0

Size = Tuple[float, float]  # (width, height)


class ViewportSnapshot(NamedTuple):
    """Immutable copy of a viewport's transform."""

    scale: float
    offset_x: float
    offset_y: float


def clamp_scale(
    scale: float,
    min_scale: float = MIN_SCALE,
    max_scale: float = MAX_SCALE,
) -> float:
    """Clamp a scale factor to ``[min_scale, max_scale]``."""
    return max(min_scale, min(scale, max_scale))


@dataclass
class ViewportState:
    """Current placement of the source image on the composite.

    Parameters
    ----------
    scale : float
        Image scale factor, always within ``[min_scale, max_scale]``.
    offset_x : float
        Horizontal shift from the centred position, in canvas pixels.
    offset_y : float
        Vertical shift from the centred position, in canvas pixels.
    min_scale : float
        Lower scale bound. Default 0.1.
    max_scale : float
        Upper scale bound. Default 10.0.
    """

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    min_scale: float = field(default=MIN_SCALE, repr=False)
    max_scale: float = field(default=MAX_SCALE, repr=False)

    def __post_init__(self) -> None:
        self.scale = clamp_scale(float(self.scale), self.min_scale, self.max_scale)

    def reset(self) -> None:
        """Return to scale 1.0 with no offset."""
        self.scale = clamp_scale(1.0, self.min_scale, self.max_scale)
        self.offset_x = 0.0
        self.offset_y = 0.0

    def pan(self, delta_x: float, delta_y: float) -> None:
        """Shift the image by a canvas-space delta."""
        self.offset_x += delta_x
        self.offset_y += delta_y

    def snapshot(self) -> ViewportSnapshot:
        """Return an immutable copy of the transform."""
        return ViewportSnapshot(self.scale, self.offset_x, self.offset_y)

    def restore(self, snapshot: ViewportSnapshot) -> None:
        """Restore a transform captured by :meth:`snapshot`."""
        self.scale = clamp_scale(snapshot.scale, self.min_scale, self.max_scale)
        self.offset_x = snapshot.offset_x
        self.offset_y = snapshot.offset_y

    # --- Coordinate mapping ---

    def image_origin(self, image_size: Size, canvas_size: Size) -> Tuple[float, float]:
        """Canvas position of the image's top-left corner.

        Parameters
        ----------
        image_size : Tuple[float, float]
            ``(width, height)`` of the source image.
        canvas_size : Tuple[float, float]
            ``(width, height)`` of the composite surface.
        """
        return (
            (canvas_size[0] - image_size[0] * self.scale) / 2 + self.offset_x,
            (canvas_size[1] - image_size[1] * self.scale) / 2 + self.offset_y,
        )

    def canvas_to_image(
        self, x: float, y: float, image_size: Size, canvas_size: Size,
    ) -> Tuple[float, float]:
        """Map a canvas point to source image coordinates."""
        origin_x, origin_y = self.image_origin(image_size, canvas_size)
        return ((x - origin_x) / self.scale, (y - origin_y) / self.scale)

    def image_to_canvas(
        self, x: float, y: float, image_size: Size, canvas_size: Size,
    ) -> Tuple[float, float]:
        """Map a source image point to canvas coordinates."""
        origin_x, origin_y = self.image_origin(image_size, canvas_size)
        return (origin_x + x * self.scale, origin_y + y * self.scale)

    # --- Zoom ---

    def zoom_at(
        self,
        anchor_x: float,
        anchor_y: float,
        factor: float,
        image_size: Size,
        canvas_size: Size,
    ) -> bool:
        """Scale by ``factor`` keeping the image point under the anchor fixed.

        Parameters
        ----------
        anchor_x, anchor_y : float
            Canvas-space point that must stay over the same image pixel.
        factor : float
            Relative scale change. Values <= 0 are ignored.
        image_size : Tuple[float, float]
            ``(width, height)`` of the source image.
        canvas_size : Tuple[float, float]
            ``(width, height)`` of the composite surface.

        Returns
        -------
        bool
            ``True`` if scale or offset changed.
        """
        if factor <= 0 or image_size[0] <= 0 or image_size[1] <= 0:
            return False

        # Image point under the anchor, using the pre-zoom transform.
        img_x, img_y = self.canvas_to_image(
            anchor_x, anchor_y, image_size, canvas_size,
        )

        new_scale = clamp_scale(self.scale * factor, self.min_scale, self.max_scale)
        if new_scale == self.scale:
            return False

        # Centred position at the new scale, then shift so the same image
        # point lands back under the anchor.
        centred_x = (canvas_size[0] - image_size[0] * new_scale) / 2
        centred_y = (canvas_size[1] - image_size[1] * new_scale) / 2
        self.scale = new_scale
        self.offset_x = anchor_x - centred_x - img_x * new_scale
        self.offset_y = anchor_y - centred_y - img_y * new_scale
        return True
