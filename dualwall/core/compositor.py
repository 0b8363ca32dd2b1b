# -*- coding: utf-8 -*-
"""
Compositor - Render the composite surface and split it into two outputs.

Rendering is a two-phase pure function of (image, viewport, gap, layout):

1. **Composite** — the transformed source image on a dark background,
   overlaid with a translucent marker over the hidden gap band and
   translucent side bars over the cropped margins of the bottom band.
2. **Split** — the top and bottom outputs are filled with their own
   backgrounds and receive a direct region copy of the composite. No
   transform is re-applied, so output pixels are bit-identical to the
   corresponding composite region.

Surfaces are ``(H, W, 3)`` uint8 numpy arrays. The gap label is
rasterised with Pillow; everything else is numpy.

Dependencies
------------
Pillow

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
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Tuple

# Third-party
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from dualwall.core.imaging import SourceImage
from dualwall.core.layout import Rect, ScreenLayout
from dualwall.core.viewport import ViewportState

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, float]  # alpha in [0, 1]


@dataclass(frozen=True)
class CompositorStyle:
    """Colours and label used by the compositor.

    Parameters
    ----------
    background : RGB
        Composite and top output background. Default ``#111``.
    bottom_background : RGB
        Bottom output background, visible as side borders. Default black.
    gap_fill : RGBA
        Overlay colour of the hidden gap band.
    gap_label : str
        Text centred in the gap band.
    gap_label_color : RGBA
        Colour of the gap label.
    gap_label_size : int
        Gap label font size in pixels.
    side_bar_fill : RGBA
        Overlay colour of the cropped bottom margins.
    """

    background: RGB = (17, 17, 17)
    bottom_background: RGB = (0, 0, 0)
    gap_fill: RGBA = (255, 50, 50, 0.3)
    gap_label: str = "Hidden Gap Area"
    gap_label_color: RGBA = (255, 255, 255, 0.8)
    gap_label_size: int = 24
    side_bar_fill: RGBA = (50, 50, 50, 0.7)


@dataclass
class RenderResult:
    """Surfaces produced by one render pass.

    Attributes
    ----------
    composite : np.ndarray
        The working surface shown to the user.
    top : np.ndarray
        Top screen output.
    bottom : np.ndarray
        Bottom screen output.
    gap : int
        Gap height the pass was rendered with.
    """

    composite: np.ndarray
    top: np.ndarray
    bottom: np.ndarray
    gap: int


# ---------------------------------------------------------------------------
# Surface primitives
# ---------------------------------------------------------------------------

def new_surface(width: int, height: int, color: RGB) -> np.ndarray:
    """Allocate an ``(height, width, 3)`` surface filled with ``color``."""
    surface = np.empty((height, width, 3), dtype=np.uint8)
    surface[:, :] = color
    return surface


def _clip_rect(rect: Rect, width: int, height: int) -> Optional[Tuple[int, int, int, int]]:
    """Clip ``rect`` to a surface; return ``(x0, y0, x1, y1)`` or None."""
    x, y, w, h = rect
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(width, x + w), min(height, y + h)
    if x1 <= x0 or y1 <= y0:
        return None
    return (x0, y0, x1, y1)


def fill_rect(surface: np.ndarray, rect: Rect, color: RGBA) -> None:
    """Alpha-blend a solid colour over a rectangle, in place."""
    clipped = _clip_rect(rect, surface.shape[1], surface.shape[0])
    if clipped is None:
        return
    x0, y0, x1, y1 = clipped
    alpha = float(color[3])
    rgb = np.array(color[:3], dtype=np.float64)
    region = surface[y0:y1, x0:x1].astype(np.float64)
    blended = region * (1.0 - alpha) + rgb * alpha
    surface[y0:y1, x0:x1] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)


def blit(
    src: np.ndarray,
    src_rect: Rect,
    dst: np.ndarray,
    dst_xy: Tuple[int, int],
) -> np.ndarray:
    """Copy a rectangle of ``src`` into ``dst`` at ``dst_xy``, in place.

    A straight pixel copy with no resampling. The copied area is clipped
    to both surfaces.

    Parameters
    ----------
    src : np.ndarray
        Source surface.
    src_rect : Tuple[int, int, int, int]
        ``(x, y, width, height)`` in ``src``.
    dst : np.ndarray
        Destination surface.
    dst_xy : Tuple[int, int]
        Top-left destination position in ``dst``.

    Returns
    -------
    np.ndarray
        ``dst``, for chaining.
    """
    sx, sy, w, h = src_rect
    dx, dy = dst_xy
    # Shift the window so negative origins on either side are dropped.
    shift_x = max(0, -sx, -dx)
    shift_y = max(0, -sy, -dy)
    sx, dx, w = sx + shift_x, dx + shift_x, w - shift_x
    sy, dy, h = sy + shift_y, dy + shift_y, h - shift_y
    w = min(w, src.shape[1] - sx, dst.shape[1] - dx)
    h = min(h, src.shape[0] - sy, dst.shape[0] - dy)
    if w <= 0 or h <= 0:
        return dst
    dst[dy:dy + h, dx:dx + w] = src[sy:sy + h, sx:sx + w]
    return dst


def draw_image(
    surface: np.ndarray,
    pixels: np.ndarray,
    x: float,
    y: float,
    scale: float,
) -> None:
    """Draw ``pixels`` scaled by ``scale`` with its top-left at ``(x, y)``.

    Nearest-neighbour inverse mapping sampled at destination pixel
    centres; only the visible part is computed.
    """
    src_h, src_w = pixels.shape[:2]
    dst_h, dst_w = surface.shape[:2]
    if scale <= 0 or src_w == 0 or src_h == 0:
        return

    col0 = max(0, int(np.floor(x)))
    col1 = min(dst_w, int(np.ceil(x + src_w * scale)))
    row0 = max(0, int(np.floor(y)))
    row1 = min(dst_h, int(np.ceil(y + src_h * scale)))
    if col1 <= col0 or row1 <= row0:
        return

    cols = np.arange(col0, col1)
    rows = np.arange(row0, row1)
    src_cols = np.floor((cols + 0.5 - x) / scale).astype(np.intp)
    src_rows = np.floor((rows + 0.5 - y) / scale).astype(np.intp)
    col_ok = (src_cols >= 0) & (src_cols < src_w)
    row_ok = (src_rows >= 0) & (src_rows < src_h)
    if not col_ok.any() or not row_ok.any():
        return

    surface[np.ix_(rows[row_ok], cols[col_ok])] = pixels[
        np.ix_(src_rows[row_ok], src_cols[col_ok])
    ]


@lru_cache(maxsize=8)
def _label_font(size: int) -> Any:
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=8)
def _label_mask(text: str, size: int) -> np.ndarray:
    """Rasterise ``text`` to a float coverage mask in [0, 1]."""
    font = _label_font(size)
    probe = ImageDraw.Draw(Image.new("L", (1, 1)))
    left, top, right, bottom = probe.textbbox((0, 0), text, font=font)
    width, height = max(1, right - left), max(1, bottom - top)
    canvas = Image.new("L", (width, height), 0)
    ImageDraw.Draw(canvas).text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(canvas, dtype=np.float64) / 255.0
    mask.setflags(write=False)
    return mask


def draw_label(
    surface: np.ndarray,
    text: str,
    center: Tuple[float, float],
    color: RGBA,
    size: int,
) -> None:
    """Alpha-blend ``text`` centred on ``center``, in place."""
    mask = _label_mask(text, size)
    mask_h, mask_w = mask.shape
    x = int(round(center[0] - mask_w / 2))
    y = int(round(center[1] - mask_h / 2))
    clipped = _clip_rect((x, y, mask_w, mask_h), surface.shape[1], surface.shape[0])
    if clipped is None:
        return
    x0, y0, x1, y1 = clipped
    coverage = mask[y0 - y:y1 - y, x0 - x:x1 - x, np.newaxis] * float(color[3])
    rgb = np.array(color[:3], dtype=np.float64)
    region = surface[y0:y1, x0:x1].astype(np.float64)
    blended = region * (1.0 - coverage) + rgb * coverage
    surface[y0:y1, x0:x1] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)


# ---------------------------------------------------------------------------
# Render phases
# ---------------------------------------------------------------------------

def render_composite(
    image: SourceImage,
    viewport: ViewportState,
    gap: int,
    layout: ScreenLayout,
    style: Optional[CompositorStyle] = None,
) -> np.ndarray:
    """Render the composite surface.

    Parameters
    ----------
    image : SourceImage
        Source raster.
    viewport : ViewportState
        Current transform.
    gap : int
        Hidden gap height in pixels.
    layout : ScreenLayout
        Screen geometry.
    style : Optional[CompositorStyle]
        Colours. None uses defaults.

    Returns
    -------
    np.ndarray
        ``(top_height + gap + bottom_content_height, composite_width, 3)``
        uint8 surface.
    """
    if style is None:
        style = CompositorStyle()

    canvas_size = layout.composite_size(gap)
    surface = new_surface(canvas_size[0], canvas_size[1], style.background)

    x, y = viewport.image_origin(image.size, canvas_size)
    draw_image(surface, image.pixels, x, y, viewport.scale)

    if gap > 0:
        gap_rect = layout.gap_rect(gap)
        fill_rect(surface, gap_rect, style.gap_fill)
        draw_label(
            surface,
            style.gap_label,
            (layout.composite_width / 2, layout.top_height + gap / 2),
            style.gap_label_color,
            style.gap_label_size,
        )

    for bar in layout.side_bar_rects(gap):
        fill_rect(surface, bar, style.side_bar_fill)

    return surface


def split_composite(
    composite: np.ndarray,
    gap: int,
    layout: ScreenLayout,
    style: Optional[CompositorStyle] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Crop the two outputs out of a rendered composite.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        ``(top, bottom)`` output surfaces.
    """
    if style is None:
        style = CompositorStyle()

    top = new_surface(layout.top_width, layout.top_height, style.background)
    blit(composite, layout.top_rect(), top, (0, 0))

    bottom = new_surface(
        layout.bottom_output_width,
        layout.bottom_output_height,
        style.bottom_background,
    )
    blit(composite, layout.bottom_rect(gap), bottom, (layout.bottom_dest_x, 0))
    return top, bottom


def render(
    image: Optional[SourceImage],
    viewport: ViewportState,
    gap: int,
    layout: ScreenLayout,
    style: Optional[CompositorStyle] = None,
) -> Optional[RenderResult]:
    """Run both render phases.

    Returns ``None`` without allocating anything when ``image`` is None.
    """
    if image is None:
        return None
    composite = render_composite(image, viewport, gap, layout, style)
    top, bottom = split_composite(composite, gap, layout, style)
    logger.debug(
        "Rendered composite %dx%d (scale=%.3f, offset=(%.1f, %.1f), gap=%d)",
        composite.shape[1], composite.shape[0],
        viewport.scale, viewport.offset_x, viewport.offset_y, gap,
    )
    return RenderResult(composite=composite, top=top, bottom=bottom, gap=gap)
