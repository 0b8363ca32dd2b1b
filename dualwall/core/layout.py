# -*- coding: utf-8 -*-
"""
Screen Layout - Fixed geometry of the dual-screen composite.

The composite surface stacks the top screen, the hidden bezel gap, and
the bottom screen's content band vertically. The bottom screen's content
is narrower than the composite and is centred horizontally; the bottom
output canvas may be wider than its content, producing symmetric black
borders.

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
from dataclasses import dataclass
from typing import Any, Tuple

from dualwall.core.errors import GapOutOfRangeError, LayoutError

#: Largest bezel gap accepted from the gap control, in pixels.
MAX_GAP = 500

Rect = Tuple[int, int, int, int]  # (x, y, width, height)


@dataclass(frozen=True)
class ScreenLayout:
    """Geometry constants of the two screens.

    Parameters
    ----------
    top_width : int
        Top screen width in pixels.
    top_height : int
        Top screen height in pixels.
    bottom_content_width : int
        Width of the visible bottom screen area.
    bottom_content_height : int
        Height of the visible bottom screen area.
    bottom_output_width : int
        Width of the exported bottom image. Must be at least
        ``bottom_content_width``; the excess becomes side borders.
    bottom_output_height : int
        Height of the exported bottom image.
    """

    top_width: int = 1920
    top_height: int = 1080
    bottom_content_width: int = 1240
    bottom_content_height: int = 1080
    bottom_output_width: int = 1920
    bottom_output_height: int = 1080

    def __post_init__(self) -> None:
        for name in (
            'top_width', 'top_height',
            'bottom_content_width', 'bottom_content_height',
            'bottom_output_width', 'bottom_output_height',
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise LayoutError(f"{name} must be a positive integer, got {value!r}")
        if self.bottom_output_width < self.bottom_content_width:
            raise LayoutError(
                "bottom_output_width must be >= bottom_content_width "
                f"({self.bottom_output_width} < {self.bottom_content_width})"
            )
        if self.bottom_output_height < self.bottom_content_height:
            raise LayoutError(
                "bottom_output_height must be >= bottom_content_height "
                f"({self.bottom_output_height} < {self.bottom_content_height})"
            )

    @property
    def composite_width(self) -> int:
        """Width of the composite surface."""
        return max(self.top_width, self.bottom_output_width)

    def composite_height(self, gap: int) -> int:
        """Height of the composite surface for a given gap."""
        return self.top_height + gap + self.bottom_content_height

    def composite_size(self, gap: int) -> Tuple[int, int]:
        """``(width, height)`` of the composite surface."""
        return (self.composite_width, self.composite_height(gap))

    @property
    def bottom_source_x(self) -> int:
        """Left edge of the bottom content band inside the composite."""
        return (self.composite_width - self.bottom_content_width) // 2

    @property
    def bottom_dest_x(self) -> int:
        """Left edge of the bottom content inside the bottom output."""
        return (self.bottom_output_width - self.bottom_content_width) // 2

    @property
    def side_bar_width(self) -> int:
        """Width of the left crop-indicator bar over the bottom band."""
        return self.bottom_source_x

    def top_rect(self) -> Rect:
        """Region of the composite copied into the top output."""
        return (0, 0, self.top_width, self.top_height)

    def gap_rect(self, gap: int) -> Rect:
        """Region of the composite covered by the hidden gap band."""
        return (0, self.top_height, self.composite_width, gap)

    def bottom_rect(self, gap: int) -> Rect:
        """Region of the composite copied into the bottom output."""
        return (
            self.bottom_source_x,
            self.top_height + gap,
            self.bottom_content_width,
            self.bottom_content_height,
        )

    def side_bar_rects(self, gap: int) -> Tuple[Rect, Rect]:
        """Left and right margins of the bottom band that get cropped away."""
        y = self.top_height + gap
        right_x = self.bottom_source_x + self.bottom_content_width
        left = (0, y, self.side_bar_width, self.bottom_content_height)
        right = (
            right_x, y,
            self.composite_width - right_x, self.bottom_content_height,
        )
        return left, right


def validate_gap(value: Any, max_gap: int = MAX_GAP) -> int:
    """Parse and range-check a gap height.

    Parameters
    ----------
    value : Any
        Candidate gap, typically an ``int`` or the text of an input box.
    max_gap : int
        Inclusive upper bound.

    Returns
    -------
    int
        The validated gap in pixels.

    Raises
    ------
    GapOutOfRangeError
        If ``value`` is not an integer or lies outside ``[0, max_gap]``.
    """
    if isinstance(value, bool):
        raise GapOutOfRangeError(f"Gap must be an integer, got {value!r}")
    if isinstance(value, str):
        try:
            value = int(value.strip(), 10)
        except ValueError:
            raise GapOutOfRangeError(
                f"Gap must be an integer, got {value!r}"
            ) from None
    if isinstance(value, float):
        if not value.is_integer():
            raise GapOutOfRangeError(f"Gap must be an integer, got {value!r}")
        value = int(value)
    if not isinstance(value, int):
        raise GapOutOfRangeError(f"Gap must be an integer, got {value!r}")
    if value < 0 or value > max_gap:
        raise GapOutOfRangeError(
            f"Gap height must be between 0 and {max_gap} pixels, got {value}"
        )
    return value
