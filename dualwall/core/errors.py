# -*- coding: utf-8 -*-
"""
Errors - Exception hierarchy for DualWall.

Every failure the editor can hit is locally recoverable: the GUI catches
these at the action boundary and reports them, the CLI turns them into
a non-zero exit code.

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


class DualWallError(Exception):
    """Base class for all DualWall errors."""


class ImageDecodeError(DualWallError):
    """Raised when a source file cannot be read or decoded as an image."""


class GapOutOfRangeError(DualWallError, ValueError):
    """Raised when a gap height is not an integer within the allowed range."""


class LayoutError(DualWallError, ValueError):
    """Raised when screen geometry constants are inconsistent."""


class NoImageError(DualWallError):
    """Raised when an operation needs a source image and none is loaded."""
