# -*- coding: utf-8 -*-
"""
DualWall - Dual-screen wallpaper composer.

Positions and scales a single source image across a fixed dual-output
surface (a wide top screen and a narrower bottom screen separated by a
configurable bezel gap) and exports each screen as its own PNG.

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

__version__ = "0.1.0"


def show(path=None, *, block=True):
    """Open the DualWall editor window.

    Re-exported from ``dualwall.viewers.show``.
    See :func:`dualwall.viewers.show` for full documentation.
    """
    from dualwall.viewers import show as _show
    return _show(path, block=block)


__all__: list = ["show"]
