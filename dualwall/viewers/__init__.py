# -*- coding: utf-8 -*-
"""
Viewers Module - Qt front end for the DualWall editor.

Components
----------
- ``canvas`` — Interactive composite view (CompositeCanvas) and output
  previews (OutputPreview)
- ``loader`` — Asynchronous image decoding into an EditorSession
- ``main_window`` — Standalone editor application window

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

from dualwall.core.config import load_config
from dualwall.viewers.canvas import CompositeCanvas, OutputPreview
from dualwall.viewers.loader import ImageLoader
from dualwall.viewers.main_window import DualWallWindow


def show(path=None, *, block=True):
    """Open the DualWall editor window.

    Parameters
    ----------
    path : str or Path, optional
        Image file to open immediately.
    block : bool
        If ``True`` (default), block until the window is closed.
        If ``False``, return immediately.

    Returns
    -------
    DualWallWindow
        The editor window instance.
    """
    from PyQt6.QtWidgets import QApplication
    import sys

    app = QApplication.instance()
    created_app = False
    if app is None:
        app = QApplication(sys.argv)
        created_app = True

    window = DualWallWindow(load_config())
    if path is not None:
        window.open_file(str(path))
    window.show()

    if block:
        if created_app:
            app.exec()
        else:
            from PyQt6.QtCore import QEventLoop
            loop = QEventLoop()
            original_close = window.closeEvent

            def _on_close(event):
                original_close(event)
                loop.quit()

            window.closeEvent = _on_close
            loop.exec()

    return window
