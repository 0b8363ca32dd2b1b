# -*- coding: utf-8 -*-
"""
ImageLoader - Asynchronous source image decoding for the editor window.

Decodes on the shared ``QThreadPool`` and delivers the result back to
the GUI thread, where it is handed to the ``EditorSession`` together
with the request token issued when the load began. A newer request
supersedes an older one: the session drops results with stale tokens.

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
from typing import Any, Optional

try:
    from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal as Signal

    _QT_AVAILABLE = True
except ImportError:
    _QT_AVAILABLE = False

from dualwall.core.errors import ImageDecodeError
from dualwall.core.imaging import decode_image
from dualwall.core.session import EditorSession

_log = logging.getLogger("dualwall.loader")


if _QT_AVAILABLE:

    # -------------------------------------------------------------------
    # Signal proxy (QRunnable cannot emit signals directly)
    # -------------------------------------------------------------------

    class _SignalProxy(QObject):
        """Proxy to deliver decode outcomes from worker threads."""

        ready = Signal(int, object)
        failed = Signal(int, str)

    class _DecodeWorker(QRunnable):
        """Decode one image file in a thread pool."""

        def __init__(self, token: int, path: str, proxy: _SignalProxy) -> None:
            super().__init__()
            self.token = token
            self.path = path
            self.proxy = proxy
            self.setAutoDelete(True)

        def run(self) -> None:
            """Execute the decode in a worker thread."""
            try:
                image = decode_image(self.path)
            except ImageDecodeError as e:
                self.proxy.failed.emit(self.token, str(e))
                return
            self.proxy.ready.emit(self.token, image)

    class ImageLoader(QObject):
        """Load image files into an ``EditorSession`` off the GUI thread.

        Parameters
        ----------
        session : EditorSession
            Session receiving decoded images.
        parent : QObject, optional
            Qt parent.

        Signals
        -------
        loaded(object)
            Emitted with the ``SourceImage`` once it is installed.
        failed(str)
            Emitted with an error message when the current request fails.
        """

        loaded = Signal(object)
        failed = Signal(str)

        def __init__(
            self,
            session: EditorSession,
            parent: Optional[QObject] = None,
        ) -> None:
            super().__init__(parent)
            self._session = session
            self._proxy = _SignalProxy()
            self._proxy.ready.connect(self._on_ready)
            self._proxy.failed.connect(self._on_failed)
            self._pool = QThreadPool.globalInstance()

        def load(self, path: str) -> int:
            """Start decoding ``path``; returns the request token."""
            token = self._session.begin_load(path)
            _log.info("Decoding %s (request %d)", path, token)
            self._pool.start(_DecodeWorker(token, path, self._proxy))
            return token

        def _on_ready(self, token: int, image: Any) -> None:
            if self._session.finish_load(token, image):
                self.loaded.emit(image)

        def _on_failed(self, token: int, message: str) -> None:
            if self._session.fail_load(token, ImageDecodeError(message)):
                self.failed.emit(message)

else:

    class ImageLoader:  # type: ignore[no-redef]
        """Stub when Qt is unavailable."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise ImportError("Qt is required for ImageLoader")
