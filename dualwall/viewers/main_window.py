# -*- coding: utf-8 -*-
"""
DualWallWindow - Top-level editor window.

Standalone QMainWindow assembling the composite canvas, the two output
previews, the gap control, and open/reset/save actions. Provides a
``main()`` entry point for command-line invocation.

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
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

_log = logging.getLogger("dualwall.main_window")

try:
    from PyQt6.QtWidgets import (
        QApplication,
        QFileDialog,
        QLabel,
        QMainWindow,
        QMessageBox,
        QSpinBox,
        QSplitter,
        QToolBar,
        QVBoxLayout,
        QWidget,
    )
    from PyQt6.QtGui import QAction, QKeySequence
    from PyQt6.QtCore import Qt

    _QT_AVAILABLE = True
except ImportError:
    _QT_AVAILABLE = False

from dualwall.core.config import DualWallConfig, load_config
from dualwall.core.errors import DualWallError, NoImageError
from dualwall.core.session import EditorSession, OutputTarget


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser for dualwall-viewer."""
    parser = argparse.ArgumentParser(
        prog="dualwall-viewer",
        description="DualWall editor — position one image across a top and "
        "a bottom screen and export a wallpaper for each.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Image file to open on start.",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="PATH",
        help="Path to a dualwall_config.json overriding the defaults.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help="Write log output to a file (in addition to stderr).",
    )
    return parser


if _QT_AVAILABLE:
    from dualwall.viewers.canvas import CompositeCanvas, OutputPreview
    from dualwall.viewers.loader import ImageLoader

    _IMAGE_FILTER = (
        "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff);;"
        "All Files (*)"
    )

    _EXPORT_FILTER = "PNG (*.png);;All Files (*)"

    class DualWallWindow(QMainWindow):
        """Dual-screen wallpaper editor window.

        Parameters
        ----------
        config : DualWallConfig, optional
            Geometry and export defaults. None uses defaults.
        parent : QWidget, optional
            Parent widget.
        """

        def __init__(
            self,
            config: Optional[DualWallConfig] = None,
            parent: Optional[Any] = None,
        ) -> None:
            super().__init__(parent)

            self.setWindowTitle("DualWall")
            self.resize(1280, 860)

            self._session = EditorSession(config)
            self._loader = ImageLoader(self._session, self)
            self._loader.loaded.connect(self._on_loaded)
            self._loader.failed.connect(self._on_load_failed)

            self._canvas = CompositeCanvas(self._session, self)
            self._canvas.file_dropped.connect(self.open_file)
            self._top_preview = OutputPreview("Top screen")
            self._bottom_preview = OutputPreview("Bottom screen")

            self._build_central()
            self._create_actions()
            self._create_toolbar()
            self._create_menus()

            self._session.add_listener(self._on_render)
            self._update_actions()
            self.statusBar().showMessage("Ready")

        @property
        def session(self) -> EditorSession:
            return self._session

        @property
        def canvas(self) -> CompositeCanvas:
            return self._canvas

        # --- Public API ---

        def open_file(self, filepath: str) -> None:
            """Start decoding an image file; supersedes any pending load."""
            _log.info("open_file(%r)", filepath)
            self._loader.load(filepath)
            self.statusBar().showMessage(f"Loading: {filepath}")

        def save_output(self, target: OutputTarget, filepath: str) -> Optional[Path]:
            """Write one output surface to ``filepath`` as PNG."""
            try:
                path = self._session.export_to(target, filepath)
            except NoImageError as e:
                QMessageBox.information(self, "No Image", str(e))
                return None
            except OSError as e:
                _log.error("Export failed: %s", e, exc_info=True)
                QMessageBox.critical(
                    self, "Export Error",
                    f"Could not save image:\n{filepath}\n\n{e}",
                )
                return None
            self.statusBar().showMessage(f"Saved: {path}")
            return path

        # --- Layout ---

        def _build_central(self) -> None:
            previews = QWidget(self)
            preview_layout = QVBoxLayout(previews)
            preview_layout.setContentsMargins(4, 4, 4, 4)
            preview_layout.addWidget(QLabel("Top screen"))
            preview_layout.addWidget(self._top_preview, 1)
            preview_layout.addWidget(QLabel("Bottom screen"))
            preview_layout.addWidget(self._bottom_preview, 1)

            splitter = QSplitter(Qt.Orientation.Horizontal, self)
            splitter.addWidget(self._canvas)
            splitter.addWidget(previews)
            splitter.setStretchFactor(0, 3)
            splitter.setStretchFactor(1, 2)
            self.setCentralWidget(splitter)

        # --- Actions ---

        def _create_actions(self) -> None:
            """Create menu/toolbar actions."""
            self._open_action = QAction("&Open Image...", self)
            self._open_action.setShortcut(QKeySequence.StandardKey.Open)
            self._open_action.triggered.connect(self._on_open)

            self._reset_action = QAction("&Reset", self)
            self._reset_action.setShortcut(QKeySequence("Ctrl+R"))
            self._reset_action.triggered.connect(self._on_reset)

            self._save_top_action = QAction("Save &Top...", self)
            self._save_top_action.setShortcut(QKeySequence("Ctrl+T"))
            self._save_top_action.triggered.connect(
                lambda: self._on_save(OutputTarget.TOP)
            )

            self._save_bottom_action = QAction("Save &Bottom...", self)
            self._save_bottom_action.setShortcut(QKeySequence("Ctrl+B"))
            self._save_bottom_action.triggered.connect(
                lambda: self._on_save(OutputTarget.BOTTOM)
            )

            self._exit_action = QAction("E&xit", self)
            self._exit_action.setShortcut(QKeySequence.StandardKey.Quit)
            self._exit_action.triggered.connect(self.close)

        def _create_toolbar(self) -> None:
            toolbar = QToolBar("Main", self)
            toolbar.setMovable(False)
            toolbar.addAction(self._open_action)
            toolbar.addAction(self._reset_action)
            toolbar.addSeparator()
            toolbar.addAction(self._save_top_action)
            toolbar.addAction(self._save_bottom_action)
            toolbar.addSeparator()

            toolbar.addWidget(QLabel(" Gap (px): "))
            self._gap_spin = QSpinBox(self)
            self._gap_spin.setRange(0, self._session.config.max_gap)
            self._gap_spin.setValue(self._session.gap)
            self._gap_spin.setToolTip(
                "Height of the hidden bezel between the two screens"
            )
            self._gap_spin.valueChanged.connect(self._on_gap_changed)
            toolbar.addWidget(self._gap_spin)
            self.addToolBar(toolbar)

        def _create_menus(self) -> None:
            """Build the menu bar."""
            file_menu = self.menuBar().addMenu("&File")
            file_menu.addAction(self._open_action)
            file_menu.addSeparator()
            file_menu.addAction(self._save_top_action)
            file_menu.addAction(self._save_bottom_action)
            file_menu.addSeparator()
            file_menu.addAction(self._reset_action)
            file_menu.addSeparator()
            file_menu.addAction(self._exit_action)

        def _update_actions(self) -> None:
            has_image = self._session.has_image
            self._save_top_action.setEnabled(has_image)
            self._save_bottom_action.setEnabled(has_image)

        # --- Slots ---

        def _on_open(self) -> None:
            """Handle File > Open Image."""
            filepath, _ = QFileDialog.getOpenFileName(
                self, "Open Image", "", _IMAGE_FILTER,
            )
            if filepath:
                self.open_file(filepath)

        def _on_loaded(self, image: Any) -> None:
            self.setWindowTitle(f"DualWall — {image.origin}")
            self.statusBar().showMessage(
                f"Opened: {image.origin} ({image.width}x{image.height})"
            )

        def _on_load_failed(self, message: str) -> None:
            self._gap_spin.blockSignals(True)
            self._gap_spin.setValue(self._session.gap)
            self._gap_spin.blockSignals(False)
            self.setWindowTitle("DualWall")
            QMessageBox.critical(
                self, "Open Error",
                f"Failed to load image. Please try another file.\n\n{message}",
            )

        def _on_reset(self) -> None:
            self._session.reset()
            self._gap_spin.blockSignals(True)
            self._gap_spin.setValue(self._session.gap)
            self._gap_spin.blockSignals(False)
            self.setWindowTitle("DualWall")
            self.statusBar().showMessage("Reset")

        def _on_gap_changed(self, value: int) -> None:
            try:
                self._session.set_gap(value)
            except DualWallError as e:
                QMessageBox.warning(self, "Invalid Gap", str(e))

        def _on_save(self, target: OutputTarget) -> None:
            """Handle File > Save Top / Save Bottom."""
            if not self._session.has_image:
                QMessageBox.information(
                    self, "No Image", "Please upload an image first.",
                )
                return
            filepath, _ = QFileDialog.getSaveFileName(
                self, "Save Wallpaper",
                self._session.default_filename(target), _EXPORT_FILTER,
            )
            if not filepath:
                return
            if not os.path.splitext(filepath)[1]:
                filepath += ".png"
            self.save_output(target, filepath)

        def _on_render(self, result: Any) -> None:
            if result is None:
                self._top_preview.set_array(None)
                self._bottom_preview.set_array(None)
            else:
                self._top_preview.set_array(result.top)
                self._bottom_preview.set_array(result.bottom)
            self._update_actions()


    def main() -> None:
        """Entry point for the dualwall-viewer command."""
        args = _build_arg_parser().parse_args()

        # Configure logging
        log_level = getattr(logging, args.log_level, logging.WARNING)
        log_fmt = "%(asctime)s %(name)s %(levelname)s: %(message)s"
        log_datefmt = "%H:%M:%S"

        handlers: list = [logging.StreamHandler()]
        if args.log_file is not None:
            handlers.append(logging.FileHandler(args.log_file))

        logging.basicConfig(
            level=log_level,
            format=log_fmt,
            datefmt=log_datefmt,
            handlers=handlers,
        )
        _log.info("dualwall-viewer starting, log level=%s", args.log_level)

        config = load_config(Path(args.config) if args.config else None)

        app = QApplication(sys.argv)
        window = DualWallWindow(config)

        if args.file is not None:
            window.open_file(args.file)

        window.show()
        sys.exit(app.exec())

else:

    class DualWallWindow:  # type: ignore[no-redef]
        """Stub when Qt is unavailable."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise ImportError("Qt is required for DualWallWindow")

    def main() -> None:
        """Stub entry point."""
        _build_arg_parser().parse_args()
        print("Error: PyQt6 is required. Install with: pip install PyQt6")
        sys.exit(1)
