# -*- coding: utf-8 -*-
"""
Shared fixtures for the DualWall test suite.

Qt tests run on the offscreen platform so no display is needed.

Created
-------
2026-10-16
"""

import os
import sys

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from dualwall.core.config import DualWallConfig
from dualwall.core.imaging import SourceImage


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for the test session."""
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:
        pytest.skip("Qt not available")
        return

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def small_config():
    """A scaled-down geometry: 64x32 top, 40x32 bottom content, 64x32 bottom output."""
    return DualWallConfig(
        top_width=64,
        top_height=32,
        bottom_content_width=40,
        bottom_content_height=32,
        bottom_output_width=64,
        bottom_output_height=32,
    )


@pytest.fixture
def solid_image():
    """Factory for uniform RGB source images."""
    def _make(width, height, color=(0, 0, 200), origin="solid"):
        arr = np.empty((height, width, 3), dtype=np.uint8)
        arr[:, :] = color
        return SourceImage(arr, origin=origin)
    return _make
