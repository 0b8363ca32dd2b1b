# -*- coding: utf-8 -*-
"""
Tests for dualwall.core.session — EditorSession loading, rendering, and export.

Most tests use a scaled-down geometry (see ``small_config`` in conftest).

Created
-------
2026-10-16
"""

import io

import numpy as np
import pytest
from PIL import Image

from dualwall.core.errors import (
    GapOutOfRangeError,
    ImageDecodeError,
    NoImageError,
)
from dualwall.core.session import EditorSession, OutputTarget
from dualwall.core.viewport import ViewportSnapshot


@pytest.fixture
def session(small_config):
    return EditorSession(small_config)


@pytest.fixture
def recorder(session):
    calls = []
    session.add_listener(calls.append)
    return calls


class TestInitialState:
    def test_empty(self, session):
        assert session.has_image is False
        assert session.image is None
        assert session.image_size == (0, 0)
        assert session.result is None
        assert session.gap == 0
        assert session.canvas_size == (64, 64)

    def test_refresh_without_image(self, session, recorder):
        assert session.refresh() is None
        assert recorder == []

    def test_default_geometry(self):
        assert EditorSession().canvas_size == (1920, 2160)


class TestLoading:
    def test_load_image_renders(self, session, recorder, solid_image):
        session.load_image(solid_image(64, 64))
        assert session.has_image
        assert session.result is not None
        assert session.result.composite.shape == (64, 64, 3)
        assert recorder[-1] is session.result

    def test_new_image_resets_viewport(self, session, solid_image):
        session.load_image(solid_image(64, 64))
        session.pan(5, 5)
        session.zoom_at(10, 10, 2.0)
        session.load_image(solid_image(32, 32))
        assert session.viewport.snapshot() == ViewportSnapshot(1.0, 0.0, 0.0)
        assert session.image_size == (32, 32)

    def test_new_image_keeps_gap(self, session, solid_image):
        session.set_gap(10)
        session.load_image(solid_image(64, 64))
        assert session.result.composite.shape == (74, 64, 3)

    def test_tokens_increase(self, session):
        first = session.begin_load("a")
        second = session.begin_load("b")
        assert second > first
        assert session.pending_request == second

    def test_stale_result_dropped(self, session, solid_image):
        stale = session.begin_load("slow.png")
        current = session.begin_load("fast.png")
        assert session.finish_load(stale, solid_image(8, 8, origin="slow")) is False
        assert session.has_image is False
        assert session.finish_load(current, solid_image(8, 8, origin="fast")) is True
        assert session.image.origin == "fast"

    def test_stale_result_after_newer_load(self, session, solid_image):
        stale = session.begin_load("slow.png")
        current = session.begin_load("fast.png")
        session.finish_load(current, solid_image(8, 8, origin="fast"))
        assert session.finish_load(stale, solid_image(8, 8, origin="slow")) is False
        assert session.image.origin == "fast"

    def test_reset_supersedes_pending_load(self, session, solid_image):
        token = session.begin_load("slow.png")
        session.reset()
        assert session.finish_load(token, solid_image(8, 8)) is False
        assert session.has_image is False
        assert session.result is None

    def test_reset_supersedes_pending_failure(self, session, solid_image):
        session.load_image(solid_image(8, 8))
        token = session.begin_load("bad.png")
        session.reset()
        session.load_image(solid_image(16, 16))
        assert session.fail_load(token, ImageDecodeError("boom")) is False
        assert session.image_size == (16, 16)

    def test_stale_failure_ignored(self, session, solid_image):
        stale = session.begin_load("bad.png")
        current = session.begin_load("good.png")
        session.finish_load(current, solid_image(8, 8))
        assert session.fail_load(stale, ImageDecodeError("boom")) is False
        assert session.has_image

    def test_current_failure_resets(self, session, recorder, solid_image):
        session.load_image(solid_image(8, 8))
        session.set_gap(20)
        token = session.begin_load("bad.png")
        assert session.fail_load(token, ImageDecodeError("boom")) is True
        assert session.has_image is False
        assert session.gap == 0
        assert recorder[-1] is None

    def test_open_bytes(self, session):
        buf = io.BytesIO()
        Image.fromarray(np.zeros((16, 16, 3), dtype=np.uint8)).save(buf, format="PNG")
        image = session.open(buf.getvalue(), origin="upload")
        assert image.origin == "upload"
        assert session.has_image

    def test_open_invalid_raises_and_resets(self, session, solid_image):
        session.load_image(solid_image(8, 8))
        with pytest.raises(ImageDecodeError):
            session.open(b"garbage")
        assert session.has_image is False
        assert session.result is None


class TestMutations:
    def test_set_gap_rerenders(self, session, recorder, solid_image):
        session.load_image(solid_image(64, 64))
        count = len(recorder)
        assert session.set_gap(30) == 30
        assert session.result.composite.shape == (94, 64, 3)
        assert session.result.gap == 30
        assert len(recorder) == count + 1

    def test_set_gap_without_image(self, session, recorder):
        session.set_gap("15")
        assert session.gap == 15
        assert session.canvas_size == (64, 79)
        assert recorder == []

    def test_invalid_gap_keeps_previous(self, session):
        session.set_gap(10)
        with pytest.raises(GapOutOfRangeError):
            session.set_gap(501)
        assert session.gap == 10

    def test_configured_max_gap(self, small_config):
        small_config.max_gap = 40
        session = EditorSession(small_config)
        with pytest.raises(GapOutOfRangeError):
            session.set_gap(41)

    def test_zoom_without_image(self, session):
        assert session.zoom_at(10, 10, 2.0) is False

    def test_pan_rerenders(self, session, recorder, solid_image):
        session.load_image(solid_image(8, 8))
        count = len(recorder)
        session.pan(3, 4)
        assert session.viewport.offset_x == 3
        assert len(recorder) == count + 1

    def test_reset(self, session, recorder, solid_image):
        session.load_image(solid_image(64, 64))
        session.set_gap(100)
        session.pan(12, -7)
        session.zoom_at(30, 30, 1.5)
        session.reset()
        assert session.has_image is False
        assert session.gap == 0
        assert session.viewport.snapshot() == ViewportSnapshot(1.0, 0.0, 0.0)
        assert session.result is None
        assert recorder[-1] is None

    def test_remove_listener(self, session, solid_image):
        calls = []
        session.add_listener(calls.append)
        session.remove_listener(calls.append)
        session.load_image(solid_image(8, 8))
        assert calls == []


class TestExport:
    def test_output_requires_image(self, session):
        with pytest.raises(NoImageError, match="load an image"):
            session.output(OutputTarget.TOP)

    def test_export_requires_image(self, session, tmp_path):
        with pytest.raises(NoImageError):
            session.export_to("bottom", tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_output_by_name(self, session, solid_image):
        session.load_image(solid_image(64, 64))
        assert session.output("top") is session.result.top
        assert session.output(OutputTarget.BOTTOM) is session.result.bottom

    def test_unknown_target(self, session, solid_image):
        session.load_image(solid_image(8, 8))
        with pytest.raises(ValueError):
            session.output("middle")

    def test_export_png_bytes(self, session, solid_image):
        session.load_image(solid_image(64, 64))
        data = session.export(OutputTarget.BOTTOM)
        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "PNG"
            assert img.size == (64, 32)
            assert np.array_equal(np.asarray(img), session.result.bottom)

    def test_default_filenames(self, session):
        assert session.default_filename("top") == "top-screen-wallpaper.png"
        assert session.default_filename(OutputTarget.BOTTOM) == "bottom-screen-wallpaper.png"

    def test_export_to_directory(self, session, solid_image, tmp_path):
        session.load_image(solid_image(64, 64))
        path = session.export_to(OutputTarget.TOP, tmp_path)
        assert path == tmp_path / "top-screen-wallpaper.png"
        with Image.open(path) as img:
            assert img.size == (64, 32)

    def test_export_to_file(self, session, solid_image, tmp_path):
        session.load_image(solid_image(64, 64))
        target = tmp_path / "out" / "lower.png"
        assert session.export_to("bottom", target) == target
        assert target.exists()
