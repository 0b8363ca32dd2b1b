# -*- coding: utf-8 -*-
"""
Tests for dualwall.core.viewport — ViewportState transform and anchored zoom.

Created
-------
2026-10-16
"""

import numpy as np
import pytest

from dualwall.core.viewport import (
    MAX_SCALE,
    MIN_SCALE,
    ViewportSnapshot,
    ViewportState,
    clamp_scale,
)

IMAGE = (1920, 1080)
CANVAS = (1920, 2160)


class TestClampScale:
    def test_within_range(self):
        assert clamp_scale(2.5) == 2.5

    def test_bounds(self):
        assert clamp_scale(0.01) == MIN_SCALE
        assert clamp_scale(100.0) == MAX_SCALE


class TestViewportState:
    def test_defaults(self):
        vp = ViewportState()
        assert vp.snapshot() == ViewportSnapshot(1.0, 0.0, 0.0)

    def test_init_clamps_scale(self):
        assert ViewportState(scale=20.0).scale == MAX_SCALE
        assert ViewportState(scale=0.0).scale == MIN_SCALE

    def test_pan_accumulates(self):
        vp = ViewportState()
        vp.pan(10, -5)
        vp.pan(2.5, 1)
        assert vp.offset_x == 12.5
        assert vp.offset_y == -4

    def test_reset(self):
        vp = ViewportState(scale=3.0, offset_x=40, offset_y=-7)
        vp.reset()
        assert vp.snapshot() == ViewportSnapshot(1.0, 0.0, 0.0)

    def test_restore_clamps(self):
        vp = ViewportState()
        vp.restore(ViewportSnapshot(50.0, 1.0, 2.0))
        assert vp.snapshot() == ViewportSnapshot(MAX_SCALE, 1.0, 2.0)

    def test_image_centred_at_default(self):
        vp = ViewportState()
        assert vp.image_origin(IMAGE, CANVAS) == (0.0, 540.0)

    def test_offset_shifts_origin(self):
        vp = ViewportState(offset_x=15, offset_y=-40)
        assert vp.image_origin(IMAGE, CANVAS) == (15.0, 500.0)

    def test_mapping_round_trip(self):
        vp = ViewportState(scale=1.7, offset_x=-33, offset_y=12)
        ix, iy = vp.canvas_to_image(500, 700, IMAGE, CANVAS)
        assert vp.image_to_canvas(ix, iy, IMAGE, CANVAS) == pytest.approx((500, 700))


class TestZoomAt:
    def test_anchor_point_stays_fixed(self):
        vp = ViewportState()
        before = vp.canvas_to_image(960, 540, IMAGE, CANVAS)
        assert vp.zoom_at(960, 540, 1.1, IMAGE, CANVAS) is True
        assert vp.scale == pytest.approx(1.1)
        after = vp.canvas_to_image(960, 540, IMAGE, CANVAS)
        assert after == pytest.approx(before)

    def test_zoom_about_canvas_centre_keeps_offset(self):
        vp = ViewportState()
        vp.zoom_at(960, 1080, 1.1, IMAGE, CANVAS)
        assert vp.offset_x == pytest.approx(0.0)
        assert vp.offset_y == pytest.approx(0.0)

    def test_anchor_fixed_with_existing_offset(self):
        vp = ViewportState(scale=2.0, offset_x=120, offset_y=-300)
        before = vp.canvas_to_image(200, 1800, IMAGE, CANVAS)
        vp.zoom_at(200, 1800, 0.8, IMAGE, CANVAS)
        assert vp.scale == pytest.approx(1.6)
        assert vp.canvas_to_image(200, 1800, IMAGE, CANVAS) == pytest.approx(before)

    def test_clamped_at_max_is_noop(self):
        vp = ViewportState(scale=MAX_SCALE, offset_x=5)
        assert vp.zoom_at(100, 100, 2.0, IMAGE, CANVAS) is False
        assert vp.snapshot() == ViewportSnapshot(MAX_SCALE, 5, 0)

    def test_clamped_partially(self):
        vp = ViewportState(scale=8.0)
        assert vp.zoom_at(100, 100, 2.0, IMAGE, CANVAS) is True
        assert vp.scale == MAX_SCALE

    @pytest.mark.parametrize("factor", [0.0, -1.0])
    def test_non_positive_factor_ignored(self, factor):
        vp = ViewportState()
        assert vp.zoom_at(100, 100, factor, IMAGE, CANVAS) is False
        assert vp.scale == 1.0

    def test_empty_image_ignored(self):
        vp = ViewportState()
        assert vp.zoom_at(100, 100, 1.5, (0, 0), CANVAS) is False

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_scale_stays_clamped_over_any_sequence(self, seed):
        rng = np.random.default_rng(seed)
        vp = ViewportState()
        for _ in range(500):
            factor = float(np.exp(rng.uniform(-1.5, 1.5)))
            x, y = rng.uniform(-500, 2500, size=2)
            vp.zoom_at(x, y, factor, IMAGE, CANVAS)
            assert MIN_SCALE <= vp.scale <= MAX_SCALE

    def test_repeated_extremes_pin_to_bounds(self):
        vp = ViewportState()
        for _ in range(100):
            vp.zoom_at(0, 0, 1.1, IMAGE, CANVAS)
        assert vp.scale == MAX_SCALE
        for _ in range(200):
            vp.zoom_at(0, 0, 1 / 1.1, IMAGE, CANVAS)
        assert vp.scale == MIN_SCALE
