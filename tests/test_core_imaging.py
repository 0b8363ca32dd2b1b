# -*- coding: utf-8 -*-
"""
Tests for dualwall.core.imaging — decoding, SourceImage, and PNG encoding.

Created
-------
2026-10-16
"""

import io

import numpy as np
import pytest
from PIL import Image

from dualwall.core.errors import ImageDecodeError
from dualwall.core.imaging import SourceImage, decode_image, encode_png, save_png


def png_bytes(arr: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


class TestSourceImage:
    def test_dimensions(self):
        img = SourceImage(np.zeros((3, 5, 3), dtype=np.uint8))
        assert img.width == 5
        assert img.height == 3
        assert img.size == (5, 3)

    def test_pixels_read_only(self):
        img = SourceImage(np.zeros((3, 5, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            img.pixels[0, 0, 0] = 1

    def test_caller_array_left_writeable(self):
        arr = np.zeros((3, 5, 3), dtype=np.uint8)
        img = SourceImage(arr)
        assert arr.flags.writeable
        assert not img.pixels.flags.writeable
        arr[0, 0, 0] = 7
        assert img.pixels[0, 0, 0] == 7

    @pytest.mark.parametrize("arr", [
        np.zeros((3, 5), dtype=np.uint8),
        np.zeros((3, 5, 3), dtype=np.float32),
        np.zeros((0, 5, 3), dtype=np.uint8),
    ])
    def test_invalid_pixels_rejected(self, arr):
        with pytest.raises(ValueError):
            SourceImage(arr)

    def test_from_array_grayscale(self):
        gray = np.arange(6, dtype=np.uint8).reshape(2, 3)
        img = SourceImage.from_array(gray)
        assert img.pixels.shape == (2, 3, 3)
        assert (img.pixels[:, :, 0] == gray).all()
        assert (img.pixels[:, :, 2] == gray).all()

    def test_from_array_drops_alpha_and_copies(self):
        rgba = np.full((2, 2, 4), 9, dtype=np.uint8)
        img = SourceImage.from_array(rgba, origin="mem")
        assert img.pixels.shape == (2, 2, 3)
        assert img.origin == "mem"
        rgba[0, 0, 0] = 0
        assert img.pixels[0, 0, 0] == 9


class TestDecodeImage:
    def test_decode_png_bytes(self):
        arr = np.random.default_rng(1).integers(0, 256, (3, 4, 3), dtype=np.uint8)
        img = decode_image(png_bytes(arr))
        assert img.size == (4, 3)
        assert np.array_equal(img.pixels, arr)
        assert img.origin == "<bytes>"
        assert not img.pixels.flags.writeable

    def test_decode_grayscale_to_rgb(self):
        arr = np.full((2, 2), 77, dtype=np.uint8)
        img = decode_image(png_bytes(arr))
        assert img.pixels.shape == (2, 2, 3)
        assert (img.pixels == 77).all()

    def test_decode_rgba_to_rgb(self):
        arr = np.zeros((2, 2, 4), dtype=np.uint8)
        arr[..., 0] = 200
        arr[..., 3] = 255
        img = decode_image(png_bytes(arr))
        assert img.pixels.shape == (2, 2, 3)
        assert (img.pixels[..., 0] == 200).all()

    def test_decode_file_uses_path_as_origin(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(png_bytes(np.zeros((2, 3, 3), dtype=np.uint8)))
        img = decode_image(path)
        assert img.origin == str(path)
        assert img.size == (3, 2)

    def test_explicit_origin(self):
        img = decode_image(png_bytes(np.zeros((1, 1, 3), dtype=np.uint8)), origin="drop")
        assert img.origin == "drop"

    def test_corrupt_bytes(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"definitely not an image")

    def test_truncated_png(self):
        arr = np.random.default_rng(3).integers(0, 256, (64, 64, 3), dtype=np.uint8)
        data = png_bytes(arr)
        with pytest.raises(ImageDecodeError):
            decode_image(data[:len(data) // 2])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            decode_image(tmp_path / "missing.png")


class TestEncodePng:
    def test_encode_is_lossless(self):
        arr = np.random.default_rng(2).integers(0, 256, (5, 7, 3), dtype=np.uint8)
        data = encode_png(arr)
        assert data.startswith(b"\x89PNG")
        with Image.open(io.BytesIO(data)) as img:
            assert img.mode == "RGB"
            assert np.array_equal(np.asarray(img), arr)

    def test_save_png_creates_parents(self, tmp_path):
        path = save_png(np.zeros((2, 2, 3), dtype=np.uint8), tmp_path / "a" / "b.png")
        assert path.exists()
        with Image.open(path) as img:
            assert img.size == (2, 2)
