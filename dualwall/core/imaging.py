# -*- coding: utf-8 -*-
"""
Imaging - Source image decoding and PNG encoding.

Decodes files or in-memory bytes into read-only RGB numpy arrays via
Pillow, and encodes rendered surfaces as lossless PNG.

Dependencies
------------
Pillow

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
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

# Third-party
import numpy as np
from PIL import Image, ImageOps

from dualwall.core.errors import ImageDecodeError

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes]


@dataclass(frozen=True)
class SourceImage:
    """An immutable decoded raster.

    Parameters
    ----------
    pixels : np.ndarray
        ``(H, W, 3)`` uint8 RGB array. Held as a read-only view; the
        caller's array keeps its own flags.
    origin : Optional[str]
        Where the image came from (file path or label), for display and
        logging only.
    """

    pixels: np.ndarray
    origin: Optional[str] = None

    def __post_init__(self) -> None:
        pixels = self.pixels
        if (not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8
                or pixels.ndim != 3 or pixels.shape[2] != 3):
            raise ValueError(
                "SourceImage pixels must be an (H, W, 3) uint8 array, got "
                f"{getattr(pixels, 'shape', None)} "
                f"{getattr(pixels, 'dtype', type(pixels).__name__)}"
            )
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("SourceImage must have non-zero width and height")
        view = pixels.view()
        view.setflags(write=False)
        object.__setattr__(self, "pixels", view)

    @classmethod
    def from_array(cls, arr: np.ndarray, origin: Optional[str] = None) -> 'SourceImage':
        """Build a SourceImage from a grayscale, RGB, or RGBA uint8 array.

        Alpha is discarded. The array is copied.
        """
        arr = np.asarray(arr)
        if arr.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {arr.dtype}")
        if arr.ndim == 2:
            arr = np.stack([arr] * 3, axis=-1)
        elif arr.ndim == 3 and arr.shape[2] == 4:
            arr = arr[:, :, :3]
        return cls(np.ascontiguousarray(arr).copy(), origin=origin)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """``(width, height)`` in source pixels."""
        return (self.width, self.height)


def decode_image(source: ImageSource, origin: Optional[str] = None) -> SourceImage:
    """Decode an image file or byte string.

    EXIF orientation is applied and the result converted to RGB.

    Parameters
    ----------
    source : str, Path, or bytes
        File path or encoded image bytes.
    origin : Optional[str]
        Label stored on the result. Defaults to the path for file input.

    Returns
    -------
    SourceImage

    Raises
    ------
    ImageDecodeError
        If the source cannot be opened or decoded.
    """
    if isinstance(source, (bytes, bytearray)):
        stream = io.BytesIO(source)
        label = origin or "<bytes>"
    else:
        stream = Path(source)
        label = origin or str(source)

    try:
        with Image.open(stream) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            arr = np.array(img.convert("RGB"), dtype=np.uint8)
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Could not decode image {label}: {e}") from e

    if arr.ndim != 3 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ImageDecodeError(f"Image {label} has no pixels")

    logger.info("Decoded %s (%dx%d)", label, arr.shape[1], arr.shape[0])
    return SourceImage(arr, origin=label)


def encode_png(arr: np.ndarray) -> bytes:
    """Encode an ``(H, W, 3)`` uint8 array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(arr, dtype=np.uint8)).save(buf, format="PNG")
    return buf.getvalue()


def save_png(arr: np.ndarray, path: Union[str, Path]) -> Path:
    """Write an ``(H, W, 3)`` uint8 array to a PNG file.

    Parent directories are created as needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_png(arr))
    logger.info("Wrote %s", path)
    return path
