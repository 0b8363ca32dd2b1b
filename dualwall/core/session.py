# -*- coding: utf-8 -*-
"""
EditorSession - Owner of the editing state and the last render.

Holds the source image, viewport, gap height, and the surfaces of the
most recent render. The gesture controller and the Qt widgets receive
the session by reference; nothing reads this state from module globals.

Image loading is split into ``begin_load`` / ``finish_load`` /
``fail_load`` so an asynchronous decoder can deliver its result later.
Each ``begin_load`` issues a new request token; results carrying an
older token are dropped, so a slow decode can never overwrite a newer
choice.

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
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

# Third-party
import numpy as np

from dualwall.core.compositor import CompositorStyle, RenderResult, render
from dualwall.core.config import DualWallConfig
from dualwall.core.errors import ImageDecodeError, NoImageError
from dualwall.core.imaging import ImageSource, SourceImage, decode_image, encode_png
from dualwall.core.layout import ScreenLayout, validate_gap
from dualwall.core.viewport import ViewportState

logger = logging.getLogger(__name__)

RenderListener = Callable[[Optional[RenderResult]], None]


class OutputTarget(Enum):
    """Which output surface to export."""

    TOP = "top"
    BOTTOM = "bottom"


class EditorSession:
    """Editing state for one dual-screen wallpaper.

    Parameters
    ----------
    config : Optional[DualWallConfig]
        Geometry, zoom limits, and export names. None uses defaults.
    style : Optional[CompositorStyle]
        Compositor colours. None uses defaults.
    """

    def __init__(
        self,
        config: Optional[DualWallConfig] = None,
        style: Optional[CompositorStyle] = None,
    ) -> None:
        self._config = config or DualWallConfig()
        self._layout = self._config.layout()
        self._style = style or CompositorStyle()
        self.viewport = ViewportState(
            min_scale=self._config.min_scale,
            max_scale=self._config.max_scale,
        )
        self._image: Optional[SourceImage] = None
        self._gap = 0
        self._result: Optional[RenderResult] = None
        self._request = 0
        self._listeners: List[RenderListener] = []

    # --- Properties ---

    @property
    def config(self) -> DualWallConfig:
        return self._config

    @property
    def layout(self) -> ScreenLayout:
        """Screen geometry in use."""
        return self._layout

    @property
    def image(self) -> Optional[SourceImage]:
        """The loaded source image, or None."""
        return self._image

    @property
    def has_image(self) -> bool:
        return self._image is not None

    @property
    def image_size(self) -> Tuple[int, int]:
        """``(width, height)`` of the source image, ``(0, 0)`` if none."""
        if self._image is None:
            return (0, 0)
        return self._image.size

    @property
    def gap(self) -> int:
        """Hidden gap height in pixels."""
        return self._gap

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """``(width, height)`` of the composite surface at the current gap."""
        return self._layout.composite_size(self._gap)

    @property
    def result(self) -> Optional[RenderResult]:
        """Surfaces from the most recent render, or None when cleared."""
        return self._result

    @property
    def pending_request(self) -> int:
        """Token of the most recent load request."""
        return self._request

    # --- Listeners ---

    def add_listener(self, listener: RenderListener) -> None:
        """Call ``listener(result)`` after every render or clear."""
        self._listeners.append(listener)

    def remove_listener(self, listener: RenderListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._result)

    # --- Loading ---

    def begin_load(self, origin: Optional[str] = None) -> int:
        """Start a new load request, superseding any pending one.

        Returns
        -------
        int
            Token to pass to :meth:`finish_load` or :meth:`fail_load`.
        """
        self._request += 1
        logger.debug("Load request %d started (%s)", self._request, origin)
        return self._request

    def finish_load(self, token: int, image: SourceImage) -> bool:
        """Install a decoded image if ``token`` is still current.

        The previous image is released and the viewport reset.

        Returns
        -------
        bool
            ``False`` if the result was stale and dropped.
        """
        if token != self._request:
            logger.info(
                "Dropping stale decode result %d (current request %d)",
                token, self._request,
            )
            return False
        self._release()
        self._image = image
        self.viewport.reset()
        logger.info("Loaded image %s (%dx%d)", image.origin, image.width, image.height)
        self.refresh()
        return True

    def fail_load(self, token: int, error: Exception) -> bool:
        """Record a failed decode; falls back to the reset state.

        Returns
        -------
        bool
            ``False`` if the failure was stale and ignored.
        """
        if token != self._request:
            logger.info("Ignoring stale decode failure %d: %s", token, error)
            return False
        logger.warning("Image load failed: %s", error)
        self.reset()
        return True

    def load_image(self, image: SourceImage) -> None:
        """Install an already decoded image."""
        self.finish_load(self.begin_load(image.origin), image)

    def open(self, source: ImageSource, origin: Optional[str] = None) -> SourceImage:
        """Decode ``source`` synchronously and install it.

        Raises
        ------
        ImageDecodeError
            If decoding fails. The session is reset first.
        """
        token = self.begin_load(origin)
        try:
            image = decode_image(source, origin=origin)
        except ImageDecodeError as e:
            self.fail_load(token, e)
            raise
        self.finish_load(token, image)
        return image

    def _release(self) -> None:
        if self._image is not None:
            logger.debug("Releasing image %s", self._image.origin)
        self._image = None

    # --- Mutations ---

    def set_gap(self, value: Any) -> int:
        """Validate and apply a new gap height; re-render if an image is loaded.

        Raises
        ------
        GapOutOfRangeError
            If ``value`` is outside ``[0, max_gap]``.
        """
        gap = validate_gap(value, self._config.max_gap)
        self._gap = gap
        if self._image is not None:
            self.refresh()
        return gap

    def pan(self, delta_x: float, delta_y: float) -> None:
        """Pan the image and re-render."""
        if self._image is None:
            return
        self.viewport.pan(delta_x, delta_y)
        self.refresh()

    def zoom_at(self, anchor_x: float, anchor_y: float, factor: float) -> bool:
        """Anchored zoom in canvas space; re-renders on change."""
        if self._image is None:
            return False
        changed = self.viewport.zoom_at(
            anchor_x, anchor_y, factor, self.image_size, self.canvas_size,
        )
        if changed:
            self.refresh()
        return changed

    def reset(self) -> None:
        """Drop the image, restore default viewport and gap, clear surfaces."""
        self._release()
        self.viewport.reset()
        self._gap = 0
        self._result = None
        # Supersede any decode still in flight.
        self._request += 1
        logger.info("Session reset")
        self._notify()

    # --- Rendering ---

    def refresh(self) -> Optional[RenderResult]:
        """Re-render from the current state and notify listeners.

        A no-op returning None when no image is loaded.
        """
        if self._image is None:
            return None
        self._result = render(
            self._image, self.viewport, self._gap, self._layout, self._style,
        )
        self._notify()
        return self._result

    # --- Export ---

    def output(self, target: Union[OutputTarget, str]) -> np.ndarray:
        """Pixels of a named output surface.

        Raises
        ------
        NoImageError
            If no image is loaded.
        """
        target = OutputTarget(target)
        if self._image is None or self._result is None:
            raise NoImageError("Please load an image first.")
        if target is OutputTarget.TOP:
            return self._result.top
        return self._result.bottom

    def export(self, target: Union[OutputTarget, str]) -> bytes:
        """PNG-encode a named output surface."""
        return encode_png(self.output(target))

    def default_filename(self, target: Union[OutputTarget, str]) -> str:
        if OutputTarget(target) is OutputTarget.TOP:
            return self._config.top_filename
        return self._config.bottom_filename

    def export_to(
        self,
        target: Union[OutputTarget, str],
        path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Write a named output surface as PNG.

        Parameters
        ----------
        target : OutputTarget or str
            ``"top"`` or ``"bottom"``.
        path : str or Path, optional
            Destination file, or a directory to place the default file
            name in. None writes the default file name to the working
            directory.

        Returns
        -------
        Path
            The written file.
        """
        data = self.export(target)
        if path is None:
            path = Path(self.default_filename(target))
        else:
            path = Path(path)
            if path.is_dir():
                path = path / self.default_filename(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Exported %s output to %s", OutputTarget(target).value, path)
        return path
