# -*- coding: utf-8 -*-
"""
Configuration Module - Configurable defaults for DualWall.

Provides a DualWallConfig dataclass with the screen geometry, zoom
limits, and export file names. Loads from
~/.dualwall/dualwall_config.json if it exists, otherwise uses the
built-in defaults.

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
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from dualwall.core.layout import MAX_GAP, ScreenLayout

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".dualwall"
_CONFIG_FILE = _CONFIG_DIR / "dualwall_config.json"


@dataclass
class DualWallConfig:
    """Global DualWall configuration with defaults.

    Attributes
    ----------
    top_width, top_height : int
        Top screen size in pixels.
    bottom_content_width, bottom_content_height : int
        Visible bottom screen area in pixels.
    bottom_output_width, bottom_output_height : int
        Exported bottom image size in pixels.
    wheel_zoom_step : float
        Relative zoom change per wheel notch.
    min_scale, max_scale : float
        Scale clamp range.
    max_gap : int
        Largest accepted bezel gap in pixels.
    top_filename, bottom_filename : str
        Default export file names.
    """

    top_width: int = 1920
    top_height: int = 1080
    bottom_content_width: int = 1240
    bottom_content_height: int = 1080
    bottom_output_width: int = 1920
    bottom_output_height: int = 1080
    wheel_zoom_step: float = 0.1
    min_scale: float = 0.1
    max_scale: float = 10.0
    max_gap: int = MAX_GAP
    top_filename: str = "top-screen-wallpaper.png"
    bottom_filename: str = "bottom-screen-wallpaper.png"

    def layout(self) -> ScreenLayout:
        """Build the screen layout described by this config."""
        return ScreenLayout(
            top_width=self.top_width,
            top_height=self.top_height,
            bottom_content_width=self.bottom_content_width,
            bottom_content_height=self.bottom_content_height,
            bottom_output_width=self.bottom_output_width,
            bottom_output_height=self.bottom_output_height,
        )

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        path = path or _CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)


def load_config(path: Optional[Path] = None) -> DualWallConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to ~/.dualwall/dualwall_config.json.

    Returns
    -------
    DualWallConfig
        Loaded or default configuration.
    """
    path = path or _CONFIG_FILE
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            cfg = DualWallConfig(**{
                k: v for k, v in data.items()
                if k in DualWallConfig.__dataclass_fields__
            })
            cfg.layout()
            return cfg
        except Exception as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return DualWallConfig()
