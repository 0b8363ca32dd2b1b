# -*- coding: utf-8 -*-
"""
DualWall CLI - Headless wallpaper rendering.

Usage::

    python -m dualwall photo.jpg --out-dir wallpapers
    python -m dualwall photo.jpg --gap 120 --scale 1.25 --offset 0 -80
    python -m dualwall photo.jpg --zoom-at 960 540 1.1 --composite

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

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dualwall.core.config import load_config
from dualwall.core.errors import DualWallError
from dualwall.core.imaging import save_png
from dualwall.core.session import EditorSession, OutputTarget
from dualwall.core.viewport import ViewportSnapshot

_log = logging.getLogger("dualwall.cli")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dualwall",
        description="DualWall — Render top and bottom screen wallpapers "
        "from a single image without opening the editor.",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Source image file.",
    )
    parser.add_argument(
        "--gap",
        default="0",
        help="Hidden gap between the screens in pixels (0-500, default 0).",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Image scale factor, clamped to the configured range "
        "(default 1.0).",
    )
    parser.add_argument(
        "--offset",
        type=float,
        nargs=2,
        default=(0.0, 0.0),
        metavar=("DX", "DY"),
        help="Shift from the centred position in composite pixels.",
    )
    parser.add_argument(
        "--zoom-at",
        type=float,
        nargs=3,
        action="append",
        default=[],
        metavar=("X", "Y", "FACTOR"),
        help="Anchored zoom step applied after --scale/--offset. "
        "May be repeated.",
    )
    parser.add_argument(
        "--out-dir", "-o",
        type=Path,
        default=Path("."),
        help="Directory for the output PNGs (default: current directory).",
    )
    parser.add_argument(
        "--composite",
        action="store_true",
        help="Also write the composite preview as composite.png.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
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


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    handlers: list = [logging.StreamHandler()]
    if args.log_file is not None:
        handlers.append(logging.FileHandler(args.log_file))

    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )

    if not args.image.exists():
        print(f"Error: image file not found: {args.image}", file=sys.stderr)
        return 1

    try:
        session = EditorSession(load_config(args.config))
        session.set_gap(args.gap)
        session.open(args.image)
    except DualWallError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session.viewport.restore(ViewportSnapshot(args.scale, *args.offset))
    for x, y, factor in args.zoom_at:
        session.viewport.zoom_at(
            x, y, factor, session.image_size, session.canvas_size,
        )
    session.refresh()
    _log.info(
        "Rendering scale=%.3f offset=(%.1f, %.1f) gap=%d",
        session.viewport.scale, session.viewport.offset_x,
        session.viewport.offset_y, session.gap,
    )

    out_dir = args.out_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    for target in (OutputTarget.TOP, OutputTarget.BOTTOM):
        path = session.export_to(target, out_dir / session.default_filename(target))
        print(f"Output written to: {path}")
    if args.composite:
        path = save_png(session.result.composite, out_dir / "composite.png")
        print(f"Output written to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
