"""
Vector Ink - Command line entry point

Renders a stored canvas to a PNG file without opening any window.

Usage:
    python -m vector_ink.main <canvas-id> <output.png> [--size 800x600]
    python -m vector_ink.main --list
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from PyQt6.QtGui import QGuiApplication

from .config import Config
from .services.canvas_storage import CanvasStorage
from .utils.logging_config import LoggingConfig


def parse_size(text: str) -> Tuple[int, int]:
    """Parse 'WIDTHxHEIGHT' into a positive size"""
    try:
        width, height = (int(part) for part in text.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{text}'")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Size must be positive, got '{text}'")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vector_ink',
        description=f"{Config.APP_NAME} {Config.APP_VERSION} - render stored canvases",
    )
    parser.add_argument('canvas_id', nargs='?', help="Id of the stored canvas")
    parser.add_argument('output', nargs='?', type=Path, help="PNG file to write")
    parser.add_argument('--size', type=parse_size, default=None,
                        help="Output size as WIDTHxHEIGHT (default: stored canvas size)")
    parser.add_argument('--storage', type=Path, default=None,
                        help="Canvas folder (default: per-user data folder)")
    parser.add_argument('--list', action='store_true', help="List stored canvases and exit")
    parser.add_argument('--verbose', action='store_true', help="Log debug output to the console")
    return parser


def setup_application() -> QGuiApplication:
    """
    Create the Qt application needed for fonts and image painting

    Returns:
        Existing or new QGuiApplication instance
    """
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication(sys.argv[:1])
    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    return app


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for Vector Ink

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging first
    LoggingConfig.setup_logging(
        Config.get_log_dir(),
        console_level=logging.DEBUG if args.verbose else logging.INFO,
    )
    logger = LoggingConfig.get_logger(__name__)
    logger.debug(f"Starting {Config.APP_NAME} {Config.APP_VERSION}")

    storage = CanvasStorage(args.storage)

    if args.list:
        for canvas_id in storage.list_canvases():
            print(canvas_id)
        return 0

    if not args.canvas_id or args.output is None:
        parser.error("canvas_id and output are required unless --list is given")

    if not storage.has_canvas(args.canvas_id):
        logger.error(f"Canvas not found: {args.canvas_id} in {storage.base_path}")
        return 1

    setup_application()

    if not storage.export_png(args.canvas_id, args.output, args.size):
        logger.error(f"Failed to render canvas {args.canvas_id}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
