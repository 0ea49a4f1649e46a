"""
Image utilities for loading and allocating raster targets

Pattern: Image loading helpers
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtGui import QImage, QColor

logger = logging.getLogger(__name__)


def load_image_as_qimage(image_path: Union[str, Path]) -> Optional[QImage]:
    """
    Load image file as QImage

    Args:
        image_path: Path to image file

    Returns:
        QImage or None if load failed
    """
    image_path = Path(image_path)
    if not image_path.exists():
        return None

    image = QImage(str(image_path))
    if image.isNull():
        logger.warning(f"Could not decode image {image_path}")
        return None

    return image


def allocate_image(width: int, height: int, fill: Optional[QColor] = None) -> Optional[QImage]:
    """
    Allocate an ARGB32 premultiplied raster target

    Args:
        width: Width in pixels
        height: Height in pixels
        fill: Initial fill color (transparent if None)

    Returns:
        QImage, or None if the dimensions are invalid or allocation failed
    """
    if width <= 0 or height <= 0:
        logger.error(f"Invalid raster size {width}x{height}")
        return None

    image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    if image.isNull():
        logger.error(f"Could not allocate {width}x{height} raster")
        return None

    image.fill(fill if fill is not None else QColor(0, 0, 0, 0))
    return image


__all__ = [
    'load_image_as_qimage',
    'allocate_image',
]
