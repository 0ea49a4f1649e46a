"""Color conversion utilities

Strokes and layers store colors as packed 32-bit ARGB integers
(0xAARRGGBB, the same layout as QColor.rgba()). These helpers convert
between that form, QColor, hex strings and channel tuples.
"""

from typing import Tuple, Union

from PyQt6.QtGui import QColor


ColorLike = Union[int, str, QColor, Tuple[int, int, int], Tuple[int, int, int, int]]


def pack_argb(r: int, g: int, b: int, a: int = 255) -> int:
    """Pack 0-255 channels into an ARGB integer

    Channels outside 0-255 are clamped.

    Example:
        >>> hex(pack_argb(255, 0, 0))
        '0xffff0000'
    """
    r, g, b, a = (max(0, min(255, int(c))) for c in (r, g, b, a))
    return (a << 24) | (r << 16) | (g << 8) | b


def unpack_argb(color: int) -> Tuple[int, int, int, int]:
    """Split an ARGB integer into (r, g, b, a)"""
    color &= 0xFFFFFFFF
    return (
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
        (color >> 24) & 0xFF,
    )


def hex_to_rgb(hex_color: str) -> tuple:
    """
    Convert hex color to RGB tuple (0-255 range)

    Args:
        hex_color: Hex color string (e.g., '#AABBCC' or 'AABBCC')

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    hex_color = hex_color.lstrip('#')
    # Handle 3-digit hex codes
    if len(hex_color) == 3:
        hex_color = ''.join([c*2 for c in hex_color])
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def to_argb(color: ColorLike) -> int:
    """
    Normalize any supported color value to a packed ARGB integer

    Args:
        color: ARGB int, '#RRGGBB' string, QColor, or (r, g, b[, a]) tuple

    Returns:
        Packed ARGB integer
    """
    if isinstance(color, QColor):
        return color.rgba()
    if isinstance(color, str):
        return pack_argb(*hex_to_rgb(color))
    if isinstance(color, tuple):
        return pack_argb(*color)
    return int(color) & 0xFFFFFFFF


def argb_to_qcolor(color: int, opacity: float = 1.0) -> QColor:
    """
    Build a QColor from a packed ARGB integer

    Args:
        color: Packed ARGB integer
        opacity: Extra multiplier applied to the color's own alpha

    Returns:
        QColor with the combined alpha
    """
    r, g, b, a = unpack_argb(color)
    qcolor = QColor(r, g, b, a)
    qcolor.setAlphaF(max(0.0, min(1.0, qcolor.alphaF() * opacity)))
    return qcolor


def argb_to_hex(color: int) -> str:
    """Format an ARGB integer as '#RRGGBB' (alpha dropped)"""
    r, g, b, _ = unpack_argb(color)
    return '#{:02X}{:02X}{:02X}'.format(r, g, b)


__all__ = [
    'ColorLike',
    'pack_argb',
    'unpack_argb',
    'hex_to_rgb',
    'to_argb',
    'argb_to_qcolor',
    'argb_to_hex',
]
