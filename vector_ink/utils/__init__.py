"""Utility functions for Vector Ink"""

from .color_utils import pack_argb, unpack_argb, hex_to_rgb, to_argb, argb_to_qcolor, argb_to_hex
from .image_utils import load_image_as_qimage, allocate_image
from .json_utils import safe_json_loads, safe_json_load, safe_json_save
from .logging_config import LoggingConfig

__all__ = [
    # Color utilities
    'pack_argb',
    'unpack_argb',
    'hex_to_rgb',
    'to_argb',
    'argb_to_qcolor',
    'argb_to_hex',
    # Image utilities
    'load_image_as_qimage',
    'allocate_image',
    # JSON utilities
    'safe_json_loads',
    'safe_json_load',
    'safe_json_save',
    # Logging
    'LoggingConfig',
]
