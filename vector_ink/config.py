"""
Global configuration for Vector Ink

Numeric defaults for the stroke pipeline and layer model, plus
per-user directories for logs, canvases and brush presets.
"""

import os
import sys
from pathlib import Path
from typing import Final


class Config:
    """Central configuration class for all engine settings"""

    # Application metadata
    APP_NAME: Final[str] = "Vector Ink"
    APP_VERSION: Final[str] = "1.0.0"
    APP_DIR_NAME: Final[str] = "VectorInk"

    # Environment override for the data directory (tests, portable installs)
    DATA_DIR_ENV: Final[str] = "VECTOR_INK_DATA_DIR"

    # Geometry
    GEOMETRY_EPSILON: Final[float] = 1e-9

    # Stroke pipeline defaults
    DEFAULT_SMOOTHING_FACTOR: Final[float] = 0.3
    DEFAULT_SIMPLIFICATION_TOLERANCE: Final[float] = 2.0
    DEFAULT_STROKE_WIDTH: Final[float] = 5.0
    MIN_STROKE_WIDTH: Final[float] = 0.1
    DEFAULT_STROKE_COLOR: Final[int] = 0xFF000000  # Opaque black, ARGB
    BEZIER_LENGTH_STEPS: Final[int] = 10
    STRAIGHT_CONTROL_T1: Final[float] = 0.33
    STRAIGHT_CONTROL_T2: Final[float] = 0.67

    # Smoothing defaults
    CATMULL_ROM_SEGMENTS: Final[int] = 10
    BSPLINE_DEGREE: Final[int] = 3
    GAUSSIAN_SIGMA: Final[float] = 1.0
    GAUSSIAN_KERNEL_SIZE: Final[int] = 5
    MOVING_AVERAGE_WINDOW: Final[int] = 3
    ADAPTIVE_MAX_STRENGTH: Final[float] = 0.5
    ADAPTIVE_CURVATURE_THRESHOLD: Final[float] = 0.1

    # Layer model
    BACKGROUND_Z_ORDER: Final[int] = -1000  # Background always paints first
    Z_ORDER_STRIDE: Final[int] = 10  # Gap left between reindexed layers
    MAX_LAYER_NAME_LENGTH: Final[int] = 50
    DEFAULT_TEXT_SIZE: Final[float] = 16.0
    DEFAULT_TEXT_COLOR: Final[int] = 0xFF000000
    DEFAULT_BACKGROUND_COLOR: Final[int] = 0xFFFFFFFF
    TEXT_LINE_HEIGHT: Final[float] = 1.2
    MERGED_LAYER_NAME: Final[str] = "Merged Layer"

    # Rendering
    THUMBNAIL_SIZE: Final[int] = 256
    MIN_STAMP_DIAMETER: Final[float] = 1.0
    STAMP_SPACING_RATIO: Final[float] = 0.25

    # Eraser
    ERASER_COVERAGE_THRESHOLD: Final[float] = 0.1

    # Brush presets
    MAX_RECENT_PRESETS: Final[int] = 10
    MAX_USER_PRESETS: Final[int] = 50
    MIN_BRUSH_SIZE: Final[float] = 0.5
    MAX_BRUSH_SIZE: Final[float] = 50.0

    # Storage
    CANVAS_FORMAT_VERSION: Final[str] = "1.0"
    CANVASES_FOLDER_NAME: Final[str] = "canvases"
    PRESETS_FILE_NAME: Final[str] = "brush_presets.json"

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS)
        or .local/share (Linux) unless the environment override is set.
        """
        override = os.environ.get(cls.DATA_DIR_ENV)
        if override:
            user_dir = Path(override)
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / cls.APP_DIR_NAME
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / cls.APP_DIR_NAME
        else:
            user_dir = Path.home() / '.local' / 'share' / cls.APP_DIR_NAME

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get log directory"""
        log_dir = cls.get_user_data_dir() / 'logs'
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    @classmethod
    def get_storage_dir(cls) -> Path:
        """Get the folder holding saved canvases"""
        storage_dir = cls.get_user_data_dir() / cls.CANVASES_FOLDER_NAME
        storage_dir.mkdir(parents=True, exist_ok=True)
        return storage_dir

    @classmethod
    def get_presets_file(cls) -> Path:
        """Get brush presets JSON file path"""
        return cls.get_user_data_dir() / cls.PRESETS_FILE_NAME


__all__ = ['Config']
