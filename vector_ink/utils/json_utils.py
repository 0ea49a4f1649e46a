"""
JSON Utilities - error-tolerant reading and atomic writing

Strokes, layers, canvases and brush presets are all persisted as JSON.
Readers fall back to a caller-supplied default instead of raising;
writers go through a temp file so an interrupted save never truncates
the previous document.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

TEMP_SUFFIX = '.tmp'


def safe_json_loads(text: Union[str, bytes], default: Any = None) -> Any:
    """
    Parse a JSON document held in memory.

    Examples:
        >>> safe_json_loads('{"a": 1}')
        {'a': 1}
        >>> safe_json_loads('{broken', default={})
        {}
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, UnicodeDecodeError) as e:
        logger.warning(f"Invalid JSON text: {e}")
        return default


def safe_json_load(path: Union[str, Path], default: Any = None) -> Any:
    """
    Read a JSON file.

    Args:
        path: File to read
        default: Returned when the file is missing, unreadable or not JSON

    Returns:
        Parsed document or default
    """
    file_path = Path(path)
    if not file_path.exists():
        return default

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in {file_path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {file_path}: {e}")
    return default


def safe_json_save(path: Union[str, Path], data: Any,
                   indent: int = 2, ensure_ascii: bool = False) -> bool:
    """
    Write data as JSON, replacing the target only after a complete write.

    Args:
        path: Destination file; parent folders are created
        data: JSON-serializable document
        indent: Pretty-print indentation
        ensure_ascii: Escape non-ASCII characters when True

    Returns:
        True if the file now holds data, False if nothing was replaced
    """
    file_path = Path(path)
    temp_path = file_path.with_name(file_path.name + TEMP_SUFFIX)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii)
        temp_path.replace(file_path)
        return True
    except (TypeError, ValueError) as e:
        logger.error(f"Data not JSON serializable for {file_path}: {e}")
    except OSError as e:
        logger.error(f"Could not write to {file_path}: {e}")

    if temp_path.exists():
        temp_path.unlink()
    return False


__all__ = [
    'safe_json_loads',
    'safe_json_load',
    'safe_json_save',
]
