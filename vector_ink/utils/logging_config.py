"""
Centralized logging configuration for Vector Ink

Handlers are attached to the "vector_ink" package logger so applications
embedding the engine keep control of the root logger.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "vector_ink"
LOG_FILE_NAME = "vector_ink.log"
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(message)s'
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


class LoggingConfig:
    """Central logging configuration"""

    _initialized = False
    _log_file_path: Optional[Path] = None
    _handlers: List[logging.Handler] = []

    @staticmethod
    def _make_handler(handler: logging.Handler, level: int, fmt: str,
                      datefmt: Optional[str] = None) -> logging.Handler:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        return handler

    @classmethod
    def setup_logging(cls, log_dir: Path, console_level: int = logging.INFO):
        """
        Install a rotating DEBUG log file and a console handler.

        Calling this again before shutdown() does nothing.

        Args:
            log_dir: Folder for the log file, created if missing
            console_level: Minimum level printed to stdout
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        cls._log_file_path = log_dir / LOG_FILE_NAME

        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.setLevel(logging.DEBUG)

        cls._handlers = [
            cls._make_handler(
                RotatingFileHandler(cls._log_file_path, maxBytes=MAX_LOG_BYTES,
                                    backupCount=LOG_BACKUP_COUNT, encoding='utf-8'),
                logging.DEBUG, FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'),
            cls._make_handler(logging.StreamHandler(sys.stdout), console_level, CONSOLE_FORMAT),
        ]
        for handler in cls._handlers:
            logger.addHandler(handler)

        cls._initialized = True
        logger.debug(f"Logging to {cls._log_file_path}")

    @classmethod
    def shutdown(cls):
        """Detach and close the handlers installed by setup_logging"""
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in cls._handlers:
            logger.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._initialized = False

    @classmethod
    def get_logger(cls, name: str):
        """Get a logger instance"""
        return logging.getLogger(name)

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        return cls._log_file_path


__all__ = ['LoggingConfig']
