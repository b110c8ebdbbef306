"""
Logging configuration for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime
from typing import Optional, Dict, Any


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        log_color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset_color = self.COLORS['RESET']

        # Colour a copy so file handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{log_color}{record.levelname}{reset_color}"

        return super().format(record)


CONSOLE_FORMAT = '%(levelname)s - %(name)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Global configuration for logging with thread synchronization
_global_config: Optional[Dict[str, Any]] = None
_log_file_path: Optional[str] = None
_logger_instances: Dict[str, logging.Logger] = {}
_global_state_lock = threading.RLock()


def _is_debug() -> bool:
    if not _global_config:
        return False
    return bool(_global_config.get('verbose_logging') or _global_config.get('debug_mode'))


def _file_handler(path: str, level: int) -> logging.FileHandler:
    handler = logging.FileHandler(path)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def set_global_config(config: Dict[str, Any]) -> None:
    """
    Set global configuration for logging with thread safety.

    Args:
        config: Configuration dictionary
    """
    global _global_config, _log_file_path
    with _global_state_lock:
        _global_config = config

        if config.get('verbose_logging'):
            from ..constants import get_config_dir
            log_dir = get_config_dir() / 'logs'
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            _log_file_path = str(log_dir / f'pacnews_{timestamp}.log')
        else:
            _log_file_path = None

        _reconfigure_all_loggers()


def _reconfigure_all_loggers() -> None:
    """Reconfigure all existing loggers with new settings."""
    # Called with _global_state_lock held
    level = logging.DEBUG if _is_debug() else logging.INFO

    for logger in _logger_instances.values():
        logger.setLevel(level)
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler):
                logger.removeHandler(handler)
                handler.close()
            else:
                handler.setLevel(level)

        if _log_file_path:
            logger.addHandler(_file_handler(_log_file_path, level))


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger instance with thread safety.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    with _global_state_lock:
        if name in _logger_instances:
            return _logger_instances[name]

        level = logging.DEBUG if _is_debug() else logging.INFO

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()

        # Console handler (use stderr for logs)
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

        if _log_file_path:
            try:
                logger.addHandler(_file_handler(_log_file_path, level))
            except OSError:
                # Don't log this error to avoid recursion
                pass

        logger.propagate = False

        _logger_instances[name] = logger
        return logger
