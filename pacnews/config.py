"""
Configuration management for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

import configparser
import json
import os
from typing import Dict, Any, Optional

from .constants import DEFAULT_DB_PATH, DEFAULT_PACMAN_LOG, get_default_config_path
from .exceptions import ConfigurationError
from .models import AppConfig, DateFilter
from .utils.logger import get_logger
from .utils.validators import validate_news_url

logger = get_logger(__name__)

MAX_CONFIG_SIZE = 1024 * 1024  # 1MB


def read_pacman_options(pacman_conf: str) -> Dict[str, str]:
    """
    Read the ``[options]`` section of pacman.conf.

    Flag options without a value (``Color``, ``CheckSpace``) are returned
    with an empty string.

    Args:
        pacman_conf: Path to pacman.conf

    Returns:
        Option name -> value

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    parser = configparser.ConfigParser(
        allow_no_value=True,
        strict=False,
        interpolation=None,
        delimiters=("=",),
        comment_prefixes=("#",),
        inline_comment_prefixes=("#",),
    )
    parser.optionxform = str  # type: ignore[assignment]

    try:
        with open(pacman_conf, "r", encoding="utf-8") as f:
            parser.read_file(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {pacman_conf}: {e}")
    except configparser.Error as e:
        raise ConfigurationError(f"Cannot parse {pacman_conf}: {e}")

    if not parser.has_section("options"):
        return {}
    return {key: (value or "") for key, value in parser.items("options")}


class Config:
    """Manages configuration for pacnews."""

    def __init__(self, config_file: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file
        """
        self.config_file = config_file or str(get_default_config_path())
        self._app_config = self._load_config()
        self._pacman_options: Optional[Dict[str, str]] = None

    def _load_config(self) -> AppConfig:
        """
        Load configuration from file or fall back to defaults.

        Returns:
            AppConfig instance
        """
        try:
            if os.path.exists(self.config_file):
                file_size = os.path.getsize(self.config_file)
                if file_size > MAX_CONFIG_SIZE:
                    raise ValueError(f"Config file too large: {file_size} bytes")

                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                if not isinstance(data, dict):
                    raise ValueError("Configuration must be a JSON object")

                app_config = AppConfig.from_dict(data)
                self._validate(app_config)
                logger.info(f"Loaded configuration from {self.config_file}")
                return app_config

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
        except PermissionError as e:
            logger.error(f"Permission denied reading config file {self.config_file}: {e}")
        except OSError as e:
            logger.error(f"Error reading config file {self.config_file}: {e}")
        except ValueError as e:
            logger.error(f"Config file validation error: {e}")

        logger.debug("Using default configuration")
        return AppConfig()

    @staticmethod
    def _validate(app_config: AppConfig) -> None:
        """
        Validate loaded values.

        Raises:
            ValueError: If a value is unusable
        """
        for key in ("pacman_conf", "news_url", "upgrade_marker"):
            if not isinstance(getattr(app_config, key), str):
                raise ValueError(f"{key} must be a string")
        for key in ("log_file", "db_path"):
            value = getattr(app_config, key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key} must be a string or null")
        for key in ("sync_remote", "debug_mode", "verbose_logging"):
            if not isinstance(getattr(app_config, key), bool):
                raise ValueError(f"{key} must be true or false")

        if not validate_news_url(app_config.news_url):
            raise ValueError(f"Invalid news URL: {app_config.news_url}")
        if not app_config.upgrade_marker:
            raise ValueError("upgrade_marker cannot be empty")
        timeout = app_config.request_timeout
        if isinstance(timeout, bool) or not isinstance(timeout, int) or not 1 <= timeout <= 300:
            raise ValueError(f"request_timeout out of range: {app_config.request_timeout}")

    def update(self, **overrides: Any) -> None:
        """
        Apply overrides, e.g. from the command line. ``None`` values are ignored.

        Raises:
            ConfigurationError: If an override is invalid
        """
        data = self._app_config.to_dict()
        for key, value in overrides.items():
            if key not in data:
                raise ConfigurationError(f"Unknown configuration key: {key}")
            if value is None:
                continue
            data[key] = value.value if isinstance(value, DateFilter) else value

        try:
            app_config = AppConfig.from_dict(data)
            self._validate(app_config)
        except ValueError as e:
            raise ConfigurationError(str(e))

        if app_config.pacman_conf != self._app_config.pacman_conf:
            self._pacman_options = None
        self._app_config = app_config

    def _get_pacman_options(self) -> Dict[str, str]:
        """pacman.conf options, read once; an unreadable file yields none."""
        if self._pacman_options is None:
            try:
                self._pacman_options = read_pacman_options(self._app_config.pacman_conf)
            except ConfigurationError as e:
                logger.warning(f"{e}; using pacman defaults")
                self._pacman_options = {}
        return self._pacman_options

    def get_log_file(self) -> str:
        """Path of the pacman log: configured, then pacman.conf, then default."""
        if self._app_config.log_file:
            return self._app_config.log_file
        return self._get_pacman_options().get("LogFile") or DEFAULT_PACMAN_LOG

    def get_db_path(self) -> str:
        """Path of the pacman database directory."""
        if self._app_config.db_path:
            return self._app_config.db_path
        return self._get_pacman_options().get("DBPath") or DEFAULT_DB_PATH

    def get_pacman_conf(self) -> str:
        """Path of pacman.conf."""
        return self._app_config.pacman_conf

    def get_news_url(self) -> str:
        """URL of the news page."""
        return self._app_config.news_url

    def get_upgrade_marker(self) -> str:
        """Log text that identifies a full system upgrade."""
        return self._app_config.upgrade_marker

    def get_date_filter(self) -> DateFilter:
        """Which side of the last upgrade news must fall on."""
        return self._app_config.date_filter

    def get_sync_remote(self) -> bool:
        """Whether to refresh the repository databases before comparing."""
        return self._app_config.sync_remote

    def get_request_timeout(self) -> int:
        """Timeout for the news request in seconds."""
        return self._app_config.request_timeout

    def to_dict(self) -> Dict[str, Any]:
        """Configuration as a plain dictionary, e.g. for logging setup."""
        return self._app_config.to_dict()
