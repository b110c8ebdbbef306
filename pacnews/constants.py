"""
Application constants for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from pathlib import Path

# Application info
APP_NAME = "pacnews"
APP_VERSION = "1.0.0"
APP_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"

# News page
NEWS_URL = "https://archlinux.org/news"
NEWS_BASE_URL = "https://archlinux.org"
NEWS_ROW_SELECTOR = "tbody > tr"
NEWS_DATE_FORMAT = "%Y-%m-%d"

# Trusted news domains
TRUSTED_NEWS_DOMAINS = {
    "archlinux.org",
    "www.archlinux.org",
}

# pacman defaults (used when pacman.conf does not say otherwise)
DEFAULT_PACMAN_CONF = "/etc/pacman.conf"
DEFAULT_PACMAN_LOG = "/var/log/pacman.log"
DEFAULT_DB_PATH = "/var/lib/pacman/"

# Last full upgrade detection
UPGRADE_MARKER = "pacman -Syu"
LOG_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Network timeouts (seconds)
DEFAULT_REQUEST_TIMEOUT = 30

# Subprocess timeouts (seconds)
PACMAN_QUERY_TIMEOUT = 30
PACMAN_SYNC_TIMEOUT = 120

# Package name validation
PACKAGE_NAME_PATTERN = r'^[a-zA-Z0-9@_+][a-zA-Z0-9@._+-]*$'


# Paths
def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return Path.home() / ".config" / "pacnews"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / "config.json"
