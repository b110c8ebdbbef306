"""
Input validation utilities.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

import re
from typing import Optional, Set
from urllib.parse import urlparse

from ..constants import PACKAGE_NAME_PATTERN, TRUSTED_NEWS_DOMAINS
from ..utils.logger import get_logger

logger = get_logger(__name__)

MAX_PACKAGE_NAME_LENGTH = 255
MAX_URL_LENGTH = 2048


def validate_package_name(name: str) -> bool:
    """
    Validate a package name as pacman accepts it.

    Args:
        name: Package name to validate

    Returns:
        True if package name is valid and safe
    """
    if not name or len(name) > MAX_PACKAGE_NAME_LENGTH:
        return False

    if not re.match(PACKAGE_NAME_PATTERN, name):
        logger.warning(f"Invalid package name format: {name!r}")
        return False

    return True


def validate_news_url(url: str, trusted_domains: Optional[Set[str]] = None) -> bool:
    """
    Validate the news page URL.

    Only https URLs on a trusted domain are accepted.

    Args:
        url: URL to validate
        trusted_domains: Allowed host names, defaults to the Arch Linux domains

    Returns:
        True if URL is valid and trusted
    """
    if not url or len(url) > MAX_URL_LENGTH:
        return False

    try:
        parsed = urlparse(url)
    except ValueError as e:
        logger.warning(f"Failed to parse URL {url}: {e}")
        return False

    if parsed.scheme != 'https':
        logger.warning(f"HTTPS required for news URL: {url}")
        return False

    if not parsed.hostname:
        logger.warning(f"No hostname in URL: {url}")
        return False

    domains = trusted_domains if trusted_domains is not None else TRUSTED_NEWS_DOMAINS
    if parsed.hostname.lower() not in domains:
        logger.warning(f"Untrusted news domain: {parsed.hostname}")
        return False

    return True
