"""
Utils package for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from .logger import get_logger, set_global_config
from .validators import (
    validate_package_name,
    validate_news_url,
)
from .subprocess_wrapper import SecureSubprocess

__all__ = [
    "get_logger",
    "set_global_config",
    "validate_package_name",
    "validate_news_url",
    "SecureSubprocess",
]
