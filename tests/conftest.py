"""
Pytest configuration for the pacnews test suite.
"""

import os


def pytest_configure(config):
    """Configure pytest - set up the test environment."""
    # No pacman on CI machines; every pacman call is mocked
    os.environ['PACNEWS_SKIP_PACMAN_VERIFY'] = '1'
