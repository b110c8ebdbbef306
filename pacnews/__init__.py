"""
pacnews - Modular Package

Checks the Arch Linux news page for articles that mention packages
you are about to update, using the pacman log to find your last upgrade.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

__version__ = "1.0.0"
