"""
Command-line output helpers for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later
