"""
Custom exceptions for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later


class PacnewsError(Exception):
    """Base exception for all pacnews errors."""

    pass


class NetworkError(PacnewsError):
    """Raised when network operations fail."""

    pass


class PackageManagerError(PacnewsError):
    """Raised when package manager operations fail."""

    pass


class ConfigurationError(PacnewsError):
    """Raised when configuration is invalid."""

    pass


class SyncLogError(PacnewsError):
    """Raised when the last full upgrade cannot be read from the pacman log."""

    pass


class LastSyncNotFoundError(SyncLogError):
    """Raised when no full upgrade is recorded in the log."""

    def __init__(self, marker: str) -> None:
        super().__init__(f"No '{marker}' entry found in the pacman log")
        self.marker = marker


class MalformedLogError(SyncLogError):
    """Raised when the most recent upgrade line has an unreadable timestamp."""

    def __init__(self, line: str, reason: str = "") -> None:
        message = f"Cannot read timestamp from log line: {line.strip()!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.line = line


class ArticleParseError(PacnewsError):
    """Raised when a news table row cannot be turned into an article."""

    pass


class RowTooShortError(ArticleParseError):
    """Raised when a row has fewer than two cells."""

    def __init__(self, cell_count: int) -> None:
        super().__init__(f"Row too short: {cell_count} cell(s), expected at least 2")
        self.cell_count = cell_count


class DateFormatError(ArticleParseError):
    """Raised when the date cell is not in YYYY-MM-DD form."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid article date: {text!r}")
        self.text = text


class MissingLinkError(ArticleParseError):
    """Raised when the title cell has no link or the link has no href."""

    pass
