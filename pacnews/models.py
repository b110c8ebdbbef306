"""
Data models for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Any
from enum import Enum

from .constants import DEFAULT_PACMAN_CONF, DEFAULT_REQUEST_TIMEOUT, NEWS_URL, UPGRADE_MARKER
from .exceptions import ArticleParseError


class DateFilter(Enum):
    """Which side of the last full upgrade an article must fall on."""
    BEFORE_SYNC = "before"
    SINCE_SYNC = "since"


@dataclass(frozen=True)
class NewsArticle:
    """A single row of the Arch Linux news table."""
    publish_date: datetime
    title: str
    link: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "publish_date": self.publish_date.isoformat(),
            "title": self.title,
            "link": self.link,
        }

    def __str__(self) -> str:
        return f"[{self.publish_date:%Y-%m-%d}] {self.title} ({self.link})"


@dataclass(frozen=True)
class ParsedRow:
    """Outcome of parsing one table row: either an article or the error."""
    article: Optional[NewsArticle] = None
    error: Optional[ArticleParseError] = None

    def __post_init__(self) -> None:
        if (self.article is None) == (self.error is None):
            raise ValueError("ParsedRow needs exactly one of article or error")

    @property
    def ok(self) -> bool:
        """True when the row parsed into an article."""
        return self.article is not None


@dataclass
class CorrelationReport:
    """Everything a single run found."""
    outdated: Dict[str, str]
    last_sync: datetime
    date_filter: DateFilter
    articles: List[NewsArticle] = field(default_factory=list)
    total_rows: int = 0
    skipped_rows: int = 0

    @property
    def has_articles(self) -> bool:
        """Check if any article matched."""
        return len(self.articles) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "last_sync": self.last_sync.isoformat(),
            "date_filter": self.date_filter.value,
            "outdated": dict(sorted(self.outdated.items())),
            "total_rows": self.total_rows,
            "skipped_rows": self.skipped_rows,
            "articles": [a.to_dict() for a in self.articles],
        }


@dataclass
class AppConfig:
    """Application configuration."""
    pacman_conf: str = DEFAULT_PACMAN_CONF
    log_file: Optional[str] = None
    db_path: Optional[str] = None
    news_url: str = NEWS_URL
    upgrade_marker: str = UPGRADE_MARKER
    date_filter: DateFilter = DateFilter.BEFORE_SYNC
    sync_remote: bool = True
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    debug_mode: bool = False
    verbose_logging: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "pacman_conf": self.pacman_conf,
            "log_file": self.log_file,
            "db_path": self.db_path,
            "news_url": self.news_url,
            "upgrade_marker": self.upgrade_marker,
            "date_filter": self.date_filter.value,
            "sync_remote": self.sync_remote,
            "request_timeout": self.request_timeout,
            "debug_mode": self.debug_mode,
            "verbose_logging": self.verbose_logging,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        """Create from dictionary."""
        return cls(
            pacman_conf=data.get("pacman_conf", DEFAULT_PACMAN_CONF),
            log_file=data.get("log_file"),
            db_path=data.get("db_path"),
            news_url=data.get("news_url", NEWS_URL),
            upgrade_marker=data.get("upgrade_marker", UPGRADE_MARKER),
            date_filter=DateFilter(data.get("date_filter", "before")),
            sync_remote=data.get("sync_remote", True),
            request_timeout=data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT),
            debug_mode=data.get("debug_mode", False),
            verbose_logging=data.get("verbose_logging", False),
        )
