"""
Correlation of news articles with outdated packages.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from datetime import datetime
from typing import Iterable, Iterator, List

from .models import DateFilter, NewsArticle, ParsedRow
from .utils.logger import get_logger

logger = get_logger(__name__)


def skip_failed_rows(rows: Iterable[ParsedRow]) -> Iterator[NewsArticle]:
    """Yield parsed articles, logging and dropping rows that failed to parse."""
    for row in rows:
        if row.ok:
            yield row.article
        else:
            logger.debug(f"Skipping news row: {row.error}")


def filter_by_date(articles: Iterable[NewsArticle], cutoff: datetime,
                   date_filter: DateFilter = DateFilter.BEFORE_SYNC) -> Iterator[NewsArticle]:
    """
    Keep articles on the requested side of the cutoff.

    ``BEFORE_SYNC`` keeps articles published strictly before the cutoff,
    ``SINCE_SYNC`` keeps those published strictly after it.
    """
    for article in articles:
        if date_filter is DateFilter.BEFORE_SYNC:
            if article.publish_date < cutoff:
                yield article
        elif article.publish_date > cutoff:
            yield article


def filter_by_packages(articles: Iterable[NewsArticle],
                       package_names: Iterable[str]) -> Iterator[NewsArticle]:
    """
    Keep articles whose title mentions one of the packages.

    Matching is a case-insensitive substring test, so "linux" also matches
    a title about "linux-firmware".
    """
    names = [name.lower() for name in package_names]
    for article in articles:
        title = article.title.lower()
        if any(name in title for name in names):
            yield article


def correlate(rows: Iterable[ParsedRow], cutoff: datetime, outdated_names: Iterable[str],
              date_filter: DateFilter = DateFilter.BEFORE_SYNC) -> List[NewsArticle]:
    """
    Find the news articles that relate to outdated packages.

    Args:
        rows: Parsed news rows in feed order
        cutoff: Time of the last full system upgrade
        outdated_names: Names of packages with a pending update
        date_filter: Which side of the cutoff to keep

    Returns:
        Matching articles in feed order, possibly empty
    """
    articles = skip_failed_rows(rows)
    articles = filter_by_date(articles, cutoff, date_filter)
    articles = filter_by_packages(articles, outdated_names)
    return list(articles)
