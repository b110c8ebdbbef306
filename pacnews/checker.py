"""
News checker for Arch Linux systems.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Optional

from .article_parser import ArticleParser
from .config import Config
from .correlator import correlate
from .models import CorrelationReport
from .news_fetcher import NewsFetcher
from .package_manager import PackageManager
from .sync_log import find_last_sync
from .utils.logger import get_logger
from .versions import find_outdated

logger = get_logger(__name__)


class NewsChecker:
    """Finds news articles about packages with pending updates."""

    def __init__(self, config: Config,
                 package_manager: Optional[PackageManager] = None,
                 news_fetcher: Optional[NewsFetcher] = None,
                 article_parser: Optional[ArticleParser] = None) -> None:
        """
        Initialize the news checker.

        Args:
            config: Configuration instance
            package_manager: Package state provider, built from config if omitted
            news_fetcher: News page provider, built for each check if omitted
            article_parser: News table parser
        """
        self.config = config
        self.package_manager = package_manager or PackageManager(
            pacman_conf=config.get_pacman_conf(),
            db_path=config.get_db_path(),
            log_file=config.get_log_file(),
        )
        self.news_fetcher = news_fetcher
        self.article_parser = article_parser or ArticleParser()

        logger.debug("Initialized NewsChecker")

    def check(self) -> CorrelationReport:
        """
        Run the whole check.

        Any failure to read package state, the log or the news page is
        fatal and propagates; unparseable news rows are skipped.

        Returns:
            CorrelationReport with the matching articles
        """
        logger.info("Starting news check...")

        logger.debug("Comparing installed and repository versions...")
        installed = self.package_manager.get_installed_versions()
        remote = self.package_manager.get_remote_versions(refresh=self.config.get_sync_remote())
        outdated = find_outdated(installed, remote)

        logger.debug("Looking up last full upgrade...")
        last_sync = find_last_sync(
            self.package_manager.read_log_lines(),
            marker=self.config.get_upgrade_marker(),
        )

        logger.debug("Fetching news...")
        html = self._fetch_news()
        rows = self.article_parser.parse_document(html)

        date_filter = self.config.get_date_filter()
        articles = correlate(rows, last_sync, outdated.keys(), date_filter)

        report = CorrelationReport(
            outdated=outdated,
            last_sync=last_sync,
            date_filter=date_filter,
            articles=articles,
            total_rows=len(rows),
            skipped_rows=sum(1 for row in rows if not row.ok),
        )

        logger.info(f"News check complete: {len(outdated)} outdated packages, "
                    f"{len(articles)} related news items")
        return report

    def _fetch_news(self) -> str:
        """Fetch the news page; a fetcher built here is closed afterwards."""
        url = self.config.get_news_url()
        if self.news_fetcher is not None:
            return self.news_fetcher.fetch_news_page(url)

        with NewsFetcher(timeout=self.config.get_request_timeout()) as fetcher:
            return fetcher.fetch_news_page(url)
