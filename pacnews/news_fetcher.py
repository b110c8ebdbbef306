"""
News page fetching.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import APP_USER_AGENT, DEFAULT_REQUEST_TIMEOUT, NEWS_URL
from .exceptions import NetworkError
from .utils.logger import get_logger
from .utils.validators import validate_news_url

logger = get_logger(__name__)

MAX_PAGE_SIZE = 5 * 1024 * 1024  # 5MB


class NewsFetcher:
    """Downloads the Arch Linux news page."""

    def __init__(self, timeout: int = DEFAULT_REQUEST_TIMEOUT) -> None:
        """
        Initialize the news fetcher.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.session = requests.Session()
        self._configure_session()

        logger.debug("Initialized NewsFetcher")

    def _configure_session(self) -> None:
        """Configure headers and a conservative retry policy."""
        self.session.verify = True
        self.session.headers.update({
            'User-Agent': APP_USER_AGENT,
            'Accept': 'text/html',
            'Accept-Language': 'en-US,en;q=0.9',
            'Cache-Control': 'no-cache',
        })

        retry_strategy = Retry(
            total=2,
            connect=2,
            read=1,
            status=1,
            status_forcelist=[429, 500, 502, 503, 504],
            backoff_factor=0.5,
            allowed_methods=["GET", "HEAD"],
            raise_on_status=False,
            respect_retry_after_header=True,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount('https://', adapter)

    def fetch_news_page(self, url: str = NEWS_URL) -> str:
        """
        Fetch the news page HTML.

        Args:
            url: News page URL

        Returns:
            Page HTML

        Raises:
            NetworkError: If the URL is not trusted or the request fails
        """
        if not validate_news_url(url):
            raise NetworkError(f"Refusing to fetch untrusted news URL: {url}")

        logger.info(f"Fetching news from {url}")
        try:
            response = self.session.get(
                url,
                timeout=(min(5, self.timeout), self.timeout),
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Request timed out after {self.timeout}s: {e}")
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(f"Connection failed: {e}")
        except requests.exceptions.HTTPError as e:
            raise NetworkError(f"News page returned an error: {e}")
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request failed: {e}")

        if len(response.content) > MAX_PAGE_SIZE:
            raise NetworkError(f"News page too large: {len(response.content)} bytes")

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.text

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> "NewsFetcher":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit, closing the session."""
        self.close()
