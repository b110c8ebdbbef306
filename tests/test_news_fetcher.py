"""Test news fetcher functionality."""

import unittest
from unittest.mock import Mock, patch

import requests

from pacnews.exceptions import NetworkError
from pacnews.news_fetcher import NewsFetcher


class TestNewsFetcher(unittest.TestCase):
    """Test news fetcher functionality."""

    def setUp(self):
        """Set up test fixtures."""
        # Mock the session to prevent any real network calls
        self.session_patcher = patch('pacnews.news_fetcher.requests.Session')
        mock_session_class = self.session_patcher.start()
        self.mock_session = Mock()
        mock_session_class.return_value = self.mock_session

        self.news_fetcher = NewsFetcher(timeout=10)

    def tearDown(self):
        """Clean up after tests."""
        self.session_patcher.stop()

    def _response(self, text="<html></html>"):
        response = Mock()
        response.text = text
        response.content = text.encode()
        response.raise_for_status.return_value = None
        return response

    def test_initialization(self):
        """Test news fetcher initialization."""
        self.assertIs(self.news_fetcher.session, self.mock_session)
        self.assertEqual(self.news_fetcher.timeout, 10)
        self.mock_session.headers.update.assert_called()
        self.mock_session.mount.assert_called()

    def test_fetch_news_page(self):
        """The page text is returned."""
        self.mock_session.get.return_value = self._response("<table></table>")
        html = self.news_fetcher.fetch_news_page("https://archlinux.org/news")
        self.assertEqual(html, "<table></table>")
        self.assertEqual(self.mock_session.get.call_args[0][0], "https://archlinux.org/news")

    def test_http_error_status(self):
        """A non-success status is fatal."""
        response = self._response()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("503 Server Error")
        self.mock_session.get.return_value = response
        with self.assertRaises(NetworkError):
            self.news_fetcher.fetch_news_page("https://archlinux.org/news")

    def test_timeout(self):
        """Test request timeout handling."""
        self.mock_session.get.side_effect = requests.exceptions.Timeout("timed out")
        with self.assertRaises(NetworkError) as ctx:
            self.news_fetcher.fetch_news_page("https://archlinux.org/news")
        self.assertIn("timed out", str(ctx.exception))

    def test_connection_error(self):
        """Test connection failure handling."""
        self.mock_session.get.side_effect = requests.exceptions.ConnectionError("no route")
        with self.assertRaises(NetworkError):
            self.news_fetcher.fetch_news_page("https://archlinux.org/news")

    def test_untrusted_url_not_fetched(self):
        """Untrusted or insecure URLs are refused before any request."""
        for url in ["http://archlinux.org/news", "https://evil.example.com/news", ""]:
            with self.subTest(url=url):
                with self.assertRaises(NetworkError):
                    self.news_fetcher.fetch_news_page(url)
        self.mock_session.get.assert_not_called()

    def test_oversized_page(self):
        """Test page size limit."""
        response = self._response()
        response.content = b"x" * (5 * 1024 * 1024 + 1)
        self.mock_session.get.return_value = response
        with self.assertRaises(NetworkError):
            self.news_fetcher.fetch_news_page("https://archlinux.org/news")

    def test_context_manager_closes_session(self):
        """Leaving the with block closes the session."""
        self.mock_session.get.return_value = self._response("<table></table>")
        with self.news_fetcher as fetcher:
            self.assertIs(fetcher, self.news_fetcher)
            fetcher.fetch_news_page("https://archlinux.org/news")
            self.mock_session.close.assert_not_called()
        self.mock_session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
