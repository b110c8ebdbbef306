"""
Parsing of the Arch Linux news table into articles.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from datetime import datetime, timezone
from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Comment, Tag

from .constants import NEWS_BASE_URL, NEWS_DATE_FORMAT, NEWS_ROW_SELECTOR
from .exceptions import ArticleParseError, DateFormatError, MissingLinkError, RowTooShortError
from .models import NewsArticle, ParsedRow
from .utils.logger import get_logger

logger = get_logger(__name__)


def _text_nodes(tag: Tag) -> List[str]:
    """Text descendants of ``tag``, without HTML comments."""
    return [s for s in tag.find_all(string=True) if not isinstance(s, Comment)]


class ArticleParser:
    """Turns ``tbody > tr`` rows of the news page into NewsArticle records."""

    def __init__(self, base_url: str = NEWS_BASE_URL) -> None:
        """
        Initialize the parser.

        Args:
            base_url: Base that relative article links are resolved against
        """
        self.base_url = base_url

    def parse_row(self, row: Tag) -> NewsArticle:
        """
        Parse one table row.

        The first cell holds the date (``YYYY-MM-DD``), the second a link to
        the article whose text is the title. Further cells are ignored.

        Args:
            row: A ``tr`` element

        Returns:
            The parsed article

        Raises:
            RowTooShortError: If the row has fewer than two cells
            DateFormatError: If the first cell is not a date
            MissingLinkError: If the second cell has no link with an href
        """
        cells = row.select("td")
        if len(cells) < 2:
            raise RowTooShortError(len(cells))

        date_cell, title_cell = cells[0], cells[1]

        date_text = "".join(_text_nodes(date_cell)).strip()
        try:
            publish_date = datetime.strptime(date_text, NEWS_DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError as e:
            raise DateFormatError(date_text) from e

        anchor = title_cell.find("a")
        if anchor is None:
            raise MissingLinkError("Title cell has no link")

        href = anchor.get("href")
        if href is None:
            raise MissingLinkError("Article link has no href")

        title = " ".join(_text_nodes(anchor))
        link = urljoin(self.base_url, href)

        return NewsArticle(publish_date=publish_date, title=title, link=link)

    def parse_row_result(self, row: Tag) -> ParsedRow:
        """Parse one row, capturing a parse failure instead of raising it."""
        try:
            return ParsedRow(article=self.parse_row(row))
        except ArticleParseError as e:
            return ParsedRow(error=e)

    def parse_document(self, html: str) -> List[ParsedRow]:
        """
        Parse every row of the news table in document order.

        Args:
            html: The news page

        Returns:
            One ParsedRow per ``tbody > tr`` element
        """
        soup = BeautifulSoup(html, "html.parser")
        rows = [self.parse_row_result(row) for row in soup.select(NEWS_ROW_SELECTOR)]

        failed = sum(1 for row in rows if not row.ok)
        logger.debug(f"Parsed {len(rows)} news rows ({failed} unparseable)")
        return rows
