"""
Unit tests for the news table parser.
"""

import unittest
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from pacnews.article_parser import ArticleParser
from pacnews.exceptions import ArticleParseError, DateFormatError, MissingLinkError, RowTooShortError
from pacnews.models import NewsArticle


NEWS_PAGE = """
<html>
<body>
<div id="content">
<table id="article-list" class="results">
  <thead>
    <tr><th>Published</th><th>Title</th><th>Author</th></tr>
  </thead>
  <tbody>
    <tr class="odd">
      <td>2024-01-09</td>
      <td class="wrap"><a href="/news/making-dbus-broker-our-default-d-bus-daemon/"
          title="View: Making dbus-broker our default D-Bus daemon">Making dbus-broker our default D-Bus daemon</a></td>
      <td>Jan Alexander Steffens</td>
    </tr>
    <tr class="even">
      <td>not a date</td>
      <td class="wrap"><a href="/news/broken/">Broken row</a></td>
      <td>Someone</td>
    </tr>
    <tr class="odd">
      <td>2023-12-01</td>
      <td class="wrap"><a href="/news/linux-firmware-split/">linux-firmware split</a></td>
      <td>Someone Else</td>
    </tr>
  </tbody>
</table>
</div>
</body>
</html>
"""


def make_row(cells_html):
    """Build a tr element from the inner HTML of a row."""
    soup = BeautifulSoup(f"<table><tbody><tr>{cells_html}</tr></tbody></table>", "html.parser")
    return soup.select_one("tr")


class TestParseRow(unittest.TestCase):
    """Test ArticleParser.parse_row."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = ArticleParser()

    def test_basic_row(self):
        """A date cell and a link cell make an article."""
        row = make_row('<td>2024-01-01</td><td><a href="/x">Kernel update</a></td>')
        article = self.parser.parse_row(row)
        self.assertEqual(article, NewsArticle(
            publish_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            title="Kernel update",
            link="https://archlinux.org/x",
        ))

    def test_date_is_midnight_utc(self):
        """The publish date is normalized to midnight UTC."""
        row = make_row('<td>2024-03-15</td><td><a href="/y">Title</a></td>')
        article = self.parser.parse_row(row)
        self.assertEqual(article.publish_date.utcoffset().total_seconds(), 0)
        self.assertEqual((article.publish_date.hour, article.publish_date.minute), (0, 0))

    def test_extra_cells_ignored(self):
        """Test a row with an author column."""
        row = make_row('<td>2024-01-01</td><td><a href="/x">Title</a></td><td>Author</td>')
        self.assertEqual(self.parser.parse_row(row).title, "Title")

    def test_absolute_link_kept(self):
        """Absolute hrefs are not rewritten."""
        row = make_row('<td>2024-01-01</td><td><a href="https://example.org/a">Title</a></td>')
        self.assertEqual(self.parser.parse_row(row).link, "https://example.org/a")

    def test_custom_base_url(self):
        """Relative links resolve against the configured base."""
        parser = ArticleParser(base_url="https://mirror.example.org")
        row = make_row('<td>2024-01-01</td><td><a href="/news/x/">Title</a></td>')
        self.assertEqual(parser.parse_row(row).link, "https://mirror.example.org/news/x/")

    def test_single_cell_row_too_short(self):
        """A row with one cell fails."""
        row = make_row('<td>2024-01-01</td>')
        with self.assertRaises(RowTooShortError) as ctx:
            self.parser.parse_row(row)
        self.assertEqual(ctx.exception.cell_count, 1)

    def test_empty_row_too_short(self):
        """Test a row without cells."""
        with self.assertRaises(RowTooShortError):
            self.parser.parse_row(make_row(''))

    def test_missing_link(self):
        """A title cell without a link fails."""
        row = make_row('<td>2024-01-01</td><td>Kernel update</td>')
        with self.assertRaises(MissingLinkError):
            self.parser.parse_row(row)

    def test_missing_href(self):
        """A link without href fails."""
        row = make_row('<td>2024-01-01</td><td><a name="x">Kernel update</a></td>')
        with self.assertRaises(MissingLinkError):
            self.parser.parse_row(row)

    def test_empty_href_resolves_to_base(self):
        """An empty href is still a link."""
        row = make_row('<td>2024-01-01</td><td><a href="">Kernel</a></td>')
        self.assertEqual(self.parser.parse_row(row).link, "https://archlinux.org")

    def test_comments_ignored_in_title(self):
        """HTML comments are not part of the title."""
        row = make_row('<td>2024-01-01</td><td><a href="/x">Kernel<!-- c -->update</a></td>')
        self.assertEqual(self.parser.parse_row(row).title, "Kernel update")

    def test_comments_ignored_in_date(self):
        """A comment in the date cell does not break the date."""
        row = make_row('<td>2024-01-01<!-- published --></td><td><a href="/x">Title</a></td>')
        self.assertEqual(self.parser.parse_row(row).publish_date,
                         datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_invalid_date(self):
        """Test dates that are not YYYY-MM-DD."""
        for text in ["01/01/2024", "2024-13-01", "", "yesterday"]:
            with self.subTest(text=text):
                row = make_row(f'<td>{text}</td><td><a href="/x">Title</a></td>')
                with self.assertRaises(DateFormatError):
                    self.parser.parse_row(row)

    def test_all_errors_are_parse_errors(self):
        """Every row failure shares one base class."""
        for cls in (RowTooShortError, DateFormatError, MissingLinkError):
            self.assertTrue(issubclass(cls, ArticleParseError))


class TestParseRowResult(unittest.TestCase):
    """Test ArticleParser.parse_row_result."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = ArticleParser()

    def test_success(self):
        """A good row carries the article."""
        result = self.parser.parse_row_result(make_row('<td>2024-01-01</td><td><a href="/x">T</a></td>'))
        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.article.title, "T")

    def test_failure(self):
        """A bad row carries the error instead of raising."""
        result = self.parser.parse_row_result(make_row('<td>2024-01-01</td>'))
        self.assertFalse(result.ok)
        self.assertIsNone(result.article)
        self.assertIsInstance(result.error, RowTooShortError)


class TestParseDocument(unittest.TestCase):
    """Test ArticleParser.parse_document."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = ArticleParser()

    def test_rows_in_document_order(self):
        """Every body row is returned, header rows are not."""
        rows = self.parser.parse_document(NEWS_PAGE)
        self.assertEqual(len(rows), 3)
        self.assertEqual([row.ok for row in rows], [True, False, True])

    def test_parsed_values(self):
        """Test values of a realistic row."""
        rows = self.parser.parse_document(NEWS_PAGE)
        first = rows[0].article
        self.assertEqual(first.title, "Making dbus-broker our default D-Bus daemon")
        self.assertEqual(first.link, "https://archlinux.org/news/making-dbus-broker-our-default-d-bus-daemon/")
        self.assertEqual(first.publish_date, datetime(2024, 1, 9, tzinfo=timezone.utc))
        self.assertIsInstance(rows[1].error, DateFormatError)

    def test_page_without_table(self):
        """A page without a news table yields no rows."""
        self.assertEqual(self.parser.parse_document("<html><body>Maintenance</body></html>"), [])


if __name__ == "__main__":
    unittest.main()
