"""
Output formatting utilities for the CLI.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

import json
import sys
from typing import Any, Dict, List

from colorama import init, Fore, Style

from ..models import CorrelationReport, DateFilter, NewsArticle

# Initialize colorama for cross-platform color support
init(autoreset=True)


class OutputFormatter:
    """Handles output formatting for the CLI."""

    def __init__(self, use_color: bool = True, json_output: bool = False):
        """
        Initialize output formatter.

        Args:
            use_color: Whether to use ANSI colors
            json_output: Whether to output JSON
        """
        self.use_color = use_color
        self.json_output = json_output

        # Color shortcuts
        self.green = Fore.GREEN if use_color else ''
        self.yellow = Fore.YELLOW if use_color else ''
        self.red = Fore.RED if use_color else ''
        self.cyan = Fore.CYAN if use_color else ''
        self.white = Fore.WHITE if use_color else ''
        self.reset = Style.RESET_ALL if use_color else ''
        self.bright = Style.BRIGHT if use_color else ''

    def warning(self, message: str) -> None:
        """Print warning message."""
        if not self.json_output:
            print(f"{self.yellow}⚠️  {message}{self.reset}")

    def error(self, message: str) -> None:
        """Print error message. Errors go to stderr even in JSON mode."""
        print(f"{self.red}❌ {message}{self.reset}", file=sys.stderr)

    def info(self, message: str) -> None:
        """Print info message."""
        if not self.json_output:
            print(f"{self.cyan}ℹ️  {message}{self.reset}")

    def header(self, message: str) -> None:
        """Print header message."""
        if not self.json_output:
            print(f"\n{self.cyan}{self.bright}{message}{self.reset}")
            print(f"{self.cyan}{'─' * len(message)}{self.reset}")

    def format_outdated_table(self, outdated: Dict[str, str]) -> str:
        """
        Format outdated packages as a table.

        Args:
            outdated: Package name -> repository version

        Returns:
            Formatted table string
        """
        if not outdated:
            return "No updates available"

        max_name = max(max(len(name) for name in outdated), 10)

        lines = [f"  {'Package':<{max_name}}  New version",
                 f"  {'─' * max_name}  {'─' * 15}"]
        for name in sorted(outdated):
            if self.use_color:
                lines.append(f"  {self.white}{name:<{max_name}}{self.reset}  {self.green}{outdated[name]}{self.reset}")
            else:
                lines.append(f"  {name:<{max_name}}  {outdated[name]}")

        return '\n'.join(lines)

    def format_articles(self, articles: List[NewsArticle]) -> str:
        """
        Format news articles.

        Args:
            articles: Articles in feed order

        Returns:
            Formatted news string
        """
        if not articles:
            return "No related news items"

        lines = []
        for article in articles:
            date = f"{article.publish_date:%Y-%m-%d}"
            if self.use_color:
                lines.append(f"  {self.yellow}[{date}]{self.reset} {self.white}{article.title}{self.reset}")
            else:
                lines.append(f"  [{date}] {article.title}")
            lines.append(f"    {article.link}")

        return '\n'.join(lines)

    def print_report(self, report: CorrelationReport) -> None:
        """
        Print the result of a run, as text or JSON.

        Args:
            report: Result of the news check
        """
        if self.json_output:
            self.output_json(report.to_dict())
            return

        side = "before" if report.date_filter is DateFilter.BEFORE_SYNC else "since"
        self.info(f"Last full upgrade: {report.last_sync:%Y-%m-%d %H:%M:%S %z}")

        self.header(f"Pending updates ({len(report.outdated)})")
        print(self.format_outdated_table(report.outdated))

        self.header(f"News published {side} the last upgrade about these packages")
        print(self.format_articles(report.articles))

        if report.skipped_rows:
            self.warning(f"Skipped {report.skipped_rows} of {report.total_rows} unreadable news rows")

    def output_json(self, data: Any) -> None:
        """
        Output data as JSON.

        Args:
            data: Data to output
        """
        print(json.dumps(data, indent=2, default=str))
