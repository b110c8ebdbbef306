"""
Main entry point for pacnews.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import sys
from typing import List, Optional

from . import __version__
from .checker import NewsChecker
from .cli.output import OutputFormatter
from .config import Config
from .exceptions import PacnewsError
from .models import DateFilter
from .utils.logger import set_global_config


def create_parser() -> argparse.ArgumentParser:
    """
    Create command line argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog='pacnews',
        description='Show Arch Linux news about packages you are about to update'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to custom configuration file'
    )
    parser.add_argument(
        '--pacman-conf',
        type=str,
        help='Path to pacman.conf (default: /etc/pacman.conf)'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Path to the pacman log (default: LogFile from pacman.conf)'
    )
    parser.add_argument(
        '--news-url',
        type=str,
        help='News page to read (default: https://archlinux.org/news)'
    )

    direction = parser.add_mutually_exclusive_group()
    direction.add_argument(
        '--before-sync',
        dest='date_filter',
        action='store_const',
        const=DateFilter.BEFORE_SYNC,
        help='Show news published before the last full upgrade (default)'
    )
    direction.add_argument(
        '--since-sync',
        dest='date_filter',
        action='store_const',
        const=DateFilter.SINCE_SYNC,
        help='Show news published since the last full upgrade'
    )

    parser.add_argument(
        '--no-sync',
        action='store_true',
        help='Use the existing repository databases instead of downloading fresh ones'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output the result as JSON'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    formatter = OutputFormatter(use_color=not args.no_color, json_output=args.json)

    try:
        config = Config(args.config)
        config.update(
            pacman_conf=args.pacman_conf,
            log_file=args.log_file,
            news_url=args.news_url,
            date_filter=args.date_filter,
            sync_remote=False if args.no_sync else None,
            debug_mode=True if args.debug else None,
        )
        set_global_config(config.to_dict())

        checker = NewsChecker(config)
        report = checker.check()
        formatter.print_report(report)
        return 0

    except PacnewsError as e:
        formatter.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        formatter.error("Operation cancelled by user")
        return 130
    except Exception as e:
        formatter.error(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
