"""
Last full system upgrade detection from the pacman log.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from datetime import datetime
from typing import Sequence

from .constants import LOG_TIMESTAMP_FORMAT, UPGRADE_MARKER
from .exceptions import LastSyncNotFoundError, MalformedLogError
from .utils.logger import get_logger

logger = get_logger(__name__)


def parse_log_timestamp(line: str) -> datetime:
    """
    Read the timestamp at the start of a pacman log line.

    pacman writes lines like ``[2024-01-05T10:00:00+0000] [PACMAN] Running ...``.

    Raises:
        MalformedLogError: If the first token is not a timestamp
    """
    tokens = line.split()
    if not tokens:
        raise MalformedLogError(line, "empty line")

    stamp = tokens[0].strip("[]")
    try:
        return datetime.strptime(stamp, LOG_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedLogError(line, str(e)) from e


def find_last_sync(lines: Sequence[str], marker: str = UPGRADE_MARKER) -> datetime:
    """
    Find when the last full system upgrade was started.

    Only the most recent line containing ``marker`` is considered. If that
    line is malformed the lookup fails, even when older entries are fine.

    Args:
        lines: Log lines, oldest first
        marker: Text identifying a full upgrade

    Returns:
        Timezone-aware timestamp of the last full upgrade

    Raises:
        LastSyncNotFoundError: If no line contains the marker
        MalformedLogError: If the most recent matching line has no valid timestamp
    """
    for line in reversed(lines):
        if marker in line:
            timestamp = parse_log_timestamp(line)
            logger.debug(f"Last full upgrade: {timestamp.isoformat()}")
            return timestamp

    raise LastSyncNotFoundError(marker)
