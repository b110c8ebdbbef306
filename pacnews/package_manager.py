"""
Package state queries for Arch Linux systems.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .constants import DEFAULT_DB_PATH, DEFAULT_PACMAN_CONF, DEFAULT_PACMAN_LOG, PACMAN_QUERY_TIMEOUT, PACMAN_SYNC_TIMEOUT
from .exceptions import PackageManagerError
from .utils.logger import get_logger
from .utils.subprocess_wrapper import SecureSubprocess

logger = get_logger(__name__)


class PackageManager:
    """Read-only access to the local and repository package databases."""

    def __init__(self, pacman_conf: str = DEFAULT_PACMAN_CONF,
                 db_path: str = DEFAULT_DB_PATH,
                 log_file: str = DEFAULT_PACMAN_LOG) -> None:
        """
        Initialize the package manager.

        Args:
            pacman_conf: Path to pacman.conf (repositories and mirrors)
            db_path: pacman database directory
            log_file: pacman log file
        """
        self.pacman_conf = pacman_conf
        self.db_path = db_path
        self.log_file = log_file

        self._verify_pacman_available()
        logger.debug("Initialized PackageManager")

    def _verify_pacman_available(self) -> None:
        """Verify that pacman is available on the system."""
        # Skip verification if in test environment
        if os.environ.get('PACNEWS_SKIP_PACMAN_VERIFY') == '1':
            logger.debug("Skipping pacman verification (test environment)")
            return

        if not SecureSubprocess.check_command_exists('pacman'):
            raise PackageManagerError("pacman command not found - is this an Arch-based system?")

    @staticmethod
    def _parse_name_version(line: str, offset: int = 0) -> Optional[Tuple[str, str]]:
        parts = line.split()
        if len(parts) < offset + 2:
            return None
        return parts[offset], parts[offset + 1]

    def get_installed_versions(self) -> Dict[str, str]:
        """
        Get installed packages and their versions.

        Returns:
            Package name -> installed version

        Raises:
            PackageManagerError: If pacman fails
        """
        result = SecureSubprocess.run_pacman(
            ["-Q", "--dbpath", self.db_path, "--config", self.pacman_conf],
            timeout=PACMAN_QUERY_TIMEOUT
        )

        if result.returncode != 0:
            error_msg = result.stderr.strip() if result.stderr else "Unknown error"
            raise PackageManagerError(f"Failed to list installed packages: {error_msg}")

        installed = {}
        for line in result.stdout.splitlines():
            parsed = self._parse_name_version(line)
            if parsed:
                installed[parsed[0]] = parsed[1]
            elif line.strip():
                logger.warning(f"Unexpected pacman -Q output: {line!r}")

        logger.debug(f"Found {len(installed)} installed packages")
        return installed

    def get_remote_versions(self, refresh: bool = True) -> Dict[str, str]:
        """
        Get repository packages and their versions.

        With ``refresh`` the repository databases are downloaded into a
        private temporary dbpath first, so the system databases stay
        untouched and no root access is needed.

        Args:
            refresh: Download fresh repository databases first

        Returns:
            Package name -> repository version

        Raises:
            PackageManagerError: If syncing or listing fails
        """
        if not refresh:
            return self._list_sync_packages(self.db_path)

        tmp_db = tempfile.mkdtemp(prefix="pacnews-db-")
        try:
            self._sync_into(tmp_db)
            return self._list_sync_packages(tmp_db)
        finally:
            shutil.rmtree(tmp_db, ignore_errors=True)

    def _sync_into(self, tmp_db: str) -> None:
        """Download the repository databases into ``tmp_db``."""
        local_db = Path(self.db_path) / "local"
        if local_db.exists():
            os.symlink(local_db, Path(tmp_db) / "local")

        logger.info("Syncing repository databases...")
        result = SecureSubprocess.run_pacman(
            ["-Sy", "--dbpath", tmp_db, "--config", self.pacman_conf, "--logfile", os.devnull],
            fakeroot=True,
            timeout=PACMAN_SYNC_TIMEOUT
        )

        if result.returncode != 0:
            error_msg = result.stderr.strip() if result.stderr else "Unknown error"
            raise PackageManagerError(f"Failed to sync repository databases: {error_msg}")

    def _list_sync_packages(self, db_path: str) -> Dict[str, str]:
        """List packages of every sync database under ``db_path``."""
        result = SecureSubprocess.run_pacman(
            ["-Sl", "--dbpath", db_path, "--config", self.pacman_conf],
            timeout=PACMAN_QUERY_TIMEOUT
        )

        if result.returncode != 0:
            error_msg = result.stderr.strip() if result.stderr else "Unknown error"
            raise PackageManagerError(f"Failed to list repository packages: {error_msg}")

        remote: Dict[str, str] = {}
        # pacman -Sl format: "repo name version [installed]"
        for line in result.stdout.splitlines():
            parsed = self._parse_name_version(line, offset=1)
            if parsed:
                # Repositories are listed in pacman.conf order; the first one wins
                remote.setdefault(parsed[0], parsed[1])

        logger.debug(f"Found {len(remote)} repository packages")
        return remote

    def read_log_lines(self) -> List[str]:
        """
        Read the pacman log.

        Returns:
            Log lines, oldest first

        Raises:
            PackageManagerError: If the log cannot be read
        """
        try:
            with open(self.log_file, "r", encoding="utf-8", errors="replace") as f:
                return f.read().splitlines()
        except OSError as e:
            raise PackageManagerError(f"Cannot read pacman log {self.log_file}: {e}")
