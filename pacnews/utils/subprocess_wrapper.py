"""
Secure subprocess wrapper to prevent command injection and handle errors properly.
"""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import os
import shutil
import subprocess
import threading
from typing import Dict, List, Optional, Any

from ..exceptions import PackageManagerError
from ..utils.logger import get_logger
from ..utils.validators import validate_package_name

logger = get_logger(__name__)


class SecureSubprocess:
    """Secure wrapper for the few read-only commands pacnews runs."""

    ALLOWED_COMMANDS = {'pacman', 'fakeroot'}

    # Flags pacnews passes to pacman; everything else must be a path or a package name
    ALLOWED_PACMAN_FLAGS = {'-Q', '-Sl', '-Sy', '--dbpath', '--config', '--logfile'}

    # Options followed by a path argument
    PATH_OPTIONS = {'--dbpath', '--config', '--logfile'}

    _command_path_cache: Dict[str, str] = {}
    _validation_lock = threading.Lock()

    @classmethod
    def find_command_path(cls, command: str) -> Optional[str]:
        """
        Find the absolute path of an allowed command.

        Args:
            command: Command name to find

        Returns:
            Absolute path if found, None otherwise
        """
        with cls._validation_lock:
            cached = cls._command_path_cache.get(command)
            if cached and os.path.exists(cached):
                return cached

            path = shutil.which(command)
            if path:
                cls._command_path_cache[command] = path
            return path

    @classmethod
    def check_command_exists(cls, command: str) -> bool:
        """Check if a command exists and is accessible."""
        return cls.find_command_path(command) is not None

    @classmethod
    def validate_command(cls, cmd: List[str]) -> None:
        """
        Validate a command line before it is executed.

        Raises:
            PackageManagerError: If the command is not allowed
        """
        if not cmd:
            raise PackageManagerError("Empty command")

        if cmd[0] not in cls.ALLOWED_COMMANDS:
            raise PackageManagerError(f"Command not allowed: {cmd[0]}")

        expect_path = False
        for arg in cmd[1:]:
            if expect_path:
                expect_path = False
                continue
            if arg in cls.ALLOWED_COMMANDS or arg == '--':
                continue
            if arg.startswith('-'):
                if arg not in cls.ALLOWED_PACMAN_FLAGS:
                    raise PackageManagerError(f"Option not allowed: {arg}")
                expect_path = arg in cls.PATH_OPTIONS
                continue
            if not validate_package_name(arg):
                raise PackageManagerError(f"Invalid argument: {arg!r}")

    @classmethod
    def run(
        cls,
        cmd: List[str],
        timeout: Optional[int] = None,
        **kwargs: Any
    ) -> subprocess.CompletedProcess:
        """
        Run a command securely with validation.

        Args:
            cmd: Command to run as an argument list
            timeout: Timeout in seconds
            **kwargs: Additional arguments for subprocess.run

        Returns:
            CompletedProcess instance

        Raises:
            PackageManagerError: If the command is missing, not allowed or times out
        """
        cls.validate_command(cmd)

        path = cls.find_command_path(cmd[0])
        if not path:
            raise PackageManagerError(f"{cmd[0]} command not found - is this an Arch-based system?")

        # Force English locale for consistent output parsing
        env = kwargs.pop('env', None) or os.environ.copy()
        env['LC_ALL'] = 'C'

        # Never use shell=True
        kwargs.pop('shell', None)

        logger.debug(f"Running command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                [path] + cmd[1:],
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
                env=env,
                **kwargs
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out after {timeout}s: {' '.join(cmd)}")
            raise PackageManagerError(f"{cmd[0]} timed out after {timeout}s")
        except OSError as e:
            raise PackageManagerError(f"Failed to run {cmd[0]}: {e}")

        if result.returncode != 0:
            logger.debug(f"Command returned non-zero: {result.returncode}")

        return result

    @classmethod
    def run_pacman(
        cls,
        args: List[str],
        fakeroot: bool = False,
        timeout: Optional[int] = None,
        **kwargs: Any
    ) -> subprocess.CompletedProcess:
        """
        Run pacman with the given arguments.

        Args:
            args: Pacman arguments
            fakeroot: Run under fakeroot, needed to sync into a private dbpath
            timeout: Command timeout
            **kwargs: Additional arguments for subprocess.run

        Returns:
            CompletedProcess instance
        """
        cmd = ['fakeroot', '--', 'pacman'] if fakeroot else ['pacman']
        return cls.run(cmd + list(args), timeout=timeout, **kwargs)
