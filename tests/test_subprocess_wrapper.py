"""
Tests for the SecureSubprocess wrapper.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from pacnews.exceptions import PackageManagerError
from pacnews.utils.subprocess_wrapper import SecureSubprocess


@pytest.fixture(autouse=True)
def fake_command_path():
    """Pretend every command is installed in /usr/bin."""
    with patch.object(SecureSubprocess, 'find_command_path', side_effect=lambda cmd: f"/usr/bin/{cmd}"):
        yield


class TestValidateCommand:
    """Test command validation."""

    def test_allowed_pacman_query(self):
        """Read-only pacman queries pass."""
        SecureSubprocess.validate_command(['pacman', '-Q', '--dbpath', '/tmp/pacnews-db-x/'])

    def test_fakeroot_sync(self):
        """Test the fakeroot sync command line."""
        SecureSubprocess.validate_command(
            ['fakeroot', '--', 'pacman', '-Sy', '--dbpath', '/tmp/db', '--logfile', '/dev/null'])

    @pytest.mark.parametrize("cmd", [
        [],
        ['rm', '-rf', '/'],
        ['pacman', '-Rns', 'linux'],
        ['pacman', '-Q', 'linux;reboot'],
    ])
    def test_rejected(self, cmd):
        """Disallowed commands, options and arguments raise."""
        with pytest.raises(PackageManagerError):
            SecureSubprocess.validate_command(cmd)


class TestRun:
    """Test running commands."""

    @patch('pacnews.utils.subprocess_wrapper.subprocess.run')
    def test_run_uses_resolved_path_and_c_locale(self, mock_run):
        """Commands run by absolute path with LC_ALL=C."""
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")
        SecureSubprocess.run_pacman(['-Q'], timeout=5)

        cmd = mock_run.call_args[0][0]
        kwargs = mock_run.call_args[1]
        assert cmd == ['/usr/bin/pacman', '-Q']
        assert kwargs['env']['LC_ALL'] == 'C'
        assert kwargs['timeout'] == 5
        assert 'shell' not in kwargs

    @patch('pacnews.utils.subprocess_wrapper.subprocess.run')
    def test_run_pacman_with_fakeroot(self, mock_run):
        """fakeroot wraps the pacman invocation."""
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")
        SecureSubprocess.run_pacman(['-Sy', '--dbpath', '/tmp/db'], fakeroot=True)
        assert mock_run.call_args[0][0] == ['/usr/bin/fakeroot', '--', 'pacman', '-Sy', '--dbpath', '/tmp/db']

    @patch('pacnews.utils.subprocess_wrapper.subprocess.run')
    def test_timeout_becomes_package_manager_error(self, mock_run):
        """A timeout is reported as a PackageManagerError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd='pacman', timeout=1)
        with pytest.raises(PackageManagerError, match="timed out"):
            SecureSubprocess.run_pacman(['-Q'], timeout=1)

    def test_missing_command(self):
        """A command that is not installed raises."""
        with patch.object(SecureSubprocess, 'find_command_path', return_value=None):
            with pytest.raises(PackageManagerError, match="not found"):
                SecureSubprocess.run(['pacman', '-Q'])
