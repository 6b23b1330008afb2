"""Tests for clocksetup.utils module."""
import logging

import pytest
import sh
from unittest.mock import patch, MagicMock
from clocksetup import utils


def test_command_exists_when_command_found():
    """Test command_exists returns True when command is found."""
    with patch('shutil.which', return_value='/usr/sbin/ntpdate'):
        assert utils.command_exists('ntpdate') is True


def test_command_exists_when_command_not_found():
    """Test command_exists returns False when command not found."""
    with patch('shutil.which', return_value=None):
        assert utils.command_exists('nonexistent') is False


def test_is_root_when_root():
    """Test is_root returns True when running as root."""
    with patch('os.geteuid', return_value=0):
        assert utils.is_root() is True


def test_is_root_when_not_root():
    """Test is_root returns False when not running as root."""
    with patch('os.geteuid', return_value=1000):
        assert utils.is_root() is False


class TestCommandOutput:
    """Tests for running external commands through sh."""

    @patch('clocksetup.utils.sh.Command')
    def test_command_output_returns_stdout(self, mock_command):
        """Test stdout is returned for a successful command."""
        mock_command.return_value.return_value = "CST\n"

        assert utils.command_output("date", "+%Z") == "CST\n"
        mock_command.assert_called_once_with("date")
        mock_command.return_value.assert_called_once_with("+%Z")

    @patch('clocksetup.utils.sh.Command')
    def test_command_output_on_failure(self, mock_command):
        """Test a non-zero exit yields None."""
        mock_command.return_value.side_effect = sh.ErrorReturnCode_1("ntpdate", b"", b"no server suitable")

        assert utils.command_output("ntpdate", "-u", "ntp.aliyun.com") is None

    @patch('clocksetup.utils.sh.Command')
    def test_command_output_when_missing(self, mock_command):
        """Test a missing executable yields None."""
        mock_command.side_effect = sh.CommandNotFound("hwclock")

        assert utils.command_output("hwclock", "--systohc") is None

    @patch('clocksetup.utils.sh.Command')
    def test_run_command_success(self, mock_command):
        """Test run_command reports success."""
        mock_command.return_value.return_value = ""

        assert utils.run_command("chronyc", "-a", "makestep") is True

    @patch('clocksetup.utils.sh.Command')
    def test_run_command_failure(self, mock_command):
        """Test run_command reports failure."""
        mock_command.return_value.side_effect = sh.ErrorReturnCode_1("chronyc", b"", b"503 No such source")

        assert utils.run_command("chronyc", "-a", "makestep") is False


def test_log_info(capsys):
    """Test log_info outputs formatted message."""
    utils.log_info("Test message")
    captured = capsys.readouterr()
    assert "[INFO] Test message\n" == captured.out


def test_log_action(capsys):
    """Test log_action outputs indented message."""
    utils.log_action("Installing package")
    captured = capsys.readouterr()
    assert "  -> Installing package\n" == captured.out


def test_log_warning(capsys):
    """Test log_warning outputs formatted message."""
    utils.log_warning("Server failed")
    captured = capsys.readouterr()
    assert "[WARN] Server failed\n" == captured.out


@patch('clocksetup.utils.logging.basicConfig')
def test_setup_logging_verbose(mock_basic_config):
    """Test setup_logging enables debug output in verbose mode."""
    utils.setup_logging(verbose=True)
    assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG


@patch('clocksetup.utils.logging.basicConfig')
def test_setup_logging_normal(mock_basic_config):
    """Test setup_logging keeps only warnings in normal mode."""
    utils.setup_logging(verbose=False)
    assert mock_basic_config.call_args.kwargs["level"] == logging.WARNING
