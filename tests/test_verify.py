"""Tests for the final report."""
from dataclasses import replace

from unittest.mock import patch

from clocksetup.config import ProvisionConfig
from clocksetup.verify import DisplayState, report

TIMEDATECTL = """\
               Local time: Sun 2026-10-18 20:15:02 CST
           Universal time: Sun 2026-10-18 12:15:02 UTC
                Time zone: Asia/Shanghai (CST, +0800)
System clock synchronized: yes
              NTP service: active
"""


def outputs(**by_command):
    return lambda *argv: by_command.get(argv[0])


@patch('clocksetup.verify.command_output')
def test_report_from_timedatectl(mock_output, capsys):
    mock_output.side_effect = outputs(date="Sun Oct 18 20:15:02 CST 2026\n", timedatectl=TIMEDATECTL)

    state = report(ProvisionConfig())

    assert state == DisplayState(
        current_time="Sun Oct 18 20:15:02 CST 2026",
        timezone_details="Time zone: Asia/Shanghai (CST, +0800); NTP service: active",
    )
    assert "[INFO] System time: Sun Oct 18 20:15:02 CST 2026" in capsys.readouterr().out


@patch('clocksetup.verify.command_output')
def test_report_falls_back_to_timezone_file(mock_output, tmp_path):
    """Test the timezone file is shown when timedatectl is unavailable."""
    mock_output.side_effect = outputs(date="Sun Oct 18 20:15:02 CST 2026\n")
    timezone_file = tmp_path / "timezone"
    timezone_file.write_text("Asia/Shanghai\n")

    state = report(replace(ProvisionConfig(), timezone_file=timezone_file))

    assert state.timezone_details == "Asia/Shanghai"


@patch('clocksetup.verify.command_output', return_value=None)
def test_report_without_any_source(mock_output, tmp_path):
    """Test nothing readable still produces a report."""
    state = report(replace(ProvisionConfig(), timezone_file=tmp_path / "missing"))

    assert state == DisplayState(current_time="unknown", timezone_details="unknown")
