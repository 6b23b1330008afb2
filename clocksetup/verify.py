"""Final time and timezone report."""
import re
from dataclasses import dataclass

from clocksetup.config import ProvisionConfig
from clocksetup.utils import command_output, log_info

_TIMEDATECTL_LINE = re.compile(r"Time zone|NTP")


@dataclass(frozen=True)
class DisplayState:
    current_time: str
    timezone_details: str


def read_timezone_details(config: ProvisionConfig) -> str:
    status = command_output("timedatectl")
    if status:
        lines = [line.strip() for line in status.splitlines() if _TIMEDATECTL_LINE.search(line)]
        if lines:
            return "; ".join(lines)
    try:
        return config.timezone_file.read_text().strip() or "unknown"
    except OSError:
        return "unknown"


def report(config: ProvisionConfig) -> DisplayState:
    state = DisplayState(
        current_time=(command_output("date") or "unknown").strip(),
        timezone_details=read_timezone_details(config),
    )
    log_info("===== Result =====")
    log_info(f"System time: {state.current_time}")
    log_info(f"Timezone: {state.timezone_details}")
    return state
