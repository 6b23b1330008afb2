"""System timezone configuration."""
import os

from clocksetup.config import ProvisionConfig
from clocksetup.utils import command_exists, command_output, log_action, log_info, log_warning, run_command


def set_timezone_timedatectl(config: ProvisionConfig) -> bool:
    log_action(f"timedatectl set-timezone {config.timezone}")
    return run_command("timedatectl", "set-timezone", config.timezone)


def set_timezone_symlink(config: ProvisionConfig) -> bool:
    """Point the local-time file at the zone definition and record the zone name."""
    link = config.localtime_path
    if not config.zone_file.exists():
        log_warning(f"Zone file {config.zone_file} not found, leaving {link} unchanged (is tzdata installed?).")
        return False

    log_action(f"Linking {link} -> {config.zone_file}")
    tmp = link.with_name(link.name + ".clocksetup")
    try:
        if tmp.is_symlink() or tmp.exists():
            tmp.unlink()
        tmp.symlink_to(config.zone_file)
        os.replace(tmp, link)
    except OSError as e:
        log_warning(f"Could not link {link}: {e}")
        return False

    try:
        config.timezone_file.write_text(config.timezone + "\n")
    except OSError as e:
        log_warning(f"Linked {link}, but could not write {config.timezone_file}: {e}")
    return True


def verify_timezone(config: ProvisionConfig) -> bool:
    """Check the effective zone against the expected abbreviation or offset."""
    abbreviation = (command_output("date", "+%Z") or "").strip()
    offset = (command_output("date", "+%z") or "").strip()

    if abbreviation in config.expected_abbreviations or offset == config.expected_utc_offset:
        log_info(f"Timezone set to {config.timezone} ({abbreviation or offset}).")
        return True

    log_warning(
        f"Timezone applied but reports {abbreviation or 'nothing'} ({offset or 'no offset'}), "
        f"expected one of {', '.join(config.expected_abbreviations)}."
    )
    return False


def set_timezone(config: ProvisionConfig) -> None:
    log_info(f"Setting timezone to {config.timezone}...")

    if command_exists("timedatectl"):
        applied = set_timezone_timedatectl(config)
    else:
        applied = set_timezone_symlink(config)
    if not applied:
        log_warning(f"Failed to apply timezone {config.timezone}.")

    verify_timezone(config)
