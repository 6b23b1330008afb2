"""Clock synchronization with tiered fallback and hardware clock write-back."""
import time
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Iterable, Optional, Tuple

from clocksetup.config import ProvisionConfig
from clocksetup.fallback import Attempt, Candidate, first_success
from clocksetup.utils import command_exists, command_output, log_action, log_info, log_warning, run_command


class TimeSyncUnavailableError(RuntimeError):
    """No time synchronization mechanism exists on the host."""


class SyncStatus(Enum):
    SUCCESS = "success"
    EXHAUSTED_FALLBACK = "exhausted-fallback"
    NO_TOOL_AVAILABLE = "no-tool-available"


@dataclass(frozen=True)
class SyncOutcome:
    status: SyncStatus
    tool: Optional[str] = None
    host: Optional[str] = None
    attempts: Tuple[Attempt, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is SyncStatus.SUCCESS


def ntpdate_sync(host: str, config: ProvisionConfig) -> bool:
    log_action(f"Trying {host}")
    return run_command("ntpdate", *config.ntpdate_args, host)


def timesyncd_sync(config: ProvisionConfig) -> bool:
    """Enable systemd time sync and report its synchronized flag after settling."""
    log_action("timedatectl set-ntp true")
    if not run_command("timedatectl", "set-ntp", "true"):
        return False
    time.sleep(config.settle_seconds)
    synchronized = (command_output("timedatectl", "show", "-p", "NTPSynchronized", "--value") or "").strip()
    if synchronized == "yes":
        log_info("systemd-timesyncd reports the clock as synchronized.")
    else:
        log_warning(f"NTP enabled, clock not synchronized yet (NTPSynchronized={synchronized or 'unknown'}).")
    return True


def chrony_sync(config: ProvisionConfig) -> bool:
    log_action("chronyc -a makestep")
    return run_command("chronyc", "-a", "makestep")


SECONDARY_TOOLS = (
    ("timedatectl", timesyncd_sync),
    ("chronyc", chrony_sync),
)

HARDWARE_CLOCK_TOOLS = (
    ("hwclock", ("hwclock", "--systohc")),
    ("clock", ("clock", "-w")),
)


def persist_hardware_clock() -> bool:
    """Write system time to the hardware clock, if a tool for it exists."""
    log_info("Writing system time to the hardware clock...")
    present = first_success(Candidate(name, partial(command_exists, name)) for name, _ in HARDWARE_CLOCK_TOOLS)
    if not present.succeeded:
        log_info("No hardware clock tool found, skipping (normal on some virtual machines).")
        return False

    argv = dict(HARDWARE_CLOCK_TOOLS)[present.winner]
    log_action(" ".join(argv))
    if not run_command(*argv):
        log_warning(f"{present.winner} failed to write the hardware clock.")
        return False
    log_info("Hardware clock updated.")
    return True


def _sync_primary(sources: Iterable[str], config: ProvisionConfig) -> SyncOutcome:
    hosts = tuple(sources)

    def report_failure(candidate: Candidate) -> None:
        if candidate.name == hosts[-1]:
            log_warning(f"{candidate.name} failed, no NTP servers left.")
        else:
            log_warning(f"{candidate.name} failed, trying the next server...")

    result = first_success(
        (Candidate(host, partial(ntpdate_sync, host, config)) for host in hosts),
        on_failure=report_failure,
    )
    attempts = tuple(result.attempts)
    if result.succeeded:
        log_info(f"Time synchronized from {result.winner}.")
        return SyncOutcome(SyncStatus.SUCCESS, tool="ntpdate", host=result.winner, attempts=attempts)
    return SyncOutcome(SyncStatus.EXHAUSTED_FALLBACK, tool="ntpdate", attempts=attempts)


def _sync_secondary(config: ProvisionConfig) -> Optional[SyncOutcome]:
    """Use the OS time service; None when no such service exists."""
    available = [(name, action) for name, action in SECONDARY_TOOLS if command_exists(name)]
    if not available:
        return None
    result = first_success(
        (Candidate(name, partial(action, config)) for name, action in available),
        on_failure=lambda c: log_warning(f"{c.name} could not synchronize the clock."),
    )
    if result.succeeded:
        return SyncOutcome(SyncStatus.SUCCESS, tool=result.winner)
    return SyncOutcome(SyncStatus.EXHAUSTED_FALLBACK)


def synchronize(sources: Iterable[str], config: ProvisionConfig) -> SyncOutcome:
    """Synchronize the clock, preferring ntpdate against sources in order.

    Falls back to the OS time service when ntpdate is missing or every source
    fails. The hardware clock is written unless no mechanism was available.
    """
    log_info("Synchronizing time...")
    primary = None
    if command_exists("ntpdate"):
        primary = _sync_primary(sources, config)
        if primary.succeeded:
            persist_hardware_clock()
            return primary
        log_warning("All NTP servers failed, falling back to the system time service.")
    else:
        log_warning("ntpdate not available, falling back to the system time service.")

    secondary = _sync_secondary(config)
    if secondary is None:
        if primary is None:
            log_warning("No time synchronization tool available, install ntpdate or chrony.")
            return SyncOutcome(SyncStatus.NO_TOOL_AVAILABLE)
        outcome = primary
    elif primary is not None:
        outcome = SyncOutcome(secondary.status, tool=secondary.tool, attempts=primary.attempts)
    else:
        outcome = secondary

    if not outcome.succeeded:
        log_warning("Time synchronization did not succeed with any available tool.")
    persist_hardware_clock()
    return outcome
