"""Installation of the time-sync tool through the native package manager."""
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Optional, Tuple

from clocksetup.config import ProvisionConfig
from clocksetup.detect import OSClassification, OSFamily
from clocksetup.fallback import Candidate, first_success
from clocksetup.utils import command_exists, log_action, log_info, log_warning, run_command


class InstallOutcome(Enum):
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PackageBackendPlan:
    manager: str
    commands: Tuple[Tuple[str, ...], ...]


def installer_commands(manager: str, package: str) -> Tuple[Tuple[str, ...], ...]:
    """Return the command sequence that installs package with manager."""
    if manager == "apt":
        return (("apt", "update", "-y"), ("apt", "install", "-y", package))
    if manager == "apk":
        return (("apk", "add", "--no-cache", package),)
    if manager in ("dnf", "yum", "zypper"):
        return ((manager, "install", "-y", package),)
    raise ValueError(f"Unsupported package manager: {manager}")


def plan_installation(family: OSFamily, config: ProvisionConfig) -> Optional[PackageBackendPlan]:
    """Choose the first package manager present for the family.

    Presence alone decides: a later manager is never consulted once an
    earlier one is found.
    """
    managers = config.family_managers.get(family, ())
    chosen = first_success(Candidate(m, partial(command_exists, m)) for m in managers)
    if not chosen.succeeded:
        return None
    return PackageBackendPlan(chosen.winner, installer_commands(chosen.winner, config.package_name))


def install_time_tool(classification: OSClassification, config: ProvisionConfig) -> InstallOutcome:
    """Install the time-sync package, skipping when no manager is available."""
    log_info(f"Installing {config.package_name}...")

    plan = plan_installation(classification.family, config)
    if plan is None:
        log_warning(f"No package manager available, skipping {config.package_name} installation.")
        return InstallOutcome.SKIPPED

    for argv in plan.commands:
        log_action(" ".join(argv))
        if not run_command(*argv):
            log_warning(f"{plan.manager} failed to install {config.package_name}, continuing with existing tools.")
            return InstallOutcome.FAILED

    log_info(f"{config.package_name} installed with {plan.manager}.")
    return InstallOutcome.INSTALLED
