"""Utility functions for the clock provisioning tool."""
import logging
import os
import shutil
from typing import Optional

import sh

logger = logging.getLogger(__name__)


def command_exists(command: str) -> bool:
    """Check if a command exists in the system PATH."""
    return shutil.which(command) is not None


def is_root() -> bool:
    """Check if the script is running as root."""
    return os.geteuid() == 0


def run_command(*argv: str) -> bool:
    """Run an external command, returning True when it exits zero."""
    return command_output(*argv) is not None


def command_output(*argv: str) -> Optional[str]:
    """Run an external command and return its stdout, or None on failure."""
    logger.debug("CMD %s", " ".join(argv))
    try:
        output = str(sh.Command(argv[0])(*argv[1:]))
    except sh.CommandNotFound:
        logger.debug("Command not found: %s", argv[0])
        return None
    except sh.ErrorReturnCode as e:
        stderr = (e.stderr or b"").decode(errors="replace").strip()
        logger.debug("Command failed (%s): %s", getattr(e, "exit_code", "?"), stderr)
        return None
    return output


def log_info(message: str) -> None:
    """Log an informational message."""
    print(f"[INFO] {message}")


def log_action(message: str) -> None:
    """Log an action being performed."""
    print(f"  -> {message}")


def log_warning(message: str) -> None:
    """Log a non-fatal problem."""
    print(f"[WARN] {message}")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
