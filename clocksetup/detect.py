"""Linux distribution detection."""
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from clocksetup.utils import log_info, log_warning


class OSFamily(Enum):
    DEBIAN = "debian"
    REDHAT = "redhat"
    ALPINE = "alpine"
    SUSE = "suse"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class OSClassification:
    family: OSFamily
    version_id: str = ""


OS_RELEASE = "etc/os-release"

# Legacy distribution marker files, checked in order after os-release.
MARKER_FILES = (
    ("etc/redhat-release", OSFamily.REDHAT),
    ("etc/debian_version", OSFamily.DEBIAN),
    ("etc/alpine-release", OSFamily.ALPINE),
    ("etc/SuSE-release", OSFamily.SUSE),
)

_ID_FAMILIES = {
    "ubuntu": OSFamily.DEBIAN,
    "debian": OSFamily.DEBIAN,
    "linuxmint": OSFamily.DEBIAN,
    "centos": OSFamily.REDHAT,
    "rhel": OSFamily.REDHAT,
    "fedora": OSFamily.REDHAT,
    "rocky": OSFamily.REDHAT,
    "alpine": OSFamily.ALPINE,
    "opensuse": OSFamily.SUSE,
    "sles": OSFamily.SUSE,
    "suse": OSFamily.SUSE,
}


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release KEY=VALUE lines, honoring shell quoting."""
    values = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            continue
        values[key.strip()] = parts[0] if parts else ""
    return values


def family_for_id(os_id: str) -> OSFamily:
    """Map an os-release ID to its family."""
    os_id = os_id.lower()
    if os_id.startswith("opensuse"):
        return OSFamily.SUSE
    return _ID_FAMILIES.get(os_id, OSFamily.UNKNOWN)


def classify_os_release(values: Dict[str, str]) -> OSClassification:
    family = family_for_id(values.get("ID", ""))
    if family is OSFamily.UNKNOWN:
        for like in values.get("ID_LIKE", "").split():
            family = family_for_id(like)
            if family is not OSFamily.UNKNOWN:
                break
    return OSClassification(family, values.get("VERSION_ID", ""))


def _read(path: Path) -> Optional[str]:
    try:
        return path.read_text(errors="replace")
    except OSError:
        return None


def detect_os(root: Union[str, Path] = "/") -> OSClassification:
    """Classify the host OS family from its release descriptors.

    Returns an UNKNOWN classification when no descriptor is found.
    """
    root = Path(root)

    text = _read(root / OS_RELEASE)
    if text is not None:
        values = parse_os_release(text)
        classification = classify_os_release(values)
        log_info(f"Detected system: {values.get('ID', 'unknown')} ({classification.family.value})")
        return classification

    for marker, family in MARKER_FILES:
        if (root / marker).exists():
            log_info(f"Detected system: {family.value} (from /{marker})")
            return OSClassification(family)

    log_warning("Unable to identify the distribution, using generic mode.")
    return OSClassification(OSFamily.UNKNOWN)
