"""Fixed provisioning settings, built once and passed to every step."""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Tuple

from clocksetup.detect import OSFamily

NTP_SERVERS = (
    "ntp.aliyun.com",
    "ntp1.aliyun.com",
    "time.ntsc.ac.cn",
    "time.tsinghua.edu.cn",
    "time.pku.edu.cn",
)

# Package managers per family, in the order they are looked for.
FAMILY_MANAGERS = {
    OSFamily.DEBIAN: ("apt",),
    OSFamily.REDHAT: ("dnf", "yum"),
    OSFamily.ALPINE: ("apk",),
    OSFamily.SUSE: ("zypper",),
    OSFamily.UNKNOWN: ("apt", "dnf", "yum", "apk", "zypper"),
}


@dataclass(frozen=True)
class ProvisionConfig:
    timezone: str = "Asia/Shanghai"
    expected_abbreviations: Tuple[str, ...] = ("CST", "CST-8")
    expected_utc_offset: str = "+0800"
    ntp_servers: Tuple[str, ...] = NTP_SERVERS
    ntpdate_args: Tuple[str, ...] = ("-u",)
    package_name: str = "ntpdate"
    family_managers: Mapping[OSFamily, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(FAMILY_MANAGERS))
    )
    settle_seconds: float = 5
    zoneinfo_dir: Path = Path("/usr/share/zoneinfo")
    localtime_path: Path = Path("/etc/localtime")
    timezone_file: Path = Path("/etc/timezone")

    @property
    def zone_file(self) -> Path:
        """The zoneinfo definition file for the target timezone."""
        return self.zoneinfo_dir / self.timezone
