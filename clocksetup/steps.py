"""Clock provisioning workflow steps."""
import platform

from clocksetup.config import ProvisionConfig
from clocksetup.detect import detect_os
from clocksetup.packages import install_time_tool
from clocksetup.sync import SyncStatus, TimeSyncUnavailableError, synchronize
from clocksetup.timezone import set_timezone
from clocksetup.verify import DisplayState, report


def provision_system(config: ProvisionConfig) -> DisplayState:
    """Main provisioning workflow, each phase runs to completion before the next."""
    current_platform = platform.system()

    if current_platform != 'Linux':
        raise NotImplementedError(f"Platform {current_platform} is not supported")

    # Phase 1: Detect distribution and install ntpdate
    classification = detect_os()
    install_time_tool(classification, config)

    # Phase 2: Timezone
    set_timezone(config)

    # Phase 3: Time sync and hardware clock
    outcome = synchronize(config.ntp_servers, config)
    if outcome.status is SyncStatus.NO_TOOL_AVAILABLE:
        raise TimeSyncUnavailableError("No time synchronization tool available (install ntpdate or chrony)")

    # Phase 4: Verification
    return report(config)
