from typing import Optional

from devops_tools.config import Settings
from devops_tools.os_utils import Platform

from .base import InstallerBackend
from .linux import LinuxBackend
from .mac import MacOSBackend

# Map platforms to backend classes
BACKENDS = {
    Platform.LINUX: LinuxBackend,
    Platform.MACOS: MacOSBackend,
}


def get_backend(os_type: Platform, settings: Optional[Settings] = None) -> InstallerBackend:
    """Select the installer backend for the detected platform."""
    return BACKENDS[Platform(os_type)](settings)


__all__ = [
    'BACKENDS',
    'InstallerBackend',
    'LinuxBackend',
    'MacOSBackend',
    'get_backend',
]
