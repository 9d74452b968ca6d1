import os
import enum
import shutil
import logging
import platform
from typing import Optional

import distro  # requires 'distro' package on Linux

from devops_tools.errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class Platform(str, enum.Enum):
    LINUX = "linux"
    MACOS = "macos"


# Probe order matters: the first manager found on PATH wins
LINUX_PACKAGE_MANAGERS = ("apt-get", "dnf", "pacman", "apk")


def detect_platform(system: Optional[str] = None) -> Platform:
    """
    Detect the host operating system.

    Args:
        system: Raw OS identifier as returned by ``platform.system()``.
            Read from the running interpreter when omitted.

    Returns:
        Platform.LINUX or Platform.MACOS

    Raises:
        UnsupportedPlatformError: for anything else (Windows, BSD, ...)
    """
    raw = platform.system() if system is None else system
    os_type = (raw or "").lower()
    if os_type.startswith("linux"):
        return Platform.LINUX
    elif os_type.startswith("darwin"):
        return Platform.MACOS
    raise UnsupportedPlatformError(raw)


def has_command(cmd: str) -> bool:
    """
    Checks if a command is available on the system.
    Args:
        cmd (str): Command name (e.g., 'brew', 'apt-get')
    Returns:
        bool: True if available, False otherwise
    """
    return shutil.which(cmd) is not None


def is_tool_installed(tool: str) -> bool:
    """
    Check if the given tool/command is available in the system PATH.
    """
    return shutil.which(tool) is not None  # True if executable found


def get_linux_distro() -> str:
    """
    Detect the specific Linux distribution using `distro` library.
    Returns simplified names like 'ubuntu', 'fedora', etc.
    """
    id_like = " ".join([distro.id(), distro.like()]).lower()
    if "ubuntu" in id_like or "debian" in id_like:
        return "ubuntu"
    elif "fedora" in id_like or "rhel" in id_like or "centos" in id_like:
        return "fedora"
    elif "arch" in id_like:
        return "arch"
    elif "alpine" in id_like:
        return "alpine"
    else:
        return distro.id().lower() or "unknown"


def get_available_package_manager(os_type: Platform) -> Optional[str]:
    """
    Detect the native package manager for the platform.
    Returns one of: 'apt-get', 'dnf', 'pacman', 'apk', 'brew', or None.
    """
    if os_type == Platform.LINUX:
        for manager in LINUX_PACKAGE_MANAGERS:
            if has_command(manager):
                return manager
        logger.warning("No supported package manager found on %s", get_linux_distro())
        return None
    return "brew" if has_command("brew") else None


def is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def is_sudo_available() -> bool:
    """
    Check if the system supports sudo (non-interactive).
    """
    return shutil.which("sudo") is not None  # sudo present on PATH
