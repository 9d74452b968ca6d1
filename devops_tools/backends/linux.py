import logging
from typing import Dict, List, Optional

from devops_tools.backends.base import InstallerBackend
from devops_tools.config import Settings
from devops_tools.errors import InstallError
from devops_tools.os_utils import (
    LINUX_PACKAGE_MANAGERS,
    Platform,
    get_available_package_manager,
    is_root,
    is_sudo_available,
)
from devops_tools.utils.name_resolver import resolve_package_name

logger = logging.getLogger(__name__)

# Per-manager command templates; "{pkg}" is replaced with the package name
COMMANDS: Dict[str, Dict[str, Optional[List[str]]]] = {
    "apt-get": {
        "refresh": ["apt-get", "update", "-qq"],
        "install": ["apt-get", "install", "-y", "{pkg}"],
        "update": ["apt-get", "install", "--only-upgrade", "-y", "{pkg}"],
        "remove": ["apt-get", "remove", "-y", "{pkg}"],
    },
    "dnf": {
        "refresh": None,
        "install": ["dnf", "install", "-y", "{pkg}"],
        "update": ["dnf", "upgrade", "-y", "{pkg}"],
        "remove": ["dnf", "remove", "-y", "{pkg}"],
    },
    "pacman": {
        "refresh": ["pacman", "-Sy"],
        "install": ["pacman", "-S", "--noconfirm", "--needed", "{pkg}"],
        "update": ["pacman", "-S", "--noconfirm", "{pkg}"],
        "remove": ["pacman", "-R", "--noconfirm", "{pkg}"],
    },
    "apk": {
        "refresh": ["apk", "update"],
        "install": ["apk", "add", "{pkg}"],
        "update": ["apk", "add", "--upgrade", "{pkg}"],
        "remove": ["apk", "del", "{pkg}"],
    },
}


class LinuxBackend(InstallerBackend):
    """apt-get, dnf, pacman or apk, whichever the host has (apt-get first)."""

    platform = Platform.LINUX

    def __init__(self, settings: Optional[Settings] = None, manager: Optional[str] = None):
        super().__init__(settings)
        self._manager = manager or self.settings.package_manager or get_available_package_manager(Platform.LINUX)
        if self._manager is not None and self._manager not in COMMANDS:
            logger.warning("Unsupported package manager '%s'; expected one of %s",
                           self._manager, ", ".join(LINUX_PACKAGE_MANAGERS))
        # The package index is refreshed at most once per run; a failed refresh is not retried
        self._index_refreshed = False
        self._refresh_error: Optional[str] = None

    @property
    def manager(self) -> Optional[str]:
        return self._manager

    def _templates(self, tool: str) -> Dict[str, Optional[List[str]]]:
        templates = COMMANDS.get(self._manager or "")
        if templates is None:
            raise InstallError(tool, "No supported package manager found (need apt-get, dnf, pacman or apk).")
        return templates

    def _sudoify(self, cmd: List[str]) -> List[str]:
        if self.settings.use_sudo and not is_root() and is_sudo_available():
            return ["sudo"] + cmd
        return cmd

    def _build(self, tool: str, action: str) -> List[List[str]]:
        template = self._templates(tool)[action]
        pkg = resolve_package_name(tool, self.platform, self._manager)
        return [self._sudoify([part.replace("{pkg}", pkg) for part in template])]

    def command_env(self) -> Optional[Dict[str, str]]:
        if self._manager == "apt-get":
            return {"DEBIAN_FRONTEND": "noninteractive"}
        return None

    def refresh_index(self, tool: str) -> None:
        if self._refresh_error is not None:
            raise InstallError(tool, f"package index refresh failed earlier: {self._refresh_error}")
        if self._index_refreshed:
            return
        refresh = self._templates(tool)["refresh"]
        if refresh:
            try:
                self._run_commands(tool, [self._sudoify(list(refresh))])
            except InstallError as e:
                self._refresh_error = str(e.underlying)
                raise
        self._index_refreshed = True

    def install_commands(self, tool: str) -> List[List[str]]:
        return self._build(tool, "install")

    def update_commands(self, tool: str) -> List[List[str]]:
        return self._build(tool, "update")

    def remove_commands(self, tool: str) -> List[List[str]]:
        return self._build(tool, "remove")

    def install(self, tool: str) -> None:
        self.refresh_index(tool)
        super().install(tool)

    def update(self, tool: str) -> None:
        self.refresh_index(tool)
        super().update(tool)
