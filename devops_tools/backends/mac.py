"""
Mac installer backend

Installs, upgrades and removes tools with Homebrew. Homebrew itself is not
bootstrapped; every call fails with InstallError when `brew` is missing.
"""

import logging
from typing import List

from devops_tools.backends.base import InstallerBackend
from devops_tools.errors import InstallError
from devops_tools.os_utils import Platform, has_command
from devops_tools.utils.name_resolver import resolve_package_name

logger = logging.getLogger(__name__)

HOMEBREW_MISSING = (
    "Homebrew not found. Please install Homebrew first: "
    "/bin/bash -c \"$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)\""
)


class MacOSBackend(InstallerBackend):

    platform = Platform.MACOS

    @property
    def manager(self) -> str:
        return "brew"

    def _ensure_homebrew(self, tool: str) -> None:
        if not has_command("brew"):
            raise InstallError(tool, HOMEBREW_MISSING)

    def _brew(self, tool: str, subcommand: str) -> List[List[str]]:
        self._ensure_homebrew(tool)
        return [["brew", subcommand, resolve_package_name(tool, self.platform, "brew")]]

    def install_commands(self, tool: str) -> List[List[str]]:
        return self._brew(tool, "install")

    def update_commands(self, tool: str) -> List[List[str]]:
        return self._brew(tool, "upgrade")

    def remove_commands(self, tool: str) -> List[List[str]]:
        return self._brew(tool, "uninstall")
