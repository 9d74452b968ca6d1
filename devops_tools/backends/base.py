import os
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from devops_tools.config import Settings
from devops_tools.errors import InstallError
from devops_tools.os_utils import Platform

logger = logging.getLogger(__name__)


class InstallerBackend(ABC):
    """
    Drives one platform's native package manager.

    Subclasses only build command lines; running them, timeouts and error
    reporting are shared here. Every failure surfaces as InstallError and is
    never retried.
    """

    platform: Platform

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    @property
    @abstractmethod
    def manager(self) -> str:
        """Executable name of the package manager (e.g. 'apt-get')."""

    @abstractmethod
    def install_commands(self, tool: str) -> List[List[str]]:
        ...

    @abstractmethod
    def update_commands(self, tool: str) -> List[List[str]]:
        ...

    @abstractmethod
    def remove_commands(self, tool: str) -> List[List[str]]:
        ...

    def command_env(self) -> Optional[Dict[str, str]]:
        return None

    def install(self, tool: str) -> None:
        self._run_commands(tool, self.install_commands(tool))

    def update(self, tool: str) -> None:
        self._run_commands(tool, self.update_commands(tool))

    def remove(self, tool: str) -> None:
        self._run_commands(tool, self.remove_commands(tool))

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        logger.info("RUN: %s", " ".join(cmd))
        env = self.command_env()
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            env=dict(os.environ, **env) if env else None,
            timeout=self.settings.command_timeout,
        )

    def _run_commands(self, tool: str, commands: List[List[str]]) -> None:
        """Run commands one after the other, stopping at the first failure."""
        for cmd in commands:
            try:
                result = self._run(cmd)
            except subprocess.TimeoutExpired:
                logger.error("Command timed out after %ss: %s", self.settings.command_timeout, " ".join(cmd))
                raise InstallError(tool, f"'{' '.join(cmd)}' timed out after {self.settings.command_timeout}s")
            except OSError as e:
                logger.error("Command execution failed: %s\nError: %s", " ".join(cmd), e)
                raise InstallError(tool, e) from e

            if result.returncode != 0:
                detail = (result.stderr or result.stdout or "").strip()
                logger.error("Command failed: %s\nError: %s", " ".join(cmd), detail)
                raise InstallError(tool, detail or f"'{' '.join(cmd)}' exited with status {result.returncode}")
