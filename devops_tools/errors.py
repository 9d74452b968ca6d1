"""
Exceptions raised by the provisioning core.

Only UnsupportedPlatformError is fatal to a run. The others are raised for a
single tool request and are caught by the orchestrator so the remaining tools
are still processed.
"""

from typing import Optional


class DevOpsSetupError(Exception):
    """Base class for all devops-setup errors."""


class UnsupportedPlatformError(DevOpsSetupError, EnvironmentError):
    """The host is neither Linux nor macOS."""

    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Unsupported OS type: {system or 'unknown'}. Only Linux and macOS are supported.")


class UnresolvedToolNameError(DevOpsSetupError, LookupError):
    """A requested name does not match any catalog entry."""

    def __init__(self, name: str, suggestion: Optional[str] = None):
        self.name = name
        self.suggestion = suggestion
        super().__init__(f"Package '{name}' not found.")


class InstallError(DevOpsSetupError):
    """A package manager call failed for one tool."""

    def __init__(self, tool: str, underlying):
        self.tool = tool
        self.underlying = underlying
        super().__init__(f"Package manager failed for '{tool}': {underlying}")
