"""
Package catalog

Every tool devops-setup knows about, grouped into the modules that can be
targeted with a single CLI flag. Modules partition the catalog: a tool belongs
to exactly one of them.
"""

from typing import Iterable, List, NamedTuple, Optional, Tuple


class Module(NamedTuple):
    name: str
    title: str
    tools: Tuple[str, ...]


ESSENTIALS = Module(
    "essentials",
    "DevOps Essentials",
    ("git", "python3", "docker", "aws", "terraform", "ansible", "session-manager-plugin", "kubectl"),
)

INFRASTRUCTURE = Module(
    "infrastructure",
    "Infrastructure Tools",
    ("packer", "vault", "minikube", "helm", "k9s"),
)

ADDITIONAL = Module(
    "additional",
    "Additional Tools",
    ("trivy", "checkov", "node"),
)

MODULES: Tuple[Module, ...] = (ESSENTIALS, INFRASTRUCTURE, ADDITIONAL)

MODULE_NAMES: Tuple[str, ...] = tuple(module.name for module in MODULES)

# List of all available packages across all modules
ALL_PACKAGES: Tuple[str, ...] = tuple(tool for module in MODULES for tool in module.tools)


def get_module(name: str) -> Optional[Module]:
    """Look up a module by name (case-insensitive)."""
    wanted = (name or "").strip().lower()
    for module in MODULES:
        if module.name == wanted:
            return module
    return None


def module_of(tool: str) -> Optional[Module]:
    """Return the module a catalog tool belongs to."""
    for module in MODULES:
        if tool in module.tools:
            return module
    return None


def expand_modules(names: Iterable[str]) -> List[str]:
    """
    Expand module names into their tools, in declared order.

    Raises:
        KeyError: if a name is not a known module
    """
    tools: List[str] = []
    for name in names:
        module = get_module(name)
        if module is None:
            raise KeyError(f"Unknown module: {name}")
        tools.extend(module.tools)
    return tools
