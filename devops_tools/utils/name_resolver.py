from typing import Iterable, Optional, Sequence

from devops_tools.catalog import ALL_PACKAGES
from devops_tools.errors import UnresolvedToolNameError
from devops_tools.os_utils import Platform

# Suggestions further away than this are not worth showing
MAX_SUGGESTION_DISTANCE = 3


def levenshtein_distance(source: str, target: str) -> int:
    """
    Minimum number of single-character insertions, deletions or substitutions
    needed to turn ``source`` into ``target``. Case sensitive.
    """
    if source == target:
        return 0
    if not source:
        return len(target)
    if not target:
        return len(source)

    # Only the previous row of the DP table is needed
    previous = list(range(len(target) + 1))
    for i, s_char in enumerate(source, start=1):
        current = [i]
        for j, t_char in enumerate(target, start=1):
            cost = 0 if s_char == t_char else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def resolve(raw_name: str, catalog: Sequence[str] = ALL_PACKAGES) -> Optional[str]:
    """
    Map operator input to a canonical catalog entry.

    Tries an exact match first, then a case-insensitive one.
    Returns None when neither matches.
    """
    if not raw_name:
        return None
    for pkg in catalog:
        if pkg == raw_name:
            return pkg
    lowered = raw_name.lower()
    for pkg in catalog:
        if pkg.lower() == lowered:
            return pkg
    return None


def suggest(raw_name: str, catalog: Iterable[str] = ALL_PACKAGES,
            max_distance: int = MAX_SUGGESTION_DISTANCE) -> Optional[str]:
    """
    Propose the catalog entry closest to ``raw_name`` by edit distance.

    The first entry wins on ties. Returns None when the closest entry is more
    than ``max_distance`` edits away.
    """
    closest = None
    min_distance = None
    for pkg in catalog:
        distance = levenshtein_distance(raw_name or "", pkg)
        if min_distance is None or distance < min_distance:
            min_distance = distance
            closest = pkg
    if closest is not None and min_distance <= max_distance:
        return closest
    return None


def resolve_or_raise(raw_name: str, catalog: Sequence[str] = ALL_PACKAGES) -> str:
    """
    Like resolve(), but raise UnresolvedToolNameError carrying the best
    suggestion (or None) when the name is unknown.
    """
    resolved = resolve(raw_name, catalog)
    if resolved is None:
        raise UnresolvedToolNameError(raw_name, suggest(raw_name, catalog))
    return resolved


# Catalog command name -> native package name, where they differ
apt_name_map = {
    "aws": "awscli",
    "docker": "docker.io",
    "node": "nodejs",
}

dnf_name_map = {
    "aws": "awscli",
    "docker": "moby-engine",
    "node": "nodejs",
}

pacman_name_map = {
    "aws": "aws-cli",
    "python3": "python",
    "node": "nodejs",
}

apk_name_map = {
    "aws": "aws-cli",
    "node": "nodejs",
}

brew_name_map = {
    "aws": "awscli",
    "kubectl": "kubernetes-cli",
    "terraform": "hashicorp/tap/terraform",
    "packer": "hashicorp/tap/packer",
    "vault": "hashicorp/tap/vault",
    "k9s": "derailed/k9s/k9s",
}

_MANAGER_MAPS = {
    "apt-get": apt_name_map,
    "dnf": dnf_name_map,
    "pacman": pacman_name_map,
    "apk": apk_name_map,
    "brew": brew_name_map,
}


def resolve_package_name(tool: str, os_type: Platform, manager: Optional[str] = None) -> str:
    """
    Translate a catalog command name into the package name the native
    package manager expects (e.g. 'aws' -> 'awscli' on apt).

    Unknown tools and managers pass through unchanged.
    """
    if manager is None:
        manager = "brew" if os_type == Platform.MACOS else "apt-get"
    return _MANAGER_MAPS.get(manager, {}).get(tool, tool)
