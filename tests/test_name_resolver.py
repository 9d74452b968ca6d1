import pytest

from devops_tools.errors import UnresolvedToolNameError
from devops_tools.os_utils import Platform
from devops_tools.utils.name_resolver import (
    levenshtein_distance,
    resolve,
    resolve_or_raise,
    resolve_package_name,
    suggest,
)

#  Test levenshtein_distance on known pairs
@pytest.mark.parametrize("a, b, expected", [
    ("kitten", "sitting", 3),
    ("flaw", "lawn", 2),
    ("", "abc", 3),
    ("abc", "", 3),
    ("dcoker", "docker", 2),
    ("Docker", "docker", 1),
    ("helm", "helm", 0),
])
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected

#  Test distance is symmetric and zero on identical strings
@pytest.mark.parametrize("a, b", [
    ("terraform", "terafrom"),
    ("k9s", "kubectl"),
    ("session-manager-plugin", "ssm"),
    ("", "x"),
])
def test_levenshtein_distance_symmetric(a, b):
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)
    assert levenshtein_distance(a, a) == 0

#  Test resolve exact and case-insensitive
def test_resolve_exact_match():
    assert resolve("docker") == "docker"

def test_resolve_case_insensitive():
    assert resolve("Docker") == "docker"
    assert resolve("K9S") == "k9s"
    assert resolve("Session-Manager-Plugin") == "session-manager-plugin"

def test_resolve_unknown_returns_none():
    assert resolve("dcoker") is None
    assert resolve("") is None

def test_resolve_prefers_exact_over_case_insensitive():
    assert resolve("Tool", catalog=["tool", "Tool"]) == "Tool"

#  Test suggest
def test_suggest_close_typo():
    assert suggest("dcoker") == "docker"
    assert suggest("kubctl") == "kubectl"

def test_suggest_nothing_close():
    assert suggest("xyz123!!") is None

def test_suggest_threshold_is_inclusive():
    assert suggest("dockerxyz") == "docker"
    assert suggest("dockerwxyz") is None

def test_suggest_is_case_sensitive():
    # nine substitutions away; case is not normalized when suggesting
    assert suggest("TERRAFORM") is None

def test_suggest_first_seen_wins_ties():
    assert suggest("ab", catalog=["abc", "abd"]) == "abc"
    assert suggest("ab", catalog=["abd", "abc"]) == "abd"

def test_suggest_empty_catalog():
    assert suggest("docker", catalog=[]) is None

#  Test resolve_or_raise
def test_resolve_or_raise_returns_canonical_name():
    assert resolve_or_raise("TERRAFORM") == "terraform"

def test_resolve_or_raise_carries_suggestion():
    with pytest.raises(UnresolvedToolNameError) as excinfo:
        resolve_or_raise("dcoker")
    assert excinfo.value.name == "dcoker"
    assert excinfo.value.suggestion == "docker"

def test_resolve_or_raise_without_suggestion():
    with pytest.raises(UnresolvedToolNameError) as excinfo:
        resolve_or_raise("xyz123!!")
    assert excinfo.value.suggestion is None

#  Test package name mapping per platform and manager
def test_resolve_package_name_linux_defaults_to_apt():
    assert resolve_package_name("aws", Platform.LINUX) == "awscli"
    assert resolve_package_name("docker", Platform.LINUX) == "docker.io"
    assert resolve_package_name("git", Platform.LINUX) == "git"

def test_resolve_package_name_other_linux_managers():
    assert resolve_package_name("python3", Platform.LINUX, "pacman") == "python"
    assert resolve_package_name("aws", Platform.LINUX, "apk") == "aws-cli"

def test_resolve_package_name_macos():
    assert resolve_package_name("kubectl", Platform.MACOS) == "kubernetes-cli"
    assert resolve_package_name("terraform", Platform.MACOS) == "hashicorp/tap/terraform"
    assert resolve_package_name("node", Platform.MACOS) == "node"
