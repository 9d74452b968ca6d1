# Version prober: runs each tool's own version command and trims the output.
import re
import logging
import subprocess
from typing import Callable, Dict, List, NamedTuple, Optional

from devops_tools.config import DEFAULT_PROBE_TIMEOUT

logger = logging.getLogger(__name__)

# ---------- helpers ----------

def _run(cmd: List[str], timeout: int = DEFAULT_PROBE_TIMEOUT) -> subprocess.CompletedProcess:
    """Run a command with timeout; always return a CompletedProcess (empty output on failure)."""
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Version probe %s failed: %s", " ".join(cmd), e)
        return subprocess.CompletedProcess(cmd, returncode=127, stdout="", stderr="")

def _first_line(out: str) -> str:
    """First non-empty line of the output."""
    for line in out.splitlines():
        if line.strip():
            return line.strip()
    return ""

# ---------- special parsers ----------

def _aws_version(out: str) -> str:
    """aws-cli/2.15.0 Python/3.11.6 Linux/6.5 exe/x86_64 -> first two fields."""
    return " ".join(_first_line(out).split()[:2])

def _docker_version(out: str) -> str:
    """Docker version 24.0.7, build afdd53b -> Docker version 24.0.7"""
    return _first_line(out).split(", ")[0]

def _kubectl_version(out: str) -> str:
    """Client Version: v1.28.2 -> v1.28.2"""
    return _first_line(out).replace("Client Version: ", "", 1)

def _helm_version(out: str) -> str:
    """version v3.13.1+g3547a4b -> v3.13.1+g3547a4b (older helm prints the prefix)."""
    return re.sub(r"^version ", "", _first_line(out))

def _k9s_version(out: str) -> str:
    """Token after 'Version:' in k9s' version table."""
    m = re.search(r"Version:\s*(\S+)", out)
    return m.group(1) if m else ""

def _whole_output(out: str) -> str:
    return out.strip()


class VersionRule(NamedTuple):
    args: List[str]
    parse: Callable[[str], str] = _first_line
    include_stderr: bool = True


DEFAULT_RULE = VersionRule(["--version"])

VERSION_RULES: Dict[str, VersionRule] = {
    "aws": VersionRule(["--version"], _aws_version),
    "docker": VersionRule(["--version"], _docker_version),
    # kubectl warns on stderr about --short; drop it
    "kubectl": VersionRule(["version", "--client", "--short"], _kubectl_version, include_stderr=False),
    "ansible": VersionRule(["--version"]),
    "terraform": VersionRule(["version"]),
    "minikube": VersionRule(["version", "--short"], _whole_output),
    "helm": VersionRule(["version", "--short"], _helm_version),
    "k9s": VersionRule(["version", "--short"], _k9s_version),
    "packer": VersionRule(["version"]),
    "vault": VersionRule(["version"]),
}


class VersionProber:
    """
    Reports a human readable version for a tool.

    Version display is advisory: probe() never raises and returns an empty
    string when the tool cannot be run or prints nothing useful.
    """

    def __init__(self, timeout: int = DEFAULT_PROBE_TIMEOUT, rules: Optional[Dict[str, VersionRule]] = None):
        self.timeout = timeout
        self.rules = VERSION_RULES if rules is None else rules

    def rule_for(self, tool: str) -> VersionRule:
        return self.rules.get(tool, DEFAULT_RULE)

    def probe(self, tool: str) -> str:
        rule = self.rule_for(tool)
        r = _run([tool] + list(rule.args), timeout=self.timeout)
        out = r.stdout or ""
        if rule.include_stderr and r.stderr:
            out = f"{out}\n{r.stderr}" if out.strip() else r.stderr
        try:
            return rule.parse(out).strip()
        except Exception as e:
            logger.debug("Could not parse %s version output %r: %s", tool, out, e)
            return ""
