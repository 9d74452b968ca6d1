import subprocess
from unittest.mock import patch

import pytest

from devops_tools.version_checker import DEFAULT_RULE, VersionProber, VersionRule


def _completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def prober():
    return VersionProber(timeout=5)

#  Test each bespoke rule parses its tool's output
@pytest.mark.parametrize("tool, expected_cmd, stdout, expected", [
    ("aws", ["aws", "--version"],
     "aws-cli/2.15.0 Python/3.11.6 Linux/6.5.0-14-generic exe/x86_64.ubuntu.22\n", "aws-cli/2.15.0 Python/3.11.6"),
    ("docker", ["docker", "--version"], "Docker version 24.0.7, build afdd53b\n", "Docker version 24.0.7"),
    ("terraform", ["terraform", "version"], "Terraform v1.6.2\non linux_amd64\n", "Terraform v1.6.2"),
    ("ansible", ["ansible", "--version"], "ansible [core 2.15.6]\n  config file = None\n", "ansible [core 2.15.6]"),
    ("minikube", ["minikube", "version", "--short"], "v1.32.0\n", "v1.32.0"),
    ("helm", ["helm", "version", "--short"], "version v3.2.0+ge11b7ce\n", "v3.2.0+ge11b7ce"),
    ("k9s", ["k9s", "version", "--short"], "Version:    v0.27.4\nCommit:     f4543e8\n", "v0.27.4"),
    ("vault", ["vault", "version"], "Vault v1.15.2 (cf1b5cafa047bc8e4a3f93444fcb4011593b92cb)\n",
     "Vault v1.15.2 (cf1b5cafa047bc8e4a3f93444fcb4011593b92cb)"),
    ("git", ["git", "--version"], "git version 2.43.0\n", "git version 2.43.0"),
])
def test_probe_rules(prober, tool, expected_cmd, stdout, expected):
    with patch("subprocess.run", return_value=_completed(stdout=stdout)) as mock_run:
        assert prober.probe(tool) == expected
    mock_run.assert_called_once_with(expected_cmd, capture_output=True, text=True, timeout=5)

#  Test kubectl drops the deprecation warning on stderr
@patch("subprocess.run")
def test_probe_kubectl_ignores_stderr(mock_run, prober):
    mock_run.return_value = _completed(
        stdout="Client Version: v1.28.2\n",
        stderr="Flag --short has been deprecated, and will be removed in the future.\n",
    )
    assert prober.probe("kubectl") == "v1.28.2"
    assert mock_run.call_args.args[0] == ["kubectl", "version", "--client", "--short"]

#  Test default rule falls back to stderr when stdout is empty
@patch("subprocess.run")
def test_probe_default_reads_stderr(mock_run, prober):
    mock_run.return_value = _completed(stderr='openjdk version "17.0.9" 2023-10-17\n')
    assert prober.probe("java") == 'openjdk version "17.0.9" 2023-10-17'

def test_unknown_tool_uses_default_rule(prober):
    assert prober.rule_for("checkov") is DEFAULT_RULE

#  Test probe never raises
@patch("subprocess.run", side_effect=FileNotFoundError("trivy"))
def test_probe_missing_executable(_, prober):
    assert prober.probe("trivy") == ""

@patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="packer", timeout=5))
def test_probe_timeout(_, prober):
    assert prober.probe("packer") == ""

@patch("subprocess.run", return_value=_completed(stdout="garbage"))
def test_probe_parser_error(_):
    def broken(out):
        raise ValueError(out)

    prober = VersionProber(rules={"node": VersionRule(["-v"], broken)})
    assert prober.probe("node") == ""

@patch("subprocess.run", return_value=_completed(stdout="", stderr=""))
def test_probe_empty_output(_, prober):
    assert prober.probe("helm") == ""
