"""
test_network.py - Classification of git network failures.
"""

import pytest

from garchetype_core.errors import ExecutionError, UnresolvedHostError
from garchetype_core.vcs.network import NetworkFailure, classify_network_failure


def test_no_error_is_resolved():
    assert classify_network_failure(None) is NetworkFailure.RESOLVED


@pytest.mark.parametrize(
    "stderr",
    [
        "ssh: Could not resolve hostname github.com: Name or service not known\n"
        "fatal: Could not read from remote repository.",
        "fatal: unable to access 'https://example.invalid/repo.git/': "
        "Could not resolve host: example.invalid",
    ],
)
def test_unresolved_host_from_git_stderr(stderr):
    err = ExecutionError(["fetch"], ".", returncode=128, stderr=stderr)

    assert classify_network_failure(err) is NetworkFailure.UNRESOLVED


def test_explicit_unresolved_host_error():
    assert classify_network_failure(UnresolvedHostError("dns")) is NetworkFailure.UNRESOLVED


def test_other_failures():
    err = ExecutionError(["fetch"], ".", returncode=128, stderr="fatal: Authentication failed")

    assert classify_network_failure(err) is NetworkFailure.OTHER
    assert classify_network_failure(RuntimeError("boom")) is NetworkFailure.OTHER


def test_plain_exception_message_is_inspected():
    err = RuntimeError("ssh: Could not resolve hostname gitlab.local")

    assert classify_network_failure(err) is NetworkFailure.UNRESOLVED
