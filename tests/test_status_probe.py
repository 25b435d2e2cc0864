"""
test_status_probe.py - Repository status snapshots.
"""

from pathlib import Path

import pytest
from hypothesis import given, strategies as st

from garchetype_core.errors import (
    EmptyOutputError,
    ExecutionError,
    MalformedDescriptionError,
    NotARepositoryError,
    RepositoryStatusError,
)
from garchetype_core.vcs import GitClient, ScriptedClient, is_dirty, probe_status
from garchetype_core.vcs.base import Description

from conftest import commit_file, git, init_repo, requires_git

FULL_HASH = "0123456789abcdef0123456789abcdef01234567"


def scripted(**overrides):
    outcomes = {
        "is_inside_work_tree": "true",
        "current_branch": "main",
        "rev_parse": FULL_HASH,
        "rev_parse_short": "0123456",
        "last_commit_date": "2024-05-06T07:08:09",
        "status_porcelain": "",
        "describe": "v1.2.0-rc-1-3-g0123456",
    }
    outcomes.update(overrides)
    return ScriptedClient(outcomes)


def _fatal(*args, stderr="fatal: failure"):
    return ExecutionError(list(args), ".", returncode=128, stderr=stderr)


class TestScriptedProbe:
    def test_full_snapshot(self, tmp_path: Path):
        status = probe_status(scripted(), tmp_path)

        assert status.hash == FULL_HASH
        assert status.short_hash == "0123456"
        assert status.branch == "main"
        assert status.author_date == "2024-05-06T07:08:09"
        assert status.dirty is False
        assert status.description == Description("v1.2.0-rc-1", 3, "0123456")

    def test_probe_runs_against_resolved_directory(self, tmp_path: Path):
        client = scripted()
        probe_status(client, tmp_path / "." / "")

        directories = {args[0] for _, args in client.calls}
        assert directories == {tmp_path.resolve()}

    def test_not_a_repository_is_fatal(self, tmp_path: Path):
        client = scripted(is_inside_work_tree=_fatal("rev-parse", stderr="fatal: not a git repository"))

        with pytest.raises(RepositoryStatusError) as excinfo:
            probe_status(client, tmp_path)

        assert isinstance(excinfo.value.__cause__, NotARepositoryError)
        assert excinfo.value.status is None
        assert str(excinfo.value).startswith("git status failed:")
        assert [name for name, _ in client.calls] == ["is_inside_work_tree"]

    def test_inside_git_dir_is_not_a_work_tree(self, tmp_path: Path):
        with pytest.raises(RepositoryStatusError) as excinfo:
            probe_status(scripted(is_inside_work_tree="false"), tmp_path)

        assert isinstance(excinfo.value.__cause__, NotARepositoryError)

    @pytest.mark.parametrize(
        "failure",
        [EmptyOutputError(["branch"]), _fatal("branch", "--show-current")],
    )
    def test_branch_failure_degrades_to_empty_branch(self, tmp_path: Path, failure):
        status = probe_status(scripted(current_branch=failure), tmp_path)

        assert status.branch == ""
        assert status.hash == FULL_HASH

    @pytest.mark.parametrize("primitive", ["rev_parse", "rev_parse_short", "last_commit_date"])
    def test_mandatory_fields_abort_the_probe(self, tmp_path: Path, primitive):
        cause = _fatal(primitive)

        with pytest.raises(RepositoryStatusError) as excinfo:
            probe_status(scripted(**{primitive: cause}), tmp_path)

        assert excinfo.value.__cause__ is cause
        assert "git status failed:" in str(excinfo.value)

    def test_empty_status_report_means_clean(self, tmp_path: Path):
        status = probe_status(scripted(status_porcelain=EmptyOutputError(["status"])), tmp_path)

        assert status.dirty is False

    def test_non_empty_status_report_means_dirty(self, tmp_path: Path):
        status = probe_status(scripted(status_porcelain=" M main.go\n?? new.txt"), tmp_path)

        assert status.dirty is True

    def test_status_report_execution_failure_aborts(self, tmp_path: Path):
        cause = _fatal("status", "--porcelain")

        with pytest.raises(RepositoryStatusError) as excinfo:
            probe_status(scripted(status_porcelain=cause), tmp_path)

        assert excinfo.value.__cause__ is cause

    @pytest.mark.parametrize(
        "failure",
        [_fatal("describe", stderr="fatal: No names found, cannot describe anything."), EmptyOutputError(["describe"])],
    )
    def test_repository_without_tags_has_empty_description(self, tmp_path: Path, failure):
        status = probe_status(scripted(describe=failure), tmp_path)

        assert status.description == Description()
        assert status.hash == FULL_HASH
        assert status.branch == "main"

    def test_malformed_description_is_reported_with_partial_status(self, tmp_path: Path):
        with pytest.raises(RepositoryStatusError) as excinfo:
            probe_status(scripted(describe="not-a-description"), tmp_path)

        err = excinfo.value
        assert isinstance(err.__cause__, MalformedDescriptionError)
        assert err.status is not None
        assert err.status.hash == FULL_HASH
        assert err.status.description == Description()


@pytest.mark.parametrize("report", ["", "\n", "\r\n"])
def test_clean_reports(report):
    assert is_dirty(report) is False


@given(st.text(min_size=1).filter(lambda s: s not in ("", "\n", "\r\n")))
def test_any_other_report_is_dirty(report):
    assert is_dirty(report) is True


@requires_git
class TestGitProbe:
    def test_fresh_repository_without_tags(self, tmp_path: Path):
        repo = init_repo(tmp_path / "repo")

        status = probe_status(GitClient(), repo)

        assert len(status.hash) == 40
        assert status.hash == git(repo, "rev-parse", "HEAD")
        assert status.hash.startswith(status.short_hash)
        assert status.branch == "main"
        assert status.dirty is False
        assert status.description == Description()
        assert len(status.author_date) == len("2024-01-01T00:00:00")

    def test_tagged_repository_description(self, tmp_path: Path):
        repo = init_repo(tmp_path / "repo")
        git(repo, "tag", "v1.0.0-beta")
        commit_file(repo, "main.go", "package main\n")

        status = probe_status(GitClient(), repo)

        assert status.description.tag == "v1.0.0-beta"
        assert status.description.additional_commits == 1
        assert status.hash.startswith(status.description.short_hash)

    def test_untracked_file_makes_repository_dirty(self, tmp_path: Path):
        repo = init_repo(tmp_path / "repo")
        (repo / "scratch.txt").write_text("wip\n", encoding="utf-8")

        assert probe_status(GitClient(), repo).dirty is True

    def test_detached_head_has_empty_branch(self, tmp_path: Path):
        repo = init_repo(tmp_path / "repo")
        git(repo, "checkout", "-q", "--detach")

        status = probe_status(GitClient(), repo)

        assert status.branch == ""
        assert status.hash == git(repo, "rev-parse", "HEAD")

    def test_plain_directory_is_not_a_repository(self, tmp_path: Path):
        plain = tmp_path / "plain"
        plain.mkdir()

        with pytest.raises(RepositoryStatusError) as excinfo:
            probe_status(GitClient(), plain)

        assert isinstance(excinfo.value.__cause__, NotARepositoryError)

    def test_default_directory_is_process_cwd(self, tmp_path: Path, monkeypatch):
        repo = init_repo(tmp_path / "repo")
        monkeypatch.chdir(repo)

        assert probe_status(GitClient()).hash == git(repo, "rev-parse", "HEAD")
