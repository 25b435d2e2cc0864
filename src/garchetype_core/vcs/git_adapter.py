"""Git client backed by the ``git`` executable."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from ..errors import EmptyOutputError, ExecutionError

logger = logging.getLogger(__name__)

AUTHOR_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# git messages are matched as text elsewhere; keep them untranslated.
GIT_ENV_OVERRIDES = {"LC_ALL": "C"}


def run_git(
    directory: Path,
    args: list[str],
    *,
    timeout: Optional[float] = None,
    allow_empty: bool = False,
    git: str = "git",
) -> str:
    """Run a git command in ``directory`` and return stripped stdout.

    Raises:
        ExecutionError: git is missing, the directory does not exist, the
            command timed out or exited non-zero.
        EmptyOutputError: the command succeeded with no output and
            ``allow_empty`` is false.
    """
    logger.debug("git %s (cwd=%s)", " ".join(args), directory)
    try:
        result = subprocess.run(
            [git, *args],
            cwd=str(directory),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env={**os.environ, **GIT_ENV_OVERRIDES},
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ExecutionError(args, directory, reason=f"timed out after {e.timeout}s") from e
    except OSError as e:
        raise ExecutionError(args, directory, reason=str(e)) from e

    if result.returncode != 0:
        raise ExecutionError(args, directory, returncode=result.returncode, stderr=result.stderr)

    out = result.stdout.strip()
    if not out and not allow_empty:
        raise EmptyOutputError(args)
    return out


def _existing_ancestor(path: Path) -> Path:
    for candidate in (path, *path.parents):
        if candidate.is_dir():
            return candidate
    return Path(path.anchor or ".")


class GitClient:
    """Git VCS client.

    Each call spawns a fresh ``git`` process; nothing is cached and nothing
    is retried.
    """

    def __init__(self, timeout: Optional[float] = None, git: str = "git"):
        self.timeout = timeout
        self.git = git

    def _run(self, directory: Path, *args: str, allow_empty: bool = False) -> str:
        return run_git(
            directory,
            list(args),
            timeout=self.timeout,
            allow_empty=allow_empty,
            git=self.git,
        )

    def is_inside_work_tree(self, directory: Path) -> str:
        return self._run(directory, "rev-parse", "--is-inside-work-tree")

    def top_level(self, directory: Path) -> str:
        return self._run(directory, "rev-parse", "--show-toplevel")

    def current_branch(self, directory: Path) -> str:
        return self._run(directory, "branch", "--show-current")

    def rev_parse(self, directory: Path, short: bool = False) -> str:
        if short:
            return self._run(directory, "rev-parse", "--short", "HEAD")
        return self._run(directory, "rev-parse", "HEAD")

    def last_commit_date(self, directory: Path) -> str:
        return self._run(directory, "log", "-n1", f"--date=format:{AUTHOR_DATE_FORMAT}", "--format=%ad")

    def status_porcelain(self, directory: Path) -> str:
        return self._run(directory, "status", "--porcelain")

    def describe(self, directory: Path) -> str:
        return self._run(directory, "describe", "--tags", "--long")

    def clone(self, url: str, directory: Path) -> str:
        # git creates missing leading directories of the target itself.
        target = Path(directory).absolute()
        return self._run(
            _existing_ancestor(target.parent),
            "clone",
            "--depth",
            "1",
            "--single-branch",
            url,
            str(target),
            allow_empty=True,
        )

    def remote_url(self, directory: Path, name: str) -> str:
        return self._run(directory, "remote", "get-url", name)

    def fetch(self, directory: Path) -> str:
        return self._run(directory, "fetch", allow_empty=True)

    def pull(self, directory: Path) -> str:
        return self._run(directory, "pull", allow_empty=True)
