"""Version-control abstraction types."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class Description:
    """Result of ``git describe --tags --long``.

    Empty (the default value) when the repository has no tags.
    """

    tag: str = ""
    additional_commits: int = 0  # commits after the last tag
    short_hash: str = ""

    def __bool__(self) -> bool:
        return bool(self.tag)


@dataclass(frozen=True)
class Status:
    """Point-in-time snapshot of a git working tree."""

    hash: str  # git rev-parse HEAD
    short_hash: str  # git rev-parse --short HEAD
    author_date: str  # git log -n1 --date=format:%Y-%m-%dT%H:%M:%S --format=%ad
    branch: str = ""  # git branch --show-current; empty on detached HEAD
    dirty: bool = False  # git status --porcelain is non-empty
    description: Description = field(default_factory=Description)


class VersionControlClient(Protocol):
    """Narrow set of git primitives used by garchetype.

    Every method runs against ``directory`` only and returns stripped output.
    Implementations raise ``ExecutionError`` when the primitive cannot run and
    ``EmptyOutputError`` when a query succeeds without printing anything.
    ``clone``, ``fetch`` and ``pull`` report progress on stderr, so empty
    output is a normal result for them.
    """

    def is_inside_work_tree(self, directory: Path) -> str:
        ...

    def top_level(self, directory: Path) -> str:
        """Root of the working tree containing ``directory``."""
        ...

    def current_branch(self, directory: Path) -> str:
        ...

    def rev_parse(self, directory: Path, short: bool = False) -> str:
        ...

    def last_commit_date(self, directory: Path) -> str:
        ...

    def status_porcelain(self, directory: Path) -> str:
        ...

    def describe(self, directory: Path) -> str:
        ...

    def clone(self, url: str, directory: Path) -> str:
        ...

    def remote_url(self, directory: Path, name: str) -> str:
        ...

    def fetch(self, directory: Path) -> str:
        ...

    def pull(self, directory: Path) -> str:
        ...
