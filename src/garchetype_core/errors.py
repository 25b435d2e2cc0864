"""Exception hierarchy for garchetype.

All domain failures derive from :class:`GarchetypeError` so the CLI can
report them uniformly. Wrapping is done with ``raise ... from err`` and the
original failure stays reachable through ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .vcs.base import Status


class GarchetypeError(Exception):
    """Base exception for all garchetype errors."""


class ConfigError(GarchetypeError):
    """Invalid or incomplete configuration."""


class ArchetypeError(GarchetypeError):
    """Archetype folder or transformation file could not be resolved."""


class GenerationError(GarchetypeError):
    """The overlay generator failed to render an archetype."""


class DirtyRepositoryError(GarchetypeError):
    """The destination repository has uncommitted changes."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__("git repository is dirty")


# --- version control -------------------------------------------------------


class VcsError(GarchetypeError):
    """Base exception for version-control failures."""


class ExecutionError(VcsError):
    """A git primitive could not run or exited non-zero."""

    def __init__(
        self,
        args: Sequence[str],
        directory: Path | str,
        returncode: Optional[int] = None,
        stderr: str = "",
        reason: Optional[str] = None,
    ):
        self.command = list(args)
        self.directory = Path(directory)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = reason or self.stderr or f"exit status {returncode}"
        super().__init__(f"git {' '.join(self.command)}: {detail}")


class EmptyOutputError(VcsError):
    """A git primitive succeeded but printed nothing."""

    def __init__(self, args: Sequence[str]):
        self.command = list(args)
        super().__init__(f"git {' '.join(self.command)}: empty output")


class ResolutionError(VcsError):
    """The working directory could not be resolved to an absolute path."""


class NotARepositoryError(VcsError):
    """The directory is not inside a git working tree."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        super().__init__("not inside a git repository")


class MalformedDescriptionError(VcsError):
    """``git describe`` output did not have the ``<tag>-<n>-g<hash>`` shape."""

    def __init__(self, line: str, reason: str = "failed to parse `git describe` result"):
        self.line = line
        super().__init__(f"{reason}: {line!r}")


class UnresolvedHostError(VcsError):
    """The remote host name could not be resolved."""


class RepositoryStatusError(VcsError):
    """Probing the repository status failed.

    ``status`` holds the partially built snapshot when the failure happened
    after every mandatory field was read (malformed describe output).
    """

    def __init__(self, cause: BaseException, status: Optional["Status"] = None):
        self.status = status
        super().__init__(f"git status failed: {cause}")


class SynchronizationError(VcsError):
    """The source working copy could not be synchronized with its remote."""


class SourceUnavailableError(SynchronizationError):
    """Neither a local working copy nor a reachable remote is available."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        super().__init__(f"source directory not found: {directory}")
