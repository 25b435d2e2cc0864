"""Repository status probe.

Builds a :class:`Status` snapshot for the repository containing a directory.
Only the commit hashes and the author date are mandatory. The branch
degrades to ``""`` (detached HEAD) and a repository without tags yields an
empty :class:`Description`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Union

from ..errors import (
    EmptyOutputError,
    NotARepositoryError,
    RepositoryStatusError,
    ResolutionError,
    VcsError,
)
from .base import Status, VersionControlClient
from .describe import parse_description

logger = logging.getLogger(__name__)

_CLEAN_REPORTS = ("", "\n", "\r\n")


def is_dirty(report: str) -> bool:
    """Return True when a ``git status --porcelain`` report lists changes."""
    return report not in _CLEAN_REPORTS


def probe_status(client: VersionControlClient, directory: Union[str, Path] = ".") -> Status:
    """Return the status of the git repository containing ``directory``.

    Raises:
        RepositoryStatusError: wraps the underlying failure. When the tag
            description is malformed the snapshot built so far is attached
            as ``status``.
    """
    try:
        return _probe(client, directory)
    except RepositoryStatusError:
        raise
    except VcsError as e:
        raise RepositoryStatusError(e) from e


def _probe(client: VersionControlClient, directory: Union[str, Path]) -> Status:
    try:
        root = Path(directory).resolve()
    except (OSError, RuntimeError) as e:
        raise ResolutionError(f"cannot resolve {directory}: {e}") from e

    try:
        inside = client.is_inside_work_tree(root)
    except VcsError as e:
        raise NotARepositoryError(root) from e
    if inside != "true":
        raise NotARepositoryError(root)

    try:
        branch = client.current_branch(root)
    except VcsError:
        branch = ""

    commit = client.rev_parse(root)
    short_hash = client.rev_parse(root, short=True)
    author_date = client.last_commit_date(root)

    try:
        report = client.status_porcelain(root)
    except EmptyOutputError:
        report = ""

    status = Status(
        hash=commit,
        short_hash=short_hash,
        author_date=author_date,
        branch=branch,
        dirty=is_dirty(report),
    )

    try:
        line = client.describe(root)
    except VcsError:
        logger.debug("no tag description for %s", root)
        return status

    try:
        description = parse_description(line)
    except VcsError as e:
        raise RepositoryStatusError(e, status=status) from e
    return replace(status, description=description)
