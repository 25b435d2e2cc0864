"""Synchronization of the archetype source working copy.

Decision table over (local path exists?, remote URL configured?):

* missing path, no remote: :class:`SourceUnavailableError`.
* missing path, remote: shallow single-branch clone. An unresolvable host
  is reported as :class:`SourceUnavailableError` after a warning.
* existing path with an ``origin`` remote: fetch then pull. An unresolvable
  host only warns; the copy on disk is used as is.
* existing path without ``origin``, not a repository at all, or a plain
  folder inside some other working tree: no-op.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from ..config import SourceConfig
from ..errors import (
    EmptyOutputError,
    ExecutionError,
    SourceUnavailableError,
    SynchronizationError,
    VcsError,
)
from .base import VersionControlClient
from .network import NetworkFailure, classify_network_failure

logger = logging.getLogger(__name__)

ORIGIN = "origin"
CONNECTION_WARNING = "Could not connect to remote repository."
NOT_A_REPOSITORY = "not a git repository"
NO_REMOTE_MARKERS = (NOT_A_REPOSITORY, "No such remote")

WarningSink = Callable[[str], None]


def synchronize(
    client: VersionControlClient,
    source: SourceConfig,
    *,
    on_warning: Optional[WarningSink] = None,
) -> None:
    """Make ``source.local_dir`` a usable working copy of ``source.remote_url``.

    Safe to call on every invocation.

    Raises:
        SourceUnavailableError: no local copy exists and none can be cloned.
        SynchronizationError: any other clone, fetch or pull failure.
    """
    local_dir = Path(source.local_dir)
    try:
        if local_dir.exists():
            _update(client, local_dir, source.remote_url, on_warning)
        else:
            _clone(client, local_dir, source.remote_url, on_warning)
    except SynchronizationError:
        raise
    except VcsError as e:
        raise SynchronizationError(f"source sync failed: {e}") from e


def _warn(on_warning: Optional[WarningSink]) -> None:
    if on_warning is None:
        logger.warning(CONNECTION_WARNING)
        return
    logger.info(CONNECTION_WARNING)
    on_warning(CONNECTION_WARNING)


def _clone(
    client: VersionControlClient,
    local_dir: Path,
    remote_url: Optional[str],
    on_warning: Optional[WarningSink],
) -> None:
    if not remote_url:
        raise SourceUnavailableError(local_dir)
    logger.info("cloning %s into %s", remote_url, local_dir)
    try:
        client.clone(remote_url, local_dir)
    except VcsError as e:
        if classify_network_failure(e) is NetworkFailure.UNRESOLVED:
            _warn(on_warning)
            raise SourceUnavailableError(local_dir) from e
        raise


def _is_work_tree_root(client: VersionControlClient, local_dir: Path) -> bool:
    try:
        top = client.top_level(local_dir)
    except EmptyOutputError:
        return False
    except ExecutionError as e:
        if NOT_A_REPOSITORY in str(e):
            return False
        raise
    if Path(top).resolve() != local_dir.resolve():
        logger.debug("%s is inside the working tree of %s, not synchronizing", local_dir, top)
        return False
    return True


def _origin_url(client: VersionControlClient, local_dir: Path) -> Optional[str]:
    try:
        return client.remote_url(local_dir, ORIGIN)
    except EmptyOutputError:
        return None
    except ExecutionError as e:
        if any(marker in str(e) for marker in NO_REMOTE_MARKERS):
            logger.debug("no %s remote in %s: %s", ORIGIN, local_dir, e)
            return None
        raise


def _update(
    client: VersionControlClient,
    local_dir: Path,
    remote_url: Optional[str],
    on_warning: Optional[WarningSink],
) -> None:
    if not _is_work_tree_root(client, local_dir):
        return
    origin = _origin_url(client, local_dir)
    if origin is None:
        return
    if remote_url and origin != remote_url:
        # TODO: decide whether a different origin should be re-cloned or refused.
        logger.warning("origin of %s is %s, expected %s", local_dir, origin, remote_url)

    logger.info("fetching %s", local_dir)
    try:
        client.fetch(local_dir)
    except VcsError as e:
        if classify_network_failure(e) is NetworkFailure.UNRESOLVED:
            _warn(on_warning)
            return
        raise
    client.pull(local_dir)
