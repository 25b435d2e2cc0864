"""
source.py - Archetype source preparation.

Makes sure the configured source directory holds a current working copy
before any archetype is read from it.
"""

from __future__ import annotations

from typing import Callable, Optional

from garchetype_core.config import GarchetypeConfig, SourceConfig
from garchetype_core.vcs import VersionControlClient, synchronize


def prepare_source(
    config: GarchetypeConfig,
    client: VersionControlClient,
    on_warning: Optional[Callable[[str], None]] = None,
) -> SourceConfig:
    """Synchronize the source working copy and return its resolved location.

    Raises:
        ConfigError: no source directory is configured.
        SynchronizationError: the working copy could not be prepared.
    """
    source = config.source_config()
    synchronize(client, source, on_warning=on_warning)
    return source
