"""
catalog.py - Listing of available archetypes and transformations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from garchetype_core.archetypes import get_archetypes_folder, list_archetypes, list_transformations
from garchetype_core.config import DEFAULT_TRANSFORMATION, GarchetypeConfig
from garchetype_core.vcs import VersionControlClient

from .source import prepare_source


@dataclass
class ArchetypeEntry:
    """An archetype and the transformations it offers."""
    name: str
    transformations: List[str] = field(default_factory=list)

    @property
    def only_default(self) -> bool:
        return self.transformations == [DEFAULT_TRANSFORMATION]


def catalog_archetypes(
    config: GarchetypeConfig,
    client: VersionControlClient,
    on_warning: Optional[Callable[[str], None]] = None,
) -> List[ArchetypeEntry]:
    """Return archetypes that carry at least one transformation file."""
    source = prepare_source(config, client, on_warning)
    archetypes_dir = get_archetypes_folder(source.local_dir, config.archetypes_folder)
    entries = []
    for name in list_archetypes(archetypes_dir):
        transformations = list_transformations(archetypes_dir / name)
        if transformations:
            entries.append(ArchetypeEntry(name=name, transformations=transformations))
    return entries
