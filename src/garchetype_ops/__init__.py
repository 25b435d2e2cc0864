"""
garchetype_ops - Use-case functions for garchetype.

CLI commands delegate to these functions; they never print directly and
report progress through the callbacks they are given.

Modules:
    source: Archetype source synchronization
    catalog: Archetype and transformation listing
    feature: Feature generation into the current project
"""

from .source import prepare_source
from .catalog import ArchetypeEntry, catalog_archetypes
from .feature import AddFeatureResult, add_feature

__all__ = [
    "prepare_source",
    "ArchetypeEntry",
    "catalog_archetypes",
    "AddFeatureResult",
    "add_feature",
]
