"""garchetype core - archetype sources, repository state and overlay generation."""

from .__version__ import __version__, __version_info__

from .config import ConfigLoader, GarchetypeConfig, SourceConfig, ENVIRONMENT_VARIABLES
from .errors import (
    ArchetypeError,
    ConfigError,
    DirtyRepositoryError,
    EmptyOutputError,
    ExecutionError,
    GarchetypeError,
    GenerationError,
    MalformedDescriptionError,
    NotARepositoryError,
    RepositoryStatusError,
    ResolutionError,
    SourceUnavailableError,
    SynchronizationError,
    UnresolvedHostError,
    VcsError,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Config
    "ConfigLoader",
    "GarchetypeConfig",
    "SourceConfig",
    "ENVIRONMENT_VARIABLES",
    # Errors
    "GarchetypeError",
    "ConfigError",
    "ArchetypeError",
    "GenerationError",
    "DirtyRepositoryError",
    "VcsError",
    "ExecutionError",
    "EmptyOutputError",
    "ResolutionError",
    "NotARepositoryError",
    "MalformedDescriptionError",
    "UnresolvedHostError",
    "RepositoryStatusError",
    "SynchronizationError",
    "SourceUnavailableError",
]
