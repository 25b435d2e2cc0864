"""Git repository state and source synchronization."""

from .base import Description, Status, VersionControlClient
from .describe import parse_description
from .git_adapter import GitClient
from .network import NetworkFailure, classify_network_failure
from .scripted_adapter import ScriptedClient
from .status import is_dirty, probe_status
from .sync import synchronize

__all__ = [
    "Description",
    "Status",
    "VersionControlClient",
    "GitClient",
    "ScriptedClient",
    "NetworkFailure",
    "classify_network_failure",
    "parse_description",
    "is_dirty",
    "probe_status",
    "synchronize",
]
