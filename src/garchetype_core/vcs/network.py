"""Classification of network failures reported by git."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..errors import ExecutionError, UnresolvedHostError

# ssh transport and curl (https) transport respectively.
UNRESOLVED_HOST_MARKERS = (
    "ssh: Could not resolve hostname",
    "Could not resolve host",
)


class NetworkFailure(str, Enum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    OTHER = "other"


def classify_network_failure(err: Optional[BaseException]) -> NetworkFailure:
    """Tell whether ``err`` means the remote host name could not be resolved.

    Detection relies on git's error text, so this is the single place that
    knows about it.
    """
    if err is None:
        return NetworkFailure.RESOLVED
    if isinstance(err, UnresolvedHostError):
        return NetworkFailure.UNRESOLVED
    text = str(err)
    if isinstance(err, ExecutionError):
        text = f"{text}\n{err.stderr}"
    if any(marker in text for marker in UNRESOLVED_HOST_MARKERS):
        return NetworkFailure.UNRESOLVED
    return NetworkFailure.OTHER
