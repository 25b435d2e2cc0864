"""Archetype folder layout helpers.

A source directory holds an archetypes folder with one sub-folder per
archetype. Each archetype carries one or more transformation files named
``transformations-<name>.yaml``.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

from .errors import ArchetypeError

TRANSFORMATION_PREFIX = "transformations-"
TRANSFORMATION_EXT = "yaml"
FEATURE_NAME_ID = "feature_name"

PathLike = Union[str, Path]


def _require_dir(path: Path, kind: str) -> Path:
    if not path.exists():
        raise ArchetypeError(f"{kind} not found: {path}")
    if not path.is_dir():
        raise ArchetypeError(f"invalid {kind}: {path}")
    return path


def get_archetypes_folder(directory: PathLike, archetypes: str) -> Path:
    if not str(directory):
        raise ArchetypeError("undefined dir")
    if not archetypes:
        raise ArchetypeError("undefined archetypes")
    return _require_dir(Path(directory) / archetypes, "archetypes folder")


def get_archetype_folder(directory: PathLike, archetype: str) -> Path:
    if not str(directory):
        raise ArchetypeError("undefined dir")
    if not archetype:
        raise ArchetypeError("undefined archetype")
    return _require_dir(Path(directory) / archetype, "archetype folder")


def transformation_file_name(transformation: str) -> str:
    if not transformation:
        raise ArchetypeError("undefined transformation")
    return f"{TRANSFORMATION_PREFIX}{transformation}.{TRANSFORMATION_EXT}"


def is_transformation_file(name: str) -> bool:
    return name.startswith(TRANSFORMATION_PREFIX) and name.endswith(TRANSFORMATION_EXT)


def list_archetypes(directory: PathLike) -> List[str]:
    """Return the names of the archetype sub-folders, sorted."""
    root = _require_dir(Path(directory), "archetypes folder")
    return sorted(entry.name for entry in root.iterdir() if entry.is_dir())


def list_transformations(directory: PathLike) -> List[str]:
    """Return the transformation names available in an archetype folder."""
    root = _require_dir(Path(directory), "archetype folder")
    names = []
    for entry in root.iterdir():
        if entry.is_file() and is_transformation_file(entry.name):
            stem = entry.name[len(TRANSFORMATION_PREFIX):]
            names.append(stem.removesuffix(f".{TRANSFORMATION_EXT}"))
    return sorted(names)


def feature_args(feature_name: Optional[str], args: Sequence[str]) -> List[str]:
    """Build generator arguments with ``--feature_name`` set exactly once.

    A user supplied ``--feature_name X`` or ``--feature_name=X`` is dropped in
    favour of ``feature_name``; when ``feature_name`` is empty the option is
    simply removed.
    """
    flag = f"--{FEATURE_NAME_ID}"
    result: List[str] = [flag, feature_name] if feature_name else []
    skip_next = False
    for arg in args:
        if skip_next:
            skip_next = False
            continue
        if arg == flag:
            skip_next = True
            continue
        if arg.startswith(flag + "="):
            continue
        result.append(arg)
    return result
