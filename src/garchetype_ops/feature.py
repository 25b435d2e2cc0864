"""
feature.py - Add a feature to the current project from an archetype.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from garchetype_core.archetypes import (
    FEATURE_NAME_ID,
    feature_args,
    get_archetype_folder,
    get_archetypes_folder,
    transformation_file_name,
)
from garchetype_core.config import GarchetypeConfig
from garchetype_core.errors import ArchetypeError, ConfigError, DirtyRepositoryError
from garchetype_core.generator import overlay_generate
from garchetype_core.vcs import Status, VersionControlClient, probe_status

from .source import prepare_source

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


@dataclass
class AddFeatureResult:
    """Result of adding a feature."""
    feature_name: str
    archetype: str
    transformation_file: Path
    status: Status
    written: List[Path] = field(default_factory=list)


def _declares_feature_name(transformation_file: Path) -> bool:
    try:
        text = transformation_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ArchetypeError(f"cannot read transformation file {transformation_file}: {e}") from e
    return f"- id: {FEATURE_NAME_ID}" in text


def add_feature(
    config: GarchetypeConfig,
    client: VersionControlClient,
    destination: Path,
    extra_args: Sequence[str] = (),
    echo: Optional[Echo] = None,
    on_warning: Optional[Echo] = None,
) -> AddFeatureResult:
    """Stamp ``config.archetype`` onto ``destination``.

    The destination must contain the project marker file and be a clean git
    working tree.

    Progress messages go to ``echo``; connection warnings go to
    ``on_warning`` and fall back to ``echo`` when it is not given.

    Raises:
        ConfigError: missing project marker, archetype or source directory.
        SynchronizationError: the archetype source could not be prepared.
        ArchetypeError: archetype folder or transformation file not found
            or unreadable.
        RepositoryStatusError: the destination status could not be probed.
        DirtyRepositoryError: the destination has uncommitted changes.
        GenerationError: the overlay generator failed.
    """
    say = echo or (lambda _msg: None)
    destination = Path(destination).absolute()

    if not (destination / config.project_marker).exists():
        raise ConfigError(f"{config.project_marker} file not found in the current folder")

    source = prepare_source(config, client, on_warning=on_warning or echo)

    problems = []
    if not config.archetype:
        problems.append("archetype is required")
    if not config.source_dir:
        problems.append("source directory is required")
    if problems:
        raise ConfigError("; ".join(problems))

    feature_name = config.feature_name or config.archetype

    archetypes_dir = get_archetypes_folder(source.local_dir, config.archetypes_folder)
    archetype_dir = get_archetype_folder(archetypes_dir, config.archetype)
    transformation_file = archetype_dir / transformation_file_name(config.transformation)

    say(f"🌱 Adding '{feature_name}' feature using '{config.archetype}' archetype.")
    if not transformation_file.exists():
        raise ArchetypeError(f"transformation file not found: {transformation_file}")
    if transformation_file.is_dir():
        raise ArchetypeError(f"invalid transformation file: {transformation_file}")
    say(f"📦 Using transformation file: {transformation_file}")

    status = probe_status(client, destination)
    if status.dirty:
        raise DirtyRepositoryError(destination)
    logger.debug("destination %s at %s (%s)", destination, status.short_hash, status.branch or "detached")

    name_arg = feature_name if _declares_feature_name(transformation_file) else ""
    written = overlay_generate(
        transformation_file,
        archetype_dir,
        destination,
        feature_args(name_arg, extra_args),
    )
    say(f"🎉 Feature '{feature_name}' added.")
    return AddFeatureResult(
        feature_name=feature_name,
        archetype=config.archetype,
        transformation_file=transformation_file,
        status=status,
        written=written,
    )
