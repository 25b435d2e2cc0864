"""Configuration resolution for garchetype.

The effective config is built once per invocation from these sources
(highest priority first):

1) Command-line flags
2) ``GARCHETYPE_*`` process environment variables
3) ``.env`` in the working directory (optional)
4) The dotenv file named by ``GARCHETYPE_ENV`` (optional, must exist if set)
5) System defaults (hardcoded)

Dotenv files never override a variable that is already set. ``.env`` is read
first, so it wins over the ``GARCHETYPE_ENV`` file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "GARCHETYPE"
DEFAULT_ARCHETYPES_FOLDER = "archetypes"
DEFAULT_ARCHETYPE = "hello-world"
DEFAULT_TRANSFORMATION = "default"
DEFAULT_PROJECT_MARKER = "go.mod"

# Config field -> environment variable suffix.
_ENV_FIELDS: Dict[str, str] = {
    "archetype": "ARCHETYPE",
    "archetypes_folder": "ARCHETYPES_FOLDER",
    "project_marker": "PROJECT_MARKER",
    "source_dir": "SOURCE_DIR",
    "source_repo": "SOURCE_REPO",
    "transformation": "TRANSFORMATION",
    "verbose": "VERBOSE",
}

ENVIRONMENT_VARIABLES = sorted(
    [f"{ENV_PREFIX}_{suffix}" for suffix in _ENV_FIELDS.values()] + [f"{ENV_PREFIX}_ENV"]
)


class SourceConfig(BaseModel):
    """Location of the archetype source working copy."""

    local_dir: str = Field(..., description="Local working copy directory")
    remote_url: Optional[str] = Field(default=None, description="Remote repository URL")

    model_config = ConfigDict(frozen=True)

    @field_validator("local_dir")
    @classmethod
    def _require_local_dir(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("source directory is required")
        return value

    @classmethod
    def create(cls, local_dir: Optional[str], remote_url: Optional[str] = None) -> "SourceConfig":
        """Build a SourceConfig, reporting an empty directory as ConfigError."""
        if not local_dir or not local_dir.strip():
            raise ConfigError("source directory is required")
        return cls(local_dir=local_dir, remote_url=remote_url or None)


class GarchetypeConfig(BaseModel):
    """Fully resolved configuration for one invocation."""

    verbose: bool = False
    feature_name: str = ""
    archetypes_folder: str = DEFAULT_ARCHETYPES_FOLDER
    archetype: str = DEFAULT_ARCHETYPE
    transformation: str = DEFAULT_TRANSFORMATION
    source_dir: str = ""
    source_repo: str = ""
    project_marker: str = DEFAULT_PROJECT_MARKER

    model_config = ConfigDict(extra="forbid")

    def source_config(self) -> SourceConfig:
        return SourceConfig.create(self.source_dir, self.source_repo)


class ConfigLoader:
    """Load and resolve garchetype configuration."""

    @staticmethod
    def _read_dotenv(path: Path, required: bool) -> Dict[str, str]:
        if not path.is_file():
            if required:
                raise ConfigError(f"env file not found: {path}")
            return {}
        try:
            values = dotenv_values(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to load env file {path}: {e}") from e
        logger.debug("loaded env file %s", path)
        return {k: v for k, v in values.items() if v is not None}

    @staticmethod
    def resolve_environment(
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = Path(".env"),
    ) -> Dict[str, str]:
        """Merge dotenv files under the process environment."""
        env: Dict[str, str] = dict(os.environ if environ is None else environ)
        if dotenv_path is not None:
            for key, value in ConfigLoader._read_dotenv(dotenv_path, required=False).items():
                env.setdefault(key, value)
        extra = env.get(f"{ENV_PREFIX}_ENV")
        if extra:
            for key, value in ConfigLoader._read_dotenv(Path(extra), required=True).items():
                env.setdefault(key, value)
        return env

    @staticmethod
    def from_environment(env: Mapping[str, str]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field_name, suffix in _ENV_FIELDS.items():
            raw = env.get(f"{ENV_PREFIX}_{suffix}", "")
            if field_name == "verbose":
                values[field_name] = raw.strip().lower() == "true"
            elif raw:
                values[field_name] = raw
        return values

    @staticmethod
    def load(
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        dotenv_path: Optional[Path] = Path(".env"),
    ) -> GarchetypeConfig:
        """Return the effective config; ``overrides`` holds command-line flags.

        ``None`` values in ``overrides`` mean "flag not given".
        """
        env = ConfigLoader.resolve_environment(environ, dotenv_path)
        values = ConfigLoader.from_environment(env)
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value
        try:
            return GarchetypeConfig(**values)
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
