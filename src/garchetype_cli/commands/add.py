"""
add.py - Add a feature to the current project using an archetype.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from garchetype_core.errors import GarchetypeError
from garchetype_ops.feature import add_feature

from ..util import console, fail, load_config, make_client, warn

CONTEXT_SETTINGS = {"allow_extra_args": True, "ignore_unknown_options": True}


def add(
    ctx: typer.Context,
    feature: Optional[str] = typer.Option(None, "--feature", "-f", help="Feature name to add."),
    archetype: Optional[str] = typer.Option(None, "--archetype", "-a", help="Archetype to use."),
    transformation: Optional[str] = typer.Option(None, "--transformation", "-t", help="Transformation to use."),
    source_dir: Optional[str] = typer.Option(None, "--source-dir", "-s", help="Source directory to use."),
    source_repo: Optional[str] = typer.Option(None, "--source-repo", "-r", help="Source repository to use."),
) -> None:
    """Add a feature using an archetype.

    Arguments after the options (usually after ``--``) are handed to the
    archetype's transformation inputs, e.g. ``-- --module_path example.com/x``.
    """
    overrides = {
        "feature_name": feature,
        "archetype": archetype,
        "transformation": transformation,
        "source_dir": source_dir,
        "source_repo": source_repo,
    }
    try:
        config = load_config(ctx, overrides)
        add_feature(
            config,
            make_client(),
            Path.cwd(),
            extra_args=list(ctx.args),
            echo=lambda msg: console.print(msg, markup=False, highlight=False, soft_wrap=True),
            on_warning=warn,
        )
    except GarchetypeError as e:
        raise fail(e)
