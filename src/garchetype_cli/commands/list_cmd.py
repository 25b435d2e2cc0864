"""
list_cmd.py - List available archetypes and their transformations.
"""

from __future__ import annotations

from typing import Optional

import typer

from garchetype_core.errors import GarchetypeError
from garchetype_ops.catalog import catalog_archetypes

from ..util import console, fail, load_config, make_client, warn


def list_archetypes(
    ctx: typer.Context,
    source_dir: Optional[str] = typer.Option(None, "--source-dir", "-s", help="Source directory to use."),
) -> None:
    """List available archetypes."""
    try:
        config = load_config(ctx, {"source_dir": source_dir})
        entries = catalog_archetypes(config, make_client(), on_warning=warn)
    except GarchetypeError as e:
        raise fail(e)

    for entry in entries:
        console.print(f"📦 Archetype: {entry.name}", markup=False, highlight=False, soft_wrap=True)
        if entry.only_default:
            continue
        for name in entry.transformations:
            console.print(f" 📄 Transformation: {name}", markup=False, highlight=False, soft_wrap=True)
