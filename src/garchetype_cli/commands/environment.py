"""
environment.py - Print the environment variables garchetype reads.
"""

from __future__ import annotations

import typer

from garchetype_core.config import ENVIRONMENT_VARIABLES


def environment() -> None:
    """List recognised environment variables."""
    for name in ENVIRONMENT_VARIABLES:
        typer.echo(name)
