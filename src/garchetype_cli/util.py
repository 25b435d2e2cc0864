from __future__ import annotations

import logging
import os
import sys
from typing import Any, Mapping, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from garchetype_core.config import ConfigLoader, GarchetypeConfig
from garchetype_core.errors import GarchetypeError
from garchetype_core.vcs import GitClient

EXE_NAME = "garchetype"

console = Console()
err_console = Console(stderr=True)


def configure_stdio() -> None:
    """Make CLI output robust across Windows console encodings.

    Some Windows terminals use a non-UTF8 encoding (e.g., cp1252). Printing
    the status glyphs (🌱/📦/🎉) would raise UnicodeEncodeError and abort the
    command, so encoding errors are replaced instead.
    """

    if os.name != "nt":
        return

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="replace")


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG when verbose, WARNING otherwise."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def load_config(ctx: Optional[typer.Context], overrides: Mapping[str, Any]) -> GarchetypeConfig:
    """Resolve config for a command and configure logging from it."""
    values = dict(overrides)
    if ctx is not None and ctx.obj and ctx.obj.get("verbose"):
        values["verbose"] = True
    config = ConfigLoader.load(overrides=values)
    configure_logging(config.verbose)
    return config


def make_client() -> GitClient:
    return GitClient()


def warn(message: str) -> None:
    console.print(f"🚨 {message}")


def fail(error: GarchetypeError) -> typer.Exit:
    """Report a domain error and return the exit to raise."""
    err_console.print(f"💥 {EXE_NAME} error: {error}", markup=False, highlight=False, soft_wrap=True)
    return typer.Exit(1)
