from __future__ import annotations

from typing import Optional

import typer

from garchetype_core import __version__

from .util import EXE_NAME, configure_stdio

app = typer.Typer(
    help="garchetype: Tool for scaffolding using archetypes.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{EXE_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def _init(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    configure_stdio()
    ctx.obj = {"verbose": verbose}


from .commands.add import CONTEXT_SETTINGS as ADD_CONTEXT_SETTINGS, add as add_fn  # noqa: E402
from .commands.list_cmd import list_archetypes as list_fn  # noqa: E402
from .commands.environment import environment as environment_fn  # noqa: E402

app.command(name="add", context_settings=ADD_CONTEXT_SETTINGS)(add_fn)
app.command(name="list")(list_fn)
app.command(name="environment", hidden=True)(environment_fn)


def main():
    app()


if __name__ == "__main__":
    main()
