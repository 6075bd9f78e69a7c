import logging
from typing import Annotated

import typer

from luaproc.cli.dump import dump
from luaproc.cli.run import run

app = typer.Typer(
    name="luaproc",
    help="luaproc — run Lua generation scripts against Rust type definitions.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command("run")(run)
app.command("dump")(dump)


def main() -> None:
    app()
