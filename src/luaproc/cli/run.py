from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from luaproc.config import get_settings
from luaproc.core.process import process_file

console = Console()


def run(
    files: Annotated[list[Path], typer.Argument(help="Rust source files to process.")],
    script_root: Annotated[
        Path | None,
        typer.Option(help="Directory relative script paths are resolved against (default: $LUAPROC_SCRIPT_ROOT or .)."),
    ] = None,
) -> None:
    """Run the Lua script of every luaproc type in the given files."""
    settings = get_settings(script_root)
    failed = False
    for path in files:
        try:
            report = process_file(path, settings)
        except FileNotFoundError as e:
            console.print(f"[red]Error[/red] {escape(str(e))}", soft_wrap=True)
            failed = True
            continue
        for result in report.results:
            console.print(f"[green]Processed[/green] {result.ident} with {escape(str(result.script_path))}", soft_wrap=True)
        for ident, error in report.failures:
            console.print(f"[red]Failed[/red] {ident} ({escape(str(path))}): {escape(str(error))}", soft_wrap=True)
        failed = failed or not report.ok
    if failed:
        raise typer.Exit(code=1)
