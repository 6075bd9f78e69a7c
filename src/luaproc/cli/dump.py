from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from luaproc.core.errors import LuaprocError
from luaproc.core.process import describe_file

console = Console()


def dump(
    file: Annotated[Path, typer.Argument(help="Rust source file.")],
    type_name: Annotated[str | None, typer.Option("--type", help="Only dump the type with this name.")] = None,
) -> None:
    """Print the descriptors scripts would receive, without running them."""
    try:
        descriptors = describe_file(file)
    except (FileNotFoundError, LuaprocError) as e:
        console.print(f"[red]Error[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from None

    if type_name is not None:
        descriptors = [d for d in descriptors if d.meta.ident == type_name]
        if not descriptors:
            console.print(f"[red]No luaproc type named {type_name} in {file}[/red]")
            raise typer.Exit(code=1)
    for descriptor in descriptors:
        console.print_json(descriptor.model_dump_json())
