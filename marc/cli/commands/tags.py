"""
FILE: marc/cli/commands/tags.py
PURPOSE: Tag command (list, create, delete, prune)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, get_config, fail
from ...core import service
from ...core.exceptions import MarcError, InvalidInputError
from ...formatting import TagFormatter


@app.command("tag")
def tag_command(
    ctx: typer.Context,
    create: Optional[str] = typer.Option(None, "--create", "-c", help="Declare a new tag"),
    delete: Optional[str] = typer.Option(None, "--delete", "-D", help="Delete an unused declared tag"),
    prune: bool = typer.Option(False, "--prune", "-p", help="Delete declared tags no todo uses"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tags, or manage the tag vocabulary.

    Example:
        marc tag
        marc tag --create errand
        marc tag --prune
    """
    config = get_config(ctx)
    try:
        if sum(bool(x) for x in (create, delete, prune)) > 1:
            raise InvalidInputError("Use only one of --create, --delete and --prune")

        if create is not None:
            name = service.create_tag(config, create)
            console.print(f"[green]✓ Tag ready:[/green] [yellow]{escape(name)}[/yellow]")
            return

        if delete is not None:
            name = service.delete_tag(config, delete)
            console.print(f"[red]✗[/red] Deleted tag: [yellow]{escape(name)}[/yellow]")
            return

        if prune:
            pruned = service.prune_tags(config)
            if not pruned:
                console.print("[dim]No unused tags[/dim]")
            for name in pruned:
                console.print(f"[red]✗[/red] Pruned tag: [yellow]{escape(name)}[/yellow]")
            return

        tags = service.list_tags(config)

    except MarcError as e:
        fail(e)

    if json_output:
        console.print_json(TagFormatter.to_json_array(tags))
    elif raw:
        for line in TagFormatter.to_raw_lines(tags):
            console.print(line, markup=False, highlight=False)
    elif not tags:
        console.print("[dim]No tags yet[/dim]")
    else:
        console.print(TagFormatter.create_table(tags))
