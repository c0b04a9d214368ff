"""
FILE: marc/cli/commands/todos.py
PURPOSE: Todo commands (add, log, done, undone, rm, show, edit)
"""

import sys
from typing import List, Optional

import typer
from rich.markup import escape
from rich.panel import Panel

from ..main import app, console, get_config, fail
from ...core import service
from ...core.exceptions import MarcError, InvalidInputError
from ...formatting import TodoFormatter


def _read_stdin_lines() -> List[str]:
    """One todo per non-empty line of piped stdin."""
    if sys.stdin is None or sys.stdin.isatty():
        return []
    return [line.strip() for line in sys.stdin if line.strip()]


@app.command()
def add(
    ctx: typer.Context,
    contents: Optional[List[str]] = typer.Argument(None, help="Todo text (one todo per argument)"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Tag for the new todo(s)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Add one todo per argument (or per line of piped stdin).

    Example:
        marc add "buy milk" --tag errand
        marc add "write report" "call mom"
        cat notes.txt | marc add -t inbox
    """
    config = get_config(ctx)
    try:
        if not contents:
            contents = _read_stdin_lines()
        if not contents:
            raise InvalidInputError("Nothing to add: give todo text or pipe it on stdin")

        created = service.add_todos(config, contents, tag=tag)
        total = len(service.list_todos(config))
        first = total - len(created) + 1
        numbered = list(zip(range(first, total + 1), created))

        if json_output:
            console.print_json(TodoFormatter.to_json_array(numbered))
        elif raw:
            for line in TodoFormatter.to_raw_lines(numbered):
                console.print(line, markup=False, highlight=False)
        else:
            for position, todo in numbered:
                suffix = f" [yellow]#{escape(todo.tag)}[/yellow]" if todo.tag else ""
                console.print(
                    f"[green]✓ Added [bold]#{position}[/bold]:[/green] {escape(todo.content)}{suffix}"
                )

    except MarcError as e:
        fail(e)


@app.command()
def log(
    ctx: typer.Context,
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only todos with this tag"),
    only_done: bool = typer.Option(False, "--done", "-d", help="Only done todos"),
    only_open: bool = typer.Option(False, "--no-done", "--undone", "-u", help="Only open todos"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List todos in the order they were added.

    Example:
        marc log
        marc log --tag errand
        marc log --no-done
        marc log --json
    """
    config = get_config(ctx)
    try:
        if only_done and only_open:
            raise InvalidInputError("Use either --done or --no-done, not both")
        done = True if only_done else False if only_open else None

        todos = service.list_todos(config, tag=tag, done=done)

        if json_output:
            console.print_json(TodoFormatter.to_json_array(todos))
            return
        if raw:
            for line in TodoFormatter.to_raw_lines(todos):
                console.print(line, markup=False, highlight=False)
            return

        if not todos:
            console.print("[dim]No todos found[/dim]")
            return

        title = f"Todos #{escape(tag)}" if tag else "Todos"
        console.print(TodoFormatter.create_table(todos, title=title, show_tag=tag is None))
        open_count = sum(1 for _, t in todos if not t.done)
        console.print(f"\n[dim]Total: {len(todos)} todo(s), {open_count} open[/dim]")

    except MarcError as e:
        fail(e)


def _set_done(ctx: typer.Context, selectors: List[str], done: bool, json_output: bool, raw: bool) -> None:
    config = get_config(ctx)
    try:
        if done:
            todos = service.complete_todos(config, selectors)
        else:
            todos = service.uncomplete_todos(config, selectors)
    except MarcError as e:
        fail(e)

    verb = "Completed" if done else "Reopened"
    if json_output:
        console.print_json(data=[t.to_dict() for t in todos])
    elif raw:
        for todo in todos:
            console.print(f"{verb}: {todo.content}", markup=False, highlight=False)
    else:
        mark = "[green]✓[/green]" if done else "[yellow]○[/yellow]"
        for todo in todos:
            console.print(f"{mark} {verb}: {escape(todo.content)}")


@app.command()
def done(
    ctx: typer.Context,
    selectors: List[str] = typer.Argument(..., help="Todo number(s) or text (comma-separated numbers allowed)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Mark one or more todos as done.

    Example:
        marc done 2
        marc done 1,3
        marc done "buy milk"
    """
    _set_done(ctx, selectors, True, json_output, raw)


@app.command()
def undone(
    ctx: typer.Context,
    selectors: List[str] = typer.Argument(..., help="Todo number(s) or text"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Mark one or more todos as not done.

    Example:
        marc undone 2
    """
    _set_done(ctx, selectors, False, json_output, raw)


@app.command()
def rm(
    ctx: typer.Context,
    selectors: Optional[List[str]] = typer.Argument(None, help="Todo number(s) or text"),
    done_only: bool = typer.Option(False, "--done", "-d", help="Remove every done todo"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Remove todos, or all done todos with --done.

    Example:
        marc rm 3
        marc rm 1,2
        marc rm --done
    """
    config = get_config(ctx)
    try:
        if done_only and selectors:
            raise InvalidInputError("Give either todo selectors or --done, not both")
        if not done_only and not selectors:
            raise InvalidInputError("Nothing to remove: give todo selectors or --done")

        if done_only:
            removed = service.remove_done(config)
        else:
            removed = service.remove_todos(config, selectors)

    except MarcError as e:
        fail(e)

    if raw:
        for todo in removed:
            console.print(f"Removed: {todo.content}", markup=False, highlight=False)
        return

    if not removed:
        console.print("[dim]No done todos to remove[/dim]")
        return
    for todo in removed:
        console.print(f"[red]✗[/red] Removed: {escape(todo.content)}")
    if len(removed) > 1:
        console.print(f"\n[dim]Removed {len(removed)} todo(s)[/dim]")


@app.command()
def show(
    ctx: typer.Context,
    selector: str = typer.Argument(..., help="Todo number or text"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show full details of one todo.

    Example:
        marc show 2
        marc show milk --json
    """
    config = get_config(ctx)
    try:
        position, todo = service.get_todo(config, selector)
    except MarcError as e:
        fail(e)

    if json_output:
        console.print_json(data=TodoFormatter.to_json_dict(position, todo))
        return

    status = "[green]done[/green]" if todo.done else "[yellow]open[/yellow]"
    lines = [
        f"[bold]Status:[/bold] {status}",
        f"[bold]Tag:[/bold] {escape(todo.tag) if todo.tag else '[dim]none[/dim]'}",
        f"[bold]Created:[/bold] {todo.created_at or '[dim]unknown[/dim]'}",
    ]
    if todo.completed_at:
        lines.append(f"[bold]Completed:[/bold] {todo.completed_at}")
    lines.append("")
    lines.append(escape(todo.content))

    console.print(Panel("\n".join(lines), title=f"[cyan]#{position}[/cyan]", expand=False))


@app.command()
def edit(
    ctx: typer.Context,
    selector: Optional[str] = typer.Argument(None, help="Todo to edit (omit for the interactive editor)"),
    text: Optional[str] = typer.Option(None, "--text", help="New content"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="New tag"),
    untag: bool = typer.Option(False, "--untag", help="Remove the tag"),
):
    """
    Edit todos interactively, or change one todo in place.

    Example:
        marc edit
        marc edit 2 --text "buy oat milk"
        marc edit milk --tag shopping
        marc edit 2 --untag
    """
    config = get_config(ctx)

    if selector is None:
        if text is not None or tag is not None or untag:
            fail(InvalidInputError("--text, --tag and --untag need a todo selector"))
        from ...editor import run_editor
        try:
            run_editor(config, console=console)
        except MarcError as e:
            fail(e)
        return

    try:
        todo = service.update_todo(config, selector, content=text, tag=tag, clear_tag=untag)
    except MarcError as e:
        fail(e)

    suffix = f" [yellow]#{escape(todo.tag)}[/yellow]" if todo.tag else ""
    console.print(f"[green]✓ Updated:[/green] {escape(todo.content)}{suffix}")
