"""
FILE: marc/cli/commands/system.py
PURPOSE: System commands (version, help)
"""

from rich.markup import escape

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console
from ... import __version__


COMMANDS = [
    ("add", "Add todo(s)", 'marc add "text"... [--tag NAME]'),
    ("log", "List todos", "marc log [--tag NAME] [--done | --no-done]"),
    ("done", "Mark todo(s) as done", "marc done <selector>..."),
    ("undone", "Mark todo(s) as open again", "marc undone <selector>..."),
    ("rm", "Remove todo(s)", "marc rm <selector>... | --done"),
    ("show", "Show one todo", "marc show <selector>"),
    ("edit", "Interactive editor / one-shot edit", "marc edit [<selector> --text T --tag N --untag]"),
    ("tag", "List or manage tags", "marc tag [--create NAME | --delete NAME | --prune]"),
    ("version", "Show version", "marc version"),
    ("help", "Show this help message", "marc help"),
]


def print_overview() -> None:
    """Print the command overview."""
    console.print("\n[bold cyan]marc[/bold cyan] - tiny tagged todo list for the terminal\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print(escape("  marc [--file PATH] [--verbose] <command> [options]") + "\n")

    console.print("[bold]Commands:[/bold]")
    for cmd, desc, example in COMMANDS:
        console.print(f"  [green]{cmd:8}[/green] {desc}")
        console.print(f"           [dim]{escape(example)}[/dim]\n")

    console.print("[bold]Selectors:[/bold]")
    console.print("  A todo number as shown by 'marc log' (1,3 selects several),")
    console.print("  or text matching exactly one todo's content.\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--file, -f[/yellow]     Store file (env MARC_FILE, default ~/.marc/todos.json)")
    console.print("  [yellow]--verbose, -v[/yellow]  Debug logging on stderr")
    console.print("  [yellow]--version, -V[/yellow]  Show version")
    console.print("  [yellow]--help, -h[/yellow]     Show detailed help for a command\n")


@app.command()
def version():
    """Show marc version."""
    console.print(f"marc v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    print_overview()
