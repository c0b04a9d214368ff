"""
FILE: marc/editor/session.py
PURPOSE: Editor state and command handlers
EXPORTS:
  - EditorSession
DEPENDENCIES:
  - rich (formatted output)
  - marc.core.service (store-level operations)
NOTES:
  - Mutations apply to the in-memory store; run_editor() persists once
    on exit when `dirty` is set
  - Errors are printed and the loop continues
  - The list is redrawn after every successful mutation
"""

from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from ..core import service
from ..core.exceptions import MarcError, InvalidInputError
from ..core.models import Store, TagSummary
from ..formatting import TodoFormatter
from .parser import ParseResult

HELP_LINES = [
    ("ls [tag]", "Show todos (optionally only one tag)"),
    ("drop <sel>...", "Delete todos, e.g. drop 1 3 (alias: rm)"),
    ("done <sel>...", "Mark todos done"),
    ("undone <sel>...", "Mark todos open again"),
    ("text <sel> <content>", "Replace a todo's content"),
    ("tag <sel> <name>", "Set a todo's tag"),
    ("untag <sel>", "Remove a todo's tag"),
    ("clear", "Clear the screen"),
    ("exit / quit", "Save changes and leave (Ctrl+D too)"),
    ("abort", "Leave without saving"),
]


class EditorSession:
    """
    One interactive editing session over an in-memory store.

    Attributes:
        store: The store being edited
        dirty: True once anything changed
        discard: True when the user aborted (changes must not be saved)
    """

    def __init__(self, store: Store, console: Optional[Console] = None):
        self.store = store
        self.console = console or Console()
        self.dirty = False
        self.discard = False
        self._handlers: Dict[str, Callable[[ParseResult], None]] = {
            "ls": self.handle_ls,
            "log": self.handle_ls,
            "drop": self.handle_drop,
            "rm": self.handle_drop,
            "done": self.handle_done,
            "undone": self.handle_undone,
            "text": self.handle_text,
            "tag": self.handle_tag,
            "untag": self.handle_untag,
            "help": self.handle_help,
            "clear": self.handle_clear,
        }

    # --- Prompt ---

    def get_prompt(self) -> str:
        """'marc> ', or 'marc*> ' with unsaved changes."""
        return "marc*> " if self.dirty else "marc> "

    def tags(self) -> List[TagSummary]:
        return service.summarize_tags(self.store)

    # --- Dispatch ---

    def execute(self, result: ParseResult) -> bool:
        """
        Execute a parsed command.

        Returns:
            True to continue the loop, False to leave the editor
        """
        command = result.command

        if command in ("exit", "quit"):
            return False
        if command == "abort":
            self.discard = True
            return False
        if not command:
            return True

        handler = self._handlers.get(command)
        if handler is None:
            self.console.print(f"[red]Unknown command:[/red] {escape(command)}")
            self.console.print("[dim]Type 'help' for available commands[/dim]")
            return True

        try:
            handler(result)
        except MarcError as e:
            self.console.print(f"[red]Error:[/red] {escape(str(e))}")
        return True

    # --- Display ---

    def show(self, tag: Optional[str] = None) -> None:
        todos = service.filter_todos(self.store, tag=tag)
        if not todos:
            self.console.print("[dim]No todos[/dim]")
            return
        self.console.print(TodoFormatter.create_table(todos, title="Todos", show_tag=True))

    def _changed(self, *messages: str) -> None:
        self.dirty = True
        for message in messages:
            self.console.print(message)
        self.show()

    @staticmethod
    def _selector(result: ParseResult, usage: str) -> str:
        if not result.args:
            raise InvalidInputError(f"Usage: {usage}")
        return result.args[0]

    @classmethod
    def _selectors(cls, result: ParseResult, usage: str) -> List[str]:
        """
        Selectors for commands acting on several todos.

        "1 3" and "1,3" select two todos; any other text is one selector.
        """
        cls._selector(result, usage)
        pieces = [p for arg in result.args for p in arg.split(",") if p]
        if pieces and all(service.is_position(p) for p in pieces):
            return result.args
        return [result.rest()]

    # --- Handlers ---

    def handle_ls(self, result: ParseResult) -> None:
        self.show(tag=result.rest() or None)

    def handle_drop(self, result: ParseResult) -> None:
        removed = service.drop(self.store, self._selectors(result, "drop <selector>..."))
        self._changed(*(f"[red]✗[/red] Dropped: {escape(t.content)}" for t in removed))

    def handle_done(self, result: ParseResult) -> None:
        todos = service.mark_done(self.store, self._selectors(result, "done <selector>..."), done=True)
        self._changed(*(f"[green]✓[/green] Done: {escape(t.content)}" for t in todos))

    def handle_undone(self, result: ParseResult) -> None:
        todos = service.mark_done(self.store, self._selectors(result, "undone <selector>..."), done=False)
        self._changed(*(f"[yellow]○[/yellow] Reopened: {escape(t.content)}" for t in todos))

    def handle_text(self, result: ParseResult) -> None:
        if len(result.args) < 2:
            raise InvalidInputError("Usage: text <selector> <new content>")
        todo = service.edit_record(self.store, result.args[0], content=result.rest(1))
        self._changed(f"[green]✓[/green] Updated: {escape(todo.content)}")

    def handle_tag(self, result: ParseResult) -> None:
        if len(result.args) < 2:
            raise InvalidInputError("Usage: tag <selector> <name>")
        todo = service.edit_record(self.store, result.args[0], tag=result.rest(1))
        self._changed(f"[green]✓[/green] Tagged [yellow]#{escape(todo.tag)}[/yellow]: {escape(todo.content)}")

    def handle_untag(self, result: ParseResult) -> None:
        self._selector(result, "untag <selector>")
        todo = service.edit_record(self.store, result.rest(), clear_tag=True)
        self._changed(f"[green]✓[/green] Untagged: {escape(todo.content)}")

    def handle_help(self, result: ParseResult) -> None:
        self.console.print("\n[bold cyan]Editor commands[/bold cyan]")
        self.console.print("[dim]<sel> is a todo number or text matching one todo[/dim]\n")
        for usage, desc in HELP_LINES:
            self.console.print(f"  [green]{escape(usage.ljust(22))}[/green] {desc}")

    def handle_clear(self, result: ParseResult) -> None:
        self.console.clear()
        self.show()
